"""Custom error handlers and exceptions for the application."""
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from starlette.exceptions import HTTPException
from typing import Union

from .logging_config import get_logger

logger = get_logger("error_handlers")


class AppException(Exception):
    """Base exception for application-specific errors."""

    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ResourceNotFoundError(AppException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Union[int, str]):
        super().__init__(
            message=f"{resource} with identifier '{identifier}' not found",
            status_code=404,
            details={"resource": resource, "identifier": str(identifier)}
        )


class DuplicateResourceError(AppException):
    """Raised when attempting to create a duplicate resource."""

    def __init__(self, resource: str, field: str, value: str):
        super().__init__(
            message=f"{resource} with {field} '{value}' already exists",
            status_code=409,
            details={"resource": resource, "field": field, "value": value}
        )


class BusinessRuleError(AppException):
    """Raised when a request is well-formed but violates a business rule."""

    def __init__(self, message: str, **details):
        super().__init__(
            message=message,
            status_code=400,
            details=details
        )


async def app_exception_handler(request: Request, exc: AppException):
    """Handler for custom application exceptions."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"Application error: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "details": exc.details,
            "path": request.url.path
        }
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handler for request validation errors."""
    errors = []
    for error in exc.errors():
        errors.append({
            "field": " -> ".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"]
        })

    logger.warning(
        f"Validation error on {request.method} {request.url.path}",
        extra={"validation_errors": errors}
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation failed",
            "validation_errors": errors,
            "path": request.url.path
        }
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """HTTP exception handler with logging."""
    logger.warning(
        f"[HTTP_ERROR] {request.method} {request.url.path} - "
        f"Status: {exc.status_code} - Detail: {exc.detail}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail if isinstance(exc.detail, str) else "HTTP error",
            "path": request.url.path
        },
        headers=getattr(exc, "headers", None)
    )


# (table, column) pairs with a unique constraint, mapped to the resource name
# reported back to the client. SQLite reports "table.column", PostgreSQL the
# constraint name from the naming convention.
UNIQUE_FIELDS = {
    ("products", "sku"): "Product",
    ("products", "barcode"): "Product",
    ("suppliers", "supplier_code"): "Supplier",
    ("transactions", "transaction_number"): "Transaction",
    ("users", "username"): "User",
    ("users", "email"): "User",
}


def describe_integrity_error(exc: IntegrityError) -> tuple[int, str, dict]:
    """Translate a constraint violation into status, message and details."""
    raw = str(exc.orig).lower()

    for (table, column), resource in UNIQUE_FIELDS.items():
        if f"{table}.{column}" in raw or f"uq_{table}_{column}" in raw:
            return (
                status.HTTP_409_CONFLICT,
                f"{resource} with this {column} already exists",
                {"resource": resource, "field": column},
            )

    if "total_debt_non_negative" in raw:
        return (
            status.HTTP_400_BAD_REQUEST,
            "Customer debt cannot be negative",
            {"resource": "Customer", "field": "total_debt"},
        )

    if "foreign key" in raw:
        return status.HTTP_400_BAD_REQUEST, "Referenced record does not exist", {}

    return status.HTTP_409_CONFLICT, "Data integrity constraint violated", {}


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handler for SQLAlchemy database errors."""
    if isinstance(exc, IntegrityError):
        status_code, error_msg, details = describe_integrity_error(exc)
        logger.warning(
            f"[DB] Constraint violation on {request.method} {request.url.path}: {exc.orig}"
        )
        return JSONResponse(
            status_code=status_code,
            content={"error": error_msg, "details": details, "path": request.url.path}
        )

    logger.error(
        f"Database error: {str(exc)}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__
        },
        exc_info=True
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Database error occurred",
            "path": request.url.path
        }
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handler for unexpected exceptions."""
    logger.critical(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__
        },
        exc_info=exc
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "message": "An unexpected error occurred. Please contact support if the issue persists.",
            "path": request.url.path
        }
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers to the application."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
