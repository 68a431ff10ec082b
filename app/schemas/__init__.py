"""
Pydantic schemas for request/response validation.
"""
from app.schemas.base import CamelModel, ORMModel, Currency, quantize_money
from app.schemas.user import (
    UserResponse, UserChangePassword, Token, TokenRefresh, LoginRequest, LoginResponse
)
from app.schemas.supplier import (
    SupplierBase, SupplierCreate, SupplierUpdate, SupplierResponse
)
from app.schemas.product import (
    ProductBase, ProductCreate, ProductUpdate, ProductResponse,
    SaleHistoryEntry, ProductSalesHistory
)
from app.schemas.customer import (
    CustomerBase, CustomerCreate, CustomerUpdate, CustomerResponse,
    DebtStatus, CustomerPaymentRequest, CustomerPaymentResponse
)
from app.schemas.transaction import (
    PaymentType, TransactionStatus, TransactionType,
    TransactionItemIn, TransactionIn, InvoiceCreate, TransactionUpdate,
    TransactionItemsReplace, TransactionItemResponse, TransactionResponse,
    TransactionWithItems, PaymentRequest, PaymentResponse
)
from app.schemas.dashboard import DashboardMetrics, HealthCheck

__all__ = [
    # Shared
    "CamelModel", "ORMModel", "Currency", "quantize_money",

    # User schemas
    "UserResponse", "UserChangePassword", "Token", "TokenRefresh", "LoginRequest", "LoginResponse",

    # Supplier schemas
    "SupplierBase", "SupplierCreate", "SupplierUpdate", "SupplierResponse",

    # Product schemas
    "ProductBase", "ProductCreate", "ProductUpdate", "ProductResponse",
    "SaleHistoryEntry", "ProductSalesHistory",

    # Customer schemas
    "CustomerBase", "CustomerCreate", "CustomerUpdate", "CustomerResponse",
    "DebtStatus", "CustomerPaymentRequest", "CustomerPaymentResponse",

    # Transaction schemas
    "PaymentType", "TransactionStatus", "TransactionType",
    "TransactionItemIn", "TransactionIn", "InvoiceCreate", "TransactionUpdate",
    "TransactionItemsReplace", "TransactionItemResponse", "TransactionResponse",
    "TransactionWithItems", "PaymentRequest", "PaymentResponse",

    # Dashboard schemas
    "DashboardMetrics", "HealthCheck",
]
