"""API Router."""
from fastapi import APIRouter

from app.api.routes import (
    auth,
    health,
    products,
    customers,
    suppliers,
    transactions,
    payments,
    dashboard
)

api_router = APIRouter(prefix="/api")

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(health.router)
api_router.include_router(products.router)
api_router.include_router(customers.router)
api_router.include_router(suppliers.router)
api_router.include_router(transactions.router)
api_router.include_router(payments.router)
api_router.include_router(dashboard.router)

__all__ = ["api_router"]
