"""
SQLAlchemy models for the ERP application.
Import all models here to ensure they're registered with SQLAlchemy.
"""
from app.models.user import User
from app.models.supplier import Supplier
from app.models.product import Product
from app.models.customer import Customer
from app.models.transaction import Transaction, TransactionItem

__all__ = [
    "User",
    "Supplier",
    "Product",
    "Customer",
    "Transaction",
    "TransactionItem",
]
