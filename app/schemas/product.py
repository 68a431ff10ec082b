"""
Pydantic schemas for Product model.
"""
from typing import Optional
from datetime import datetime
import uuid
from decimal import Decimal
from pydantic import Field

from app.core.config import settings
from app.schemas.base import CamelModel, ORMModel, Currency, OptionalText


class ProductBase(CamelModel):
    """Base product schema."""
    name: str = Field(..., min_length=1, max_length=500)
    description: OptionalText = None
    category: OptionalText = Field(None, max_length=255)
    barcode: OptionalText = Field(None, max_length=100)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    currency: Currency = Currency.TRY
    supplier_id: Optional[uuid.UUID] = None
    is_active: bool = True


class ProductCreate(ProductBase):
    """Schema for creating a product. The SKU is generated when omitted."""
    sku: OptionalText = Field(None, max_length=100)
    quantity: int = Field(default=0, ge=0)
    min_quantity: int = Field(default_factory=lambda: settings.default_min_quantity, ge=0)


class ProductUpdate(CamelModel):
    """Schema for updating a product. Only provided fields are changed."""
    name: Optional[str] = Field(None, min_length=1, max_length=500)
    description: OptionalText = None
    sku: Optional[str] = Field(None, min_length=1, max_length=100)
    barcode: OptionalText = Field(None, max_length=100)
    category: OptionalText = Field(None, max_length=255)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    currency: Optional[Currency] = None
    supplier_id: Optional[uuid.UUID] = None
    quantity: Optional[int] = Field(None, ge=0)
    min_quantity: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class ProductResponse(ORMModel):
    """Schema for product response."""
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    sku: str
    barcode: Optional[str] = None
    category: Optional[str] = None
    price: Decimal
    cost: Optional[Decimal] = None
    currency: str
    supplier_id: Optional[uuid.UUID] = None
    quantity: int
    min_quantity: int
    is_active: bool
    is_low_stock: bool
    stock_status: str
    created_at: datetime
    updated_at: datetime


class SaleHistoryEntry(CamelModel):
    """One sale of a product."""
    transaction_id: uuid.UUID
    transaction_number: str
    customer_name: str
    quantity: int
    price: Decimal
    total: Decimal
    sale_date: datetime
    status: str


class ProductSalesHistory(CamelModel):
    """Aggregated sales history of a product."""
    total_quantity_sold: int
    total_sales: int
    sales_history: list[SaleHistoryEntry]
