"""
Pydantic schemas for transactions, line items and payments.
"""
from typing import Optional
from datetime import datetime
import uuid
from decimal import Decimal
from enum import Enum
from pydantic import Field

from app.schemas.base import CamelModel, ORMModel, Currency, OptionalText


class PaymentType(str, Enum):
    """How a transaction is paid."""
    CASH = "cash"
    CREDIT = "credit"
    DEBT_COLLECTION = "debt_collection"


class TransactionStatus(str, Enum):
    """Transaction lifecycle states."""
    COMPLETED = "completed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class TransactionType(str, Enum):
    """Transaction kinds."""
    SALE = "sale"
    DEBT_COLLECTION = "debt_collection"


class TransactionItemIn(CamelModel):
    """Line item as posted by the invoice form."""
    product_id: uuid.UUID
    quantity: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    product_name: OptionalText = Field(None, max_length=500)
    total: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)


class TransactionIn(CamelModel):
    """Invoice header as posted by the invoice form."""
    customer_id: Optional[uuid.UUID] = None
    customer_name: OptionalText = Field(None, max_length=255)
    total: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    discount: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    tax: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    payment_type: PaymentType = PaymentType.CASH
    currency: Currency = Currency.TRY
    status: TransactionStatus = TransactionStatus.COMPLETED
    transaction_type: TransactionType = TransactionType.SALE


class InvoiceCreate(CamelModel):
    """Body of ``POST /api/transactions``."""
    transaction: TransactionIn
    items: list[TransactionItemIn]


class TransactionUpdate(CamelModel):
    """Direct field overwrite of a transaction."""
    customer_name: Optional[str] = Field(None, min_length=1, max_length=255)
    total: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
    discount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    tax: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    payment_type: Optional[PaymentType] = None
    currency: Optional[Currency] = None
    status: Optional[TransactionStatus] = None
    transaction_type: Optional[TransactionType] = None


class TransactionItemEdit(CamelModel):
    """Line item as sent by the invoice editor; free-text lines carry no product."""
    product_id: Optional[uuid.UUID] = None
    quantity: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    product_name: OptionalText = Field(None, max_length=500)
    total: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)


class TransactionItemsReplace(CamelModel):
    """Body of ``PUT /api/transactions/{id}/items``."""
    items: list[TransactionItemEdit]


class TransactionItemResponse(ORMModel):
    """Schema for line item response."""
    id: uuid.UUID
    transaction_id: uuid.UUID
    product_id: Optional[uuid.UUID] = None
    product_name: str
    quantity: int
    price: Decimal
    total: Decimal


class TransactionResponse(ORMModel):
    """Schema for transaction response."""
    id: uuid.UUID
    transaction_number: str
    customer_id: Optional[uuid.UUID] = None
    customer_name: str
    total: Decimal
    discount: Decimal
    tax: Decimal
    payment_type: str
    currency: str
    status: str
    transaction_type: str
    created_at: datetime
    updated_at: datetime


class TransactionWithItems(TransactionResponse):
    """Transaction including its line items."""
    items: list[TransactionItemResponse] = []


class PaymentRequest(CamelModel):
    """Body of ``POST /api/payments``."""
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    transaction_id: uuid.UUID
    customer_id: uuid.UUID


class PaymentResponse(CamelModel):
    """Result of a payment against a transaction."""
    success: bool = True
    remaining_amount: Decimal
    amount: Decimal
    message: str
    transaction: TransactionResponse
    collection: TransactionResponse
