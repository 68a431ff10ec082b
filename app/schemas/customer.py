"""
Pydantic schemas for Customer model and the debt ledger.
"""
from typing import Optional
from datetime import datetime
import uuid
from decimal import Decimal
from pydantic import Field

from app.schemas.base import CamelModel, ORMModel, Currency, OptionalEmail, OptionalText


class CustomerBase(CamelModel):
    """Base customer schema."""
    name: str = Field(..., min_length=1, max_length=255)
    email: OptionalEmail = None
    phone: OptionalText = Field(None, max_length=50)
    address: OptionalText = None
    is_active: bool = True


class CustomerCreate(CustomerBase):
    """Schema for creating a customer, optionally with an opening balance."""
    total_debt: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    debt_currency: Currency = Currency.TRY


class CustomerUpdate(CamelModel):
    """
    Schema for updating a customer's contact details.

    The balance is owned by the ledger and cannot be written here.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: OptionalEmail = None
    phone: OptionalText = Field(None, max_length=50)
    address: OptionalText = None
    is_active: Optional[bool] = None


class CustomerResponse(ORMModel):
    """Schema for customer response."""
    id: uuid.UUID
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    total_debt: Decimal
    debt_currency: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class DebtStatus(CamelModel):
    """Customer debt position against the configured limits."""
    debt: Decimal
    currency: str
    is_over_limit: bool
    debt_in_usd: Decimal
    is_over_limit_usd: bool


class CustomerPaymentRequest(CamelModel):
    """Payment received directly against a customer's balance."""
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    currency: Currency = Currency.TRY


class CustomerPaymentResponse(CamelModel):
    """Result of a direct customer payment."""
    success: bool = True
    new_debt: Decimal
