"""
Pydantic schemas for Supplier model.
"""
from typing import Optional
from datetime import datetime
import uuid
from pydantic import Field

from app.schemas.base import CamelModel, ORMModel, OptionalEmail, OptionalText


class SupplierBase(CamelModel):
    """Base supplier schema."""
    name: str = Field(..., min_length=1, max_length=255)
    contact_person: OptionalText = Field(None, max_length=255)
    email: OptionalEmail = None
    phone: OptionalText = Field(None, max_length=50)
    address: OptionalText = None
    tax_number: OptionalText = Field(None, max_length=50)
    payment_terms: OptionalText = Field(None, max_length=255)
    is_active: bool = True


class SupplierCreate(SupplierBase):
    """Schema for creating a supplier. The code is generated when omitted."""
    supplier_code: OptionalText = Field(None, max_length=50)


class SupplierUpdate(CamelModel):
    """Schema for updating a supplier."""
    supplier_code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    contact_person: OptionalText = Field(None, max_length=255)
    email: OptionalEmail = None
    phone: OptionalText = Field(None, max_length=50)
    address: OptionalText = None
    tax_number: OptionalText = Field(None, max_length=50)
    payment_terms: OptionalText = Field(None, max_length=255)
    is_active: Optional[bool] = None


class SupplierResponse(ORMModel):
    """Schema for supplier response."""
    id: uuid.UUID
    supplier_code: str
    name: str
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    tax_number: Optional[str] = None
    payment_terms: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
