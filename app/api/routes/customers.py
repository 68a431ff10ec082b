"""
Customers API endpoints, including the debt position and direct payments.
"""
from typing import List, Optional
import uuid
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import get_current_user
from app.schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    DebtStatus,
    CustomerPaymentRequest,
    CustomerPaymentResponse
)
from app.services import ledger, parties

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=List[CustomerResponse])
async def list_customers(
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    """List customers, optionally filtered by name."""
    return await parties.list_customers(db, search=search)


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer_data: CustomerCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a customer.

    - **totalDebt**: Optional opening balance, stored in TRY
    - **debtCurrency**: Currency of the opening balance
    """
    return await parties.create_customer(db, customer_data)


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    return await ledger.get_customer(db, customer_id)


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: uuid.UUID,
    customer_data: CustomerUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update contact details. The balance changes only through sales and payments."""
    return await parties.update_customer(db, customer_id, customer_data)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    await parties.delete_customer(db, customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{customer_id}/debt", response_model=DebtStatus)
async def get_customer_debt(
    customer_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    """Current debt with limit flags in TRY and USD."""
    customer = await ledger.get_customer(db, customer_id)
    return ledger.debt_status(customer)


@router.post("/{customer_id}/payment", response_model=CustomerPaymentResponse)
async def record_customer_payment(
    customer_id: uuid.UUID,
    payment: CustomerPaymentRequest,
    db: AsyncSession = Depends(get_db)
):
    """Record a payment against the customer's overall balance."""
    customer = await ledger.record_customer_payment(
        db, customer_id, payment.amount, payment.currency.value
    )
    return CustomerPaymentResponse(success=True, new_debt=customer.total_debt)
