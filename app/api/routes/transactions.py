"""
Transactions API endpoints: invoice posting, listing and edits.
"""
from typing import List, Optional
import uuid
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.security import get_current_user
from app.schemas.transaction import (
    InvoiceCreate,
    TransactionUpdate,
    TransactionItemsReplace,
    TransactionResponse,
    TransactionWithItems,
    TransactionItemResponse
)
from app.services import invoicing, transactions

router = APIRouter(
    prefix="/transactions",
    tags=["Transactions"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=List[TransactionResponse])
async def list_transactions(
    limit: int = Query(settings.transaction_page_size, ge=1),
    offset: int = Query(0, ge=0),
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    """
    List transactions, newest first.

    - **limit**: Page size, larger values are capped at the configured maximum
    - **offset**: Rows to skip
    - **search**: Match on transaction number or customer name
    """
    return await transactions.list_transactions(db, limit=limit, offset=offset, search=search)


@router.post("", response_model=TransactionWithItems, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    invoice: InvoiceCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Post an invoice.

    Creates the transaction and its items, takes the quantities out of stock
    and, for credit sales to a customer, adds the total to their debt.
    """
    return await invoicing.post_invoice(db, invoice)


@router.get("/{transaction_id}", response_model=TransactionWithItems)
async def get_transaction(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    return await transactions.get_transaction(db, transaction_id, with_items=True)


@router.patch("/{transaction_id}", response_model=TransactionWithItems)
async def update_transaction(
    transaction_id: uuid.UUID,
    update_data: TransactionUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Overwrite transaction fields. Stock and balances are not adjusted."""
    return await transactions.update_transaction(db, transaction_id, update_data)


@router.get("/{transaction_id}/items", response_model=List[TransactionItemResponse])
async def get_transaction_items(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    return await transactions.list_items(db, transaction_id)


@router.put("/{transaction_id}/items", response_model=TransactionWithItems)
async def replace_transaction_items(
    transaction_id: uuid.UUID,
    body: TransactionItemsReplace,
    db: AsyncSession = Depends(get_db)
):
    """Replace all line items. Stock and balances are not adjusted."""
    return await transactions.replace_items(db, transaction_id, body.items)
