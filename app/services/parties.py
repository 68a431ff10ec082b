"""
Customers.

Balances are not edited here; see ``app.services.ledger``.
"""
from typing import Optional, Sequence
import uuid
from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.logging_config import get_logger
from app.models.customer import Customer
from app.models.transaction import Transaction
from app.schemas.base import quantize_money
from app.schemas.customer import CustomerCreate, CustomerUpdate
from app.services.ledger import get_customer, to_try

logger = get_logger("parties")


async def list_customers(db: AsyncSession, search: Optional[str] = None) -> Sequence[Customer]:
    """All customers, newest first; ``search`` is a case-insensitive name match."""
    query = select(Customer)
    if search:
        query = query.where(Customer.name.ilike(f"%{search}%"))
    result = await db.execute(query.order_by(Customer.created_at.desc()))
    return result.scalars().all()


async def create_customer(db: AsyncSession, customer_data: CustomerCreate) -> Customer:
    """
    Create a customer.

    An opening balance given in USD is stored converted to TRY.
    """
    opening_debt = to_try(customer_data.total_debt, customer_data.debt_currency)

    customer = Customer(
        **customer_data.model_dump(exclude={"total_debt", "debt_currency"}),
        total_debt=quantize_money(opening_debt),
        debt_currency="TRY"
    )
    db.add(customer)
    await db.commit()
    await db.refresh(customer)

    logger.info(f"[CUSTOMER] Created {customer.name} with opening debt {customer.total_debt} TRY")
    return customer


async def update_customer(db: AsyncSession, customer_id: uuid.UUID, customer_data: CustomerUpdate) -> Customer:
    customer = await get_customer(db, customer_id)

    for field, value in customer_data.model_dump(exclude_unset=True).items():
        if field in ("name", "is_active") and value is None:
            continue
        setattr(customer, field, value)

    await db.commit()
    await db.refresh(customer)

    logger.info(f"[CUSTOMER] Updated {customer.id}")
    return customer


async def delete_customer(db: AsyncSession, customer_id: uuid.UUID) -> None:
    """Hard-delete a customer; their transactions keep the name snapshot."""
    customer = await get_customer(db, customer_id)

    try:
        await db.execute(
            update(Transaction)
            .where(Transaction.customer_id == customer.id)
            .values(customer_id=None)
            .execution_options(synchronize_session=False)
        )
        await db.execute(delete(Customer).where(Customer.id == customer.id))
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(f"[CUSTOMER] Deleted {customer_id}")
