"""
Customer debt ledger.

``customers.total_debt`` is held in TRY. Credit sales add to it, payments
subtract from it, and every payment leaves a ``debt_collection`` audit row in
``transactions``. Balance changes are single UPDATE statements so concurrent
requests cannot lose each other's writes, and the balance is clamped at zero.
"""
from decimal import Decimal
import uuid
from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.error_handlers import BusinessRuleError, ResourceNotFoundError
from app.logging_config import get_logger
from app.models.customer import Customer
from app.models.transaction import Transaction
from app.schemas.base import Currency, quantize_money
from app.schemas.customer import DebtStatus
from app.schemas.transaction import PaymentType, TransactionStatus, TransactionType
from app.services.codes import PAYMENT_PREFIX
from app.services.transactions import allocate_transaction_number, get_transaction

logger = get_logger("ledger")

ZERO = Decimal("0")


def to_try(amount: Decimal, currency: str) -> Decimal:
    """Convert ``amount`` to TRY using the configured USD rate."""
    currency = getattr(currency, "value", currency)
    if currency == Currency.USD.value:
        return quantize_money(Decimal(amount) * settings.usd_to_try_rate)
    return quantize_money(amount)


async def get_customer(db: AsyncSession, customer_id: uuid.UUID, for_update: bool = False) -> Customer:
    query = select(Customer).where(Customer.id == customer_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query.execution_options(populate_existing=True))
    customer = result.scalar_one_or_none()
    if customer is None:
        raise ResourceNotFoundError("Customer", customer_id)
    return customer


async def add_debt(db: AsyncSession, customer_id: uuid.UUID, amount: Decimal, currency: str) -> Decimal:
    """
    Post a credit sale to the customer's balance. Does not commit.

    Returns the TRY amount that was added.
    """
    amount_try = to_try(amount, currency)
    await db.execute(
        update(Customer)
        .where(Customer.id == customer_id)
        .values(total_debt=Customer.total_debt + amount_try, debt_currency=Currency.TRY.value)
        .execution_options(synchronize_session=False)
    )
    logger.info(f"[LEDGER] customer_id={customer_id} debt +{amount_try} TRY")
    return amount_try


async def subtract_debt(db: AsyncSession, customer_id: uuid.UUID, amount: Decimal, currency: str) -> Decimal:
    """
    Reduce the customer's balance, never below zero. Does not commit.

    Returns the TRY amount that was requested.
    """
    amount_try = to_try(amount, currency)
    remaining = Customer.total_debt - amount_try
    await db.execute(
        update(Customer)
        .where(Customer.id == customer_id)
        .values(total_debt=case((remaining < 0, 0), else_=remaining), debt_currency=Currency.TRY.value)
        .execution_options(synchronize_session=False)
    )
    logger.info(f"[LEDGER] customer_id={customer_id} debt -{amount_try} TRY")
    return amount_try


async def _collection_row(db: AsyncSession, customer: Customer, amount: Decimal, currency: str) -> Transaction:
    collection = Transaction(
        transaction_number=await allocate_transaction_number(db, PAYMENT_PREFIX),
        customer_id=customer.id,
        customer_name=customer.name,
        total=-quantize_money(amount),
        discount=ZERO,
        tax=ZERO,
        payment_type=PaymentType.DEBT_COLLECTION.value,
        currency=getattr(currency, "value", currency),
        status=TransactionStatus.COMPLETED.value,
        transaction_type=TransactionType.DEBT_COLLECTION.value
    )
    db.add(collection)
    return collection


async def record_payment(
    db: AsyncSession,
    amount: Decimal,
    transaction_id: uuid.UUID,
    customer_id: uuid.UUID
) -> dict:
    """
    Apply a payment to a sale transaction.

    The amount is in the transaction's currency. The transaction total shrinks
    by the amount, the customer balance shrinks by its TRY value and a
    ``debt_collection`` row records the payment; all three commit together.

    Raises:
        BusinessRuleError: non-positive amount, amount above the outstanding
            total, paying a non-credit or non-sale transaction or another
            customer's one.
        ResourceNotFoundError: unknown transaction or customer.
    """
    amount = quantize_money(amount)
    if amount <= ZERO:
        raise BusinessRuleError("Payment amount must be greater than zero", amount=str(amount))

    try:
        transaction = await get_transaction(db, transaction_id, for_update=True)
        customer = await get_customer(db, customer_id)

        if transaction.transaction_type != TransactionType.SALE.value:
            raise BusinessRuleError(
                "Payments can only be applied to sale transactions",
                transaction_type=transaction.transaction_type
            )
        if transaction.payment_type != PaymentType.CREDIT.value:
            raise BusinessRuleError(
                "Only credit sales carry an outstanding balance",
                payment_type=transaction.payment_type
            )
        if transaction.customer_id is not None and transaction.customer_id != customer.id:
            raise BusinessRuleError(
                "Transaction belongs to a different customer",
                transaction_id=str(transaction.id),
                customer_id=str(customer.id)
            )

        outstanding = quantize_money(transaction.total)
        if amount > outstanding:
            raise BusinessRuleError(
                "Payment amount exceeds the outstanding total",
                amount=str(amount),
                outstanding=str(outstanding)
            )

        remaining = outstanding - amount
        transaction.total = remaining
        transaction.status = (
            TransactionStatus.COMPLETED.value if remaining == ZERO else TransactionStatus.PENDING.value
        )

        await subtract_debt(db, customer.id, amount, transaction.currency)
        collection = await _collection_row(db, customer, amount, transaction.currency)

        await db.commit()
    except Exception:
        await db.rollback()
        raise

    await db.refresh(transaction)
    await db.refresh(collection)

    message = "Payment completed" if remaining == ZERO else "Partial payment recorded"
    logger.info(
        f"[PAYMENT] {collection.transaction_number} {amount} {transaction.currency} "
        f"on {transaction.transaction_number}, remaining {remaining}"
    )

    return {
        "success": True,
        "remaining_amount": remaining,
        "amount": amount,
        "message": message,
        "transaction": transaction,
        "collection": collection
    }


async def record_customer_payment(
    db: AsyncSession,
    customer_id: uuid.UUID,
    amount: Decimal,
    currency: str = Currency.TRY.value
) -> Customer:
    """Apply a payment directly to a customer's balance and return the updated customer."""
    amount = quantize_money(amount)
    if amount <= ZERO:
        raise BusinessRuleError("Payment amount must be greater than zero", amount=str(amount))

    try:
        customer = await get_customer(db, customer_id)
        await subtract_debt(db, customer.id, amount, currency)
        collection = await _collection_row(db, customer, amount, currency)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    await db.refresh(customer)
    logger.info(
        f"[PAYMENT] {collection.transaction_number} {amount} {getattr(currency, 'value', currency)} "
        f"from customer {customer.id}, new debt {customer.total_debt}"
    )
    return customer


def debt_status(customer: Customer) -> DebtStatus:
    """Debt position of a customer against the configured limits."""
    debt = quantize_money(customer.total_debt or ZERO)
    debt_in_usd = quantize_money(debt / settings.usd_to_try_rate)
    return DebtStatus(
        debt=debt,
        currency=customer.debt_currency,
        is_over_limit=debt >= settings.debt_limit_try,
        debt_in_usd=debt_in_usd,
        is_over_limit_usd=debt_in_usd >= settings.debt_limit_usd
    )
