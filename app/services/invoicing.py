"""
Invoice posting.

One invoice is one ``transactions`` row plus its line items. Posting also
takes the sold quantities out of stock and, for credit sales to a known
customer, adds the invoice total to the customer's debt. Everything happens
in a single database transaction.
"""
from decimal import Decimal
from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession

from app.error_handlers import BusinessRuleError
from app.logging_config import get_logger
from app.models.transaction import Transaction
from app.schemas.base import quantize_money
from app.schemas.transaction import InvoiceCreate, PaymentType, TransactionItemIn
from app.services.codes import INVOICE_PREFIX
from app.services.ledger import add_debt, get_customer
from app.services.stock import decrement_stock
from app.services.transactions import (
    allocate_transaction_number,
    build_item,
    get_transaction,
    load_products
)

logger = get_logger("invoicing")


def compute_total(items: Sequence[TransactionItemIn], discount: Decimal, tax: Decimal) -> Decimal:
    """Invoice total: item totals minus discount plus tax, never below zero."""
    subtotal = sum(
        (item.total if item.total is not None else item.price * item.quantity for item in items),
        Decimal("0")
    )
    return quantize_money(max(Decimal("0"), subtotal - discount + tax))


async def post_invoice(db: AsyncSession, invoice: InvoiceCreate) -> Transaction:
    """
    Create an invoice with its items and apply its stock and debt effects.

    Raises:
        BusinessRuleError: no items, or no customer name available.
        ResourceNotFoundError: unknown customer or product.
    """
    header = invoice.transaction
    items = invoice.items

    if not items:
        raise BusinessRuleError("Invoice must contain at least one item")

    try:
        customer = None
        if header.customer_id is not None:
            customer = await get_customer(db, header.customer_id)

        customer_name = header.customer_name or (customer.name if customer else None)
        if not customer_name:
            raise BusinessRuleError("Customer name is required")

        products = await load_products(db, items)

        total = header.total
        if total is None:
            total = compute_total(items, header.discount, header.tax)

        transaction = Transaction(
            transaction_number=await allocate_transaction_number(db, INVOICE_PREFIX),
            customer_id=customer.id if customer else None,
            customer_name=customer_name,
            total=quantize_money(total),
            discount=quantize_money(header.discount),
            tax=quantize_money(header.tax),
            payment_type=header.payment_type.value,
            currency=header.currency.value,
            status=header.status.value,
            transaction_type=header.transaction_type.value
        )
        db.add(transaction)
        await db.flush()

        for item in items:
            db.add(build_item(transaction.id, item, products[item.product_id]))
            await decrement_stock(db, item.product_id, item.quantity)

        if header.payment_type == PaymentType.CREDIT and customer is not None:
            await add_debt(db, customer.id, transaction.total, transaction.currency)

        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        f"[INVOICE] Posted {transaction.transaction_number} for {customer_name}: "
        f"{len(items)} items, total {transaction.total} {transaction.currency} ({transaction.payment_type})"
    )
    return await get_transaction(db, transaction.id, with_items=True)
