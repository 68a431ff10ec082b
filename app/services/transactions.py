"""
Transaction queries and direct edits.
"""
from typing import Optional, Sequence
import uuid
from sqlalchemy import select, delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.error_handlers import BusinessRuleError, ResourceNotFoundError
from app.logging_config import get_logger
from app.models.product import Product
from app.models.transaction import Transaction, TransactionItem
from app.schemas.base import quantize_money
from app.schemas.transaction import TransactionItemEdit, TransactionItemIn, TransactionUpdate
from app.services.codes import INVOICE_PREFIX, generate_transaction_number

logger = get_logger("transactions")

MAX_NUMBER_ATTEMPTS = 5


async def allocate_transaction_number(db: AsyncSession, prefix: str = INVOICE_PREFIX) -> str:
    """Generate a transaction number that is not yet in use."""
    for _ in range(MAX_NUMBER_ATTEMPTS):
        candidate = generate_transaction_number(prefix)
        result = await db.execute(
            select(Transaction.id).where(Transaction.transaction_number == candidate)
        )
        if result.first() is None:
            return candidate
        logger.warning(f"[NUMBER] Collision on {candidate}, regenerating")

    raise RuntimeError(f"Could not allocate a unique {prefix} transaction number")


async def get_transaction(
    db: AsyncSession,
    transaction_id: uuid.UUID,
    with_items: bool = False,
    for_update: bool = False
) -> Transaction:
    """Load one transaction or raise ``ResourceNotFoundError``."""
    query = select(Transaction).where(Transaction.id == transaction_id)
    if with_items:
        query = query.options(selectinload(Transaction.items))
    if for_update:
        query = query.with_for_update()

    result = await db.execute(query.execution_options(populate_existing=True))
    transaction = result.scalar_one_or_none()

    if transaction is None:
        raise ResourceNotFoundError("Transaction", transaction_id)

    return transaction


async def list_transactions(
    db: AsyncSession,
    limit: Optional[int] = None,
    offset: int = 0,
    search: Optional[str] = None
) -> Sequence[Transaction]:
    """Newest transactions first, optionally filtered by number or customer name."""
    if limit is None:
        limit = settings.transaction_page_size
    limit = max(1, min(limit, settings.transaction_page_max))

    query = select(Transaction)

    if search:
        search_pattern = f"%{search}%"
        query = query.where(
            or_(
                Transaction.transaction_number.ilike(search_pattern),
                Transaction.customer_name.ilike(search_pattern)
            )
        )

    query = query.order_by(Transaction.created_at.desc()).offset(max(offset, 0)).limit(limit)
    result = await db.execute(query)
    return result.scalars().all()


async def list_items(db: AsyncSession, transaction_id: uuid.UUID) -> Sequence[TransactionItem]:
    """Line items of a transaction, in insertion order."""
    await get_transaction(db, transaction_id)
    result = await db.execute(
        select(TransactionItem)
        .where(TransactionItem.transaction_id == transaction_id)
        .order_by(TransactionItem.created_at)
    )
    return result.scalars().all()


async def load_products(
    db: AsyncSession,
    items: Sequence[TransactionItemIn | TransactionItemEdit]
) -> dict[uuid.UUID, Product]:
    """Resolve every product referenced by ``items``; unknown ids raise 404."""
    product_ids = {item.product_id for item in items if item.product_id is not None}
    if not product_ids:
        return {}

    result = await db.execute(select(Product).where(Product.id.in_(product_ids)))
    products = {product.id: product for product in result.scalars().all()}

    for product_id in product_ids:
        if product_id not in products:
            raise ResourceNotFoundError("Product", product_id)

    return products


def build_item(
    transaction_id: uuid.UUID,
    item: TransactionItemIn | TransactionItemEdit,
    product: Optional[Product] = None
) -> TransactionItem:
    """Line item row with name snapshot and ``total = price * quantity`` when omitted."""
    total = item.total if item.total is not None else item.price * item.quantity
    return TransactionItem(
        transaction_id=transaction_id,
        product_id=product.id if product is not None else None,
        product_name=item.product_name or product.name,
        quantity=item.quantity,
        price=quantize_money(item.price),
        total=quantize_money(total)
    )


async def update_transaction(
    db: AsyncSession,
    transaction_id: uuid.UUID,
    update_data: TransactionUpdate
) -> Transaction:
    """
    Overwrite transaction fields.

    This is a plain edit: it does not touch stock or customer balances.
    """
    transaction = await get_transaction(db, transaction_id)

    for field, value in update_data.model_dump(exclude_unset=True, exclude_none=True).items():
        if hasattr(value, "value"):
            value = value.value
        setattr(transaction, field, value)

    await db.commit()
    logger.info(f"[TRANSACTION] Updated {transaction.transaction_number}")
    return await get_transaction(db, transaction_id, with_items=True)


async def replace_items(
    db: AsyncSession,
    transaction_id: uuid.UUID,
    items: Sequence[TransactionItemEdit]
) -> Transaction:
    """
    Replace all line items of a transaction in one unit of work.

    Lines may reference a product or be free text with a ``product_name``.
    Like ``update_transaction`` this is an edit of the stored document and has
    no stock or ledger side effects.
    """
    if not items:
        raise BusinessRuleError("At least one item is required")

    for position, item in enumerate(items):
        if item.product_id is None and not item.product_name:
            raise BusinessRuleError(
                "Items without a product need a product name",
                item=position
            )

    try:
        transaction = await get_transaction(db, transaction_id)
        products = await load_products(db, items)

        await db.execute(
            delete(TransactionItem).where(TransactionItem.transaction_id == transaction.id)
        )
        db.add_all(build_item(transaction.id, item, products.get(item.product_id)) for item in items)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(f"[TRANSACTION] Replaced items of {transaction.transaction_number} ({len(items)} items)")
    return await get_transaction(db, transaction_id, with_items=True)
