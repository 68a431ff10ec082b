"""
Stock adjustments issued as single atomic UPDATE statements.
"""
import uuid
from sqlalchemy import case, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.logging_config import get_logger
from app.models.product import Product

logger = get_logger("stock")


async def decrement_stock(db: AsyncSession, product_id: uuid.UUID, quantity: int) -> None:
    """
    Remove ``quantity`` units from a product, clamping at zero.

    The arithmetic runs in SQL so concurrent sales cannot overwrite each
    other. Does not commit.
    """
    remaining = Product.quantity - quantity
    await db.execute(
        update(Product)
        .where(Product.id == product_id)
        .values(quantity=case((remaining < 0, 0), else_=remaining))
        .execution_options(synchronize_session=False)
    )
    logger.debug(f"[STOCK] product_id={product_id} decremented by {quantity}")
