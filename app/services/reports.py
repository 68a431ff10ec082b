"""
Dashboard metrics and product sales history.
"""
from datetime import datetime, timezone
from decimal import Decimal
import uuid
from sqlalchemy import select, func, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.customer import Customer
from app.models.product import Product
from app.models.transaction import Transaction, TransactionItem
from app.schemas.base import quantize_money
from app.schemas.dashboard import DashboardMetrics
from app.schemas.product import ProductSalesHistory, SaleHistoryEntry
from app.schemas.transaction import TransactionStatus, TransactionType
from app.services.catalog import get_product


def month_start(now: datetime | None = None) -> datetime:
    """First instant of the current UTC month."""
    now = now or datetime.now(timezone.utc)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


async def _scalar(db: AsyncSession, query) -> int:
    result = await db.execute(query)
    return result.scalar() or 0


async def dashboard_metrics(db: AsyncSession) -> DashboardMetrics:
    """Compute the dashboard figures from the current database state."""
    since = month_start()

    total_sales = await _scalar(
        db,
        select(func.coalesce(func.sum(Transaction.total), 0)).where(
            and_(
                Transaction.created_at >= since,
                Transaction.status == TransactionStatus.COMPLETED.value,
                Transaction.transaction_type == TransactionType.SALE.value
            )
        )
    )

    total_orders = await _scalar(db, select(func.count(Transaction.id)))

    active_products = await _scalar(
        db, select(func.count(Product.id)).where(Product.is_active == True)
    )

    new_customers = await _scalar(
        db, select(func.count(Customer.id)).where(Customer.created_at >= since)
    )

    low_stock_count = await _scalar(
        db, select(func.count(Product.id)).where(Product.quantity <= Product.min_quantity)
    )

    pending_orders = await _scalar(
        db,
        select(func.count(Transaction.id)).where(
            Transaction.status == TransactionStatus.PENDING.value
        )
    )

    active_customers = await _scalar(
        db,
        select(func.count(func.distinct(Transaction.customer_id))).where(
            and_(
                Transaction.created_at >= since,
                Transaction.customer_id.isnot(None)
            )
        )
    )

    returns = await _scalar(
        db,
        select(func.count(Transaction.id)).where(
            Transaction.status == TransactionStatus.CANCELLED.value
        )
    )

    return DashboardMetrics(
        total_sales=quantize_money(Decimal(str(total_sales))),
        total_orders=total_orders,
        active_products=active_products,
        new_customers=new_customers,
        low_stock_count=low_stock_count,
        pending_orders=pending_orders,
        active_customers=active_customers,
        returns=returns
    )


async def product_sales_history(db: AsyncSession, product_id: uuid.UUID) -> ProductSalesHistory:
    """Every line item sold for a product, newest first, with totals."""
    await get_product(db, product_id)

    result = await db.execute(
        select(
            TransactionItem.transaction_id,
            Transaction.transaction_number,
            Transaction.customer_name,
            TransactionItem.quantity,
            TransactionItem.price,
            TransactionItem.total,
            Transaction.created_at.label("sale_date"),
            Transaction.status
        )
        .join(Transaction, TransactionItem.transaction_id == Transaction.id)
        .where(TransactionItem.product_id == product_id)
        .order_by(Transaction.created_at.desc())
    )
    history = [SaleHistoryEntry.model_validate(row._asdict()) for row in result.all()]

    return ProductSalesHistory(
        total_quantity_sold=sum(entry.quantity for entry in history),
        total_sales=len(history),
        sales_history=history
    )
