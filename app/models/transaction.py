"""
Sales transaction (invoice / debt collection) and line item models.
"""
from typing import Optional
import uuid
from decimal import Decimal
from sqlalchemy import String, Integer, ForeignKey, Index, DECIMAL
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class Transaction(Base):
    """Invoice or debt-collection record."""

    __tablename__ = "transactions"

    transaction_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    # Customer reference plus a name snapshot that survives customer deletion
    customer_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("customers.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Amounts
    total: Mapped[Decimal] = mapped_column(DECIMAL(12, 2), nullable=False)
    discount: Mapped[Decimal] = mapped_column(DECIMAL(12, 2), default=Decimal("0"), nullable=False)
    tax: Mapped[Decimal] = mapped_column(DECIMAL(12, 2), default=Decimal("0"), nullable=False)

    payment_type: Mapped[str] = mapped_column(String(50), default="cash", nullable=False)  # cash, credit, debt_collection
    currency: Mapped[str] = mapped_column(String(3), default="TRY", nullable=False)
    status: Mapped[str] = mapped_column(String(50), default="completed", nullable=False)  # completed, pending, cancelled
    transaction_type: Mapped[str] = mapped_column(String(50), default="sale", nullable=False)  # sale, debt_collection

    # Relationships
    customer = relationship("Customer", back_populates="transactions")
    items = relationship(
        "TransactionItem",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionItem.created_at"
    )

    # Indexes
    __table_args__ = (
        Index("idx_transactions_status", "status"),
        Index("idx_transactions_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, number={self.transaction_number}, total={self.total}, status={self.status})>"


class TransactionItem(Base):
    """Individual line item of an invoice."""

    __tablename__ = "transaction_items"

    # Foreign keys
    transaction_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("transactions.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    product_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Snapshot of the sold product
    product_name: Mapped[str] = mapped_column(String(500), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(DECIMAL(10, 2), nullable=False)
    total: Mapped[Decimal] = mapped_column(DECIMAL(12, 2), nullable=False)

    # Relationships
    transaction = relationship("Transaction", back_populates="items")
    product = relationship("Product")

    def __repr__(self) -> str:
        return f"<TransactionItem(id={self.id}, product={self.product_name}, quantity={self.quantity})>"
