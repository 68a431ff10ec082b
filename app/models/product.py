"""
Product model for inventory management.
"""
from typing import Optional
import uuid
from decimal import Decimal
from sqlalchemy import String, Integer, Boolean, ForeignKey, Index, Text, DECIMAL
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class Product(Base):
    """Product inventory model."""

    __tablename__ = "products"

    # Foreign keys
    supplier_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("suppliers.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )

    # Product identification
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sku: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    barcode: Mapped[Optional[str]] = mapped_column(String(100), unique=True, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Pricing
    price: Mapped[Decimal] = mapped_column(DECIMAL(10, 2), nullable=False)
    cost: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 2), nullable=True)
    currency: Mapped[str] = mapped_column(String(3), default="TRY", nullable=False)

    # Stock information
    quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    min_quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Status
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    supplier = relationship("Supplier", back_populates="products")

    # Indexes
    __table_args__ = (
        Index("idx_products_low_stock", "quantity", "min_quantity"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, sku={self.sku}, name={self.name}, quantity={self.quantity})>"

    @property
    def is_low_stock(self) -> bool:
        """Check if product stock is at or below its reorder threshold."""
        return self.quantity <= self.min_quantity

    @property
    def stock_status(self) -> str:
        """Get human-readable stock status."""
        if self.quantity == 0:
            return "out_of_stock"
        elif self.is_low_stock:
            return "low_stock"
        else:
            return "in_stock"
