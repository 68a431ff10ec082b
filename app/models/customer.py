"""
Customer model with the running debt balance.
"""
from typing import Optional
from decimal import Decimal
from sqlalchemy import String, Boolean, Text, DECIMAL, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class Customer(Base):
    """Customer model. ``total_debt`` is always held in TRY."""

    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Debt ledger
    total_debt: Mapped[Decimal] = mapped_column(DECIMAL(12, 2), default=Decimal("0"), nullable=False)
    debt_currency: Mapped[str] = mapped_column(String(3), default="TRY", nullable=False)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="customer")

    __table_args__ = (
        CheckConstraint("total_debt >= 0", name="total_debt_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, name={self.name}, total_debt={self.total_debt})>"
