"""Transaction model representing a dated income/expense/neutral record."""
import datetime as dt
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from finance_tracker.models.base import BaseModel


class Transaction(BaseModel):
    """A single money movement belonging to a user."""

    __tablename__ = "transactions"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    category_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)

    __table_args__ = (
        Index("ix_transactions_user_id_type_date", "user_id", "type", "date"),
    )

    user: Mapped["User"] = relationship("User", back_populates="transactions")
    # Eager-load so API responses can include category name/icon/color.
    category: Mapped["Category | None"] = relationship(
        "Category", back_populates="transactions", lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, type={self.type}, amount={self.amount})>"
