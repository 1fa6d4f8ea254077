"""Category model: a named, typed grouping of a user's transactions."""
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from finance_tracker.models.base import BaseModel


def name_key(name: str) -> str:
    """Case-folded form of a category name used for lookups and uniqueness."""
    return name.strip().lower()


class Category(BaseModel):
    """Income or expense category owned by a single user.

    Names are unique per (user, type) ignoring case. ``name_key`` holds the
    lowercased name, computed in Python on every write, so the comparison
    folds non-ASCII letters the same way on every backend.
    """

    __tablename__ = "categories"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    name_key: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    icon: Mapped[str | None] = mapped_column(String(16), nullable=True)
    color: Mapped[str | None] = mapped_column(String(9), nullable=True)

    __table_args__ = (
        Index("ix_categories_user_id_type", "user_id", "type"),
        UniqueConstraint("user_id", "type", "name_key", name="uq_categories_user_type_name_key"),
    )

    user: Mapped["User"] = relationship("User", back_populates="categories")
    transactions: Mapped[list["Transaction"]] = relationship(
        "Transaction", back_populates="category", passive_deletes="all"
    )

    @validates("name")
    def _sync_name_key(self, key: str, value: str) -> str:
        self.name_key = name_key(value)
        return value

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name}, type={self.type})>"
