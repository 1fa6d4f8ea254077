"""Transaction repository with filtering, bulk category updates and sums."""
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.models.transaction import Transaction
from finance_tracker.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model with filtering and analytics queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    async def get_all_by_user(self, user_id: UUID) -> list[Transaction]:
        """Get every transaction of a user, newest first."""
        result = await self.db.execute(
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.date.desc(), Transaction.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_filtered(
        self,
        user_id: UUID,
        type: str | None = None,
        category_id: UUID | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Transaction]:
        """Get a user's transactions matching the optional filters."""
        query = select(Transaction).where(Transaction.user_id == user_id)

        if type:
            query = query.where(Transaction.type == type)

        if category_id:
            query = query.where(Transaction.category_id == category_id)

        if start_date:
            query = query.where(Transaction.date >= start_date)

        if end_date:
            query = query.where(Transaction.date <= end_date)

        result = await self.db.execute(
            query.order_by(Transaction.date.desc(), Transaction.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_by_date_range(
        self, user_id: UUID, start_date: date, end_date: date
    ) -> list[Transaction]:
        """Get transactions within a date range (inclusive)."""
        return await self.get_filtered(user_id, start_date=start_date, end_date=end_date)

    async def get_recent(
        self, user_id: UUID, start_date: date, end_date: date, limit: int = 5
    ) -> list[Transaction]:
        """Get the most recent transactions within a date range."""
        result = await self.db.execute(
            select(Transaction)
            .where(
                Transaction.user_id == user_id,
                Transaction.date >= start_date,
                Transaction.date <= end_date,
            )
            .order_by(Transaction.date.desc(), Transaction.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def sum_amount(
        self, user_id: UUID, type: str, start_date: date, end_date: date
    ) -> Decimal:
        """Sum amounts of one transaction type within a date range."""
        result = await self.db.execute(
            select(func.sum(Transaction.amount)).where(
                Transaction.user_id == user_id,
                Transaction.type == type,
                Transaction.date >= start_date,
                Transaction.date <= end_date,
            )
        )
        total = result.scalar_one_or_none()
        return Decimal(str(total)) if total is not None else Decimal("0")

    async def has_category(self, category_id: UUID) -> bool:
        """Check whether any transaction references the category."""
        result = await self.db.execute(
            select(Transaction.id).where(Transaction.category_id == category_id).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def set_category(self, transaction_id: UUID, category_id: UUID | None) -> bool:
        """Assign a category to one transaction (no commit)."""
        result = await self.db.execute(
            update(Transaction)
            .where(Transaction.id == transaction_id)
            .values(category_id=category_id)
        )
        return bool(result.rowcount)

    async def reassign_category(
        self, category_id: UUID, target_category_id: UUID | None
    ) -> int:
        """Point every transaction of a category at another one, or at none (no commit)."""
        result = await self.db.execute(
            update(Transaction)
            .where(Transaction.category_id == category_id)
            .values(category_id=target_category_id)
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)

    async def delete_by_category(self, category_id: UUID) -> int:
        """Delete every transaction of a category (no commit)."""
        result = await self.db.execute(
            delete(Transaction)
            .where(Transaction.category_id == category_id)
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)
