"""Category repository with user-scoped and case-insensitive name queries.

Name lookups compare the stored ``name_key`` against the same Python
normalization, never the database's own lower().
"""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.models.category import Category, name_key
from finance_tracker.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Category)

    async def get_all_by_user(
        self, user_id: UUID, type: str | None = None, oldest_first: bool = False
    ) -> list[Category]:
        """Get a user's categories, newest first, optionally for one type."""
        query = select(Category).where(Category.user_id == user_id)
        if type:
            query = query.where(Category.type == type)
        if oldest_first:
            query = query.order_by(Category.created_at.asc(), Category.id.asc())
        else:
            query = query.order_by(Category.created_at.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_name(
        self, user_id: UUID, type: str, name: str
    ) -> Category | None:
        """Find a category of the given type by name, ignoring case."""
        result = await self.db.execute(
            select(Category)
            .where(
                Category.user_id == user_id,
                Category.type == type,
                Category.name_key == name_key(name),
            )
            .order_by(Category.created_at.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def name_taken(
        self,
        user_id: UUID,
        type: str,
        name: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        """Check whether another category already uses this name for the type."""
        query = select(Category.id).where(
            Category.user_id == user_id,
            Category.type == type,
            Category.name_key == name_key(name),
        )
        if exclude_id is not None:
            query = query.where(Category.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None
