"""Shared repository operations for the user-owned tables.

``create``, ``update`` and ``delete`` commit immediately. Multi-step writes
that must land together (the category delete policies, the classifier's
per-transaction update) use the subclass methods that leave committing to
the caller.
"""
from typing import Generic, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.models.base import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseRepository(Generic[ModelT]):
    def __init__(self, db: AsyncSession, model: Type[ModelT]):
        self.db = db
        self.model = model

    async def get_by_id(self, id: UUID) -> ModelT | None:
        """Row by primary key, without any ownership check."""
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def create(self, obj: ModelT) -> ModelT:
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def update(self, id: UUID, data: dict) -> ModelT | None:
        """Assign the given column values and commit.

        Keys that are not attributes of the model are ignored. Returns None
        when the row does not exist.
        """
        obj = await self.get_by_id(id)
        if obj is None:
            return None

        for field, value in data.items():
            if hasattr(obj, field):
                setattr(obj, field, value)

        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def delete(self, id: UUID) -> bool:
        """Delete one row and commit; False when it was already gone."""
        obj = await self.get_by_id(id)
        if obj is None:
            return False

        await self.db.delete(obj)
        await self.db.commit()
        return True
