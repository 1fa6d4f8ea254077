"""Find-or-create resolution of categories by name during a classification run.

Concurrent classifier tasks often need the same category at the same moment
(for example, ten restaurant transactions all resolving "餐饮"). Creation of
each (user, type, lowercase name) key is serialized with an asyncio.Lock so
that only one task inserts the row; the others find it on re-check.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.categorization.lexicon import style_for
from finance_tracker.models.category import Category, name_key
from finance_tracker.repositories.category import CategoryRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedCategory:
    """Session-independent snapshot of a category row."""

    id: UUID
    name: str
    type: str

    @classmethod
    def from_model(cls, category: Category) -> CachedCategory:
        return cls(id=category.id, name=category.name, type=category.type)


class CategoryCache:
    """Run-scoped category lookup keyed by (type, lowercase name) and grouped by type."""

    def __init__(self, categories: Iterable[CachedCategory] = ()):
        self._by_key: dict[tuple[str, str], CachedCategory] = {}
        self._by_type: dict[str, list[CachedCategory]] = {}
        for category in categories:
            self.add(category)

    @staticmethod
    def key(type: str, name: str) -> tuple[str, str]:
        return type, name_key(name)

    def get(self, type: str, name: str) -> CachedCategory | None:
        return self._by_key.get(self.key(type, name))

    def add(self, category: CachedCategory) -> None:
        key = self.key(category.type, category.name)
        # First writer wins; a later duplicate snapshot would be the same row
        if key in self._by_key:
            return
        self._by_key[key] = category
        self._by_type.setdefault(category.type, []).append(category)

    def of_type(self, type: str) -> list[CachedCategory]:
        """Categories of one type in the order they were added."""
        return list(self._by_type.get(type, []))

    def __len__(self) -> int:
        return len(self._by_key)


class CategoryResolver:
    """Resolve category names to ids for one user, creating missing categories.

    The lock map and cache live only as long as the resolver, which the
    classifier creates per run.
    """

    def __init__(self, user_id: UUID, cache: CategoryCache | None = None):
        self.user_id = user_id
        self.cache = cache if cache is not None else CategoryCache()
        self._locks: dict[tuple[str, str], asyncio.Lock] = {}

    def _lock_for(self, type: str, name: str) -> asyncio.Lock:
        key = CategoryCache.key(type, name)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def resolve(self, db: AsyncSession, name: str, type: str) -> UUID:
        """Return the id of the user's category with this name and type.

        Args:
            db: Session owned by the calling task
            name: Category name (matched case-insensitively)
            type: "income" or "expense"

        Returns:
            ID of the existing or newly created category
        """
        cached = self.cache.get(type, name)
        if cached is not None:
            return cached.id

        repo = CategoryRepository(db)
        existing = await repo.get_by_name(self.user_id, type, name)
        if existing is not None:
            snapshot = CachedCategory.from_model(existing)
            self.cache.add(snapshot)
            return snapshot.id

        async with self._lock_for(type, name):
            # Another task may have created it while we waited for the lock
            cached = self.cache.get(type, name)
            if cached is not None:
                return cached.id

            existing = await repo.get_by_name(self.user_id, type, name)
            if existing is None:
                style = style_for(name, type)
                existing = await repo.create(
                    Category(
                        user_id=self.user_id,
                        name=name,
                        type=type,
                        icon=style.icon,
                        color=style.color,
                    )
                )
                logger.info(
                    "Category created during auto-categorization",
                    extra={"category_id": str(existing.id), "type": type},
                )

            snapshot = CachedCategory.from_model(existing)
            self.cache.add(snapshot)
            return snapshot.id
