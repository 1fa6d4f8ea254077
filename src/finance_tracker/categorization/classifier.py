"""Keyword-based auto-categorization of a user's transactions."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from finance_tracker.categorization.lexicon import (
    COMMON_EXPENSE_CATEGORIES,
    FALLBACK_CATEGORY_NAMES,
    best_category_name,
)
from finance_tracker.categorization.resolver import (
    CachedCategory,
    CategoryCache,
    CategoryResolver,
)
from finance_tracker.config import settings
from finance_tracker.models.enums import CategoryType, TransactionType
from finance_tracker.repositories.category import CategoryRepository
from finance_tracker.repositories.transaction import TransactionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _PendingTransaction:
    id: UUID
    type: str
    description: str | None


def _pool_type(transaction_type: str) -> str:
    """Category type whose pool a transaction falls back to."""
    if transaction_type == TransactionType.income.value:
        return CategoryType.income.value
    # Neutral transactions borrow the expense pool
    return CategoryType.expense.value


class TransactionClassifier:
    """Assign a category to every transaction of a user.

    Each transaction is handled by its own task with its own session, so the
    factory (not a session) is injected.

    Example:
        classifier = TransactionClassifier(AsyncSessionLocal)
        updated = await classifier.classify_all(user.id)
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def classify_all(self, user_id: UUID) -> int:
        """Categorize all transactions of a user.

        Returns:
            Number of transactions that were written with a category
        """
        async with self.session_factory() as db:
            categories = await CategoryRepository(db).get_all_by_user(
                user_id, oldest_first=True
            )
            transactions = await TransactionRepository(db).get_all_by_user(user_id)
            cache = CategoryCache(CachedCategory.from_model(c) for c in categories)
            pending = [
                _PendingTransaction(t.id, t.type, t.description) for t in transactions
            ]

        if not pending:
            logger.info("No transactions to categorize")
            return 0

        resolver = CategoryResolver(user_id, cache)

        if any(t.description for t in pending):
            async with self.session_factory() as db:
                for name in COMMON_EXPENSE_CATEGORIES:
                    await resolver.resolve(db, name, CategoryType.expense.value)

        # Fallback pools are frozen before the tasks start so a re-run picks
        # the same category regardless of task interleaving.
        pools = {
            category_type.value: cache.of_type(category_type.value)
            for category_type in CategoryType
        }

        logger.info(
            "Auto-categorization started",
            extra={"transactions_count": len(pending), "categories_count": len(cache)},
        )
        results = await asyncio.gather(
            *(self._classify_one(resolver, pools, t) for t in pending)
        )
        updated = sum(1 for ok in results if ok)
        logger.info(
            "Auto-categorization finished",
            extra={"transactions_count": len(pending), "updated_count": updated},
        )
        return updated

    async def _classify_one(
        self,
        resolver: CategoryResolver,
        pools: dict[str, list[CachedCategory]],
        transaction: _PendingTransaction,
    ) -> bool:
        try:
            async with self.session_factory() as db:
                category_id = await self._pick_category(db, resolver, pools, transaction)
                written = await TransactionRepository(db).set_category(
                    transaction.id, category_id
                )
                await db.commit()
            # A transaction deleted mid-run matches no row
            return written
        except SQLAlchemyError as e:
            if settings.debug:
                logger.exception(
                    "Failed to categorize transaction",
                    extra={"transaction_id": str(transaction.id), "error_type": type(e).__name__},
                )
            else:
                logger.error(
                    "Failed to categorize transaction",
                    extra={"transaction_id": str(transaction.id), "error_type": type(e).__name__},
                )
            return False

    async def _pick_category(
        self,
        db: AsyncSession,
        resolver: CategoryResolver,
        pools: dict[str, list[CachedCategory]],
        transaction: _PendingTransaction,
    ) -> UUID:
        matched = best_category_name(transaction.description)
        if matched is not None:
            return await resolver.resolve(db, matched, CategoryType.expense.value)

        pool_type = _pool_type(transaction.type)
        fallback_name = FALLBACK_CATEGORY_NAMES[pool_type]
        pool = pools.get(pool_type, [])
        for category in pool:
            if category.name == fallback_name:
                return category.id
        if pool:
            return pool[0].id
        return await resolver.resolve(db, fallback_name, pool_type)
