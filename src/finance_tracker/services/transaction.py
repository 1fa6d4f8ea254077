"""Transaction service: CRUD with ownership and category-type checks."""

import datetime as dt
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.core.exceptions import (
    DomainValidationError,
    NotFoundError,
    PermissionDeniedError,
)
from finance_tracker.models.enums import TransactionType
from finance_tracker.models.transaction import Transaction
from finance_tracker.repositories.category import CategoryRepository
from finance_tracker.repositories.transaction import TransactionRepository
from finance_tracker.schemas.transaction import TransactionIn

logger = logging.getLogger(__name__)


class TransactionService:
    """Service layer for transaction operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.transaction_repo = TransactionRepository(db)
        self.category_repo = CategoryRepository(db)

    async def list_transactions(
        self,
        user_id: UUID,
        type: str | None = None,
        category_id: UUID | None = None,
        start_date: dt.date | None = None,
        end_date: dt.date | None = None,
    ) -> list[Transaction]:
        """Get a user's transactions, newest first, with optional filters."""
        return await self.transaction_repo.get_filtered(
            user_id,
            type=type,
            category_id=category_id,
            start_date=start_date,
            end_date=end_date,
        )

    async def get_owned_transaction(self, user_id: UUID, transaction_id: UUID) -> Transaction:
        """Get a transaction and verify it belongs to the user.

        Raises:
            NotFoundError: If the transaction doesn't exist (TXN_001)
            PermissionDeniedError: If it belongs to another user (TXN_002)
        """
        transaction = await self.transaction_repo.get_by_id(transaction_id)
        if transaction is None:
            raise NotFoundError("TXN_001", {"transaction_id": str(transaction_id)})
        if transaction.user_id != user_id:
            raise PermissionDeniedError("TXN_002", {"transaction_id": str(transaction_id)})
        return transaction

    async def _check_category(
        self, user_id: UUID, category_id: UUID | None, transaction_type: str
    ) -> None:
        """Validate the category a transaction is about to reference.

        Neutral transactions may use a category of either type.
        """
        if category_id is None:
            return

        category = await self.category_repo.get_by_id(category_id)
        if category is None:
            raise NotFoundError("CAT_001", {"category_id": str(category_id)})
        if category.user_id != user_id:
            raise PermissionDeniedError("CAT_002", {"category_id": str(category_id)})
        if (
            transaction_type != TransactionType.neutral.value
            and category.type != transaction_type
        ):
            raise DomainValidationError(
                "CAT_003",
                {"category_type": category.type, "transaction_type": transaction_type},
            )

    async def create_transaction(self, user_id: UUID, data: TransactionIn) -> Transaction:
        """Create a transaction for the user."""
        await self._check_category(user_id, data.category_id, data.type)

        transaction = await self.transaction_repo.create(
            Transaction(
                user_id=user_id,
                type=data.type,
                amount=data.amount,
                category_id=data.category_id,
                description=data.description,
                date=data.date,
            )
        )
        await self.db.refresh(transaction, attribute_names=["category"])
        logger.info("Transaction created", extra={"transaction_id": str(transaction.id)})
        return transaction

    async def update_transaction(
        self, user_id: UUID, transaction_id: UUID, data: TransactionIn
    ) -> Transaction:
        """Replace a transaction's fields."""
        transaction = await self.get_owned_transaction(user_id, transaction_id)
        await self._check_category(user_id, data.category_id, data.type)

        updated = await self.transaction_repo.update(
            transaction.id,
            {
                "type": data.type,
                "amount": data.amount,
                "category_id": data.category_id,
                "description": data.description,
                "date": data.date,
            },
        )
        await self.db.refresh(updated, attribute_names=["category"])
        return updated

    async def delete_transaction(self, user_id: UUID, transaction_id: UUID) -> None:
        transaction = await self.get_owned_transaction(user_id, transaction_id)
        await self.transaction_repo.delete(transaction.id)
        logger.info("Transaction deleted", extra={"transaction_id": str(transaction_id)})
