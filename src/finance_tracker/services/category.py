"""Category service: CRUD with ownership checks and the delete policy."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.core.exceptions import (
    ConflictError,
    DomainValidationError,
    NotFoundError,
    PermissionDeniedError,
)
from finance_tracker.models.category import Category
from finance_tracker.models.enums import CategoryDeleteAction
from finance_tracker.repositories.category import CategoryRepository
from finance_tracker.repositories.transaction import TransactionRepository
from finance_tracker.schemas.category import CategoryIn

logger = logging.getLogger(__name__)


class CategoryService:
    """Service layer for category operations."""

    def __init__(self, db: AsyncSession):
        """Initialize category service with database session.

        Args:
            db: Database session
        """
        self.db = db
        self.category_repo = CategoryRepository(db)
        self.transaction_repo = TransactionRepository(db)

    async def list_categories(self, user_id: UUID, type: str | None = None) -> list[Category]:
        """Get a user's categories, newest first, optionally of one type."""
        return await self.category_repo.get_all_by_user(user_id, type)

    async def get_owned_category(self, user_id: UUID, category_id: UUID) -> Category:
        """Get a category and verify it belongs to the user.

        Raises:
            NotFoundError: If the category doesn't exist (CAT_001)
            PermissionDeniedError: If it belongs to another user (CAT_002)
        """
        category = await self.category_repo.get_by_id(category_id)
        if category is None:
            raise NotFoundError("CAT_001", {"category_id": str(category_id)})
        if category.user_id != user_id:
            raise PermissionDeniedError("CAT_002", {"category_id": str(category_id)})
        return category

    async def create_category(self, user_id: UUID, data: CategoryIn) -> Category:
        """Create a category after checking the name is free for its type.

        Raises:
            ConflictError: If the name is taken, ignoring case (CAT_006)
        """
        if await self.category_repo.name_taken(user_id, data.type, data.name):
            raise ConflictError("CAT_006", {"name": data.name, "type": data.type})

        category = await self.category_repo.create(
            Category(
                user_id=user_id,
                name=data.name,
                type=data.type,
                icon=data.icon,
                color=data.color,
            )
        )
        logger.info("Category created", extra={"category_id": str(category.id)})
        return category

    async def update_category(
        self, user_id: UUID, category_id: UUID, data: CategoryIn
    ) -> Category:
        """Replace a category's fields.

        The type can only change while no transaction uses the category,
        otherwise those transactions would end up with a mismatched type.

        Raises:
            NotFoundError / PermissionDeniedError: See get_owned_category
            ConflictError: If another category of the type has the name (CAT_006)
            DomainValidationError: If the type changes while in use (CAT_003)
        """
        category = await self.get_owned_category(user_id, category_id)

        if await self.category_repo.name_taken(
            user_id, data.type, data.name, exclude_id=category.id
        ):
            raise ConflictError("CAT_006", {"name": data.name, "type": data.type})

        if data.type != category.type and await self.transaction_repo.has_category(
            category.id
        ):
            raise DomainValidationError("CAT_003", {"category_id": str(category.id)})

        updated = await self.category_repo.update(
            category.id,
            {
                "name": data.name,
                "type": data.type,
                "icon": data.icon,
                "color": data.color,
            },
        )
        return updated

    async def delete_category(
        self,
        user_id: UUID,
        category_id: UUID,
        action: str = CategoryDeleteAction.nullify.value,
        target_category_id: UUID | None = None,
    ) -> int:
        """Delete a category, handling its transactions per the chosen action.

        Args:
            user_id: Owner of the category
            category_id: Category to delete
            action: "nullify" (uncategorize), "move" (reassign to target) or
                "delete" (remove the transactions too)
            target_category_id: Required for "move"; must be owned and of the
                same type

        Returns:
            Number of transactions affected

        Raises:
            DomainValidationError: Unknown action (CAT_005), missing target
                (CAT_004), target type mismatch or target is the category
                itself (CAT_003)
        """
        try:
            action = CategoryDeleteAction(action)
        except ValueError as e:
            raise DomainValidationError("CAT_005", {"action": str(action)}) from e

        category = await self.get_owned_category(user_id, category_id)

        if action is CategoryDeleteAction.move:
            if target_category_id is None:
                raise DomainValidationError("CAT_004")
            if target_category_id == category.id:
                raise DomainValidationError(
                    "CAT_003", {"target_category_id": str(target_category_id)}
                )
            target = await self.get_owned_category(user_id, target_category_id)
            if target.type != category.type:
                raise DomainValidationError(
                    "CAT_003", {"target_category_id": str(target_category_id)}
                )
            affected = await self.transaction_repo.reassign_category(category.id, target.id)
        elif action is CategoryDeleteAction.delete:
            affected = await self.transaction_repo.delete_by_category(category.id)
        else:
            affected = await self.transaction_repo.reassign_category(category.id, None)

        # Transactions and category go in one commit
        await self.db.delete(category)
        await self.db.commit()

        logger.info(
            "Category deleted",
            extra={
                "category_id": str(category_id),
                "action": action.value,
                "affected_count": affected,
            },
        )
        return affected
