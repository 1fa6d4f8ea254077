"""Integration tests for repository layer."""
from datetime import date
from decimal import Decimal
from uuid import UUID

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.models.category import Category
from finance_tracker.models.transaction import Transaction
from finance_tracker.models.user import User
from finance_tracker.repositories.category import CategoryRepository
from finance_tracker.repositories.transaction import TransactionRepository
from finance_tracker.repositories.user import UserRepository


# Helper fixtures
@pytest.fixture
async def food(db_session: AsyncSession, test_user: User) -> Category:
    """Create an expense category."""
    return await CategoryRepository(db_session).create(
        Category(user_id=test_user.id, name="Food", type="expense")
    )


@pytest.fixture
async def travel(db_session: AsyncSession, test_user: User) -> Category:
    """Create a second expense category."""
    return await CategoryRepository(db_session).create(
        Category(user_id=test_user.id, name="Travel", type="expense")
    )


async def _add(
    db: AsyncSession,
    user: User,
    amount: str,
    day: date,
    type: str = "expense",
    category: Category | None = None,
) -> Transaction:
    return await TransactionRepository(db).create(
        Transaction(
            user_id=user.id,
            type=type,
            amount=Decimal(amount),
            category_id=category.id if category else None,
            date=day,
        )
    )


async def _category_ids(db: AsyncSession, user: User) -> list[UUID | None]:
    # Column query, so bulk updates are visible without expiring the session
    result = await db.execute(
        select(Transaction.category_id).where(Transaction.user_id == user.id)
    )
    return list(result.scalars().all())


# UserRepository Tests
class TestUserRepository:
    """Test suite for UserRepository."""

    async def test_create_user(self, db_session: AsyncSession):
        """Test creating a new user."""
        repo = UserRepository(db_session)
        created = await repo.create(
            User(email="newuser@example.com", password_hash="hashed", full_name="New User")
        )

        assert created.id is not None
        assert created.email == "newuser@example.com"
        assert created.is_active is True

    async def test_get_by_email(self, db_session: AsyncSession, test_user: User):
        """Test finding user by email."""
        repo = UserRepository(db_session)
        found = await repo.get_by_email(test_user.email)

        assert found is not None
        assert found.id == test_user.id

    async def test_email_exists(self, db_session: AsyncSession, test_user: User):
        """Test checking if email exists."""
        repo = UserRepository(db_session)

        assert await repo.email_exists(test_user.email) is True
        assert await repo.email_exists("nonexistent@example.com") is False


# CategoryRepository Tests
class TestCategoryRepository:
    """Test suite for CategoryRepository."""

    async def test_get_by_name_ignores_case(
        self, db_session: AsyncSession, test_user: User, food: Category
    ):
        repo = CategoryRepository(db_session)

        found = await repo.get_by_name(test_user.id, "expense", "FOOD")

        assert found is not None
        assert found.id == food.id

    async def test_get_by_name_folds_non_ascii_case(
        self, db_session: AsyncSession, test_user: User
    ):
        repo = CategoryRepository(db_session)
        cafe = await repo.create(Category(user_id=test_user.id, name="Café", type="expense"))

        found = await repo.get_by_name(test_user.id, "expense", "CAFÉ")

        assert found is not None
        assert found.id == cafe.id
        assert await repo.name_taken(test_user.id, "expense", "café") is True

    async def test_name_key_follows_rename(
        self, db_session: AsyncSession, test_user: User, food: Category
    ):
        repo = CategoryRepository(db_session)

        await repo.update(food.id, {"name": "Ärzte"})

        assert (await repo.get_by_name(test_user.id, "expense", "ÄRZTE")).id == food.id
        assert await repo.get_by_name(test_user.id, "expense", "Food") is None

    async def test_duplicate_name_key_rejected_by_database(
        self, db_session: AsyncSession, test_user: User, food: Category
    ):
        """Security test: the unique key also guards writes that skip the service."""
        repo = CategoryRepository(db_session)

        with pytest.raises(IntegrityError):
            await repo.create(Category(user_id=test_user.id, name="FOOD", type="expense"))
        await db_session.rollback()

    async def test_get_by_name_is_scoped_to_type(
        self, db_session: AsyncSession, test_user: User, food: Category
    ):
        repo = CategoryRepository(db_session)

        assert await repo.get_by_name(test_user.id, "income", "Food") is None

    async def test_user_cannot_see_other_users_category(
        self, db_session: AsyncSession, other_user: User, food: Category
    ):
        """Security test: lookups are scoped to the owner."""
        repo = CategoryRepository(db_session)

        assert await repo.get_by_name(other_user.id, "expense", "Food") is None
        assert await repo.get_all_by_user(other_user.id) == []

    async def test_name_taken_excludes_self(
        self, db_session: AsyncSession, test_user: User, food: Category
    ):
        repo = CategoryRepository(db_session)

        assert await repo.name_taken(test_user.id, "expense", "food") is True
        assert await repo.name_taken(test_user.id, "expense", "food", exclude_id=food.id) is False

    async def test_get_all_by_user_ordering(
        self, db_session: AsyncSession, test_user: User, food: Category, travel: Category
    ):
        repo = CategoryRepository(db_session)

        newest_first = await repo.get_all_by_user(test_user.id)
        oldest_first = await repo.get_all_by_user(test_user.id, oldest_first=True)

        assert [c.id for c in newest_first] == [travel.id, food.id]
        assert [c.id for c in oldest_first] == [food.id, travel.id]

    async def test_get_all_by_user_type_filter(
        self, db_session: AsyncSession, test_user: User, food: Category
    ):
        repo = CategoryRepository(db_session)
        await repo.create(Category(user_id=test_user.id, name="Salary", type="income"))

        income = await repo.get_all_by_user(test_user.id, type="income")

        assert [c.name for c in income] == ["Salary"]


# TransactionRepository Tests
class TestTransactionRepository:
    """Test suite for TransactionRepository."""

    async def test_get_filtered_by_date_range(self, db_session: AsyncSession, test_user: User):
        """Test that date bounds are inclusive."""
        for day in (1, 5, 10, 15):
            await _add(db_session, test_user, "10", date(2024, 1, day))
        repo = TransactionRepository(db_session)

        found = await repo.get_filtered(
            test_user.id, start_date=date(2024, 1, 5), end_date=date(2024, 1, 10)
        )

        assert [t.date for t in found] == [date(2024, 1, 10), date(2024, 1, 5)]

    async def test_get_filtered_by_type_and_category(
        self, db_session: AsyncSession, test_user: User, food: Category
    ):
        await _add(db_session, test_user, "10", date(2024, 1, 1), category=food)
        await _add(db_session, test_user, "20", date(2024, 1, 1))
        await _add(db_session, test_user, "30", date(2024, 1, 1), type="income")
        repo = TransactionRepository(db_session)

        expenses = await repo.get_filtered(test_user.id, type="expense")
        in_food = await repo.get_filtered(test_user.id, category_id=food.id)

        assert len(expenses) == 2
        assert [t.amount for t in in_food] == [Decimal("10")]

    async def test_sum_amount(self, db_session: AsyncSession, test_user: User):
        await _add(db_session, test_user, "10.25", date(2024, 1, 1))
        await _add(db_session, test_user, "20.50", date(2024, 1, 2))
        await _add(db_session, test_user, "99", date(2024, 1, 2), type="income")
        await _add(db_session, test_user, "5", date(2024, 2, 1))
        repo = TransactionRepository(db_session)

        total = await repo.sum_amount(
            test_user.id, "expense", date(2024, 1, 1), date(2024, 1, 31)
        )

        assert total == Decimal("30.75")

    async def test_sum_amount_empty_is_zero(self, db_session: AsyncSession, test_user: User):
        repo = TransactionRepository(db_session)

        total = await repo.sum_amount(
            test_user.id, "income", date(2024, 1, 1), date(2024, 1, 31)
        )

        assert total == Decimal("0")

    async def test_get_recent_limit(self, db_session: AsyncSession, test_user: User):
        for day in range(1, 8):
            await _add(db_session, test_user, "1", date(2024, 1, day))
        repo = TransactionRepository(db_session)

        recent = await repo.get_recent(
            test_user.id, date(2024, 1, 1), date(2024, 1, 31), limit=3
        )

        assert [t.date.day for t in recent] == [7, 6, 5]

    async def test_has_category(
        self, db_session: AsyncSession, test_user: User, food: Category, travel: Category
    ):
        await _add(db_session, test_user, "10", date(2024, 1, 1), category=food)
        repo = TransactionRepository(db_session)

        assert await repo.has_category(food.id) is True
        assert await repo.has_category(travel.id) is False

    async def test_reassign_category(
        self, db_session: AsyncSession, test_user: User, food: Category, travel: Category
    ):
        for _ in range(3):
            await _add(db_session, test_user, "10", date(2024, 1, 1), category=food)
        repo = TransactionRepository(db_session)

        moved = await repo.reassign_category(food.id, travel.id)
        await db_session.commit()

        assert moved == 3
        assert await _category_ids(db_session, test_user) == [travel.id] * 3

    async def test_reassign_category_to_none(
        self, db_session: AsyncSession, test_user: User, food: Category
    ):
        await _add(db_session, test_user, "10", date(2024, 1, 1), category=food)
        repo = TransactionRepository(db_session)

        cleared = await repo.reassign_category(food.id, None)
        await db_session.commit()

        assert cleared == 1
        assert await _category_ids(db_session, test_user) == [None]

    async def test_delete_by_category(
        self, db_session: AsyncSession, test_user: User, food: Category
    ):
        await _add(db_session, test_user, "10", date(2024, 1, 1), category=food)
        await _add(db_session, test_user, "10", date(2024, 1, 1), category=food)
        await _add(db_session, test_user, "10", date(2024, 1, 1))
        repo = TransactionRepository(db_session)

        deleted = await repo.delete_by_category(food.id)
        await db_session.commit()

        assert deleted == 2
        assert await _category_ids(db_session, test_user) == [None]

    async def test_set_category(
        self, db_session: AsyncSession, test_user: User, food: Category
    ):
        txn = await _add(db_session, test_user, "10", date(2024, 1, 1))
        repo = TransactionRepository(db_session)

        assert await repo.set_category(txn.id, food.id) is True
        await db_session.commit()

        assert await _category_ids(db_session, test_user) == [food.id]
