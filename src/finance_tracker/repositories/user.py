"""User repository for user-specific queries."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.models.user import User
from finance_tracker.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model with authentication queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email address (used for login)."""
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if email is already registered."""
        result = await self.db.execute(select(User.id).where(User.email == email))
        return result.scalar_one_or_none() is not None
