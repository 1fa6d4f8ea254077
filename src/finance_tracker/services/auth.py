"""Authentication service with business logic."""

import logging
from uuid import UUID

from jose import JWTError

from finance_tracker.core.exceptions import (
    AuthenticationError,
    ConflictError,
    PermissionDeniedError,
)
from finance_tracker.core.security import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    get_user_id_from_token,
    hash_password,
    verify_password,
)
from finance_tracker.models.user import User
from finance_tracker.repositories.user import UserRepository
from finance_tracker.schemas.auth import TokenPair

logger = logging.getLogger(__name__)


def _issue_tokens(user_id: UUID) -> TokenPair:
    return TokenPair(
        access_token=create_access_token(user_id),
        refresh_token=create_refresh_token(user_id),
    )


class AuthService:
    """Service for authentication operations."""

    def __init__(self, user_repo: UserRepository):
        """
        Initialize authentication service.

        Args:
            user_repo: User repository for database operations
        """
        self.user_repo = user_repo

    async def register(self, email: str, password: str, full_name: str | None) -> User:
        """
        Register a new user.

        Args:
            email: User email address
            password: Plain text password
            full_name: Optional display name

        Returns:
            Created user object

        Raises:
            ConflictError: If email already exists (AUTH_004)
        """
        if await self.user_repo.email_exists(email):
            raise ConflictError("AUTH_004")

        user = User(
            email=email,
            password_hash=hash_password(password),
            full_name=full_name,
        )

        created_user = await self.user_repo.create(user)
        logger.info("User registered", extra={"user_id": str(created_user.id)})
        return created_user

    async def login(self, email: str, password: str) -> TokenPair:
        """
        Authenticate user and return JWT tokens.

        Args:
            email: User email address
            password: Plain text password

        Returns:
            Token pair (access + refresh tokens)

        Raises:
            AuthenticationError: If credentials are invalid (AUTH_002)
            PermissionDeniedError: If the account is deactivated (AUTH_003)
        """
        user = await self.user_repo.get_by_email(email)

        # Same error for unknown email and wrong password
        if user is None or not verify_password(password, user.password_hash):
            raise AuthenticationError("AUTH_002")

        if not user.is_active:
            raise PermissionDeniedError("AUTH_003")

        return _issue_tokens(user.id)

    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        """
        Generate new token pair using refresh token.

        Args:
            refresh_token: Valid JWT refresh token

        Returns:
            New token pair (access + refresh tokens)

        Raises:
            AuthenticationError: If refresh token is invalid or its user is gone
            PermissionDeniedError: If the account is deactivated
        """
        try:
            user_id = get_user_id_from_token(refresh_token, expected_type=REFRESH_TOKEN_TYPE)
        except (JWTError, ValueError) as e:
            raise AuthenticationError("AUTH_001") from e

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise AuthenticationError("AUTH_001")

        if not user.is_active:
            raise PermissionDeniedError("AUTH_003")

        return _issue_tokens(user.id)

    async def get_current_user(self, user_id: UUID) -> User:
        """
        Get user by ID for authenticated requests.

        Args:
            user_id: User ID from JWT token

        Returns:
            User object

        Raises:
            AuthenticationError: If user not found
            PermissionDeniedError: If user is inactive
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise AuthenticationError("AUTH_001")

        if not user.is_active:
            raise PermissionDeniedError("AUTH_003")

        return user
