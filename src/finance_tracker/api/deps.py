"""FastAPI dependency injection for authentication, database and services."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from finance_tracker.categorization import TransactionClassifier
from finance_tracker.core.exceptions import AuthenticationError
from finance_tracker.core.security import get_user_id_from_token
from finance_tracker.db.session import get_db, get_session_factory
from finance_tracker.models.user import User
from finance_tracker.repositories.user import UserRepository
from finance_tracker.services.auth import AuthService
from finance_tracker.services.category import CategoryService
from finance_tracker.services.statistics import StatisticsService
from finance_tracker.services.transaction import TransactionService

# Bearer token scheme; missing credentials are reported by get_current_user
# so the response uses the error envelope.
security = HTTPBearer(auto_error=False)


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    """
    Get user repository instance.

    Args:
        db: Database session

    Returns:
        UserRepository instance
    """
    return UserRepository(db)


async def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        user_repo: User repository

    Returns:
        AuthService instance
    """
    return AuthService(user_repo)


async def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


async def get_transaction_service(db: AsyncSession = Depends(get_db)) -> TransactionService:
    return TransactionService(db)


async def get_statistics_service(db: AsyncSession = Depends(get_db)) -> StatisticsService:
    return StatisticsService(db)


async def get_classifier(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> TransactionClassifier:
    return TransactionClassifier(session_factory)


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Extract and validate user from JWT token.

    Args:
        request: Current request (the user id is recorded for request logging)
        credentials: HTTP bearer token credentials, if any
        auth_service: Authentication service

    Returns:
        Authenticated user object

    Raises:
        AuthenticationError: If token is missing, invalid, expired, or user not found
        PermissionDeniedError: If the user is deactivated
    """
    if credentials is None:
        raise AuthenticationError("AUTH_001")

    try:
        user_id = get_user_id_from_token(credentials.credentials)
    except (JWTError, ValueError) as e:
        raise AuthenticationError("AUTH_001") from e

    user = await auth_service.get_current_user(user_id)
    request.state.user_id = str(user.id)
    return user
