"""Authentication endpoints for user registration, login, and token management."""

from fastapi import APIRouter, Depends, status

from finance_tracker.api.deps import get_auth_service, get_current_user
from finance_tracker.models.user import User
from finance_tracker.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    TokenPair,
    UserRegister,
    UserResponse,
)
from finance_tracker.schemas.common import ApiResponse
from finance_tracker.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create a new user account with email and password.",
)
async def register(
    data: UserRegister,
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse[UserResponse]:
    """Create an account. 409 when the email is already registered."""
    user = await auth_service.register(
        email=data.email,
        password=data.password,
        full_name=data.full_name,
    )
    return ApiResponse(data=UserResponse.model_validate(user), message="registered")


@router.post(
    "/login",
    response_model=TokenPair,
    summary="User login",
    description="Authenticate with email and password to receive JWT tokens.",
)
async def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPair:
    """
    Exchange email and password for an access/refresh token pair.

    Raises:
        401: Invalid credentials
        403: User account deactivated
    """
    return await auth_service.login(email=data.email, password=data.password)


@router.post(
    "/refresh",
    response_model=TokenPair,
    summary="Refresh access token",
    description="Get new token pair using a valid refresh token.",
)
async def refresh(
    data: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPair:
    """
    Generate new token pair using refresh token.

    Raises:
        401: Invalid or expired refresh token
        403: User account deactivated
    """
    return await auth_service.refresh_tokens(data.refresh_token)


@router.post(
    "/logout",
    response_model=ApiResponse[None],
    summary="Log out",
    description="Tokens are stateless; the client discards them.",
)
async def logout(
    current_user: User = Depends(get_current_user),
) -> ApiResponse[None]:
    return ApiResponse(message="logged out")


@router.get(
    "/me",
    response_model=ApiResponse[UserResponse],
    summary="Get current user",
    description="Get authenticated user's profile information.",
)
async def get_me(
    current_user: User = Depends(get_current_user),
) -> ApiResponse[UserResponse]:
    """
    Get current authenticated user's profile.

    Raises:
        401: Invalid or missing authorization token
        403: User account deactivated
    """
    return ApiResponse(data=UserResponse.model_validate(current_user))
