"""Pydantic schemas for authentication endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from finance_tracker.schemas.common import CamelModel


class UserRegister(CamelModel):
    """Request model for user registration."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    full_name: str | None = Field(None, max_length=255, description="Display name")


class LoginRequest(CamelModel):
    """Request model for user login."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class TokenPair(BaseModel):
    """Authentication tokens (OAuth2 field names, not camelCased)."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")


class RefreshRequest(BaseModel):
    """Request model for token refresh."""

    refresh_token: str = Field(..., description="JWT refresh token")


class UserResponse(CamelModel):
    """User data without sensitive fields."""

    id: UUID
    email: str
    full_name: str | None
    is_active: bool
    created_at: datetime
