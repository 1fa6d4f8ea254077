"""Shared response envelope and base schema.

Every JSON response has the shape ``{"success": bool, ...}``: successes carry
``data``/``message`` and errors carry ``error``/``errorCode``/``details``.
"""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel, Generic[T]):
    """Successful API response."""

    success: Literal[True] = True
    data: T | None = None
    message: str | None = None


class ErrorResponse(CamelModel):
    """Failed API response."""

    success: Literal[False] = False
    error: str = Field(description="User-facing error message")
    error_code: str = Field(description="Code from the error catalog")
    suggestion: str | None = None
    retry_allowed: bool = False
    details: Any = None
