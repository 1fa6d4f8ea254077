"""Request/response schemas for categories."""

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field

from finance_tracker.models.enums import CategoryDeleteAction, CategoryType
from finance_tracker.schemas.common import CamelModel


class CategoryIn(CamelModel):
    """Create or replace a category."""

    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)

    name: str = Field(..., min_length=1, max_length=50)
    type: CategoryType
    icon: str | None = Field(None, max_length=16)
    color: str | None = Field(None, max_length=9)


class CategoryResponse(CamelModel):
    id: UUID
    name: str
    type: str
    icon: str | None = None
    color: str | None = None
    created_at: datetime
    updated_at: datetime


class CategoryBrief(CamelModel):
    """Category fields embedded in transaction responses."""

    id: UUID
    name: str
    type: str
    icon: str | None = None
    color: str | None = None


class CategoryDeleteResult(CamelModel):
    id: UUID
    action: CategoryDeleteAction
    affected_transactions: int = Field(
        0, description="Transactions nullified, moved or deleted with the category"
    )
