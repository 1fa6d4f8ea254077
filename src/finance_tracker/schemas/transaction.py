"""Request/response schemas for transactions."""

import datetime as dt
from decimal import Decimal
from uuid import UUID

from pydantic import ConfigDict, Field

from finance_tracker.models.enums import TransactionType
from finance_tracker.schemas.category import CategoryBrief
from finance_tracker.schemas.common import CamelModel


class TransactionIn(CamelModel):
    """Create or replace a transaction."""

    model_config = ConfigDict(use_enum_values=True)

    type: TransactionType
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    category_id: UUID | None = None
    description: str | None = Field(None, max_length=500)
    date: dt.date


class TransactionResponse(CamelModel):
    id: UUID
    type: str
    amount: float
    category_id: UUID | None = None
    description: str | None = None
    date: dt.date
    category: CategoryBrief | None = None
    created_at: dt.datetime
    updated_at: dt.datetime


class AutoCategorizeResult(CamelModel):
    updated: int = Field(description="Number of transactions that received a category")
