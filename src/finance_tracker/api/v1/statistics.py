"""Dashboard statistics endpoint."""

import datetime as dt
from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from finance_tracker.api.deps import get_current_user, get_statistics_service
from finance_tracker.models.user import User
from finance_tracker.schemas.common import ApiResponse
from finance_tracker.schemas.statistics import StatisticsData
from finance_tracker.services.statistics import StatisticsService

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get(
    "",
    response_model=ApiResponse[StatisticsData],
    summary="Get dashboard statistics",
    description="""
    Totals, per-category distribution, income/expense trends and recent
    transactions for a date range (default: the last 30 days).

    Trends are bucketed per day for ranges up to 31 days and per month
    otherwise. The budget alert always covers the current calendar month.
    """,
)
async def get_statistics(
    start_date: dt.date | None = Query(None, description="Start date (inclusive)"),
    end_date: dt.date | None = Query(None, description="End date (inclusive)"),
    monthly_budget: Decimal | None = Query(
        None, gt=0, description="Monthly expense ceiling for the budget alert"
    ),
    current_user: User = Depends(get_current_user),
    service: StatisticsService = Depends(get_statistics_service),
) -> ApiResponse[StatisticsData]:
    """
    Raises:
        400: start_date is after end_date
    """
    data = await service.get_statistics(
        current_user.id,
        start_date=start_date,
        end_date=end_date,
        monthly_budget=monthly_budget,
    )
    return ApiResponse(data=data)
