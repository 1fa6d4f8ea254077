"""Dashboard statistics: totals, category distribution, trends and budget usage.

Totals come from SQL aggregates; distribution and trends are folded in Python
over the range's transactions, which keeps bucketing identical on every
database backend.
"""

import calendar
import datetime as dt
import logging
from collections import defaultdict
from decimal import Decimal
from typing import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.config import settings
from finance_tracker.core.exceptions import DomainValidationError
from finance_tracker.models.enums import BudgetStatus, TransactionType
from finance_tracker.models.transaction import Transaction
from finance_tracker.repositories.transaction import TransactionRepository
from finance_tracker.schemas.statistics import (
    BudgetAlert,
    CategoryDistribution,
    MonthlyTrend,
    RecentTransaction,
    StatisticsData,
)

logger = logging.getLogger(__name__)

UNCLASSIFIED_ID = "unclassified"
UNCLASSIFIED_NAME = "未分类"
MONTHLY_BUDGET_NAME = "月度预算"

# Ranges up to this many days are bucketed per day, longer ones per month.
DAILY_BUCKET_MAX_DAYS = 31

WARNING_PERCENTAGE = 80
DANGER_PERCENTAGE = 100

_INCOME = TransactionType.income.value
_EXPENSE = TransactionType.expense.value


def resolve_date_range(
    start_date: dt.date | None,
    end_date: dt.date | None,
    today: dt.date,
    default_days: int = 30,
) -> tuple[dt.date, dt.date]:
    """Fill in missing range bounds.

    Raises:
        DomainValidationError: If the resulting start is after the end,
            including when only one bound was given
    """
    start = start_date if start_date is not None else today - dt.timedelta(days=default_days)
    end = end_date if end_date is not None else today
    if start > end:
        raise DomainValidationError(
            "STAT_001",
            {"start_date": start.isoformat(), "end_date": end.isoformat()},
        )
    return start, end


def uses_daily_buckets(start_date: dt.date, end_date: dt.date) -> bool:
    return (end_date - start_date).days <= DAILY_BUCKET_MAX_DAYS


def bucket_key(day: dt.date, daily: bool) -> str:
    return day.strftime("%Y-%m-%d") if daily else day.strftime("%Y-%m")


def month_bounds(day: dt.date) -> tuple[dt.date, dt.date]:
    """First and last day of the calendar month containing ``day``."""
    last_day = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def _percentage(part: Decimal, whole: Decimal) -> float:
    if not whole:
        return 0.0
    return float(part / whole * 100)


def build_category_distribution(
    transactions: Iterable[Transaction],
) -> list[CategoryDistribution]:
    """Group income/expense transactions by (type, category).

    Each group's percentage is relative to the total of its own type.
    Groups are ordered by type, then by amount (largest first).
    """
    amounts: dict[tuple[str, str], Decimal] = defaultdict(Decimal)
    labels: dict[tuple[str, str], tuple[str, str | None, str | None]] = {}
    type_totals: dict[str, Decimal] = defaultdict(Decimal)

    for txn in transactions:
        if txn.type not in (_INCOME, _EXPENSE):
            continue
        category = txn.category
        if category is None:
            key = (txn.type, UNCLASSIFIED_ID)
            labels.setdefault(key, (UNCLASSIFIED_NAME, None, None))
        else:
            key = (txn.type, str(category.id))
            labels.setdefault(key, (category.name, category.icon, category.color))
        amounts[key] += txn.amount
        type_totals[txn.type] += txn.amount

    groups = sorted(amounts.items(), key=lambda item: (item[0][0], -item[1]))
    return [
        CategoryDistribution(
            category_id=category_id,
            category_name=labels[(type_, category_id)][0],
            type=type_,
            amount=float(amount),
            percentage=_percentage(amount, type_totals[type_]),
            icon=labels[(type_, category_id)][1],
            color=labels[(type_, category_id)][2],
        )
        for (type_, category_id), amount in groups
    ]


def build_trends(transactions: Iterable[Transaction], daily: bool) -> list[MonthlyTrend]:
    """Sum income and expense per bucket, ascending by bucket key."""
    buckets: dict[str, dict[str, Decimal]] = defaultdict(
        lambda: {_INCOME: Decimal("0"), _EXPENSE: Decimal("0")}
    )
    for txn in transactions:
        if txn.type not in (_INCOME, _EXPENSE):
            continue
        buckets[bucket_key(txn.date, daily)][txn.type] += txn.amount

    return [
        MonthlyTrend(
            month=key,
            income=float(sums[_INCOME]),
            expense=float(sums[_EXPENSE]),
        )
        for key, sums in sorted(buckets.items())
    ]


def to_recent(txn: Transaction) -> RecentTransaction:
    category = txn.category
    return RecentTransaction(
        id=str(txn.id),
        type=txn.type,
        amount=float(txn.amount),
        category_name=category.name if category is not None else UNCLASSIFIED_NAME,
        description=txn.description,
        date=txn.date,
        icon=category.icon if category is not None else None,
        color=category.color if category is not None else None,
    )


def budget_status(percentage: float) -> BudgetStatus:
    if percentage >= DANGER_PERCENTAGE:
        return BudgetStatus.danger
    if percentage >= WARNING_PERCENTAGE:
        return BudgetStatus.warning
    return BudgetStatus.safe


def finalize_budget_alert(alert: BudgetAlert, budget: Decimal | float) -> BudgetAlert:
    """Apply a monthly budget ceiling to an alert's usage.

    A non-positive budget leaves the alert as a placeholder.
    """
    budget = Decimal(str(budget))
    if budget <= 0:
        return alert
    percentage = _percentage(Decimal(str(alert.used)), budget)
    return alert.model_copy(
        update={
            "budget": float(budget),
            "percentage": percentage,
            "status": budget_status(percentage),
        }
    )


class StatisticsService:
    """Aggregates a user's transactions into the dashboard payload."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.transaction_repo = TransactionRepository(db)

    async def get_statistics(
        self,
        user_id: UUID,
        start_date: dt.date | None = None,
        end_date: dt.date | None = None,
        monthly_budget: Decimal | None = None,
        today: dt.date | None = None,
    ) -> StatisticsData:
        """Build statistics for a date range (inclusive).

        Args:
            user_id: Owner of the transactions
            start_date: Range start (default: today minus the configured days)
            end_date: Range end (default: today)
            monthly_budget: Optional ceiling for the current month's expenses
            today: Reference date, for callers that need a fixed "now"

        Raises:
            DomainValidationError: If start_date is after end_date (STAT_001)
        """
        today = today or dt.date.today()
        start, end = resolve_date_range(
            start_date, end_date, today, settings.statistics_default_days
        )

        total_income = await self.transaction_repo.sum_amount(user_id, _INCOME, start, end)
        total_expense = await self.transaction_repo.sum_amount(user_id, _EXPENSE, start, end)
        transactions = await self.transaction_repo.get_by_date_range(user_id, start, end)
        recent = await self.transaction_repo.get_recent(
            user_id, start, end, limit=settings.recent_transactions_limit
        )
        budget_alert = await self._monthly_budget_alert(user_id, today, monthly_budget)

        logger.info(
            "Statistics computed",
            extra={"transactions_count": len(transactions), "daily": uses_daily_buckets(start, end)},
        )

        return StatisticsData(
            start_date=start,
            end_date=end,
            currency=settings.currency,
            total_income=float(total_income),
            total_expense=float(total_expense),
            balance=float(total_income - total_expense),
            category_distribution=build_category_distribution(transactions),
            monthly_trends=build_trends(transactions, uses_daily_buckets(start, end)),
            recent_transactions=[to_recent(txn) for txn in recent],
            budget_alerts=[budget_alert],
        )

    async def _monthly_budget_alert(
        self, user_id: UUID, today: dt.date, monthly_budget: Decimal | None
    ) -> BudgetAlert:
        # Always the current calendar month, independent of the requested range
        month_start, month_end = month_bounds(today)
        used = await self.transaction_repo.sum_amount(user_id, _EXPENSE, month_start, month_end)
        alert = BudgetAlert(category_name=MONTHLY_BUDGET_NAME, used=float(used))
        if monthly_budget is not None:
            alert = finalize_budget_alert(alert, monthly_budget)
        return alert
