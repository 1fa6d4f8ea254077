"""Schemas for the dashboard statistics payload."""

import datetime as dt

from pydantic import Field

from finance_tracker.models.enums import BudgetStatus
from finance_tracker.schemas.common import CamelModel


class CategoryDistribution(CamelModel):
    category_id: str = Field(description='Category ID, or "unclassified"')
    category_name: str
    type: str
    amount: float
    percentage: float = Field(description="Share of the total for this type (0-100)")
    icon: str | None = None
    color: str | None = None


class MonthlyTrend(CamelModel):
    month: str = Field(description="Bucket key: YYYY-MM-DD for short ranges, YYYY-MM otherwise")
    income: float = 0
    expense: float = 0


class RecentTransaction(CamelModel):
    id: str
    type: str
    amount: float
    category_name: str
    description: str | None = None
    date: dt.date
    icon: str | None = None
    color: str | None = None


class BudgetAlert(CamelModel):
    category_id: str | None = None
    category_name: str
    budget: float = 0
    used: float = 0
    percentage: float = 0
    status: BudgetStatus = BudgetStatus.safe


class StatisticsData(CamelModel):
    start_date: dt.date
    end_date: dt.date
    currency: str = Field(description="ISO 4217 code the amounts are in")
    total_income: float
    total_expense: float
    balance: float
    category_distribution: list[CategoryDistribution]
    monthly_trends: list[MonthlyTrend]
    recent_transactions: list[RecentTransaction]
    budget_alerts: list[BudgetAlert]
