"""Domain models for dashboard aggregates."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

ALERT_SEVERITIES = ("ok", "warning", "danger")


@dataclass(frozen=True)
class MonthlyTotals:
    """Posted income and expense for one month."""

    income: Decimal
    expense: Decimal

    @property
    def net(self) -> Decimal:
        """Return income minus expense."""
        return self.income - self.expense


@dataclass(frozen=True)
class TrendPoint:
    """Expense total for a single UTC day."""

    date: date
    total: Decimal


@dataclass(frozen=True)
class CategoryBreakdownItem:
    """Expense total for one category."""

    category_id: str
    category_name: str
    total: Decimal


@dataclass(frozen=True)
class BudgetProgressItem:
    """Spending progress against a category limit.

    Attributes:
        category_id: Category the limit applies to.
        category_name: Display name of the category.
        limit: Configured limit amount.
        spent: Posted expense for the month.
        percentage: Usage clamped to the 0..100 range.
    """

    category_id: str
    category_name: str
    limit: Decimal
    spent: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class AlertItem:
    """Budget alert for display.

    Attributes:
        key: Stable key used for deduplication and rendering.
        severity: One of ok, warning, danger.
        message: Human readable message.
    """

    key: str
    severity: str
    message: str


@dataclass(frozen=True)
class RecentTransaction:
    """Projection of a transaction for the history list."""

    id: str
    created_at: datetime | None
    amount: Decimal
    type: str | None
    status: str | None
    category_id: str | None
    description: str | None
    occurred_at: datetime | None = None
    category_name: str | None = None


@dataclass(frozen=True)
class DashboardSummary:
    """Everything the dashboard renders for one account and month."""

    currency_code: str
    month: date
    total_balance: Decimal
    monthly_income: Decimal
    monthly_expense: Decimal
    total_limit: Decimal
    trend_30_days: list[TrendPoint] = field(default_factory=list)
    category_breakdown: list[CategoryBreakdownItem] = field(
        default_factory=list
    )
    budget_progress: list[BudgetProgressItem] = field(default_factory=list)
    alerts: list[AlertItem] = field(default_factory=list)
    recent_transactions: list[RecentTransaction] = field(
        default_factory=list
    )
    account_id: str | None = None

    @property
    def monthly_net(self) -> Decimal:
        """Return monthly income minus monthly expense."""
        return self.monthly_income - self.monthly_expense

    @property
    def total_usage_percentage(self) -> Decimal:
        """Return the monthly expense as a share of the total limit."""
        if self.total_limit <= 0:
            return Decimal("0")
        return self.monthly_expense / self.total_limit * Decimal("100")


__all__ = [
    "ALERT_SEVERITIES",
    "MonthlyTotals",
    "TrendPoint",
    "CategoryBreakdownItem",
    "BudgetProgressItem",
    "AlertItem",
    "RecentTransaction",
    "DashboardSummary",
]
