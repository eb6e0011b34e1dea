"""Domain package for business rules and core models."""

from .constants import (
    NO_ACCOUNTS_MESSAGE,
    NO_ALERTS_MESSAGE,
    UNCATEGORIZED_CATEGORY_ID,
)
from .models import (
    Account,
    AlertItem,
    Budget,
    BudgetLimit,
    BudgetProgressItem,
    Category,
    CategoryBreakdownItem,
    DashboardSummary,
    MonthlyTotals,
    RecentTransaction,
    SessionContext,
    Transaction,
    TrendPoint,
)
from .policies import classify_budget_usage
from .services import (
    CategoryDirectory,
    assemble_summary,
    compute_balance,
    compute_budget_alerts,
    compute_budget_progress,
    compute_category_breakdown,
    compute_daily_trend,
    compute_monthly_totals,
    compute_spent_by_category,
    select_recent_transactions,
)

__all__ = [
    "NO_ACCOUNTS_MESSAGE",
    "NO_ALERTS_MESSAGE",
    "UNCATEGORIZED_CATEGORY_ID",
    "Account",
    "AlertItem",
    "Budget",
    "BudgetLimit",
    "BudgetProgressItem",
    "Category",
    "CategoryBreakdownItem",
    "DashboardSummary",
    "MonthlyTotals",
    "RecentTransaction",
    "SessionContext",
    "Transaction",
    "TrendPoint",
    "classify_budget_usage",
    "CategoryDirectory",
    "assemble_summary",
    "compute_balance",
    "compute_budget_alerts",
    "compute_budget_progress",
    "compute_category_breakdown",
    "compute_daily_trend",
    "compute_monthly_totals",
    "compute_spent_by_category",
    "select_recent_transactions",
]
