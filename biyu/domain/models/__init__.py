"""Domain models package."""

from .dashboard import (
    ALERT_SEVERITIES,
    AlertItem,
    BudgetProgressItem,
    CategoryBreakdownItem,
    DashboardSummary,
    MonthlyTotals,
    RecentTransaction,
    TrendPoint,
)
from .ledger import Account, Budget, BudgetLimit, Category, Transaction
from .session import SessionContext

__all__ = [
    "Account",
    "Budget",
    "BudgetLimit",
    "Category",
    "Transaction",
    "SessionContext",
    "ALERT_SEVERITIES",
    "AlertItem",
    "BudgetProgressItem",
    "CategoryBreakdownItem",
    "DashboardSummary",
    "MonthlyTotals",
    "RecentTransaction",
    "TrendPoint",
]
