"""Domain services package."""

from .aggregation import (
    RECENT_SCOPES,
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
from .formatting import format_money
from .normalization import (
    CategoryDirectory,
    is_posted,
    normalize_category_name,
    normalize_joined_name,
    normalize_kind,
)
from .periods import (
    ensure_utc,
    month_bounds,
    month_label,
    month_start,
    next_month_start,
    recent_months,
    trailing_window_start,
)
from .validation import validate_transactions

__all__ = [
    "RECENT_SCOPES",
    "assemble_summary",
    "compute_balance",
    "compute_budget_alerts",
    "compute_budget_progress",
    "compute_category_breakdown",
    "compute_daily_trend",
    "compute_monthly_totals",
    "compute_spent_by_category",
    "select_recent_transactions",
    "format_money",
    "CategoryDirectory",
    "is_posted",
    "normalize_category_name",
    "normalize_joined_name",
    "normalize_kind",
    "ensure_utc",
    "month_bounds",
    "month_label",
    "month_start",
    "next_month_start",
    "recent_months",
    "trailing_window_start",
    "validate_transactions",
]
