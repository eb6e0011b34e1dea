"""Domain policies package."""

from .budget_thresholds import (
    DANGER_RATIO,
    WARNING_RATIO,
    classify_budget_usage,
    usage_ratio,
)

__all__ = [
    "DANGER_RATIO",
    "WARNING_RATIO",
    "classify_budget_usage",
    "usage_ratio",
]
