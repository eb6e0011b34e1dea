"""Threshold policy for budget usage."""

from decimal import Decimal

WARNING_RATIO = Decimal("0.8")
DANGER_RATIO = Decimal("1")


def usage_ratio(spent: Decimal, limit: Decimal) -> Decimal | None:
    """Return spent / limit, or None when the limit is not set.

    Args:
        spent: Posted expense for the period.
        limit: Configured limit; values <= 0 mean "no limit".

    Returns:
        Decimal | None: Usage ratio, or None without a positive limit.
    """
    if limit is None or limit <= 0:
        return None
    return spent / limit


def classify_budget_usage(spent: Decimal, limit: Decimal) -> str:
    """Classify budget usage into a display tone.

    Args:
        spent: Posted expense for the period.
        limit: Configured limit.

    Returns:
        str: "neutral" without a limit, otherwise "danger" at or above the
        limit, "warning" from 80% of it, and "ok" below.
    """
    ratio = usage_ratio(spent, limit)
    if ratio is None:
        return "neutral"
    if ratio >= DANGER_RATIO:
        return "danger"
    if ratio >= WARNING_RATIO:
        return "warning"
    return "ok"


__all__ = [
    "WARNING_RATIO",
    "DANGER_RATIO",
    "usage_ratio",
    "classify_budget_usage",
]
