"""Calendar helpers for monthly and trailing windows.

All boundaries are computed in UTC so that grouping never depends on the
host timezone.
"""

from datetime import date, datetime, time, timedelta, timezone


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime (naive means UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def month_start(day: date) -> date:
    """Return the first day of the month containing ``day``."""
    return date(day.year, day.month, 1)


def next_month_start(day: date) -> date:
    """Return the first day of the month following ``day``."""
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def month_bounds(month: date) -> tuple[datetime, datetime]:
    """Return the [start, end) instants of the month containing ``month``.

    Args:
        month: Any day within the target month.

    Returns:
        tuple[datetime, datetime]: First instant of the month and first
        instant of the next month, both in UTC.
    """
    start = datetime.combine(month_start(month), time.min, tzinfo=timezone.utc)
    end = datetime.combine(
        next_month_start(month),
        time.min,
        tzinfo=timezone.utc,
    )
    return start, end


def trailing_window_start(now: datetime, days: int = 30) -> datetime:
    """Return the start of the UTC day ``days`` before ``now``."""
    reference = ensure_utc(now) - timedelta(days=days)
    return datetime.combine(reference.date(), time.min, tzinfo=timezone.utc)


def recent_months(today: date, count: int = 12) -> list[date]:
    """Return the first day of the last ``count`` months, newest first."""
    months: list[date] = []
    current = month_start(today)
    for _ in range(count):
        months.append(current)
        previous = current - timedelta(days=1)
        current = month_start(previous)
    return months


def month_label(month: date) -> str:
    """Return the ``YYYY-MM-01`` key used by budget rows."""
    return month_start(month).isoformat()


__all__ = [
    "ensure_utc",
    "month_start",
    "next_month_start",
    "month_bounds",
    "trailing_window_start",
    "recent_months",
    "month_label",
]
