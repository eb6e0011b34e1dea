"""Helpers for timestamp normalization."""

from datetime import date, datetime, time, timezone


def coerce_datetime(value) -> datetime | None:
    """Normalize timestamps coming from SQL rows or JSON payloads.

    Naive values are assumed to be UTC; aware values are converted to UTC.
    ISO strings with a trailing ``Z`` are accepted.

    Args:
        value: Raw timestamp (datetime, date, ISO string or None).

    Returns:
        datetime | None: Aware UTC datetime, or None when unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        if cleaned.endswith("Z"):
            cleaned = cleaned[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(cleaned)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


__all__ = ["coerce_datetime"]
