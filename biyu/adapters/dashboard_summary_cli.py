"""CLI adapter printing the dashboard summary of an owner as JSON.

The owner comes from ``BIYU_OWNER_ID``; ``BIYU_ACCOUNT_ID`` and
``BIYU_SUMMARY_MONTH`` (YYYY-MM-DD) optionally narrow the summary.
"""

from dataclasses import asdict
from datetime import date, datetime
from decimal import Decimal
import json
import os

from biyu.application.ports.ledger_repository import LedgerUnavailableError
from biyu.domain.models import DashboardSummary, SessionContext
from biyu.infrastructure.container import build_dashboard_summary_use_case
from biyu.infrastructure.logging.logger import get_app_logger
from biyu.infrastructure.settings import BiyuSettings


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def _json_default(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Unsupported type: {type(value).__name__}")


def summary_to_dict(summary: DashboardSummary) -> dict:
    """Return a JSON-ready mapping of the summary, derived fields included."""
    payload = asdict(summary)
    payload["monthly_net"] = summary.monthly_net
    payload["total_usage_percentage"] = summary.total_usage_percentage
    return payload


def render_summary_json(summary: DashboardSummary) -> str:
    """Serialize a summary deterministically."""
    return json.dumps(
        summary_to_dict(summary),
        default=_json_default,
        indent=2,
        sort_keys=True,
        ensure_ascii=False,
    )


def main() -> None:
    """Compute and print the dashboard summary."""
    logger = get_app_logger()
    settings = BiyuSettings.from_env()
    if not settings.owner_id:
        logger.warning("BIYU_OWNER_ID is required to compute a summary.")
        return

    month = _parse_date(os.getenv("BIYU_SUMMARY_MONTH"), logger)
    account_id = (os.getenv("BIYU_ACCOUNT_ID") or "").strip() or None
    use_case = build_dashboard_summary_use_case(settings=settings)
    try:
        summary = use_case.execute(
            SessionContext(owner_id=settings.owner_id),
            account_id=account_id,
            month=month,
        )
    except LedgerUnavailableError:
        print("Could not load your data right now. Please try again later.")
        return

    print(render_summary_json(summary))


if __name__ == "__main__":  # pragma: no cover
    main()
