"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from biyu.domain.constants import (
    DEFAULT_BREAKDOWN_LIMIT,
    DEFAULT_CURRENCY,
    DEFAULT_RECENT_LIMIT,
    DEFAULT_TREND_DAYS,
    UNCATEGORIZED_CATEGORY_ID,
)
from biyu.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class BiyuSettings:
    """Runtime settings for the dashboard.

    Attributes:
        owner_id: Default owner used by the local UI and CLIs.
        currency_code: Currency used for display and alert messages.
        uncategorized_category_id: Sentinel category id seeded by the
            bootstrap procedure.
        recent_limit: Number of recent transactions shown.
        trend_days: Length of the trailing trend window.
        breakdown_limit: Number of categories in the breakdown.
    """

    owner_id: str | None = None
    currency_code: str = DEFAULT_CURRENCY
    uncategorized_category_id: str = UNCATEGORIZED_CATEGORY_ID
    recent_limit: int = DEFAULT_RECENT_LIMIT
    trend_days: int = DEFAULT_TREND_DAYS
    breakdown_limit: int = DEFAULT_BREAKDOWN_LIMIT

    @classmethod
    def from_env(cls) -> "BiyuSettings":
        """Build settings from environment variables.

        Returns:
            BiyuSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        owner_id = (os.getenv("BIYU_OWNER_ID") or "").strip() or None
        currency = (
            os.getenv("BIYU_CURRENCY", DEFAULT_CURRENCY).strip().upper()
            or DEFAULT_CURRENCY
        )
        uncategorized_id = (
            os.getenv(
                "BIYU_UNCATEGORIZED_CATEGORY_ID",
                UNCATEGORIZED_CATEGORY_ID,
            ).strip()
            or UNCATEGORIZED_CATEGORY_ID
        )
        return cls(
            owner_id=owner_id,
            currency_code=currency,
            uncategorized_category_id=uncategorized_id,
            recent_limit=cls._read_positive_int(
                "BIYU_RECENT_LIMIT",
                DEFAULT_RECENT_LIMIT,
                logger,
            ),
            trend_days=cls._read_positive_int(
                "BIYU_TREND_DAYS",
                DEFAULT_TREND_DAYS,
                logger,
            ),
            breakdown_limit=cls._read_positive_int(
                "BIYU_BREAKDOWN_LIMIT",
                DEFAULT_BREAKDOWN_LIMIT,
                logger,
            ),
        )

    @staticmethod
    def _read_positive_int(name: str, default: int, logger) -> int:
        """Read a positive integer from the environment.

        Args:
            name: Environment variable name.
            default: Value used when missing or malformed.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value or the default.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning(f"{name}={raw!r} is not an integer; using {default}")
            return default
        if value <= 0:
            logger.warning(f"{name} must be positive; using {default}")
            return default
        return value


__all__ = ["BiyuSettings"]
