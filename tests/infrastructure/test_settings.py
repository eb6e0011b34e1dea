"""Tests for infrastructure settings."""

from unittest.mock import MagicMock

from biyu.infrastructure import settings as settings_module
from biyu.infrastructure.settings import BiyuSettings

_ENV_VARS = (
    "BIYU_OWNER_ID",
    "BIYU_CURRENCY",
    "BIYU_UNCATEGORIZED_CATEGORY_ID",
    "BIYU_RECENT_LIMIT",
    "BIYU_TREND_DAYS",
    "BIYU_BREAKDOWN_LIMIT",
)


def _clear_env(monkeypatch) -> MagicMock:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: logger)
    return logger


def test_from_env_defaults(monkeypatch) -> None:
    _clear_env(monkeypatch)

    settings = BiyuSettings.from_env()

    assert settings == BiyuSettings()
    assert settings.owner_id is None
    assert settings.currency_code == "COP"
    assert settings.uncategorized_category_id == "uncategorized"
    assert settings.recent_limit == 10
    assert settings.trend_days == 30
    assert settings.breakdown_limit == 8


def test_from_env_reads_values(monkeypatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("BIYU_OWNER_ID", " owner-1 ")
    monkeypatch.setenv("BIYU_CURRENCY", "usd")
    monkeypatch.setenv("BIYU_UNCATEGORIZED_CATEGORY_ID", "0000-uuid")
    monkeypatch.setenv("BIYU_RECENT_LIMIT", "25")
    monkeypatch.setenv("BIYU_TREND_DAYS", "14")
    monkeypatch.setenv("BIYU_BREAKDOWN_LIMIT", "5")

    settings = BiyuSettings.from_env()

    assert settings.owner_id == "owner-1"
    assert settings.currency_code == "USD"
    assert settings.uncategorized_category_id == "0000-uuid"
    assert settings.recent_limit == 25
    assert settings.trend_days == 14
    assert settings.breakdown_limit == 5


def test_from_env_falls_back_on_malformed_integers(monkeypatch) -> None:
    logger = _clear_env(monkeypatch)
    monkeypatch.setenv("BIYU_RECENT_LIMIT", "many")
    monkeypatch.setenv("BIYU_TREND_DAYS", "-3")

    settings = BiyuSettings.from_env()

    assert settings.recent_limit == 10
    assert settings.trend_days == 30
    assert logger.warning.call_count == 2
