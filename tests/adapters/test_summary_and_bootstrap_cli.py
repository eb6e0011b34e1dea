"""Tests for the dashboard summary and bootstrap CLIs."""

from datetime import date, datetime, timezone
from decimal import Decimal
import json
from unittest.mock import MagicMock

from biyu.adapters import bootstrap_owner_cli, dashboard_summary_cli
from biyu.application.ports.ledger_repository import LedgerUnavailableError
from biyu.domain.services.aggregation import assemble_summary
from biyu.infrastructure.settings import BiyuSettings


def _summary():
    return assemble_summary(
        [],
        [],
        [],
        month=date(2024, 5, 1),
        now=datetime(2024, 5, 20, tzinfo=timezone.utc),
        total_limit=Decimal("1000"),
    )


def _patch_settings(monkeypatch, module, owner_id: str | None) -> MagicMock:
    logger = MagicMock()
    monkeypatch.setattr(module, "get_app_logger", lambda: logger)
    monkeypatch.setattr(
        module.BiyuSettings,
        "from_env",
        classmethod(lambda cls: BiyuSettings(owner_id=owner_id)),
    )
    return logger


def test_render_summary_json_serializes_decimals_and_dates():
    payload = json.loads(dashboard_summary_cli.render_summary_json(_summary()))

    assert payload["month"] == "2024-05-01"
    assert payload["total_limit"] == "1000"
    assert payload["monthly_net"] == "0"
    assert payload["total_usage_percentage"] == "0"
    assert payload["alerts"][0]["key"] == "ok"


def test_parse_date_warns_on_invalid_values():
    logger = MagicMock()

    assert dashboard_summary_cli._parse_date("2024-05-01", logger) == date(
        2024, 5, 1
    )
    assert dashboard_summary_cli._parse_date("May", logger) is None
    logger.warning.assert_called_once()


def test_summary_main_prints_json(monkeypatch, capsys):
    _patch_settings(monkeypatch, dashboard_summary_cli, "owner")
    monkeypatch.setenv("BIYU_SUMMARY_MONTH", "2024-05-01")
    monkeypatch.setenv("BIYU_ACCOUNT_ID", "acc")
    use_case = MagicMock()
    use_case.execute.return_value = _summary()
    monkeypatch.setattr(
        dashboard_summary_cli,
        "build_dashboard_summary_use_case",
        lambda settings: use_case,
    )

    dashboard_summary_cli.main()

    output = json.loads(capsys.readouterr().out)
    assert output["currency_code"] == "COP"
    assert use_case.execute.call_args.kwargs == {
        "account_id": "acc",
        "month": date(2024, 5, 1),
    }


def test_summary_main_reports_unavailable_ledger(monkeypatch, capsys):
    _patch_settings(monkeypatch, dashboard_summary_cli, "owner")
    monkeypatch.delenv("BIYU_SUMMARY_MONTH", raising=False)
    monkeypatch.delenv("BIYU_ACCOUNT_ID", raising=False)
    use_case = MagicMock()
    use_case.execute.side_effect = LedgerUnavailableError("down")
    monkeypatch.setattr(
        dashboard_summary_cli,
        "build_dashboard_summary_use_case",
        lambda settings: use_case,
    )

    dashboard_summary_cli.main()

    assert "Could not load your data" in capsys.readouterr().out


def test_summary_main_requires_owner(monkeypatch, capsys):
    logger = _patch_settings(monkeypatch, dashboard_summary_cli, None)

    dashboard_summary_cli.main()

    logger.warning.assert_called_once()
    assert capsys.readouterr().out == ""


def test_bootstrap_main_runs_use_case(monkeypatch, capsys):
    _patch_settings(monkeypatch, bootstrap_owner_cli, "owner")
    writer = MagicMock()
    monkeypatch.setattr(
        bootstrap_owner_cli,
        "SqlAlchemyDatabaseEngineAdapter",
        lambda: "adapter",
    )
    monkeypatch.setattr(
        bootstrap_owner_cli,
        "SqlAlchemyLedgerWriter",
        lambda db_port: writer,
    )

    bootstrap_owner_cli.main()

    writer.bootstrap_owner.assert_called_once_with("owner")
    assert "Bootstrapped owner owner." in capsys.readouterr().out


def test_bootstrap_main_requires_owner(monkeypatch):
    logger = _patch_settings(monkeypatch, bootstrap_owner_cli, None)

    bootstrap_owner_cli.main()

    logger.warning.assert_called_once()
