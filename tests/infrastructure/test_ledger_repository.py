"""Tests for the SQL ledger repository."""

from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from biyu.application.ports.ledger_repository import LedgerUnavailableError
from biyu.infrastructure.ledger_repository import SqlAlchemyLedgerRepository


def _build_db_port(rows: list) -> tuple[MagicMock, MagicMock]:
    engine = MagicMock()
    conn = MagicMock()
    context = MagicMock()
    context.__enter__.return_value = conn
    context.__exit__.return_value = False
    engine.connect.return_value = context
    conn.execute.return_value.all.return_value = rows

    db_port = MagicMock()
    db_port.get_engine.return_value = engine
    return db_port, conn


def test_fetch_accounts_maps_rows() -> None:
    db_port, conn = _build_db_port(
        [
            SimpleNamespace(
                id="acc",
                user_id="owner",
                name="Main",
                currency="cop",
                balance=None,
            )
        ]
    )

    accounts = SqlAlchemyLedgerRepository(db_port).fetch_accounts("owner")

    assert accounts[0].id == "acc"
    assert accounts[0].currency_code == "COP"
    _, params = conn.execute.call_args.args
    assert params == {"owner_id": "owner"}


def test_fetch_transactions_adds_optional_bounds() -> None:
    db_port, conn = _build_db_port(
        [
            SimpleNamespace(
                id="t1",
                user_id="owner",
                account_id="acc",
                category_id="food",
                type="expense",
                amount_cop=Decimal("10"),
                note=None,
                occurred_at=datetime(2024, 5, 2, tzinfo=timezone.utc),
                status="posted",
                created_at=None,
            )
        ]
    )
    start = datetime(2024, 5, 1, tzinfo=timezone.utc)
    end = datetime(2024, 6, 1, tzinfo=timezone.utc)

    transactions = SqlAlchemyLedgerRepository(db_port).fetch_transactions(
        "owner",
        "acc",
        start=start,
        end=end,
    )

    query, params = conn.execute.call_args.args
    sql = str(query)
    assert "occurred_at >= :start" in sql
    assert "occurred_at < :end" in sql
    assert sql.strip().endswith("ORDER BY occurred_at DESC, created_at DESC")
    assert params == {
        "owner_id": "owner",
        "account_id": "acc",
        "start": start,
        "end": end,
    }
    assert transactions[0].amount == Decimal("10")


def test_fetch_transactions_without_bounds() -> None:
    db_port, conn = _build_db_port([])

    result = SqlAlchemyLedgerRepository(db_port).fetch_transactions(
        "owner",
        "acc",
    )

    query, params = conn.execute.call_args.args
    assert ":start" not in str(query)
    assert params == {"owner_id": "owner", "account_id": "acc"}
    assert result == []


def test_fetch_budget_uses_month_key() -> None:
    db_port, conn = _build_db_port(
        [
            SimpleNamespace(
                id="b1",
                user_id="owner",
                account_id="acc",
                month=date(2024, 5, 1),
                total_limit_cop=Decimal("1000"),
            )
        ]
    )

    budget = SqlAlchemyLedgerRepository(db_port).fetch_budget(
        "owner",
        "acc",
        date(2024, 5, 20),
    )

    _, params = conn.execute.call_args.args
    assert params["month"] == "2024-05-01"
    assert budget.total_limit == Decimal("1000")


def test_fetch_budget_returns_none_when_missing() -> None:
    db_port, _ = _build_db_port([])

    budget = SqlAlchemyLedgerRepository(db_port).fetch_budget(
        "owner",
        "acc",
        date(2024, 5, 1),
    )

    assert budget is None


def test_fetch_budget_limits_keeps_joined_name() -> None:
    db_port, _ = _build_db_port(
        [
            SimpleNamespace(
                id="l1",
                budget_id="b1",
                category_id="food",
                limit_cop=Decimal("300"),
                category_name="Food",
            )
        ]
    )

    limits = SqlAlchemyLedgerRepository(db_port).fetch_budget_limits("b1")

    assert limits[0].category_name == "Food"
    assert limits[0].limit_amount == Decimal("300")


def test_driver_errors_become_ledger_unavailable() -> None:
    """SQLAlchemy failures are wrapped with the failing read named."""
    db_port = MagicMock()
    db_port.get_engine.return_value.connect.side_effect = OperationalError(
        "SELECT 1",
        {},
        Exception("connection refused"),
    )

    with pytest.raises(LedgerUnavailableError, match="categories"):
        SqlAlchemyLedgerRepository(db_port).fetch_categories("owner")
