"""Tests for the composition root."""

from unittest.mock import MagicMock

from biyu.application.use_cases.get_accounts import ListCategoriesUseCase
from biyu.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from biyu.application.use_cases.manage_transactions import (
    ManageTransactionsUseCase,
)
from biyu.infrastructure import container
from biyu.infrastructure.ledger_repository import SqlAlchemyLedgerRepository
from biyu.infrastructure.ledger_writer import SqlAlchemyLedgerWriter
from biyu.infrastructure.settings import BiyuSettings


def test_build_ledger_adapters_use_given_port() -> None:
    db_port = MagicMock()

    repository = container.build_ledger_repository(db_port=db_port)
    writer = container.build_ledger_writer(db_port=db_port)

    assert isinstance(repository, SqlAlchemyLedgerRepository)
    assert isinstance(writer, SqlAlchemyLedgerWriter)


def test_build_dashboard_use_case_applies_settings(monkeypatch) -> None:
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())
    settings = BiyuSettings(
        currency_code="USD",
        uncategorized_category_id="0000",
        recent_limit=3,
        trend_days=7,
        breakdown_limit=4,
    )

    use_case = container.build_dashboard_summary_use_case(
        db_port=MagicMock(),
        settings=settings,
    )

    assert isinstance(use_case, GetDashboardSummaryUseCase)
    assert use_case._currency_code == "USD"
    assert use_case._uncategorized_id == "0000"
    assert use_case._recent_limit == 3
    assert use_case._trend_days == 7
    assert use_case._breakdown_limit == 4


def test_build_edit_use_cases_share_sentinel(monkeypatch) -> None:
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())
    settings = BiyuSettings(uncategorized_category_id="0000")

    categories = container.build_categories_use_case(MagicMock(), settings)
    transactions = container.build_manage_transactions_use_case(
        MagicMock(),
        settings,
    )

    assert isinstance(categories, ListCategoriesUseCase)
    assert isinstance(transactions, ManageTransactionsUseCase)
    assert categories._uncategorized_id == "0000"
    assert transactions._uncategorized_id == "0000"
