"""Tests for the Streamlit app module."""

from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from biyu.adapters.interface.streamlit import app
from biyu.application.ports.ledger_repository import LedgerUnavailableError
from biyu.domain.models import (
    Account,
    AlertItem,
    Category,
    SessionContext,
    Transaction,
)
from biyu.domain.services.aggregation import assemble_summary
from biyu.infrastructure.settings import BiyuSettings

ACCOUNT = Account(id="acc", owner_id="owner", name="Main", currency_code="COP")


def _fake_streamlit() -> MagicMock:
    fake_st = MagicMock()
    fake_st.columns.side_effect = lambda count: [
        MagicMock() for _ in range(count)
    ]
    return fake_st


def _ready_app(monkeypatch, fake_st: MagicMock) -> None:
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_check_altair_dependencies", lambda: (True, None))
    monkeypatch.setattr(
        app,
        "_resolve_session",
        lambda: SessionContext(owner_id="owner"),
    )


def test_fetch_dashboard_summary_invokes_use_case(monkeypatch):
    """_fetch_dashboard_summary should build the use case and run it."""
    use_case = MagicMock()
    use_case.execute.return_value = "summary"
    monkeypatch.setattr(
        app,
        "build_dashboard_summary_use_case",
        lambda: use_case,
    )

    result = app._fetch_dashboard_summary(
        "owner",
        "acc",
        date(2024, 5, 1),
        "month",
    )

    assert result == "summary"
    session = use_case.execute.call_args.args[0]
    assert session.owner_id == "owner"
    assert use_case.execute.call_args.kwargs == {
        "account_id": "acc",
        "month": date(2024, 5, 1),
        "recent_scope": "month",
    }


def test_load_accounts_uses_fetch(monkeypatch):
    """The cached loader should delegate to _fetch_accounts."""
    app._load_accounts.clear()
    monkeypatch.setattr(app, "_fetch_accounts", lambda owner_id: [owner_id])

    assert app._load_accounts("cached-owner") == ["cached-owner"]


def test_resolve_session_prefers_configured_owner(monkeypatch):
    fake_st = _fake_streamlit()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app.BiyuSettings,
        "from_env",
        classmethod(lambda cls: BiyuSettings(owner_id="env-owner")),
    )

    session = app._resolve_session()

    assert session.owner_id == "env-owner"
    fake_st.sidebar.text_input.assert_not_called()


def test_resolve_session_falls_back_to_sidebar_input(monkeypatch):
    fake_st = _fake_streamlit()
    fake_st.sidebar.text_input.return_value = "  "
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app.BiyuSettings,
        "from_env",
        classmethod(lambda cls: BiyuSettings()),
    )

    assert app._resolve_session() is None


def test_main_stops_when_chart_dependencies_are_broken(monkeypatch):
    fake_st = _fake_streamlit()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app,
        "_check_altair_dependencies",
        lambda: (False, "numpy is broken"),
    )

    app.main()

    fake_st.set_page_config.assert_called_once()
    fake_st.error.assert_called_once_with("numpy is broken")


def test_main_asks_for_owner_without_session(monkeypatch):
    fake_st = _fake_streamlit()
    _ready_app(monkeypatch, fake_st)
    monkeypatch.setattr(app, "_resolve_session", lambda: None)

    app.main()

    fake_st.info.assert_called_once()
    fake_st.sidebar.selectbox.assert_not_called()


def test_main_offers_bootstrap_when_no_accounts(monkeypatch):
    """Owners without accounts are offered the default account."""
    fake_st = _fake_streamlit()
    fake_st.button.return_value = False
    _ready_app(monkeypatch, fake_st)
    monkeypatch.setattr(app, "_load_accounts", lambda owner_id: [])

    app.main()

    assert "No accounts yet" in fake_st.warning.call_args.args[0]
    fake_st.button.assert_called_once_with("Create default account")


def test_main_routes_to_selected_page(monkeypatch):
    fake_st = _fake_streamlit()
    fake_st.sidebar.selectbox.side_effect = [
        "Budgets",
        ACCOUNT,
        date(2024, 5, 1),
    ]
    _ready_app(monkeypatch, fake_st)
    monkeypatch.setattr(app, "_load_accounts", lambda owner_id: [ACCOUNT])
    monkeypatch.setattr(app, "_load_categories", lambda owner_id: [])
    rendered = {}

    def fake_budgets_page(session, account, month, categories):
        rendered["args"] = (session.owner_id, account.id, month, categories)

    monkeypatch.setattr(app, "_render_budgets_page", fake_budgets_page)

    app.main()

    assert rendered["args"] == ("owner", "acc", date(2024, 5, 1), [])


def test_main_shows_generic_error_when_ledger_is_down(monkeypatch):
    fake_st = _fake_streamlit()
    _ready_app(monkeypatch, fake_st)

    def failing_loader(owner_id):
        raise LedgerUnavailableError("Failed to load accounts")

    monkeypatch.setattr(app, "_load_accounts", failing_loader)

    app.main()

    fake_st.error.assert_called_once_with(app.LOAD_ERROR_MESSAGE)


def test_run_write_clears_cache_on_success(monkeypatch):
    fake_st = _fake_streamlit()
    usage_logger = MagicMock()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: usage_logger)

    assert app._run_write("Transaction", lambda: None) is True

    fake_st.cache_data.clear.assert_called_once()
    fake_st.success.assert_called_once_with("Transaction saved.")
    usage_logger.info.assert_called_once()


def test_run_write_reports_validation_and_ledger_errors(monkeypatch):
    fake_st = _fake_streamlit()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: MagicMock())

    def invalid():
        raise ValueError("Enter a limit greater than 0.")

    def unavailable():
        raise LedgerUnavailableError("Failed to save budget")

    assert app._run_write("Category limit", invalid) is False
    assert app._run_write("Category limit", unavailable) is False

    fake_st.warning.assert_called_once_with("Enter a limit greater than 0.")
    fake_st.error.assert_called_once_with(app.SAVE_ERROR_MESSAGE)
    fake_st.cache_data.clear.assert_not_called()


def test_render_alerts_maps_severity_to_widgets(monkeypatch):
    fake_st = _fake_streamlit()
    monkeypatch.setattr(app, "st", fake_st)

    app._render_alerts(
        [
            AlertItem(key="total-danger", severity="danger", message="over"),
            AlertItem(key="cat-warning-x", severity="warning", message="near"),
            AlertItem(key="ok", severity="ok", message="fine"),
        ]
    )

    fake_st.error.assert_called_once_with("over")
    fake_st.warning.assert_called_once_with("near")
    fake_st.success.assert_called_once_with("fine")


def _categorized_summary(transactions):
    return assemble_summary(
        transactions,
        [
            Category(id="food-1", owner_id="owner", name="Food"),
            Category(id="food-2", owner_id="owner", name=" food "),
        ],
        [],
        month=date(2024, 5, 1),
        now=datetime(2024, 5, 20, tzinfo=timezone.utc),
    )


def _expense(tx_id, category_id, occurred_at, created_at=None):
    return Transaction(
        id=tx_id,
        owner_id="owner",
        account_id="acc",
        category_id=category_id,
        kind="debit",
        amount=Decimal("12000"),
        occurred_at=occurred_at,
        status="posted",
        created_at=created_at,
    )


def test_render_recent_transactions_builds_table(monkeypatch):
    fake_st = _fake_streamlit()
    monkeypatch.setattr(app, "st", fake_st)
    summary = assemble_summary(
        [
            SimpleNamespace(
                id="t1",
                category_id="food",
                kind="debit",
                amount=Decimal("12000"),
                occurred_at=datetime(2024, 5, 3, tzinfo=timezone.utc),
                created_at=None,
                status="pending",
                description="lunch",
            )
        ],
        [Category(id="food", owner_id="owner", name="Food")],
        [],
        month=date(2024, 5, 1),
        now=datetime(2024, 5, 20, tzinfo=timezone.utc),
    )

    app._render_recent_transactions(summary)

    rows, kwargs = fake_st.dataframe.call_args
    assert rows[0] == [
        {
            "Date": "2024-05-03",
            "Type": "Expense",
            "Category": "Food",
            "Amount": "$12,000 COP",
            "Status": "pending",
            "Note": "lunch",
        }
    ]
    assert kwargs == {"width": "stretch", "hide_index": True}


def test_recent_table_names_match_the_category_breakdown(monkeypatch):
    """Aliased ids show the canonical name; unknown ids the placeholder."""
    fake_st = _fake_streamlit()
    monkeypatch.setattr(app, "st", fake_st)
    summary = _categorized_summary(
        [
            _expense("t1", "food-2", datetime(2024, 5, 4, tzinfo=timezone.utc)),
            _expense("t2", "gone", datetime(2024, 5, 3, tzinfo=timezone.utc)),
        ]
    )

    app._render_recent_transactions(summary)

    rows = fake_st.dataframe.call_args.args[0]
    assert [row["Category"] for row in rows] == ["Food", "Category"]
    assert summary.category_breakdown[0].category_name == "Food"


def test_recent_table_shows_when_the_transaction_happened(monkeypatch):
    """A back-dated entry shows its occurred_at date, not its creation date."""
    fake_st = _fake_streamlit()
    monkeypatch.setattr(app, "st", fake_st)
    summary = _categorized_summary(
        [
            _expense(
                "t1",
                "food-1",
                datetime(2024, 5, 2, 18, tzinfo=timezone.utc),
                created_at=datetime(2024, 5, 19, 8, tzinfo=timezone.utc),
            )
        ]
    )

    app._render_recent_transactions(summary)

    rows = fake_st.dataframe.call_args.args[0]
    assert rows[0]["Date"] == "2024-05-02"


def test_edit_form_updates_the_selected_transaction(monkeypatch):
    """Submitting the edit form sends the new values to the use case."""
    fake_st = _fake_streamlit()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: MagicMock())
    summary = _categorized_summary(
        [
            _expense(
                "t1",
                "food-2",
                datetime(2024, 5, 4, 9, 30, tzinfo=timezone.utc),
            )
        ]
    )
    target = summary.recent_transactions[0]
    food = Category(id="food-1", owner_id="owner", name="Food")
    fake_st.selectbox.side_effect = [target, "credit", food]
    fake_st.number_input.return_value = 15000.0
    fake_st.date_input.return_value = date(2024, 5, 6)
    fake_st.text_input.return_value = "refund"
    fake_st.form_submit_button.return_value = True
    use_case = MagicMock()

    app._render_edit_transaction_form(
        SessionContext(owner_id="owner"),
        summary,
        [food],
        use_case,
    )

    use_case.update.assert_called_once()
    args, kwargs = use_case.update.call_args
    assert args[1:] == ("t1", "credit", Decimal("15000.0"))
    assert kwargs == {
        "occurred_at": datetime(2024, 5, 6, 9, 30, tzinfo=timezone.utc),
        "category_id": "food-1",
        "description": "refund",
    }
    category_kwargs = fake_st.selectbox.call_args_list[2].kwargs
    assert category_kwargs["index"] == 0
    fake_st.success.assert_called_once_with("Transaction saved.")


def test_edit_form_skips_update_until_submitted(monkeypatch):
    fake_st = _fake_streamlit()
    monkeypatch.setattr(app, "st", fake_st)
    summary = _categorized_summary(
        [_expense("t1", "food-1", datetime(2024, 5, 4, tzinfo=timezone.utc))]
    )
    fake_st.selectbox.side_effect = [summary.recent_transactions[0], "debit", None]
    fake_st.form_submit_button.return_value = False
    use_case = MagicMock()

    app._render_edit_transaction_form(
        SessionContext(owner_id="owner"),
        summary,
        [],
        use_case,
    )

    use_case.update.assert_not_called()


def test_render_recent_transactions_empty_state(monkeypatch):
    fake_st = _fake_streamlit()
    monkeypatch.setattr(app, "st", fake_st)
    summary = assemble_summary(
        [],
        [],
        [],
        month=date(2024, 5, 1),
        now=datetime(2024, 5, 20, tzinfo=timezone.utc),
    )

    app._render_recent_transactions(summary)

    fake_st.info.assert_called_once_with("No transactions yet.")
    fake_st.dataframe.assert_not_called()
