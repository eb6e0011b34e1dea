"""Streamlit dashboard entry point."""

from collections.abc import Callable, Sequence
from datetime import date, datetime, time, timezone
from decimal import Decimal

import streamlit as st
import altair as alt

from biyu.adapters.interface.streamlit.dashboard_charts import (
    CATEGORY_PALETTE,
    build_budget_progress_figure,
    densify_trend,
    prepare_category_chart_data,
    progress_status,
)
from biyu.application.ports.ledger_repository import LedgerUnavailableError
from biyu.domain.models import (
    Account,
    AlertItem,
    Category,
    DashboardSummary,
    RecentTransaction,
    SessionContext,
)
from biyu.domain.services.formatting import format_money
from biyu.domain.services.normalization import normalize_kind
from biyu.domain.services.periods import (
    ensure_utc,
    recent_months,
    trailing_window_start,
)
from biyu.infrastructure.container import (
    build_accounts_use_case,
    build_bootstrap_owner_use_case,
    build_categories_use_case,
    build_dashboard_summary_use_case,
    build_manage_budget_use_case,
    build_manage_transactions_use_case,
)
from biyu.infrastructure.logging.logger import get_usage_logger
from biyu.infrastructure.settings import BiyuSettings


PAGES = ["Dashboard", "Budgets", "Transactions"]
LOAD_ERROR_MESSAGE = "Could not load your data right now. Please try again later."
SAVE_ERROR_MESSAGE = "Could not save your changes right now. Please try again."
KIND_LABELS = {"debit": "Expense", "credit": "Income"}
SCOPE_LABELS = {"All transactions": "all", "This month": "month"}


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check that the numpy/pandas installs Altair relies on are usable.

    Returns:
        Tuple of (ok, message); the message explains what is broken.
    """
    try:
        import numpy
        import pandas
    except ImportError as exc:
        return False, f"Charts need numpy and pandas installed: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "The numpy install is incomplete (missing ndarray)."
    if not hasattr(pandas, "Timestamp"):
        return False, "The pandas install is incomplete (missing Timestamp)."
    return True, None


def _fetch_accounts(owner_id: str) -> Sequence[Account]:
    """Fetch the accounts of the owner."""
    use_case = build_accounts_use_case()
    return use_case.execute(SessionContext(owner_id=owner_id))


@st.cache_data(show_spinner=False, ttl=60)
def _load_accounts(owner_id: str) -> Sequence[Account]:
    """Cached wrapper around _fetch_accounts for Streamlit sessions."""
    return _fetch_accounts(owner_id)


def _fetch_categories(owner_id: str) -> Sequence[Category]:
    """Fetch the deduplicated categories of the owner."""
    use_case = build_categories_use_case()
    return use_case.execute(SessionContext(owner_id=owner_id))


@st.cache_data(show_spinner=False, ttl=60)
def _load_categories(owner_id: str) -> Sequence[Category]:
    """Cached wrapper around _fetch_categories."""
    return _fetch_categories(owner_id)


def _fetch_dashboard_summary(
    owner_id: str,
    account_id: str | None,
    month: date | None,
    recent_scope: str,
) -> DashboardSummary:
    """Compute the dashboard summary for the selected account and month."""
    use_case = build_dashboard_summary_use_case()
    return use_case.execute(
        SessionContext(owner_id=owner_id),
        account_id=account_id,
        month=month,
        recent_scope=recent_scope,
    )


@st.cache_data(show_spinner=False, ttl=60)
def _load_dashboard_summary(
    owner_id: str,
    account_id: str | None,
    month: date | None,
    recent_scope: str = "all",
    schema_version: int = 1,
) -> DashboardSummary:
    """Cached wrapper around _fetch_dashboard_summary."""
    _ = schema_version
    return _fetch_dashboard_summary(owner_id, account_id, month, recent_scope)


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    return format_money(value, currency_code)


def _resolve_session() -> SessionContext | None:
    """Return the session from settings or the sidebar owner input."""
    settings = BiyuSettings.from_env()
    owner_id = settings.owner_id
    if not owner_id:
        owner_id = st.sidebar.text_input("Owner id").strip()
    if not owner_id:
        return None
    return SessionContext(owner_id=owner_id)


def _run_write(label: str, action: Callable[[], object]) -> bool:
    """Run a write action, reporting the outcome in the UI.

    Args:
        label: Short action name used in messages and usage logs.
        action: Callable performing the write.

    Returns:
        True when the write succeeded.
    """
    usage_logger = get_usage_logger()
    try:
        action()
    except ValueError as exc:
        st.warning(str(exc))
        return False
    except LedgerUnavailableError:
        st.error(SAVE_ERROR_MESSAGE)
        return False
    usage_logger.info(f"UI action: {label}")
    st.cache_data.clear()
    st.success(f"{label} saved.")
    return True


def _render_metrics(summary: DashboardSummary) -> None:
    """Render the headline balance and monthly metrics."""
    currency_code = summary.currency_code
    balance_col, income_col, expense_col, net_col = st.columns(4)
    balance_col.metric(
        "Balance",
        _format_currency(summary.total_balance, currency_code),
    )
    income_col.metric(
        "Income this month",
        _format_currency(summary.monthly_income, currency_code),
    )
    expense_col.metric(
        "Expenses this month",
        _format_currency(summary.monthly_expense, currency_code),
    )
    net_col.metric(
        "Net this month",
        _format_currency(summary.monthly_net, currency_code),
    )
    if summary.total_limit:
        usage = summary.total_usage_percentage or Decimal("0")
        st.caption(
            f"Monthly limit {_format_currency(summary.total_limit, currency_code)}"
            f" · {usage:.0f}% used"
        )


def _render_trend_chart(summary: DashboardSummary, today: date) -> None:
    """Render the 30-day expense trend as an Altair area chart."""
    st.subheader("Last 30 days")
    if not summary.trend_30_days:
        st.info("No expenses in the last 30 days.")
        return
    now = datetime.combine(today, time.min, tzinfo=timezone.utc)
    start = trailing_window_start(now).date()
    data = densify_trend(summary.trend_30_days, start, today)
    chart = alt.Chart(alt.Data(values=data)).mark_area(
        line={"color": CATEGORY_PALETTE[0]},
        color=CATEGORY_PALETTE[1],
        opacity=0.35,
    ).encode(
        x=alt.X("date:T", title=None),
        y=alt.Y("total:Q", title=None),
        tooltip=[
            alt.Tooltip("label:N", title="Day"),
            alt.Tooltip("total:Q", title="Spent", format=",.0f"),
        ],
    ).properties(height=220)
    st.altair_chart(chart, width="stretch")


def _render_category_chart(
    summary: DashboardSummary,
    chart_size: int = 300,
) -> None:
    """Render a donut chart of the month's expenses by category."""
    st.subheader("Spending by category")
    if not summary.category_breakdown:
        st.info("No expenses this month.")
        return
    data, _ = prepare_category_chart_data(
        summary.category_breakdown,
        summary.currency_code,
        monthly_expense=summary.monthly_expense,
    )
    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(range=CATEGORY_PALETTE),
            legend=alt.Legend(orient="bottom", title=None, columns=2),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.6)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    hover_text = alt.Chart(alt.Data(values=data)).transform_filter(
        hover
    ).mark_text(
        align="center",
        baseline="middle",
        fontSize=16,
        fontWeight="bold",
    ).encode(text="amount_label:N")
    chart = alt.layer(base, hover_text).add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(stroke=None)
    st.altair_chart(chart, width="stretch")


def _render_budget_progress(summary: DashboardSummary) -> None:
    """Render category limit usage bars."""
    st.subheader("Budget progress")
    if not summary.budget_progress:
        st.info("No category limits for this month.")
        return
    figure = build_budget_progress_figure(
        summary.budget_progress,
        summary.currency_code,
    )
    st.plotly_chart(figure, width="stretch")


def _render_alerts(alerts: Sequence[AlertItem]) -> None:
    """Render budget alerts with their severity."""
    st.subheader("Alerts")
    for alert in alerts:
        if alert.severity == "danger":
            st.error(alert.message)
        elif alert.severity == "warning":
            st.warning(alert.message)
        else:
            st.success(alert.message)


def _display_date(value: datetime | None) -> str:
    return value.date().isoformat() if value else ""


def _render_recent_transactions(
    summary: DashboardSummary,
    title: str = "Recent transactions",
) -> None:
    """Render the recent transactions table."""
    st.subheader(title)
    if not summary.recent_transactions:
        st.info("No transactions yet.")
        return
    rows = [
        {
            "Date": _display_date(item.occurred_at),
            "Type": KIND_LABELS.get(item.type, item.type),
            "Category": item.category_name or "Uncategorized",
            "Amount": _format_currency(item.amount, summary.currency_code),
            "Status": item.status,
            "Note": item.description or "",
        }
        for item in summary.recent_transactions
    ]
    st.dataframe(rows, width="stretch", hide_index=True)


def _render_dashboard_page(
    session: SessionContext,
    account: Account,
    month: date,
    categories: Sequence[Category],
) -> None:
    """Render the summary page for one account and month."""
    scope_label = st.sidebar.radio("Recent", list(SCOPE_LABELS))
    summary = _load_dashboard_summary(
        session.owner_id,
        account.id,
        month,
        SCOPE_LABELS.get(scope_label, "all"),
        schema_version=1,
    )
    _render_metrics(summary)
    _render_alerts(summary.alerts)
    trend_col, category_col = st.columns(2)
    with trend_col:
        _render_trend_chart(summary, datetime.now(timezone.utc).date())
    with category_col:
        _render_category_chart(summary)
    _render_budget_progress(summary)
    _render_recent_transactions(summary)


def _render_budgets_page(
    session: SessionContext,
    account: Account,
    month: date,
    categories: Sequence[Category],
) -> None:
    """Render the monthly limit editors and the current usage."""
    summary = _load_dashboard_summary(
        session.owner_id,
        account.id,
        month,
        "month",
        schema_version=1,
    )
    use_case = build_manage_budget_use_case()

    st.subheader("Monthly total limit")
    with st.form("total_limit"):
        total_limit = st.number_input(
            f"Limit ({summary.currency_code})",
            min_value=0.0,
            value=float(summary.total_limit or 0),
            step=1000.0,
        )
        submitted = st.form_submit_button("Save total limit")
    if submitted:
        _run_write(
            "Total limit",
            lambda: use_case.set_total_limit(
                session,
                account.id,
                month,
                Decimal(str(total_limit)),
            ),
        )

    st.subheader("Category limits")
    selectable = list(categories)
    with st.form("category_limit"):
        category = st.selectbox(
            "Category",
            selectable,
            format_func=lambda item: item.name,
        )
        limit_amount = st.number_input(
            f"Limit ({summary.currency_code})",
            min_value=0.0,
            step=1000.0,
        )
        submitted = st.form_submit_button("Save category limit")
    if submitted:
        _run_write(
            "Category limit",
            lambda: use_case.set_category_limit(
                session,
                account.id,
                month,
                category.id if category else None,
                Decimal(str(limit_amount)),
            ),
        )

    if not summary.budget_progress:
        st.info("No category limits for this month.")
        return
    rows = [
        {
            "Category": item.category_name,
            "Spent": _format_currency(item.spent, summary.currency_code),
            "Limit": _format_currency(item.limit, summary.currency_code),
            "Status": progress_status(item)[1],
        }
        for item in summary.budget_progress
    ]
    st.dataframe(rows, width="stretch", hide_index=True)


def _transaction_label(item: RecentTransaction, currency_code: str) -> str:
    return (
        f"{_display_date(item.occurred_at)} · "
        f"{KIND_LABELS.get(item.type, item.type)} · "
        f"{_format_currency(item.amount, currency_code)}"
    )


def _render_edit_transaction_form(
    session: SessionContext,
    summary: DashboardSummary,
    categories: Sequence[Category],
    use_case,
) -> None:
    """Render the editor for one of the listed transactions.

    Widgets are keyed by transaction id so the defaults follow the
    selection.
    """
    st.subheader("Edit transaction")
    target = st.selectbox(
        "Transaction to edit",
        summary.recent_transactions,
        format_func=lambda item: _transaction_label(
            item,
            summary.currency_code,
        ),
    )
    if target is None:
        return
    kinds = list(KIND_LABELS)
    current_kind = normalize_kind(target.type)
    choices = list(categories)
    category_index = next(
        (
            index
            for index, item in enumerate(choices)
            if item.id == target.category_id
            or item.name.strip() == target.category_name
        ),
        0,
    )
    occurred_at = ensure_utc(target.occurred_at) if target.occurred_at else None
    with st.form("edit_transaction"):
        kind = st.selectbox(
            "Type",
            kinds,
            index=kinds.index(current_kind) if current_kind in kinds else 0,
            format_func=lambda value: KIND_LABELS[value],
            key=f"edit_kind_{target.id}",
        )
        amount = st.number_input(
            "Amount",
            min_value=0.0,
            value=float(target.amount),
            step=1000.0,
            key=f"edit_amount_{target.id}",
        )
        category = st.selectbox(
            "Category",
            choices,
            index=category_index,
            format_func=lambda item: item.name,
            key=f"edit_category_{target.id}",
        )
        occurred_on = st.date_input(
            "Date",
            value=occurred_at.date() if occurred_at else date.today(),
            key=f"edit_date_{target.id}",
        )
        description = st.text_input(
            "Note",
            value=target.description or "",
            key=f"edit_note_{target.id}",
        )
        submitted = st.form_submit_button("Update transaction")
    if submitted:
        updated_at = datetime.combine(
            occurred_on,
            occurred_at.time() if occurred_at else time(0),
            tzinfo=timezone.utc,
        )
        _run_write(
            "Transaction",
            lambda: use_case.update(
                session,
                target.id,
                kind,
                Decimal(str(amount)),
                occurred_at=updated_at,
                category_id=category.id if category else None,
                description=description,
            ),
        )


def _render_transactions_page(
    session: SessionContext,
    account: Account,
    month: date,
    categories: Sequence[Category],
) -> None:
    """Render the transaction editor and the month's transactions."""
    use_case = build_manage_transactions_use_case()

    st.subheader("New transaction")
    with st.form("record_transaction", clear_on_submit=True):
        kind = st.selectbox(
            "Type",
            list(KIND_LABELS),
            format_func=lambda value: KIND_LABELS[value],
        )
        amount = st.number_input("Amount", min_value=0.0, step=1000.0)
        category = st.selectbox(
            "Category",
            list(categories),
            format_func=lambda item: item.name,
        )
        occurred_on = st.date_input("Date", value=date.today())
        description = st.text_input("Note")
        submitted = st.form_submit_button("Save transaction")
    if submitted:
        occurred_at = datetime.combine(
            occurred_on,
            datetime.now(timezone.utc).time(),
            tzinfo=timezone.utc,
        )
        _run_write(
            "Transaction",
            lambda: use_case.record(
                session,
                account.id,
                kind,
                Decimal(str(amount)),
                occurred_at=occurred_at,
                category_id=category.id if category else None,
                description=description,
            ),
        )

    summary = _load_dashboard_summary(
        session.owner_id,
        account.id,
        month,
        "month",
        schema_version=1,
    )
    _render_recent_transactions(summary, title="Transactions this month")
    if not summary.recent_transactions:
        return
    _render_edit_transaction_form(session, summary, categories, use_case)

    st.subheader("Delete transaction")
    with st.form("delete_transaction"):
        target = st.selectbox(
            "Transaction",
            summary.recent_transactions,
            format_func=lambda item: _transaction_label(
                item,
                summary.currency_code,
            ),
        )
        submitted = st.form_submit_button("Delete transaction")
    if submitted and target is not None:
        _run_write(
            "Deletion",
            lambda: use_case.delete(session, target.id),
        )


def _render_onboarding(session: SessionContext) -> None:
    """Offer to create the default account when the owner has none."""
    st.warning("No accounts yet. Create your default account to get started.")
    if st.button("Create default account"):
        use_case = build_bootstrap_owner_use_case()
        _run_write("Default account", lambda: use_case.execute(session))


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="BiYú", layout="wide")
    st.title("BiYú")

    ok, message = _check_altair_dependencies()
    if not ok:
        st.error(message)
        return

    session = _resolve_session()
    if session is None:
        st.info("Enter your owner id in the sidebar to load your data.")
        return

    page = st.sidebar.selectbox("Page", PAGES)
    try:
        accounts = _load_accounts(session.owner_id)
        if not accounts:
            _render_onboarding(session)
            return
        categories = _load_categories(session.owner_id)
        account = st.sidebar.selectbox(
            "Account",
            list(accounts),
            format_func=lambda item: item.name,
        )
        months = recent_months(datetime.now(timezone.utc).date())
        month = st.sidebar.selectbox(
            "Month",
            months,
            format_func=lambda value: value.strftime("%B %Y"),
        )
        if page == "Budgets":
            _render_budgets_page(session, account, month, categories)
        elif page == "Transactions":
            _render_transactions_page(session, account, month, categories)
        else:
            _render_dashboard_page(session, account, month, categories)
    except LedgerUnavailableError:
        st.error(LOAD_ERROR_MESSAGE)


if __name__ == "__main__":  # pragma: no cover
    main()
