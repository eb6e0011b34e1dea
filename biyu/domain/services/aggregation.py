"""Spending aggregation for the dashboard.

Every function here is pure: it works on rows that were already fetched,
never reads the clock, and returns the same output for the same input.
Window boundaries (month, trailing trend window) are supplied by callers.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal

from biyu.domain.constants import (
    DEFAULT_BREAKDOWN_LIMIT,
    DEFAULT_CURRENCY,
    DEFAULT_RECENT_LIMIT,
    DEFAULT_TREND_DAYS,
    NO_ALERTS_MESSAGE,
    UNCATEGORIZED_CATEGORY_ID,
)
from biyu.domain.models import (
    AlertItem,
    BudgetLimit,
    BudgetProgressItem,
    Category,
    CategoryBreakdownItem,
    DashboardSummary,
    MonthlyTotals,
    RecentTransaction,
    Transaction,
    TrendPoint,
)
from biyu.domain.policies.budget_thresholds import classify_budget_usage
from biyu.domain.services.formatting import format_money
from biyu.domain.services.normalization import (
    CategoryDirectory,
    is_posted,
    normalize_kind,
)
from biyu.domain.services.periods import (
    ensure_utc,
    month_bounds,
    trailing_window_start,
)
from biyu.utils.decimal_utils import coerce_decimal

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)
_HUNDRED = Decimal("100")

RECENT_SCOPES = ("all", "month")


def _occurred_in(
    transaction: Transaction,
    start: datetime | None,
    end: datetime | None,
) -> bool:
    if transaction.occurred_at is None:
        return False
    occurred_at = ensure_utc(transaction.occurred_at)
    if start is not None and occurred_at < ensure_utc(start):
        return False
    if end is not None and occurred_at >= ensure_utc(end):
        return False
    return True


def _posted_expenses(
    transactions: Iterable[Transaction],
    start: datetime | None = None,
    end: datetime | None = None,
) -> Iterable[Transaction]:
    for transaction in transactions:
        if not is_posted(transaction.status):
            continue
        if normalize_kind(transaction.kind) != "debit":
            continue
        if (start is not None or end is not None) and not _occurred_in(
            transaction, start, end
        ):
            continue
        yield transaction


def _as_directory(
    categories: Iterable[Category] | CategoryDirectory,
    uncategorized_id: str,
) -> CategoryDirectory:
    if isinstance(categories, CategoryDirectory):
        return categories
    return CategoryDirectory(categories, uncategorized_id=uncategorized_id)


def compute_balance(transactions: Iterable[Transaction]) -> Decimal:
    """Return the all-time signed balance of the transactions.

    Status and date are ignored. Credits add, debits subtract, unknown
    kinds contribute nothing.

    Args:
        transactions: Every transaction of the account.

    Returns:
        Decimal: Signed balance (0 for no transactions).
    """
    balance = Decimal("0")
    for transaction in transactions:
        kind = normalize_kind(transaction.kind)
        if kind == "credit":
            balance += coerce_decimal(transaction.amount)
        elif kind == "debit":
            balance -= coerce_decimal(transaction.amount)
    return balance


def compute_monthly_totals(
    transactions: Iterable[Transaction],
    month_start: datetime,
    month_end: datetime,
) -> MonthlyTotals:
    """Return posted income and expense within [month_start, month_end).

    Args:
        transactions: Candidate transactions.
        month_start: First instant of the month.
        month_end: First instant of the following month (exclusive).

    Returns:
        MonthlyTotals: Income, expense and net for the window.
    """
    income = Decimal("0")
    expense = Decimal("0")
    for transaction in transactions:
        if not is_posted(transaction.status):
            continue
        if not _occurred_in(transaction, month_start, month_end):
            continue
        kind = normalize_kind(transaction.kind)
        if kind == "credit":
            income += coerce_decimal(transaction.amount)
        elif kind == "debit":
            expense += coerce_decimal(transaction.amount)
    return MonthlyTotals(income=income, expense=expense)


def compute_daily_trend(
    transactions: Iterable[Transaction],
    window_start: datetime,
) -> list[TrendPoint]:
    """Return posted expense per UTC day since ``window_start``.

    The series is sparse: days without expense are omitted and consumers
    treat them as zero.

    Args:
        transactions: Candidate transactions.
        window_start: Inclusive lower bound of the window.

    Returns:
        list[TrendPoint]: Daily totals in ascending date order.
    """
    totals: dict[date, Decimal] = {}
    for transaction in _posted_expenses(transactions, start=window_start):
        day = ensure_utc(transaction.occurred_at).date()
        totals[day] = totals.get(day, Decimal("0")) + coerce_decimal(
            transaction.amount
        )
    return [
        TrendPoint(date=day, total=total)
        for day, total in sorted(totals.items())
    ]


def compute_category_breakdown(
    transactions: Iterable[Transaction],
    categories: Iterable[Category] | CategoryDirectory,
    limit: int | None = DEFAULT_BREAKDOWN_LIMIT,
    uncategorized_id: str = UNCATEGORIZED_CATEGORY_ID,
) -> list[CategoryBreakdownItem]:
    """Return the top categories by posted expense.

    Args:
        transactions: Transactions already restricted to the period.
        categories: Categories (or a prepared directory) for name lookup.
        limit: Maximum number of items to keep (None keeps all).
        uncategorized_id: Sentinel id for uncategorized spending.

    Returns:
        list[CategoryBreakdownItem]: Items sorted by descending total; ties
        keep their first-encounter order.
    """
    directory = _as_directory(categories, uncategorized_id)
    totals: dict[str, Decimal] = {}
    for transaction in _posted_expenses(transactions):
        category_id = directory.canonical_id(transaction.category_id)
        totals[category_id] = totals.get(
            category_id, Decimal("0")
        ) + coerce_decimal(transaction.amount)

    items = [
        CategoryBreakdownItem(
            category_id=category_id,
            category_name=directory.name_for(category_id),
            total=total,
        )
        for category_id, total in totals.items()
        if total != 0
    ]
    items.sort(key=lambda item: item.total, reverse=True)
    if limit is None:
        return items
    return items[: max(limit, 0)]


def compute_spent_by_category(
    transactions: Iterable[Transaction],
    month_start: datetime,
    month_end: datetime,
    categories: Iterable[Category] | CategoryDirectory,
    uncategorized_id: str = UNCATEGORIZED_CATEGORY_ID,
) -> dict[str, Decimal]:
    """Return posted expense per canonical category id for the month.

    Uncategorized spending is keyed by the sentinel id.
    """
    directory = _as_directory(categories, uncategorized_id)
    spent: dict[str, Decimal] = {}
    for transaction in _posted_expenses(
        transactions,
        start=month_start,
        end=month_end,
    ):
        category_id = directory.canonical_id(transaction.category_id)
        spent[category_id] = spent.get(
            category_id, Decimal("0")
        ) + coerce_decimal(transaction.amount)
    return spent


def _unique_limits(category_limits: Iterable[BudgetLimit]) -> list[BudgetLimit]:
    seen: set[str] = set()
    unique: list[BudgetLimit] = []
    for limit in category_limits:
        if limit.category_id in seen:
            continue
        seen.add(limit.category_id)
        unique.append(limit)
    return unique


def _limit_name(
    limit: BudgetLimit,
    resolve_category_name: Callable[[str], str],
) -> str:
    if limit.category_name and limit.category_name.strip():
        return limit.category_name.strip()
    return resolve_category_name(limit.category_id)


def compute_budget_alerts(
    total_spent: Decimal,
    total_limit: Decimal | None,
    spent_by_category: Mapping[str, Decimal],
    category_limits: Iterable[BudgetLimit],
    resolve_category_name: Callable[[str], str],
    currency_code: str = DEFAULT_CURRENCY,
) -> list[AlertItem]:
    """Return threshold alerts for the total and per-category limits.

    A ratio of 1 or more raises a danger alert, 0.8 or more a warning.
    Limits <= 0 are ignored. When nothing fires a single "ok" alert is
    returned.

    Args:
        total_spent: Posted expense for the month.
        total_limit: Optional total monthly limit.
        spent_by_category: Posted expense per category id.
        category_limits: Configured per-category limits; the first limit
            for a category wins.
        resolve_category_name: Maps a category id to a display name.
        currency_code: Currency used in messages.

    Returns:
        list[AlertItem]: Total alert first, then category alerts in limit
        order, or exactly one "ok" alert.
    """
    alerts: list[AlertItem] = []
    spent_total = coerce_decimal(total_spent)
    limit_total = coerce_decimal(total_limit)
    amounts = (
        f"{format_money(spent_total, currency_code)} / "
        f"{format_money(limit_total, currency_code)}"
    )
    tone = classify_budget_usage(spent_total, limit_total)
    if tone == "danger":
        alerts.append(
            AlertItem(
                key="total-danger",
                severity="danger",
                message=f"Monthly total limit exceeded: {amounts}",
            )
        )
    elif tone == "warning":
        alerts.append(
            AlertItem(
                key="total-warning",
                severity="warning",
                message=f"Close to the monthly total limit: {amounts}",
            )
        )

    for limit in _unique_limits(category_limits):
        limit_amount = coerce_decimal(limit.limit_amount)
        spent = coerce_decimal(spent_by_category.get(limit.category_id))
        tone = classify_budget_usage(spent, limit_amount)
        if tone not in ("danger", "warning"):
            continue
        name = _limit_name(limit, resolve_category_name)
        amounts = (
            f"{format_money(spent, currency_code)} / "
            f"{format_money(limit_amount, currency_code)}"
        )
        if tone == "danger":
            alerts.append(
                AlertItem(
                    key=f"cat-danger-{limit.category_id}",
                    severity="danger",
                    message=f"{name} limit exceeded: {amounts}",
                )
            )
        else:
            alerts.append(
                AlertItem(
                    key=f"cat-warning-{limit.category_id}",
                    severity="warning",
                    message=f"Close to the {name} limit: {amounts}",
                )
            )

    if not alerts:
        alerts.append(
            AlertItem(key="ok", severity="ok", message=NO_ALERTS_MESSAGE)
        )
    return alerts


def compute_budget_progress(
    spent_by_category: Mapping[str, Decimal],
    category_limits: Iterable[BudgetLimit],
    resolve_category_name: Callable[[str], str],
) -> list[BudgetProgressItem]:
    """Return usage per configured category limit.

    The percentage is clamped to 100 even when the limit is overspent; the
    overspend only shows through alerts.
    """
    progress: list[BudgetProgressItem] = []
    for limit in _unique_limits(category_limits):
        limit_amount = coerce_decimal(limit.limit_amount)
        spent = coerce_decimal(spent_by_category.get(limit.category_id))
        if limit_amount > 0:
            percentage = min(_HUNDRED, spent / limit_amount * _HUNDRED)
            percentage = max(Decimal("0"), percentage)
        else:
            percentage = Decimal("0")
        progress.append(
            BudgetProgressItem(
                category_id=limit.category_id,
                category_name=_limit_name(limit, resolve_category_name),
                limit=limit_amount,
                spent=spent,
                percentage=percentage,
            )
        )
    return progress


def _recency_key(transaction: Transaction) -> tuple[datetime, datetime]:
    occurred_at = transaction.occurred_at or transaction.created_at
    created_at = transaction.created_at or transaction.occurred_at
    return (
        ensure_utc(occurred_at) if occurred_at else _EPOCH,
        ensure_utc(created_at) if created_at else _EPOCH,
    )


def select_recent_transactions(
    transactions: Iterable[Transaction],
    limit: int = DEFAULT_RECENT_LIMIT,
    resolve_category_name: Callable[[str | None], str] | None = None,
) -> list[RecentTransaction]:
    """Return the most recent transactions, whatever their status.

    Args:
        transactions: Candidate transactions.
        limit: Maximum number of rows to return.
        resolve_category_name: Optional lookup of a raw category id to the
            name the breakdown uses for it.

    Returns:
        list[RecentTransaction]: Newest first by occurred_at, then
        created_at.
    """
    ordered = sorted(transactions, key=_recency_key, reverse=True)
    return [
        RecentTransaction(
            id=str(transaction.id),
            created_at=transaction.created_at or transaction.occurred_at,
            amount=coerce_decimal(transaction.amount),
            type=transaction.kind,
            status=transaction.status,
            category_id=transaction.category_id,
            description=transaction.description,
            occurred_at=transaction.occurred_at or transaction.created_at,
            category_name=(
                resolve_category_name(transaction.category_id)
                if resolve_category_name
                else None
            ),
        )
        for transaction in ordered[: max(limit, 0)]
    ]


def assemble_summary(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    budget_limits: Iterable[BudgetLimit],
    *,
    month: date,
    now: datetime,
    total_limit: Decimal | None = None,
    currency_code: str = DEFAULT_CURRENCY,
    uncategorized_id: str = UNCATEGORIZED_CATEGORY_ID,
    trend_days: int = DEFAULT_TREND_DAYS,
    breakdown_limit: int = DEFAULT_BREAKDOWN_LIMIT,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
    recent_scope: str = "all",
    account_id: str | None = None,
) -> DashboardSummary:
    """Compose the dashboard summary for one account and month.

    Args:
        transactions: Every transaction of the account (all statuses).
        categories: Owner categories, duplicates allowed.
        budget_limits: Per-category limits of the month's budget.
        month: Any day of the target month.
        now: Reference instant for the trailing trend window.
        total_limit: Optional total limit of the month's budget.
        currency_code: Currency used for messages and display.
        uncategorized_id: Sentinel id for uncategorized spending.
        trend_days: Length of the trailing trend window in days.
        breakdown_limit: Number of categories kept in the breakdown.
        recent_limit: Number of recent transactions to return.
        recent_scope: "all" for the whole history, "month" for the month.
        account_id: Account the summary belongs to.

    Returns:
        DashboardSummary: Aggregated figures for display.
    """
    if recent_scope not in RECENT_SCOPES:
        raise ValueError(f"Unsupported recent scope: {recent_scope}")
    rows = list(transactions)
    directory = CategoryDirectory(categories, uncategorized_id=uncategorized_id)
    start, end = month_bounds(month)
    month_rows = [row for row in rows if _occurred_in(row, start, end)]

    totals = compute_monthly_totals(rows, start, end)
    spent_by_category = compute_spent_by_category(rows, start, end, directory)
    limits = [
        replace(limit, category_id=directory.canonical_id(limit.category_id))
        for limit in budget_limits
    ]
    recent_rows = month_rows if recent_scope == "month" else rows

    return DashboardSummary(
        currency_code=currency_code,
        month=start.date(),
        total_balance=compute_balance(rows),
        monthly_income=totals.income,
        monthly_expense=totals.expense,
        total_limit=coerce_decimal(total_limit),
        trend_30_days=compute_daily_trend(
            rows,
            trailing_window_start(now, trend_days),
        ),
        category_breakdown=compute_category_breakdown(
            month_rows,
            directory,
            limit=breakdown_limit,
        ),
        budget_progress=compute_budget_progress(
            spent_by_category,
            limits,
            directory.name_for,
        ),
        alerts=compute_budget_alerts(
            totals.expense,
            total_limit,
            spent_by_category,
            limits,
            directory.name_for,
            currency_code=currency_code,
        ),
        recent_transactions=select_recent_transactions(
            recent_rows,
            recent_limit,
            directory.name_for,
        ),
        account_id=account_id,
    )


__all__ = [
    "RECENT_SCOPES",
    "compute_balance",
    "compute_monthly_totals",
    "compute_daily_trend",
    "compute_category_breakdown",
    "compute_spent_by_category",
    "compute_budget_alerts",
    "compute_budget_progress",
    "select_recent_transactions",
    "assemble_summary",
]
