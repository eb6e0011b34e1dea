"""Mapping of raw ledger rows onto domain models.

Rows may come from SQLAlchemy results or from JSON payloads of the hosted
backend, where joined category names arrive either as ``category_name``,
as a nested ``categories`` object, or as a list of such objects. Everything
is normalized here so aggregation only ever sees one shape.
"""

from collections.abc import Mapping
from datetime import date

from biyu.domain.models import (
    Account,
    Budget,
    BudgetLimit,
    Category,
    Transaction,
)
from biyu.domain.services.normalization import normalize_joined_name
from biyu.utils.datetime_utils import coerce_datetime
from biyu.utils.decimal_utils import coerce_decimal


def _field(row, name: str, default=None):
    if isinstance(row, Mapping):
        return row.get(name, default)
    return getattr(row, name, default)


def _optional_id(value) -> str | None:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def _optional_text(value) -> str | None:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def _joined_category_name(row) -> str | None:
    name = normalize_joined_name(_field(row, "category_name"))
    if name:
        return name
    return normalize_joined_name(_field(row, "categories"))


def _coerce_month(value) -> date | None:
    if isinstance(value, date):
        return date(value.year, value.month, 1)
    parsed = coerce_datetime(value)
    if parsed is None:
        return None
    return date(parsed.year, parsed.month, 1)


def map_account(row) -> Account:
    """Build an Account from a raw row."""
    balance = _field(row, "balance")
    return Account(
        id=str(_field(row, "id")),
        owner_id=str(_field(row, "user_id")),
        name=_optional_text(_field(row, "name")) or "",
        currency_code=(
            _optional_text(_field(row, "currency")) or "COP"
        ).upper(),
        balance=None if balance is None else coerce_decimal(balance),
    )


def map_category(row) -> Category:
    """Build a Category from a raw row."""
    return Category(
        id=str(_field(row, "id")),
        owner_id=str(_field(row, "user_id")),
        name=_optional_text(_field(row, "name")) or "",
        icon=_optional_text(_field(row, "icon")),
    )


def map_transaction(row) -> Transaction:
    """Build a Transaction from a raw row.

    ``amount_cop`` is the stored column; ``amount`` is accepted for
    payloads using the generic name. Malformed amounts become zero.
    """
    amount = _field(row, "amount_cop")
    if amount is None:
        amount = _field(row, "amount")
    description = _field(row, "note")
    if description is None:
        description = _field(row, "description")
    occurred_at = coerce_datetime(_field(row, "occurred_at"))
    created_at = coerce_datetime(_field(row, "created_at"))
    return Transaction(
        id=str(_field(row, "id")),
        owner_id=str(_field(row, "user_id")),
        account_id=str(_field(row, "account_id")),
        category_id=_optional_id(_field(row, "category_id")),
        kind=_optional_text(_field(row, "type")),
        amount=coerce_decimal(amount),
        occurred_at=occurred_at or created_at,
        status=_optional_text(_field(row, "status")),
        description=_optional_text(description),
        created_at=created_at,
    )


def map_budget(row) -> Budget:
    """Build a Budget from a raw row."""
    total_limit = _field(row, "total_limit_cop")
    return Budget(
        id=str(_field(row, "id")),
        owner_id=str(_field(row, "user_id")),
        account_id=str(_field(row, "account_id")),
        month=_coerce_month(_field(row, "month")),
        total_limit=None if total_limit is None else coerce_decimal(total_limit),
    )


def map_budget_limit(row) -> BudgetLimit:
    """Build a BudgetLimit from a raw row, keeping the joined name."""
    return BudgetLimit(
        id=str(_field(row, "id")),
        budget_id=str(_field(row, "budget_id")),
        category_id=str(_field(row, "category_id")),
        limit_amount=coerce_decimal(_field(row, "limit_cop")),
        category_name=_joined_category_name(row),
    )


__all__ = [
    "map_account",
    "map_category",
    "map_transaction",
    "map_budget",
    "map_budget_limit",
]
