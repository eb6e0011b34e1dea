"""Domain models for ledger rows."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class Account:
    """Account owned by a user.

    Attributes:
        id: Account identifier.
        owner_id: Owner identifier.
        name: Display name.
        currency_code: ISO currency code of the account.
        balance: Stored balance column, informational only.
    """

    id: str
    owner_id: str
    name: str
    currency_code: str
    balance: Decimal | None = None


@dataclass(frozen=True)
class Category:
    """Spending category owned by a user."""

    id: str
    owner_id: str
    name: str
    icon: str | None = None


@dataclass(frozen=True)
class Transaction:
    """Ledger entry for an account.

    Attributes:
        id: Transaction identifier.
        owner_id: Owner identifier.
        account_id: Account the entry belongs to.
        category_id: Optional category; None means uncategorized.
        kind: Raw kind (credit/income or debit/expense).
        amount: Non-negative magnitude; the sign comes from the kind.
        occurred_at: When the movement happened (UTC).
        status: Settlement status ("posted", "pending", ...).
        description: Optional free-text note.
        created_at: When the row was written (UTC).
    """

    id: str
    owner_id: str
    account_id: str
    category_id: str | None
    kind: str | None
    amount: Decimal
    occurred_at: datetime | None
    status: str | None = "posted"
    description: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class Budget:
    """Monthly budget for an account."""

    id: str
    owner_id: str
    account_id: str
    month: date
    total_limit: Decimal | None = None


@dataclass(frozen=True)
class BudgetLimit:
    """Per-category limit inside a monthly budget."""

    id: str
    budget_id: str
    category_id: str
    limit_amount: Decimal
    category_name: str | None = None


__all__ = ["Account", "Category", "Transaction", "Budget", "BudgetLimit"]
