"""Port for ledger reads used by the dashboard."""

from datetime import date, datetime
from typing import Protocol

from biyu.domain.models import (
    Account,
    Budget,
    BudgetLimit,
    Category,
    Transaction,
)


class LedgerUnavailableError(RuntimeError):
    """Raised when the ledger data source cannot be read or written."""


class LedgerRepositoryPort(Protocol):
    """Port exposing the ledger rows needed for dashboard computations."""

    def fetch_accounts(self, owner_id: str) -> list[Account]:
        """Return the owner's accounts ordered by name."""

    def fetch_categories(self, owner_id: str) -> list[Category]:
        """Return the owner's categories, duplicates included."""

    def fetch_transactions(
        self,
        owner_id: str,
        account_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Transaction]:
        """Return transactions of an account, optionally within [start, end)."""

    def fetch_budget(
        self,
        owner_id: str,
        account_id: str,
        month: date,
    ) -> Budget | None:
        """Return the account budget for the month, if any."""

    def fetch_budget_limits(self, budget_id: str) -> list[BudgetLimit]:
        """Return the per-category limits of a budget."""


__all__ = ["LedgerRepositoryPort", "LedgerUnavailableError"]
