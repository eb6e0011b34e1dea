"""Port for ledger writes triggered by user actions."""

from datetime import date, datetime
from decimal import Decimal
from typing import Protocol

from biyu.domain.models import Budget, BudgetLimit, Transaction


class LedgerWriterPort(Protocol):
    """Port persisting budgets and transactions."""

    def bootstrap_owner(self, owner_id: str) -> None:
        """Provision the default account and categories for a new owner."""

    def ensure_budget(
        self,
        owner_id: str,
        account_id: str,
        month: date,
    ) -> Budget:
        """Create the month's budget if missing and return it."""

    def update_budget_total(
        self,
        budget_id: str,
        total_limit: Decimal | None,
    ) -> None:
        """Set (or clear with None) the total limit of a budget."""

    def upsert_budget_limit(
        self,
        budget_id: str,
        category_id: str,
        limit_amount: Decimal,
    ) -> BudgetLimit:
        """Insert or update the limit of a category inside a budget."""

    def insert_transaction(
        self,
        owner_id: str,
        account_id: str,
        category_id: str,
        kind: str,
        amount: Decimal,
        occurred_at: datetime,
        status: str,
        description: str | None,
    ) -> Transaction:
        """Insert a transaction and return the stored row."""

    def update_transaction(
        self,
        owner_id: str,
        transaction_id: str,
        category_id: str,
        kind: str,
        amount: Decimal,
        occurred_at: datetime,
        description: str | None,
    ) -> None:
        """Update the editable fields of a transaction."""

    def delete_transaction(self, owner_id: str, transaction_id: str) -> None:
        """Delete a transaction owned by the owner."""


__all__ = ["LedgerWriterPort"]
