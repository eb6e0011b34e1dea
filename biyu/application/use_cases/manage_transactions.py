"""Use case to record, edit and delete transactions."""

from datetime import datetime, timezone
from decimal import Decimal

from biyu.application.ports.ledger_writer import LedgerWriterPort
from biyu.domain.constants import POSTED_STATUS, UNCATEGORIZED_CATEGORY_ID
from biyu.domain.models import SessionContext, Transaction
from biyu.domain.services.normalization import normalize_kind
from biyu.domain.services.periods import ensure_utc
from biyu.infrastructure.logging.logger import get_app_logger
from biyu.utils.decimal_utils import coerce_decimal


class ManageTransactionsUseCase:
    """Validate and persist transaction edits."""

    def __init__(
        self,
        ledger_writer: LedgerWriterPort,
        logger=None,
        uncategorized_id: str = UNCATEGORIZED_CATEGORY_ID,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_writer: Port persisting transactions.
            logger: Optional logger compatible with logging.Logger-like API.
            uncategorized_id: Category stored when none is selected.
        """
        self._ledger_writer = ledger_writer
        self._logger = logger or get_app_logger()
        self._uncategorized_id = uncategorized_id

    def record(
        self,
        session: SessionContext,
        account_id: str,
        kind: str,
        amount,
        occurred_at: datetime | None = None,
        category_id: str | None = None,
        description: str | None = None,
        status: str = POSTED_STATUS,
    ) -> Transaction:
        """Record a new transaction.

        Args:
            session: Identity of the owner.
            account_id: Account receiving the entry.
            kind: credit/income or debit/expense.
            amount: Positive magnitude.
            occurred_at: When it happened (defaults to now).
            category_id: Optional category; blank means uncategorized.
            description: Optional note, trimmed.
            status: Settlement status, posted by default.

        Returns:
            Transaction: Stored transaction.

        Raises:
            ValueError: If the input is invalid.
        """
        if not account_id:
            raise ValueError("No active account. Run the bootstrap first.")
        normalized_kind, value = self._validate(kind, amount)
        transaction = self._ledger_writer.insert_transaction(
            owner_id=session.owner_id,
            account_id=account_id,
            category_id=self._category_or_default(category_id),
            kind=normalized_kind,
            amount=value,
            occurred_at=self._timestamp(occurred_at),
            status=(status or POSTED_STATUS).strip().lower(),
            description=self._clean_note(description),
        )
        self._logger.info(
            f"Recorded {normalized_kind} of {value} on account {account_id}"
        )
        return transaction

    def update(
        self,
        session: SessionContext,
        transaction_id: str,
        kind: str,
        amount,
        occurred_at: datetime | None = None,
        category_id: str | None = None,
        description: str | None = None,
    ) -> None:
        """Update the editable fields of a transaction.

        Raises:
            ValueError: If the input is invalid.
        """
        if not transaction_id:
            raise ValueError("Select a transaction to edit.")
        normalized_kind, value = self._validate(kind, amount)
        self._ledger_writer.update_transaction(
            owner_id=session.owner_id,
            transaction_id=transaction_id,
            category_id=self._category_or_default(category_id),
            kind=normalized_kind,
            amount=value,
            occurred_at=self._timestamp(occurred_at),
            description=self._clean_note(description),
        )
        self._logger.info(f"Updated transaction {transaction_id}")

    def delete(self, session: SessionContext, transaction_id: str) -> None:
        """Delete a transaction of the owner.

        Raises:
            ValueError: If no transaction id is given.
        """
        if not transaction_id:
            raise ValueError("Select a transaction to delete.")
        self._ledger_writer.delete_transaction(
            session.owner_id,
            transaction_id,
        )
        self._logger.info(f"Deleted transaction {transaction_id}")

    @staticmethod
    def _validate(kind: str, amount) -> tuple[str, Decimal]:
        normalized_kind = normalize_kind(kind)
        if normalized_kind is None:
            raise ValueError(f"Unknown transaction type: {kind!r}")
        value = coerce_decimal(amount)
        if value <= 0:
            raise ValueError("The amount must be greater than 0.")
        return normalized_kind, value

    def _category_or_default(self, category_id: str | None) -> str:
        cleaned = (category_id or "").strip()
        return cleaned or self._uncategorized_id

    @staticmethod
    def _clean_note(description: str | None) -> str | None:
        cleaned = (description or "").strip()
        return cleaned or None

    @staticmethod
    def _timestamp(occurred_at: datetime | None) -> datetime:
        if occurred_at is None:
            return datetime.now(timezone.utc)
        return ensure_utc(occurred_at)


__all__ = ["ManageTransactionsUseCase"]
