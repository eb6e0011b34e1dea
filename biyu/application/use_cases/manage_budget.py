"""Use case to edit the monthly budget of an account."""

from dataclasses import replace
from datetime import date

from biyu.application.ports.ledger_writer import LedgerWriterPort
from biyu.domain.models import Budget, BudgetLimit, SessionContext
from biyu.domain.services.periods import month_start
from biyu.infrastructure.logging.logger import get_app_logger
from biyu.utils.decimal_utils import coerce_decimal


class ManageBudgetUseCase:
    """Set total and per-category limits for a month."""

    def __init__(self, ledger_writer: LedgerWriterPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            ledger_writer: Port persisting budget rows.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_writer = ledger_writer
        self._logger = logger or get_app_logger()

    def set_total_limit(
        self,
        session: SessionContext,
        account_id: str,
        month: date,
        amount,
    ) -> Budget:
        """Set the total limit of the month; zero clears it.

        Args:
            session: Identity of the owner.
            account_id: Account the budget belongs to.
            month: Any day of the target month.
            amount: New limit; must not be negative.

        Returns:
            Budget: Budget with its updated total limit.

        Raises:
            ValueError: If the account is missing or the amount is negative.
        """
        if not account_id:
            raise ValueError("No active account. Run the bootstrap first.")
        value = coerce_decimal(amount)
        if value < 0:
            raise ValueError("The total limit cannot be negative.")
        budget = self._ledger_writer.ensure_budget(
            session.owner_id,
            account_id,
            month_start(month),
        )
        total_limit = value if value > 0 else None
        self._ledger_writer.update_budget_total(budget.id, total_limit)
        self._logger.info(
            f"Total limit for budget {budget.id} set to {total_limit}"
        )
        return replace(budget, total_limit=total_limit)

    def set_category_limit(
        self,
        session: SessionContext,
        account_id: str,
        month: date,
        category_id: str,
        amount,
    ) -> BudgetLimit:
        """Set the limit of a category for the month.

        Raises:
            ValueError: If the account or category is missing, or the
                amount is not positive.
        """
        if not account_id:
            raise ValueError("No active account. Run the bootstrap first.")
        if not category_id or not str(category_id).strip():
            raise ValueError("Select a category.")
        value = coerce_decimal(amount)
        if value <= 0:
            raise ValueError("Enter a limit greater than 0.")
        budget = self._ledger_writer.ensure_budget(
            session.owner_id,
            account_id,
            month_start(month),
        )
        limit = self._ledger_writer.upsert_budget_limit(
            budget.id,
            str(category_id).strip(),
            value,
        )
        self._logger.info(
            f"Category limit {limit.category_id} for budget {budget.id} "
            f"set to {value}"
        )
        return limit


__all__ = ["ManageBudgetUseCase"]
