"""Use case to compute the dashboard summary of an account."""

from dataclasses import replace
from datetime import date, datetime, timezone

from biyu.application.ports.ledger_repository import (
    LedgerRepositoryPort,
    LedgerUnavailableError,
)
from biyu.domain.constants import (
    DEFAULT_BREAKDOWN_LIMIT,
    DEFAULT_CURRENCY,
    DEFAULT_RECENT_LIMIT,
    DEFAULT_TREND_DAYS,
    NO_ACCOUNTS_MESSAGE,
    UNCATEGORIZED_CATEGORY_ID,
)
from biyu.domain.models import (
    Account,
    AlertItem,
    DashboardSummary,
    SessionContext,
)
from biyu.domain.services.aggregation import assemble_summary
from biyu.domain.services.validation import validate_transactions
from biyu.infrastructure.logging.logger import get_app_logger


class GetDashboardSummaryUseCase:
    """Fetch ledger rows for an account and aggregate them for display."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        currency_code: str = DEFAULT_CURRENCY,
        uncategorized_id: str = UNCATEGORIZED_CATEGORY_ID,
        trend_days: int = DEFAULT_TREND_DAYS,
        breakdown_limit: int = DEFAULT_BREAKDOWN_LIMIT,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing ledger rows.
            logger: Optional logger compatible with logging.Logger-like API.
            currency_code: Fallback currency when an account has none.
            uncategorized_id: Sentinel id for uncategorized spending.
            trend_days: Length of the trailing trend window.
            breakdown_limit: Number of categories in the breakdown.
            recent_limit: Number of recent transactions returned.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._currency_code = currency_code
        self._uncategorized_id = uncategorized_id
        self._trend_days = trend_days
        self._breakdown_limit = breakdown_limit
        self._recent_limit = recent_limit

    def execute(
        self,
        session: SessionContext,
        account_id: str | None = None,
        month: date | None = None,
        now: datetime | None = None,
        recent_scope: str = "all",
    ) -> DashboardSummary:
        """Return the dashboard summary for an account and month.

        Args:
            session: Identity of the owner.
            account_id: Account to summarize; the first account by name is
                used when omitted.
            month: Any day of the month to summarize (defaults to now).
            now: Reference instant for the trend window (defaults to the
                current UTC time).
            recent_scope: "all" or "month" for the recent transactions.

        Returns:
            DashboardSummary: Aggregated figures; zeroed when the owner has
            no account yet.

        Raises:
            LedgerUnavailableError: If the ledger cannot be read.
            ValueError: If ``account_id`` does not belong to the owner.
        """
        reference = now or datetime.now(timezone.utc)
        target_month = month or reference.date()
        owner_id = session.owner_id

        try:
            accounts = self._ledger_repository.fetch_accounts(owner_id)
            if not accounts:
                self._logger.info(f"No accounts found for owner {owner_id}")
                return self._empty_summary(target_month, reference)

            account = self._select_account(accounts, account_id)
            categories = self._ledger_repository.fetch_categories(owner_id)
            transactions = self._ledger_repository.fetch_transactions(
                owner_id,
                account.id,
            )
            budget = self._ledger_repository.fetch_budget(
                owner_id,
                account.id,
                target_month,
            )
            budget_limits = (
                self._ledger_repository.fetch_budget_limits(budget.id)
                if budget
                else []
            )
        except LedgerUnavailableError as exc:
            self._logger.error(
                f"Dashboard data unavailable for owner {owner_id}: {exc}"
            )
            raise

        self._logger.info(
            f"Fetched {len(transactions)} transactions, "
            f"{len(categories)} categories and {len(budget_limits)} limits "
            f"for account {account.id}"
        )
        validate_transactions(transactions, self._logger)

        summary = assemble_summary(
            transactions,
            categories,
            budget_limits,
            month=target_month,
            now=reference,
            total_limit=budget.total_limit if budget else None,
            currency_code=account.currency_code or self._currency_code,
            uncategorized_id=self._uncategorized_id,
            trend_days=self._trend_days,
            breakdown_limit=self._breakdown_limit,
            recent_limit=self._recent_limit,
            recent_scope=recent_scope,
            account_id=account.id,
        )
        self._logger.info(
            f"Dashboard computed: balance={summary.total_balance}, "
            f"income={summary.monthly_income}, "
            f"expense={summary.monthly_expense}, "
            f"alerts={len(summary.alerts)}"
        )
        return summary

    @staticmethod
    def _select_account(
        accounts: list[Account],
        account_id: str | None,
    ) -> Account:
        if not account_id:
            return accounts[0]
        for account in accounts:
            if account.id == account_id:
                return account
        raise ValueError(f"Unknown account: {account_id}")

    def _empty_summary(
        self,
        month: date,
        now: datetime,
    ) -> DashboardSummary:
        summary = assemble_summary(
            [],
            [],
            [],
            month=month,
            now=now,
            currency_code=self._currency_code,
            uncategorized_id=self._uncategorized_id,
        )
        return replace(
            summary,
            alerts=[
                AlertItem(key="ok", severity="ok", message=NO_ACCOUNTS_MESSAGE)
            ],
        )


__all__ = ["GetDashboardSummaryUseCase", "DashboardSummary"]
