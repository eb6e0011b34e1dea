"""Composition root for wiring infrastructure adapters."""

from biyu.application.ports.database import DatabaseEnginePort
from biyu.application.ports.ledger_repository import LedgerRepositoryPort
from biyu.application.ports.ledger_writer import LedgerWriterPort
from biyu.application.use_cases.bootstrap_owner import BootstrapOwnerUseCase
from biyu.application.use_cases.get_accounts import (
    GetAccountsUseCase,
    ListCategoriesUseCase,
)
from biyu.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from biyu.application.use_cases.manage_budget import ManageBudgetUseCase
from biyu.application.use_cases.manage_transactions import (
    ManageTransactionsUseCase,
)
from biyu.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from biyu.infrastructure.ledger_repository import SqlAlchemyLedgerRepository
from biyu.infrastructure.ledger_writer import SqlAlchemyLedgerWriter
from biyu.infrastructure.logging.logger import get_app_logger
from biyu.infrastructure.settings import BiyuSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerRepositoryPort:
    """Return the ledger repository for dashboard reads."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerRepository(resolved_db)


def build_ledger_writer(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerWriterPort:
    """Return the ledger writer for user edits."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerWriter(resolved_db)


def build_dashboard_summary_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: BiyuSettings | None = None,
) -> GetDashboardSummaryUseCase:
    """Return the dashboard use case configured from settings."""
    resolved_settings = settings or BiyuSettings.from_env()
    return GetDashboardSummaryUseCase(
        ledger_repository=build_ledger_repository(db_port),
        logger=get_app_logger(),
        currency_code=resolved_settings.currency_code,
        uncategorized_id=resolved_settings.uncategorized_category_id,
        trend_days=resolved_settings.trend_days,
        breakdown_limit=resolved_settings.breakdown_limit,
        recent_limit=resolved_settings.recent_limit,
    )


def build_accounts_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetAccountsUseCase:
    """Return the accounts listing use case."""
    return GetAccountsUseCase(build_ledger_repository(db_port))


def build_categories_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: BiyuSettings | None = None,
) -> ListCategoriesUseCase:
    """Return the categories listing use case."""
    resolved_settings = settings or BiyuSettings.from_env()
    return ListCategoriesUseCase(
        build_ledger_repository(db_port),
        uncategorized_id=resolved_settings.uncategorized_category_id,
    )


def build_manage_budget_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> ManageBudgetUseCase:
    """Return the budget editing use case."""
    return ManageBudgetUseCase(
        build_ledger_writer(db_port),
        logger=get_app_logger(),
    )


def build_manage_transactions_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: BiyuSettings | None = None,
) -> ManageTransactionsUseCase:
    """Return the transaction editing use case."""
    resolved_settings = settings or BiyuSettings.from_env()
    return ManageTransactionsUseCase(
        build_ledger_writer(db_port),
        logger=get_app_logger(),
        uncategorized_id=resolved_settings.uncategorized_category_id,
    )


def build_bootstrap_owner_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> BootstrapOwnerUseCase:
    """Return the owner bootstrap use case."""
    return BootstrapOwnerUseCase(
        build_ledger_writer(db_port),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_repository",
    "build_ledger_writer",
    "build_dashboard_summary_use_case",
    "build_accounts_use_case",
    "build_categories_use_case",
    "build_manage_budget_use_case",
    "build_manage_transactions_use_case",
    "build_bootstrap_owner_use_case",
]
