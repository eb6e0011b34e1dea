"""SQL-backed repository for ledger reads."""

from datetime import date, datetime

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from biyu.application.ports.database import DatabaseEnginePort
from biyu.application.ports.ledger_repository import (
    LedgerRepositoryPort,
    LedgerUnavailableError,
)
from biyu.domain.models import (
    Account,
    Budget,
    BudgetLimit,
    Category,
    Transaction,
)
from biyu.domain.services.periods import month_label
from biyu.infrastructure.ledger_rows import (
    map_account,
    map_budget,
    map_budget_limit,
    map_category,
    map_transaction,
)


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Repository reading the ledger tables through SQLAlchemy."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def fetch_accounts(self, owner_id: str) -> list[Account]:
        query = text(
            """
            SELECT id, user_id, name, currency, balance
            FROM accounts
            WHERE user_id = :owner_id
            ORDER BY name
            """
        )
        rows = self._fetch_all("accounts", query, {"owner_id": owner_id})
        return [map_account(row) for row in rows]

    def fetch_categories(self, owner_id: str) -> list[Category]:
        query = text(
            """
            SELECT id, user_id, name, icon
            FROM categories
            WHERE user_id = :owner_id
            ORDER BY name
            """
        )
        rows = self._fetch_all("categories", query, {"owner_id": owner_id})
        return [map_category(row) for row in rows]

    def fetch_transactions(
        self,
        owner_id: str,
        account_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Transaction]:
        query = self._build_transactions_query(start, end)
        params: dict[str, object] = {
            "owner_id": owner_id,
            "account_id": account_id,
        }
        if start:
            params["start"] = start
        if end:
            params["end"] = end
        rows = self._fetch_all("transactions", query, params)
        return [map_transaction(row) for row in rows]

    def fetch_budget(
        self,
        owner_id: str,
        account_id: str,
        month: date,
    ) -> Budget | None:
        query = text(
            """
            SELECT id, user_id, account_id, month, total_limit_cop
            FROM budgets
            WHERE user_id = :owner_id
              AND account_id = :account_id
              AND month = :month
            LIMIT 1
            """
        )
        rows = self._fetch_all(
            "budgets",
            query,
            {
                "owner_id": owner_id,
                "account_id": account_id,
                "month": month_label(month),
            },
        )
        if not rows:
            return None
        return map_budget(rows[0])

    def fetch_budget_limits(self, budget_id: str) -> list[BudgetLimit]:
        query = text(
            """
            SELECT bl.id, bl.budget_id, bl.category_id, bl.limit_cop,
                   c.name AS category_name
            FROM budget_limits bl
            LEFT JOIN categories c ON c.id = bl.category_id
            WHERE bl.budget_id = :budget_id
            ORDER BY bl.id
            """
        )
        rows = self._fetch_all("budget limits", query, {"budget_id": budget_id})
        return [map_budget_limit(row) for row in rows]

    def _fetch_all(self, label: str, query, params: dict) -> list:
        """Run a read query and wrap driver failures.

        Args:
            label: Human readable name of what is being read.
            query: SQLAlchemy text clause.
            params: Bound parameters.

        Returns:
            list: Result rows.

        Raises:
            LedgerUnavailableError: If the database cannot be reached or the
                query fails.
        """
        try:
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                return list(conn.execute(query, params).all())
        except SQLAlchemyError as exc:
            raise LedgerUnavailableError(f"Failed to load {label}") from exc

    @staticmethod
    def _build_transactions_query(
        start: datetime | None,
        end: datetime | None,
    ):
        base_sql = """
        SELECT id, user_id, account_id, category_id, type, amount_cop, note,
               occurred_at, status, created_at
        FROM transactions
        WHERE user_id = :owner_id AND account_id = :account_id
        """
        if start:
            base_sql += " AND occurred_at >= :start"
        if end:
            base_sql += " AND occurred_at < :end"
        base_sql += " ORDER BY occurred_at DESC, created_at DESC"
        return text(base_sql)


__all__ = ["SqlAlchemyLedgerRepository"]
