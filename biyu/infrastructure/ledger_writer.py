"""SQL-backed writer for budgets and transactions."""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from biyu.application.ports.database import DatabaseEnginePort
from biyu.application.ports.ledger_repository import LedgerUnavailableError
from biyu.application.ports.ledger_writer import LedgerWriterPort
from biyu.domain.models import Budget, BudgetLimit, Transaction
from biyu.domain.services.periods import month_label
from biyu.infrastructure.ledger_rows import (
    map_budget,
    map_budget_limit,
    map_transaction,
)


class SqlAlchemyLedgerWriter(LedgerWriterPort):
    """Writer persisting user edits to the ledger tables."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the writer.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def bootstrap_owner(self, owner_id: str) -> None:
        query = text("SELECT bootstrap_user(:owner_id)")
        try:
            with self._db_port.get_engine().begin() as conn:
                conn.execute(query, {"owner_id": owner_id})
        except SQLAlchemyError as exc:
            raise LedgerUnavailableError("Failed to bootstrap owner") from exc

    def ensure_budget(
        self,
        owner_id: str,
        account_id: str,
        month: date,
    ) -> Budget:
        params = {
            "owner_id": owner_id,
            "account_id": account_id,
            "month": month_label(month),
        }
        insert = text(
            """
            INSERT INTO budgets (user_id, account_id, month, total_limit_cop)
            VALUES (:owner_id, :account_id, :month, NULL)
            ON CONFLICT (user_id, account_id, month) DO NOTHING
            """
        )
        select = text(
            """
            SELECT id, user_id, account_id, month, total_limit_cop
            FROM budgets
            WHERE user_id = :owner_id
              AND account_id = :account_id
              AND month = :month
            LIMIT 1
            """
        )
        try:
            with self._db_port.get_engine().begin() as conn:
                conn.execute(insert, params)
                row = conn.execute(select, params).first()
        except SQLAlchemyError as exc:
            raise LedgerUnavailableError("Failed to save budget") from exc
        if row is None:
            raise LedgerUnavailableError("Budget row missing after upsert")
        return map_budget(row)

    def update_budget_total(
        self,
        budget_id: str,
        total_limit: Decimal | None,
    ) -> None:
        query = text(
            """
            UPDATE budgets
            SET total_limit_cop = :total_limit
            WHERE id = :budget_id
            """
        )
        self._execute(
            "budget total",
            query,
            {"budget_id": budget_id, "total_limit": total_limit},
        )

    def upsert_budget_limit(
        self,
        budget_id: str,
        category_id: str,
        limit_amount: Decimal,
    ) -> BudgetLimit:
        params = {
            "budget_id": budget_id,
            "category_id": category_id,
            "limit_amount": limit_amount,
        }
        existing = text(
            """
            SELECT id
            FROM budget_limits
            WHERE budget_id = :budget_id AND category_id = :category_id
            LIMIT 1
            """
        )
        update = text(
            """
            UPDATE budget_limits
            SET limit_cop = :limit_amount
            WHERE id = :limit_id
            RETURNING id, budget_id, category_id, limit_cop
            """
        )
        insert = text(
            """
            INSERT INTO budget_limits (budget_id, category_id, limit_cop)
            VALUES (:budget_id, :category_id, :limit_amount)
            RETURNING id, budget_id, category_id, limit_cop
            """
        )
        try:
            with self._db_port.get_engine().begin() as conn:
                found = conn.execute(existing, params).first()
                if found is not None:
                    row = conn.execute(
                        update,
                        {**params, "limit_id": found.id},
                    ).first()
                else:
                    row = conn.execute(insert, params).first()
        except SQLAlchemyError as exc:
            raise LedgerUnavailableError("Failed to save budget limit") from exc
        return map_budget_limit(row)

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
        query = text(
            """
            INSERT INTO transactions (
                user_id, account_id, category_id, type, amount_cop, note,
                occurred_at, status
            )
            VALUES (
                :owner_id, :account_id, :category_id, :kind, :amount, :note,
                :occurred_at, :status
            )
            RETURNING id, user_id, account_id, category_id, type, amount_cop,
                      note, occurred_at, status, created_at
            """
        )
        params = {
            "owner_id": owner_id,
            "account_id": account_id,
            "category_id": category_id,
            "kind": kind,
            "amount": amount,
            "note": description,
            "occurred_at": occurred_at,
            "status": status,
        }
        try:
            with self._db_port.get_engine().begin() as conn:
                row = conn.execute(query, params).first()
        except SQLAlchemyError as exc:
            raise LedgerUnavailableError("Failed to save transaction") from exc
        return map_transaction(row)

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
        query = text(
            """
            UPDATE transactions
            SET category_id = :category_id,
                type = :kind,
                amount_cop = :amount,
                note = :note,
                occurred_at = :occurred_at
            WHERE id = :transaction_id AND user_id = :owner_id
            """
        )
        self._execute(
            "transaction",
            query,
            {
                "owner_id": owner_id,
                "transaction_id": transaction_id,
                "category_id": category_id,
                "kind": kind,
                "amount": amount,
                "note": description,
                "occurred_at": occurred_at,
            },
        )

    def delete_transaction(self, owner_id: str, transaction_id: str) -> None:
        query = text(
            """
            DELETE FROM transactions
            WHERE id = :transaction_id AND user_id = :owner_id
            """
        )
        self._execute(
            "transaction",
            query,
            {"owner_id": owner_id, "transaction_id": transaction_id},
        )

    def _execute(self, label: str, query, params: dict) -> None:
        try:
            with self._db_port.get_engine().begin() as conn:
                conn.execute(query, params)
        except SQLAlchemyError as exc:
            raise LedgerUnavailableError(f"Failed to save {label}") from exc


__all__ = ["SqlAlchemyLedgerWriter"]
