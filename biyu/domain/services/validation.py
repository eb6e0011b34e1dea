"""Domain validation helpers."""

from collections.abc import Iterable
from logging import Logger

from biyu.domain.models import Transaction
from biyu.domain.services.normalization import normalize_kind
from biyu.utils.decimal_utils import coerce_decimal


def validate_transactions(
    transactions: Iterable[Transaction],
    logger: Logger,
) -> None:
    """Warn about rows that break ledger conventions.

    Aggregation still runs on such rows; negative amounts keep their sign
    and unknown kinds contribute nothing.

    Args:
        transactions: Transactions fetched from the repository.
        logger: Logger used for warnings.
    """
    for transaction in transactions:
        if coerce_decimal(transaction.amount) < 0:
            logger.warning(
                f"Transaction {transaction.id} has a negative amount: "
                f"{transaction.amount}"
            )
        if normalize_kind(transaction.kind) is None:
            logger.warning(
                f"Transaction {transaction.id} has an unknown kind: "
                f"{transaction.kind!r}"
            )
        if transaction.occurred_at is None:
            logger.warning(
                f"Transaction {transaction.id} has no occurred_at timestamp"
            )


__all__ = ["validate_transactions"]
