"""Tests for the budget threshold policy, money formatting and validation."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from biyu.domain.models import Transaction
from biyu.domain.policies.budget_thresholds import (
    classify_budget_usage,
    usage_ratio,
)
from biyu.domain.services.formatting import format_money
from biyu.domain.services.validation import validate_transactions


def test_classify_budget_usage_thresholds():
    limit = Decimal("100")

    assert classify_budget_usage(Decimal("79.99"), limit) == "ok"
    assert classify_budget_usage(Decimal("80"), limit) == "warning"
    assert classify_budget_usage(Decimal("99.99"), limit) == "warning"
    assert classify_budget_usage(Decimal("100"), limit) == "danger"
    assert classify_budget_usage(Decimal("500"), Decimal("0")) == "neutral"


def test_usage_ratio_is_none_without_positive_limit():
    assert usage_ratio(Decimal("10"), Decimal("-1")) is None
    assert usage_ratio(Decimal("10"), None) is None
    assert usage_ratio(Decimal("10"), Decimal("40")) == Decimal("0.25")


def test_format_money_zero_decimal_currency():
    assert format_money(Decimal("1250000.4"), "COP") == "$1,250,000 COP"
    assert format_money(None, "cop") == "$0 COP"


def test_format_money_two_decimal_currency():
    assert format_money(Decimal("1234.5"), "USD") == "$1,234.50 USD"


def test_validate_transactions_warns_about_bad_rows():
    """Bad rows are reported but not removed."""
    logger = MagicMock()
    rows = [
        Transaction(
            id="neg",
            owner_id="o",
            account_id="a",
            category_id=None,
            kind="expense",
            amount=Decimal("-5"),
            occurred_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ),
        Transaction(
            id="odd",
            owner_id="o",
            account_id="a",
            category_id=None,
            kind="transfer",
            amount=Decimal("5"),
            occurred_at=None,
        ),
    ]

    validate_transactions(rows, logger)

    messages = [call.args[0] for call in logger.warning.call_args_list]
    assert len(messages) == 3
    assert "negative amount" in messages[0]
    assert "unknown kind" in messages[1]
    assert "no occurred_at" in messages[2]
