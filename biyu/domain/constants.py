"""Domain constants for spending aggregation."""

UNCATEGORIZED_CATEGORY_ID = "uncategorized"
UNCATEGORIZED_CATEGORY_NAME = "Uncategorized"
UNKNOWN_CATEGORY_NAME = "Category"

POSTED_STATUS = "posted"

CREDIT_KINDS = ("credit", "income")
DEBIT_KINDS = ("debit", "expense")

DEFAULT_CURRENCY = "COP"
DEFAULT_RECENT_LIMIT = 10
DEFAULT_TREND_DAYS = 30
DEFAULT_BREAKDOWN_LIMIT = 8

NO_ALERTS_MESSAGE = "No alerts for now."
NO_ACCOUNTS_MESSAGE = "No accounts yet."


__all__ = [
    "UNCATEGORIZED_CATEGORY_ID",
    "UNCATEGORIZED_CATEGORY_NAME",
    "UNKNOWN_CATEGORY_NAME",
    "POSTED_STATUS",
    "CREDIT_KINDS",
    "DEBIT_KINDS",
    "DEFAULT_CURRENCY",
    "DEFAULT_RECENT_LIMIT",
    "DEFAULT_TREND_DAYS",
    "DEFAULT_BREAKDOWN_LIMIT",
    "NO_ALERTS_MESSAGE",
    "NO_ACCOUNTS_MESSAGE",
]
