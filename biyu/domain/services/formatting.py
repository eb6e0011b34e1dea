"""Money formatting helpers shared by alerts and adapters."""

from decimal import ROUND_HALF_UP, Decimal

from biyu.utils.decimal_utils import coerce_decimal

_ZERO_DECIMAL_CURRENCIES = ("COP", "CLP", "JPY", "KRW", "PYG")


def format_money(value, currency_code: str) -> str:
    """Format an amount with its currency code.

    Zero-decimal currencies (such as COP) are rounded to whole units.

    Args:
        value: Amount to format.
        currency_code: ISO currency code.

    Returns:
        str: Formatted amount, e.g. ``$1,250,000 COP``.
    """
    amount = coerce_decimal(value)
    code = (currency_code or "").upper()
    if code in _ZERO_DECIMAL_CURRENCIES:
        rounded = amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return f"${rounded:,.0f} {code}".strip()
    return f"${amount:,.2f} {code}".strip()


__all__ = ["format_money"]
