# core/reporting/formatting.py
from __future__ import annotations

from decimal import Decimal

Number = Decimal | float | int


def fmt_money(x: Number | None, currency_symbol: str = "") -> str:
    """
    Format money with thousands separator and 2 decimals.
    Example: 1234567.8, '$' -> '$ 1,234,567.80'
    """
    if x is None:
        return "-"
    return f"{currency_symbol} {Decimal(str(x)):,.2f}".strip()


def fmt_ratio(x: Number | None) -> str:
    if x is None:
        return "-"
    return f"{Decimal(str(x)):.2f}"


def fmt_percent(value: Number | None, decimals: int = 1) -> str:
    """
    Format percent value (0-100) with % sign.
    Example: 75.3 -> '75.3 %'
    """
    if value is None:
        return "-"
    fmt = f"{{:.{decimals}f}} %"
    return fmt.format(Decimal(str(value)))


def fmt_days(value: int | None) -> str:
    if value is None:
        return "-"
    return f"{int(value):+d} d" if value else "0 d"


CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "IDR": "Rp",
}


def currency_symbol_from_code(code: str | None) -> str:
    if not code:
        return ""
    return CURRENCY_SYMBOLS.get(code.upper(), "")


__all__ = [
    "fmt_money",
    "fmt_ratio",
    "fmt_percent",
    "fmt_days",
    "currency_symbol_from_code",
]
