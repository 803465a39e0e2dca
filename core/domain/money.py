from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

ZERO = Decimal("0")
ONE = Decimal("1")
CENT = Decimal("0.01")
INDEX_PLACES = Decimal("0.0001")

Amount = Decimal | int | float | str


def to_decimal(value: Amount | None) -> Decimal:
    """
    Coerce a caller-supplied amount into Decimal.
    Floats go through str() so 0.1 stays 0.1 instead of its binary expansion.
    None and blank strings count as zero.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Boolean is not a monetary amount.")
    if isinstance(value, int):
        return Decimal(value)
    text = str(value).strip()
    if not text:
        return ZERO
    try:
        return Decimal(text)
    except InvalidOperation as exc:
        raise TypeError(f"Not a numeric amount: {value!r}") from exc


def clamp(value: Decimal, low: Decimal, high: Decimal) -> Decimal:
    return max(low, min(high, value))


def clamp01(value: Decimal) -> Decimal:
    return clamp(value, ZERO, ONE)


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_index(value: Decimal) -> Decimal:
    return value.quantize(INDEX_PLACES, rounding=ROUND_HALF_UP)


def round_whole(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


__all__ = [
    "ZERO",
    "ONE",
    "Amount",
    "to_decimal",
    "clamp",
    "clamp01",
    "round_money",
    "round_index",
    "round_whole",
]
