"""Display formatting for rupee amounts and percentages."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

CURRENCY_SYMBOL = "₹"
CRORE = 10_000_000
LAKH = 100_000


def _round_half_up(value: float, places: int = 0) -> Decimal:
    exponent = Decimal(1).scaleb(-places)
    return Decimal(repr(float(value))).quantize(exponent, rounding=ROUND_HALF_UP)


def group_indian(digits: str) -> str:
    """Insert separators the Indian way: ``12,34,56,789``."""

    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_number(value: float, decimals: int = 0) -> str:
    rounded = _round_half_up(value, decimals)
    negative = rounded < 0
    text = f"{abs(rounded):.{decimals}f}"
    whole, _, fraction = text.partition(".")
    grouped = group_indian(whole)
    if fraction:
        grouped = f"{grouped}.{fraction}"
    return f"-{grouped}" if negative else grouped


def format_currency(value: float, symbol: str = CURRENCY_SYMBOL) -> str:
    """Format ``value`` as whole rupees, e.g. ``₹12,34,568``."""

    rounded = _round_half_up(value)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{group_indian(str(abs(int(rounded))))}"


def format_percent(value: float, decimals: int = 2) -> str:
    """Format a 0-100 percentage without trailing zeros, e.g. ``8.5%``."""

    text = f"{_round_half_up(value, decimals):.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return f"{text}%"


def format_compact(value: float, symbol: str = CURRENCY_SYMBOL) -> str:
    """Abbreviate large amounts in crores or lakhs (``1.25 Cr``, ``4.50 L``)."""

    magnitude = abs(value)
    sign = "-" if value < 0 else ""
    if magnitude >= CRORE:
        return f"{sign}{magnitude / CRORE:.2f} Cr"
    if magnitude >= LAKH:
        return f"{sign}{magnitude / LAKH:.2f} L"
    return format_currency(value, symbol)


__all__ = [
    "CURRENCY_SYMBOL",
    "format_compact",
    "format_currency",
    "format_number",
    "format_percent",
    "group_indian",
]
