"""Utility helpers for calculator modules."""

from __future__ import annotations


def percent_to_fraction(value: float) -> float:
    """Convert a 0-100 percentage into a decimal fraction."""

    return value / 100


def monthly_rate(annual_rate_percent: float) -> float:
    """Return the monthly period rate for an annual percentage rate."""

    return annual_rate_percent / 100 / 12


def round_currency(value: float) -> float:
    """Round monetary amounts to two decimals."""

    return round(value, 2)


def round_rate(value: float) -> float:
    """Round rate values to four decimals."""

    return round(value, 4)


__all__ = ["monthly_rate", "percent_to_fraction", "round_currency", "round_rate"]
