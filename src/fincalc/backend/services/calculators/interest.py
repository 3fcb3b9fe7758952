"""Simple and compound interest calculators."""

from __future__ import annotations

from dataclasses import dataclass

COMPOUNDING_FREQUENCIES = {1: "yearly", 4: "quarterly", 12: "monthly"}


@dataclass(frozen=True)
class InterestRow:
    year: int
    principal: float
    interest: float
    amount: float


@dataclass(frozen=True)
class InterestResult:
    principal: float
    interest: float
    amount: float
    compound: bool
    frequency: int
    breakdown: tuple[InterestRow, ...]


def compound_amount(
    principal: float, annual_rate_percent: float, years: float, frequency: int = 1
) -> float:
    """Return ``P * (1 + R / (100 f)) ** (f t)``; ``f`` below one means yearly."""

    frequency = max(1, int(frequency))
    return principal * (1 + annual_rate_percent / (100 * frequency)) ** (frequency * years)


def simple_interest(principal: float, annual_rate_percent: float, years: float) -> float:
    """Return ``P * R * t / 100``."""

    return principal * annual_rate_percent * years / 100


def calculate_simple_interest(
    principal: float,
    annual_rate_percent: float,
    years: int,
    compound: bool = False,
    frequency: int = 1,
) -> InterestResult:
    """Interest earned over ``years``, simple by default or compounded on request."""

    def _amount(elapsed: float) -> float:
        if compound:
            return compound_amount(principal, annual_rate_percent, elapsed, frequency)
        return principal + simple_interest(principal, annual_rate_percent, elapsed)

    breakdown = []
    for year in range(1, int(years) + 1):
        amount = _amount(year)
        breakdown.append(
            InterestRow(year=year, principal=principal, interest=amount - principal, amount=amount)
        )

    amount = _amount(years)
    return InterestResult(
        principal=principal,
        interest=amount - principal,
        amount=amount,
        compound=compound,
        frequency=frequency if compound else 1,
        breakdown=tuple(breakdown),
    )


def calculate_compound_interest(
    principal: float, annual_rate_percent: float, years: int, frequency: int = 1
) -> InterestResult:
    return calculate_simple_interest(
        principal, annual_rate_percent, years, compound=True, frequency=frequency
    )


__all__ = [
    "COMPOUNDING_FREQUENCIES",
    "InterestResult",
    "InterestRow",
    "calculate_compound_interest",
    "calculate_simple_interest",
    "compound_amount",
    "simple_interest",
]
