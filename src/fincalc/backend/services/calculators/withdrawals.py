"""Systematic withdrawal plan simulation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .utils import monthly_rate

SustainabilityStatus = Literal[
    "not_sustainable",
    "highly_sustainable",
    "moderately_sustainable",
    "marginally_sustainable",
]


@dataclass(frozen=True)
class SwpMonth:
    month: int
    balance: float
    withdrawn: float
    returns: float


@dataclass(frozen=True)
class SwpYear:
    year: int
    balance: float
    withdrawn: float
    cumulative_withdrawn: float
    returns: float


@dataclass(frozen=True)
class Sustainability:
    withdrawal_rate: float
    status: SustainabilityStatus


@dataclass(frozen=True)
class SwpResult:
    initial_investment: float
    monthly_withdrawal: float
    total_withdrawn: float
    final_corpus: float
    monthly: tuple[SwpMonth, ...]
    yearly: tuple[SwpYear, ...]
    sustainability: Sustainability


def simulate_swp(
    initial_investment: float,
    monthly_withdrawal: float,
    annual_return_percent: float,
    years: int,
    *,
    sample_every: int = 3,
    highly_sustainable_factor: float = 0.7,
    moderately_sustainable_factor: float = 0.9,
) -> SwpResult:
    """Grow the corpus by one month of returns, then withdraw, for every month.

    The balance is not floored: when withdrawals outpace returns the corpus
    keeps falling below zero.
    """

    rate = monthly_rate(annual_return_percent)
    total_months = int(years) * 12

    balance = initial_investment
    total_withdrawn = 0.0
    year_returns = 0.0
    monthly: list[SwpMonth] = []
    yearly: list[SwpYear] = []

    for month in range(1, total_months + 1):
        monthly_return = balance * rate
        balance += monthly_return
        balance -= monthly_withdrawal
        total_withdrawn += monthly_withdrawal
        year_returns += monthly_return

        if month == 1 or month % sample_every == 0 or month == total_months:
            monthly.append(
                SwpMonth(
                    month=month,
                    balance=balance,
                    withdrawn=total_withdrawn,
                    returns=monthly_return,
                )
            )

        if month % 12 == 0:
            yearly.append(
                SwpYear(
                    year=month // 12,
                    balance=balance,
                    withdrawn=monthly_withdrawal * 12,
                    cumulative_withdrawn=total_withdrawn,
                    returns=year_returns,
                )
            )
            year_returns = 0.0

    return SwpResult(
        initial_investment=initial_investment,
        monthly_withdrawal=monthly_withdrawal,
        total_withdrawn=total_withdrawn,
        final_corpus=balance,
        monthly=tuple(monthly),
        yearly=tuple(yearly),
        sustainability=withdrawal_sustainability(
            initial_investment,
            monthly_withdrawal,
            annual_return_percent,
            balance,
            highly_sustainable_factor=highly_sustainable_factor,
            moderately_sustainable_factor=moderately_sustainable_factor,
        ),
    )


def withdrawal_sustainability(
    initial_investment: float,
    monthly_withdrawal: float,
    annual_return_percent: float,
    final_corpus: float,
    *,
    highly_sustainable_factor: float = 0.7,
    moderately_sustainable_factor: float = 0.9,
) -> Sustainability:
    """Classify the annual withdrawal rate against the expected return."""

    annual_withdrawal = monthly_withdrawal * 12
    if initial_investment > 0:
        rate = annual_withdrawal / initial_investment * 100
    else:
        rate = 0.0

    status: SustainabilityStatus
    if final_corpus <= 0:
        status = "not_sustainable"
    elif rate <= annual_return_percent * highly_sustainable_factor:
        status = "highly_sustainable"
    elif rate <= annual_return_percent * moderately_sustainable_factor:
        status = "moderately_sustainable"
    else:
        status = "marginally_sustainable"

    return Sustainability(withdrawal_rate=rate, status=status)


__all__ = [
    "Sustainability",
    "SustainabilityStatus",
    "SwpMonth",
    "SwpResult",
    "SwpYear",
    "simulate_swp",
    "withdrawal_sustainability",
]
