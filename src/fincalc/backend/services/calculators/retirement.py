"""Retirement corpus projection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .utils import percent_to_fraction

Phase = Literal["accumulation", "retirement"]


@dataclass(frozen=True)
class RetirementYear:
    age: int
    phase: Phase
    savings: float
    expenses: float
    contribution: float
    returns: float


@dataclass(frozen=True)
class RetirementResult:
    years_to_retirement: int
    years_in_retirement: int
    corpus_at_retirement: float
    required_corpus: float
    monthly_expense_at_retirement: float
    adequate: bool
    shortfall: float
    additional_monthly_savings: float
    projection: tuple[RetirementYear, ...]


def required_corpus(
    annual_expense: float,
    post_return_percent: float,
    inflation_percent: float,
    years_in_retirement: int,
) -> float:
    """Corpus that funds ``annual_expense`` for the whole retirement.

    Uses the present value of an annuity at the inflation-adjusted return;
    when inflation matches or beats the return, the expenses are simply
    summed.
    """

    if years_in_retirement <= 0:
        return 0.0
    real_rate = percent_to_fraction(post_return_percent - inflation_percent)
    if real_rate <= 0:
        return annual_expense * years_in_retirement
    return annual_expense / real_rate * (1 - (1 / (1 + real_rate)) ** years_in_retirement)


def additional_monthly_savings(
    shortfall: float, pre_return_percent: float, years_to_retirement: int
) -> float:
    """Extra monthly saving that grows into ``shortfall`` by retirement."""

    if shortfall <= 0 or years_to_retirement <= 0:
        return 0.0
    rate = percent_to_fraction(pre_return_percent)
    if rate == 0:
        factor = float(years_to_retirement)
    else:
        factor = ((1 + rate) ** years_to_retirement - 1) / rate
    return shortfall / factor / 12


def calculate_retirement(
    current_age: int,
    retirement_age: int,
    life_expectancy: int,
    current_savings: float,
    monthly_savings: float,
    monthly_expenses: float,
    pre_return_percent: float,
    post_return_percent: float,
    inflation_percent: float,
) -> RetirementResult:
    years_to_retirement = max(0, int(retirement_age) - int(current_age))
    years_in_retirement = max(0, int(life_expectancy) - int(retirement_age))
    pre_rate = percent_to_fraction(pre_return_percent)
    post_rate = percent_to_fraction(post_return_percent)
    inflation = percent_to_fraction(inflation_percent)
    annual_savings = monthly_savings * 12

    projection: list[RetirementYear] = []
    corpus = current_savings
    for year in range(1, years_to_retirement + 1):
        corpus = corpus * (1 + pre_rate) + annual_savings
        projection.append(
            RetirementYear(
                age=int(current_age) + year,
                phase="accumulation",
                savings=corpus,
                expenses=0.0,
                contribution=annual_savings,
                # approximation kept for continuity with published figures
                returns=corpus * pre_rate - annual_savings * pre_rate / 2,
            )
        )

    monthly_expense = monthly_expenses * (1 + inflation) ** years_to_retirement
    required = required_corpus(
        monthly_expense * 12, post_return_percent, inflation_percent, years_in_retirement
    )
    adequate = corpus >= required
    shortfall = 0.0 if adequate else required - corpus

    remaining = corpus
    expense = monthly_expense * 12
    for year in range(1, years_in_retirement + 1):
        remaining = remaining * (1 + post_rate) - expense
        projection.append(
            RetirementYear(
                age=int(retirement_age) + year,
                phase="retirement",
                savings=max(0.0, remaining),
                expenses=expense,
                contribution=0.0,
                returns=remaining * post_rate,
            )
        )
        expense *= 1 + inflation

    return RetirementResult(
        years_to_retirement=years_to_retirement,
        years_in_retirement=years_in_retirement,
        corpus_at_retirement=corpus,
        required_corpus=required,
        monthly_expense_at_retirement=monthly_expense,
        adequate=adequate,
        shortfall=shortfall,
        additional_monthly_savings=additional_monthly_savings(
            shortfall, pre_return_percent, years_to_retirement
        ),
        projection=tuple(projection),
    )


__all__ = [
    "Phase",
    "RetirementResult",
    "RetirementYear",
    "additional_monthly_savings",
    "calculate_retirement",
    "required_corpus",
]
