"""Loan payment and amortization calculators.

Covers the EMI, mortgage and down payment pages. All functions take rates as
percentages except the low-level helpers, which work on decimal period rates.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .utils import monthly_rate

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class AmortizationRow:
    """One month of an amortization schedule."""

    month: int
    payment: float
    principal: float
    interest: float
    balance: float
    cumulative_principal: float
    cumulative_interest: float


@dataclass(frozen=True)
class YearlyAmortizationRow:
    """Twelve aggregated months of an amortization schedule."""

    year: int
    principal: float
    interest: float
    balance: float
    cumulative_principal: float
    cumulative_interest: float


@dataclass(frozen=True)
class LoanSummary:
    principal: float
    monthly_rate: float
    months: int
    monthly_payment: float
    total_payment: float
    total_interest: float
    schedule: tuple[AmortizationRow, ...]
    yearly_schedule: tuple[YearlyAmortizationRow, ...]


@dataclass(frozen=True)
class MortgageResult:
    property_value: float
    down_payment: float
    loan_amount: float
    loan_to_value: float
    loan: LoanSummary


@dataclass(frozen=True)
class DownPaymentOption:
    percent: float
    down_payment: float
    loan_amount: float
    monthly_payment: float


@dataclass(frozen=True)
class DownPaymentResult:
    property_value: float
    down_payment_percent: float
    down_payment: float
    loan_amount: float
    loan_to_value: float
    monthly_payment: float
    total_interest: float
    options: tuple[DownPaymentOption, ...]


def amortized_payment(principal: float, period_rate: float, periods: int) -> float:
    """Return the level payment that repays ``principal`` over ``periods``.

    ``period_rate`` is the decimal rate per period. A zero rate divides the
    principal evenly instead of evaluating ``0 / 0``.
    """

    if principal <= 0 or periods <= 0:
        return 0.0

    if period_rate == 0:
        return principal / periods

    growth = (1 + period_rate) ** periods
    return principal * period_rate * growth / (growth - 1)


def amortization_schedule(
    principal: float,
    period_rate: float,
    periods: int,
    payment: float | None = None,
) -> list[AmortizationRow]:
    """Simulate the loan month by month and return exactly ``periods`` rows."""

    if payment is None:
        payment = amortized_payment(principal, period_rate, periods)

    rows: list[AmortizationRow] = []
    balance = principal
    cumulative_principal = 0.0
    cumulative_interest = 0.0

    for month in range(1, periods + 1):
        interest = balance * period_rate
        principal_paid = payment - interest
        balance -= principal_paid
        cumulative_principal += principal_paid
        cumulative_interest += interest

        rows.append(
            AmortizationRow(
                month=month,
                payment=payment,
                principal=principal_paid,
                interest=interest,
                balance=max(0.0, balance),
                cumulative_principal=cumulative_principal,
                cumulative_interest=cumulative_interest,
            )
        )

    return rows


def yearly_amortization(rows: Iterable[AmortizationRow]) -> list[YearlyAmortizationRow]:
    """Aggregate monthly rows into one row per (possibly partial) year."""

    yearly: list[YearlyAmortizationRow] = []
    principal = 0.0
    interest = 0.0
    last: AmortizationRow | None = None

    for row in rows:
        principal += row.principal
        interest += row.interest
        last = row
        if row.month % MONTHS_PER_YEAR == 0:
            yearly.append(_close_year(row, principal, interest))
            principal = 0.0
            interest = 0.0

    if last is not None and last.month % MONTHS_PER_YEAR:
        yearly.append(_close_year(last, principal, interest))

    return yearly


def _close_year(row: AmortizationRow, principal: float, interest: float) -> YearlyAmortizationRow:
    return YearlyAmortizationRow(
        year=(row.month - 1) // MONTHS_PER_YEAR + 1,
        principal=principal,
        interest=interest,
        balance=row.balance,
        cumulative_principal=row.cumulative_principal,
        cumulative_interest=row.cumulative_interest,
    )


def sample_schedule(rows: Sequence[AmortizationRow], every: int = 3) -> list[AmortizationRow]:
    """Keep the first row, every ``every``-th month and the final row."""

    if not rows:
        return []
    last_month = rows[-1].month
    return [
        row
        for row in rows
        if row.month == 1 or row.month % every == 0 or row.month == last_month
    ]


def summarise_loan(principal: float, annual_rate_percent: float, term_years: float) -> LoanSummary:
    """Compute the payment, totals and schedules for a monthly-amortizing loan."""

    rate = monthly_rate(annual_rate_percent)
    months = int(round(term_years * MONTHS_PER_YEAR))
    payment = amortized_payment(principal, rate, months)
    schedule = amortization_schedule(principal, rate, months, payment)
    total_payment = payment * months

    return LoanSummary(
        principal=principal,
        monthly_rate=rate,
        months=months,
        monthly_payment=payment,
        total_payment=total_payment,
        total_interest=total_payment - principal if months else 0.0,
        schedule=tuple(schedule),
        yearly_schedule=tuple(yearly_amortization(schedule)),
    )


def calculate_emi(
    loan_amount: float, annual_rate_percent: float, term_years: float
) -> LoanSummary:
    """Equated monthly instalment for a personal or vehicle loan."""

    return summarise_loan(loan_amount, annual_rate_percent, term_years)


def loan_to_value(loan_amount: float, property_value: float) -> float:
    """Return the loan-to-value ratio as a percentage."""

    if property_value <= 0:
        return 0.0
    return loan_amount / property_value * 100


def calculate_mortgage(
    property_value: float,
    down_payment: float,
    annual_rate_percent: float,
    term_years: float,
) -> MortgageResult:
    """Mortgage on ``property_value`` financed after ``down_payment``."""

    loan_amount = max(0.0, property_value - down_payment)
    return MortgageResult(
        property_value=property_value,
        down_payment=down_payment,
        loan_amount=loan_amount,
        loan_to_value=loan_to_value(loan_amount, property_value),
        loan=summarise_loan(loan_amount, annual_rate_percent, term_years),
    )


def calculate_down_payment(
    property_value: float,
    down_payment_percent: float,
    term_years: float,
    annual_rate_percent: float,
    comparison_percents: Sequence[float] = (5, 10, 15, 20, 25, 30, 35, 40),
) -> DownPaymentResult:
    """Down payment, resulting loan and payment, plus alternative splits."""

    rate = monthly_rate(annual_rate_percent)
    months = int(round(term_years * MONTHS_PER_YEAR))

    def _option(percent: float) -> DownPaymentOption:
        down_payment = property_value * percent / 100
        loan_amount = property_value - down_payment
        return DownPaymentOption(
            percent=percent,
            down_payment=down_payment,
            loan_amount=loan_amount,
            monthly_payment=amortized_payment(loan_amount, rate, months),
        )

    selected = _option(down_payment_percent)
    total_interest = selected.monthly_payment * months - selected.loan_amount

    return DownPaymentResult(
        property_value=property_value,
        down_payment_percent=down_payment_percent,
        down_payment=selected.down_payment,
        loan_amount=selected.loan_amount,
        loan_to_value=loan_to_value(selected.loan_amount, property_value),
        monthly_payment=selected.monthly_payment,
        total_interest=max(0.0, total_interest),
        options=tuple(_option(percent) for percent in comparison_percents),
    )


__all__ = [
    "AmortizationRow",
    "DownPaymentOption",
    "DownPaymentResult",
    "LoanSummary",
    "MortgageResult",
    "YearlyAmortizationRow",
    "amortization_schedule",
    "amortized_payment",
    "calculate_down_payment",
    "calculate_emi",
    "calculate_mortgage",
    "loan_to_value",
    "sample_schedule",
    "summarise_loan",
    "yearly_amortization",
]
