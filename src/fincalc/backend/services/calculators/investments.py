"""SIP and mutual fund growth calculators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .utils import monthly_rate, percent_to_fraction

InvestmentMode = Literal["lumpsum", "sip"]


@dataclass(frozen=True)
class SipRow:
    year: int
    invested: float
    returns: float
    value: float


@dataclass(frozen=True)
class SipResult:
    monthly_investment: float
    months: int
    invested: float
    returns: float
    value: float
    breakdown: tuple[SipRow, ...]


@dataclass(frozen=True)
class MutualFundRow:
    year: int
    invested: float
    yearly_investment: float
    value: float
    returns: float
    expenses: float
    gross_value: float


@dataclass(frozen=True)
class MutualFundResult:
    mode: InvestmentMode
    net_return: float
    invested: float
    value: float
    returns: float
    expenses: float
    breakdown: tuple[MutualFundRow, ...]


def sip_future_value(monthly_amount: float, period_rate: float, months: int) -> float:
    """Future value of monthly contributions made at the start of each month.

    Each contribution compounds for one extra period, so the ordinary annuity
    factor is multiplied by ``1 + r``. A zero rate returns the plain sum.
    """

    if months <= 0:
        return 0.0
    if period_rate == 0:
        return monthly_amount * months
    return monthly_amount * ((1 + period_rate) ** months - 1) / period_rate * (1 + period_rate)


def calculate_sip(
    monthly_investment: float, annual_return_percent: float, years: int
) -> SipResult:
    rate = monthly_rate(annual_return_percent)
    months = int(years) * 12

    breakdown = []
    for year in range(1, int(years) + 1):
        elapsed = year * 12
        invested = monthly_investment * elapsed
        value = sip_future_value(monthly_investment, rate, elapsed)
        breakdown.append(SipRow(year=year, invested=invested, returns=value - invested, value=value))

    invested = monthly_investment * months
    value = sip_future_value(monthly_investment, rate, months)

    return SipResult(
        monthly_investment=monthly_investment,
        months=months,
        invested=invested,
        returns=value - invested,
        value=value,
        breakdown=tuple(breakdown),
    )


def _lumpsum_values(
    amount: float, gross_rate: float, net_rate: float, years: int
) -> tuple[float, float]:
    gross = amount * (1 + gross_rate) ** years
    net = amount * (1 + net_rate) ** years
    return gross, net


def calculate_mutual_fund(
    mode: InvestmentMode,
    lumpsum_amount: float,
    monthly_investment: float,
    years: int,
    annual_return_percent: float,
    expense_ratio_percent: float,
) -> MutualFundResult:
    """Fund value after the expense ratio is deducted from the expected return.

    Expenses are the gap between the value at the gross return and the value
    at the net return.
    """

    net_return = annual_return_percent - expense_ratio_percent
    gross_monthly = monthly_rate(annual_return_percent)
    net_monthly = monthly_rate(net_return)
    gross_yearly = percent_to_fraction(annual_return_percent)
    net_yearly = percent_to_fraction(net_return)

    def _values_after(year: int) -> tuple[float, float, float]:
        if mode == "lumpsum":
            gross, net = _lumpsum_values(lumpsum_amount, gross_yearly, net_yearly, year)
            return lumpsum_amount, gross, net
        months = year * 12
        invested = monthly_investment * months
        gross = sip_future_value(monthly_investment, gross_monthly, months)
        net = sip_future_value(monthly_investment, net_monthly, months)
        return invested, gross, net

    breakdown = []
    for year in range(1, int(years) + 1):
        invested, gross, net = _values_after(year)
        if mode == "lumpsum":
            yearly_investment = lumpsum_amount if year == 1 else 0.0
        else:
            yearly_investment = monthly_investment * 12
        breakdown.append(
            MutualFundRow(
                year=year,
                invested=invested,
                yearly_investment=yearly_investment,
                value=net,
                returns=net - invested,
                expenses=gross - net,
                gross_value=gross,
            )
        )

    invested, gross, net = _values_after(int(years))

    return MutualFundResult(
        mode=mode,
        net_return=net_return,
        invested=invested,
        value=net,
        returns=net - invested,
        expenses=gross - net,
        breakdown=tuple(breakdown),
    )


__all__ = [
    "InvestmentMode",
    "MutualFundResult",
    "MutualFundRow",
    "SipResult",
    "SipRow",
    "calculate_mutual_fund",
    "calculate_sip",
    "sip_future_value",
]
