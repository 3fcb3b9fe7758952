"""Monthly and annual take-home salary breakdown."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .utils import percent_to_fraction


@dataclass(frozen=True)
class SalaryComponent:
    id: str
    amount: float
    deduction: bool = False

    @property
    def signed_amount(self) -> float:
        return -self.amount if self.deduction else self.amount


@dataclass(frozen=True)
class SalaryMonth:
    month: int
    gross: float
    deductions: float
    net_pay: float
    bonus: float

    @property
    def has_bonus(self) -> bool:
        return self.bonus > 0


@dataclass(frozen=True)
class SalaryResult:
    monthly_gross: float
    monthly_deductions: float
    monthly_net_pay: float
    annual_gross: float
    annual_deductions: float
    annual_net_pay: float
    components: tuple[SalaryComponent, ...]
    months: tuple[SalaryMonth, ...]


def provident_fund_contribution(
    basic_salary: float, rate_percent: float = 12.0, monthly_cap: float = 1800.0
) -> float:
    """Employee PF contribution, capped at the statutory wage ceiling."""

    return min(basic_salary * percent_to_fraction(rate_percent), monthly_cap)


def calculate_salary(
    basic_salary: float,
    hra_percent: float,
    special_allowance: float,
    provident_fund: bool,
    professional_tax: float,
    other_deductions: float,
    bonus_amount: float = 0.0,
    bonus_months: Iterable[int] = (),
    *,
    pf_rate_percent: float = 12.0,
    pf_monthly_cap: float = 1800.0,
) -> SalaryResult:
    """Split a salary structure into earnings, deductions and net pay.

    ``bonus_months`` are calendar months numbered 1 to 12; ``bonus_amount`` is
    paid on top of the regular gross in each of them.
    """

    hra = basic_salary * percent_to_fraction(hra_percent)
    pf = (
        provident_fund_contribution(basic_salary, pf_rate_percent, pf_monthly_cap)
        if provident_fund
        else 0.0
    )
    monthly_gross = basic_salary + hra + special_allowance
    monthly_deductions = pf + professional_tax + other_deductions

    components = (
        SalaryComponent("basic_salary", basic_salary),
        SalaryComponent("hra", hra),
        SalaryComponent("special_allowance", special_allowance),
        SalaryComponent("provident_fund", pf, deduction=True),
        SalaryComponent("professional_tax", professional_tax, deduction=True),
        SalaryComponent("other_deductions", other_deductions, deduction=True),
    )

    selected = set(bonus_months)
    months = []
    for month in range(1, 13):
        bonus = bonus_amount if month in selected else 0.0
        gross = monthly_gross + bonus
        months.append(
            SalaryMonth(
                month=month,
                gross=gross,
                deductions=monthly_deductions,
                net_pay=gross - monthly_deductions,
                bonus=bonus,
            )
        )

    annual_gross = sum(row.gross for row in months)
    annual_deductions = monthly_deductions * 12

    return SalaryResult(
        monthly_gross=monthly_gross,
        monthly_deductions=monthly_deductions,
        monthly_net_pay=monthly_gross - monthly_deductions,
        annual_gross=annual_gross,
        annual_deductions=annual_deductions,
        annual_net_pay=annual_gross - annual_deductions,
        components=components,
        months=tuple(months),
    )


__all__ = [
    "SalaryComponent",
    "SalaryMonth",
    "SalaryResult",
    "calculate_salary",
    "provident_fund_contribution",
]
