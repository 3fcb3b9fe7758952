"""Vehicle lease payment calculator."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .utils import monthly_rate, percent_to_fraction


@dataclass(frozen=True)
class LeaseRow:
    month: int
    depreciation: float
    finance_charge: float
    payment: float
    cumulative_depreciation: float
    cumulative_finance_charge: float
    cumulative_total: float


@dataclass(frozen=True)
class LeaseYear:
    year: int
    depreciation: float
    finance_charge: float
    total: float
    running_total: float


@dataclass(frozen=True)
class LeaseTermOption:
    term_months: int
    residual_percent: float
    monthly_payment: float
    total_cost: float


@dataclass(frozen=True)
class LeaseResult:
    vehicle_price: float
    down_payment: float
    term_months: int
    residual_value: float
    monthly_depreciation: float
    monthly_finance_charge: float
    monthly_payment: float
    total_lease_payments: float
    total_cost: float
    breakdown: tuple[LeaseRow, ...]
    yearly: tuple[LeaseYear, ...]


def _lease_components(
    vehicle_price: float,
    down_payment: float,
    term_months: int,
    annual_rate_percent: float,
    residual_percent: float,
) -> tuple[float, float, float]:
    """Return ``(residual, monthly depreciation, monthly finance charge)``."""

    residual = vehicle_price * percent_to_fraction(residual_percent)
    depreciation = (vehicle_price - down_payment - residual) / term_months if term_months > 0 else 0.0
    finance_charge = (vehicle_price - down_payment + residual) * monthly_rate(annual_rate_percent)
    return residual, depreciation, finance_charge


def calculate_lease(
    vehicle_price: float,
    down_payment: float,
    term_months: int,
    annual_rate_percent: float,
    residual_percent: float,
    *,
    sample_every: int = 6,
) -> LeaseResult:
    """Monthly lease payment as depreciation plus a finance charge.

    The finance charge is levied on the capitalised cost plus the residual
    value, the usual money-factor convention for vehicle leases.
    """

    term_months = int(term_months)
    residual, depreciation, finance_charge = _lease_components(
        vehicle_price, down_payment, term_months, annual_rate_percent, residual_percent
    )
    payment = depreciation + finance_charge

    rows: list[LeaseRow] = []
    yearly: list[LeaseYear] = []
    cumulative_depreciation = 0.0
    cumulative_finance = 0.0

    for month in range(1, term_months + 1):
        cumulative_depreciation += depreciation
        cumulative_finance += finance_charge

        if month % sample_every == 0 or month == term_months:
            rows.append(
                LeaseRow(
                    month=month,
                    depreciation=depreciation,
                    finance_charge=finance_charge,
                    payment=payment,
                    cumulative_depreciation=cumulative_depreciation,
                    cumulative_finance_charge=cumulative_finance,
                    cumulative_total=cumulative_depreciation + cumulative_finance,
                )
            )

        if month % 12 == 0:
            yearly.append(
                LeaseYear(
                    year=month // 12,
                    depreciation=depreciation * 12,
                    finance_charge=finance_charge * 12,
                    total=payment * 12,
                    running_total=payment * month + down_payment,
                )
            )

    total_payments = payment * term_months
    return LeaseResult(
        vehicle_price=vehicle_price,
        down_payment=down_payment,
        term_months=term_months,
        residual_value=residual,
        monthly_depreciation=depreciation,
        monthly_finance_charge=finance_charge,
        monthly_payment=payment,
        total_lease_payments=total_payments,
        total_cost=total_payments + down_payment,
        breakdown=tuple(rows),
        yearly=tuple(yearly),
    )


def adjusted_residual_percent(
    residual_percent: float,
    term_months: int,
    *,
    base_term: int = 36,
    step_percent: float = 5.0,
    floor_percent: float = 20.0,
) -> float:
    """Lower the residual by ``step_percent`` for each year beyond ``base_term``."""

    adjusted = residual_percent - (term_months - base_term) / 12 * step_percent
    return max(floor_percent, adjusted)


def compare_lease_terms(
    vehicle_price: float,
    down_payment: float,
    annual_rate_percent: float,
    residual_percent: float,
    terms: Sequence[int] = (24, 36, 48, 60),
    *,
    step_percent: float = 5.0,
    floor_percent: float = 20.0,
) -> list[LeaseTermOption]:
    options = []
    for term in terms:
        residual = adjusted_residual_percent(
            residual_percent, term, step_percent=step_percent, floor_percent=floor_percent
        )
        _, depreciation, finance_charge = _lease_components(
            vehicle_price, down_payment, term, annual_rate_percent, residual
        )
        payment = depreciation + finance_charge
        options.append(
            LeaseTermOption(
                term_months=term,
                residual_percent=residual,
                monthly_payment=payment,
                total_cost=payment * term + down_payment,
            )
        )
    return options


__all__ = [
    "LeaseResult",
    "LeaseRow",
    "LeaseTermOption",
    "LeaseYear",
    "adjusted_residual_percent",
    "calculate_lease",
    "compare_lease_terms",
]
