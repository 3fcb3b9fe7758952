"""Income tax under the old and new regimes, with deduction sections."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Literal

from fincalc.backend.config.schema import DeductionSection, TaxRules, TaxSlab

from .utils import percent_to_fraction

Regime = Literal["old", "new"]


@dataclass(frozen=True)
class SlabShare:
    lower_bound: float
    upper_bound: float | None
    rate: float
    taxable: float
    tax: float


@dataclass(frozen=True)
class DeductionApplied:
    section: str
    claimed: float
    allowed: float
    cap: float | None


@dataclass(frozen=True)
class RegimeComparison:
    income: float
    total_deductions: float
    taxable_income: float
    old_regime_tax: float
    new_regime_tax: float
    better_regime: Regime
    tax_without_deductions: float
    tax_savings: float
    deductions: tuple[DeductionApplied, ...]
    old_regime_slabs: tuple[SlabShare, ...]
    new_regime_slabs: tuple[SlabShare, ...]


def slab_breakdown(income: float, slabs: Sequence[TaxSlab]) -> list[SlabShare]:
    """Return the slice of ``income`` taxed in each slab (before cess)."""

    shares: list[SlabShare] = []
    remaining = max(0.0, income)
    lower_bound = 0.0

    for slab in slabs:
        upper = slab.upper_bound
        width = remaining if upper is None else min(remaining, upper - lower_bound)
        taxable = max(0.0, width)
        shares.append(
            SlabShare(
                lower_bound=lower_bound,
                upper_bound=upper,
                rate=slab.rate,
                taxable=taxable,
                tax=taxable * percent_to_fraction(slab.rate),
            )
        )
        remaining -= taxable
        if upper is None:
            break
        lower_bound = upper

    return shares


def calculate_slab_tax(
    income: float, slabs: Sequence[TaxSlab], cess_percent: float = 4.0
) -> float:
    """Progressive slab tax on ``income`` with cess added on the total."""

    if income <= 0:
        return 0.0
    base = sum(share.tax for share in slab_breakdown(income, slabs))
    return base * (1 + percent_to_fraction(cess_percent))


def apply_deductions(
    investments: Mapping[str, float], sections: Sequence[DeductionSection]
) -> list[DeductionApplied]:
    """Sum each section's components and cap the result."""

    applied = []
    for section in sections:
        claimed = sum(max(0.0, float(investments.get(name, 0.0))) for name in section.components)
        allowed = claimed if section.cap is None else min(claimed, section.cap)
        applied.append(
            DeductionApplied(section=section.id, claimed=claimed, allowed=allowed, cap=section.cap)
        )
    return applied


def compare_regimes(
    income: float, investments: Mapping[str, float], rules: TaxRules
) -> RegimeComparison:
    """Tax under both regimes and the saving offered by the cheaper one.

    Deductions only reduce the base of regimes that allow them. Equal taxes
    favour the old regime.
    """

    old = rules.regimes["old"]
    new = rules.regimes["new"]
    deductions = apply_deductions(investments, rules.deductions)
    total_deductions = sum(item.allowed for item in deductions)

    def _base(allows_deductions: bool) -> float:
        if allows_deductions:
            return max(0.0, income - total_deductions)
        return income

    old_base = _base(old.allows_deductions)
    new_base = _base(new.allows_deductions)
    old_tax = calculate_slab_tax(old_base, old.slabs, rules.cess_percent)
    new_tax = calculate_slab_tax(new_base, new.slabs, rules.cess_percent)
    better: Regime = "old" if old_tax <= new_tax else "new"
    without_deductions = calculate_slab_tax(income, old.slabs, rules.cess_percent)

    return RegimeComparison(
        income=income,
        total_deductions=total_deductions,
        taxable_income=old_base,
        old_regime_tax=old_tax,
        new_regime_tax=new_tax,
        better_regime=better,
        tax_without_deductions=without_deductions,
        tax_savings=without_deductions - min(old_tax, new_tax),
        deductions=tuple(deductions),
        old_regime_slabs=tuple(slab_breakdown(old_base, old.slabs)),
        new_regime_slabs=tuple(slab_breakdown(new_base, new.slabs)),
    )


__all__ = [
    "DeductionApplied",
    "Regime",
    "RegimeComparison",
    "SlabShare",
    "apply_deductions",
    "calculate_slab_tax",
    "compare_regimes",
    "slab_breakdown",
]
