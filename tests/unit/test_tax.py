"""Unit tests for slab tax and regime comparison."""

from __future__ import annotations

import pytest

from fincalc.backend.config.catalogue import load_tax_rules
from fincalc.backend.config.schema import TaxRules
from fincalc.backend.services.calculators.tax import (
    apply_deductions,
    calculate_slab_tax,
    compare_regimes,
    slab_breakdown,
)


@pytest.fixture(scope="module")
def rules() -> TaxRules:
    return load_tax_rules()


def test_regime_comparison_reference_scenario(rules: TaxRules, scenarios: dict) -> None:
    inputs = dict(scenarios["tax_saving"]["inputs"])
    expected = scenarios["tax_saving"]["expected"]
    income = inputs.pop("annual_income")

    result = compare_regimes(income, inputs, rules)

    assert result.better_regime == expected["better_regime"]
    for field in (
        "total_deductions",
        "taxable_income",
        "old_regime_tax",
        "new_regime_tax",
        "tax_without_deductions",
        "tax_savings",
    ):
        assert getattr(result, field) == pytest.approx(expected[field]), field


@pytest.mark.parametrize("regime", ["old", "new"])
def test_zero_income_pays_no_tax(rules: TaxRules, regime: str) -> None:
    assert calculate_slab_tax(0, rules.regimes[regime].slabs, rules.cess_percent) == 0.0


@pytest.mark.parametrize("regime", ["old", "new"])
def test_tax_is_non_decreasing_in_income(rules: TaxRules, regime: str) -> None:
    slabs = rules.regimes[regime].slabs
    incomes = range(0, 3_000_001, 25_000)

    taxes = [calculate_slab_tax(income, slabs, rules.cess_percent) for income in incomes]

    assert taxes == sorted(taxes)


@pytest.mark.parametrize("boundary", [250_000, 500_000, 1_000_000])
def test_tax_is_continuous_at_slab_boundaries(rules: TaxRules, boundary: int) -> None:
    slabs = rules.regimes["old"].slabs

    below = calculate_slab_tax(boundary - 0.01, slabs)
    above = calculate_slab_tax(boundary + 0.01, slabs)

    assert above - below == pytest.approx(0.0, abs=0.01)


def test_slab_breakdown_covers_income(rules: TaxRules) -> None:
    shares = slab_breakdown(1_750_000, rules.regimes["new"].slabs)

    assert sum(share.taxable for share in shares) == pytest.approx(1_750_000)
    assert shares[-1].upper_bound is None
    assert shares[-1].taxable == pytest.approx(250_000)


def test_deduction_sections_apply_caps(rules: TaxRules) -> None:
    applied = {
        item.section: item
        for item in apply_deductions(
            {"ppf": 150_000, "elss": 80_000, "nps": 90_000, "home_loan": 350_000},
            rules.deductions,
        )
    }

    assert applied["section_80c"].claimed == pytest.approx(230_000)
    assert applied["section_80c"].allowed == pytest.approx(150_000)
    assert applied["section_80ccd_1b"].allowed == pytest.approx(50_000)
    assert applied["section_24"].cap is None
    assert applied["section_24"].allowed == pytest.approx(350_000)


def test_ties_favour_old_regime() -> None:
    slabs = [{"upper": 500_000, "rate": 0}, {"rate": 10}]
    rules = TaxRules.model_validate(
        {"regimes": {"old": {"slabs": slabs}, "new": {"slabs": slabs}}}
    )

    result = compare_regimes(900_000, {}, rules)

    assert result.old_regime_tax == pytest.approx(result.new_regime_tax)
    assert result.better_regime == "old"
    assert result.tax_savings == pytest.approx(0.0)


def test_high_income_without_investments_prefers_new_regime(rules: TaxRules) -> None:
    result = compare_regimes(2_000_000, {}, rules)

    assert result.better_regime == "new"
    assert result.total_deductions == 0
