"""Unit tests for the retirement projection."""

from __future__ import annotations

import pytest

from fincalc.backend.services.calculators.retirement import (
    additional_monthly_savings,
    calculate_retirement,
    required_corpus,
)

DEFAULTS = {
    "current_age": 30,
    "retirement_age": 60,
    "life_expectancy": 85,
    "current_savings": 500_000,
    "monthly_savings": 20_000,
    "monthly_expenses": 50_000,
    "pre_return_percent": 12,
    "post_return_percent": 8,
    "inflation_percent": 6,
}


def test_required_corpus_uses_real_rate_annuity() -> None:
    expected = 100_000 / 0.02 * (1 - 1.02**-25)

    assert required_corpus(100_000, 8, 6, 25) == pytest.approx(expected)


def test_required_corpus_sums_expenses_when_inflation_wins() -> None:
    assert required_corpus(120_000, 6, 6, 20) == pytest.approx(2_400_000)
    assert required_corpus(120_000, 5, 7, 20) == pytest.approx(2_400_000)
    assert required_corpus(120_000, 8, 6, 0) == 0.0


def test_additional_savings_with_zero_return() -> None:
    assert additional_monthly_savings(120_000, 0, 10) == pytest.approx(1_000)
    assert additional_monthly_savings(0, 12, 10) == 0.0


def test_default_plan_is_on_track() -> None:
    result = calculate_retirement(**DEFAULTS)

    assert result.years_to_retirement == 30
    assert result.years_in_retirement == 25
    assert result.adequate is True
    assert result.shortfall == 0.0
    assert result.additional_monthly_savings == 0.0
    assert result.monthly_expense_at_retirement == pytest.approx(50_000 * 1.06**30)

    phases = [row.phase for row in result.projection]
    assert phases.count("accumulation") == 30
    assert phases.count("retirement") == 25
    assert result.projection[0].age == 31
    assert result.projection[-1].age == 85


def test_shortfall_is_closed_by_suggested_savings() -> None:
    plan = dict(DEFAULTS, current_savings=0, monthly_savings=5_000, monthly_expenses=80_000)
    result = calculate_retirement(**plan)

    assert result.adequate is False
    assert result.shortfall == pytest.approx(result.required_corpus - result.corpus_at_retirement)

    topped_up = calculate_retirement(
        **dict(plan, monthly_savings=plan["monthly_savings"] + result.additional_monthly_savings)
    )
    assert topped_up.corpus_at_retirement == pytest.approx(result.required_corpus)


def test_reported_savings_never_drop_below_zero() -> None:
    plan = dict(DEFAULTS, current_savings=0, monthly_savings=5_000, monthly_expenses=150_000)
    result = calculate_retirement(**plan)

    assert all(row.savings >= 0 for row in result.projection)
    assert result.projection[-1].savings == 0
