"""Unit tests for systematic withdrawal plans."""

from __future__ import annotations

import pytest

from fincalc.backend.services.calculators.withdrawals import (
    simulate_swp,
    withdrawal_sustainability,
)


def test_swp_reference_scenario(scenarios: dict) -> None:
    inputs = scenarios["swp"]["inputs"]
    expected = scenarios["swp"]["expected"]

    result = simulate_swp(
        inputs["initial_investment"],
        inputs["monthly_withdrawal"],
        inputs["expected_return"],
        inputs["years"],
    )

    assert result.total_withdrawn == pytest.approx(expected["total_withdrawn"])
    assert result.final_corpus == pytest.approx(expected["final_corpus"], rel=1e-3)
    assert result.sustainability.withdrawal_rate == pytest.approx(9.0)
    assert len(result.yearly) == 15
    assert result.monthly[0].month == 1
    assert result.monthly[-1].month == 180
    assert result.yearly[-1].balance == pytest.approx(result.final_corpus)


def test_swp_corpus_can_turn_negative() -> None:
    result = simulate_swp(500_000, 100_000, 5, 5)

    assert result.final_corpus < 0
    assert result.sustainability.status == "not_sustainable"


def test_swp_yearly_returns_sum_to_growth() -> None:
    result = simulate_swp(1_000_000, 8_000, 9, 10)

    total_returns = sum(row.returns for row in result.yearly)
    assert result.final_corpus == pytest.approx(
        1_000_000 + total_returns - result.total_withdrawn
    )


@pytest.mark.parametrize(
    "monthly_withdrawal, status",
    [
        (10_000, "highly_sustainable"),
        (13_000, "moderately_sustainable"),
        (20_000, "marginally_sustainable"),
    ],
)
def test_sustainability_thresholds(monthly_withdrawal: float, status: str) -> None:
    result = withdrawal_sustainability(2_000_000, monthly_withdrawal, 10, 1_000)

    assert result.status == status


def test_sustainability_without_initial_corpus() -> None:
    result = withdrawal_sustainability(0, 10_000, 10, -1)

    assert result.withdrawal_rate == 0.0
    assert result.status == "not_sustainable"
