"""Unit tests for simple and compound interest."""

from __future__ import annotations

import pytest

from fincalc.backend.services.calculators.interest import (
    calculate_compound_interest,
    calculate_simple_interest,
    compound_amount,
    simple_interest,
)


def test_compound_interest_reference_scenario(scenarios: dict) -> None:
    inputs = scenarios["compound_interest"]["inputs"]

    result = calculate_compound_interest(
        inputs["principal"],
        inputs["interest_rate"],
        inputs["years"],
        frequency=inputs["compound_frequency"],
    )

    assert result.amount == pytest.approx(
        scenarios["compound_interest"]["expected"]["amount"], abs=0.01
    )
    assert result.interest == pytest.approx(result.amount - result.principal)
    assert len(result.breakdown) == 5


def test_compounding_more_often_earns_more() -> None:
    yearly = compound_amount(100_000, 9, 10, 1)
    quarterly = compound_amount(100_000, 9, 10, 4)
    monthly = compound_amount(100_000, 9, 10, 12)

    assert yearly < quarterly < monthly


@pytest.mark.parametrize("frequency", [0, -4])
def test_non_positive_frequency_compounds_yearly(frequency: int) -> None:
    assert compound_amount(10_000, 8, 5, frequency) == pytest.approx(
        compound_amount(10_000, 8, 5, 1)
    )


def test_compound_amount_grows_with_rate_and_time() -> None:
    assert compound_amount(10_000, 6, 5) < compound_amount(10_000, 7, 5)
    assert compound_amount(10_000, 6, 5) < compound_amount(10_000, 6, 6)


def test_simple_interest_is_linear() -> None:
    result = calculate_simple_interest(10_000, 5, 5)

    assert simple_interest(10_000, 5, 5) == pytest.approx(2_500)
    assert result.amount == pytest.approx(12_500)
    assert result.compound is False
    assert result.frequency == 1
    assert [row.interest for row in result.breakdown] == pytest.approx(
        [500, 1_000, 1_500, 2_000, 2_500]
    )


def test_simple_interest_page_can_compound() -> None:
    compounded = calculate_simple_interest(10_000, 8, 5, compound=True, frequency=4)
    reference = calculate_compound_interest(10_000, 8, 5, frequency=4)

    assert compounded.amount == pytest.approx(reference.amount)
    assert compounded.frequency == 4


@pytest.mark.parametrize(
    "principal, rate, years", [(1_000, 1, 1), (25_000, 7.5, 12), (1_000_000, 25, 30)]
)
def test_simple_interest_equals_amount_less_principal(
    principal: float, rate: float, years: int
) -> None:
    result = calculate_simple_interest(principal, rate, years)

    assert result.amount - result.principal == pytest.approx(
        simple_interest(principal, rate, years)
    )
