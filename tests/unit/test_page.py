"""Tests for the calculator page state machine."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from fincalc.backend.config.catalogue import get_calculator
from fincalc.backend.services.page import CalculatorPage, PageState


def _echo(values: Mapping[str, Any]) -> dict[str, Any]:
    return dict(values)


def test_result_is_computed_lazily_from_defaults() -> None:
    definition = get_calculator("emi")
    page = CalculatorPage(definition, _echo)

    assert page.state is PageState.IDLE
    assert page.result == definition.defaults()


def test_update_replaces_inputs_and_result() -> None:
    page = CalculatorPage(get_calculator("emi"), _echo)

    result = page.update({"loan_amount": 750_000})

    assert result["loan_amount"] == 750_000
    assert page.inputs["loan_amount"] == 750_000
    assert page.result is result
    assert page.adjustments == ()


def test_updates_accumulate_over_previous_inputs() -> None:
    page = CalculatorPage(get_calculator("emi"), _echo)

    page.update({"loan_amount": 750_000})
    page.update({"interest_rate": 12})

    assert page.inputs["loan_amount"] == 750_000
    assert page.inputs["interest_rate"] == 12


def test_inputs_are_read_only() -> None:
    page = CalculatorPage(get_calculator("emi"), _echo)

    with pytest.raises(TypeError):
        page.inputs["loan_amount"] = 1  # type: ignore[index]


def test_adjustments_are_exposed_after_update() -> None:
    page = CalculatorPage(get_calculator("emi"), _echo)

    page.update({"loan_amount": 10})

    assert page.inputs["loan_amount"] == 50_000
    assert [item.field for item in page.adjustments] == ["loan_amount"]


def test_failed_recompute_keeps_previous_state() -> None:
    def adapter(values: Mapping[str, Any]) -> dict[str, Any]:
        if values["loan_amount"] > 1_000_000:
            raise ValueError("unsupported amount")
        return dict(values)

    page = CalculatorPage(get_calculator("emi"), adapter)
    previous = page.update({"loan_amount": 600_000})

    with pytest.raises(ValueError):
        page.update({"loan_amount": 2_000_000})

    assert page.state is PageState.IDLE
    assert page.inputs["loan_amount"] == 600_000
    assert page.result is previous


def test_reentrant_update_is_refused() -> None:
    states: list[PageState] = []

    def adapter(values: Mapping[str, Any]) -> dict[str, Any]:
        states.append(page.state)
        page.update({"loan_amount": 900_000})
        return dict(values)

    page: CalculatorPage[dict[str, Any]] = CalculatorPage(get_calculator("emi"), adapter)

    with pytest.raises(RuntimeError, match="already recomputing"):
        page.update({"loan_amount": 800_000})

    assert states == [PageState.RECOMPUTING]
    assert page.state is PageState.IDLE
    assert page.inputs["loan_amount"] == 500_000
