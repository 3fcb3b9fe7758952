"""Unit tests for the calculation orchestration service."""

from __future__ import annotations

import pytest

from fincalc.backend.app.services.calculation_service import calculate
from fincalc.backend.config.catalogue import UnknownCalculatorError, load_catalogue


def _card(result: dict, card_id: str) -> dict:
    return next(card for card in result["cards"] if card["id"] == card_id)


def test_calculate_emi_reference_scenario(scenarios: dict) -> None:
    scenario = scenarios["emi"]

    result = calculate("emi", {"inputs": scenario["inputs"], "locale": "en"})

    payment = _card(result, "monthly_payment")
    assert round(payment["value"]) == scenario["expected"]["monthly_payment"]
    assert payment["formatted"] == "₹16,134"
    assert result["meta"] == {
        "calculator": "emi",
        "title": "EMI Calculator",
        "locale": "en",
        "currency": "INR",
        "adjustments": [],
    }
    assert result["inputs"]["loan_amount"] == 500000


@pytest.mark.parametrize("slug", load_catalogue().slugs)
def test_every_calculator_runs_with_defaults(slug: str) -> None:
    result = calculate(slug, {})

    assert result["meta"]["calculator"] == slug
    assert result["cards"]
    assert all(card["formatted"] for card in result["cards"])
    assert result["meta"]["adjustments"] == []


def test_out_of_range_inputs_are_clamped_and_reported() -> None:
    result = calculate("emi", {"inputs": {"loan_amount": 100_000_000, "interest_rate": "x"}})

    assert result["inputs"]["loan_amount"] == 5_000_000
    assert result["inputs"]["interest_rate"] == 10
    assert result["meta"]["adjustments"] == [
        {
            "field": "loan_amount",
            "reason": "clamped",
            "submitted": 100_000_000,
            "applied": 5_000_000,
        },
        {"field": "interest_rate", "reason": "rejected", "submitted": "x", "applied": 10},
    ]


def test_locale_hint_is_normalised() -> None:
    result = calculate("sip", {"locale": "hi-IN"})

    assert result["meta"]["locale"] == "hi"
    assert _card(result, "total_value")["title"] == "कुल मूल्य"


def test_unknown_calculator_raises() -> None:
    with pytest.raises(UnknownCalculatorError):
        calculate("crypto", {})


@pytest.mark.parametrize(
    "payload",
    [{"inputs": [1, 2]}, {"inputs": "loan"}, {"unexpected": True}],
)
def test_malformed_payload_raises_value_error(payload: dict) -> None:
    with pytest.raises(ValueError, match="Invalid calculation payload"):
        calculate("emi", payload)


def test_profiling_adds_timings(monkeypatch) -> None:
    monkeypatch.setenv("FINCALC_PROFILE_CALCULATIONS", "true")

    result = calculate("emi", {})

    assert set(result["meta"]["timings"]) == {"recompute", "presentation", "total"}


def test_unrecognised_profiling_flag_is_ignored(monkeypatch, caplog) -> None:
    monkeypatch.setenv("FINCALC_PROFILE_CALCULATIONS", "maybe")

    result = calculate("emi", {})

    assert "timings" not in result["meta"]
    assert "FINCALC_PROFILE_CALCULATIONS" in caplog.text
