"""Tests for the translation catalogue helpers."""

from __future__ import annotations

import json
from importlib import resources

import pytest

from fincalc.backend.app.localization import (
    available_locales,
    get_translator,
    load_translations,
    normalise_locale,
)


def _backend_keys(locale: str) -> set[str]:
    resource = resources.files("fincalc.translations").joinpath(f"{locale}.json")
    with resource.open("r", encoding="utf-8") as handle:
        return set(json.load(handle)["backend"])


def test_available_locales_lists_shipped_catalogues() -> None:
    assert available_locales() == ("en", "hi")


@pytest.mark.parametrize(
    "hint, expected",
    [(None, "en"), ("", "en"), ("hi", "hi"), ("HI_in", "hi"), ("hi-IN", "hi"), ("fr-FR", "en")],
)
def test_normalise_locale(hint: str | None, expected: str) -> None:
    assert normalise_locale(hint) == expected


def test_translator_prefers_locale_then_english_then_key() -> None:
    translator = get_translator("hi")

    assert translator.locale == "hi"
    assert translator("cards.monthly_payment") == "मासिक भुगतान"
    assert translator("cards.total_lease_payments") == "Total Lease Payments"
    assert translator("cards.does_not_exist") == "cards.does_not_exist"


def test_translator_format_keeps_unknown_placeholders() -> None:
    translator = get_translator("en")

    assert (
        translator.format("cards.total_cost_description", down_payment="₹2,00,000")
        == "Includes the down payment of ₹2,00,000"
    )
    assert translator.format("cards.total_cost_description") == (
        "Includes the down payment of {down_payment}"
    )


def test_hindi_catalogue_has_no_keys_missing_from_english() -> None:
    assert _backend_keys("hi") <= _backend_keys("en")


def test_load_translations_includes_fallback() -> None:
    payload = load_translations("hi-IN")

    assert payload["locale"] == "hi"
    assert payload["available_locales"] == ["en", "hi"]
    assert payload["fallback"]["locale"] == "en"
    assert payload["backend"]["cards.monthly_payment"] == "मासिक भुगतान"
    assert payload["frontend"]
