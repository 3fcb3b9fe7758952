"""Tests for the calculator adapters and their result layouts."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from fincalc.backend.app.localization import get_translator
from fincalc.backend.config.catalogue import get_calculator, load_catalogue
from fincalc.backend.services.adapters import ADAPTERS, bind_adapter
from fincalc.backend.services.outputs import CalculatorOutput


def _run(slug: str, **changes: Any) -> CalculatorOutput:
    definition = get_calculator(slug)
    values = {**definition.defaults(), **changes}
    return bind_adapter(definition)(values)


def _cards(output: CalculatorOutput) -> dict[str, Any]:
    return {card.id: card for card in output.cards}


def _translation_keys(output: CalculatorOutput) -> Iterator[str]:
    for card in output.cards:
        yield f"cards.{card.id}"
        if card.description:
            yield card.description
        if card.kind == "label":
            yield f"labels.{card.value}"
    for table in output.tables:
        yield f"tables.{table.id}"
        for column in table.columns:
            yield f"columns.{column.key}"
            if column.kind in {"label", "month"}:
                prefix = "labels" if column.kind == "label" else "months"
                for row in table.rows:
                    yield f"{prefix}.{row[column.key]}"
    for chart in output.charts:
        yield f"charts.{chart.id}"
        for key in chart.series:
            yield f"columns.{key}"
        if chart.x_key == "id":
            for point in chart.data:
                yield f"labels.{point['id']}"


def test_every_catalogue_entry_has_an_adapter() -> None:
    assert set(ADAPTERS) == set(load_catalogue().slugs)


@pytest.mark.parametrize(
    "slug, changes",
    [(slug, {}) for slug in load_catalogue().slugs]
    + [
        ("simple-interest", {"compound": True, "compound_frequency": 12}),
        ("swp", {"initial_investment": 500_000, "monthly_withdrawal": 100_000}),
        ("retirement", {"monthly_savings": 5_000, "monthly_expenses": 200_000}),
        ("mutual-fund", {"investment_mode": "sip"}),
    ],
)
def test_layout_keys_have_english_text(slug: str, changes: dict[str, Any]) -> None:
    translator = get_translator("en")
    output = _run(slug, **changes)

    missing = sorted({key for key in _translation_keys(output) if translator(key) == key})

    assert output.cards
    assert missing == []


def test_mortgage_cards_use_derived_loan() -> None:
    cards = _cards(_run("mortgage"))

    assert cards["loan_amount"].value == pytest.approx(3_000_000)
    assert cards["loan_to_value"].value == pytest.approx(75.0)
    assert cards["loan_to_value"].kind == "percent"
    assert cards["monthly_payment"].highlight is True


def test_emi_lists_every_month() -> None:
    output = _run("emi")

    tables = {table.id: table for table in output.tables}
    assert len(tables["monthly_schedule"].rows) == 36
    assert len(tables["yearly_amortization"].rows) == 3


def test_compounding_card_only_appears_when_compounding() -> None:
    assert "compounding" not in _cards(_run("simple-interest"))

    cards = _cards(_run("simple-interest", compound=True, compound_frequency=4))
    assert cards["compounding"].value == "quarterly"


def test_retirement_shortfall_describes_extra_savings() -> None:
    cards = _cards(_run("retirement", monthly_savings=5_000, monthly_expenses=200_000))

    verdict = cards["retirement_status"]
    assert verdict.value == "action_needed"
    assert set(verdict.params) == {"shortfall", "additional"}
    assert cards["shortfall"].value > 0


def test_tax_saving_picks_old_regime_for_defaults() -> None:
    output = _run("tax-saving")
    cards = _cards(output)

    assert cards["better_regime"].value == "regime_old"
    assert cards["tax_savings"].value == pytest.approx(109_200)

    charts = {chart.id: chart for chart in output.charts}
    invested = [point["id"] for point in charts["investments"].data]
    assert "education_loan" not in invested
    assert "ppf" in invested


def test_salary_split_excludes_deductions() -> None:
    output = _run("salary")
    charts = {chart.id: chart for chart in output.charts}

    assert [point["id"] for point in charts["salary_split"].data] == [
        "basic_salary",
        "hra",
        "special_allowance",
    ]


def test_lease_options_come_from_catalogue() -> None:
    output = _run("lease")
    tables = {table.id: table for table in output.tables}

    terms = [row["term_months"] for row in tables["lease_terms"].rows]
    assert terms == [24, 36, 48, 60]


def test_unknown_slug_has_no_adapter() -> None:
    definition = get_calculator("emi").model_copy(update={"slug": "crypto"})

    with pytest.raises(LookupError):
        bind_adapter(definition)
