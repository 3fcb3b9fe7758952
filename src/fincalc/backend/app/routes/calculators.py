"""REST endpoints listing calculators and running calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from fincalc.backend.app.http import problem_response
from fincalc.backend.app.localization import Translator, get_translator
from fincalc.backend.app.services.calculation_service import calculate
from fincalc.backend.config.catalogue import (
    UnknownCalculatorError,
    get_calculator,
    load_catalogue,
)
from fincalc.backend.config.schema import CalculatorDefinition, InputDefinition
from fincalc.backend.services import build_calculation_response, parse_calculation_payload

blueprint = Blueprint("calculators", __name__, url_prefix="/api/v1/calculators")

_CATEGORIES = ("loans", "investments", "other")


def _locale_hint() -> str | None:
    return request.args.get("locale") or request.headers.get("Accept-Language")


def _serialise_input(definition: InputDefinition, translator: Translator) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": definition.name,
        "label": translator(f"inputs.{definition.name}"),
        "kind": definition.kind,
        "default": definition.default,
    }
    if definition.kind == "range":
        payload.update(
            {
                "min": definition.minimum,
                "max": definition.maximum,
                "step": definition.step,
                "integer": definition.integer,
            }
        )
    if definition.choices:
        payload["choices"] = list(definition.choices)
    if definition.unit:
        payload["unit"] = definition.unit
    if definition.max_field:
        payload["max_field"] = definition.max_field
        payload["max_factor"] = definition.max_factor
    if definition.min_field:
        payload["min_field"] = definition.min_field
        payload["min_offset"] = definition.min_offset
    return payload


def _summary(calculator: CalculatorDefinition, translator: Translator) -> dict[str, Any]:
    return {
        "slug": calculator.slug,
        "title": translator(f"calculators.{calculator.slug}.title"),
        "description": translator(f"calculators.{calculator.slug}.description"),
        "category": calculator.category,
        "path": f"/api/v1/calculators/{calculator.slug}",
    }


def _not_found(exc: UnknownCalculatorError):
    return problem_response(
        "not_found", status=404, message=str(exc), calculator=exc.slug
    ).to_response()


@blueprint.get("")
def list_calculators():
    """Return the calculator index grouped by category."""

    translator = get_translator(_locale_hint())
    catalogue = load_catalogue()
    categories = []
    for category in _CATEGORIES:
        members = [
            _summary(calculator, translator)
            for calculator in catalogue.calculators
            if calculator.category == category
        ]
        if members:
            categories.append(
                {
                    "id": category,
                    "title": translator(f"categories.{category}"),
                    "calculators": members,
                }
            )
    return jsonify({"locale": translator.locale, "categories": categories}), 200


@blueprint.get("/<slug>")
def describe_calculator(slug: str):
    """Return the input definitions of a calculator."""

    try:
        calculator = get_calculator(slug)
    except UnknownCalculatorError as exc:
        return _not_found(exc)

    translator = get_translator(_locale_hint())
    payload = _summary(calculator, translator)
    payload["locale"] = translator.locale
    payload["inputs"] = [_serialise_input(item, translator) for item in calculator.inputs]
    payload["defaults"] = calculator.defaults()
    return jsonify(payload), 200


@blueprint.post("/<slug>/calculations")
def create_calculation(slug: str) -> tuple[Any, int]:
    """Run a calculation using the submitted JSON payload."""

    payload = parse_calculation_payload(request)
    try:
        result = calculate(slug, payload)
    except UnknownCalculatorError as exc:
        return _not_found(exc)

    return build_calculation_response(result)
