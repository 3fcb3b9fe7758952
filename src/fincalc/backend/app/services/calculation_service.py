"""Orchestrate request validation, input control and calculator evaluation.

The calculation service ties the catalogue, the per-calculator adapters, the
page state machine and the translation layer together so that routes only
deal with raw payloads. Profiling hooks live here as well.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from fincalc.backend.app.localization import get_translator
from fincalc.backend.app.models import (
    CalculationRequest,
    CalculationResponse,
    format_validation_error,
)
from fincalc.backend.config.catalogue import get_calculator, load_catalogue
from fincalc.backend.services import CalculatorPage, bind_adapter, build_result_payload

_LOGGER = logging.getLogger(__name__)

_PROFILE_ENV = "FINCALC_PROFILE_CALCULATIONS"
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv(_PROFILE_ENV, "").strip().lower()
    if flag in _TRUTHY:
        return True
    if flag not in _FALSY:
        _LOGGER.warning("Ignoring unrecognised %s value %r", _PROFILE_ENV, flag)
    return False


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _validate_request(payload: Mapping[str, Any]) -> CalculationRequest:
    try:
        return CalculationRequest.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc


def calculate(slug: str, payload: Mapping[str, Any]) -> dict[str, Any]:
    """Run the calculator ``slug`` with the raw ``payload`` of a request.

    Unknown slugs raise :class:`UnknownCalculatorError`; malformed payloads
    raise :class:`ValueError`. Out-of-range inputs are not errors: they are
    clamped and listed under ``meta.adjustments``.
    """

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    definition = get_calculator(slug)
    request = _validate_request(payload)
    translator = get_translator(request.locale)

    page = CalculatorPage(definition, bind_adapter(definition))
    with _profile_section("recompute", timings):
        output = page.update(request.inputs)

    with _profile_section("presentation", timings):
        rendered = build_result_payload(output, translator)

    meta: dict[str, Any] = {
        "calculator": definition.slug,
        "title": translator(f"calculators.{definition.slug}.title"),
        "locale": translator.locale,
        "currency": load_catalogue().currency,
        "adjustments": [adjustment.as_dict() for adjustment in page.adjustments],
    }

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        rounded = {name: round(duration * 1000, 3) for name, duration in timings.items()}
        _LOGGER.debug("calculate(%s) timings (ms): %s", definition.slug, rounded)
        meta["timings"] = rounded

    _LOGGER.debug(
        "Calculated '%s' for locale '%s' with %d adjustment(s)",
        definition.slug,
        translator.locale,
        len(page.adjustments),
    )

    response_model = CalculationResponse.model_validate(
        {"inputs": dict(page.inputs), **rendered, "meta": meta}
    )
    return response_model.model_dump(mode="json", exclude_none=True)


__all__ = ["calculate"]
