"""Helpers for normalising incoming calculation requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Request
from werkzeug.exceptions import BadRequest


def _resolve_locale(req: Request, payload: dict[str, Any]) -> None:
    """Populate the locale field in ``payload`` based on hints in ``req``.

    The body wins over the ``locale`` query argument, which wins over the
    first ``Accept-Language`` entry. The translator maps the hint onto a
    supported catalogue later.
    """

    locale = payload.get("locale")
    if isinstance(locale, str) and locale.strip():
        payload["locale"] = locale.strip()
        return

    locale_param = req.args.get("locale")
    if locale_param:
        payload["locale"] = locale_param.strip()
        return

    accept_language = req.headers.get("Accept-Language")
    if accept_language:
        primary = accept_language.split(",")[0].split(";")[0].strip()
        if primary:
            payload["locale"] = primary


def parse_calculation_payload(req: Request) -> dict[str, Any]:
    """Extract a JSON object from ``req``; an empty body means "use defaults"."""

    if not req.get_data(cache=True):
        data: Any = {}
    else:
        data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    payload = dict(data)
    _resolve_locale(req, payload)

    return payload


__all__ = ["parse_calculation_payload"]
