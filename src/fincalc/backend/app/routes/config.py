"""Expose runtime metadata consumed by the decoupled front-end."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from fincalc.backend.app.localization import available_locales
from fincalc.backend.config.catalogue import load_catalogue
from fincalc.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Describe the running service and its calculator catalogue."""

    catalogue = load_catalogue()
    return {
        "version": get_project_version(),
        "calculators": list(catalogue.slugs),
        "currency": catalogue.currency,
        "currency_symbol": catalogue.currency_symbol,
        "number_locale": catalogue.number_locale,
        "locales": list(available_locales()),
    }


@blueprint.get("/meta")
def get_meta():
    """Return version and catalogue metadata."""

    return jsonify(get_configuration_metadata()), 200
