"""Integration tests for configuration metadata endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask.testing import FlaskClient

from fincalc.backend.config.catalogue import load_catalogue
from fincalc.backend.version import get_project_version


def test_meta_describes_catalogue(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/meta")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload == {
        "version": get_project_version(),
        "calculators": list(load_catalogue().slugs),
        "currency": "INR",
        "currency_symbol": "₹",
        "number_locale": "en-IN",
        "locales": ["en", "hi"],
    }
