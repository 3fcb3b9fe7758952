"""Serve the English and Hindi label catalogues to embedding pages."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from fincalc.backend.app.localization import load_translations

blueprint = Blueprint("translations", __name__, url_prefix="/api/v1/translations")


@blueprint.get("/")
def get_default_translations():
    """Labels for ``?locale=``, else the browser language, else English."""

    hint = request.args.get("locale") or request.headers.get("Accept-Language")
    return jsonify(load_translations(hint)), 200


@blueprint.get("/<locale>")
def get_locale_translations(locale: str):
    return jsonify(load_translations(locale)), 200
