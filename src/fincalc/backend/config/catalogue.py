"""Configuration loader wrapping the shared schema models."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

import yaml
from pydantic import ValidationError

from .schema import (
    CalculatorCatalogue,
    CalculatorDefinition,
    ConfigurationError,
    DeductionSection,
    InputDefinition,
    TaxRegime,
    TaxRules,
    TaxSlab,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
CATALOGUE_FILE = CONFIG_DIRECTORY / "calculators.yaml"
TAX_RULES_FILE = CONFIG_DIRECTORY / "tax.yaml"


class UnknownCalculatorError(LookupError):
    """Raised when a calculator slug is not declared in the catalogue."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Unknown calculator '{slug}'")
        self.slug = slug


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


@lru_cache(maxsize=1)
def load_catalogue() -> CalculatorCatalogue:
    """Load and cache the calculator catalogue."""

    if not CATALOGUE_FILE.exists():
        raise FileNotFoundError("Calculator catalogue not found")

    raw_catalogue = _load_yaml(CATALOGUE_FILE)

    calculators = raw_catalogue.get("calculators")
    if isinstance(calculators, dict):
        raw_catalogue["calculators"] = [
            {"slug": str(slug), **(definition or {})}
            for slug, definition in calculators.items()
        ]

    try:
        return CalculatorCatalogue.model_validate(raw_catalogue)
    except ValidationError as error:
        raise ConfigurationError(f"Catalogue validation failed: {error}") from error


@lru_cache(maxsize=1)
def load_tax_rules() -> TaxRules:
    """Load and cache the income tax slabs and deduction caps."""

    if not TAX_RULES_FILE.exists():
        raise FileNotFoundError("Tax rules configuration not found")

    try:
        return TaxRules.model_validate(_load_yaml(TAX_RULES_FILE))
    except ValidationError as error:
        raise ConfigurationError(f"Tax rules validation failed: {error}") from error


def get_calculator(slug: str) -> CalculatorDefinition:
    """Return the definition for ``slug`` or raise :class:`UnknownCalculatorError`."""

    try:
        return load_catalogue().get(slug)
    except KeyError as exc:
        raise UnknownCalculatorError(slug) from exc


def available_calculators() -> Sequence[str]:
    """Return the calculator slugs declared in the catalogue."""

    return load_catalogue().slugs


__all__ = [
    "CATALOGUE_FILE",
    "CONFIG_DIRECTORY",
    "CalculatorCatalogue",
    "CalculatorDefinition",
    "ConfigurationError",
    "DeductionSection",
    "InputDefinition",
    "TAX_RULES_FILE",
    "TaxRegime",
    "TaxRules",
    "TaxSlab",
    "UnknownCalculatorError",
    "available_calculators",
    "get_calculator",
    "load_catalogue",
    "load_tax_rules",
]
