"""Utilities for validating the calculator catalogue and tax rules."""

from __future__ import annotations

import argparse
from collections import Counter
from typing import Any, Sequence

from .catalogue import load_catalogue, load_tax_rules
from .schema import (
    CalculatorCatalogue,
    CalculatorDefinition,
    ConfigurationError,
    InputDefinition,
    TaxRules,
)

TAX_CALCULATOR = "tax-saving"


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_range_input(
    scope: str, definition: InputDefinition, defaults: dict[str, Any]
) -> list[str]:
    errors: list[str] = []
    minimum = definition.minimum
    maximum = definition.maximum
    default = definition.default
    if minimum is None or maximum is None:
        return errors

    if not minimum <= default <= maximum:
        errors.append(
            _format_scope(scope, f"default {default} lies outside [{minimum}, {maximum}]")
        )

    if definition.integer and float(default) != int(default):
        errors.append(_format_scope(scope, "integer inputs need a whole-number default"))

    if definition.max_field is not None:
        limit = defaults[definition.max_field] * definition.max_factor
        if default > limit:
            errors.append(
                _format_scope(
                    scope,
                    f"default {default} exceeds {definition.max_field} x "
                    f"{definition.max_factor} ({limit})",
                )
            )

    if definition.min_field is not None:
        floor = defaults[definition.min_field] + definition.min_offset
        if default < floor:
            errors.append(
                _format_scope(
                    scope,
                    f"default {default} is below {definition.min_field} + "
                    f"{definition.min_offset} ({floor})",
                )
            )

    return errors


def _validate_calculator(calculator: CalculatorDefinition) -> list[str]:
    errors: list[str] = []
    defaults = calculator.defaults()

    for definition in calculator.inputs:
        scope = f"{calculator.slug}.{definition.name}"
        if definition.kind == "range":
            errors.extend(_validate_range_input(scope, definition, defaults))
        elif definition.kind == "choice":
            duplicates = [
                value for value, count in Counter(definition.choices).items() if count > 1
            ]
            if duplicates:
                errors.append(_format_scope(scope, f"duplicate choices: {duplicates}"))

    return errors


def validate_catalogue(catalogue: CalculatorCatalogue) -> list[str]:
    """Return human-readable issues found in ``catalogue``."""

    errors: list[str] = []
    for calculator in catalogue.calculators:
        errors.extend(_validate_calculator(calculator))
    return errors


def validate_tax_rules(rules: TaxRules, catalogue: CalculatorCatalogue | None = None) -> list[str]:
    """Return issues in ``rules``, cross-checked against the tax calculator inputs."""

    errors: list[str] = []

    if rules.cess_percent > 100:
        errors.append(_format_scope("tax.cess_percent", "cess must not exceed 100%"))

    for name, regime in rules.regimes.items():
        rates = [slab.rate for slab in regime.slabs]
        if rates != sorted(rates):
            errors.append(_format_scope(f"tax.regimes.{name}", "slab rates should not decrease"))

    if rules.regimes["new"].allows_deductions:
        errors.append(_format_scope("tax.regimes.new", "the new regime does not allow deductions"))

    if catalogue is not None:
        try:
            calculator = catalogue.get(TAX_CALCULATOR)
        except KeyError:
            errors.append(
                _format_scope("tax", f"catalogue does not declare '{TAX_CALCULATOR}'")
            )
        else:
            declared = set(calculator.input_names)
            for section in rules.deductions:
                missing = sorted(set(section.components) - declared)
                if missing:
                    errors.append(
                        _format_scope(
                            f"tax.deductions.{section.id}",
                            f"components are not calculator inputs: {missing}",
                        )
                    )

    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        description="Validate the calculator catalogue and tax rules before deploying."
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    parser.parse_args(argv)

    exit_code = 0
    catalogue: CalculatorCatalogue | None = None

    try:
        catalogue = load_catalogue()
    except (ConfigurationError, FileNotFoundError) as error:
        print(f"[calculators] failed to load configuration: {error}")
        exit_code = 1
    else:
        exit_code |= _report("calculators", validate_catalogue(catalogue))

    try:
        rules = load_tax_rules()
    except (ConfigurationError, FileNotFoundError) as error:
        print(f"[tax] failed to load configuration: {error}")
        exit_code = 1
    else:
        exit_code |= _report("tax", validate_tax_rules(rules, catalogue))

    return exit_code


def _report(scope: str, issues: list[str]) -> int:
    if not issues:
        print(f"[{scope}] OK")
        return 0
    print(f"[{scope}] {len(issues)} issue(s) detected:")
    for issue in issues:
        print(f"  - {issue}")
    return 1


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
