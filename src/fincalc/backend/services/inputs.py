"""Bounded input controls that keep calculator parameters in range.

Every submitted value passes through an :class:`InputControl` before a
calculator sees it. Values outside the declared range are clamped to the
nearest bound and unparseable values are ignored in favour of the current
value; both outcomes are recorded as :class:`Adjustment` entries instead of
being reported as request errors.
"""

from __future__ import annotations

import math
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from fincalc.backend.config.schema import CalculatorDefinition, InputDefinition, InputKind

AdjustmentReason = Literal["clamped", "rejected"]

_TRUE_STRINGS = {"true"}
_FALSE_STRINGS = {"false"}


@dataclass(frozen=True)
class Adjustment:
    """Records how a submitted value was changed before calculation."""

    field: str
    reason: AdjustmentReason
    submitted: Any
    applied: Any

    def as_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "reason": self.reason,
            "submitted": self.submitted,
            "applied": self.applied,
        }


@dataclass(frozen=True)
class ResolvedInputs:
    values: dict[str, Any]
    adjustments: tuple[Adjustment, ...] = ()


def _parse_number(raw: Any) -> float | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        try:
            number = float(raw)
        except OverflowError:
            # Past the float range; keep the sign so clamping picks the right bound.
            return sys.float_info.max if raw > 0 else -sys.float_info.max
    elif isinstance(raw, float):
        number = raw
    elif isinstance(raw, str):
        text = raw.strip().replace(",", "")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


@dataclass(frozen=True)
class InputControl:
    """A single bounded control with its effective (resolved) range."""

    name: str
    kind: InputKind = "range"
    minimum: float = 0.0
    maximum: float = 0.0
    step: float | None = None
    default: Any = None
    integer: bool = False
    choices: tuple[Any, ...] = field(default_factory=tuple)

    @classmethod
    def from_definition(
        cls, definition: InputDefinition, values: Mapping[str, Any] | None = None
    ) -> InputControl:
        """Build a control, resolving dependent bounds against ``values``."""

        minimum = definition.minimum if definition.minimum is not None else 0.0
        maximum = definition.maximum if definition.maximum is not None else 0.0

        if values is not None and definition.kind == "range":
            if definition.max_field is not None:
                source = _parse_number(values.get(definition.max_field))
                if source is not None:
                    maximum = min(maximum, source * definition.max_factor)
            if definition.min_field is not None:
                source = _parse_number(values.get(definition.min_field))
                if source is not None:
                    minimum = max(minimum, source + definition.min_offset)
            maximum = max(maximum, definition.minimum or 0.0)
            minimum = min(minimum, maximum)

        return cls(
            name=definition.name,
            kind=definition.kind,
            minimum=minimum,
            maximum=maximum,
            step=definition.step,
            default=definition.default,
            integer=definition.integer,
            choices=definition.choices,
        )

    def clamp(self, value: float) -> float | int:
        """Return ``value`` limited to ``[minimum, maximum]``."""

        if self.integer:
            value = float(round(value))
        bounded = min(max(value, self.minimum), self.maximum)
        if self.integer:
            return int(round(bounded))
        return bounded

    def parse(self, raw: Any, current: Any) -> tuple[Any, Adjustment | None]:
        """Convert ``raw`` into a valid value, falling back to ``current``."""

        if self.kind == "choice":
            return self._parse_choice(raw, current)
        if self.kind == "toggle":
            return self._parse_toggle(raw, current)
        if self.kind == "months":
            return self._parse_months(raw, current)

        number = _parse_number(raw)
        if number is None:
            return current, Adjustment(self.name, "rejected", raw, current)

        value = self.clamp(number)
        expected = float(round(number)) if self.integer else number
        if value != expected:
            return value, Adjustment(self.name, "clamped", raw, value)
        return value, None

    def _parse_choice(self, raw: Any, current: Any) -> tuple[Any, Adjustment | None]:
        if not isinstance(raw, bool):
            number = _parse_number(raw)
            for choice in self.choices:
                if raw == choice or (number is not None and _parse_number(choice) == number):
                    return choice, None
        return current, Adjustment(self.name, "rejected", raw, current)

    def _parse_toggle(self, raw: Any, current: Any) -> tuple[Any, Adjustment | None]:
        if isinstance(raw, bool):
            return raw, None
        if isinstance(raw, str):
            text = raw.strip().lower()
            if text in _TRUE_STRINGS:
                return True, None
            if text in _FALSE_STRINGS:
                return False, None
        return current, Adjustment(self.name, "rejected", raw, current)

    def _parse_months(self, raw: Any, current: Any) -> tuple[Any, Adjustment | None]:
        if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
            return current, Adjustment(self.name, "rejected", raw, current)

        months: set[int] = set()
        dropped = False
        for entry in raw:
            number = _parse_number(entry)
            if number is None or not number.is_integer() or not 1 <= number <= 12:
                dropped = True
                continue
            months.add(int(number))

        value = sorted(months)
        if dropped:
            return value, Adjustment(self.name, "clamped", list(raw), value)
        return value, None


def resolve_inputs(
    definition: CalculatorDefinition,
    submitted: Mapping[str, Any] | None = None,
    current: Mapping[str, Any] | None = None,
) -> ResolvedInputs:
    """Merge ``submitted`` changes over ``current`` values (or the defaults).

    Inputs are processed in declaration order so that dependent bounds see the
    already-resolved value of the field they reference. A value that was not
    submitted is still re-clamped when its bounds moved.
    """

    submitted = submitted or {}
    base = dict(current) if current is not None else definition.defaults()
    values: dict[str, Any] = {}
    adjustments: list[Adjustment] = []

    for name in submitted:
        if name not in definition.input_names:
            adjustments.append(Adjustment(str(name), "rejected", submitted[name], None))

    for input_definition in definition.inputs:
        control = InputControl.from_definition(input_definition, values)
        previous = base.get(input_definition.name, input_definition.default)

        if input_definition.name in submitted:
            value, adjustment = control.parse(submitted[input_definition.name], previous)
        else:
            value, adjustment = previous, None

        if control.kind == "range":
            number = _parse_number(value)
            if number is None:
                number = float(input_definition.default)
            bounded = control.clamp(number)
            if adjustment is None and bounded != number:
                adjustment = Adjustment(input_definition.name, "clamped", value, bounded)
            elif adjustment is not None and adjustment.applied != bounded:
                adjustment = Adjustment(
                    input_definition.name, adjustment.reason, adjustment.submitted, bounded
                )
            value = bounded

        values[input_definition.name] = value
        if adjustment is not None:
            adjustments.append(adjustment)

    return ResolvedInputs(values=values, adjustments=tuple(adjustments))


__all__ = [
    "Adjustment",
    "AdjustmentReason",
    "InputControl",
    "ResolvedInputs",
    "resolve_inputs",
]
