"""Pydantic models describing the calculator catalogue and tax rule schema."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self

InputKind = Literal["range", "choice", "toggle", "months"]
CalculatorCategory = Literal["loans", "investments", "other"]


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class InputDefinition(ImmutableModel):
    """Declares one bounded input of a calculator form."""

    name: str
    kind: InputKind = "range"
    minimum: float | None = Field(default=None, alias="min")
    maximum: float | None = Field(default=None, alias="max")
    step: float | None = None
    default: Any = None
    integer: bool = False
    unit: str | None = None
    choices: tuple[Any, ...] = ()
    max_field: str | None = None
    max_factor: float = 1.0
    min_field: str | None = None
    min_offset: float = 0.0

    @field_validator("choices", mode="before")
    @classmethod
    def _coerce_choices(cls, value: Any) -> tuple[Any, ...]:
        if value is None:
            return ()
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        raise ConfigurationError("Input choices must be provided as a list")

    @model_validator(mode="after")
    def _validate_definition(self) -> Self:
        if self.kind == "range":
            self._validate_range()
        elif self.kind == "choice":
            if not self.choices:
                raise ConfigurationError(f"Choice input '{self.name}' requires choices")
            if self.default not in self.choices:
                raise ConfigurationError(
                    f"Default for '{self.name}' must be one of its choices"
                )
        elif self.kind == "toggle":
            if not isinstance(self.default, bool):
                raise ConfigurationError(f"Toggle input '{self.name}' needs a boolean default")
        elif self.kind == "months":
            default = self.default if self.default is not None else []
            if not isinstance(default, Sequence) or isinstance(default, str):
                raise ConfigurationError(f"Months input '{self.name}' needs a list default")
            if any(not _is_number(month) or not 1 <= month <= 12 for month in default):
                raise ConfigurationError(
                    f"Months input '{self.name}' defaults must be calendar months 1-12"
                )
        return self

    def _validate_range(self) -> None:
        if self.minimum is None or self.maximum is None:
            raise ConfigurationError(f"Range input '{self.name}' requires min and max")
        if self.minimum > self.maximum:
            raise ConfigurationError(f"Range input '{self.name}' has min above max")
        if self.step is None or self.step <= 0:
            raise ConfigurationError(f"Range input '{self.name}' requires a positive step")
        if not _is_number(self.default):
            raise ConfigurationError(f"Range input '{self.name}' needs a numeric default")
        if self.max_factor <= 0:
            raise ConfigurationError(f"Range input '{self.name}' needs a positive max_factor")

    @property
    def has_dependent_bounds(self) -> bool:
        return self.max_field is not None or self.min_field is not None


class CalculatorDefinition(ImmutableModel):
    """A calculator page: its route slug, category, options and inputs."""

    slug: str
    category: CalculatorCategory
    inputs: tuple[InputDefinition, ...]
    options: Mapping[str, Any] = Field(default_factory=dict)

    @field_validator("inputs", mode="before")
    @classmethod
    def _coerce_inputs(cls, value: Any) -> Sequence[Any]:
        if isinstance(value, Mapping):
            prepared = []
            for name, definition in value.items():
                if not isinstance(definition, Mapping):
                    raise ConfigurationError(f"Input '{name}' must be a mapping")
                prepared.append({"name": str(name), **definition})
            return prepared
        if isinstance(value, Sequence) and not isinstance(value, str):
            return value
        raise ConfigurationError("Calculator inputs must be a mapping of definitions")

    @model_validator(mode="after")
    def _validate_references(self) -> Self:
        if not self.inputs:
            raise ConfigurationError(f"Calculator '{self.slug}' declares no inputs")
        seen: set[str] = set()
        for definition in self.inputs:
            if definition.name in seen:
                raise ConfigurationError(
                    f"Calculator '{self.slug}' declares '{definition.name}' twice"
                )
            for reference in (definition.max_field, definition.min_field):
                if reference is not None and reference not in seen:
                    raise ConfigurationError(
                        f"Input '{definition.name}' of '{self.slug}' depends on "
                        f"'{reference}', which must be declared before it"
                    )
            seen.add(definition.name)
        return self

    @property
    def input_names(self) -> tuple[str, ...]:
        return tuple(definition.name for definition in self.inputs)

    def defaults(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for definition in self.inputs:
            default = definition.default
            if definition.kind == "months":
                default = sorted({int(month) for month in default or ()})
            values[definition.name] = default
        return values


class CalculatorCatalogue(ImmutableModel):
    """Top-level catalogue of every calculator exposed by the service."""

    currency: str = "INR"
    currency_symbol: str = "₹"
    number_locale: str = "en-IN"
    calculators: tuple[CalculatorDefinition, ...]

    @model_validator(mode="after")
    def _validate_slugs(self) -> Self:
        seen: set[str] = set()
        for calculator in self.calculators:
            if calculator.slug in seen:
                raise ConfigurationError(
                    f"Duplicate calculator '{calculator.slug}' declared in the catalogue"
                )
            seen.add(calculator.slug)
        return self

    def get(self, slug: str) -> CalculatorDefinition:
        for calculator in self.calculators:
            if calculator.slug == slug:
                return calculator
        raise KeyError(slug)

    @computed_field
    @property
    def slugs(self) -> tuple[str, ...]:
        return tuple(calculator.slug for calculator in self.calculators)


class TaxSlab(ImmutableModel):
    """Represents a single income tax slab; ``rate`` is a percentage."""

    upper_bound: float | None = Field(default=None, alias="upper")
    rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> Self:
        if not 0 <= self.rate <= 100:
            raise ConfigurationError("Slab rates must be percentages between 0 and 100")
        if self.upper_bound is not None and self.upper_bound <= 0:
            raise ConfigurationError("Upper bounds must be positive values")
        return self


class TaxRegime(ImmutableModel):
    """Slab table for one regime and whether deductions reduce its base."""

    allows_deductions: bool = False
    slabs: tuple[TaxSlab, ...]

    @model_validator(mode="after")
    def _validate_slabs(self) -> Self:
        if not self.slabs:
            raise ConfigurationError("At least one tax slab must be defined")
        last_upper: float | None = None
        for slab in self.slabs[:-1]:
            upper = slab.upper_bound
            if upper is None:
                raise ConfigurationError("Only the final tax slab may be open-ended")
            if last_upper is not None and upper <= last_upper:
                raise ConfigurationError("Tax slabs must be in strictly ascending order")
            last_upper = upper
        if self.slabs[-1].upper_bound is not None:
            raise ConfigurationError("Final tax slab must have an open upper bound")
        return self


class DeductionSection(ImmutableModel):
    """A deduction section summing investment components up to a cap."""

    id: str
    cap: float | None = None
    components: tuple[str, ...]

    @model_validator(mode="after")
    def _validate_section(self) -> Self:
        if self.cap is not None and self.cap < 0:
            raise ConfigurationError(f"Deduction cap for '{self.id}' must be non-negative")
        if not self.components:
            raise ConfigurationError(f"Deduction section '{self.id}' lists no components")
        return self


class TaxRules(ImmutableModel):
    """Income tax rules used by the tax-saving calculator."""

    cess_percent: float = 4.0
    regimes: Mapping[str, TaxRegime]
    deductions: tuple[DeductionSection, ...] = ()

    @model_validator(mode="after")
    def _validate_rules(self) -> Self:
        if self.cess_percent < 0:
            raise ConfigurationError("Cess must be non-negative")
        missing = {"old", "new"} - set(self.regimes)
        if missing:
            raise ConfigurationError(
                f"Tax rules must define regimes: {', '.join(sorted(missing))}"
            )
        components: set[str] = set()
        for section in self.deductions:
            overlap = components.intersection(section.components)
            if overlap:
                raise ConfigurationError(
                    f"Components counted by more than one section: {sorted(overlap)}"
                )
            components.update(section.components)
        return self

    @property
    def deduction_components(self) -> tuple[str, ...]:
        return tuple(
            component for section in self.deductions for component in section.components
        )


__all__ = [
    "CalculatorCatalogue",
    "CalculatorCategory",
    "CalculatorDefinition",
    "ConfigurationError",
    "DeductionSection",
    "ImmutableModel",
    "InputDefinition",
    "InputKind",
    "TaxRegime",
    "TaxRules",
    "TaxSlab",
    "ValidationError",
]
