"""Pydantic models describing the public API surface."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

__all__ = [
    "AdjustmentEntry",
    "CalculationRequest",
    "CalculationResponse",
    "Card",
    "Chart",
    "ChartSeries",
    "ResponseMeta",
    "Table",
    "TableColumn",
    "format_validation_error",
]


class CalculationRequest(BaseModel):
    """Payload accepted by the calculation endpoint."""

    model_config = ConfigDict(extra="forbid")

    inputs: dict[str, Any] = Field(default_factory=dict)
    locale: str = Field(default="en")

    @field_validator("locale", mode="before")
    @classmethod
    def _normalise_locale(cls, value: Any) -> str:
        if value is None:
            return "en"
        text = str(value).strip()
        return text or "en"

    @field_validator("inputs", mode="before")
    @classmethod
    def _normalise_inputs(cls, value: Any) -> Mapping[str, Any]:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return {str(key): entry for key, entry in value.items()}
        raise ValueError("Inputs section must be an object mapping field names to values")


class Card(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    title: str
    value: Any
    formatted: str | None
    kind: str
    description: str | None = None
    highlight: bool | None = None


class TableColumn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    key: str
    label: str
    kind: str


class Table(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    title: str
    columns: list[TableColumn]
    rows: list[dict[str, Any]]


class ChartSeries(BaseModel):
    model_config = ConfigDict(extra="forbid")

    key: str
    label: str


class Chart(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    type: Literal["line", "bar", "area", "pie"]
    title: str
    x_key: str
    series: list[ChartSeries]
    data: list[dict[str, Any]]


class AdjustmentEntry(BaseModel):
    """An input that was clamped or ignored before calculation."""

    model_config = ConfigDict(extra="forbid")

    field: str
    reason: Literal["clamped", "rejected"]
    submitted: Any = None
    applied: Any = None


class ResponseMeta(BaseModel):
    """Metadata returned alongside the calculation output."""

    model_config = ConfigDict(extra="forbid")

    calculator: str
    title: str
    locale: str
    currency: str
    adjustments: list[AdjustmentEntry] = Field(default_factory=list)
    timings: dict[str, float] | None = None


class CalculationResponse(BaseModel):
    """Full response payload produced by the calculation service."""

    model_config = ConfigDict(extra="forbid")

    inputs: dict[str, Any]
    cards: list[Card]
    tables: list[Table]
    charts: list[Chart]
    meta: ResponseMeta


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid calculation payload: {details}"
