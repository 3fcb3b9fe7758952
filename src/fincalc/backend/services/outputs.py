"""Untranslated result layouts produced by calculator adapters.

Adapters describe *what* to show (values, their kinds and the translation
keys derived from their identifiers); the response builder turns these into
labelled, formatted payloads for a locale.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

ValueKind = Literal["currency", "compact", "percent", "number", "text", "label", "month"]
ChartType = Literal["line", "bar", "area", "pie"]


@dataclass(frozen=True)
class CardSpec:
    """A headline figure; its title key is ``cards.<id>``."""

    id: str
    value: Any
    kind: ValueKind = "currency"
    description: str | None = None
    params: Mapping[str, tuple[Any, ValueKind]] = field(default_factory=dict)
    highlight: bool = False


@dataclass(frozen=True)
class ColumnSpec:
    key: str
    kind: ValueKind = "currency"


@dataclass(frozen=True)
class TableSpec:
    """A tabular breakdown; its title key is ``tables.<id>``."""

    id: str
    columns: tuple[ColumnSpec, ...]
    rows: Sequence[Mapping[str, Any]]


@dataclass(frozen=True)
class ChartSpec:
    """A chart; its title key is ``charts.<id>`` and series use ``columns.<key>``."""

    id: str
    type: ChartType
    x_key: str
    series: tuple[str, ...]
    data: Sequence[Mapping[str, Any]]


@dataclass(frozen=True)
class CalculatorOutput:
    cards: tuple[CardSpec, ...]
    tables: tuple[TableSpec, ...] = ()
    charts: tuple[ChartSpec, ...] = ()


def columns(*keys: str, kind: ValueKind = "currency", **kinds: ValueKind) -> tuple[ColumnSpec, ...]:
    """Build column specs; ``kinds`` overrides the default ``kind`` per key."""

    return tuple(ColumnSpec(key=key, kind=kinds.get(key, kind)) for key in keys)


__all__ = [
    "CalculatorOutput",
    "CardSpec",
    "ChartSpec",
    "ChartType",
    "ColumnSpec",
    "TableSpec",
    "ValueKind",
    "columns",
]
