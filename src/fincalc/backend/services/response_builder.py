"""Utilities for serialising calculation responses."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Tuple

from flask import jsonify

from .calculators import round_currency, round_rate
from .formatting import format_compact, format_currency, format_number, format_percent
from .outputs import CalculatorOutput, CardSpec, ChartSpec, TableSpec, ValueKind

if TYPE_CHECKING:  # pragma: no cover - typing only
    from fincalc.backend.app.localization import Translator

ResponseTuple = Tuple[Any, int]


def _raw_value(value: Any, kind: ValueKind) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    if kind in {"currency", "compact"}:
        return round_currency(value)
    if isinstance(value, float):
        return round_rate(value)
    return value


def format_value(value: Any, kind: ValueKind, translator: Translator) -> str | None:
    """Return the display string for ``value`` according to ``kind``."""

    if value is None:
        return None
    if kind == "label":
        return translator(f"labels.{value}")
    if kind == "month":
        return translator(f"months.{value}")
    if kind == "text" or isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if kind == "currency":
        return format_currency(value)
    if kind == "compact":
        return format_compact(value)
    if kind == "percent":
        return format_percent(value)
    return format_number(value, 0 if float(value).is_integer() else 2)


def _build_card(card: CardSpec, translator: Translator) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": card.id,
        "title": translator(f"cards.{card.id}"),
        "value": _raw_value(card.value, card.kind),
        "formatted": format_value(card.value, card.kind, translator),
        "kind": card.kind,
    }
    if card.highlight:
        payload["highlight"] = True
    if card.description:
        params = {
            name: format_value(value, kind, translator)
            for name, (value, kind) in card.params.items()
        }
        payload["description"] = translator.format(card.description, **params)
    return payload


def _build_table(table: TableSpec, translator: Translator) -> dict[str, Any]:
    rows = []
    for row in table.rows:
        rows.append(
            {
                column.key: _raw_value(row.get(column.key), column.kind)
                for column in table.columns
            }
        )
        for column in table.columns:
            if column.kind in {"label", "month"}:
                rows[-1][f"{column.key}_label"] = format_value(
                    row.get(column.key), column.kind, translator
                )
    return {
        "id": table.id,
        "title": translator(f"tables.{table.id}"),
        "columns": [
            {
                "key": column.key,
                "label": translator(f"columns.{column.key}"),
                "kind": column.kind,
            }
            for column in table.columns
        ],
        "rows": rows,
    }


def _build_chart(chart: ChartSpec, translator: Translator) -> dict[str, Any]:
    data = []
    for point in chart.data:
        entry = {chart.x_key: point.get(chart.x_key)}
        for key in chart.series:
            entry[key] = _raw_value(point.get(key), "currency")
        if chart.x_key == "id":
            entry["label"] = translator(f"labels.{point.get('id')}")
        data.append(entry)
    return {
        "id": chart.id,
        "type": chart.type,
        "title": translator(f"charts.{chart.id}"),
        "x_key": chart.x_key,
        "series": [
            {"key": key, "label": translator(f"columns.{key}")} for key in chart.series
        ],
        "data": data,
    }


def build_result_payload(output: CalculatorOutput, translator: Translator) -> dict[str, Any]:
    """Translate and format an adapter's output for ``translator.locale``."""

    return {
        "cards": [_build_card(card, translator) for card in output.cards],
        "tables": [_build_table(table, translator) for table in output.tables],
        "charts": [_build_chart(chart, translator) for chart in output.charts],
    }


def build_calculation_response(payload: Mapping[str, Any]) -> ResponseTuple:
    """Return a Flask JSON response for the calculation ``payload``."""

    return jsonify(payload), 200


__all__ = ["build_calculation_response", "build_result_payload", "format_value"]
