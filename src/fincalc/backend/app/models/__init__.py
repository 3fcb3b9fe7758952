"""Typed request/response models shared by the calculation endpoints."""

from __future__ import annotations

from .api import (
    AdjustmentEntry,
    CalculationRequest,
    CalculationResponse,
    Card,
    Chart,
    ChartSeries,
    ResponseMeta,
    Table,
    TableColumn,
    format_validation_error,
)

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
