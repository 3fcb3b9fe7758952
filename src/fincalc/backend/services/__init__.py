"""Service-layer helpers for the FinCalc backend."""

from .adapters import bind_adapter
from .inputs import Adjustment, InputControl, resolve_inputs
from .page import CalculatorPage, PageState
from .request_parser import parse_calculation_payload
from .response_builder import build_calculation_response, build_result_payload

__all__ = [
    "Adjustment",
    "CalculatorPage",
    "InputControl",
    "PageState",
    "bind_adapter",
    "build_calculation_response",
    "build_result_payload",
    "parse_calculation_payload",
    "resolve_inputs",
]
