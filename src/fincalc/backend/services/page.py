"""Calculator page state machine binding inputs to a calculator adapter."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from fincalc.backend.config.schema import CalculatorDefinition

from .inputs import Adjustment, resolve_inputs

_LOGGER = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")


class PageState(str, Enum):
    IDLE = "idle"
    RECOMPUTING = "recomputing"


class CalculatorPage(Generic[ResultT]):
    """Holds the current inputs and result of one calculator.

    ``update`` validates the changes, recomputes through the adapter and only
    then replaces inputs and result together. When the adapter raises, the
    previous inputs and result stay in place.
    """

    def __init__(
        self,
        definition: CalculatorDefinition,
        adapter: Callable[[Mapping[str, Any]], ResultT],
    ) -> None:
        self._definition = definition
        self._adapter = adapter
        self._state = PageState.IDLE
        self._inputs: Mapping[str, Any] = MappingProxyType(definition.defaults())
        self._adjustments: tuple[Adjustment, ...] = ()
        self._result: ResultT | None = None

    @property
    def definition(self) -> CalculatorDefinition:
        return self._definition

    @property
    def state(self) -> PageState:
        return self._state

    @property
    def inputs(self) -> Mapping[str, Any]:
        return self._inputs

    @property
    def adjustments(self) -> tuple[Adjustment, ...]:
        return self._adjustments

    @property
    def result(self) -> ResultT:
        if self._result is None:
            self._result = self.update({})
        return self._result

    def update(self, changes: Mapping[str, Any]) -> ResultT:
        """Apply ``changes`` and recompute the result atomically."""

        if self._state is PageState.RECOMPUTING:
            raise RuntimeError(
                f"Calculator '{self._definition.slug}' is already recomputing"
            )

        self._state = PageState.RECOMPUTING
        try:
            resolved = resolve_inputs(self._definition, changes, self._inputs)
            result = self._adapter(MappingProxyType(dict(resolved.values)))
        finally:
            self._state = PageState.IDLE

        self._inputs = MappingProxyType(resolved.values)
        self._adjustments = resolved.adjustments
        self._result = result
        if resolved.adjustments:
            _LOGGER.debug(
                "Adjusted %d input(s) for '%s': %s",
                len(resolved.adjustments),
                self._definition.slug,
                [adjustment.field for adjustment in resolved.adjustments],
            )
        return result


__all__ = ["CalculatorPage", "PageState"]
