"""
Calculator Session

Owns the current input snapshot and the metrics derived from it. Every
mutation reads the current snapshot, computes a new one, recomputes the
metrics and swaps both in a single assignment, so readers never observe
metrics from one snapshot paired with inputs from another.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable

from . import updates
from .models import CalculatorInputs, DerivedMetrics
from .output import OutputBuilder
from .processor import compute_metrics
from .validators import PayloadValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    """A snapshot and the metrics computed from it."""

    inputs: CalculatorInputs
    metrics: DerivedMetrics


class CalculatorSession:
    """Single-user calculator state with atomic recompute-and-swap."""

    def __init__(self, inputs: CalculatorInputs | None = None):
        self._state = self._recompute(inputs or CalculatorInputs())

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def inputs(self) -> CalculatorInputs:
        return self._state.inputs

    @property
    def metrics(self) -> DerivedMetrics:
        return self._state.metrics

    def apply(self, update: Callable[..., CalculatorInputs], *args) -> SessionState:
        """Run a snapshot setter from the updates module and swap in the result."""
        new_inputs = update(self._state.inputs, *args)
        self._state = self._recompute(new_inputs)
        return self._state

    def apply_operations(self, operations: Iterable[Dict[str, Any]]) -> SessionState:
        """
        Apply API operations in order.

        The swap happens once at the end; an invalid operation raises before
        anything is swapped and the session keeps its previous state.
        """
        new_inputs = self._state.inputs
        for operation in operations:
            new_inputs = updates.apply_operation(new_inputs, operation)
        self._state = self._recompute(new_inputs)
        return self._state

    def reset(self) -> SessionState:
        self._state = self._recompute(updates.reset())
        return self._state

    @staticmethod
    def _recompute(inputs: CalculatorInputs) -> SessionState:
        return SessionState(inputs=inputs, metrics=compute_metrics(inputs))


def update_from_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply API operations to a raw snapshot payload and build the response.

    Payload: {"inputs": {...}, "operations": [{"op": ...}, ...]}
    Raises ValueError for structural problems.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Payload must be a JSON object, got: {type(data).__name__}")

    raw_inputs = data.get("inputs", {})
    operations = data.get("operations", [])
    if not isinstance(operations, list):
        raise ValueError(f"operations must be a list, got: {type(operations).__name__}")

    PayloadValidator().validate(raw_inputs)
    session = CalculatorSession(CalculatorInputs.from_dict(raw_inputs))
    logger.info(f"Applying {len(operations)} operation(s)")
    state = session.apply_operations(operations)
    return OutputBuilder().build(state.inputs, state.metrics)
