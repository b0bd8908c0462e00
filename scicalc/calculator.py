"""
Session facade: the single evaluation entry point and a Calculator object
that adds history and memory keys on top of a CalculatorState.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, List, Optional

from .config import HISTORY_LIMIT, MAX_EXPRESSION_LENGTH
from .errors import CalcError, Outcome
from .formatting import format_outcome, format_result
from .parser import parse_expression
from .state import (
    AngleUnit,
    CalculatorState,
    create_state,
    memory_add,
    memory_clear,
    memory_recall,
    memory_store,
    memory_subtract,
    reset_state,
)

logger = logging.getLogger(__name__)


def evaluate(expression: Optional[str], state: Optional[CalculatorState]) -> Outcome:
    """Evaluate an expression, updating the state's last answer on success.

    The expression text is recorded in the state whatever the outcome. Any
    parser failure is reported as CalcError.PARSE_ERROR; the specific parse
    error is only logged.
    """
    if not expression or state is None:
        return Outcome.failure(CalcError.INVALID_INPUT, expression=expression)

    state.last_expression = expression[:MAX_EXPRESSION_LENGTH]

    result = parse_expression(expression, state)
    if not result.ok:
        logger.warning(f"Calculation error: {expression!r}: {CalcError.PARSE_ERROR.value}")
        return Outcome.failure(CalcError.PARSE_ERROR, expression=expression)

    state.last_result = result.value
    logger.info(f"Calculation result: {expression} = {result.value}")
    return Outcome.success(result.value)


@dataclass
class HistoryEntry:
    expression: str
    result: float
    timestamp: datetime = field(default_factory=datetime.now)


class Calculator:
    """Calculator session with memory, history and angle mode"""

    def __init__(self,
                 state: Optional[CalculatorState] = None,
                 history_limit: int = HISTORY_LIMIT):
        self.state = state if state is not None else create_state()
        self.history: Deque[HistoryEntry] = deque(maxlen=history_limit)

    def evaluate(self, expression: str, degrees: Optional[bool] = None) -> Outcome:
        """Evaluate expression, optionally switching angle mode first"""
        if degrees is not None:
            self.set_angle_unit(AngleUnit.DEGREES if degrees else AngleUnit.RADIANS)

        outcome = evaluate(expression, self.state)
        if outcome.ok:
            self.history.appendleft(HistoryEntry(expression, outcome.value))
        return outcome

    def format(self, outcome: Outcome) -> str:
        return format_outcome(outcome, self.state.precision)

    def format_value(self, value: float) -> str:
        return format_result(value, self.state.precision)

    @property
    def last_result(self) -> float:
        return self.state.last_result

    @property
    def angle_unit(self) -> AngleUnit:
        return self.state.angle_unit

    def set_angle_unit(self, unit: AngleUnit):
        if unit != self.state.angle_unit:
            logger.info(f"Angle mode: {unit.value}")
        self.state.angle_unit = unit

    def set_precision(self, precision: int):
        if precision < 0:
            raise ValueError("Precision cannot be negative")
        self.state.precision = precision

    # Memory keys

    def memory_store(self, value: float):
        memory_store(self.state, value)

    def memory_add(self, value: float):
        memory_add(self.state, value)

    def memory_subtract(self, value: float):
        memory_subtract(self.state, value)

    def memory_recall(self) -> float:
        return memory_recall(self.state)

    def memory_clear(self):
        memory_clear(self.state)

    def recent_history(self, n: int = 10) -> List[HistoryEntry]:
        """Last n successful calculations, most recent first"""
        return list(self.history)[:n]

    def clear_history(self):
        self.history.clear()

    def reset(self):
        """Clear history and return the state to its defaults"""
        reset_state(self.state)
        self.clear_history()
