"""
Caller-owned calculator session state and memory register operations
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import DEFAULT_DEGREES, DEFAULT_PRECISION

logger = logging.getLogger(__name__)


class AngleUnit(Enum):
    DEGREES = "DEG"
    RADIANS = "RAD"


DEFAULT_ANGLE_UNIT = AngleUnit.DEGREES if DEFAULT_DEGREES else AngleUnit.RADIANS


@dataclass
class CalculatorState:
    """Memory, last answer and mode settings for one calculator session"""
    memory: float = 0.0
    last_result: float = 0.0
    angle_unit: AngleUnit = DEFAULT_ANGLE_UNIT
    precision: int = DEFAULT_PRECISION
    last_expression: str = ""

    def __post_init__(self):
        if self.precision < 0:
            raise ValueError("Precision cannot be negative")

    @property
    def degrees(self) -> bool:
        return self.angle_unit == AngleUnit.DEGREES


def create_state() -> CalculatorState:
    return CalculatorState()


def reset_state(state: Optional[CalculatorState]) -> None:
    """Restore a state to its initial values"""
    if state is None:
        return
    state.memory = 0.0
    state.last_result = 0.0
    state.angle_unit = DEFAULT_ANGLE_UNIT
    state.precision = DEFAULT_PRECISION
    state.last_expression = ""
    logger.info("Calculator state reset")


# ==========================================
# MEMORY REGISTER
# ==========================================

def memory_store(state: Optional[CalculatorState], value: float) -> None:
    if state is not None:
        state.memory = float(value)
        logger.info(f"Memory stored: {value}")


def memory_add(state: Optional[CalculatorState], value: float) -> None:
    if state is not None:
        state.memory += float(value)
        logger.info(f"Memory added: {value}")


def memory_subtract(state: Optional[CalculatorState], value: float) -> None:
    if state is not None:
        state.memory -= float(value)
        logger.info(f"Memory subtracted: {value}")


def memory_recall(state: Optional[CalculatorState]) -> float:
    return float(state.memory) if state is not None else 0.0


def memory_clear(state: Optional[CalculatorState]) -> None:
    if state is not None:
        state.memory = 0.0
        logger.info("Memory cleared")
