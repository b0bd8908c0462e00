"""
Display formatting for calculator results
"""

from .config import (
    DEFAULT_PRECISION,
    PLAIN_INTEGER_LIMIT,
    SCIENTIFIC_LOWER,
    SCIENTIFIC_UPPER,
)
from .errors import Outcome


def format_result(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Format a value based on its magnitude"""
    value = float(value)
    if value == 0:
        return "0"

    magnitude = abs(value)

    if value.is_integer() and magnitude < PLAIN_INTEGER_LIMIT:
        return f"{value:.0f}"
    if magnitude >= SCIENTIFIC_UPPER or magnitude < SCIENTIFIC_LOWER:
        return f"{value:.{precision}e}"
    return f"{value:.{precision}g}"


def format_outcome(outcome: Outcome, precision: int = DEFAULT_PRECISION) -> str:
    if not outcome.ok:
        return f"ERROR: {outcome.message}"
    return format_result(outcome.value, precision)
