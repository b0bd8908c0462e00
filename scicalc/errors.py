"""
Error taxonomies and the Outcome value shared by every layer.

``CalcError`` is what the numeric primitives and the session facade report.
``ParseErrorKind`` is what the parser and the function dispatcher report.
Each member's value is its display message.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class CalcError(Enum):
    INVALID_INPUT = "Invalid input"
    DIVISION_BY_ZERO = "Division by zero"
    DOMAIN_ERROR = "Domain error"
    OVERFLOW = "Overflow error"
    UNDERFLOW = "Underflow error"
    MEMORY_ERROR = "Memory error"
    INVALID_FUNCTION = "Invalid function"
    PARSE_ERROR = "Parse error"


class ParseErrorKind(Enum):
    INVALID_CHARACTER = "Invalid character"
    MISMATCHED_PARENTHESES = "Mismatched parentheses"
    INVALID_FUNCTION = "Invalid function"
    INVALID_SYNTAX = "Invalid syntax"
    DIVISION_BY_ZERO = "Division by zero"
    DOMAIN_ERROR = "Domain error"
    TOO_MANY_ARGUMENTS = "Too many arguments"
    TOO_FEW_ARGUMENTS = "Too few arguments"


ErrorKind = Union[CalcError, ParseErrorKind]


class CalculationError(ArithmeticError):
    """Raised inside a numeric primitive when a guard rejects its input"""

    def __init__(self, kind: CalcError):
        super().__init__(kind.value)
        self.kind = kind


class ParseError(ValueError):
    """Raised inside the parser; carries the kind and the cursor offset"""

    def __init__(self, kind: ParseErrorKind, position: int):
        super().__init__(f"{kind.value} at position {position}")
        self.kind = kind
        self.position = position


@dataclass(frozen=True)
class Outcome:
    """Either a value or an error, never both"""
    value: Optional[float] = None
    error: Optional[ErrorKind] = None
    position: Optional[int] = None
    message: str = ""
    expression: Optional[str] = None

    def __post_init__(self):
        if (self.value is None) == (self.error is None):
            raise ValueError("Outcome needs exactly one of value or error")

    @classmethod
    def success(cls, value: float) -> "Outcome":
        return cls(value=value)

    @classmethod
    def failure(cls,
                error: ErrorKind,
                position: Optional[int] = None,
                message: Optional[str] = None,
                expression: Optional[str] = None) -> "Outcome":
        return cls(
            error=error,
            position=position,
            message=error.value if message is None else message,
            expression=expression,
        )

    @property
    def ok(self) -> bool:
        return self.error is None
