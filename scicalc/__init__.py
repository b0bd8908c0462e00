"""
Scientific calculator: tokenizer, recursive descent evaluator, function
dispatcher and guarded numeric primitives behind one evaluate() call.
"""

from .calculator import Calculator, HistoryEntry, evaluate
from .dispatch import Function, evaluate_function
from .errors import CalcError, CalculationError, Outcome, ParseError, ParseErrorKind
from .formatting import format_outcome, format_result
from .parser import ExpressionParser, parse_expression
from .primitives import ComplexNumber
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
from .tokenizer import ParseContext, Token, TokenKind, next_token, tokenize

__all__ = [
    "AngleUnit",
    "CalcError",
    "CalculationError",
    "Calculator",
    "CalculatorState",
    "ComplexNumber",
    "ExpressionParser",
    "Function",
    "HistoryEntry",
    "Outcome",
    "ParseContext",
    "ParseError",
    "ParseErrorKind",
    "Token",
    "TokenKind",
    "create_state",
    "evaluate",
    "evaluate_function",
    "format_outcome",
    "format_result",
    "memory_add",
    "memory_clear",
    "memory_recall",
    "memory_store",
    "memory_subtract",
    "next_token",
    "parse_expression",
    "reset_state",
    "tokenize",
]

__version__ = "1.0.0"
