"""
Pull tokenizer for calculator expressions.

``next_token`` never fails: any character it cannot classify comes back as
an UNKNOWN token and the parser decides what to do with it.
"""

import re
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from . import primitives
from .config import MAX_TOKEN_LENGTH
from .dispatch import Function, lookup_function
from .state import CalculatorState


class TokenKind(Enum):
    NUMBER = "NUMBER"
    OPERATOR = "OPERATOR"
    FUNCTION = "FUNCTION"
    VARIABLE = "VARIABLE"
    CONSTANT = "CONSTANT"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    COMMA = "COMMA"
    END = "END"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int
    value: float = 0.0
    function: Optional[Function] = None


CONSTANTS: Dict[str, float] = {
    'pi': primitives.PI,
    'π': primitives.PI,
    'e': primitives.E,
    'phi': primitives.PHI,
    'φ': primitives.PHI,
    'sqrt2': primitives.SQRT2,
    '√2': primitives.SQRT2,
    'ln2': primitives.LN2,
    'ln10': primitives.LN10,
}

OPERATORS = '+-*/^%'

_PUNCTUATION = {
    '(': TokenKind.LPAREN,
    ')': TokenKind.RPAREN,
    ',': TokenKind.COMMA,
}

_IDENTIFIER_SYMBOLS = '_√πφ'

# Longest prefix of a scanned number run that is a valid float
_NUMBER_PREFIX = re.compile(r'(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


@dataclass
class ParseContext:
    """Cursor over one expression; lives for a single evaluation"""
    source: str
    state: Optional[CalculatorState] = None
    position: int = 0
    current: Optional[Token] = None
    length: int = field(init=False)

    def __post_init__(self):
        self.length = len(self.source)


def _is_identifier_start(ch: str) -> bool:
    return ch in string.ascii_letters or ch in _IDENTIFIER_SYMBOLS


def _is_identifier_char(ch: str) -> bool:
    return _is_identifier_start(ch) or ch in string.digits


def _skip_whitespace(ctx: ParseContext):
    while ctx.position < ctx.length and ctx.source[ctx.position].isspace():
        ctx.position += 1


def has_digits(text: str) -> bool:
    """True when a scanned number starts with a usable numeric literal"""
    return _NUMBER_PREFIX.match(text) is not None


def number_value(text: str) -> float:
    """Parse the valid numeric prefix of a scanned number, 0.0 if none"""
    match = _NUMBER_PREFIX.match(text)
    return float(match.group()) if match else 0.0


def _read_number(ctx: ParseContext) -> Token:
    start = ctx.position
    has_dot = False
    has_exponent = False

    while ctx.position < ctx.length:
        ch = ctx.source[ctx.position]

        if ch in string.digits:
            ctx.position += 1
        elif ch == '.' and not has_dot and not has_exponent:
            has_dot = True
            ctx.position += 1
        elif ch in 'eE' and not has_exponent:
            has_exponent = True
            ctx.position += 1
            # Optional sign after the exponent marker
            if ctx.position < ctx.length and ctx.source[ctx.position] in '+-':
                ctx.position += 1
        else:
            break

    text = ctx.source[start:ctx.position]
    return Token(TokenKind.NUMBER, text[:MAX_TOKEN_LENGTH], start, value=number_value(text))


def _read_identifier(ctx: ParseContext) -> Token:
    start = ctx.position
    while ctx.position < ctx.length and _is_identifier_char(ctx.source[ctx.position]):
        ctx.position += 1

    name = ctx.source[start:ctx.position]
    text = name[:MAX_TOKEN_LENGTH]

    function = lookup_function(name)
    if function is not None:
        return Token(TokenKind.FUNCTION, text, start, function=function)
    if name in CONSTANTS:
        return Token(TokenKind.CONSTANT, text, start, value=CONSTANTS[name])
    return Token(TokenKind.VARIABLE, text, start)


def next_token(ctx: ParseContext) -> Token:
    """Read the token at the cursor and advance past it"""
    _skip_whitespace(ctx)
    start = ctx.position

    if start >= ctx.length:
        return Token(TokenKind.END, '', start)

    ch = ctx.source[start]

    # Numbers (including decimals and scientific notation)
    if ch in string.digits or ch == '.':
        return _read_number(ctx)

    if ch in OPERATORS:
        ctx.position += 1
        return Token(TokenKind.OPERATOR, ch, start)

    if ch in _PUNCTUATION:
        ctx.position += 1
        return Token(_PUNCTUATION[ch], ch, start)

    # Functions, constants and variables
    if _is_identifier_start(ch):
        return _read_identifier(ctx)

    ctx.position += 1
    return Token(TokenKind.UNKNOWN, ch, start)


def tokenize(expression: str) -> List[Token]:
    """Convert a whole expression into tokens, END included"""
    ctx = ParseContext(expression)
    tokens = []
    while True:
        token = next_token(ctx)
        tokens.append(token)
        if token.kind == TokenKind.END:
            return tokens
