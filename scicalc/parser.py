"""
Recursive descent parser that evaluates as it parses.

Grammar, loosest to tightest:

    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/' | '%') factor)*
    factor     := primary ('^' primary)*
    primary    := NUMBER | CONSTANT | ('+' | '-') primary | '(' expression ')'
                | FUNCTION '(' [expression (',' expression)*] ')'
                | 'M' | 'mem' | 'ans' | 'ANS'

Each exponent is a primary, so a chain of ``^`` is applied left to right:
``2^3^2`` is ``(2^3)^2 = 64``. A unary sign belongs to its primary, so
``-2^2`` is ``4``.

Nesting depth is limited by the interpreter's recursion limit.
"""

import logging
from typing import Callable, List, NoReturn, Optional

from . import primitives
from .config import MAX_ARGUMENTS
from .dispatch import evaluate_function, remap_error
from .errors import Outcome, ParseError, ParseErrorKind
from .state import CalculatorState, memory_recall
from .tokenizer import ParseContext, Token, TokenKind, has_digits, next_token

logger = logging.getLogger(__name__)

MEMORY_NAMES = frozenset({'M', 'mem'})
ANSWER_NAMES = frozenset({'ans', 'ANS'})

_TERM_OPERATIONS = {
    '*': primitives.multiply,
    '/': primitives.divide,
    '%': primitives.mod,
}


class ExpressionParser:
    """Single-use parser bound to one expression and one session state"""

    def __init__(self, expression: str, state: Optional[CalculatorState] = None):
        self.ctx = ParseContext(expression, state)

    def parse(self) -> float:
        """Parse and evaluate the whole expression"""
        self._advance()
        result = self._parse_expression()

        if self._current.kind == TokenKind.RPAREN:
            self._fail(ParseErrorKind.MISMATCHED_PARENTHESES)
        if self._current.kind != TokenKind.END:
            self._fail(ParseErrorKind.INVALID_SYNTAX)

        return result

    @property
    def _current(self) -> Token:
        return self.ctx.current

    def _advance(self) -> Token:
        """Return the current token and pull the next one"""
        token = self.ctx.current
        self.ctx.current = next_token(self.ctx)
        return token

    def _fail(self, kind: ParseErrorKind) -> NoReturn:
        raise ParseError(kind, self.ctx.position)

    def _at_operator(self, symbols: str) -> bool:
        token = self._current
        return token.kind == TokenKind.OPERATOR and token.text in symbols

    def _apply(self,
               operation: Callable[[float, float], Outcome],
               left: float,
               right: float,
               error: Optional[ParseErrorKind] = None) -> float:
        outcome = operation(left, right)
        if not outcome.ok:
            self._fail(error or remap_error(outcome.error))
        return outcome.value

    def _parse_expression(self) -> float:
        """Parse additive expression (lowest precedence)"""
        result = self._parse_term()

        while self._at_operator('+-'):
            op = self._advance().text
            right = self._parse_term()
            operation = primitives.add if op == '+' else primitives.subtract
            result = self._apply(operation, result, right)

        return result

    def _parse_term(self) -> float:
        """Parse multiplicative expression"""
        result = self._parse_factor()

        while self._at_operator('*/%'):
            op = self._advance().text
            right = self._parse_factor()
            result = self._apply(_TERM_OPERATIONS[op], result, right)

        return result

    def _parse_factor(self) -> float:
        """Parse a power chain"""
        result = self._parse_primary()

        while self._at_operator('^'):
            self._advance()
            exponent = self._parse_primary()
            # Any failed power surfaces as a domain error
            result = self._apply(primitives.power, result, exponent,
                                 ParseErrorKind.DOMAIN_ERROR)

        return result

    def _parse_primary(self) -> float:
        token = self._current

        if token.kind == TokenKind.NUMBER:
            if not has_digits(token.text):
                self._fail(ParseErrorKind.INVALID_SYNTAX)
            # Literal too large for a float
            if not primitives.is_finite(token.value):
                self._fail(ParseErrorKind.DOMAIN_ERROR)
            self._advance()
            return token.value

        if token.kind == TokenKind.CONSTANT:
            self._advance()
            return token.value

        # Unary sign
        if token.kind == TokenKind.OPERATOR and token.text in '+-':
            self._advance()
            value = self._parse_primary()
            return -value if token.text == '-' else value

        if token.kind == TokenKind.LPAREN:
            self._advance()
            value = self._parse_expression()
            if self._current.kind != TokenKind.RPAREN:
                self._fail(ParseErrorKind.MISMATCHED_PARENTHESES)
            self._advance()
            return value

        if token.kind == TokenKind.FUNCTION:
            return self._parse_call()

        if token.kind == TokenKind.VARIABLE:
            return self._parse_variable()

        if token.kind == TokenKind.UNKNOWN:
            self._fail(ParseErrorKind.INVALID_CHARACTER)

        self._fail(ParseErrorKind.INVALID_SYNTAX)

    def _parse_call(self) -> float:
        function = self._advance().function

        if self._current.kind != TokenKind.LPAREN:
            self._fail(ParseErrorKind.INVALID_SYNTAX)
        self._advance()

        args = self._parse_arguments()
        outcome = evaluate_function(function, args, self.ctx.state)
        if not outcome.ok:
            self._fail(outcome.error)
        return outcome.value

    def _parse_arguments(self) -> List[float]:
        """Parse a comma separated argument list and its closing paren"""
        args: List[float] = []

        if self._current.kind != TokenKind.RPAREN:
            while True:
                if len(args) >= MAX_ARGUMENTS:
                    self._fail(ParseErrorKind.TOO_MANY_ARGUMENTS)
                args.append(self._parse_expression())

                if self._current.kind != TokenKind.COMMA:
                    break
                self._advance()

        if self._current.kind != TokenKind.RPAREN:
            self._fail(ParseErrorKind.MISMATCHED_PARENTHESES)
        self._advance()

        return args

    def _parse_variable(self) -> float:
        name = self._advance().text
        state = self.ctx.state

        if name in MEMORY_NAMES:
            return memory_recall(state)
        if name in ANSWER_NAMES:
            return float(state.last_result) if state is not None else 0.0

        # Unknown name used as a call
        if self._current.kind == TokenKind.LPAREN:
            self._fail(ParseErrorKind.INVALID_FUNCTION)
        self._fail(ParseErrorKind.INVALID_SYNTAX)


def parse_expression(expression: str, state: Optional[CalculatorState] = None) -> Outcome:
    """Evaluate an expression; failures carry a ParseErrorKind and offset"""
    if not expression:
        return Outcome.failure(ParseErrorKind.INVALID_SYNTAX, position=0,
                               message="Empty expression", expression=expression)

    try:
        value = ExpressionParser(expression, state).parse()
    except ParseError as e:
        logger.debug(f"Parse failed for {expression!r}: {e}")
        return Outcome.failure(e.kind, position=e.position, expression=expression)

    return Outcome.success(value)
