"""
Function dispatcher: maps a resolved function identifier and its evaluated
arguments onto one numeric primitive.
"""

import logging
import math
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Union

from . import primitives
from .errors import CalcError, Outcome, ParseErrorKind
from .state import CalculatorState

logger = logging.getLogger(__name__)


class Function(Enum):
    # Trigonometric
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SEC = "sec"
    CSC = "csc"
    COT = "cot"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    ASEC = "asec"
    ACSC = "acsc"
    ACOT = "acot"

    # Hyperbolic
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"
    SECH = "sech"
    CSCH = "csch"
    COTH = "coth"
    ASINH = "asinh"
    ACOSH = "acosh"
    ATANH = "atanh"

    # Logarithmic & exponential
    LOG = "log"
    LN = "ln"
    LOG10 = "log10"
    LOG2 = "log2"
    LOGB = "logb"
    EXP = "exp"
    EXP10 = "exp10"
    EXP2 = "exp2"

    # Power & root
    SQRT = "sqrt"
    CBRT = "cbrt"
    NTHRT = "nthrt"
    POW = "pow"

    # Rounding
    ABS = "abs"
    FLOOR = "floor"
    CEIL = "ceil"
    ROUND = "round"
    MOD = "mod"

    # Special & combinatorial
    FACTORIAL = "factorial"
    GAMMA = "gamma"
    PERM = "perm"
    COMB = "comb"
    GCD = "gcd"
    LCM = "lcm"
    MIN = "min"
    MAX = "max"
    ATAN2 = "atan2"


_FUNCTIONS_BY_NAME = {function.value: function for function in Function}


def lookup_function(name: str) -> Optional[Function]:
    return _FUNCTIONS_BY_NAME.get(name)


Handler = Callable[[Sequence[float], bool], Outcome]


def _plain(func: Callable[..., Outcome]) -> Handler:
    return lambda args, degrees: func(*args)


def _angular(func: Callable[..., Outcome]) -> Handler:
    return lambda args, degrees: func(*args, degrees=degrees)


def _integral(func: Callable[..., Outcome]) -> Handler:
    """Truncate every argument toward zero before calling"""

    def handler(args: Sequence[float], degrees: bool) -> Outcome:
        if not all(math.isfinite(arg) for arg in args):
            return Outcome.failure(CalcError.DOMAIN_ERROR)
        return func(*(int(arg) for arg in args))

    return handler


def _nth_root(args: Sequence[float], degrees: bool) -> Outcome:
    x, n = args
    if not math.isfinite(n):
        return Outcome.failure(CalcError.DOMAIN_ERROR)
    return primitives.nthroot(x, int(n))


UNARY_FUNCTIONS: Dict[Function, Handler] = {
    Function.SIN: _angular(primitives.sin),
    Function.COS: _angular(primitives.cos),
    Function.TAN: _angular(primitives.tan),
    Function.SEC: _angular(primitives.sec),
    Function.CSC: _angular(primitives.csc),
    Function.COT: _angular(primitives.cot),
    Function.ASIN: _angular(primitives.asin),
    Function.ACOS: _angular(primitives.acos),
    Function.ATAN: _angular(primitives.atan),
    Function.ASEC: _angular(primitives.asec),
    Function.ACSC: _angular(primitives.acsc),
    Function.ACOT: _angular(primitives.acot),
    Function.SINH: _plain(primitives.sinh),
    Function.COSH: _plain(primitives.cosh),
    Function.TANH: _plain(primitives.tanh),
    Function.SECH: _plain(primitives.sech),
    Function.CSCH: _plain(primitives.csch),
    Function.COTH: _plain(primitives.coth),
    Function.ASINH: _plain(primitives.asinh),
    Function.ACOSH: _plain(primitives.acosh),
    Function.ATANH: _plain(primitives.atanh),
    Function.LOG: _plain(primitives.log),
    Function.LN: _plain(primitives.log),
    Function.LOG10: _plain(primitives.log10),
    Function.LOG2: _plain(primitives.log2),
    Function.EXP: _plain(primitives.exp),
    Function.EXP10: _plain(primitives.exp10),
    Function.EXP2: _plain(primitives.exp2),
    Function.SQRT: _plain(primitives.sqrt),
    Function.CBRT: _plain(primitives.cbrt),
    Function.ABS: _plain(primitives.absolute),
    Function.FLOOR: _plain(primitives.floor),
    Function.CEIL: _plain(primitives.ceil),
    Function.ROUND: _plain(primitives.round_half_away),
    Function.FACTORIAL: _integral(primitives.factorial),
    Function.GAMMA: _plain(primitives.gamma),
}

BINARY_FUNCTIONS: Dict[Function, Handler] = {
    Function.POW: _plain(primitives.power),
    Function.NTHRT: _nth_root,
    Function.MOD: _plain(primitives.mod),
    Function.LOGB: _plain(primitives.logb),
    Function.ATAN2: _angular(primitives.atan2),
    Function.PERM: _integral(primitives.permutation),
    Function.COMB: _integral(primitives.combination),
    Function.GCD: _integral(primitives.gcd),
    Function.LCM: _integral(primitives.lcm),
    Function.MIN: _plain(primitives.minimum),
    Function.MAX: _plain(primitives.maximum),
}


def arity(function: Function) -> int:
    if function in UNARY_FUNCTIONS:
        return 1
    if function in BINARY_FUNCTIONS:
        return 2
    raise KeyError(f"No handler registered for {function.value}")


def remap_error(error: CalcError) -> ParseErrorKind:
    """Narrow a primitive's error into the parser's taxonomy"""
    if error == CalcError.DIVISION_BY_ZERO:
        return ParseErrorKind.DIVISION_BY_ZERO
    if error in (CalcError.DOMAIN_ERROR, CalcError.OVERFLOW, CalcError.UNDERFLOW):
        return ParseErrorKind.DOMAIN_ERROR
    return ParseErrorKind.INVALID_FUNCTION


def evaluate_function(function: Union[Function, str],
                      args: Sequence[float],
                      state: Optional[CalculatorState]) -> Outcome:
    """Apply a function to its arguments; errors use ParseErrorKind"""
    if isinstance(function, str):
        resolved = lookup_function(function)
        if resolved is None:
            return Outcome.failure(ParseErrorKind.INVALID_FUNCTION)
        function = resolved

    expected = arity(function)
    if len(args) < expected:
        return Outcome.failure(ParseErrorKind.TOO_FEW_ARGUMENTS)
    if len(args) > expected:
        return Outcome.failure(ParseErrorKind.TOO_MANY_ARGUMENTS)

    handler = UNARY_FUNCTIONS[function] if expected == 1 else BINARY_FUNCTIONS[function]
    degrees = state is not None and state.degrees
    outcome = handler(args, degrees)

    logger.debug(f"{function.value}{tuple(args)} -> {outcome.value if outcome.ok else outcome.error}")

    if outcome.ok:
        return outcome
    return Outcome.failure(remap_error(outcome.error))
