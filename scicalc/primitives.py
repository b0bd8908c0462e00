"""
Guarded numeric primitives.

Every primitive returns an Outcome. Guards raise CalculationError inside the
function body; the ``primitive`` decorator turns that, Python's own
arithmetic exceptions and any non-finite result into a failed Outcome.
"""

import math
from dataclasses import dataclass
from functools import wraps
from typing import Callable

from .config import MAX_FACTORIAL, NEAR_ZERO
from .errors import CalcError, CalculationError, Outcome

PI = math.pi
E = math.e
PHI = 1.6180339887498948482  # Golden ratio
SQRT2 = math.sqrt(2.0)
LN2 = math.log(2.0)
LN10 = math.log(10.0)


def primitive(func: Callable[..., float]) -> Callable[..., Outcome]:
    """Report a math routine's result as an Outcome"""

    @wraps(func)
    def wrapper(*args, **kwargs) -> Outcome:
        try:
            value = func(*args, **kwargs)
        except CalculationError as e:
            return Outcome.failure(e.kind)
        except ZeroDivisionError:
            return Outcome.failure(CalcError.DIVISION_BY_ZERO)
        except OverflowError:
            return Outcome.failure(CalcError.OVERFLOW)
        except ValueError:
            # math module domain error
            return Outcome.failure(CalcError.DOMAIN_ERROR)

        if not math.isfinite(value):
            return Outcome.failure(CalcError.OVERFLOW)
        return Outcome.success(float(value))

    return wrapper


def _domain_error() -> CalculationError:
    return CalculationError(CalcError.DOMAIN_ERROR)


def _value_of(outcome: Outcome) -> float:
    """Unwrap a nested primitive call, re-raising its error"""
    if not outcome.ok:
        raise CalculationError(outcome.error)
    return outcome.value


def _reciprocal(outcome: Outcome) -> float:
    value = _value_of(outcome)
    if abs(value) < NEAR_ZERO:
        raise _domain_error()
    return 1.0 / value


# ==========================================
# HELPERS
# ==========================================

def is_finite(x: float) -> bool:
    return math.isfinite(x)


def is_integer(x: float) -> bool:
    return math.isfinite(x) and float(x).is_integer()


def deg_to_rad(degrees: float) -> float:
    return degrees * PI / 180.0


def rad_to_deg(radians: float) -> float:
    return radians * 180.0 / PI


# ==========================================
# ARITHMETIC
# ==========================================

@primitive
def add(a: float, b: float) -> float:
    return a + b


@primitive
def subtract(a: float, b: float) -> float:
    return a - b


@primitive
def multiply(a: float, b: float) -> float:
    return a * b


@primitive
def divide(a: float, b: float) -> float:
    if b == 0.0:
        raise CalculationError(CalcError.DIVISION_BY_ZERO)
    return a / b


@primitive
def mod(a: float, b: float) -> float:
    """Remainder with the sign of the dividend"""
    if b == 0.0:
        raise CalculationError(CalcError.DIVISION_BY_ZERO)
    return math.fmod(a, b)


@primitive
def power(base: float, exponent: float) -> float:
    if base == 0.0 and exponent < 0.0:
        raise CalculationError(CalcError.DIVISION_BY_ZERO)
    if base < 0.0 and not is_integer(exponent):
        raise _domain_error()
    return math.pow(base, exponent)


@primitive
def sqrt(x: float) -> float:
    if x < 0.0:
        raise _domain_error()
    return math.sqrt(x)


@primitive
def cbrt(x: float) -> float:
    return math.cbrt(x)


@primitive
def nthroot(x: float, n: int) -> float:
    """Real n-th root; odd roots of negative numbers stay real"""
    if n == 0:
        raise CalculationError(CalcError.DIVISION_BY_ZERO)
    if n % 2 == 0 and x < 0.0:
        raise _domain_error()
    if x == 0.0 and n < 0:
        raise CalculationError(CalcError.DIVISION_BY_ZERO)

    root = math.pow(abs(x), 1.0 / n)
    return -root if x < 0.0 else root


# ==========================================
# TRIGONOMETRIC
# ==========================================

@primitive
def sin(x: float, degrees: bool = False) -> float:
    if degrees:
        x = deg_to_rad(x)
    return math.sin(x)


@primitive
def cos(x: float, degrees: bool = False) -> float:
    if degrees:
        x = deg_to_rad(x)
    return math.cos(x)


@primitive
def tan(x: float, degrees: bool = False) -> float:
    if degrees:
        # Reduce by the period before converting
        x = deg_to_rad(math.fmod(x, 180.0))

    # Undefined at odd multiples of pi/2
    normalized = math.fmod(x, PI)
    if abs(normalized - PI / 2) < NEAR_ZERO or abs(normalized + PI / 2) < NEAR_ZERO:
        raise _domain_error()

    return math.tan(x)


@primitive
def sec(x: float, degrees: bool = False) -> float:
    return _reciprocal(cos(x, degrees))


@primitive
def csc(x: float, degrees: bool = False) -> float:
    return _reciprocal(sin(x, degrees))


@primitive
def cot(x: float, degrees: bool = False) -> float:
    return _reciprocal(tan(x, degrees))


def _to_unit(radians: float, degrees: bool) -> float:
    return rad_to_deg(radians) if degrees else radians


@primitive
def asin(x: float, degrees: bool = False) -> float:
    if x < -1.0 or x > 1.0:
        raise _domain_error()
    return _to_unit(math.asin(x), degrees)


@primitive
def acos(x: float, degrees: bool = False) -> float:
    if x < -1.0 or x > 1.0:
        raise _domain_error()
    return _to_unit(math.acos(x), degrees)


@primitive
def atan(x: float, degrees: bool = False) -> float:
    return _to_unit(math.atan(x), degrees)


@primitive
def atan2(y: float, x: float, degrees: bool = False) -> float:
    return _to_unit(math.atan2(y, x), degrees)


@primitive
def asec(x: float, degrees: bool = False) -> float:
    if abs(x) < 1.0:
        raise _domain_error()
    return _to_unit(math.acos(1.0 / x), degrees)


@primitive
def acsc(x: float, degrees: bool = False) -> float:
    if abs(x) < 1.0:
        raise _domain_error()
    return _to_unit(math.asin(1.0 / x), degrees)


@primitive
def acot(x: float, degrees: bool = False) -> float:
    if x == 0.0:
        return _to_unit(PI / 2, degrees)
    return _to_unit(math.atan(1.0 / x), degrees)


# ==========================================
# HYPERBOLIC
# ==========================================

@primitive
def sinh(x: float) -> float:
    return math.sinh(x)


@primitive
def cosh(x: float) -> float:
    return math.cosh(x)


@primitive
def tanh(x: float) -> float:
    return math.tanh(x)


@primitive
def sech(x: float) -> float:
    return 1.0 / _value_of(cosh(x))


@primitive
def csch(x: float) -> float:
    if x == 0.0:
        raise CalculationError(CalcError.DIVISION_BY_ZERO)
    return 1.0 / _value_of(sinh(x))


@primitive
def coth(x: float) -> float:
    if x == 0.0:
        raise CalculationError(CalcError.DIVISION_BY_ZERO)
    return 1.0 / math.tanh(x)


@primitive
def asinh(x: float) -> float:
    return math.asinh(x)


@primitive
def acosh(x: float) -> float:
    if x < 1.0:
        raise _domain_error()
    return math.acosh(x)


@primitive
def atanh(x: float) -> float:
    if abs(x) >= 1.0:
        raise _domain_error()
    return math.atanh(x)


# ==========================================
# LOGARITHMS AND EXPONENTIALS
# ==========================================

@primitive
def log(x: float) -> float:
    """Natural logarithm"""
    if x <= 0.0:
        raise _domain_error()
    return math.log(x)


@primitive
def log10(x: float) -> float:
    if x <= 0.0:
        raise _domain_error()
    return math.log10(x)


@primitive
def log2(x: float) -> float:
    if x <= 0.0:
        raise _domain_error()
    return math.log2(x)


@primitive
def logb(x: float, base: float) -> float:
    if x <= 0.0 or base <= 0.0 or base == 1.0:
        raise _domain_error()
    return math.log(x) / math.log(base)


@primitive
def exp(x: float) -> float:
    return math.exp(x)


@primitive
def exp10(x: float) -> float:
    return math.pow(10.0, x)


@primitive
def exp2(x: float) -> float:
    return math.pow(2.0, x)


# ==========================================
# SPECIAL FUNCTIONS
# ==========================================

@primitive
def factorial(n: int) -> float:
    if n < 0:
        raise _domain_error()
    if n > MAX_FACTORIAL:  # 171! does not fit in a double
        raise CalculationError(CalcError.OVERFLOW)

    result = 1.0
    for i in range(2, n + 1):
        result *= i
    return result


@primitive
def gamma(x: float) -> float:
    if x <= 0.0 and is_integer(x):
        raise _domain_error()
    return math.gamma(x)


@primitive
def absolute(x: float) -> float:
    return math.fabs(x)


@primitive
def floor(x: float) -> float:
    return float(math.floor(x))


@primitive
def ceil(x: float) -> float:
    return float(math.ceil(x))


@primitive
def round_half_away(x: float) -> float:
    """Round to nearest, halves away from zero"""
    whole = math.floor(abs(x))
    if abs(x) - whole >= 0.5:
        whole += 1
    return math.copysign(whole, x)


@primitive
def minimum(a: float, b: float) -> float:
    return min(a, b)


@primitive
def maximum(a: float, b: float) -> float:
    return max(a, b)


# ==========================================
# COMBINATORICS AND NUMBER THEORY
# ==========================================

@primitive
def permutation(n: int, r: int) -> float:
    if n < 0 or r < 0 or r > n:
        raise _domain_error()

    result = 1.0
    for i in range(n, n - r, -1):
        result *= i
        if not math.isfinite(result):
            raise CalculationError(CalcError.OVERFLOW)
    return result


@primitive
def combination(n: int, r: int) -> float:
    if n < 0 or r < 0 or r > n:
        raise _domain_error()

    # C(n, r) == C(n, n - r)
    r = min(r, n - r)

    result = 1.0
    for i in range(r):
        result = result * (n - i) / (i + 1)
        if not math.isfinite(result):
            raise CalculationError(CalcError.OVERFLOW)
    return result


@primitive
def gcd(a: int, b: int) -> float:
    return float(math.gcd(abs(a), abs(b)))


@primitive
def lcm(a: int, b: int) -> float:
    if a == 0 or b == 0:
        return 0.0
    a, b = abs(a), abs(b)
    return float(a * b // math.gcd(a, b))


# ==========================================
# COMPLEX NUMBERS
# ==========================================

@dataclass(frozen=True)
class ComplexNumber:
    real: float = 0.0
    imag: float = 0.0


def complex_add(a: ComplexNumber, b: ComplexNumber) -> ComplexNumber:
    return ComplexNumber(a.real + b.real, a.imag + b.imag)


def complex_multiply(a: ComplexNumber, b: ComplexNumber) -> ComplexNumber:
    return ComplexNumber(
        a.real * b.real - a.imag * b.imag,
        a.real * b.imag + a.imag * b.real,
    )


def complex_divide(a: ComplexNumber, b: ComplexNumber) -> ComplexNumber:
    """Divide; a zero-modulus divisor yields infinite components"""
    denominator = b.real * b.real + b.imag * b.imag
    if denominator == 0.0:
        return ComplexNumber(math.inf, math.inf)

    return ComplexNumber(
        (a.real * b.real + a.imag * b.imag) / denominator,
        (a.imag * b.real - a.real * b.imag) / denominator,
    )


def complex_magnitude(z: ComplexNumber) -> float:
    return math.hypot(z.real, z.imag)


def complex_phase(z: ComplexNumber, degrees: bool = False) -> float:
    return _to_unit(math.atan2(z.imag, z.real), degrees)
