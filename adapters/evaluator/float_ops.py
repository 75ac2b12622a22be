"""
IEEE-754 arithmetic on Python floats.

Python's float division and the math module raise ZeroDivisionError,
ValueError or OverflowError where IEEE-754 produces inf or NaN. The
helpers below return the IEEE result instead, so evaluating a well-formed
expression never raises for arithmetic reasons.
"""
from __future__ import annotations

import math
from typing import Callable

INF = math.inf
NAN = math.nan

LOG10_E = 0.43429448190325182765   # 1 / ln(10)
LOG2_E = 1.442695040888963407360   # 1 / ln(2)


def _is_odd_integer(y: float) -> bool:
    return math.isfinite(y) and y.is_integer() and math.fmod(y, 2.0) != 0.0


def divide(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return NAN
        return math.copysign(INF, a) * math.copysign(1.0, b)
    return a / b


def power(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except OverflowError:
        return -INF if a < 0.0 and _is_odd_integer(b) else INF
    except ValueError:
        if a == 0.0:
            # 0 ^ negative
            return math.copysign(INF, a) if _is_odd_integer(b) else INF
        # negative base, non-integer exponent
        return NAN


def ln(x: float) -> float:
    if x == 0.0:
        return -INF
    if x < 0.0:
        return NAN
    return math.log(x)


def log10(x: float) -> float:
    return ln(x) * LOG10_E


def log2(x: float) -> float:
    return ln(x) * LOG2_E


def total(fn: Callable[[float], float]) -> Callable[[float], float]:
    """Wraps a math function: out-of-domain → NaN, overflow → inf."""

    def wrapped(x: float) -> float:
        try:
            return fn(x)
        except ValueError:
            return NAN
        except OverflowError:
            return INF

    wrapped.__name__ = fn.__name__
    return wrapped
