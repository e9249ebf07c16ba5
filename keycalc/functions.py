"""Unary function keys.

Angles are in degrees both ways: sin/cos/tan take degrees, the inverse
functions answer in degrees.
"""

import math
from typing import Callable, Dict


class DomainError(ValueError):
    """The function is undefined for its argument."""


def _sqrt(x: float) -> float:
    if x < 0:
        raise DomainError(f"sqrt of negative number {x}")
    return math.sqrt(x)


def _square(x: float) -> float:
    return x * x


def _reciprocal(x: float) -> float:
    if x == 0:
        raise DomainError("reciprocal of zero")
    return 1 / x


def _sin(x: float) -> float:
    if not math.isfinite(x):
        return math.nan
    return math.sin(math.radians(x))


def _cos(x: float) -> float:
    if not math.isfinite(x):
        return math.nan
    return math.cos(math.radians(x))


def _tan(x: float) -> float:
    if not math.isfinite(x):
        return math.nan
    # Coarse asymptote guard: only exact 90/270 after the remainder, so -90 slips through
    angle = math.fmod(x, 360)
    if angle == 90 or angle == 270:
        raise DomainError(f"tan undefined at {x} degrees")
    return math.tan(math.radians(x))


def _check_unit_interval(name: str, x: float) -> None:
    if x < -1 or x > 1:
        raise DomainError(f"{name} argument {x} outside [-1, 1]")


def _asin(x: float) -> float:
    _check_unit_interval("asin", x)
    return math.degrees(math.asin(x))


def _acos(x: float) -> float:
    _check_unit_interval("acos", x)
    return math.degrees(math.acos(x))


def _atan(x: float) -> float:
    return math.degrees(math.atan(x))


# Allowed function keys (whitelist). "power" is a two-step key handled by the engine.
FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "sqrt": _sqrt,
    "square": _square,
    "reciprocal": _reciprocal,
    "sin": _sin,
    "cos": _cos,
    "tan": _tan,
    "asin": _asin,
    "acos": _acos,
    "atan": _atan,
}

FUNCTION_NAMES = tuple(FUNCTIONS) + ("power",)
