"""Reading and writing numbers the way the calculator display shows them.

Operands live as text in the engine, so every computation goes through
parse_float() on the way in and format_number() on the way out.
"""

import math
import re
from decimal import Decimal
from typing import Optional

# Leading numeric prefix: "12abc" reads as 12, "-" and "Error" read as nothing
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")


def parse_float(text: str) -> Optional[float]:
    """Parse the leading number of `text`, or return None if there is none."""
    match = _FLOAT_PREFIX.match(text or "")
    if match is None:
        return None
    return float(match.group(1).replace("Infinity", "inf"))


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and int(value) % 2 == 1


def format_number(value: float) -> str:
    """Shortest decimal text for `value`.

    Integral values below 1e21 print without a fraction ("1024"), magnitudes
    from 1e-6 up print positionally ("0.000015"), anything else switches to
    exponential form ("1e+21", "1.5e-7").
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    magnitude = abs(value)
    text = repr(value)
    if magnitude >= 1e21 or magnitude < 1e-6:
        mantissa, _, exponent = text.partition("e")
        exp = int(exponent)
        return f"{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp)}"

    # repr digits padded out positionally: 1.2345678901234568e+20 -> 123456789012345680000
    positional = format(Decimal(text), "f")
    if positional.endswith(".0"):
        positional = positional[:-2]
    return positional


def float_pow(base: float, exponent: float) -> float:
    """IEEE-754 power that returns inf/nan instead of raising."""
    if math.isnan(exponent):
        return math.nan
    if abs(base) == 1 and math.isinf(exponent):
        return math.nan
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # 0 ** negative, or a negative base with a fractional exponent
        if base == 0:
            if math.copysign(1.0, base) < 0 and _is_odd_integer(exponent):
                return -math.inf
            return math.inf
        return math.nan
