"""
Input Coercion for the Channel Partner Revenue Engine

Normalizes arbitrary user-entered values into finite Decimal numbers.
Nothing here raises: malformed input falls back to a caller-supplied default.
"""

import re
from decimal import Decimal, InvalidOperation

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def number_from_input(value, fallback=0) -> Decimal:
    """
    Best-effort conversion of a raw input value to a finite Decimal.

    - None returns the fallback
    - int, float and Decimal pass through when finite
    - anything else is stringified and stripped of every character except
      digits, '.' and '-' before parsing ("$1,200" -> 1200)
    - empty, unparseable, infinite or NaN results return the fallback
    """
    fallback = Decimal(str(fallback))
    if value is None or isinstance(value, bool):
        return fallback

    if isinstance(value, Decimal):
        return value if value.is_finite() else fallback

    if isinstance(value, (int, float)):
        text = str(value)
    else:
        text = _NON_NUMERIC.sub("", str(value))
        if not text:
            return fallback

    try:
        number = Decimal(text)
    except InvalidOperation:
        return fallback

    return number if number.is_finite() else fallback


def non_negative(value, fallback=0) -> Decimal:
    """Coerce a count or money value, flooring negatives at zero."""
    return max(Decimal("0"), number_from_input(value, fallback))


def clamp(value, low: Decimal, high: Decimal, fallback=0) -> Decimal:
    """Coerce a value and bound it to [low, high]."""
    return min(high, max(low, number_from_input(value, fallback)))
