"""Coercion helpers shared by the rule evaluator and the field validators."""

import math
from typing import Any, Optional


def is_empty(value: Any) -> bool:
    """An answer is empty iff it is None, an empty string or an empty list."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def to_number(value: Any) -> Optional[float]:
    """Parse a scalar as a finite-or-infinite float; None when it is not a number.

    Integers beyond float range saturate to +/-inf, like ``float("1e400")``.
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if math.isnan(number):
        return None
    return number


def as_text(value: Any) -> Optional[str]:
    """Text form of a scalar used for equality; None for lists, dicts and None."""
    if value is None or isinstance(value, (list, tuple, dict)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    try:
        return str(value)
    except ValueError:
        # int above the interpreter's str-conversion digit limit
        return None
