"""Coerce free-form operator input into the numeric and boolean types the draft holds."""
import math
import re
from typing import Any

# Largest integer a draft field holds; fits a 32-bit signed database INTEGER.
MAX_INT = 2**31 - 1

_LEADING_INT = re.compile(r"^\s*([+-]?)(\d+)")
_LEADING_FLOAT = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)")
_TRUE_STRINGS = {"true", "1", "yes", "on"}


def _clamp_int(value: int) -> int:
    return min(MAX_INT, max(0, value))


def to_non_negative_int(value: Any) -> int:
    """
    Coerce to an integer in 0..MAX_INT. Leading digits of text are used ("12s" -> 12);
    anything unparseable becomes 0 and oversized numbers become MAX_INT. Never raises.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return _clamp_int(value)
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        if math.isinf(value):
            return 0 if value < 0 else MAX_INT
        return _clamp_int(int(value))
    match = _LEADING_INT.match(str(value))
    if match is None:
        return 0
    sign, digits = match.groups()
    if sign == "-":
        return 0
    # Long digit runs would also trip int()'s max-digits guard.
    if len(digits.lstrip("0")) > len(str(MAX_INT)):
        return MAX_INT
    return _clamp_int(int(digits))


def to_non_negative_float(value: Any) -> float:
    """Coerce to a float >= 0; unparseable or non-finite input becomes 0.0."""
    if value is None or isinstance(value, bool):
        return float(bool(value))
    if isinstance(value, int):
        number = float(_clamp_int(value))
    elif isinstance(value, float):
        number = value
    else:
        match = _LEADING_FLOAT.match(str(value))
        if match is None:
            return 0.0
        number = float(match.group())
    if not math.isfinite(number):
        return 0.0
    return max(0.0, number)


def to_bool(value: Any) -> bool:
    """Checkbox-style coercion: strings count as true only for true/1/yes/on."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def coerce_like(current: Any, value: Any) -> Any:
    """Coerce value to the type of the field's current value."""
    if isinstance(current, bool):
        return to_bool(value)
    if isinstance(current, int):
        return to_non_negative_int(value)
    if isinstance(current, float):
        return to_non_negative_float(value)
    if isinstance(current, str):
        return "" if value is None else str(value)
    return value
