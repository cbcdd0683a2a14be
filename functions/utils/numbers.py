"""Numeric coercion and currency rounding helpers.

Estimate inputs come from forms and stored documents, so numeric fields can
arrive as numbers, numeric strings, None, or NaN. Everything that feeds the
pricing math goes through these helpers instead of relying on truthiness.
"""

import math
from typing import Any, Optional


def parse_number(value: Any) -> Optional[float]:
    """Parse a value into a finite float.

    Args:
        value: Raw field value (number, numeric string, bool, None, ...).

    Returns:
        The finite float, or None when the value is not a finite number.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        num = float(value)
    elif isinstance(value, str):
        text = value.strip()
        # float() accepts digit separators ("1_000"); form input does not
        if not text or "_" in text:
            return None
        try:
            num = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(num):
        return None
    return num


def to_number(value: Any, default: float = 0.0) -> float:
    """Numify-or-default: finite numbers pass through, anything else is `default`."""
    num = parse_number(value)
    return default if num is None else num


def to_positive(value: Any, fallback: float) -> float:
    """Return the value when it is finite and > 0, else the fallback."""
    num = parse_number(value)
    return num if num is not None and num > 0 else fallback


def to_rate(value: Any, fallback: float) -> float:
    """Return the value when it is finite and >= 0, else the fallback."""
    num = parse_number(value)
    return num if num is not None and num >= 0 else fallback


def round2(value: float) -> float:
    """Round a currency amount to cents, half up (0.125 -> 0.13, -0.125 -> -0.12).

    Not the built-in round(), which rounds half to even. NaN, infinities and
    amounts too large to scale to cents are returned unchanged.
    """
    scaled = value * 100 + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / 100
