# cemco2/utils.py
from __future__ import annotations

import math


def as_float(value, default: float = 0.0) -> float:
    """Coerce catalog/user values to a finite float; anything else -> default."""
    if isinstance(value, bool) or value is None:
        return float(default)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return float(default)
    try:
        x = float(value)
    except (TypeError, ValueError):
        return float(default)
    return x if math.isfinite(x) else float(default)


def non_negative(value) -> float:
    return max(0.0, as_float(value, 0.0))


def clamp_fraction(value) -> float:
    return min(1.0, non_negative(value))


def is_valid_dosage(value, allow_zero: bool = True) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    try:
        x = float(value)
    except (TypeError, ValueError):
        return False
    if not math.isfinite(x):
        return False
    return x >= 0.0 if allow_zero else x > 0.0


def round_half_up(x: float) -> int:
    # Half-up like a spreadsheet ROUND towards +inf: 0.5 -> 1, -0.5 -> 0
    return int(math.floor(as_float(x) + 0.5))
