"""Numeric helpers shared by the statistics code and form handling."""
from __future__ import annotations

import math
from typing import Any, Optional


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    ``round()`` uses banker's rounding (``round(2.5) == 2``), which would make
    percentages disagree with what users expect.
    """
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def coerce_int(value: Any, default: Optional[int] = 0, *, minimum: Optional[int] = None) -> Optional[int]:
    """Parse form input into an int; fall back to ``default`` instead of raising."""
    if value is None or isinstance(value, bool):
        return default
    try:
        result = int(str(value).strip())
    except (TypeError, ValueError):
        try:
            result = int(float(str(value).strip()))
        except (TypeError, ValueError, OverflowError):
            return default
    if minimum is not None and result < minimum:
        return default
    return result


__all__ = ["coerce_int", "percent", "round_half_up"]
