from __future__ import annotations

import math
from typing import Any


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (``round()`` rounds to even)."""
    return int(math.floor(value + 0.5))


def number_or_zero(value: Any) -> float:
    """Legacy rows may hold NULL or junk in numeric columns; treat them as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(result):
        return 0.0
    return result
