from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any, default: float | None = None) -> float | None:
    """Coerce value to float with a default."""
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def finite_or_none(value: float | None) -> float | None:
    """Return the value only when it is a finite number."""
    if value is None or not math.isfinite(value):
        return None
    return value
