"""Normalization helpers.

Centralizes defensive parsing of station payload values.
"""

from __future__ import annotations

import math
import time
from typing import Any

# Sentinel strings the firmware uses for "not available".
SENTINELS = frozenset({"", "--", "NaN", "nan"})

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 100_000_000_000


def now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)


def is_sentinel(value: Any) -> bool:
    """Return True for values that mean "field not reported"."""
    if value is None:
        return True
    if isinstance(value, str) and value.strip() in SENTINELS:
        return True
    return isinstance(value, float) and math.isnan(value)


def safe_float(value: Any) -> float | None:
    if is_sentinel(value):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def normalize_timestamp_ms(value: Any) -> int | None:
    """Normalize a station timestamp to epoch milliseconds.

    - Empty/missing -> None
    - <= 0 -> None
    - Seconds (< 1e11) -> milliseconds
    """
    ts = safe_float(value)
    if ts is None or ts <= 0:
        return None
    if ts < _MS_THRESHOLD:
        ts *= 1000.0
    return int(ts)
