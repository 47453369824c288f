"""Type conversion utilities for raw catalog and form values.

This module is the single source of truth for loose type conversion.
All other modules should import from here instead of defining their own.
"""

import math
import re
from typing import Any

_SPEED_COUNT_RE = re.compile(r"(\d+)-speed")


def to_number(val: Any) -> float | None:
    """Convert a value to a finite float, or None if it is not numeric.

    Booleans are not numbers here even though Python treats them as ints.

    Examples:
        >>> to_number(" 25 ")
        25.0
        >>> to_number("abc") is None
        True
        >>> to_number(True) is None
        True
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, str):
        val = val.strip()
        if val == "":
            return None
    try:
        num = float(val)
    except (ValueError, TypeError):
        return None
    if math.isnan(num) or math.isinf(num):
        return None
    return num


def is_blank(val: Any) -> bool:
    """True for None and empty/whitespace-only strings."""
    return val is None or (isinstance(val, str) and val.strip() == "")


def parse_speed_count(val: Any) -> int | None:
    """Extract a drivetrain speed count.

    Catalog records carry speeds as text ("11-speed", "10/11-speed");
    callers may also pass the integer directly.

    Examples:
        >>> parse_speed_count("11-speed")
        11
        >>> parse_speed_count("10/11-speed")
        11
        >>> parse_speed_count(12)
        12
        >>> parse_speed_count("Di2") is None
        True
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, int):
        return val if val > 0 else None
    if isinstance(val, float):
        return int(val) if val.is_integer() and val > 0 else None
    if isinstance(val, str):
        match = _SPEED_COUNT_RE.search(val)
        if match:
            return int(match.group(1))
        num = to_number(val)
        if num is not None and num.is_integer() and num > 0:
            return int(num)
    return None
