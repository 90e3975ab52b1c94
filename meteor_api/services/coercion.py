"""Explicit coercion of loosely-typed dataset and query values.

Every helper returns ``None`` for an unparseable input instead of a NaN
placeholder, so callers can treat "unparseable" as "never matches".
"""

import math
import re
from datetime import datetime
from typing import Any

_BARE_YEAR = re.compile(r"^[+-]?\d+$")
_RADIX_LITERAL = re.compile(r"^0([xob])([0-9a-z]+)$", re.IGNORECASE)
_RADIX_BASES = {"x": 16, "o": 8, "b": 2}
_INFINITY = {"Infinity", "+Infinity", "-Infinity"}


def parse_number(value: Any) -> float | None:
    """Coerce a record field or query value to a float."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        number = _parse_numeric_text(text)
        if number is None:
            return None
    else:
        return None

    if math.isnan(number):
        return None
    return number


def parse_year(value: Any) -> int | None:
    """Reduce a date-like value to its calendar year.

    ISO-8601 dates keep the year as written, without any timezone shift.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        if not math.isfinite(value) or value != int(value):
            return None
        return int(value)

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if _BARE_YEAR.match(text):
        return int(text)

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).year
    except ValueError:
        return None


def to_slice_index(value: float | None, length: int) -> int:
    """Turn a coerced pagination bound into a list index."""
    if value is None or math.isnan(value):
        return 0
    if math.isinf(value):
        return length if value > 0 else -length
    return int(value)


def _parse_numeric_text(text: str) -> float | None:
    """Decimal, ``0x``/``0o``/``0b`` integer literals, or a spelled-out Infinity."""
    if not text or "_" in text:
        return None

    radix = _RADIX_LITERAL.match(text)
    if radix:
        try:
            return float(int(radix.group(2), _RADIX_BASES[radix.group(1).lower()]))
        except ValueError:
            return None

    if text in _INFINITY:
        return float(text)
    # float() also takes "inf", "nan" and friends in any case
    if any(word in text.lower() for word in ("inf", "nan")):
        return None

    try:
        return float(text)
    except ValueError:
        return None
