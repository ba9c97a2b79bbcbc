"""Tri-state numeric values: a finite number or the ``UNKNOWN`` sentinel."""
from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, Union


class Unknown(Enum):
    """Marker for "no data available" on a numeric field.

    Serialises to the JSON string ``"unknown"`` but never compares equal to
    that string, so it cannot be mistaken for the text sentinel used by
    enumerations and free-text fields.
    """

    UNKNOWN = "unknown"

    def __repr__(self) -> str:
        return "UNKNOWN"


UNKNOWN = Unknown.UNKNOWN

UnknownNumber = Union[int, float, Unknown]

# float() also accepts "1_000", "infinity" and friends; only plain decimal
# and exponent notation count as numeric text here. Hex, binary and octal
# literals ("0x1A", "0b101", "0o17") are not numbers in this app either.
_NUMERIC_TEXT = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def is_unknown(value: Any) -> bool:
    return value is UNKNOWN


def _finite(n: float) -> UnknownNumber:
    if not math.isfinite(n):
        return UNKNOWN
    if isinstance(n, float) and n.is_integer() and abs(n) < 2**53:
        return int(n)
    return n


def from_editable_text(value: Any) -> UnknownNumber:
    """Parse user or backend input into an UnknownNumber.

    Empty, missing, malformed and non-finite input all resolve to
    ``UNKNOWN``; this never raises.
    """
    if value is None or value is UNKNOWN or isinstance(value, bool):
        return UNKNOWN
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return _finite(value)
    text = str(value).strip()
    if not text or not _NUMERIC_TEXT.match(text):
        return UNKNOWN
    try:
        return _finite(float(text))
    except (OverflowError, ValueError):
        return UNKNOWN


def to_editable_text(value: Any) -> str:
    """Render an UnknownNumber for editing; ``UNKNOWN`` becomes ``""``."""
    if value is None or value is UNKNOWN:
        return ""
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 2**53:
            return str(int(value))
        return repr(value)
    return str(value)
