# python/scenefile/scalars.py
# Float, vector and boolean interpretation of raw scene values.
# Exists to keep the "bad input degrades, never raises" policy in one place.
# RELEVANT FILES:python/scenefile/textutil.py,python/scenefile/vector.py,tests/test_scalars.py

from __future__ import annotations

import re
from typing import Optional

from .textutil import split_fields
from .vector import Vector3

# Longest numeric prefix accepted by C atof: hex floats, decimal forms, inf, nan.
# ASCII only; atof does not read digits from other scripts.
_HEX_PREFIX = re.compile(
    r"[ \t\n\r\f\v]*([-+]?0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[-+]?[0-9]+)?)",
    re.IGNORECASE | re.ASCII,
)
_FLOAT_PREFIX = re.compile(
    r"[ \t\n\r\f\v]*([-+]?(?:(?:\d+\.?\d*|\.\d+)(?:e[-+]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE | re.ASCII,
)

_TRUE_WORDS = frozenset({"true", "yes", "1"})


def float_prefix(text: str) -> Optional[float]:
    """Value of the leading number of ``text``, or None when there is none."""
    match = _HEX_PREFIX.match(text)
    if match is not None:
        return float.fromhex(match.group(1))
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return None
    return float(match.group(1))


def parse_float(text: str) -> float:
    """Parse the leading number of ``text``; anything unparsable gives 0.0.

    Trailing garbage is ignored, so ``"2.5m"`` reads as 2.5.
    """
    value = float_prefix(text)
    return 0.0 if value is None else value


def parse_vector(text: str) -> Optional[Vector3]:
    """Parse ``x,y,z``. Returns None unless there are exactly three fields."""
    parts = split_fields(text, ",")
    if len(parts) != 3:
        return None
    return Vector3(parse_float(parts[0]), parse_float(parts[1]), parse_float(parts[2]))


def parse_bool(text: str) -> bool:
    """``true``, ``yes`` and ``1`` are true (case-sensitive); all else is false."""
    return text in _TRUE_WORDS
