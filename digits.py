"""Canonical digit-string convention.

An integer is written as an optional ``-`` followed by ASCII decimal
digits with no leading zero.  ``"0"`` is the only zero and is never
signed, so ``"-0"`` is invalid.

Every operation of the engine accepts and returns canonical strings
only.  This module owns the check.
"""

from __future__ import annotations

import re

from errors import NumberFormatError

CANONICAL = re.compile(r"-?[1-9][0-9]*|0")

ZERO = "0"
ONE = "1"
MINUS_ONE = "-1"

# Standard digit alphabet for bases 2..36.
ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def is_canonical(value: object) -> bool:
    return isinstance(value, str) and CANONICAL.fullmatch(value) is not None


def require_canonical(*values: object) -> None:
    """Reject anything that is not a canonical digit-string."""
    for v in values:
        if not is_canonical(v):
            raise NumberFormatError(f"{v!r} is not a canonical integer string")


def is_negative(n: str) -> bool:
    return n[0] == "-"


def split_sign(n: str) -> tuple[bool, str]:
    """Return ``(negative, magnitude)``."""
    if n[0] == "-":
        return True, n[1:]
    return False, n


def with_sign(negative: bool, magnitude: str) -> str:
    """Inverse of ``split_sign``; never produces ``-0``."""
    if negative and magnitude != ZERO:
        return "-" + magnitude
    return magnitude


# CPython refuses str <-> int conversions longer than
# sys.get_int_max_str_digits() (640 at the lowest); longer values go
# through in chunks below that.
_CHUNK = 600
_CHUNK_BASE = 10**_CHUNK


def to_int(n: str) -> int:
    """Python int for a canonical string of any length."""
    if len(n) <= _CHUNK:
        return int(n)
    negative, digits = split_sign(n)
    value = 0
    for start in range(0, len(digits), _CHUNK):
        chunk = digits[start:start + _CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return -value if negative else value


def from_int(value: int) -> str:
    """Canonical string for a Python int of any size."""
    if -_CHUNK_BASE < value < _CHUNK_BASE:
        return str(value)
    magnitude = -value if value < 0 else value
    parts: list[int] = []
    while magnitude:
        magnitude, low = divmod(magnitude, _CHUNK_BASE)
        parts.append(low)
    head = str(parts[-1])
    tail = "".join(str(p).zfill(_CHUNK) for p in reversed(parts[:-1]))
    return with_sign(value < 0, head + tail)
