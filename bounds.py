"""Fixed-width integer ranges.

The engine itself never overflows.  Consumers that need a machine-sized
integer convert through ``to_fixed_width``, which applies an explicit
overflow strategy.  The default raises ``IntegerOverflowError``, which is
distinct from every precondition error.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from digits import require_canonical, to_int
from errors import IntegerOverflowError


class OverflowStrategy(Enum):
    """What to do when a value does not fit the range."""

    ERROR = auto()       # Raise IntegerOverflowError
    CLAMP = auto()       # Saturate at lo/hi
    WRAP = auto()        # Modular wrap-around (like C unsigned)


@dataclass(frozen=True)
class Bounds:
    """An inclusive integer range [lo, hi]."""

    lo: int
    hi: int

    def __post_init__(self):
        if self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")

    @property
    def width(self) -> int:
        """Total number of representable values."""
        return self.hi - self.lo + 1

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi

    @classmethod
    def signed(cls, bits: int) -> "Bounds":
        return cls(lo=-(2 ** (bits - 1)), hi=2 ** (bits - 1) - 1)

    @classmethod
    def unsigned(cls, bits: int) -> "Bounds":
        return cls(lo=0, hi=2**bits - 1)


def to_fixed_width(
    value: str,
    bounds: Bounds,
    overflow: OverflowStrategy = OverflowStrategy.ERROR,
) -> int:
    """Convert a canonical string to an ``int`` inside ``bounds``."""
    require_canonical(value)
    raw = to_int(value)
    if bounds.contains(raw):
        return raw

    if overflow == OverflowStrategy.CLAMP:
        return max(bounds.lo, min(bounds.hi, raw))

    if overflow == OverflowStrategy.WRAP:
        return bounds.lo + (raw - bounds.lo) % bounds.width

    # ERROR
    raise IntegerOverflowError(value, bounds.lo, bounds.hi)


# ---------------------------------------------------------------------------
# Common presets
# ---------------------------------------------------------------------------

INT8 = Bounds.signed(8)
INT16 = Bounds.signed(16)
INT32 = Bounds.signed(32)
INT64 = Bounds.signed(64)
UINT8 = Bounds.unsigned(8)
UINT16 = Bounds.unsigned(16)
UINT32 = Bounds.unsigned(32)
UINT64 = Bounds.unsigned(64)
