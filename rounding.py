"""Division with a rounding policy.

``div_round`` takes the truncated quotient from ``div_qr`` and decides
from the remainder whether to step it one unit away from zero.  The
step is ``+1`` when the exact result is positive (dividend and divisor
share a sign) and ``-1`` otherwise.
"""

from __future__ import annotations

from enum import Enum

from arith import abs_, cmp
from backends import PrimitiveBackend
from digits import MINUS_ONE, ONE, ZERO
from errors import InvalidArgumentError, RoundingNecessaryError


class RoundingMode(str, Enum):
    UNNECESSARY = "unnecessary"  # exact result required
    UP = "up"                    # away from zero
    DOWN = "down"                # toward zero
    CEILING = "ceiling"          # toward +inf
    FLOOR = "floor"              # toward -inf
    HALF_UP = "half_up"
    HALF_DOWN = "half_down"
    HALF_CEILING = "half_ceiling"
    HALF_FLOOR = "half_floor"
    HALF_EVEN = "half_even"      # banker's rounding


def _discarded_fraction_sign(be: PrimitiveBackend, remainder: str, b: str) -> int:
    """Compare the discarded fraction ``|r / b|`` with one half."""
    return cmp(abs_(be.mul(remainder, "2")), abs_(b))


def div_round(be: PrimitiveBackend, a: str, b: str, mode: RoundingMode) -> str:
    if not isinstance(mode, RoundingMode):
        raise InvalidArgumentError(f"invalid rounding mode: {mode!r}")

    quotient, remainder = be.div_qr(a, b)

    has_fraction = remainder != ZERO
    positive = (a[0] == "-") == (b[0] == "-")

    if mode is RoundingMode.UNNECESSARY:
        if has_fraction:
            raise RoundingNecessaryError()
        increment = False
    elif mode is RoundingMode.UP:
        increment = has_fraction
    elif mode is RoundingMode.DOWN:
        increment = False
    elif mode is RoundingMode.CEILING:
        increment = has_fraction and positive
    elif mode is RoundingMode.FLOOR:
        increment = has_fraction and not positive
    elif not has_fraction:
        increment = False
    else:
        half = _discarded_fraction_sign(be, remainder, b)
        if mode is RoundingMode.HALF_UP:
            increment = half >= 0
        elif mode is RoundingMode.HALF_DOWN:
            increment = half > 0
        elif mode is RoundingMode.HALF_CEILING:
            increment = half >= 0 if positive else half > 0
        elif mode is RoundingMode.HALF_FLOOR:
            increment = half > 0 if positive else half >= 0
        else:
            # HALF_EVEN
            last_digit_even = int(quotient[-1]) % 2 == 0
            increment = half > 0 if last_digit_even else half >= 0

    if increment:
        return be.add(quotient, ONE if positive else MINUS_ONE)
    return quotient
