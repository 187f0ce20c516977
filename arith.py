"""Generic arithmetic on canonical strings.

Absolute value, negation and comparison are answered by looking at the
sign and the digits; no backend is involved.
"""

from __future__ import annotations

from digits import ZERO, split_sign


def abs_(n: str) -> str:
    return n[1:] if n[0] == "-" else n


def neg(n: str) -> str:
    if n == ZERO:
        return ZERO
    if n[0] == "-":
        return n[1:]
    return "-" + n


def sign(n: str) -> int:
    if n == ZERO:
        return 0
    return -1 if n[0] == "-" else 1


def cmp(a: str, b: str) -> int:
    """Three-way comparison: -1, 0 or 1.

    Canonical magnitudes have no leading zeros, so a longer magnitude is
    larger and equal-length magnitudes compare lexicographically.
    """
    a_neg, a_dig = split_sign(a)
    b_neg, b_dig = split_sign(b)

    if a_neg and not b_neg:
        return -1
    if b_neg and not a_neg:
        return 1

    if len(a_dig) != len(b_dig):
        result = -1 if len(a_dig) < len(b_dig) else 1
    elif a_dig == b_dig:
        result = 0
    else:
        result = -1 if a_dig < b_dig else 1

    return -result if a_neg else result
