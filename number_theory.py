"""Number theory built on the primitive backend.

Modulus, gcd, lcm and modular inverse use nothing but the backend's
primitives and the generic comparisons in ``arith``, so they work the
same on every backend.  Inputs are canonical and already validated.

gcd and the extended Euclidean algorithm run as loops: inputs are
unbounded and the recursive form would grow the call stack with them.
"""

from __future__ import annotations

from arith import abs_, cmp
from backends import PrimitiveBackend
from digits import ONE, ZERO


def mod(be: PrimitiveBackend, a: str, b: str) -> str:
    """``a`` modulo ``b``, in ``[0, |b|)``.

    The truncated remainder has the sign of ``a``; adding ``|b|`` and
    reducing again moves a negative remainder into range.
    """
    m = abs_(b)
    return be.div_r(be.add(be.div_r(a, m), m), m)


def gcd(be: PrimitiveBackend, a: str, b: str) -> str:
    while True:
        if a == ZERO:
            return abs_(b)
        if b == ZERO:
            return abs_(a)
        a, b = b, be.div_r(a, b)


def lcm(be: PrimitiveBackend, a: str, b: str) -> str:
    if a == ZERO or b == ZERO:
        return ZERO
    return abs_(be.div_q(be.mul(a, b), gcd(be, a, b)))


def gcd_extended(be: PrimitiveBackend, a: str, b: str) -> tuple[str, str, str]:
    """Return ``(g, x, y)`` with ``g == a*x + b*y``, for ``a, b >= 0``.

    Walks down ``(a, b) -> (b mod a, a)`` recording each quotient
    ``b div a``, then back-substitutes from the base case ``(b, 0, 1)``.
    """
    quotients: list[str] = []
    while a != ZERO:
        quotients.append(be.div_q(b, a))
        a, b = mod(be, b, a), a

    x, y = ZERO, ONE
    for q in reversed(quotients):
        x, y = be.sub(y, be.mul(q, x)), x
    return b, x, y


def mod_inverse(be: PrimitiveBackend, x: str, m: str) -> str | None:
    """Inverse of ``x`` modulo ``m`` (``m > 0``) in ``[0, m)``, or None.

    ``None`` means ``gcd(x, m) != 1``; it is an answer, not an error.
    """
    if m == ONE:
        return ZERO

    reduced = x
    if x[0] == "-" or cmp(abs_(x), m) >= 0:
        reduced = mod(be, x, m)

    g, coef, _ = gcd_extended(be, reduced, m)
    if g != ONE:
        return None

    return mod(be, be.add(mod(be, coef, m), m), m)


def mod_pow(be: PrimitiveBackend, base: str, exp: str, modulus: str) -> str:
    return be.mod_pow(base, exp, modulus)
