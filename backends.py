"""Primitive backends.

A backend supplies the primitive operations that every higher layer is
built from: add, sub, mul, truncating division, pow, mod_pow and sqrt,
all over canonical digit-strings.  Inputs are assumed canonical; the
facade validates them before they get here.

Two variants exist, selected by ``BackendKind``:

NATIVE  Python's built-in ``int``.  Always available.
GMP     delegates to ``gmpy2``.  Available when the library is installed.
"""

from __future__ import annotations

import importlib
import importlib.util
import math
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from digits import from_int, to_int
from errors import (
    BackendUnavailableError,
    DivisionByZeroError,
    InvalidArgumentError,
    NegativeNumberError,
    NotInvertibleError,
)

# Largest exponent accepted by ``pow``.
MAX_POWER = 1_000_000


class BackendKind(str, Enum):
    NATIVE = "native"
    GMP = "gmp"


@runtime_checkable
class PrimitiveBackend(Protocol):
    """What every backend must look like."""

    kind: BackendKind

    def add(self, a: str, b: str) -> str: ...

    def sub(self, a: str, b: str) -> str: ...

    def mul(self, a: str, b: str) -> str: ...

    def div_q(self, a: str, b: str) -> str: ...

    def div_r(self, a: str, b: str) -> str: ...

    def div_qr(self, a: str, b: str) -> tuple[str, str]: ...

    def pow(self, a: str, e: int) -> str: ...

    def mod_pow(self, base: str, exp: str, mod: str) -> str: ...

    def sqrt(self, n: str) -> str: ...


# ---------------------------------------------------------------------------
# Shared precondition checks
# ---------------------------------------------------------------------------

def check_divisor(b: str) -> None:
    if b == "0":
        raise DivisionByZeroError()


def check_exponent(e: int) -> None:
    if not isinstance(e, int) or isinstance(e, bool):
        raise InvalidArgumentError("exponent must be an int")
    if not 0 <= e <= MAX_POWER:
        raise InvalidArgumentError(
            f"exponent {e} is out of range [0, {MAX_POWER}]"
        )


def check_radicand(n: str) -> None:
    if n[0] == "-":
        raise NegativeNumberError(f"cannot take the square root of {n}")


def truncdiv(a: int, b: int) -> tuple[int, int]:
    """Quotient and remainder with the quotient truncated toward zero.

    Python's ``divmod`` rounds toward negative infinity; adjust when the
    signs differ and the division is inexact so the remainder takes the
    sign of the dividend.
    """
    q, r = divmod(a, b)
    if r != 0 and (a < 0) != (b < 0):
        q += 1
        r -= b
    return q, r


# ---------------------------------------------------------------------------
# NATIVE
# ---------------------------------------------------------------------------

class NativeBackend:
    """Backend on top of Python's arbitrary-precision ``int``."""

    kind = BackendKind.NATIVE

    def add(self, a: str, b: str) -> str:
        return from_int(to_int(a) + to_int(b))

    def sub(self, a: str, b: str) -> str:
        return from_int(to_int(a) - to_int(b))

    def mul(self, a: str, b: str) -> str:
        return from_int(to_int(a) * to_int(b))

    def div_q(self, a: str, b: str) -> str:
        return self.div_qr(a, b)[0]

    def div_r(self, a: str, b: str) -> str:
        return self.div_qr(a, b)[1]

    def div_qr(self, a: str, b: str) -> tuple[str, str]:
        check_divisor(b)
        q, r = truncdiv(to_int(a), to_int(b))
        return from_int(q), from_int(r)

    def pow(self, a: str, e: int) -> str:
        check_exponent(e)
        return from_int(to_int(a) ** e)

    def mod_pow(self, base: str, exp: str, mod: str) -> str:
        check_divisor(mod)
        try:
            return from_int(pow(to_int(base), to_int(exp), abs(to_int(mod))))
        except ValueError as exc:
            raise NotInvertibleError(
                f"{base} has no inverse modulo {mod}"
            ) from exc

    def sqrt(self, n: str) -> str:
        check_radicand(n)
        return from_int(math.isqrt(to_int(n)))

    def __repr__(self) -> str:
        return "NativeBackend()"


# ---------------------------------------------------------------------------
# GMP
# ---------------------------------------------------------------------------

class GmpBackend:
    """Backend delegating to the GMP library through ``gmpy2``."""

    kind = BackendKind.GMP

    def __init__(self) -> None:
        try:
            self._gmp = importlib.import_module("gmpy2")
        except ModuleNotFoundError as exc:
            raise BackendUnavailableError(
                "the gmp backend requires the gmpy2 package"
            ) from exc

    def _z(self, n: str) -> Any:
        return self._gmp.mpz(n)

    def add(self, a: str, b: str) -> str:
        return str(self._z(a) + self._z(b))

    def sub(self, a: str, b: str) -> str:
        return str(self._z(a) - self._z(b))

    def mul(self, a: str, b: str) -> str:
        return str(self._z(a) * self._z(b))

    def div_q(self, a: str, b: str) -> str:
        check_divisor(b)
        return str(self._gmp.t_div(self._z(a), self._z(b)))

    def div_r(self, a: str, b: str) -> str:
        check_divisor(b)
        return str(self._gmp.t_mod(self._z(a), self._z(b)))

    def div_qr(self, a: str, b: str) -> tuple[str, str]:
        check_divisor(b)
        q, r = self._gmp.t_divmod(self._z(a), self._z(b))
        return str(q), str(r)

    def pow(self, a: str, e: int) -> str:
        check_exponent(e)
        return str(self._z(a) ** e)

    def mod_pow(self, base: str, exp: str, mod: str) -> str:
        check_divisor(mod)
        m = abs(self._z(mod))
        if m == 1:
            return "0"
        try:
            return str(self._gmp.powmod(self._z(base), self._z(exp), m))
        except (ValueError, ZeroDivisionError) as exc:
            raise NotInvertibleError(
                f"{base} has no inverse modulo {mod}"
            ) from exc

    def sqrt(self, n: str) -> str:
        check_radicand(n)
        return str(self._gmp.isqrt(self._z(n)))

    def __repr__(self) -> str:
        return "GmpBackend()"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

BACKENDS: dict[BackendKind, type] = {
    BackendKind.NATIVE: NativeBackend,
    BackendKind.GMP: GmpBackend,
}

# Auto-detection order: most capable first, NATIVE last (always present).
PRIORITY: tuple[BackendKind, ...] = (BackendKind.GMP, BackendKind.NATIVE)

_REQUIRED_MODULES: dict[BackendKind, str | None] = {
    BackendKind.NATIVE: None,
    BackendKind.GMP: "gmpy2",
}


def is_available(kind: BackendKind) -> bool:
    """True when the library a backend needs can be imported."""
    module = _REQUIRED_MODULES[kind]
    return module is None or importlib.util.find_spec(module) is not None


def available_kinds() -> list[BackendKind]:
    return [k for k in PRIORITY if is_available(k)]


def build_backend(kind: BackendKind) -> PrimitiveBackend:
    """Instantiate the backend for ``kind`` (no verification)."""
    if not is_available(kind):
        raise BackendUnavailableError(
            f"backend {kind.value!r} is not available: "
            f"{_REQUIRED_MODULES[kind]} is not installed"
        )
    return BACKENDS[kind]()
