"""Integer engine facade.

``Calculator`` binds one primitive backend and exposes every operation of
the engine over canonical digit-strings.  Each public method validates
its inputs, then delegates to the backend or to the layer that builds
the operation from backend primitives:

arith           abs, neg, cmp, sign
number_theory   mod, gcd, lcm, mod_inverse, mod_pow
bases           from_base, to_base and the arbitrary-alphabet variants
rounding        div_round
bitwise         and_, or_, xor

The backend is an explicit dependency.  ``Calculator.default()`` is the
shortcut that binds the process-wide selector's backend.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import arith
import bases
import bitwise
import number_theory
import rounding
from backends import BackendKind, PrimitiveBackend
from bounds import Bounds, OverflowStrategy, to_fixed_width
from digits import ALPHABET, ZERO, require_canonical
from errors import DivisionByZeroError, InvalidArgumentError, NegativeNumberError
from factory import create_backend
from rounding import RoundingMode
from selector import get_backend
from settings import EngineSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Calculator:
    backend: PrimitiveBackend

    @classmethod
    def default(cls) -> "Calculator":
        """Calculator on the process-wide active backend."""
        return cls(get_backend())

    @classmethod
    def from_settings(
        cls,
        settings: EngineSettings | None = None,
        kind: BackendKind | None = None,
    ) -> "Calculator":
        """Calculator on a freshly built backend it owns."""
        backend = create_backend(kind, settings)
        logger.debug("calculator bound to %r", backend)
        return cls(backend)

    # -- internal helpers ---------------------------------------------------

    @staticmethod
    def _validate(*values: str) -> None:
        require_canonical(*values)

    @staticmethod
    def _nonzero(divisor: str) -> None:
        if divisor == ZERO:
            raise DivisionByZeroError()

    # -- primitives -----------------------------------------------------------

    def add(self, a: str, b: str) -> str:
        self._validate(a, b)
        return self.backend.add(a, b)

    def sub(self, a: str, b: str) -> str:
        self._validate(a, b)
        return self.backend.sub(a, b)

    def mul(self, a: str, b: str) -> str:
        self._validate(a, b)
        return self.backend.mul(a, b)

    def div_q(self, a: str, b: str) -> str:
        """Quotient truncated toward zero."""
        self._validate(a, b)
        self._nonzero(b)
        return self.backend.div_q(a, b)

    def div_r(self, a: str, b: str) -> str:
        """Remainder with the sign of the dividend."""
        self._validate(a, b)
        self._nonzero(b)
        return self.backend.div_r(a, b)

    def div_qr(self, a: str, b: str) -> tuple[str, str]:
        self._validate(a, b)
        self._nonzero(b)
        return self.backend.div_qr(a, b)

    def pow(self, a: str, e: int) -> str:
        self._validate(a)
        return self.backend.pow(a, e)

    def sqrt(self, n: str) -> str:
        """Floor of the square root."""
        self._validate(n)
        return self.backend.sqrt(n)

    # -- generic arithmetic -----------------------------------------------------

    def abs(self, n: str) -> str:
        self._validate(n)
        return arith.abs_(n)

    def neg(self, n: str) -> str:
        self._validate(n)
        return arith.neg(n)

    def cmp(self, a: str, b: str) -> int:
        self._validate(a, b)
        return arith.cmp(a, b)

    def sign(self, n: str) -> int:
        self._validate(n)
        return arith.sign(n)

    # -- number theory ------------------------------------------------------------

    def mod(self, a: str, b: str) -> str:
        """``a`` modulo ``b`` in ``[0, |b|)``."""
        self._validate(a, b)
        self._nonzero(b)
        return number_theory.mod(self.backend, a, b)

    def gcd(self, a: str, b: str) -> str:
        self._validate(a, b)
        return number_theory.gcd(self.backend, a, b)

    def lcm(self, a: str, b: str) -> str:
        self._validate(a, b)
        return number_theory.lcm(self.backend, a, b)

    def mod_inverse(self, x: str, m: str) -> str | None:
        """Inverse of ``x`` modulo ``m``, or None when there is none."""
        self._validate(x, m)
        self._nonzero(m)
        if m[0] == "-":
            raise InvalidArgumentError(f"modulus must be positive, got {m}")
        return number_theory.mod_inverse(self.backend, x, m)

    def mod_pow(self, base: str, exp: str, modulus: str) -> str:
        """``base ** exp`` modulo ``|modulus|``, in ``[0, |modulus|)``."""
        self._validate(base, exp, modulus)
        self._nonzero(modulus)
        return number_theory.mod_pow(self.backend, base, exp, modulus)

    # -- base conversion ------------------------------------------------------------

    def from_base(self, number: str, base: int) -> str:
        """Parse ``number`` in base 2..36 (case-insensitive, optional ``-``)."""
        bases.validate_base(base)
        digits = number[1:] if number[:1] == "-" else number
        bases.validate_digits(digits.lower(), ALPHABET, base)
        return bases.from_base(self.backend, number, base)

    def to_base(self, number: str, base: int) -> str:
        self._validate(number)
        bases.validate_base(base)
        return bases.to_base(self.backend, number, base)

    def from_arbitrary_base(
        self, number: str, alphabet: str, base: int | None = None
    ) -> str:
        """Parse a magnitude written in ``alphabet``.

        ``base`` defaults to the alphabet length; a smaller one uses only
        the leading digits of the alphabet.
        """
        bases.validate_alphabet(alphabet)
        base = len(alphabet) if base is None else base
        bases.validate_base(base, alphabet)
        bases.validate_digits(number, alphabet, base)
        return bases.from_arbitrary_base(self.backend, number, alphabet, base)

    def to_arbitrary_base(
        self, number: str, alphabet: str, base: int | None = None
    ) -> str:
        self._validate(number)
        bases.validate_alphabet(alphabet)
        base = len(alphabet) if base is None else base
        bases.validate_base(base, alphabet)
        if number[0] == "-":
            raise NegativeNumberError(
                "only non-negative numbers can be written in a custom alphabet"
            )
        return bases.to_arbitrary_base(self.backend, number, alphabet, base)

    # -- rounding -------------------------------------------------------------------

    def div_round(self, a: str, b: str, mode: RoundingMode) -> str:
        self._validate(a, b)
        self._nonzero(b)
        return rounding.div_round(self.backend, a, b, mode)

    # -- bitwise --------------------------------------------------------------------

    def and_(self, a: str, b: str) -> str:
        self._validate(a, b)
        return bitwise.and_(self.backend, a, b)

    def or_(self, a: str, b: str) -> str:
        self._validate(a, b)
        return bitwise.or_(self.backend, a, b)

    def xor(self, a: str, b: str) -> str:
        self._validate(a, b)
        return bitwise.xor(self.backend, a, b)

    # -- fixed width ------------------------------------------------------------------

    def to_fixed_width(
        self,
        value: str,
        bounds: Bounds,
        overflow: OverflowStrategy = OverflowStrategy.ERROR,
    ) -> int:
        return to_fixed_width(value, bounds, overflow)
