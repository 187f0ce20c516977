"""Exception types for the integer engine.

Every error derives from ``MathError``.  Precondition errors also derive
from the matching builtin (``ValueError``, ``ZeroDivisionError``, ...)
so callers that only know the builtins still catch them.

``mod_inverse`` does NOT raise when no inverse exists; it returns
``None``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from factory import VerificationReport


class MathError(Exception):
    """Base class for every error raised by the engine."""


class NumberFormatError(MathError, ValueError):
    """A string is not a canonical integer, or not valid in a base."""


class DivisionByZeroError(MathError, ZeroDivisionError):
    """Division or reduction by zero."""

    def __init__(self, message: str = "division by zero") -> None:
        super().__init__(message)


class NegativeNumberError(MathError, ValueError):
    """A non-negative value was required."""


class InvalidArgumentError(MathError, ValueError):
    """An argument is outside the operation's domain."""


class InvalidBaseError(InvalidArgumentError):
    """Base outside the range allowed by the alphabet."""

    def __init__(self, base: int, max_base: int = 36) -> None:
        self.base = base
        self.max_base = max_base
        super().__init__(f"base {base} is out of range [2, {max_base}]")


class InvalidAlphabetError(InvalidArgumentError):
    """Alphabet with fewer than two characters, or with duplicates."""


class RoundingNecessaryError(MathError, ArithmeticError):
    """Raised under ``RoundingMode.UNNECESSARY`` when the division is inexact."""

    def __init__(self) -> None:
        super().__init__("rounding is necessary to represent the result")


class NotInvertibleError(MathError, ValueError):
    """Negative exponent in ``mod_pow`` with a base that has no inverse."""


class IntegerOverflowError(MathError, OverflowError):
    """A value does not fit the requested fixed-width range."""

    def __init__(self, value: str, lo: int, hi: int) -> None:
        self.value = value
        self.lo = lo
        self.hi = hi
        super().__init__(
            f"{value} is out of range {lo} to {hi} and cannot be "
            f"represented as a fixed-width integer"
        )


class BackendUnavailableError(MathError, RuntimeError):
    """The library behind a requested backend is not installed."""


class VerificationError(MathError):
    """A backend failed its contract and was not handed out."""

    def __init__(self, report: VerificationReport) -> None:
        self.report = report
        super().__init__(f"Verification failed:\n{report.summary()}")
