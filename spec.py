"""Contract every primitive backend must satisfy.

The contract is declarative: it says WHAT must hold for a backend, not
HOW the backend computes it.  ``factory.py`` runs it against each
backend it builds and refuses to hand out one that fails.

Layers
------
Property        a named predicate over (backend, *canonical inputs)
ErrorCondition  a call that must raise a specific exception
Spec            an ordered collection of both
backend_spec()  the full contract, one Spec per operation group

The higher layers (mod, gcd, div_round) rely on the truncating division
convention, so it is checked here rather than assumed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from backends import MAX_POWER, PrimitiveBackend, truncdiv
from digits import is_canonical
from errors import (
    DivisionByZeroError,
    InvalidArgumentError,
    NegativeNumberError,
    NotInvertibleError,
)


# ---------------------------------------------------------------------------
# Core spec primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Property:
    """A single verifiable property of a backend."""

    name: str
    description: str
    arity: int          # how many canonical inputs the check needs
    predicate: Callable[..., bool]

    def check(self, backend: PrimitiveBackend, *args: str) -> bool:
        return self.predicate(backend, *args)


@dataclass(frozen=True)
class ErrorCondition:
    """A call that must raise ``exception``."""

    name: str
    description: str
    invoke: Callable[[PrimitiveBackend], Any]
    exception: type[BaseException]


@dataclass
class Spec:
    """An ordered collection of properties that together form a contract."""

    name: str
    properties: list[Property] = field(default_factory=list)
    error_conditions: list[ErrorCondition] = field(default_factory=list)

    def add(self, prop: Property) -> None:
        self.properties.append(prop)

    def expect(self, condition: ErrorCondition) -> None:
        self.error_conditions.append(condition)

    def __iter__(self):
        return iter(self.properties)

    def __len__(self):
        return len(self.properties)


# ---------------------------------------------------------------------------
# Spec builders
# ---------------------------------------------------------------------------

def arithmetic_spec() -> Spec:
    """add, sub and mul are exact and canonical."""
    spec = Spec(name="arithmetic")

    spec.add(Property(
        "add_exact", "add(a, b) == a + b", 2,
        lambda be, a, b: be.add(a, b) == str(int(a) + int(b)),
    ))
    spec.add(Property(
        "sub_exact", "sub(a, b) == a - b", 2,
        lambda be, a, b: be.sub(a, b) == str(int(a) - int(b)),
    ))
    spec.add(Property(
        "mul_exact", "mul(a, b) == a * b", 2,
        lambda be, a, b: be.mul(a, b) == str(int(a) * int(b)),
    ))
    spec.add(Property(
        "canonical", "results are canonical digit-strings", 2,
        lambda be, a, b: all(
            is_canonical(r) for r in (be.add(a, b), be.sub(a, b), be.mul(a, b))
        ),
    ))
    spec.add(Property(
        "self_inverse", "sub(a, a) == 0", 1,
        lambda be, a: be.sub(a, a) == "0",
    ))

    return spec


def division_spec() -> Spec:
    """Truncating division: quotient toward zero, remainder signed like a."""
    spec = Spec(name="division")

    spec.add(Property(
        "identity", "div_q(a, b) * b + div_r(a, b) == a  (b != 0)", 2,
        lambda be, a, b: b == "0" or (
            int(be.div_q(a, b)) * int(b) + int(be.div_r(a, b)) == int(a)
        ),
    ))
    spec.add(Property(
        "truncates", "div_qr(a, b) matches truncating division  (b != 0)", 2,
        lambda be, a, b: b == "0" or (
            be.div_qr(a, b) == tuple(str(x) for x in truncdiv(int(a), int(b)))
        ),
    ))
    spec.add(Property(
        "remainder_sign", "div_r(a, b) is zero or has the sign of a  (b != 0)", 2,
        lambda be, a, b: b == "0" or (
            be.div_r(a, b) == "0"
            or (be.div_r(a, b)[0] == "-") == (a[0] == "-")
        ),
    ))
    spec.add(Property(
        "remainder_bound", "|div_r(a, b)| < |b|  (b != 0)", 2,
        lambda be, a, b: b == "0" or abs(int(be.div_r(a, b))) < abs(int(b)),
    ))
    spec.add(Property(
        "consistent", "div_qr(a, b) == (div_q(a, b), div_r(a, b))  (b != 0)", 2,
        lambda be, a, b: b == "0" or (
            be.div_qr(a, b) == (be.div_q(a, b), be.div_r(a, b))
        ),
    ))

    spec.expect(ErrorCondition(
        "div_q_by_zero", "div_q(1, 0) raises DivisionByZeroError",
        lambda be: be.div_q("1", "0"), DivisionByZeroError,
    ))
    spec.expect(ErrorCondition(
        "div_r_by_zero", "div_r(1, 0) raises DivisionByZeroError",
        lambda be: be.div_r("1", "0"), DivisionByZeroError,
    ))
    spec.expect(ErrorCondition(
        "div_qr_by_zero", "div_qr(0, 0) raises DivisionByZeroError",
        lambda be: be.div_qr("0", "0"), DivisionByZeroError,
    ))

    return spec


def _small_exponent(b: str) -> int:
    return abs(int(b)) % 9


def _is_floor_sqrt(be: PrimitiveBackend, a: str) -> bool:
    n = abs(int(a))
    r = int(be.sqrt(str(n)))
    return r * r <= n < (r + 1) * (r + 1)


def power_spec() -> Spec:
    """pow, mod_pow and sqrt."""
    spec = Spec(name="power")

    spec.add(Property(
        "pow_zero", "pow(a, 0) == 1, including a == 0", 1,
        lambda be, a: be.pow(a, 0) == "1",
    ))
    spec.add(Property(
        "pow_exact", "pow(a, e) == a ** e", 2,
        lambda be, a, b: be.pow(a, _small_exponent(b)) == str(
            int(a) ** _small_exponent(b)
        ),
    ))
    spec.add(Property(
        "mod_pow_range", "0 <= mod_pow(a, e, m) < |m|  (m != 0, e >= 0)", 2,
        lambda be, a, b: b == "0" or (
            0 <= int(be.mod_pow(a, str(_small_exponent(a)), b)) < abs(int(b))
        ),
    ))
    spec.add(Property(
        "mod_pow_exact", "mod_pow(a, e, m) == a ** e mod |m|  (m != 0, e >= 0)", 2,
        lambda be, a, b: b == "0" or (
            int(be.mod_pow(a, str(_small_exponent(b)), b))
            == pow(int(a), _small_exponent(b), abs(int(b)))
        ),
    ))
    spec.add(Property(
        "sqrt_floor", "r = sqrt(|a|) satisfies r*r <= |a| < (r+1)*(r+1)", 1,
        _is_floor_sqrt,
    ))

    spec.expect(ErrorCondition(
        "pow_negative_exponent", "pow(2, -1) raises InvalidArgumentError",
        lambda be: be.pow("2", -1), InvalidArgumentError,
    ))
    spec.expect(ErrorCondition(
        "pow_exponent_too_large", "pow(2, MAX_POWER + 1) raises InvalidArgumentError",
        lambda be: be.pow("2", MAX_POWER + 1), InvalidArgumentError,
    ))
    spec.expect(ErrorCondition(
        "mod_pow_zero_modulus", "mod_pow(2, 3, 0) raises DivisionByZeroError",
        lambda be: be.mod_pow("2", "3", "0"), DivisionByZeroError,
    ))
    spec.expect(ErrorCondition(
        "mod_pow_not_invertible", "mod_pow(2, -1, 4) raises NotInvertibleError",
        lambda be: be.mod_pow("2", "-1", "4"), NotInvertibleError,
    ))
    spec.expect(ErrorCondition(
        "sqrt_negative", "sqrt(-1) raises NegativeNumberError",
        lambda be: be.sqrt("-1"), NegativeNumberError,
    ))

    return spec


def backend_spec() -> list[Spec]:
    """The complete primitive contract."""
    return [arithmetic_spec(), division_spec(), power_spec()]
