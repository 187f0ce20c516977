"""Base conversion.

Import (any base -> base 10) accumulates ``digit * power`` with the
backend's add and mul; export (base 10 -> any base) peels digits off
with ``div_qr``.  The standard alphabet covers bases 2..36; any alphabet
of at least two distinct characters works through the ``*_arbitrary_*``
functions, with its first character as zero.

The functions here assume validated input; ``validate_alphabet`` and
``validate_digits`` are the checks the facade runs first.
"""

from __future__ import annotations

from backends import PrimitiveBackend
from digits import ALPHABET, ONE, ZERO, split_sign, with_sign
from errors import InvalidAlphabetError, InvalidBaseError, NumberFormatError


def validate_alphabet(alphabet: str) -> None:
    if len(alphabet) < 2:
        raise InvalidAlphabetError("alphabet must contain at least 2 characters")
    if len(set(alphabet)) != len(alphabet):
        raise InvalidAlphabetError(f"alphabet {alphabet!r} has duplicate characters")


def validate_base(base: int, alphabet: str = ALPHABET) -> None:
    if not isinstance(base, int) or isinstance(base, bool):
        raise InvalidBaseError(base, len(alphabet))
    if not 2 <= base <= len(alphabet):
        raise InvalidBaseError(base, len(alphabet))


def validate_digits(number: str, alphabet: str, base: int) -> None:
    """Every character of ``number`` must be one of the first ``base`` digits."""
    if number == "":
        raise NumberFormatError("number must not be empty")
    allowed = set(alphabet[:base])
    for ch in number:
        if ch not in allowed:
            raise NumberFormatError(f"{ch!r} is not a valid digit in base {base}")


def from_arbitrary_base(be: PrimitiveBackend, number: str, alphabet: str, base: int) -> str:
    """Base-10 value of the non-negative ``number`` written in ``alphabet``."""
    number = number.lstrip(alphabet[0])
    if number == "":
        return ZERO
    if number == alphabet[1]:
        return ONE

    result = ZERO
    power = ONE
    radix = str(base)
    values = {ch: i for i, ch in enumerate(alphabet)}

    last = len(number) - 1
    for i, ch in enumerate(reversed(number)):
        index = values[ch]
        if index == 1:
            result = be.add(result, power)
        elif index != 0:
            result = be.add(result, be.mul(power, str(index)))
        if i != last:
            power = be.mul(power, radix)

    return result


def to_arbitrary_base(be: PrimitiveBackend, number: str, alphabet: str, base: int) -> str:
    """``number`` (non-negative, base 10) written in ``alphabet``."""
    if number == ZERO:
        return alphabet[0]

    radix = str(base)
    out: list[str] = []
    while number != ZERO:
        number, remainder = be.div_qr(number, radix)
        out.append(alphabet[int(remainder)])

    return "".join(reversed(out))


def from_base(be: PrimitiveBackend, number: str, base: int) -> str:
    """Case-insensitive import from base 2..36, optional leading ``-``."""
    negative, digits = split_sign(number.lower())
    return with_sign(negative, from_arbitrary_base(be, digits, ALPHABET, base))


def to_base(be: PrimitiveBackend, number: str, base: int) -> str:
    """Lowercase export to base 2..36; the sign is kept."""
    negative, magnitude = split_sign(number)
    return with_sign(negative, to_arbitrary_base(be, magnitude, ALPHABET, base))
