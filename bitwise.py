"""Bitwise AND / OR / XOR on signed integers of any size.

Canonical strings have no fixed width, so the operands are turned into
big-endian byte buffers of equal length, negative ones are replaced by
their two's complement, the operation runs byte by byte, and the result
sign is the same operation applied to the operand signs.  Bits beyond
the buffer are all copies of the sign, which is what makes the
finite-width result exact.

Byte buffers never leave this module.
"""

from __future__ import annotations

import operator
from typing import Callable

from backends import PrimitiveBackend
from digits import ONE, ZERO, split_sign, with_sign

_BYTE = "256"


def _to_bytes(be: PrimitiveBackend, magnitude: str) -> bytearray:
    """Big-endian bytes of a non-negative number; ``"0"`` gives no bytes."""
    out = bytearray()
    while magnitude != ZERO:
        magnitude, remainder = be.div_qr(magnitude, _BYTE)
        out.append(int(remainder))
    out.reverse()
    return out


def _to_decimal(be: PrimitiveBackend, data: bytearray) -> str:
    result = ZERO
    power = ONE
    last = len(data) - 1
    for i in range(last, -1, -1):
        byte = data[i]
        if byte == 1:
            result = be.add(result, power)
        elif byte != 0:
            result = be.add(result, be.mul(power, str(byte)))
        if i != 0:
            power = be.mul(power, _BYTE)
    return result


def twos_complement(data: bytearray) -> bytearray:
    """Invert every byte, then add one, growing by a byte on carry-out."""
    out = bytearray(b ^ 0xFF for b in data)
    for i in range(len(out) - 1, -1, -1):
        if out[i] != 0xFF:
            out[i] += 1
            return out
        out[i] = 0
    # carry past the most significant byte
    out.insert(0, 1)
    return out


def _pad(data: bytearray, length: int) -> bytearray:
    return bytearray(length - len(data)) + data


def _bitwise(
    be: PrimitiveBackend,
    op: Callable[[int, int], int],
    sign_op: Callable[[bool, bool], bool],
    a: str,
    b: str,
) -> str:
    a_neg, a_mag = split_sign(a)
    b_neg, b_mag = split_sign(b)

    a_bin = _to_bytes(be, a_mag)
    b_bin = _to_bytes(be, b_mag)

    width = max(len(a_bin), len(b_bin))
    a_bin = _pad(a_bin, width)
    b_bin = _pad(b_bin, width)

    if a_neg:
        a_bin = twos_complement(a_bin)
    if b_neg:
        b_bin = twos_complement(b_bin)

    # operand complements keep their width: a negative magnitude is never zero
    value = bytearray(op(x, y) for x, y in zip(a_bin, b_bin))

    negative = sign_op(a_neg, b_neg)
    if negative:
        value = twos_complement(value)

    return with_sign(negative, _to_decimal(be, value))


def and_(be: PrimitiveBackend, a: str, b: str) -> str:
    return _bitwise(be, operator.and_, lambda x, y: x and y, a, b)


def or_(be: PrimitiveBackend, a: str, b: str) -> str:
    return _bitwise(be, operator.or_, lambda x, y: x or y, a, b)


def xor(be: PrimitiveBackend, a: str, b: str) -> str:
    return _bitwise(be, operator.xor, operator.ne, a, b)
