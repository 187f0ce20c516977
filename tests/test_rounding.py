"""Tests for rounding division.

White-box tables hit each branch of ``div_round``; the hypothesis tests
compare every mode against an exact ``Fraction`` reference.
"""

from __future__ import annotations

import math
from fractions import Fraction

import pytest
from hypothesis import given
from hypothesis import strategies as st

from backends import NativeBackend
from conftest import ints, nonzero
from errors import InvalidArgumentError, RoundingNecessaryError
from rounding import RoundingMode, div_round

BE = NativeBackend()
M = RoundingMode


def reference(a: int, b: int, mode: RoundingMode) -> int:
    exact = Fraction(a, b)
    trunc = int(exact)
    if exact == trunc:
        return trunc
    away = trunc + (1 if exact > 0 else -1)

    if mode is M.DOWN:
        return trunc
    if mode is M.UP:
        return away
    if mode is M.CEILING:
        return math.ceil(exact)
    if mode is M.FLOOR:
        return math.floor(exact)

    distance = abs(exact - trunc)
    if distance < Fraction(1, 2):
        return trunc
    if distance > Fraction(1, 2):
        return away
    # exactly half
    if mode is M.HALF_UP:
        return away
    if mode is M.HALF_DOWN:
        return trunc
    if mode is M.HALF_CEILING:
        return math.ceil(exact)
    if mode is M.HALF_FLOOR:
        return math.floor(exact)
    return trunc if trunc % 2 == 0 else away


# ---------------------------------------------------------------------------
# Examples
# ---------------------------------------------------------------------------

class TestExamples:
    @pytest.mark.parametrize(
        "a, b, mode, expected",
        [
            ("7", "2", M.HALF_EVEN, "4"),
            ("5", "2", M.HALF_EVEN, "2"),
            ("-7", "2", M.CEILING, "-3"),
            ("-7", "2", M.FLOOR, "-4"),
            ("7", "2", M.UP, "4"),
            ("7", "2", M.DOWN, "3"),
            ("-7", "2", M.UP, "-4"),
            ("-7", "2", M.DOWN, "-3"),
            ("7", "-2", M.CEILING, "-3"),
            ("-7", "-2", M.CEILING, "4"),
            ("6", "2", M.UNNECESSARY, "3"),
        ],
    )
    def test_examples(self, a, b, mode, expected):
        assert div_round(BE, a, b, mode) == expected

    def test_unnecessary_inexact_raises(self):
        with pytest.raises(RoundingNecessaryError):
            div_round(BE, "7", "2", M.UNNECESSARY)

    def test_rounding_necessary_is_arithmetic_error(self):
        with pytest.raises(ArithmeticError):
            div_round(BE, "1", "3", M.UNNECESSARY)

    @pytest.mark.parametrize("mode", ["half_even", None, 3])
    def test_mode_must_be_enum(self, mode):
        with pytest.raises(InvalidArgumentError):
            div_round(BE, "7", "2", mode)

    def test_zero_dividend(self):
        for mode in M:
            assert div_round(BE, "0", "-5", mode) == "0"


# ---------------------------------------------------------------------------
# Half-way branches, both signs
# ---------------------------------------------------------------------------

class TestHalfBranches:
    # (mode, 5/2, -5/2, 7/2, -7/2)
    TABLE = [
        (M.HALF_UP, "3", "-3", "4", "-4"),
        (M.HALF_DOWN, "2", "-2", "3", "-3"),
        (M.HALF_CEILING, "3", "-2", "4", "-3"),
        (M.HALF_FLOOR, "2", "-3", "3", "-4"),
        (M.HALF_EVEN, "2", "-2", "4", "-4"),
    ]

    @pytest.mark.parametrize("mode, p5, n5, p7, n7", TABLE)
    def test_ties(self, mode, p5, n5, p7, n7):
        assert div_round(BE, "5", "2", mode) == p5
        assert div_round(BE, "-5", "2", mode) == n5
        assert div_round(BE, "7", "2", mode) == p7
        assert div_round(BE, "-7", "2", mode) == n7

    @pytest.mark.parametrize("mode", [M.HALF_UP, M.HALF_DOWN, M.HALF_CEILING, M.HALF_FLOOR, M.HALF_EVEN])
    def test_below_and_above_half(self, mode):
        # 7/3 = 2.33, 8/3 = 2.67
        assert div_round(BE, "7", "3", mode) == "2"
        assert div_round(BE, "8", "3", mode) == "3"
        assert div_round(BE, "-7", "3", mode) == "-2"
        assert div_round(BE, "-8", "3", mode) == "-3"

    def test_odd_divisor_never_ties(self):
        # |2r| == |b| is impossible for odd b
        assert div_round(BE, "4", "3", M.HALF_UP) == "1"
        assert div_round(BE, "5", "3", M.HALF_DOWN) == "2"


# ---------------------------------------------------------------------------
# Against the exact reference
# ---------------------------------------------------------------------------

class TestAgainstReference:
    @given(a=ints, b=nonzero, mode=st.sampled_from([m for m in M if m is not M.UNNECESSARY]))
    def test_all_modes(self, a, b, mode):
        assert div_round(BE, str(a), str(b), mode) == str(reference(a, b, mode))

    @given(a=st.integers(-1000, 1000), b=st.sampled_from([2, -2, 4, -4, 10, -10]),
           mode=st.sampled_from(list(M)))
    def test_small_with_frequent_ties(self, a, b, mode):
        if mode is M.UNNECESSARY and a % b:
            with pytest.raises(RoundingNecessaryError):
                div_round(BE, str(a), str(b), mode)
            return
        assert div_round(BE, str(a), str(b), mode) == str(reference(a, b, mode))

    @given(q=ints, b=nonzero)
    def test_exact_division_is_mode_independent(self, q, b):
        a = str(q * b)
        results = {div_round(BE, a, str(b), mode) for mode in M}
        assert results == {str(q)}
