"""
Tests for fixed-width conversion.

Values are unbounded inside the engine; these check the single exit
point into machine-sized integers and its overflow strategies.
"""

import pytest
from hypothesis import given
from hypothesis.strategies import integers

from bounds import (
    INT8,
    INT32,
    INT64,
    UINT8,
    UINT64,
    Bounds,
    OverflowStrategy,
    to_fixed_width,
)
from errors import IntegerOverflowError, MathError, NumberFormatError


# ---------------------------------------------------------------------------
# Bounds construction
# ---------------------------------------------------------------------------

class TestBoundsConstruction:
    def test_valid_bounds(self):
        b = Bounds(lo=-10, hi=10)
        assert b.width == 21

    def test_single_value_bounds(self):
        b = Bounds(lo=0, hi=0)
        assert b.width == 1
        assert b.contains(0)
        assert not b.contains(1)

    def test_invalid_bounds_raises(self):
        with pytest.raises(ValueError, match="lo.*must be <= hi"):
            Bounds(lo=10, hi=-10)

    def test_presets(self):
        assert (INT8.lo, INT8.hi) == (-128, 127)
        assert (UINT8.lo, UINT8.hi) == (0, 255)
        assert INT64.hi == 2**63 - 1
        assert UINT64.width == 2**64


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

class TestErrorStrategy:
    def test_in_range(self):
        assert to_fixed_width("-128", INT8) == -128
        assert to_fixed_width("127", INT8) == 127

    def test_overflow_raises(self):
        with pytest.raises(IntegerOverflowError) as info:
            to_fixed_width("128", INT8)
        assert info.value.value == "128"
        assert isinstance(info.value, OverflowError)

    def test_overflow_is_not_a_format_error(self):
        with pytest.raises(IntegerOverflowError):
            to_fixed_width("9" * 5000, INT64)

    def test_rejects_non_canonical(self):
        with pytest.raises(NumberFormatError):
            to_fixed_width("+5", INT32)

    def test_both_are_engine_errors(self):
        assert issubclass(IntegerOverflowError, MathError)


class TestClampStrategy:
    def test_saturates(self):
        assert to_fixed_width("1000", INT8, OverflowStrategy.CLAMP) == 127
        assert to_fixed_width("-1000", INT8, OverflowStrategy.CLAMP) == -128

    @given(v=integers(min_value=-128, max_value=127))
    def test_in_range_identity(self, v):
        assert to_fixed_width(str(v), INT8, OverflowStrategy.CLAMP) == v


class TestWrapStrategy:
    def test_wraps_like_c(self):
        assert to_fixed_width("256", UINT8, OverflowStrategy.WRAP) == 0
        assert to_fixed_width("-1", UINT8, OverflowStrategy.WRAP) == 255
        assert to_fixed_width("128", INT8, OverflowStrategy.WRAP) == -128

    @given(v=integers(min_value=-(10**30), max_value=10**30))
    def test_always_in_range(self, v):
        assert INT32.contains(to_fixed_width(str(v), INT32, OverflowStrategy.WRAP))

    @given(v=integers(min_value=-(10**30), max_value=10**30))
    def test_congruent(self, v):
        assert (to_fixed_width(str(v), INT8, OverflowStrategy.WRAP) - v) % 256 == 0
