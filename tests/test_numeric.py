"""
Tests for the checked integer conversions shared by the sieves.
"""

import numpy as np
import pytest

from prime_tables.errors import ConversionError, SieveOverflowError
from prime_tables.numeric import (
    bit_width,
    check_product_width,
    digits,
    dtype_of,
    integer_dtype,
    numeric_cast,
    unsigned_abs,
)


class TestNumericCast:

    def test_value_that_fits(self):
        v = numeric_cast(255, np.uint8)
        assert v == 255
        assert isinstance(v, np.uint8)

    @pytest.mark.parametrize("value, dtype", [
        (256, np.uint8),
        (-1, np.uint64),
        (128, np.int8),
        (-129, np.int8),
        (2**64, np.uint64),
    ])
    def test_value_that_does_not_fit(self, value, dtype):
        with pytest.raises(ConversionError):
            numeric_cast(value, dtype)

    def test_between_numpy_types(self):
        assert numeric_cast(np.int64(100), np.int8) == 100
        with pytest.raises(ConversionError):
            numeric_cast(np.int16(-1), np.uint16)

    def test_integral_float_accepted(self):
        assert numeric_cast(2.0, np.int32) == 2

    @pytest.mark.parametrize("value", [2.5, float('inf'), float('nan'), "3", True])
    def test_non_integers_rejected(self, value):
        with pytest.raises(ConversionError):
            numeric_cast(value, np.int32)

    def test_conversion_error_is_value_error(self):
        with pytest.raises(ValueError):
            numeric_cast(-5, np.uint32)

    def test_target_must_be_integer_type(self):
        with pytest.raises(TypeError):
            numeric_cast(5, np.float64)


class TestDtypes:

    def test_integer_dtype(self):
        assert integer_dtype('uint16') == np.uint16
        with pytest.raises(TypeError):
            integer_dtype(bool)

    def test_dtype_of(self):
        assert dtype_of(3) == np.int64
        assert dtype_of(np.int16(3)) == np.int16
        assert dtype_of(3, np.uint8) == np.uint8
        with pytest.raises(TypeError):
            dtype_of(3, float)

    def test_digits(self):
        assert digits(np.uint64) == 64
        assert digits(np.int64) == 63
        assert digits(np.int8) == 7


class TestUnsignedAbs:

    def test_most_negative_value(self):
        """abs(-128) does not fit int8 but does fit uint8."""
        v = unsigned_abs(np.int8(-128))
        assert v == 128
        assert v.dtype == np.uint8

    def test_keeps_width(self):
        assert unsigned_abs(np.int64(-5)).dtype == np.uint64
        assert unsigned_abs(np.int16(300)).dtype == np.uint16

    def test_unsigned_unchanged(self):
        v = np.uint16(7)
        assert unsigned_abs(v) is v

    def test_python_int(self):
        assert unsigned_abs(-3) == 3
        assert unsigned_abs(2**70) == 2**70

    def test_float_rejected(self):
        with pytest.raises(TypeError):
            unsigned_abs(-2.0)


class TestProductWidth:
    """The widened-accumulator guard."""

    def test_bit_width(self):
        assert bit_width(0) == 0
        assert bit_width(1) == 1
        assert bit_width(255) == 8
        assert bit_width(256) == 9
        assert bit_width(np.int8(-128)) == 8

    def test_boundary_in_uint64(self):
        check_product_width(2**32 - 1)
        with pytest.raises(SieveOverflowError):
            check_product_width(2**32)

    def test_signed_accumulator_has_one_bit_less(self):
        check_product_width(2**31 - 1, accumulator=np.int64)
        with pytest.raises(SieveOverflowError):
            check_product_width(2**31, accumulator=np.int64)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
