"""Test suite for the unset value sentinel helpers."""

import numpy as np
import pytest

from caftruth.utils.globals import SNAN, SNAN_BITS
from caftruth.utils.sentinel import (
    as_optional,
    float_bits,
    is_missing,
    is_sentinel,
    sentinel_array,
)


class TestSentinel:
    """Test the sentinel value itself."""

    def test_bits(self):
        """Test that the sentinel is a signaling NaN with the expected bits."""
        assert isinstance(SNAN, np.float32)
        assert np.isnan(SNAN)
        assert float_bits(SNAN) == SNAN_BITS == 0x7FA00000
        assert not float_bits(SNAN) & 0x00400000

    def test_quiet_nan(self):
        """Test that a computed NaN is missing but not the sentinel."""
        qnan = np.float32(np.nan)
        assert float_bits(qnan) & 0x00400000
        assert is_missing(qnan)
        assert not is_sentinel(qnan)

    def test_array(self):
        """Test that sentinel arrays carry the exact bits in every element."""
        array = sentinel_array(3)
        assert array.dtype == np.float32
        assert np.all(float_bits(array) == SNAN_BITS)
        assert is_sentinel(array)

    def test_array_double(self):
        """Test that double precision arrays are filled with NaN."""
        array = sentinel_array(2, np.float64)
        assert array.dtype == np.float64
        assert np.all(np.isnan(array))


class TestMissing:
    """Test the interpretation of missing values."""

    @pytest.mark.parametrize(
        "value, missing",
        [
            (SNAN, True),
            (np.float32(np.nan), True),
            (np.float32(0.0), False),
            (1.5, False),
            (np.array([np.nan, np.nan, np.nan], dtype=np.float32), True),
            (np.array([np.nan, 1.0, np.nan], dtype=np.float32), False),
        ],
    )
    def test_is_missing(self, value, missing):
        """Test that any NaN scalar or all-NaN vector is missing."""
        assert is_missing(value) is missing

    def test_as_optional(self):
        """Test the conversion to optional values."""
        assert as_optional(SNAN) is None
        assert as_optional(sentinel_array(3)) is None
        assert as_optional(np.float32(2.0)) == 2.0

        vector = np.array([1.0, 2.0, 3.0], dtype=np.float32)
        assert as_optional(vector) is vector
