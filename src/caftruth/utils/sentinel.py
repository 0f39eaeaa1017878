"""Helpers to interpret the NaN sentinel which marks unset floating-point values.

Consumers must treat any NaN as missing. The exact signaling NaN bit pattern
additionally tells apart a value which was never set from a value which was
computed as NaN, provided the bits were preserved along the way.
"""

import numpy as np

from .globals import SNAN_BITS

__all__ = ["float_bits", "is_sentinel", "is_missing", "as_optional", "sentinel_array"]


def float_bits(value):
    """Returns the raw bit pattern of a value cast to single precision.

    Parameters
    ----------
    value : Union[float, np.ndarray]
        Scalar or array of floating point values

    Returns
    -------
    Union[int, np.ndarray]
        32-bit pattern(s) of the value(s)
    """
    bits = np.asarray(value, dtype=np.float32).view(np.uint32)
    if bits.ndim == 0:
        return int(bits)

    return bits


def is_sentinel(value):
    """Checks whether a value carries the exact unset sentinel bit pattern.

    For arrays, all the components must carry the sentinel.

    Parameters
    ----------
    value : Union[float, np.ndarray]
        Scalar or array of floating point values

    Returns
    -------
    bool
        `True` if the value was never set
    """
    return bool(np.all(float_bits(value) == SNAN_BITS))


def is_missing(value):
    """Checks whether a value should be treated as missing.

    A scalar is missing if it is a NaN of any kind. A vector is missing if all
    of its components are NaN.

    Parameters
    ----------
    value : Union[float, np.ndarray]
        Scalar or array of floating point values

    Returns
    -------
    bool
        `True` if the value is missing
    """
    return bool(np.all(np.isnan(np.asarray(value, dtype=np.float32))))


def as_optional(value):
    """Converts a sentinel-encoded value into an optional one.

    Parameters
    ----------
    value : Union[float, np.ndarray]
        Scalar or array of floating point values

    Returns
    -------
    Union[float, np.ndarray, None]
        `None` if the value is missing, the value itself otherwise
    """
    if is_missing(value):
        return None

    return value


def sentinel_array(size, dtype=np.float32):
    """Builds an array filled with the unset sentinel.

    The single-precision array is built from the raw bit pattern so that the
    signaling NaN is never quieted by a floating point conversion.

    Parameters
    ----------
    size : int
        Number of elements in the array
    dtype : type, default np.float32
        Floating point type of the array

    Returns
    -------
    np.ndarray
        (N) Array of unset values
    """
    if np.dtype(dtype) == np.float32:
        return np.full(size, SNAN_BITS, dtype=np.uint32).view(np.float32)

    return np.full(size, np.nan, dtype=dtype)
