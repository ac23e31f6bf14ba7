"""
Checked integer conversions shared by the sieves.

Responsibility: integer-type bookkeeping. No sieve logic lives here.

Integer "types" are numpy integer dtypes (int8 ... uint64). Python ints
are arbitrary precision, so every width limit is enforced explicitly
against ``np.iinfo`` instead of relying on wraparound.
"""

import numpy as np

from .errors import ConversionError, SieveOverflowError

DEFAULT_DTYPE = np.dtype(np.int64)

# Products of two bounds are formed in this type.
ACCUMULATOR = np.dtype(np.uint64)


def integer_dtype(dtype) -> np.dtype:
    """Normalize ``dtype`` and reject anything that is not an integer type."""
    dt = np.dtype(dtype)
    if dt.kind not in ('i', 'u'):
        raise TypeError(f"Sieves must use integer types, got {dt}.")
    return dt


def dtype_of(value, dtype=None) -> np.dtype:
    """
    Pick the integer dtype a sieve should work in.

    An explicit ``dtype`` wins; otherwise a numpy integer scalar brings its
    own dtype, and plain Python ints fall back to int64.
    """
    if dtype is not None:
        return integer_dtype(dtype)
    if isinstance(value, np.integer):
        return value.dtype
    return DEFAULT_DTYPE


def digits(dtype) -> int:
    """Number of value bits of ``dtype`` (the sign bit is not counted)."""
    info = np.iinfo(integer_dtype(dtype))
    return info.bits - 1 if info.min < 0 else info.bits


def numeric_cast(value, dtype):
    """
    Convert ``value`` to a scalar of ``dtype``, refusing lossy conversions.

    Parameters
    ----------
    value : int, np.integer or float
        Value to convert. Floats are accepted only when integral.
    dtype : numpy integer dtype
        Target type.

    Returns
    -------
    np.integer
        ``value`` as a scalar of ``dtype``.

    Raises
    ------
    ConversionError
        If ``value`` is not an exact integer or does not fit ``dtype``.
    """
    dt = integer_dtype(dtype)

    if isinstance(value, (bool, np.bool_)):
        raise ConversionError(f"{value!r} is a boolean, not an integer.")
    if isinstance(value, (int, np.integer)):
        v = int(value)
    elif isinstance(value, (float, np.floating)) and float(value).is_integer():
        v = int(value)
    else:
        raise ConversionError(f"{value!r} is not an exact integer.")

    info = np.iinfo(dt)
    if v < info.min or v > info.max:
        raise ConversionError(
            f"{v} does not fit in {dt} (range [{info.min}, {info.max}])."
        )
    return dt.type(v)


def unsigned_abs(value):
    """
    Absolute value in the unsigned type of the same width.

    ``unsigned_abs(np.int8(-128))`` is ``np.uint8(128)``, which a plain
    ``abs`` in int8 could not represent. Unsigned scalars are returned
    unchanged and Python ints get the builtin ``abs``.
    """
    if isinstance(value, np.signedinteger):
        unsigned = np.dtype(f"u{value.dtype.itemsize}")
        return unsigned.type(abs(int(value)))
    if isinstance(value, np.unsignedinteger):
        return value
    if isinstance(value, int):
        return abs(value)
    raise TypeError(f"unsigned_abs needs an integer, got {type(value).__name__}.")


def bit_width(value) -> int:
    """Bits needed to represent the magnitude of ``value`` (0 for 0)."""
    return int(unsigned_abs(value)).bit_length()


def check_product_width(limit, accumulator=ACCUMULATOR) -> None:
    """
    Make sure ``limit * limit`` cannot wrap around in ``accumulator``.

    Raises
    ------
    SieveOverflowError
        If twice the bit width of ``limit`` exceeds the accumulator's
        value bits.
    """
    width = bit_width(limit)
    if width * 2 > digits(accumulator):
        raise SieveOverflowError(
            f"Multiplication will overflow when sieving: {limit} needs "
            f"{width} bits, squaring it needs more than the "
            f"{digits(accumulator)} bits of {np.dtype(accumulator)}."
        )
