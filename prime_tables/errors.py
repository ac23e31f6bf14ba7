"""
Exceptions raised by the sieves.

Responsibility: error taxonomy only. Each class derives from the builtin
a caller would already expect, so ``except IndexError`` and friends keep
working.
"""


class SieveRangeError(IndexError):
    """A query argument exceeds the precomputed bound."""


class NoPrimeFactorError(ValueError):
    """A factor lookup was requested for 0, 1 or -1."""


class SieveOverflowError(OverflowError):
    """The bound is too wide for the widened multiplication domain."""


class ConversionError(ValueError):
    """A value cannot be represented exactly in the target integer type."""
