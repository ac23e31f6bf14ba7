"""
Prime generation utilities.

Responsibility: primality only. No factorization, no pair logic.
"""

import operator

import numpy as np

from .errors import SieveRangeError
from .numeric import dtype_of, numeric_cast


class PrimalitySieve:
    """
    Sieve of Eratosthenes over ``[0, limit]``.

    The table is computed once in the constructor and stored bit-packed
    (one bit per number). Sieving itself runs on a full bool array, so peak
    memory while constructing is one byte per number; that array is
    released once it has been packed. Nothing mutates the table afterwards,
    so a built sieve can be shared between readers.

    Parameters
    ----------
    limit : int
        Upper bound (inclusive).
    dtype : numpy integer dtype, optional
        Integer type of the bound. Defaults to the dtype of ``limit`` when
        it is a numpy scalar, int64 otherwise.
    verbose : bool
        Print a one-line summary after sieving.

    Raises
    ------
    ConversionError
        If ``limit`` is negative or does not fit ``dtype``.
    """

    def __init__(self, limit, dtype=None, verbose: bool = False):
        self._dtype = dtype_of(limit, dtype)
        self._limit = numeric_cast(limit, self._dtype)
        self._size = int(numeric_cast(limit, np.uintp)) + 1

        flags = np.ones(self._size, dtype=bool)
        flags[:2] = False

        # Counters live in the 64-bit unsigned domain so i*i cannot
        # overflow whatever type the bound came in.
        limit_u64 = int(numeric_cast(limit, np.uint64))
        i = 2
        while i * i <= limit_u64:
            if flags[i]:
                flags[i * i::i] = False
            i += 1

        self._bits = np.packbits(flags)
        self._bits.flags.writeable = False

        if verbose:
            print(f"    Found {np.count_nonzero(flags):,} primes up to {int(self._limit):,}")

    @property
    def limit(self):
        """The maximum number (inclusive) the sieve holds."""
        return self._limit

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def nbytes(self) -> int:
        """Bytes held by the packed table."""
        return self._bits.nbytes

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"PrimalitySieve(limit={int(self._limit)}, dtype={self._dtype})"

    def _flag(self, n: int) -> bool:
        return bool((int(self._bits[n >> 3]) >> (7 - (n & 7))) & 1)

    def is_prime(self, number) -> bool:
        """
        Return whether ``number`` is prime.

        Negative numbers are never prime.

        Raises
        ------
        SieveRangeError
            If ``number`` exceeds the limit.
        """
        n = operator.index(number)
        if n < 0:
            return False
        if n > int(self._limit):
            raise SieveRangeError(
                f"{n} exceeds the limit of the sieve ({int(self._limit)})."
            )
        return self._flag(n)

    def __contains__(self, number) -> bool:
        n = operator.index(number)
        return 0 <= n <= int(self._limit) and self._flag(n)

    def prime_flags(self) -> np.ndarray:
        """Boolean array of length limit+1 where flags[i] is True iff i is prime."""
        return np.unpackbits(self._bits, count=self._size).astype(bool)

    def primes(self) -> np.ndarray:
        """Ascending array of all primes <= limit, in the sieve's dtype."""
        return np.nonzero(self.prime_flags())[0].astype(self._dtype)


def prime_flags_upto(N: int) -> np.ndarray:
    """
    Return boolean array where flags[i] is True iff i is prime.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        Boolean array of length N+1.
    """
    return PrimalitySieve(N).prime_flags()


def primes_upto(N: int) -> np.ndarray:
    """
    Return array of all primes <= N.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        Array of primes.
    """
    return PrimalitySieve(N).primes()


def is_prime_small(number) -> bool:
    """
    Trial-division primality test for 16-bit numbers.

    No table is built, so this is only meant for callers that need a
    handful of answers. Numpy inputs wider than 16 bits are rejected
    outright; Python ints must fit in uint16.

    Raises
    ------
    TypeError
        If ``number`` is a numpy integer wider than 16 bits.
    ConversionError
        If ``number`` is at least 2**16.
    """
    if isinstance(number, np.integer) and np.iinfo(number.dtype).bits > 16:
        raise TypeError(
            f"is_prime_small only supports types up to 16 bits, got {number.dtype}."
        )
    if number < 2:
        return False
    n = int(numeric_cast(number, np.uint16))
    d = 2
    while d * d <= n:
        if n % d == 0:
            return False
        d += 1
    return True
