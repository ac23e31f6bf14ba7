"""
Factorization utilities.

Responsibility: factor information, cleanly separated.
This file must not know about primality flags or coprime pairs.
"""

from typing import List, Tuple

import numpy as np

from .errors import NoPrimeFactorError, SieveRangeError
from .numeric import check_product_width, dtype_of, numeric_cast, unsigned_abs


class LinearFactorSieve:
    """
    Euler's linear sieve: smallest prime factor of every integer up to a limit.

    Every composite is written exactly once, by its smallest prime factor,
    so construction is O(limit). The same pass collects the primes in
    ascending order.

    Parameters
    ----------
    limit : int
        Upper bound (inclusive).
    dtype : numpy integer dtype, optional
        Integer type of the bound and of the stored factors. Defaults to
        the dtype of ``limit`` when it is a numpy scalar, int64 otherwise.
    verbose : bool
        Print a one-line summary after sieving.

    Raises
    ------
    ConversionError
        If ``limit`` is negative or does not fit ``dtype``.
    SieveOverflowError
        If ``limit * limit`` could wrap around in 64 bits. Checked before
        anything is allocated.

    Note
    ----
    spf[0] = spf[1] = 0 (no factor) and spf[p] = p for primes.
    """

    def __init__(self, limit, dtype=None, verbose: bool = False):
        self._dtype = dtype_of(limit, dtype)
        self._limit = numeric_cast(limit, self._dtype)
        size = int(numeric_cast(limit, np.uintp)) + 1
        check_product_width(self._limit)

        n = int(self._limit)
        spf = [0] * size
        primes = []
        for num in range(2, n + 1):
            if spf[num] == 0:
                primes.append(num)
                spf[num] = num
            smallest = spf[num]
            for p in primes:
                if p > smallest:
                    break
                # Fits in 64 bits, see check_product_width above.
                x = p * num
                if x > n:
                    break
                spf[x] = p

        self._spf = np.array(spf, dtype=self._dtype)
        self._spf.flags.writeable = False
        self._primes = np.array(primes, dtype=self._dtype)
        self._primes.flags.writeable = False

        if verbose:
            print(f"    Found {len(primes):,} primes up to {n:,}")

    @property
    def limit(self):
        """The maximum number (inclusive) the sieve holds."""
        return self._limit

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def primes(self) -> np.ndarray:
        """All primes <= limit, ascending. Read-only."""
        return self._primes

    @property
    def spf(self) -> np.ndarray:
        """The smallest-prime-factor table itself. Read-only."""
        return self._spf

    def __repr__(self) -> str:
        return f"LinearFactorSieve(limit={int(self._limit)}, dtype={self._dtype})"

    def min_prime_factor(self, number):
        """
        Return the smallest prime factor of ``|number|``.

        Raises
        ------
        NoPrimeFactorError
            If ``|number|`` is 0 or 1.
        SieveRangeError
            If ``|number|`` exceeds the limit.
        """
        abs_num = int(unsigned_abs(number))
        if abs_num <= 1:
            raise NoPrimeFactorError(f"Minimum prime factor of {number} does not exist.")
        if abs_num > int(self._limit):
            raise SieveRangeError(
                f"{number} exceeds the limit of the sieve ({int(self._limit)})."
            )
        return self._spf[abs_num]


def _magnitude(n, sieve: LinearFactorSieve) -> int:
    """|n| checked against the sieve; 1 is allowed (empty factorization)."""
    m = int(unsigned_abs(n))
    if m == 0:
        raise NoPrimeFactorError("0 has no prime factorization.")
    if m > int(sieve.limit):
        raise SieveRangeError(
            f"{n} exceeds the limit of the sieve ({int(sieve.limit)})."
        )
    return m


def factorize(n, sieve: LinearFactorSieve) -> List[Tuple[int, int]]:
    """
    Prime factorization of ``|n|`` by repeated smallest-factor lookups.

    Parameters
    ----------
    n : int
        Integer to factor, 0 < |n| <= sieve.limit.
    sieve : LinearFactorSieve
        Precomputed factor table.

    Returns
    -------
    list of (int, int)
        (prime, exponent) pairs in ascending prime order. Empty for +-1.
    """
    m = _magnitude(n, sieve)
    spf = sieve.spf

    factors = []
    while m > 1:
        p = int(spf[m])
        k = 0
        while m % p == 0:
            m //= p
            k += 1
        factors.append((p, k))
    return factors


def omega(n, sieve: LinearFactorSieve) -> int:
    """
    Count distinct prime factors of n (little omega).

    Parameters
    ----------
    n : int
        Integer to factor.
    sieve : LinearFactorSieve
        Precomputed factor table.

    Returns
    -------
    int
        Number of distinct prime factors.
    """
    m = _magnitude(n, sieve)
    spf = sieve.spf

    count = 0
    prev = 0
    while m > 1:
        p = int(spf[m])
        if p != prev:
            count += 1
            prev = p
        m //= p
    return count


def omega_leq_P(n, sieve: LinearFactorSieve, P: int) -> int:
    """
    Count distinct prime factors of n that are <= P.

    Parameters
    ----------
    n : int
        Integer to factor.
    sieve : LinearFactorSieve
        Precomputed factor table.
    P : int
        Upper bound on primes to count.

    Returns
    -------
    int
        Number of distinct prime factors <= P.
    """
    m = _magnitude(n, sieve)
    spf = sieve.spf

    count = 0
    prev = 0
    while m > 1:
        p = int(spf[m])
        if p > P:
            # Factors come out ascending, nothing further can qualify.
            break
        if p != prev:
            count += 1
            prev = p
        m //= p
    return count


def Omega(n, sieve: LinearFactorSieve) -> int:
    """
    Count prime factors of n with multiplicity (big Omega).

    Parameters
    ----------
    n : int
        Integer to factor.
    sieve : LinearFactorSieve
        Precomputed factor table.

    Returns
    -------
    int
        Total count of prime factors with multiplicity.
    """
    m = _magnitude(n, sieve)
    spf = sieve.spf

    count = 0
    while m > 1:
        m //= int(spf[m])
        count += 1
    return count
