"""
Tests for LinearFactorSieve and the factorization helpers built on it.

Conventions under test:
- spf[0] = spf[1] = 0 (no factor), spf[p] = p for primes
- the prime list is exactly the n >= 2 with spf[n] == n
- bounds whose square could wrap in 64 bits are refused before any table
  is allocated
"""

import numpy as np
import pytest

from prime_tables.errors import (
    ConversionError,
    NoPrimeFactorError,
    SieveOverflowError,
    SieveRangeError,
)
from prime_tables.factorization import (
    LinearFactorSieve,
    Omega,
    factorize,
    omega,
    omega_leq_P,
)
from prime_tables.primes import PrimalitySieve


# Known small primes for testing
SMALL_PRIMES = [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47]
SMALL_COMPOSITES = [4, 6, 8, 9, 10, 12, 14, 15, 16, 18, 20, 21, 22, 24, 25]


class TestLinearFactorSieve:
    """Prime list and smallest prime factors."""

    def test_primes_up_to_ten(self):
        sieve = LinearFactorSieve(10)
        assert sieve.primes.tolist() == [2, 3, 5, 7]

    def test_min_prime_factor_of_nine(self):
        assert LinearFactorSieve(10).min_prime_factor(9) == 3

    def test_primes_have_spf_equal_to_self(self):
        sieve = LinearFactorSieve(100)
        for p in SMALL_PRIMES:
            assert sieve.min_prime_factor(p) == p, f"spf[{p}] should be {p}"

    def test_composites_have_spf_less_than_self(self):
        sieve = LinearFactorSieve(100)
        for n in SMALL_COMPOSITES:
            p = sieve.min_prime_factor(n)
            assert 1 < p < n, f"spf[{n}] should be in (1, {n}), got {p}"

    def test_spf_sentinels(self):
        """Slots 0 and 1 hold 0: no prime factor."""
        sieve = LinearFactorSieve(10)
        assert sieve.spf[0] == 0
        assert sieve.spf[1] == 0

    def test_prime_list_is_fixed_points_of_spf(self):
        sieve = LinearFactorSieve(1000)
        fixed = [n for n in range(2, 1001) if sieve.spf[n] == n]
        assert sieve.primes.tolist() == fixed

    def test_prime_list_strictly_increasing(self):
        primes = LinearFactorSieve(2000).primes
        assert np.all(np.diff(primes) > 0)

    def test_negative_numbers_use_magnitude(self):
        sieve = LinearFactorSieve(100)
        assert sieve.min_prime_factor(-9) == 3
        assert sieve.min_prime_factor(-97) == 97

    def test_tables_are_read_only(self):
        sieve = LinearFactorSieve(20)
        with pytest.raises(ValueError):
            sieve.primes[0] = 4
        with pytest.raises(ValueError):
            sieve.spf[4] = 3


class TestLinearFactorSieveErrors:
    """Domain, range and overflow conditions."""

    @pytest.mark.parametrize("n", [0, 1, -1])
    def test_no_prime_factor(self, n):
        sieve = LinearFactorSieve(10)
        with pytest.raises(NoPrimeFactorError):
            sieve.min_prime_factor(n)

    def test_domain_error_is_value_error(self):
        with pytest.raises(ValueError):
            LinearFactorSieve(10).min_prime_factor(1)

    def test_query_past_limit(self):
        sieve = LinearFactorSieve(10)
        with pytest.raises(SieveRangeError):
            sieve.min_prime_factor(11)
        with pytest.raises(SieveRangeError):
            sieve.min_prime_factor(-11)

    def test_most_negative_int8(self):
        """|-128| is 128 in uint8, which is past an int8 bound of 127."""
        sieve = LinearFactorSieve(np.int8(127))
        assert sieve.min_prime_factor(np.int8(-127)) == 127
        with pytest.raises(SieveRangeError):
            sieve.min_prime_factor(np.int8(-128))

    @pytest.mark.parametrize("limit", [2**32, 2**40, 2**62])
    def test_overflow_detected_before_allocation(self, limit):
        """
        A 2**62 table would not fit in memory, so reaching an overflow
        error here (rather than MemoryError) shows the check runs first.
        """
        with pytest.raises(SieveOverflowError):
            LinearFactorSieve(limit)

    def test_overflow_with_numpy_bound(self):
        with pytest.raises(SieveOverflowError):
            LinearFactorSieve(np.uint64(2**33))

    def test_overflow_error_is_builtin_overflow(self):
        with pytest.raises(OverflowError):
            LinearFactorSieve(2**63 - 1)


class TestLinearFactorSieveTypes:
    """The sieve works in whatever integer type the bound uses."""

    def test_small_limits(self):
        assert LinearFactorSieve(0).primes.tolist() == []
        assert LinearFactorSieve(1).primes.tolist() == []
        assert LinearFactorSieve(2).primes.tolist() == [2]

    def test_dtype_follows_numpy_limit(self):
        sieve = LinearFactorSieve(np.int16(1000))
        assert sieve.dtype == np.int16
        assert sieve.spf.dtype == np.int16
        assert sieve.primes.dtype == np.int16
        assert isinstance(sieve.min_prime_factor(91), np.int16)

    def test_full_uint8_range(self):
        sieve = LinearFactorSieve(np.uint8(255))
        assert sieve.min_prime_factor(255) == 3
        assert sieve.min_prime_factor(253) == 11
        assert len(sieve.primes) == 54

    def test_negative_limit_rejected(self):
        with pytest.raises(ConversionError):
            LinearFactorSieve(-5)


class TestCrossValidation:
    """Cross-validate the linear sieve against PrimalitySieve and brute force."""

    @pytest.mark.parametrize("limit", [2, 3, 10, 100, 1000, 5000])
    def test_prime_lists_match(self, limit):
        flags = PrimalitySieve(limit).prime_flags()
        assert np.array_equal(LinearFactorSieve(limit).primes, np.nonzero(flags)[0])

    def test_smallest_factor_divides_and_is_smallest(self):
        limit = 2000
        sieve = LinearFactorSieve(limit)
        for n in range(2, limit + 1):
            p = int(sieve.min_prime_factor(n))
            assert n % p == 0, f"spf[{n}] = {p} does not divide {n}"
            for d in range(2, p):
                assert n % d != 0, f"{d} divides {n} but spf[{n}] = {p}"


class TestFactorization:
    """factorize / omega / Omega on top of the sieve."""

    def test_factorize(self):
        sieve = LinearFactorSieve(1000)
        assert factorize(360, sieve) == [(2, 3), (3, 2), (5, 1)]
        assert factorize(997, sieve) == [(997, 1)]
        assert factorize(-12, sieve) == [(2, 2), (3, 1)]

    def test_factorize_unit(self):
        sieve = LinearFactorSieve(10)
        assert factorize(1, sieve) == []
        assert factorize(-1, sieve) == []

    def test_factorize_zero(self):
        with pytest.raises(NoPrimeFactorError):
            factorize(0, LinearFactorSieve(10))

    def test_factorize_past_limit(self):
        with pytest.raises(SieveRangeError):
            factorize(11, LinearFactorSieve(10))

    def test_factorization_reconstructs_n(self):
        limit = 3000
        sieve = LinearFactorSieve(limit)
        for n in range(1, limit + 1):
            product = 1
            for p, k in factorize(n, sieve):
                product *= p ** k
            assert product == n

    def test_omega_of_primes(self):
        sieve = LinearFactorSieve(100)
        for p in SMALL_PRIMES:
            assert omega(p, sieve) == 1, f"omega({p}) should be 1"

    def test_omega_of_prime_powers(self):
        sieve = LinearFactorSieve(1000)
        for n in [4, 8, 9, 25, 27, 32, 49, 125]:
            assert omega(n, sieve) == 1, f"omega({n}) should be 1"

    def test_omega_of_products(self):
        sieve = LinearFactorSieve(1000)
        products = [(6, 2), (10, 2), (30, 3), (210, 4), (60, 3)]
        for n, expected in products:
            assert omega(n, sieve) == expected, f"omega({n}) should be {expected}"

    def test_omega_leq_P(self):
        sieve = LinearFactorSieve(1000)

        # 30 = 2 * 3 * 5
        assert omega_leq_P(30, sieve, 2) == 1
        assert omega_leq_P(30, sieve, 3) == 2
        assert omega_leq_P(30, sieve, 5) == 3
        assert omega_leq_P(30, sieve, 100) == 3
        assert omega_leq_P(49, sieve, 5) == 0

    def test_big_omega(self):
        sieve = LinearFactorSieve(1000)
        assert Omega(1, sieve) == 0
        assert Omega(360, sieve) == 6
        assert Omega(512, sieve) == 9
        assert Omega(-30, sieve) == 3


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
