"""
Cross-check the sieves against each other and against brute force.

Compares:
1. PrimalitySieve flags vs trial division
2. LinearFactorSieve prime list vs PrimalitySieve flags
3. Smallest prime factors vs direct divisibility
4. coprime_pairs vs the brute-force set of coprime pairs

Primality and factor checks cost O(n sqrt n); the coprime check is
quadratic, so keep its limit small.
"""

from math import gcd, isqrt
import time

import numpy as np

from .coprime import coprime_pairs
from .factorization import LinearFactorSieve
from .primes import PrimalitySieve


def smallest_divisor(n: int) -> int:
    """Smallest d >= 2 dividing n (n itself when n is prime), for n >= 2."""
    for d in range(2, isqrt(n) + 1):
        if n % d == 0:
            return d
    return n


def trial_division_is_prime(n: int) -> bool:
    """Reference primality test with no width cap."""
    return n >= 2 and smallest_divisor(n) == n


def verify_primality(limit: int, verbose: bool = True) -> bool:
    """Verify PrimalitySieve matches trial division on [0, limit]."""
    if verbose:
        print(f"\n=== Verifying primality flags for limit={limit:,} ===")

    sieve = PrimalitySieve(limit)
    errors = 0
    for n in range(limit + 1):
        if sieve.is_prime(n) != trial_division_is_prime(n):
            errors += 1
            if errors <= 10:
                print(f"  MISMATCH at n={n}: sieve={sieve.is_prime(n)}")

    if verbose:
        if errors == 0:
            print(f"  OK: all {limit + 1:,} flags match")
        else:
            print(f"  FAIL: {errors:,} mismatches found")

    return errors == 0


def verify_factor_table(limit: int, verbose: bool = True) -> bool:
    """Verify the linear sieve's primes and smallest prime factors."""
    if verbose:
        print(f"\n=== Verifying factor table for limit={limit:,} ===")

    t0 = time.time()
    sieve = LinearFactorSieve(limit)
    t_build = time.time() - t0

    flags = PrimalitySieve(limit).prime_flags()
    primes_ok = np.array_equal(sieve.primes, np.nonzero(flags)[0])
    if not primes_ok:
        print("  MISMATCH: prime list differs from PrimalitySieve")

    errors = 0
    for n in range(2, limit + 1):
        p = int(sieve.min_prime_factor(n))
        smallest = smallest_divisor(n)
        if p != smallest:
            errors += 1
            if errors <= 10:
                print(f"  MISMATCH at n={n}: spf={p}, expected={smallest}")

    if verbose:
        print(f"  Build: {t_build:.3f}s, {len(sieve.primes):,} primes")
        if errors == 0 and primes_ok:
            print(f"  OK: all {max(limit - 1, 0):,} factors match")
        else:
            print(f"  FAIL: {errors:,} mismatches found")

    return errors == 0 and primes_ok


def verify_coprime_pairs(limit: int, verbose: bool = True) -> bool:
    """Verify coprime_pairs is exactly the brute-force set, without repeats."""
    if verbose:
        print(f"\n=== Verifying coprime pairs for limit={limit:,} ===")

    pairs = [tuple(p) for p in coprime_pairs(limit).tolist()]
    produced = set(pairs)
    expected = {
        (x, y)
        for x in range(1, limit + 1)
        for y in range(0, x + 1)
        if gcd(x, y) == 1
    }

    duplicates = len(pairs) - len(produced)
    missing = expected - produced
    extra = produced - expected

    if verbose:
        print(f"  Produced {len(pairs):,} pairs, expected {len(expected):,}")
        if duplicates:
            print(f"  FAIL: {duplicates:,} duplicates")
        if missing:
            print(f"  FAIL: {len(missing):,} missing, e.g. {sorted(missing)[:5]}")
        if extra:
            print(f"  FAIL: {len(extra):,} unexpected, e.g. {sorted(extra)[:5]}")
        if not (duplicates or missing or extra):
            print("  OK: pair set matches brute force")

    return not (duplicates or missing or extra)


def verify_all(limit: int, verbose: bool = True) -> bool:
    """Run every check at one limit."""
    results = [
        verify_primality(limit, verbose),
        verify_factor_table(limit, verbose),
        verify_coprime_pairs(limit, verbose),
    ]
    return all(results)
