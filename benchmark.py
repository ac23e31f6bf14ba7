#!/usr/bin/env python3
"""
Benchmark sieve construction.

Compares:
1. PrimalitySieve (Eratosthenes, vectorized slice clearing)
2. LinearFactorSieve (Euler, pure Python inner loop)

Run at N=10^6 or 10^7 for a quick comparison.
"""

import argparse
import time
import numpy as np

from prime_tables.factorization import LinearFactorSieve, omega
from prime_tables.primes import PrimalitySieve


def benchmark(N: int, dtype: str):
    """Time both constructions at N and check they agree."""
    print("=" * 60)
    print(f"Sieve Benchmark: N = {N:,} ({dtype})")
    print("=" * 60)

    print("Building PrimalitySieve...", end=" ", flush=True)
    t0 = time.time()
    flags_sieve = PrimalitySieve(N, dtype=dtype)
    t_flags = time.time() - t0
    print(f"{t_flags:.2f}s")

    print("Building LinearFactorSieve...", end=" ", flush=True)
    t0 = time.time()
    factor_sieve = LinearFactorSieve(N, dtype=dtype)
    t_linear = time.time() - t0
    print(f"{t_linear:.2f}s")
    print()

    print("-" * 60)
    print("Memory")
    print("-" * 60)
    print(f"  Primality table: {flags_sieve.nbytes / 1e6:.2f}MB (1 bit/entry)")
    print(f"  Factor table:    {factor_sieve.spf.nbytes / 1e6:.2f}MB")
    print(f"  Prime list:      {factor_sieve.primes.nbytes / 1e6:.2f}MB "
          f"({len(factor_sieve.primes):,} primes)")
    print()

    print("-" * 60)
    print("Query throughput")
    print("-" * 60)
    rng = np.random.default_rng(0)
    queries = rng.integers(2, N + 1, size=100_000)

    t0 = time.time()
    for n in queries:
        flags_sieve.is_prime(n)
    print(f"  is_prime:         {len(queries) / (time.time() - t0):,.0f} queries/s")

    t0 = time.time()
    for n in queries:
        factor_sieve.min_prime_factor(n)
    print(f"  min_prime_factor: {len(queries) / (time.time() - t0):,.0f} queries/s")

    t0 = time.time()
    for n in queries:
        omega(n, factor_sieve)
    print(f"  omega:            {len(queries) / (time.time() - t0):,.0f} queries/s")
    print()

    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"Eratosthenes: {t_flags:.2f}s")
    print(f"Euler:        {t_linear:.2f}s")
    print(f"Ratio: {t_linear / t_flags:.1f}x")

    print()
    print("Verifying correctness...")
    if np.array_equal(flags_sieve.primes(), factor_sieve.primes):
        print("  Prime lists: OK")
    else:
        print("  Prime lists: MISMATCH!")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Benchmark sieve construction')
    parser.add_argument('--N', type=float, default=1e6, help='Upper bound (inclusive)')
    parser.add_argument('--dtype', type=str, default='int64', help='numpy integer dtype')
    args = parser.parse_args()

    benchmark(int(args.N), args.dtype)
