#!/usr/bin/env python3
"""
Full reproducibility script.

Builds every table for the bounds in the config, cross-checks the sieves
against each other, and writes the summary tables and figures.

Usage:
    python run_all.py
    python run_all.py --config config/custom.yaml
"""

import argparse
import yaml
from pathlib import Path
import time

import numpy as np
import pandas as pd

from prime_tables.coprime import coprime_pairs
from prime_tables.factorization import LinearFactorSieve
from prime_tables.primes import PrimalitySieve
from prime_tables.verify import verify_all
from prime_tables.plotting import (
    plot_prime_counting,
    plot_coprime_pairs,
    plot_build_times,
)


def run_sieve_sweep(limits, dtype) -> pd.DataFrame:
    """Build both sieves at each limit and record counts and timings."""
    rows = []
    for limit in limits:
        print(f"  limit = {limit:,}")

        t0 = time.time()
        flags_sieve = PrimalitySieve(limit, dtype=dtype)
        t_primality = time.time() - t0

        t0 = time.time()
        factor_sieve = LinearFactorSieve(limit, dtype=dtype, verbose=True)
        t_linear = time.time() - t0

        n_flagged = int(np.count_nonzero(flags_sieve.prime_flags()))
        agree = np.array_equal(flags_sieve.primes(), factor_sieve.primes)

        print(f"    PrimalitySieve: {t_primality:.3f}s, LinearFactorSieve: {t_linear:.3f}s")

        rows.append({
            'limit': limit,
            'prime_count': len(factor_sieve.primes),
            'flagged_primes': n_flagged,
            'prime_lists_agree': agree,
            't_primality': t_primality,
            't_linear': t_linear,
        })

    return pd.DataFrame(rows)


def run_coprime_sweep(limits, dtype) -> pd.DataFrame:
    """Enumerate coprime pairs at each limit and compare with 3/pi^2 * L^2."""
    rows = []
    for limit in limits:
        t0 = time.time()
        pairs = coprime_pairs(limit, dtype=dtype)
        elapsed = time.time() - t0

        predicted = 3 / np.pi**2 * limit**2
        print(f"  limit = {limit:,}: {len(pairs):,} pairs in {elapsed:.3f}s "
              f"(3/pi^2 L^2 = {predicted:,.0f})")

        rows.append({
            'limit': limit,
            'pairs': len(pairs),
            'predicted': predicted,
            'ratio': len(pairs) / predicted if predicted else np.nan,
            't_coprime': elapsed,
        })

    return pd.DataFrame(rows)


def main():
    parser = argparse.ArgumentParser(description='Build and cross-check all prime tables')
    parser.add_argument('--config', type=str, default='config/default.yaml',
                        help='Path to config file')
    args = parser.parse_args()

    # Load config
    with open(args.config) as f:
        config = yaml.safe_load(f)

    dtype = np.dtype(config['dtype'])

    print("=" * 60)
    print("Prime Tables - Full Run")
    print("=" * 60)
    print(f"\nConfiguration:")
    print(f"  limits = {config['limits']}")
    print(f"  coprime_limits = {config['coprime_limits']}")
    print(f"  dtype = {dtype}")
    print(f"  verify_limit = {config['verify_limit']:,}")
    print()

    output_dir = Path(config['output_dir'])
    output_dir.mkdir(parents=True, exist_ok=True)

    total_start = time.time()

    # 1. Cross-checks
    print("-" * 60)
    print("1. Verification")
    print("-" * 60)
    start = time.time()
    verified = verify_all(config['verify_limit'])
    print(f"\n   Completed in {time.time() - start:.1f}s")
    print()

    # 2. Sieve sweep
    print("-" * 60)
    print("2. Sieve construction sweep")
    print("-" * 60)
    start = time.time()
    df_sieves = run_sieve_sweep(config['limits'], dtype)
    df_sieves.to_csv(output_dir / 'sieves.csv', index=False)
    print(f"   Completed in {time.time() - start:.1f}s")
    print()

    # 3. Coprime sweep
    print("-" * 60)
    print("3. Coprime pair sweep")
    print("-" * 60)
    start = time.time()
    df_coprime = run_coprime_sweep(config['coprime_limits'], dtype)
    df_coprime.to_csv(output_dir / 'coprime_pairs.csv', index=False)
    print(f"   Completed in {time.time() - start:.1f}s")
    print()

    # 4. Generate Figures
    if config.get('figures', True):
        print("-" * 60)
        print("4. Generating Figures")
        print("-" * 60)

        figures_dir = output_dir / 'figures'
        figures_dir.mkdir(exist_ok=True)

        largest = max(config['limits'])
        print("  - Prime counting...")
        plot_prime_counting(PrimalitySieve(largest, dtype=dtype).primes(), largest,
                            figures_dir / 'prime_counting.png')

        print("  - Coprime pairs...")
        plot_coprime_pairs(coprime_pairs(config['coprime_plot_limit'], dtype=dtype),
                           figures_dir / 'coprime_pairs.png')

        print("  - Build times...")
        plot_build_times(df_sieves, figures_dir / 'build_times.png')

        print()

    # Summary
    total_time = time.time() - total_start
    print("=" * 60)
    print("COMPLETE" if verified else "COMPLETE (VERIFICATION FAILED)")
    print("=" * 60)
    print(f"\nTotal runtime: {total_time:.1f}s")
    print(f"\nOutputs saved to: {output_dir.absolute()}")
    print(f"\nGenerated files:")

    for f in sorted(output_dir.glob('*.csv')):
        print(f"  - {f.name}")

    print("\n" + "=" * 60)
    print("KEY RESULTS")
    print("=" * 60)

    print("\nSieves:")
    print(df_sieves[['limit', 'prime_count', 'prime_lists_agree', 't_primality', 't_linear']].to_string(index=False))

    print("\nCoprime pairs:")
    print(df_coprime[['limit', 'pairs', 'ratio']].to_string(index=False))

    if not verified:
        raise SystemExit(1)


if __name__ == '__main__':
    main()
