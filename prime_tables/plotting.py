"""
Visualization utilities.

Responsibility: plots only. No logic, no computation beyond what the
axes need.
"""

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from pathlib import Path
from typing import Optional


def plot_prime_counting(primes: np.ndarray, limit: int,
                        output_path: Optional[Path] = None) -> plt.Figure:
    """
    Plot the prime counting function pi(x) against x / ln x.

    Parameters
    ----------
    primes : np.ndarray
        Ascending primes <= limit (e.g. LinearFactorSieve.primes).
    limit : int
        Right end of the x axis.
    output_path : Path, optional
        If provided, save figure to this path.

    Returns
    -------
    matplotlib.Figure
    """
    fig, ax = plt.subplots(figsize=(8, 5))

    x = np.arange(2, limit + 1)
    pi_x = np.searchsorted(primes, x, side='right')

    ax.step(x, pi_x, where='post', label=r'$\pi(x)$')
    ax.plot(x, x / np.log(x), '--', label=r'$x / \ln x$')

    ax.set_xlabel('x')
    ax.set_ylabel('count')
    ax.set_title(f'Prime counting up to {limit:,}')
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches='tight')

    return fig


def plot_coprime_pairs(pairs: np.ndarray, output_path: Optional[Path] = None) -> plt.Figure:
    """
    Scatter the coprime pairs (x, y) produced by coprime_pairs.

    Parameters
    ----------
    pairs : np.ndarray
        Array of shape (count, 2).
    output_path : Path, optional
        If provided, save figure.

    Returns
    -------
    matplotlib.Figure
    """
    fig, ax = plt.subplots(figsize=(7, 7))

    if len(pairs) > 0:
        # Colour by discovery order to show the breadth-first sweep.
        ax.scatter(pairs[:, 0], pairs[:, 1], c=np.arange(len(pairs)),
                   s=4, cmap='viridis')

    ax.set_xlabel('x')
    ax.set_ylabel('y')
    ax.set_title(f'Coprime pairs ({len(pairs):,})')
    ax.set_aspect('equal')
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches='tight')

    return fig


def plot_build_times(df: pd.DataFrame, output_path: Optional[Path] = None) -> plt.Figure:
    """
    Plot construction time against the bound for each sieve.

    Parameters
    ----------
    df : pd.DataFrame
        Sieve summary from run_all.py with columns limit,
        t_primality, t_linear.
    output_path : Path, optional
        If provided, save figure.

    Returns
    -------
    matplotlib.Figure
    """
    fig, ax = plt.subplots(figsize=(8, 5))

    for column, label in [('t_primality', 'PrimalitySieve'),
                          ('t_linear', 'LinearFactorSieve')]:
        ax.plot(df['limit'], df[column], 'o-', label=label)

    ax.set_xscale('log')
    ax.set_yscale('log')
    ax.set_xlabel('limit')
    ax.set_ylabel('seconds')
    ax.set_title('Construction time')
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches='tight')

    return fig
