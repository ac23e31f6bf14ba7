"""
Logic around coprime pairs.

Responsibility: enumerating pairs (x, y) with limit >= x >= y >= 0 and
gcd(x, y) = 1.

Every coprime pair with x > y >= 1, except (1, 0) and (1, 1), sits in
exactly one of two ternary trees rooted at (2, 1) and (3, 1). The
children of (x, y) are

    (2x - y, x),  (2x + y, x),  (x + 2y, y)

and each child's first component is larger than its parent's, so once a
node exceeds the limit its whole subtree can be pruned.
"""

from typing import Iterator, Tuple

import numpy as np

from .numeric import dtype_of, numeric_cast

ROOTS = [(2, 1), (3, 1)]
BOUNDARY_PAIRS = [(1, 0), (1, 1)]


def children(x: int, y: int) -> Tuple[Tuple[int, int], ...]:
    """The three children of (x, y), in traversal order."""
    return ((2 * x - y, x), (2 * x + y, x), (x + 2 * y, y))


def iterate_coprime_pairs(limit) -> Iterator[Tuple[int, int]]:
    """
    Yield coprime pairs (x, y) with limit >= x >= y >= 0.

    Order: the tree roots, then every tree node in breadth-first discovery
    order, then (1, 0) and (1, 1).

    Parameters
    ----------
    limit : int
        Upper bound (inclusive) on x. Nothing is yielded for limit <= 0,
        not even (1, 0).

    Yields
    ------
    tuple
        (x, y) as Python ints.
    """
    if limit <= 0:
        return
    bound = int(numeric_cast(limit, np.uint64))

    pairs = [p for p in ROOTS if p[0] <= bound]
    visited = 0
    while visited < len(pairs):
        x, y = pairs[visited]
        visited += 1
        yield x, y
        for child in children(x, y):
            if child[0] <= bound:
                pairs.append(child)

    for x, y in BOUNDARY_PAIRS:
        if x <= bound:
            yield x, y


def coprime_pairs(limit, dtype=None) -> np.ndarray:
    """
    Generate all coprime pairs of integers up to ``limit`` (inclusive).

    Parameters
    ----------
    limit : int
        Upper bound (inclusive).
    dtype : numpy integer dtype, optional
        Integer type of the result. Defaults to the dtype of ``limit`` when
        it is a numpy scalar, int64 otherwise.

    Returns
    -------
    np.ndarray
        Array of shape (count, 2); row i is (x, y) with
        limit >= x >= y >= 0. Empty for limit <= 0.

    Raises
    ------
    ConversionError
        If ``limit`` does not fit ``dtype``.
    """
    dt = dtype_of(limit, dtype)
    numeric_cast(limit, dt)
    pairs = list(iterate_coprime_pairs(limit))
    if not pairs:
        return np.empty((0, 2), dtype=dt)
    return np.array(pairs, dtype=dt)


def count_coprime_pairs(limit) -> int:
    """Number of rows ``coprime_pairs(limit)`` would return, without storing them."""
    return sum(1 for _ in iterate_coprime_pairs(limit))
