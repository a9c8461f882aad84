"""Permutation ranking in the factorial number system.

A grid is read in row-major order as a permutation of ``0..size-1``.  Its
rank is the Lehmer code: position ``i`` contributes ``c_i * (size-1-i)!``
where ``c_i`` counts the smaller labels to the right of it.  Rank 0 is the
identity permutation.
"""

from __future__ import annotations

from collections.abc import Sequence
from math import factorial

from tilesolver.engine.codec.fenwick import FenwickTree


def rank_count(size: int) -> int:
    """Number of distinct ranks for *size* labels."""
    return factorial(size)


def unrank(size: int, rank: int) -> list[int]:
    """Decode *rank* into a permutation of ``0..size-1``."""
    if size < 1:
        raise ValueError(f"Permutation size must be positive, got {size}.")
    if not 0 <= rank < factorial(size):
        raise ValueError(f"Rank {rank} out of range for {size} labels.")

    # mixed radix digits, low to high: digit i has base i + 1
    inversion = [0] * size
    for i in range(size):
        rank, inversion[i] = divmod(rank, i + 1)

    perm = [0] * size
    for label in range(size):
        j = size - 1
        while inversion[j] != 0:
            j -= 1
        perm[size - 1 - j] = label
        for k in range(j, size):
            inversion[k] -= 1
    return perm


def rank(perm: Sequence[int]) -> int:
    """Encode a permutation of ``0..len(perm)-1`` as its rank."""
    size = len(perm)
    tree = FenwickTree(size)
    counts = [0] * size
    for i in range(size - 1, -1, -1):
        counts[i] = tree.prefix_sum(perm[i] - 1)
        tree.add(perm[i], 1)

    result = 0
    for i in range(size - 1):
        result = (result + counts[i]) * (size - 1 - i)
    return result
