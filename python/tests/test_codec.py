"""Permutation ranking and the Fenwick tree behind it."""

from __future__ import annotations

import itertools
import random

import pytest

from tilesolver.engine.codec import FenwickTree, rank, rank_count, unrank


# -- ranking ------------------------------------------------------------------


@pytest.mark.parametrize("size", [1, 2, 3, 4, 5])
def test_ranks_follow_lexicographic_order(size: int) -> None:
    expected = [list(p) for p in itertools.permutations(range(size))]
    assert [unrank(size, r) for r in range(rank_count(size))] == expected
    assert [rank(p) for p in expected] == list(range(rank_count(size)))


def test_known_ranks() -> None:
    assert unrank(9, 0) == list(range(9))
    assert unrank(9, 1) == [0, 1, 2, 3, 4, 5, 6, 8, 7]
    assert unrank(9, rank_count(9) - 1) == list(range(8, -1, -1))
    assert rank([1, 0, 2, 3, 4, 5, 6, 7, 8]) == 40320


@pytest.mark.parametrize("size", [16, 25, 64, 144])
def test_large_boards(size: int) -> None:
    rng = random.Random(size)
    for _ in range(20):
        perm = list(range(size))
        rng.shuffle(perm)
        number = rank(perm)
        assert 0 <= number < rank_count(size)
        assert unrank(size, number) == perm


@pytest.mark.parametrize("size,number", [(0, 0), (3, -1), (3, 6), (4, 24)])
def test_unrank_rejects_out_of_range(size: int, number: int) -> None:
    with pytest.raises(ValueError):
        unrank(size, number)


# -- Fenwick tree -------------------------------------------------------------


def test_fenwick_prefix_sums() -> None:
    tree = FenwickTree(8)
    values = [3, 1, 4, 1, 5, 9, 2, 6]
    for i, v in enumerate(values):
        tree.add(i, v)

    for i in range(8):
        assert tree.prefix_sum(i) == sum(values[: i + 1])
    assert tree.prefix_sum(-1) == 0
    assert tree.range_sum(2, 5) == 4 + 1 + 5 + 9
    assert tree[5] == 9
    assert len(tree) == 8


def test_fenwick_setitem() -> None:
    tree = FenwickTree(4)
    tree[2] = 7
    tree[2] = 3
    tree[0] = 1
    assert tree.prefix_sum(3) == 4
    assert tree[2] == 3


def test_fenwick_bounds() -> None:
    tree = FenwickTree(3)
    with pytest.raises(IndexError):
        tree.add(3, 1)
    with pytest.raises(ValueError):
        FenwickTree(-1)
