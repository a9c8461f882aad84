"""Parity and reachability."""

from __future__ import annotations

import random

import pytest

from tilesolver.engine.gamegenerator import GameGenerator
from tilesolver.engine.oracle import compute_parity, is_reachable
from tilesolver.models.board import Board, Cell


def test_every_slide_flips_parity() -> None:
    rng = random.Random(0)
    board = Board(4, 3)
    for _ in range(200):
        before = board.parity
        GameGenerator.scramble(board, 1, rng)
        assert board.parity == 1 - before


def test_parity_matches_brute_force() -> None:
    rng = random.Random(1)
    for _ in range(50):
        board = Board(3, 4)
        board.shuffle(rng)
        GameGenerator.scramble(board, rng.randrange(12), rng)
        tiles = board.tiles
        inversions = sum(
            1
            for i in range(len(tiles))
            for j in range(i + 1, len(tiles))
            if tiles[i] > tiles[j]
        )
        assert compute_parity(board) == inversions & 1


@pytest.mark.parametrize("size", [(2, 2), (3, 3), (4, 4), (5, 3)])
def test_reachable_after_scramble(size: tuple[int, int]) -> None:
    rng = random.Random(sum(size))
    board = Board(*size)
    target = Board(*size)
    GameGenerator.scramble(board, 101, rng)
    GameGenerator.scramble(target, 40, rng)
    assert is_reachable(board, target)
    assert is_reachable(target, board)
    assert is_reachable(board, board.copy())


@pytest.mark.parametrize("size", [(2, 2), (3, 3), (4, 4), (6, 2)])
def test_tile_transposition_is_unreachable(size: tuple[int, int]) -> None:
    board = Board(*size)
    board.swap(Cell(0, 0), Cell(1, 0))
    assert not is_reachable(board, Board(*size))


def test_displaced_blank() -> None:
    # blank off its home cell: parities differ, yet one slide apart
    board = Board(3, 3)
    board.move(Cell(2, 1))
    assert board.parity != Board(3, 3).parity
    assert is_reachable(board, Board(3, 3))

    board.swap(Cell(0, 0), Cell(1, 0))
    assert not is_reachable(board, Board(3, 3))


def test_dimension_mismatch() -> None:
    assert not is_reachable(Board(2, 3), Board(3, 2))
