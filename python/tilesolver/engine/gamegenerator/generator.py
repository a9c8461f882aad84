"""Generates solvable sliding puzzle boards."""

from __future__ import annotations

import random

from tilesolver.engine.oracle import is_reachable
from tilesolver.models.board import Board, Cell


class GameGenerator:
    """Creates random puzzles that are solvable and not already solved."""

    @staticmethod
    def solved(width: int, height: int) -> Board:
        """Return the goal-state board (rank 0, blank bottom-right)."""
        return Board(width, height)

    @staticmethod
    def generate(
        width: int, height: int, rng: random.Random | None = None
    ) -> Board:
        """Return a random board reachable from, and different to, the goal."""
        target = GameGenerator.solved(width, height)
        board = Board(width, height)
        board.shuffle(rng)

        # The blank is pinned to the last cell, so (0,0), (1,0) and (0,1)
        # always hold tiles.
        if not is_reachable(board, target):
            board.swap(Cell(0, 0), Cell(0, 1))
        if board == target:
            GameGenerator._cycle(board)
        return board

    @staticmethod
    def scramble(
        board: Board, steps: int, rng: random.Random | None = None
    ) -> None:
        """Scramble *board* in-place using *steps* random unit moves."""
        rng = rng or random.Random()
        prev_pos: Cell | None = None

        for _ in range(steps):
            neighbors = GameGenerator._get_neighbors(board)
            if prev_pos in neighbors and len(neighbors) > 1:
                neighbors.remove(prev_pos)
            target = rng.choice(neighbors)
            prev_pos = board.empty_cell
            board.move(target)

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _get_neighbors(board: Board) -> list[Cell]:
        ex, ey = board.empty_cell
        neighbors: list[Cell] = []
        for dx, dy in ((0, -1), (0, 1), (-1, 0), (1, 0)):
            cell = Cell(ex + dx, ey + dy)
            if board.is_in_range(cell):
                neighbors.append(cell)
        return neighbors

    @staticmethod
    def _cycle(board: Board) -> None:
        """Rotate three corner tiles; an even permutation keeps solvability."""
        a, b, c = Cell(0, 0), Cell(1, 0), Cell(0, 1)
        ta, tb, tc = board[a], board[b], board[c]
        board[a], board[b], board[c] = tc, ta, tb
