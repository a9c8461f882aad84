"""Sliding puzzle solver interface and move-list helpers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from time import perf_counter
from typing import ClassVar

from tilesolver.engine.gamesolver.errors import UnsolvableError
from tilesolver.engine.oracle import is_reachable
from tilesolver.models.board import Board, Cell

logger = logging.getLogger(__name__)


class Solver(ABC):
    """Produces the destination cells that take a board to its target.

    Each element of a solution is one unit move: the cell the blank moves
    to.  Subclasses implement ``_solve`` on private copies of both boards.
    """

    name: ClassVar[str] = "solver"

    def solve(self, board: Board, target: Board) -> list[Cell]:
        """Return a move sequence from *board* to *target*.

        Raises ``UnsolvableError`` when *target* is unreachable.
        """
        if board.width != target.width or board.height != target.height:
            raise ValueError(
                f"Board is {board.width}×{board.height} but target is "
                f"{target.width}×{target.height}."
            )
        if board == target:
            return []
        if not is_reachable(board, target):
            raise UnsolvableError(
                f"{target!r} is not reachable from {board!r}."
            )

        t0 = perf_counter()
        moves = self._solve(board.copy(), target.copy())
        logger.info(
            "%s solved %d×%d board in %d moves (%.3fs)",
            self.name, board.width, board.height, len(moves),
            perf_counter() - t0,
        )
        return moves

    def hint(self, board: Board, target: Board) -> Cell | None:
        """Return the next move, or ``None`` if already solved."""
        moves = self.solve(board, target)
        return moves[0] if moves else None

    @staticmethod
    def is_solvable(board: Board, target: Board) -> bool:
        return is_reachable(board, target)

    @abstractmethod
    def _solve(self, board: Board, target: Board) -> list[Cell]:
        ...


# -- move-list helpers --------------------------------------------------------


def replay(board: Board, moves: Iterable[Cell]) -> Board:
    """Return a copy of *board* with *moves* applied in order."""
    result = board.copy()
    for cell in moves:
        result.move(cell)
    return result


def compress_moves(blank: Cell, moves: Iterable[Cell]) -> list[Cell]:
    """Merge runs of unit moves that stay on the blank's row or column.

    A run that never leaves the cross through its starting cell has the
    same effect as one slide to the run's last cell.
    """
    out: list[Cell] = []
    last = previous = blank
    for cell in moves:
        if cell.x != last.x and cell.y != last.y:
            out.append(previous)
            last = previous
        previous = cell
    if previous != last:
        out.append(previous)
    return out
