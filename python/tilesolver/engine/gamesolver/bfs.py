"""Bidirectional breadth-first search over permutation ranks."""

from __future__ import annotations

import logging
from collections import deque

from tilesolver.engine.gamesolver.errors import NoSolutionError
from tilesolver.engine.gamesolver.frontier import UnremovableQueue
from tilesolver.engine.gamesolver.solver import Solver
from tilesolver.models.board import Board, Cell, Direction

logger = logging.getLogger(__name__)

Frontier = UnremovableQueue[int, Direction]


class BidirectionalBFSSolver(Solver):
    """Meet-in-the-middle search that always grows the smaller frontier.

    Both frontiers keep their full history: a rank maps to the direction
    that first reached it, which is enough to walk back to either root.
    Solutions are short but not guaranteed shortest.
    """

    name = "bfs"

    def _solve(self, board: Board, target: Board) -> list[Cell]:
        width, height = board.width, board.height
        source: Frontier = UnremovableQueue()
        goal: Frontier = UnremovableQueue()
        source.enqueue(board.rank, Direction.NONE)
        goal.enqueue(target.rank, Direction.NONE)

        while source and goal:
            if len(source) <= len(goal):
                meet = _extend(width, height, source, goal)
            else:
                meet = _extend(width, height, goal, source)
            if meet is None:
                continue
            logger.debug(
                "frontiers met at rank %d (%d source, %d target states)",
                meet, source.seen, goal.seen,
            )
            return _to_cells(board, _directions(width, height, meet, source, goal))

        raise NoSolutionError("Search space exhausted without meeting.")


def _extend(width: int, height: int, frontier: Frontier, other: Frontier) -> int | None:
    """Expand one state of *frontier*; return the rank shared with *other*."""
    number, arrived = frontier.dequeue()
    current = Board(width, height, number)
    for direction in Direction.moves():
        if direction is arrived.reverse:
            continue
        cell = current.cell_for_direction(direction)
        if not current.is_in_range(cell):
            continue
        neighbor = current.copy()
        neighbor.move(cell)
        n = neighbor.rank
        if n in frontier:
            continue
        frontier.enqueue(n, direction)
        if n in other:
            return n
    return None


def _directions(
    width: int, height: int, meet: int, source: Frontier, goal: Frontier
) -> list[Direction]:
    result: deque[Direction] = deque()

    board = Board(width, height, meet)
    direction = source.value_of(meet)
    while direction is not Direction.NONE:
        result.appendleft(direction)
        board.move(board.cell_for_direction(direction.reverse))
        direction = source.value_of(board.rank)

    board = Board(width, height, meet)
    direction = goal.value_of(meet)
    while direction is not Direction.NONE:
        back = direction.reverse
        result.append(back)
        board.move(board.cell_for_direction(back))
        direction = goal.value_of(board.rank)

    return list(result)


def _to_cells(board: Board, directions: list[Direction]) -> list[Cell]:
    copy = board.copy()
    cells: list[Cell] = []
    for direction in directions:
        cell = copy.cell_for_direction(direction)
        copy.move(cell)
        cells.append(cell)
    return cells
