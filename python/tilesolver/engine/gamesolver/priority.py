"""Bidirectional weighted best-first search."""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass

from tilesolver.engine.gamesolver.config import SolverConfig
from tilesolver.engine.gamesolver.errors import NoSolutionError
from tilesolver.engine.gamesolver.solver import Solver
from tilesolver.models.board import Board, Cell, Direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    """Parent rank and signed step count (positive: source side)."""

    previous: int | None
    step: int


def manhattan(board: Board, goal_keys: list[int]) -> int:
    """Sum of per-tile taxicab distances to *goal_keys*, blank excluded."""
    w = board.width
    blank = board.size - 1
    dist = 0
    for key, label in enumerate(board.tiles):
        if label == blank:
            continue
        r, c = divmod(key, w)
        gr, gc = divmod(goal_keys[label], w)
        dist += abs(r - gr) + abs(c - gc)
    return dist


class _Side:
    """One frontier: a heap of ``(priority, counter, rank)`` plus its goal."""

    __slots__ = ("heap", "goal_keys", "sign")

    def __init__(self, goal: Board, sign: int) -> None:
        self.heap: list[tuple[float, int, int]] = []
        self.goal_keys = [0] * goal.size
        for key, label in enumerate(goal.tiles):
            self.goal_keys[label] = key
        self.sign = sign

    def __len__(self) -> int:
        return len(self.heap)


class BidirectionalPrioritySolver(Solver):
    """Best-first search ordered by ``steps + weight × heuristic``.

    All discovered ranks share one dictionary; the sign of an entry's step
    count records which side found it, so meeting the other side is a
    single lookup.
    """

    name = "priority"

    def __init__(self, config: SolverConfig | None = None) -> None:
        self.config = config or SolverConfig()

    def _solve(self, board: Board, target: Board) -> list[Cell]:
        width, height = board.width, board.height
        weight = self.config.weight
        bidirectional = self.config.bidirectional
        counter = itertools.count()
        seen: dict[int, Entry] = {}

        source = _Side(target, 1)
        goal = _Side(board, -1)
        for side, start in ((source, board), (goal, target)):
            seen[start.rank] = Entry(None, side.sign)
            priority = weight * manhattan(start, side.goal_keys)
            heapq.heappush(side.heap, (priority, next(counter), start.rank))

        def extend(side: _Side) -> tuple[int, int] | None:
            _, _, number = heapq.heappop(side.heap)
            previous = seen[number]
            current = Board(width, height, number)
            for direction in Direction.moves():
                cell = current.cell_for_direction(direction)
                if not current.is_in_range(cell):
                    continue
                neighbor = current.copy()
                neighbor.move(cell)
                n = neighbor.rank
                entry = seen.get(n)
                if entry is not None:
                    if (entry.step > 0) == (side.sign > 0):
                        continue
                    return (number, n) if side.sign > 0 else (n, number)
                step = previous.step + side.sign
                seen[n] = Entry(number, step)
                priority = abs(step) - 1 + weight * manhattan(neighbor, side.goal_keys)
                heapq.heappush(side.heap, (priority, next(counter), n))
            return None

        while source and (goal or not bidirectional):
            if bidirectional and len(goal) < len(source):
                meet = extend(goal)
            else:
                meet = extend(source)
            if meet is not None:
                logger.debug("priority search met after %d states", len(seen))
                return _path(width, height, seen, *meet)

        raise NoSolutionError("Search space exhausted without meeting.")


def _path(
    width: int, height: int, seen: dict[int, Entry], source_last: int, target_first: int
) -> list[Cell]:
    chain = [source_last]
    previous = seen[source_last].previous
    while previous is not None:
        chain.append(previous)
        previous = seen[previous].previous

    # chain[-1] is the start itself; every later state names one move
    cells = [Board(width, height, number).empty_cell for number in reversed(chain[:-1])]
    cells.append(Board(width, height, target_first).empty_cell)
    previous = seen[target_first].previous
    while previous is not None:
        cells.append(Board(width, height, previous).empty_cell)
        previous = seen[previous].previous
    return cells
