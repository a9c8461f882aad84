"""Layer reduction solver: deterministic, no state-space search.

The target's blank is first walked to the bottom-right corner, and the
board is reduced against that normalised target:

  - Top rows are fixed one at a time while more than two rows remain,
    then the left columns of the last two rows.
  - Single tiles are pushed step by step along a shortest free path; the
    blank is routed around the tile through unfrozen cells only.  This
    routing takes the place of the classic perimeter spin: a BFS over
    unfrozen cells finds the same loop around the tile, or a shorter one.
  - The last two tiles of a row (or column) are stacked in the far
    corner and spun into place.  A tile caught in the notch is freed by
    a fixed spin through the 2×3 block below.
  - The final 2×2 block needs at most three clockwise rotations.

The recorded corner walk is then replayed backwards to reach the real
target.
"""

from __future__ import annotations

import logging
from collections import deque

from tilesolver.engine.gamesolver.errors import NoSolutionError
from tilesolver.engine.gamesolver.solver import Solver
from tilesolver.models.board import Board, Cell

logger = logging.getLogger(__name__)

# Blank path through the 2×3 block that turns
#
#     second first        . first
#     _      x       into .  second
#     y      z            .  _
#
# Offsets are (along, across): along runs toward the corner, across away
# from the solved area.
_NOTCH_SPIN = (
    (0, 0), (1, 0), (1, 1), (0, 1), (0, 2), (1, 2),
    (1, 1), (1, 0), (0, 0), (0, 1), (1, 1), (1, 2),
)


class _Reducer:
    """Mutable working state for one reduction run."""

    __slots__ = ("board", "goal", "w", "h", "frozen", "adjacent", "out")

    def __init__(self, board: Board, goal: Board) -> None:
        self.board = board
        self.goal = goal.tiles
        self.w = w = board.width
        self.h = h = board.height
        self.frozen = bytearray(board.size)
        self.out: list[Cell] = []

        adjacent: list[tuple[int, ...]] = []
        for key in range(board.size):
            r, c = divmod(key, w)
            nb: list[int] = []
            if r > 0:     nb.append(key - w)
            if r < h - 1: nb.append(key + w)
            if c > 0:     nb.append(key - 1)
            if c < w - 1: nb.append(key + 1)
            adjacent.append(tuple(nb))
        self.adjacent = adjacent

    # -- primitives -----------------------------------------------------------

    def key(self, x: int, y: int) -> int:
        return y * self.w + x

    def where(self, label: int) -> int:
        return self.board.key_of(self.board.position_of(label))

    def blank(self) -> int:
        return self.board.key_of(self.board.empty_cell)

    def step(self, key: int) -> None:
        cell = self.board.cell_of(key)
        self.board.move(cell)
        self.out.append(cell)

    def route(self, start: int, goal: int) -> list[int]:
        """Shortest path of keys from *start* (exclusive) to *goal* over
        unfrozen cells."""
        if start == goal:
            return []
        frozen = self.frozen
        parent = {start: start}
        queue = deque([start])
        while queue:
            key = queue.popleft()
            for nxt in self.adjacent[key]:
                if nxt in parent or frozen[nxt]:
                    continue
                parent[nxt] = key
                if nxt == goal:
                    path = [nxt]
                    while parent[path[-1]] != start:
                        path.append(parent[path[-1]])
                    path.reverse()
                    return path
                queue.append(nxt)
        raise NoSolutionError(f"No free route from key {start} to key {goal}.")

    def blank_to(self, key: int) -> None:
        for nxt in self.route(self.blank(), key):
            self.step(nxt)

    def tile_to(self, label: int, key: int) -> None:
        """Push *label* to *key* one cell at a time."""
        while (pos := self.where(label)) != key:
            nxt = self.route(pos, key)[0]
            self.frozen[pos] = 1
            self.blank_to(nxt)
            self.frozen[pos] = 0
            self.step(pos)

    # -- phases ---------------------------------------------------------------

    def run(self) -> list[Cell]:
        w, h = self.w, self.h
        for r in range(h - 2):
            for c in range(w - 2):
                k = self.key(c, r)
                self.tile_to(self.goal[k], k)
                self.frozen[k] = 1
            self.last_two(w - 2, r, transpose=False)
            logger.debug("row %d fixed after %d moves", r, len(self.out))
        for c in range(w - 2):
            self.last_two(c, h - 2, transpose=True)
            logger.debug("column %d fixed after %d moves", c, len(self.out))
        self.spin_last()
        return self.out

    def last_two(self, ox: int, oy: int, transpose: bool) -> None:
        """Fix the notch and corner cells of a row end or column end.

        The 2×3 block anchored at (ox, oy) lies inside the unsolved area.
        """
        def at(along: int, across: int) -> int:
            if transpose:
                return self.key(ox + across, oy + along)
            return self.key(ox + along, oy + across)

        notch, corner = at(0, 0), at(1, 0)
        below_notch, below_corner = at(0, 1), at(1, 1)
        first, second = self.goal[notch], self.goal[corner]
        tiles = self.board.tiles
        frozen = self.frozen

        if tiles[notch] == first and tiles[corner] == second:
            frozen[notch] = frozen[corner] = 1
            return

        self.tile_to(first, corner)
        frozen[corner] = 1
        if self.blank() == notch:
            self.step(below_notch)

        frozen[notch] = 1
        if tiles[notch] == second:
            self.blank_to(below_notch)
            for along, across in _NOTCH_SPIN:
                self.step(at(along, across))
        else:
            self.tile_to(second, below_corner)
        frozen[notch] = 0

        frozen[below_corner] = 1
        self.blank_to(notch)
        frozen[below_corner] = 0
        self.step(corner)
        self.step(below_corner)
        frozen[notch] = frozen[corner] = 1

    def spin_last(self) -> None:
        """Rotate the final 2×2 block until it matches the goal."""
        ox, oy = self.w - 2, self.h - 2
        tl, tr = self.key(ox, oy), self.key(ox + 1, oy)
        bl, br = self.key(ox, oy + 1), self.key(ox + 1, oy + 1)
        self.blank_to(br)
        tiles, goal = self.board.tiles, self.goal
        for _ in range(4):
            if all(tiles[k] == goal[k] for k in (tl, tr, bl)):
                return
            for k in (bl, tl, tr, br):
                self.step(k)
        raise NoSolutionError("Final block did not match after four spins.")


class ReductionSolver(Solver):
    """Fast, non-optimal solver that fixes the board layer by layer."""

    name = "reduction"

    def _solve(self, board: Board, target: Board) -> list[Cell]:
        goal = target.copy()

        # walk the target's blank right, then down, to the corner
        trail = [target.empty_cell]
        w, h = target.width, target.height
        ex, ey = target.empty_cell
        for x in range(ex + 1, w):
            trail.append(Cell(x, ey))
        for y in range(ey + 1, h):
            trail.append(Cell(w - 1, y))
        for cell in trail[1:]:
            target.move(cell)

        moves = _Reducer(board, target).run()
        for cell in reversed(trail[:-1]):
            board.move(cell)
            moves.append(cell)

        if board != goal:
            raise NoSolutionError("Reduction finished on the wrong board.")
        return moves
