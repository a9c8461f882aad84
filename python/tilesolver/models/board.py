"""Board model for the sliding puzzle solver."""

from __future__ import annotations

import random
from collections.abc import Sequence
from enum import StrEnum
from typing import NamedTuple

from tilesolver.engine.codec import rank as rank_of
from tilesolver.engine.codec import unrank
from tilesolver.engine.oracle.solvability import compute_parity


class Cell(NamedTuple):
    """Grid coordinate: *x* is the column, *y* the row."""

    x: int
    y: int


class Direction(StrEnum):
    """Direction the *tile* travels; the blank moves the opposite way."""

    NONE = "none"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def reverse(self) -> Direction:
        return _REVERSE[self]

    @classmethod
    def moves(cls) -> tuple[Direction, ...]:
        return (cls.UP, cls.DOWN, cls.LEFT, cls.RIGHT)


_REVERSE = {
    Direction.NONE: Direction.NONE,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Offset from the blank to the tile that slides into it.
# UP    → tile below the blank moves up
# DOWN  → tile above the blank moves down
# LEFT  → tile right of the blank moves left
# RIGHT → tile left of the blank moves right
_OFFSETS = {
    Direction.UP: (0, 1),
    Direction.DOWN: (0, -1),
    Direction.LEFT: (1, 0),
    Direction.RIGHT: (-1, 0),
}


class Board:
    """A W×H sliding puzzle.

    Tiles are stored as a flat row-major list of labels ``0..size-1``;
    ``size - 1`` is the blank.  The inverse mapping (label → key) is kept
    alongside, and rank/parity are cached until a cell is written.
    """

    __slots__ = ("width", "height", "tiles", "_keys", "_rank", "_parity")

    def __init__(self, width: int, height: int, rank: int = 0) -> None:
        if width <= 1 or height <= 1:
            raise ValueError(
                f"Board must be at least 2×2, got {width}×{height}."
            )
        self.width = width
        self.height = height
        self.tiles: list[int] = unrank(width * height, rank)
        self._keys = [0] * len(self.tiles)
        for key, label in enumerate(self.tiles):
            self._keys[label] = key
        self._rank: int | None = rank
        self._parity: int | None = None

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_flat(cls, width: int, height: int, labels: Sequence[int]) -> Board:
        """Create a board from a flat row-major label list.

        Example::

            Board.from_flat(3, 3, [0, 1, 2, 3, 4, 5, 6, 8, 7])
        """
        size = width * height
        if sorted(labels) != list(range(size)):
            raise ValueError(
                f"Expected a permutation of 0..{size - 1} for a "
                f"{width}×{height} board, got {list(labels)}."
            )
        board = cls(width, height)
        for key, label in enumerate(labels):
            board.tiles[key] = label
            board._keys[label] = key
        board._rank = None
        return board

    def copy(self) -> Board:
        other = Board.__new__(Board)
        other.width = self.width
        other.height = self.height
        other.tiles = self.tiles[:]
        other._keys = self._keys[:]
        other._rank = self._rank
        other._parity = self._parity
        return other

    def shuffle(self, rng: random.Random | None = None) -> None:
        """Deal tiles uniformly at random with the blank in the last cell."""
        rng = rng or random.Random()
        pool = list(range(self.size - 1))
        for key in range(self.size - 1):
            self._put(key, pool.pop(rng.randrange(len(pool))))
        self._put(self.size - 1, self.size - 1)

    # -- keys and cells -------------------------------------------------------

    @property
    def size(self) -> int:
        return self.width * self.height

    def key_of(self, cell: Cell) -> int:
        return cell.y * self.width + cell.x

    def cell_of(self, key: int) -> Cell:
        return Cell(key % self.width, key // self.width)

    def is_in_range(self, cell: Cell) -> bool:
        return 0 <= cell.x < self.width and 0 <= cell.y < self.height

    # -- grid access ----------------------------------------------------------

    def __getitem__(self, cell: Cell) -> int:
        return self.tiles[self.key_of(cell)]

    def __setitem__(self, cell: Cell, label: int) -> None:
        self._put(self.key_of(cell), label)

    def _put(self, key: int, label: int) -> None:
        self.tiles[key] = label
        self._keys[label] = key
        self._rank = None
        self._parity = None

    def swap(self, a: Cell, b: Cell) -> None:
        ta, tb = self[a], self[b]
        self[a] = tb
        self[b] = ta

    def position_of(self, label: int) -> Cell:
        return self.cell_of(self._keys[label])

    def labels(self) -> list[list[int]]:
        """Rows of labels, top to bottom."""
        w = self.width
        return [self.tiles[r * w : (r + 1) * w] for r in range(self.height)]

    # -- cached identity ------------------------------------------------------

    @property
    def rank(self) -> int:
        if self._rank is None:
            self._rank = rank_of(self.tiles)
        return self._rank

    @property
    def parity(self) -> int:
        if self._parity is None:
            self._parity = compute_parity(self)
        return self._parity

    # -- queries --------------------------------------------------------------

    @property
    def empty_cell(self) -> Cell:
        return self.cell_of(self._keys[self.size - 1])

    def cell_for_direction(self, direction: Direction) -> Cell:
        """Cell whose tile would slide into the blank; may be out of range."""
        if direction is Direction.NONE:
            raise ValueError("Direction.NONE has no adjacent cell.")
        dx, dy = _OFFSETS[direction]
        empty = self.empty_cell
        return Cell(empty.x + dx, empty.y + dy)

    def is_tile_correct(self, cell: Cell, target: Board) -> bool:
        return self[cell] == target[cell]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.tiles == other.tiles
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board({self.width}, {self.height}, {self.rank})"

    # -- moves ----------------------------------------------------------------

    def _path(self, cell: Cell) -> list[int]:
        """Keys from the blank's neighbour out to *cell*, or ``[]``."""
        if not self.is_in_range(cell):
            return []
        empty = self.empty_cell
        if cell == empty or (cell.x != empty.x and cell.y != empty.y):
            return []
        if cell.x == empty.x:
            step = 1 if cell.y > empty.y else -1
            return [
                self.key_of(Cell(cell.x, y))
                for y in range(empty.y + step, cell.y + step, step)
            ]
        step = 1 if cell.x > empty.x else -1
        return [
            self.key_of(Cell(x, cell.y))
            for x in range(empty.x + step, cell.x + step, step)
        ]

    def peek_move(self, cell: Cell) -> list[int]:
        """Labels that a move to *cell* would displace, nearest first."""
        return [self.tiles[key] for key in self._path(cell)]

    def try_move(self, cell: Cell) -> list[int]:
        """Slide toward *cell* and return the displaced labels in order.

        An empty list means the move was illegal and nothing changed.
        """
        path = self._path(cell)
        if not path:
            return []
        moved: list[int] = []
        previous = self._keys[self.size - 1]
        for key in path:
            label = self.tiles[key]
            moved.append(label)
            self._put(previous, label)
            previous = key
        self._put(previous, self.size - 1)
        return moved

    def move(self, cell: Cell) -> None:
        self.try_move(cell)
