"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time

from tilesolver.engine.oracle import is_reachable
from tilesolver.models.board import Board, Cell
from tilesolver.models.savefile import SaveData, SaveFormatError


class GameState:
    """Holds the current board, its target, move counter, and elapsed time."""

    def __init__(
        self,
        board: Board,
        target: Board | None = None,
        image_path: str = "",
        moves: int = 0,
        elapsed: float = 0.0,
        running: bool = True,
    ) -> None:
        self.board = board
        self.target = target if target is not None else Board(board.width, board.height)
        self.image_path = image_path
        self.moves: int = moves
        self._start_time: float = time.time()
        self._elapsed_banked: float = elapsed
        self._running: bool = running

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    @property
    def is_running(self) -> bool:
        return self._running

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    # -- moves ----------------------------------------------------------------

    def try_move(self, cell: Cell) -> list[int]:
        """Slide toward *cell*; every displaced tile counts as one move."""
        moved = self.board.try_move(cell)
        self.moves += len(moved)
        if moved and self.is_solved:
            self.pause()
        return moved

    @property
    def is_solved(self) -> bool:
        return self.board == self.target

    @property
    def is_possible(self) -> bool:
        return is_reachable(self.board, self.target)

    # -- persistence ----------------------------------------------------------

    def to_save(self) -> SaveData:
        return SaveData(
            width=self.board.width,
            height=self.board.height,
            image_path=self.image_path,
            moves=self.moves,
            elapsed=self.elapsed_time,
            rank=self.board.rank,
        )

    @classmethod
    def from_save(cls, data: SaveData) -> GameState:
        """Restore a paused game; the target is always the solved board."""
        try:
            board = Board(data.width, data.height, data.rank)
        except ValueError as e:
            raise SaveFormatError(str(e)) from e
        return cls(
            board,
            image_path=data.image_path,
            moves=data.moves,
            elapsed=data.elapsed,
            running=False,
        )
