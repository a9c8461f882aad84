"""Game session: processes moves and replays solutions."""

from __future__ import annotations

import random

from tilesolver.engine.gamegenerator import GameGenerator
from tilesolver.engine.gamesolver import Solver, compress_moves
from tilesolver.engine.gamestate import GameState
from tilesolver.models.board import Cell, Direction


class GamePlay:
    """Orchestrates a single game session."""

    def __init__(
        self,
        width: int,
        height: int,
        image_path: str = "",
        rng: random.Random | None = None,
    ) -> None:
        board = GameGenerator.generate(width, height, rng)
        self.state = GameState(board, GameGenerator.solved(width, height), image_path)

    @classmethod
    def from_state(cls, state: GameState) -> GamePlay:
        """Create a game session from an existing state (e.g. loaded from file)."""
        obj = object.__new__(cls)
        obj.state = state
        return obj

    # -- movement -------------------------------------------------------------

    def move(self, direction: Direction) -> bool:
        """Slide the tile next to the blank in *direction*.

        E.g. ``Direction.UP`` moves the tile **below** the blank upward.
        Returns True if the move was valid; ``Direction.NONE`` never is.
        """
        if direction is Direction.NONE:
            return False
        board = self.state.board
        return bool(self.state.try_move(board.cell_for_direction(direction)))

    def move_tile(self, cell: Cell) -> list[int]:
        """Slide every tile between the blank and *cell* toward the blank."""
        return self.state.try_move(cell)

    def peek(self, cell: Cell) -> list[int]:
        return self.state.board.peek_move(cell)

    # -- solving --------------------------------------------------------------

    def solve(self, solver: Solver) -> list[Cell]:
        return solver.solve(self.state.board, self.state.target)

    def play_solution(self, moves: list[Cell], compress: bool = True) -> int:
        """Apply *moves* to the board; returns the number of slides made."""
        if compress:
            moves = compress_moves(self.state.board.empty_cell, moves)
        for i, cell in enumerate(moves):
            if not self.state.try_move(cell):
                raise ValueError(
                    f"Move {i} to {cell} is illegal with blank at "
                    f"{self.state.board.empty_cell}."
                )
        return len(moves)

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_solved
