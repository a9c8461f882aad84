#!/usr/bin/env python3
"""Sliding puzzle solver.

Usage::

    python main.py solve -W 3 -H 3 --seed 7            # random 3×3, reduction solver
    python main.py solve --start 1 --solver bfs         # one move from solved
    python main.py check --start 5 --target 0           # reachability only
    python main.py new game.dat -W 4 -H 4               # write a save file
    python main.py load game.dat                        # inspect a save file
"""

import random
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tilesolver.cli import format_time, render_board, render_moves  # noqa: E402
from tilesolver.engine.gamegenerator import GameGenerator  # noqa: E402
from tilesolver.engine.gamesolver import (  # noqa: E402
    SolverConfig,
    SolverKind,
    compress_moves,
    create_solver,
)
from tilesolver.engine.gamestate import GameState  # noqa: E402
from tilesolver.engine.oracle import is_reachable  # noqa: E402
from tilesolver.models.board import Board  # noqa: E402
from tilesolver.models.savefile import SaveFormatError, load_path, save_path  # noqa: E402
from tilesolver.utils.logging_utils import get_level_from_string, setup_logger  # noqa: E402

console = Console()

app = typer.Typer(add_completion=False, help="Sliding puzzle solver.")


# -- helpers ------------------------------------------------------------------


def _make_board(width: int, height: int, rank: Optional[int], seed: Optional[int]) -> Board:
    """Board for *rank*, or a random solvable board when *rank* is None."""
    if rank is None:
        return GameGenerator.generate(width, height, random.Random(seed))
    try:
        return Board(width, height, rank)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _show_pair(board: Board, target: Board) -> None:
    console.print(
        Columns(
            [
                Panel(render_board(board, target), title="start", border_style="cyan"),
                Panel(render_board(target), title="target", border_style="green"),
            ]
        )
    )


# -- commands -----------------------------------------------------------------


@app.callback()
def main(
    log_level: str = typer.Option(
        "warning", "--log-level",
        envvar="TILESOLVER_LOG_LEVEL",
        help="debug, info, warning, error or critical.",
    ),
) -> None:
    """Sliding puzzle solver."""
    setup_logger("tilesolver", get_level_from_string(log_level))


@app.command()
def solve(
    width: int = typer.Option(3, "-W", "--width", min=2, help="Board width."),
    height: int = typer.Option(3, "-H", "--height", min=2, help="Board height."),
    start: Optional[int] = typer.Option(
        None, "--start", min=0,
        help="Start rank. Omit for a random solvable board.",
    ),
    target: int = typer.Option(0, "--target", min=0, help="Target rank."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for the random board."),
    solver: SolverKind = typer.Option(
        SolverKind.reduction, "-s", "--solver", help="Solving strategy.",
    ),
    weight: float = typer.Option(
        2.0, "--weight", min=0.0,
        envvar="TILESOLVER_WEIGHT",
        help="Heuristic weight for the priority solver.",
    ),
    bidirectional: bool = typer.Option(
        True, "--bidirectional/--unidirectional",
        envvar="TILESOLVER_BIDIRECTIONAL",
        help="Search from both ends (priority solver).",
    ),
    compress: bool = typer.Option(
        False, "--compress/--no-compress",
        help="Merge collinear unit moves into single slides.",
    ),
) -> None:
    """Solve a board and print the move sequence."""
    board = _make_board(width, height, start, seed)
    goal = _make_board(width, height, target, None)
    _show_pair(board, goal)

    if not is_reachable(board, goal):
        console.print("[red]Target is not reachable from this board.[/red]")
        raise typer.Exit(code=1)

    moves = create_solver(solver, SolverConfig(bidirectional, weight)).solve(board, goal)
    if compress:
        moves = compress_moves(board.empty_cell, moves)

    console.print(
        f"[bold green]Solved with {solver.value} in {len(moves)} moves.[/bold green]"
    )
    if moves:
        console.print(render_moves(moves))


@app.command()
def check(
    width: int = typer.Option(3, "-W", "--width", min=2, help="Board width."),
    height: int = typer.Option(3, "-H", "--height", min=2, help="Board height."),
    start: int = typer.Option(..., "--start", min=0, help="Start rank."),
    target: int = typer.Option(0, "--target", min=0, help="Target rank."),
) -> None:
    """Report whether the target rank is reachable from the start rank."""
    board = _make_board(width, height, start, None)
    goal = _make_board(width, height, target, None)
    console.print(f"start parity {board.parity}, target parity {goal.parity}")
    if is_reachable(board, goal):
        console.print("[green]reachable[/green]")
        return
    console.print("[red]unreachable[/red]")
    raise typer.Exit(code=1)


@app.command()
def show(
    width: int = typer.Option(3, "-W", "--width", min=2, help="Board width."),
    height: int = typer.Option(3, "-H", "--height", min=2, help="Board height."),
    rank: Optional[int] = typer.Option(
        None, "--rank", min=0, help="Rank to decode. Omit for a random board.",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for the random board."),
) -> None:
    """Render the board for a rank."""
    board = _make_board(width, height, rank, seed)
    console.print(render_board(board, Board(width, height)))
    console.print(f"rank {board.rank}  parity {board.parity}  blank {tuple(board.empty_cell)}")


@app.command()
def new(
    path: Path = typer.Argument(..., help="Save file to write."),
    width: int = typer.Option(3, "-W", "--width", min=2, help="Board width."),
    height: int = typer.Option(3, "-H", "--height", min=2, help="Board height."),
    image: str = typer.Option("", "--image", help="Image path stored with the game."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for the random board."),
) -> None:
    """Start a random game and save it."""
    board = _make_board(width, height, None, seed)
    state = GameState(board, image_path=image, running=False)
    save_path(state.to_save(), path)
    console.print(f"Saved {width}×{height} game (rank {board.rank}) to {path}")


@app.command()
def load(
    path: Path = typer.Argument(..., help="Save file to read."),
) -> None:
    """Show a saved game."""
    try:
        state = GameState.from_save(load_path(path))
    except SaveFormatError as e:
        console.print(f"[red]Not a valid save file:[/red] {e}")
        raise typer.Exit(code=1)
    except OSError as e:
        console.print(f"[red]Cannot read {path}:[/red] {e.strerror}")
        raise typer.Exit(code=1)

    console.print(render_board(state.board, state.target))
    console.print(
        f"image {state.image_path or '-'}  moves {state.moves}  "
        f"time {format_time(state.elapsed_time)}  "
        f"{'solvable' if state.is_possible else 'unsolvable'}"
    )


if __name__ == "__main__":
    app()
