"""Rich renderables for boards and solutions."""

from __future__ import annotations

import rich.box
from rich.table import Table
from rich.text import Text

from tilesolver.models.board import Board, Cell


def format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def render_board(board: Board, target: Board | None = None) -> Table:
    """Return a Rich Table of the grid; tiles show as ``label + 1``.

    With a *target*, tiles already in their target cell are green.
    """
    width = len(str(board.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.width):
        table.add_column(width=width + 1, justify="center")

    blank = board.size - 1
    for y, row in enumerate(board.labels()):
        cells: list[str] = []
        for x, val in enumerate(row):
            if val == blank:
                cells.append("[dim]·[/dim]")
            elif target is not None and board.is_tile_correct(Cell(x, y), target):
                cells.append(f"[bold green]{val + 1:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{val + 1:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


def render_moves(moves: list[Cell]) -> Text:
    text = Text()
    for i, cell in enumerate(moves):
        if i:
            text.append(" → ", style="dim")
        text.append(f"({cell.x},{cell.y})", style="cyan")
    return text
