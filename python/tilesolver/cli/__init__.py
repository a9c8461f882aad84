from tilesolver.cli.render import format_time, render_board, render_moves

__all__ = ["format_time", "render_board", "render_moves"]
