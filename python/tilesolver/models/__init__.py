from tilesolver.models.board import Board, Cell, Direction
from tilesolver.models.savefile import SaveData, SaveFormatError, load_path, save_path

__all__ = ["Board", "Cell", "Direction", "SaveData", "SaveFormatError", "load_path", "save_path"]
