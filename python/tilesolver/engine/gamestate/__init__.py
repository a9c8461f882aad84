from tilesolver.engine.gamestate.state import GameState

__all__ = ["GameState"]
