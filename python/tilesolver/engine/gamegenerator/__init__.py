from tilesolver.engine.gamegenerator.generator import GameGenerator

__all__ = ["GameGenerator"]
