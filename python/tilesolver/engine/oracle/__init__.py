from tilesolver.engine.oracle.solvability import compute_parity, is_reachable

__all__ = ["compute_parity", "is_reachable"]
