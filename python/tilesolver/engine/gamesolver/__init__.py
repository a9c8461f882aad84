from enum import StrEnum

from tilesolver.engine.gamesolver.bfs import BidirectionalBFSSolver
from tilesolver.engine.gamesolver.config import SolverConfig
from tilesolver.engine.gamesolver.errors import NoSolutionError, UnsolvableError
from tilesolver.engine.gamesolver.frontier import UnremovableQueue
from tilesolver.engine.gamesolver.priority import BidirectionalPrioritySolver
from tilesolver.engine.gamesolver.reduction import ReductionSolver
from tilesolver.engine.gamesolver.solver import Solver, compress_moves, replay


class SolverKind(StrEnum):
    reduction = "reduction"
    bfs = "bfs"
    priority = "priority"


def create_solver(kind: SolverKind, config: SolverConfig | None = None) -> Solver:
    """Build the solver registered under *kind*."""
    kind = SolverKind(kind)
    if kind is SolverKind.reduction:
        return ReductionSolver()
    if kind is SolverKind.bfs:
        return BidirectionalBFSSolver()
    if kind is SolverKind.priority:
        return BidirectionalPrioritySolver(config)
    raise ValueError(f"Unknown solver kind: {kind!r}")


__all__ = [
    "BidirectionalBFSSolver",
    "BidirectionalPrioritySolver",
    "NoSolutionError",
    "ReductionSolver",
    "Solver",
    "SolverConfig",
    "SolverKind",
    "UnremovableQueue",
    "UnsolvableError",
    "compress_moves",
    "create_solver",
    "replay",
]
