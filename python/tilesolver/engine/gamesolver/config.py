"""Search tuning passed to solvers at construction time."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SolverConfig:
    """Tuning for the priority search.

    *weight* scales the heuristic against the step count; *bidirectional*
    expands from both ends instead of the start only.
    """

    bidirectional: bool = True
    weight: float = 2.0

    def __post_init__(self) -> None:
        if self.weight < 0:
            raise ValueError(f"Heuristic weight must be >= 0, got {self.weight}.")
