"""Solver failure kinds."""

from __future__ import annotations


class UnsolvableError(ValueError):
    """The target cannot be reached from the board."""


class NoSolutionError(RuntimeError):
    """A solver ran out of states or produced a wrong sequence.

    Callers gate on reachability first, so this indicates a solver bug.
    """
