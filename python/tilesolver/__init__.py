"""Sliding-tile puzzle encoding, solvability and solvers."""

__version__ = "0.1.0"
