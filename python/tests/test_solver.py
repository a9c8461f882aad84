"""Solver test suite: parametric boards replayed through the game engine.

Boards come from seeded generators, so every case is reproducible.  Each
test is hard-killed by ``pytest-timeout`` (configured in
``pyproject.toml``).  If the solver returns in time, the move list is
replayed through the real game engine to verify correctness.
"""

from __future__ import annotations

import random

import pytest

from tilesolver.engine.codec import rank_count
from tilesolver.engine.gamegenerator import GameGenerator
from tilesolver.engine.gameplay import GamePlay
from tilesolver.engine.gamesolver import (
    BidirectionalBFSSolver,
    BidirectionalPrioritySolver,
    ReductionSolver,
    Solver,
    SolverConfig,
    SolverKind,
    UnsolvableError,
    create_solver,
)
from tilesolver.engine.gamesolver.priority import manhattan
from tilesolver.engine.gamestate import GameState
from tilesolver.engine.oracle import is_reachable
from tilesolver.models.board import Board, Cell

# -- case builders ------------------------------------------------------------


def _reachable_ranks(width: int, height: int) -> list[int]:
    goal = Board(width, height)
    return [
        r for r in range(rank_count(width * height))
        if is_reachable(Board(width, height, r), goal)
    ]


def _random_case(width: int, height: int, seed: int) -> tuple[Board, Board]:
    """Random start and a target with its blank somewhere arbitrary."""
    rng = random.Random(seed)
    board = GameGenerator.generate(width, height, rng)
    target = GameGenerator.solved(width, height)
    GameGenerator.scramble(target, 3 * width * height, rng)
    return board, target


def _scrambled_case(width: int, height: int, steps: int, seed: int) -> tuple[Board, Board]:
    rng = random.Random(seed)
    board = GameGenerator.solved(width, height)
    GameGenerator.scramble(board, steps, rng)
    return board, GameGenerator.solved(width, height)


def _match_parity(board: Board, target: Board) -> None:
    """Swap two tiles of *board* if *target* is on the other parity class."""
    if not is_reachable(board, target):
        a, b = [c for c in (Cell(0, 0), Cell(1, 0), Cell(2, 0)) if c != board.empty_cell][:2]
        board.swap(a, b)


_RANKS_2x3 = _reachable_ranks(2, 3)
_RANKS_3x2 = _reachable_ranks(3, 2)
_RANKS_3x3 = list(range(1, rank_count(9), 4999))

_SIZES = [(4, 4), (5, 5), (6, 6), (3, 5), (5, 3), (2, 6), (7, 4), (10, 10), (12, 12)]


# -- helpers ------------------------------------------------------------------


def _assert_solve(solver: Solver, board: Board, target: Board) -> list[Cell]:
    """Solve the board and verify the returned moves reach the target."""
    before = board.copy()
    moves = solver.solve(board, target)

    # ---- inputs untouched ---------------------------------------------------
    assert board == before, "solve() must not modify its input"

    # ---- move-list sanity ---------------------------------------------------
    assert isinstance(moves, list), "solve() must return a list of Cell"
    assert all(isinstance(m, Cell) for m in moves), "Every element must be a Cell"

    # ---- apply moves via the real game engine and check win -----------------
    game = GamePlay.from_state(GameState(board.copy(), target.copy()))
    for i, cell in enumerate(moves):
        moved = game.move_tile(cell)
        assert len(moved) == 1, (
            f"Move {i} to {cell} was not a unit move at blank "
            f"{game.state.board.empty_cell} ({board!r})"
        )

    assert game.state.board == target, (
        f"{board!r} not solved after {len(moves)} moves"
    )
    return moves


def _ids(case) -> str:
    return "x".join(map(str, case))


# -- reduction ----------------------------------------------------------------


@pytest.mark.parametrize("number", _RANKS_2x3)
def test_reduction_2x3_every_rank(number: int) -> None:
    _assert_solve(ReductionSolver(), Board(2, 3, number), Board(2, 3))


@pytest.mark.parametrize("number", _RANKS_3x2)
def test_reduction_3x2_every_rank(number: int) -> None:
    _assert_solve(ReductionSolver(), Board(3, 2, number), Board(3, 2))


@pytest.mark.parametrize("number", _RANKS_3x3)
def test_reduction_3x3_sampled(number: int) -> None:
    board = Board(3, 3, number)
    target = Board(3, 3)
    _match_parity(board, target)
    _assert_solve(ReductionSolver(), board, target)


@pytest.mark.parametrize("size", _SIZES, ids=_ids)
@pytest.mark.parametrize("seed", range(5))
def test_reduction_random(size: tuple[int, int], seed: int) -> None:
    board, target = _random_case(*size, seed)
    _assert_solve(ReductionSolver(), board, target)


def test_reduction_2x2_cycle() -> None:
    solved = Board(2, 2)
    board = solved.copy()
    for cell in (Cell(0, 1), Cell(0, 0), Cell(1, 0), Cell(1, 1)):
        board.move(cell)
    moves = _assert_solve(ReductionSolver(), board, solved)
    assert len(moves) <= 8


@pytest.mark.parametrize("number", _RANKS_3x3[::3])
def test_reduction_solved_to_target_rank(number: int) -> None:
    board = Board(3, 3)
    target = Board(3, 3, number)
    _match_parity(target, board)
    _assert_solve(ReductionSolver(), board, target)


def test_reduction_from_solved_to_scrambled() -> None:
    board = Board(4, 4)
    target = GameGenerator.generate(4, 4, random.Random(11))
    _assert_solve(ReductionSolver(), board, target)


# -- search solvers -----------------------------------------------------------


def test_bfs_single_move() -> None:
    assert BidirectionalBFSSolver().solve(Board(3, 3), Board(3, 3, 1)) == [Cell(1, 2)]


@pytest.mark.parametrize("seed", range(8))
def test_bfs_scrambled_3x3(seed: int) -> None:
    board, target = _scrambled_case(3, 3, 16, seed)
    _assert_solve(BidirectionalBFSSolver(), board, target)


@pytest.mark.parametrize("number", _RANKS_2x3[::7])
def test_bfs_2x3(number: int) -> None:
    _assert_solve(BidirectionalBFSSolver(), Board(2, 3, number), Board(2, 3))


@pytest.mark.parametrize("seed", range(8))
def test_priority_scrambled_3x3(seed: int) -> None:
    board, target = _scrambled_case(3, 3, 40, seed)
    _assert_solve(BidirectionalPrioritySolver(), board, target)


@pytest.mark.parametrize("seed", range(4))
def test_priority_random_3x3(seed: int) -> None:
    board, target = _random_case(3, 3, seed)
    _assert_solve(BidirectionalPrioritySolver(), board, target)


@pytest.mark.parametrize("seed", range(4))
def test_priority_unidirectional(seed: int) -> None:
    board, target = _scrambled_case(3, 3, 30, seed)
    solver = BidirectionalPrioritySolver(SolverConfig(bidirectional=False))
    _assert_solve(solver, board, target)


def test_priority_zero_weight() -> None:
    board, target = _scrambled_case(3, 3, 10, 0)
    solver = BidirectionalPrioritySolver(SolverConfig(weight=0.0))
    _assert_solve(solver, board, target)


def test_manhattan() -> None:
    goal_keys = list(range(9))
    assert manhattan(Board(3, 3), goal_keys) == 0
    # tile 7 sits one column right of its home
    assert manhattan(Board(3, 3, 1), goal_keys) == 1


def test_negative_weight_rejected() -> None:
    with pytest.raises(ValueError):
        SolverConfig(weight=-1.0)


# -- shared behaviour ---------------------------------------------------------


@pytest.mark.parametrize("kind", list(SolverKind))
def test_already_solved_returns_empty(kind: SolverKind) -> None:
    board = Board(4, 3, 12345)
    assert create_solver(kind).solve(board, board.copy()) == []


@pytest.mark.parametrize("kind", list(SolverKind))
def test_unsolvable_raises(kind: SolverKind) -> None:
    board = Board(3, 3)
    board.swap(Cell(0, 0), Cell(1, 0))
    solver = create_solver(kind)
    assert not solver.is_solvable(board, Board(3, 3))
    with pytest.raises(UnsolvableError):
        solver.solve(board, Board(3, 3))


@pytest.mark.parametrize("kind", list(SolverKind))
def test_dimension_mismatch_raises(kind: SolverKind) -> None:
    with pytest.raises(ValueError):
        create_solver(kind).solve(Board(3, 3), Board(3, 4))


@pytest.mark.parametrize("kind", list(SolverKind))
def test_hint(kind: SolverKind) -> None:
    solver = create_solver(kind)
    assert solver.hint(Board(3, 3, 1), Board(3, 3)) == Cell(2, 2)
    assert solver.hint(Board(3, 3), Board(3, 3)) is None


def test_create_solver_accepts_strings() -> None:
    assert isinstance(create_solver("bfs"), BidirectionalBFSSolver)
    solver = create_solver("priority", SolverConfig(weight=3.0))
    assert isinstance(solver, BidirectionalPrioritySolver)
    assert solver.config.weight == 3.0
    with pytest.raises(ValueError):
        create_solver("dijkstra")
