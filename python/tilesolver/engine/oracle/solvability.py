"""Reachability between two boards via permutation parity."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tilesolver.engine.codec.fenwick import FenwickTree

if TYPE_CHECKING:
    from tilesolver.models.board import Board


def compute_parity(board: Board) -> int:
    """Inversion parity of *board* read row-major, blank as the largest label.

    Every unit slide transposes the blank with one tile, so it flips this bit.
    """
    blank = board.size - 1
    tree = FenwickTree(blank)
    inversions = 0
    scanned = 0
    for key, label in enumerate(board.tiles):
        if label == blank:
            # nothing scanned so far is larger; everything after it is smaller
            inversions += board.size - 1 - key
            continue
        inversions += scanned - tree.prefix_sum(label)
        tree.add(label, 1)
        scanned += 1
    return inversions & 1


def is_reachable(board: Board, target: Board) -> bool:
    """Return True if *target* can be reached from *board* by legal moves.

    Parity and blank position flip together on every unit slide, so the
    invariant is ``parity XOR taxicab(blank, origin)``.  With both blanks in
    the same cell this reduces to comparing parities.
    """
    if board.width != target.width or board.height != target.height:
        return False
    a, b = board.empty_cell, target.empty_cell
    distance = abs(a.x - b.x) + abs(a.y - b.y)
    return (board.parity ^ target.parity) == distance & 1
