"""Binary indexed tree used for inversion counting."""

from __future__ import annotations


class FenwickTree:
    """Prefix sums over ``0..length-1`` with O(log n) point updates."""

    __slots__ = ("_tree",)

    def __init__(self, length: int) -> None:
        if length < 0:
            raise ValueError(f"Length must be non-negative, got {length}.")
        self._tree = [0] * (length + 1)

    def __len__(self) -> int:
        return len(self._tree) - 1

    def add(self, index: int, delta: int) -> None:
        if not 0 <= index < len(self):
            raise IndexError(f"Index {index} out of range for length {len(self)}.")
        tree = self._tree
        index += 1
        while index < len(tree):
            tree[index] += delta
            index += index & -index

    def prefix_sum(self, index: int) -> int:
        """Sum of entries ``0..index`` inclusive; ``-1`` yields 0."""
        tree = self._tree
        index = min(index, len(self) - 1) + 1
        total = 0
        while index > 0:
            total += tree[index]
            index -= index & -index
        return total

    def range_sum(self, lo: int, hi: int) -> int:
        return self.prefix_sum(hi) - self.prefix_sum(lo - 1)

    def __getitem__(self, index: int) -> int:
        return self.range_sum(index, index)

    def __setitem__(self, index: int, value: int) -> None:
        self.add(index, value - self[index])
