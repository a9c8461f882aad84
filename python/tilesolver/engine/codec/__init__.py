from tilesolver.engine.codec.fenwick import FenwickTree
from tilesolver.engine.codec.permutation import rank, rank_count, unrank

__all__ = ["FenwickTree", "rank", "rank_count", "unrank"]
