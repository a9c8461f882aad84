"""Append-only FIFO that remembers everything ever enqueued."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class UnremovableQueue(Generic[K, V]):
    """Queue whose dequeue only advances a cursor.

    Entries stay addressable after being dequeued, so membership tests and
    value lookups cover the whole history of a search frontier.
    """

    __slots__ = ("_items", "_index", "_head")

    def __init__(self) -> None:
        self._items: list[tuple[K, V]] = []
        self._index: dict[K, int] = {}
        self._head = 0

    def __len__(self) -> int:
        """Number of entries not yet dequeued."""
        return len(self._items) - self._head

    def __contains__(self, key: object) -> bool:
        return key in self._index

    @property
    def seen(self) -> int:
        return len(self._items)

    def index_of(self, key: K) -> int:
        return self._index.get(key, -1)

    def pair_at(self, index: int) -> tuple[K, V]:
        return self._items[index]

    def value_of(self, key: K) -> V:
        return self._items[self._index[key]][1]

    def enqueue(self, key: K, value: V) -> None:
        if key in self._index:
            raise RuntimeError(f"Key {key!r} was already enqueued.")
        self._index[key] = len(self._items)
        self._items.append((key, value))

    def dequeue(self) -> tuple[K, V]:
        if self._head == len(self._items):
            raise RuntimeError("Dequeue from an exhausted queue.")
        item = self._items[self._head]
        self._head += 1
        return item
