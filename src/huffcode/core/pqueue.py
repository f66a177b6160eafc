from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class StablePriorityQueue(Generic[T]):
    """
    Min-priority queue on top of heapq.

    Ordering is ascending ``key(item)``; items with equal keys come out in
    insertion order (FIFO). The insertion counter sits between the key and the
    item in each heap entry, so items themselves are never compared.
    """

    def __init__(self, key: Callable[[T], Any]):
        self._key = key
        self._heap: list[tuple[Any, int, T]] = []
        self._seq = itertools.count()

    def insert(self, item: T) -> None:
        heapq.heappush(self._heap, (self._key(item), next(self._seq), item))

    def peek_min(self) -> T:
        if not self._heap:
            raise IndexError("peek_min on empty queue")
        return self._heap[0][2]

    def remove_min(self) -> T:
        if not self._heap:
            raise IndexError("remove_min on empty queue")
        return heapq.heappop(self._heap)[2]

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)
