#!/usr/bin/env python3
"""
Min-priority queue over (element, priority) pairs.

Backed by heapq. Entries are (priority, seq, element); seq is a monotonic
counter so equal priorities come out oldest-first and elements themselves
are never compared.
"""

import heapq
from dataclasses import dataclass, field
from typing import Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass
class PriorityQueue(Generic[T]):
    _heap: List[Tuple[float, int, T]] = field(default_factory=list)
    _seq: int = 0

    def _bump(self) -> int:
        self._seq += 1
        return self._seq

    def enqueue(self, element: T, priority: float) -> None:
        heapq.heappush(self._heap, (priority, self._bump(), element))

    def dequeue(self) -> Optional[T]:
        """Remove and return the lowest-priority element, or None when empty."""
        if not self._heap:
            return None
        return heapq.heappop(self._heap)[2]

    def peek(self) -> Optional[T]:
        return self._heap[0][2] if self._heap else None

    def is_empty(self) -> bool:
        return not self._heap

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)
