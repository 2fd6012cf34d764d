#!/usr/bin/env python3
"""
Breadth-first search, one dequeue per advance().

FIFO frontier. A neighbour is marked seen when it is discovered, so each
position enters the queue at most once and its first parent is final.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Set

from pathviz.core.search import SearchAlgo
from pathviz.core.types import Position


@dataclass
class BFSAlgo(SearchAlgo):
    name: str = "BFS"

    queue: Deque[Position] = field(default_factory=deque)
    seen: Set[Position] = field(default_factory=set)

    def _clear_frontier(self) -> None:
        self.queue.clear()
        self.seen.clear()

    def _seed(self, start: Position) -> None:
        self.queue.append(start)
        self.seen.add(start)

    def _pop(self) -> Optional[Position]:
        return self.queue.popleft() if self.queue else None

    def _frontier_size(self) -> int:
        return len(self.queue)

    def _relax(self, u: Position, v: Position) -> bool:
        if v in self.seen:
            return False
        self.seen.add(v)
        cell = self.grid[v]
        cell.parent = u
        cell.distance = self.grid[u].distance + 1
        self.queue.append(v)
        return True
