#!/usr/bin/env python3
"""
Depth-first search, one pop per advance().

LIFO frontier with first-discovery-wins parents. Neighbours are pushed in
N/E/S/W order, so the west neighbour is explored first. The route found is
valid but not necessarily shortest.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set

from pathviz.core.search import SearchAlgo
from pathviz.core.types import Position


@dataclass
class DFSAlgo(SearchAlgo):
    name: str = "DFS"

    stack: List[Position] = field(default_factory=list)
    seen: Set[Position] = field(default_factory=set)

    def _clear_frontier(self) -> None:
        self.stack.clear()
        self.seen.clear()

    def _seed(self, start: Position) -> None:
        self.stack.append(start)
        self.seen.add(start)

    def _pop(self) -> Optional[Position]:
        return self.stack.pop() if self.stack else None

    def _frontier_size(self) -> int:
        return len(self.stack)

    def _relax(self, u: Position, v: Position) -> bool:
        if v in self.seen:
            return False
        self.seen.add(v)
        cell = self.grid[v]
        cell.parent = u
        cell.distance = self.grid[u].distance + 1
        self.stack.append(v)
        return True
