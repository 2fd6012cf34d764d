#!/usr/bin/env python3
"""
A* with one expansion per advance().

Heuristic:
- Manhattan distance to the goal, written to every cell's h_score when the
  run is seeded. Admissible and consistent for 4-connected unit-cost moves.

Priority is f = g + h; equal f values leave the queue in insertion order.
"""

from dataclasses import dataclass, field
from typing import Optional

from pathviz.core.pqueue import PriorityQueue
from pathviz.core.search import SearchAlgo
from pathviz.core.types import Position


@dataclass
class AStarAlgo(SearchAlgo):
    name: str = "A*"

    open_pq: PriorityQueue = field(default_factory=PriorityQueue)   # keyed by f

    def _clear_frontier(self) -> None:
        self.open_pq = PriorityQueue()

    def _seed(self, start: Position) -> None:
        self.open_pq.enqueue(start, self.grid[start].f_score)

    def _pop(self) -> Optional[Position]:
        return self.open_pq.dequeue()

    def _frontier_size(self) -> int:
        return self.open_pq.size()

    def _relax(self, u: Position, v: Position) -> bool:
        if v in self.closed_set:
            return False
        tentative_g = self.grid[u].g_score + 1
        cell = self.grid[v]
        if tentative_g < cell.g_score:
            cell.g_score = tentative_g
            cell.f_score = tentative_g + cell.h_score
            cell.distance = tentative_g
            cell.parent = u
            self.open_pq.enqueue(v, cell.f_score)
            return True
        return False
