#!/usr/bin/env python3

from dataclasses import dataclass, field

from pathviz.core.pqueue import PriorityQueue
from pathviz.core.search import SearchAlgo
from pathviz.core.types import Position


@dataclass
class DijkstraAlgo(SearchAlgo):
    name: str = "Dijkstra"

    open_pq: PriorityQueue = field(default_factory=PriorityQueue)   # keyed by distance

    def _clear_frontier(self) -> None:
        self.open_pq = PriorityQueue()

    def _seed(self, start: Position) -> None:
        self.open_pq.enqueue(start, 0)

    def _pop(self):
        return self.open_pq.dequeue()

    def _frontier_size(self) -> int:
        return self.open_pq.size()

    def _relax(self, u: Position, v: Position) -> bool:
        if v in self.closed_set:
            return False
        alt = self.grid[u].distance + 1      # uniform cost
        cell = self.grid[v]
        if alt < cell.distance:
            cell.distance = alt
            cell.parent = u
            # older entries for v stay queued and are skipped as stale
            self.open_pq.enqueue(v, alt)
            return True
        return False
