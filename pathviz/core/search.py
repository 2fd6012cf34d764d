#!/usr/bin/env python3
"""
Shared scaffolding for the resumable searches: one expansion per advance().

Implements the lifecycle every algorithm exposes:
- init(grid) - reset() - advance() -> Step

Subclasses only decide how the frontier is stored and when a neighbour is
(re)opened:
- _clear_frontier() / _seed(start) / _pop() / _frontier_size()
- _relax(u, v) -> True if v was pushed onto the frontier this step

Dequeues of positions that are already closed are stale duplicates and are
skipped without producing a Step.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Set

from pathviz.core.grid import find_start_end, manhattan, neighbors, reconstruct_path, reset_grid, visualize_path
from pathviz.core.types import CellType, Grid, Position, Step

logger = logging.getLogger(__name__)


@dataclass
class SearchAlgo:
    name: str = "search"

    # Internal state
    source: Optional[Grid] = None      # private copy of the caller's grid, kept for reset()
    grid: Optional[Grid] = None        # scratch grid mutated by the run
    start: Optional[Position] = None
    goal: Optional[Position] = None
    closed_set: Set[Position] = field(default_factory=set)
    visited_order: List[Position] = field(default_factory=list)
    current: Optional[Position] = None
    popped_count: int = 0
    started_at: float = 0.0
    _final: Optional[Step] = None

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        """Take an independent copy of grid and seed the run."""
        self.source = grid.copy()
        self.reset()

    def reset(self) -> None:
        """Discard all run state and seed again from the grid given to init()."""
        if self.source is None:
            return
        self.grid = reset_grid(self.source)
        self.closed_set = set()
        self.visited_order = []
        self.current = None
        self.popped_count = 0
        self._final = None
        self._clear_frontier()
        self.started_at = time.perf_counter()

        self.start, self.goal = find_start_end(self.grid)
        if self.start is None or self.goal is None:
            logger.warning("%s: start or end position not found", self.name)
            return

        for cell in self.grid:
            cell.h_score = manhattan(cell.position, self.goal)
        s = self.grid[self.start]
        s.distance = s.g_score = 0
        s.f_score = s.h_score
        self._seed(self.start)
        logger.info("%s: run started on %dx%d grid, start=%s end=%s",
                    self.name, self.grid.rows, self.grid.cols, self.start, self.goal)

    @property
    def is_done(self) -> bool:
        return self._final is not None

    # -------------------- frontier hooks --------------------

    def _clear_frontier(self) -> None:
        raise NotImplementedError

    def _seed(self, start: Position) -> None:
        raise NotImplementedError

    def _pop(self) -> Optional[Position]:
        raise NotImplementedError

    def _frontier_size(self) -> int:
        raise NotImplementedError

    def _relax(self, u: Position, v: Position) -> bool:
        raise NotImplementedError

    # -------------------- main stepping logic --------------------

    def advance(self) -> Step:
        """
        Run ONE expansion:
          - Pop the next live node from the frontier.
          - If it is the goal, reconstruct the path and finish.
          - Else mark it current and push its improvable neighbours.
        Once a terminal Step was returned, the same Step is returned again.
        """
        if self._final is not None:
            return self._final
        if self.grid is None:
            raise RuntimeError(f"{self.name}: init(grid) must be called before advance()")
        if self.start is None or self.goal is None:
            return self._finish(found=False, elapsed=0.0)

        self._settle_current()

        u = self._pop_live()
        if u is None:
            return self._finish(found=False)

        self.popped_count += 1
        self.closed_set.add(u)
        self.visited_order.append(u)
        self.current = u
        self.grid[u].is_visited = True

        if u == self.goal:
            return self._finish(found=True)

        if u != self.start:
            self.grid[u].type = CellType.CURRENT

        opened_now: List[Position] = []
        for v in neighbors(self.grid, u):
            if self._relax(u, v):
                if v != self.goal:
                    self.grid[v].type = CellType.FRONTIER
                opened_now.append(v)

        logger.debug("%s: step %d current=%s opened=%d frontier=%d",
                     self.name, self.popped_count, u, len(opened_now), self._frontier_size())
        return Step(
            grid=self.grid.copy(),
            current=u,
            frontier=tuple(opened_now),
            visited=tuple(self.visited_order),
            is_done=False,
            is_path_found=False,
            nodes_explored=self.popped_count,
            execution_time=self._elapsed_ms(),
            metrics=self._metrics(),
        )

    def _pop_live(self) -> Optional[Position]:
        while True:
            u = self._pop()
            if u is None or u not in self.closed_set:
                return u
            # stale duplicate of a node that was relaxed more than once

    def _settle_current(self) -> None:
        """Last step's current node is displayed as plain visited from now on."""
        u = self.current
        if u is not None and u != self.start and u != self.goal:
            self.grid[u].type = CellType.VISITED

    def _finish(self, found: bool, elapsed: Optional[float] = None) -> Step:
        path: List[Position] = []
        if found:
            path = reconstruct_path(self.grid, self.goal)
            self.grid = visualize_path(self.grid, path)
            logger.info("%s: path found, %d cells, %d nodes explored",
                        self.name, len(path), self.popped_count)
        else:
            logger.info("%s: no path, %d nodes explored", self.name, self.popped_count)

        self._final = Step(
            grid=self.grid.copy(),
            current=self.current,
            visited=tuple(self.visited_order),
            path=tuple(path),
            is_done=True,
            is_path_found=found,
            nodes_explored=self.popped_count,
            execution_time=self._elapsed_ms() if elapsed is None else elapsed,
            metrics=self._metrics(path_len=len(path)),
        )
        return self._final

    def _elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started_at) * 1000.0

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": self._frontier_size(),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
        }
