#!/usr/bin/env python3
"""
Step driver: owns the editor grid between runs and one engine per run.

The driver only orchestrates repeated advance() calls; it never looks inside
an engine. A fresh engine is created for every run, after every reset and
whenever the algorithm changes. Grid edits are refused while a run is in
flight, since the engine works on its own copy and would not see them.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from pathviz.core.algorithms import ALGORITHMS, create_engine
from pathviz.core.diagnostics import debug_grid, debug_step, validate_path
from pathviz.core.grid import (clear_path_and_visited, create_empty, find_start_end, place_start_end,
                               random_maze, toggle_wall)
from pathviz.core.search import SearchAlgo
from pathviz.core.types import Grid, Position, Step

logger = logging.getLogger(__name__)

MIN_SPEED, MAX_SPEED = 1, 10


def new_editor_grid(rows: int, cols: int) -> Grid:
    """Empty grid with start one cell in from the top-left and end one in from the bottom-right."""
    start = Position(min(1, rows - 1), min(1, cols - 1))
    end = Position(max(rows - 2, 0), max(cols - 2, 0))
    if start == end:
        # too small for the inset corners, fall back to the outer ones
        start, end = Position(0, 0), Position(rows - 1, cols - 1)
    return place_start_end(create_empty(rows, cols), start, end)


@dataclass
class StepDriver:
    grid: Grid
    algorithm: str = "astar"
    speed: int = 5
    wall_density: float = 0.3
    rng: random.Random = field(default_factory=random.Random)

    engine: Optional[SearchAlgo] = None
    is_running: bool = False
    is_paused: bool = False
    is_done: bool = False
    current_step: Optional[Step] = None
    steps: List[Step] = field(default_factory=list)
    _base_grid: Optional[Grid] = None      # editor grid as it was before the run
    _last_tick_ms: Optional[float] = None

    def __post_init__(self) -> None:
        if self.algorithm not in ALGORITHMS:
            raise ValueError(f"unknown algorithm {self.algorithm!r}")
        self.speed = self._clamp_speed(self.speed)

    # ---------- scheduling ----------
    @staticmethod
    def _clamp_speed(speed: int) -> int:
        return int(max(MIN_SPEED, min(MAX_SPEED, speed)))

    def delay_ms(self) -> float:
        """Milliseconds between animated steps: 500 at speed 1, 10 at speed 10."""
        return 500 - (self.speed - 1) * (490 / 9)

    @property
    def step_index(self) -> int:
        return len(self.steps)

    @property
    def run_active(self) -> bool:
        return self.engine is not None and not self.is_done

    # ---------- engine ----------
    def _new_engine(self) -> None:
        if self._base_grid is not None:
            self.grid = self._base_grid
        self._base_grid = self.grid
        self.engine = create_engine(self.algorithm, clear_path_and_visited(self.grid))
        self.steps = []
        self.current_step = None
        self.is_done = False

    def run_step(self) -> Step:
        """Advance the engine once and apply the resulting grid."""
        if self.engine is None:
            self._new_engine()
        step = self.engine.advance()
        self.current_step = step
        self.steps.append(step)
        self.grid = step.grid
        debug_step(self.algorithm, self.step_index, step)
        if step.is_done:
            self.is_done = True
            self.is_running = False
            self.is_paused = False
        return step

    # ---------- controls ----------
    def start(self) -> None:
        self._new_engine()
        debug_grid(self.grid)
        validate_path(self.grid)
        self.is_running = True
        self.is_paused = False
        self._last_tick_ms = None
        logger.info("started %s at speed %d", self.algorithm, self.speed)

    def pause(self) -> None:
        if self.is_running:
            self.is_paused = True

    def resume(self) -> None:
        if self.is_running:
            self.is_paused = False

    def stop(self) -> None:
        self.is_running = False
        self.is_paused = False

    def step(self) -> Optional[Step]:
        """Single step, only while not animating and not finished."""
        if self.is_running or self.is_done:
            return None
        return self.run_step()

    def tick(self, now_ms: float) -> Optional[Step]:
        if not self.is_running or self.is_paused:
            return None
        if self._last_tick_ms is not None and now_ms - self._last_tick_ms < self.delay_ms():
            return None
        self._last_tick_ms = now_ms
        return self.run_step()

    def run_to_completion(self) -> Step:
        step = self.current_step
        while not self.is_done:
            step = self.run_step()
        self.is_running = False
        return step

    def reset(self) -> None:
        """Drop the engine and its history and bring back the pre-run grid."""
        self.is_running = False
        self.is_paused = False
        self.is_done = False
        self.engine = None
        self.current_step = None
        self.steps = []
        self._last_tick_ms = None
        if self._base_grid is not None:
            self.grid = self._base_grid
            self._base_grid = None

    def change_algorithm(self, kind: str) -> None:
        if kind not in ALGORITHMS:
            raise ValueError(f"unknown algorithm {kind!r}")
        self.algorithm = kind
        if self.engine is not None:
            self.reset()

    def change_speed(self, speed: int) -> None:
        self.speed = self._clamp_speed(speed)

    # ---------- editing ----------
    def _editable(self) -> bool:
        if self.run_active:
            logger.warning("edit rejected: a %s run is in progress", self.algorithm)
            return False
        # a finished run's overlay is discarded before editing
        self.reset()
        return True

    def toggle_wall(self, pos: Position) -> bool:
        if not self.grid.in_bounds(pos) or not self._editable():
            return False
        self.grid = toggle_wall(self.grid, pos)
        return True

    def generate_maze(self) -> bool:
        if not self._editable():
            return False
        start, end = find_start_end(self.grid)
        fresh = place_start_end(create_empty(self.grid.rows, self.grid.cols), start, end)
        self.grid = random_maze(fresh, self.wall_density, self.rng)
        return True

    def clear_grid(self) -> bool:
        if not self._editable():
            return False
        self.grid = clear_path_and_visited(self.grid)
        return True

    def new_grid(self) -> bool:
        return self.resize(self.grid.rows, self.grid.cols)

    def resize(self, rows: int, cols: int) -> bool:
        if not self._editable():
            return False
        self.grid = new_editor_grid(rows, cols)
        return True

    # ---------- metrics ----------
    @property
    def nodes_explored(self) -> int:
        return self.current_step.nodes_explored if self.current_step else 0

    @property
    def path_length(self) -> int:
        return len(self.current_step.path) if self.current_step else 0

    @property
    def execution_time(self) -> float:
        return self.current_step.execution_time if self.current_step else 0.0

    @property
    def is_path_found(self) -> bool:
        return bool(self.current_step and self.current_step.is_path_found)

    @property
    def efficiency_score(self) -> str:
        if not self.is_done or not self.is_path_found or self.path_length == 0:
            return "N/A"
        return f"{self.nodes_explored / self.path_length:.2f}"
