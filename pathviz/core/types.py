#!/usr/bin/env python3
from dataclasses import dataclass, field, replace
from enum import Enum
from math import inf
from typing import Iterator, List, Optional, Tuple


class GridError(ValueError):
    """Raised for malformed grids: bad dimensions, placement or map content."""


class CellType(Enum):
    EMPTY = "empty"
    WALL = "wall"
    START = "start"
    END = "end"
    VISITED = "visited"
    PATH = "path"
    CURRENT = "current"
    FRONTIER = "frontier"


# written by the engine during a run, never by the editor
TRANSIENT_TYPES = frozenset({CellType.VISITED, CellType.PATH, CellType.CURRENT, CellType.FRONTIER})


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


@dataclass
class Cell:
    position: Position
    type: CellType = CellType.EMPTY
    distance: float = inf
    g_score: float = inf
    f_score: float = inf
    h_score: float = inf
    parent: Optional[Position] = None
    is_visited: bool = False

    def clear_scratch(self) -> None:
        zero = self.type is CellType.START
        self.distance = 0 if zero else inf
        self.g_score = 0 if zero else inf
        self.f_score = 0 if zero else inf
        self.h_score = inf
        self.parent = None
        self.is_visited = False


@dataclass
class Grid:
    cells: List[List[Cell]]            # [row][col]

    def __post_init__(self) -> None:
        if not self.cells or not self.cells[0]:
            raise GridError("grid must have at least one row and one column")
        width = len(self.cells[0])
        if any(len(r) != width for r in self.cells):
            raise GridError("grid rows differ in length")

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])

    def in_bounds(self, p: Position) -> bool:
        return 0 <= p.row < self.rows and 0 <= p.col < self.cols

    def __getitem__(self, p: Position) -> Cell:
        return self.cells[p.row][p.col]

    def __iter__(self) -> Iterator[Cell]:
        for r in self.cells:
            yield from r

    def copy(self) -> "Grid":
        # cell fields are immutable values, so a per-cell shallow copy is a deep copy
        return Grid([[replace(c) for c in r] for r in self.cells])

    def is_wall(self, p: Position) -> bool:
        return self[p].type is CellType.WALL


@dataclass(frozen=True)
class Step:
    grid: Grid
    current: Optional[Position] = None
    frontier: Tuple[Position, ...] = ()
    visited: Tuple[Position, ...] = ()
    path: Tuple[Position, ...] = ()
    is_done: bool = False
    is_path_found: bool = False
    nodes_explored: int = 0
    execution_time: float = 0.0        # milliseconds since the run began
    metrics: dict = field(default_factory=dict)
