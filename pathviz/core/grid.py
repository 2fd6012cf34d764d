"""
Grid model: pure functions that build, query and transform a Grid.

Every transforming function returns a new Grid and leaves its input alone,
except where noted (toggle_wall returns the input unchanged for start/end).
"""

import math
import random
from typing import Iterable, List, Optional, Sequence, Tuple

from pathviz.core.types import Cell, CellType, Grid, GridError, Position, TRANSIENT_TYPES

# N, E, S, W; order fixes tie-breaking for every algorithm
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, 0), (0, 1), (1, 0), (0, -1))

TEXT_SYMBOLS = {
    CellType.EMPTY: ".",
    CellType.WALL: "#",
    CellType.START: "S",
    CellType.END: "E",
    CellType.PATH: "*",
    CellType.VISITED: "o",
    CellType.FRONTIER: "+",
    CellType.CURRENT: "@",
}
_SYMBOL_TYPES = {v: k for k, v in TEXT_SYMBOLS.items()}


def create_empty(rows: int, cols: int) -> Grid:
    if rows <= 0 or cols <= 0:
        raise GridError(f"grid dimensions must be positive, got {rows}x{cols}")
    return Grid([[Cell(Position(r, c)) for c in range(cols)] for r in range(rows)])


def place_start_end(grid: Grid, start: Optional[Position] = None,
                    end: Optional[Position] = None) -> Grid:
    """Copy of grid with start/end placed (default (1,1) and (rows-2, cols-2))."""
    if start is None:
        start = Position(1, 1)
    if end is None:
        end = Position(grid.rows - 2, grid.cols - 2)
    for label, p in (("start", start), ("end", end)):
        if not grid.in_bounds(p):
            raise GridError(f"{label} {p} is outside a {grid.rows}x{grid.cols} grid")
    if start == end:
        raise GridError(f"start and end must differ, both are {start}")

    out = grid.copy()
    # a grid holds at most one start and one end
    for cell in out:
        if cell.type in (CellType.START, CellType.END):
            cell.type = CellType.EMPTY
            cell.clear_scratch()

    s = out[start]
    s.type = CellType.START
    s.distance = s.g_score = s.f_score = 0
    s.parent = None
    e = out[end]
    e.type = CellType.END
    e.parent = None
    return out


def toggle_wall(grid: Grid, pos: Position) -> Grid:
    cell = grid[pos]
    if cell.type in (CellType.START, CellType.END):
        return grid
    out = grid.copy()
    out[pos].type = CellType.EMPTY if cell.type is CellType.WALL else CellType.WALL
    return out


def is_valid_position(grid: Grid, pos: Position) -> bool:
    return grid.in_bounds(pos)


def neighbors(grid: Grid, pos: Position) -> List[Position]:
    out: List[Position] = []
    for dr, dc in DIRECTIONS:
        n = Position(pos.row + dr, pos.col + dc)
        if grid.in_bounds(n) and not grid.is_wall(n):
            out.append(n)
    return out


def find_cell(grid: Grid, cell_type: CellType) -> Optional[Position]:
    for cell in grid:
        if cell.type is cell_type:
            return cell.position
    return None


def find_start_end(grid: Grid) -> Tuple[Optional[Position], Optional[Position]]:
    start = end = None
    for cell in grid:
        if cell.type is CellType.START and start is None:
            start = cell.position
        elif cell.type is CellType.END and end is None:
            end = cell.position
        if start and end:
            break
    return start, end


def clear_path_and_visited(grid: Grid) -> Grid:
    """Revert engine-written cells to empty; walls, start and end are kept."""
    out = grid.copy()
    for cell in out:
        if cell.type in TRANSIENT_TYPES:
            cell.type = CellType.EMPTY
            cell.clear_scratch()
    return out


def reset_grid(grid: Grid) -> Grid:
    """Like clear_path_and_visited, but also wipes scratch state on every cell."""
    out = grid.copy()
    for cell in out:
        if cell.type in TRANSIENT_TYPES:
            cell.type = CellType.EMPTY
        cell.clear_scratch()
    return out


def random_maze(grid: Grid, wall_density: float = 0.3,
                rng: Optional[random.Random] = None) -> Grid:
    """Each non-start/end cell becomes a wall with probability wall_density.

    The result is not guaranteed to be solvable.
    """
    if not 0.0 <= wall_density <= 1.0:
        raise GridError(f"wall density must be within [0, 1], got {wall_density}")
    rng = rng or random.Random()
    out = grid.copy()
    for cell in out:
        if cell.type in (CellType.START, CellType.END):
            continue
        cell.type = CellType.WALL if rng.random() < wall_density else CellType.EMPTY
        cell.clear_scratch()
    return out


def manhattan(a: Position, b: Position) -> int:
    return abs(a.row - b.row) + abs(a.col - b.col)


def euclidean(a: Position, b: Position) -> float:
    return math.hypot(a.row - b.row, a.col - b.col)


def reconstruct_path(grid: Grid, end: Position) -> List[Position]:
    path: List[Position] = []
    cur: Optional[Position] = end
    while cur is not None:
        path.append(cur)
        cur = grid[cur].parent
    path.reverse()
    return path


def visualize_path(grid: Grid, path: Sequence[Position]) -> Grid:
    out = grid.copy()
    for p in path[1:-1]:
        out[p].type = CellType.PATH
    return out


def grid_from_text(text: str | Iterable[str]) -> Grid:
    """Build a grid from rows of symbols ('.', '#', 'S', 'E', ...)."""
    lines = text.strip().splitlines() if isinstance(text, str) else list(text)
    lines = [ln.strip() for ln in lines if ln.strip()]
    if not lines:
        raise GridError("empty grid text")
    if any(len(ln) != len(lines[0]) for ln in lines):
        raise GridError("grid text rows differ in length")

    grid = create_empty(len(lines), len(lines[0]))
    seen = set()
    for r, ln in enumerate(lines):
        for c, ch in enumerate(ln):
            if ch not in _SYMBOL_TYPES:
                raise GridError(f"unknown grid symbol {ch!r} at ({r},{c})")
            if ch in "SE":
                if ch in seen:
                    raise GridError(f"second {ch!r} at ({r},{c})")
                seen.add(ch)
            cell = grid.cells[r][c]
            cell.type = _SYMBOL_TYPES[ch]
            cell.clear_scratch()
    return grid


def grid_to_text(grid: Grid) -> str:
    return "\n".join("".join(TEXT_SYMBOLS[c.type] for c in r) for r in grid.cells)
