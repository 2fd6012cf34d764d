from collections import deque
from typing import List, Optional

import pytest

from pathviz.core.grid import find_start_end, grid_from_text, neighbors
from pathviz.core.types import CellType, Grid, Position, Step

KINDS = ("astar", "dijkstra", "bfs", "dfs")


def run_all(engine, limit: int = 100_000) -> List[Step]:
    steps = []
    for _ in range(limit):
        step = engine.advance()
        steps.append(step)
        if step.is_done:
            return steps
    raise AssertionError("engine did not terminate")


def bfs_distance(grid: Grid) -> Optional[int]:
    """Independent shortest-path length in edges, None if unreachable."""
    start, end = find_start_end(grid)
    dist = {start: 0}
    queue = deque([start])
    while queue:
        cur = queue.popleft()
        if cur == end:
            return dist[cur]
        for n in neighbors(grid, cur):
            if n not in dist:
                dist[n] = dist[cur] + 1
                queue.append(n)
    return None


def assert_valid_path(grid: Grid, path) -> None:
    start, end = find_start_end(grid)
    assert path[0] == start
    assert path[-1] == end
    assert len(set(path)) == len(path)
    for a, b in zip(path, path[1:]):
        assert abs(a.row - b.row) + abs(a.col - b.col) == 1
    for p in path:
        assert grid[p].type is not CellType.WALL


@pytest.fixture
def open_5x5() -> Grid:
    return grid_from_text("""
        S....
        .....
        .....
        .....
        ....E
    """)


@pytest.fixture(params=KINDS)
def kind(request) -> str:
    return request.param
