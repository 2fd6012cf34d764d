#!/usr/bin/env python3
"""Grid inspection helpers used by the driver before and during a run."""

import logging
from collections import Counter, deque
from typing import Dict

from pathviz.core.grid import find_start_end, neighbors
from pathviz.core.types import Grid, Step

logger = logging.getLogger(__name__)


def debug_grid(grid: Grid) -> Dict[str, int]:
    counts = Counter(cell.type.value for cell in grid)
    start, end = find_start_end(grid)
    logger.debug("grid %dx%d start=%s end=%s types=%s",
                 grid.rows, grid.cols, start, end, dict(counts))
    return dict(counts)


def validate_path(grid: Grid) -> bool:
    """True if end is reachable from start through non-wall cells."""
    start, end = find_start_end(grid)
    if start is None or end is None:
        logger.error("start or end position not found")
        return False

    queue = deque([start])
    seen = {start}
    while queue:
        cur = queue.popleft()
        if cur == end:
            return True
        for n in neighbors(grid, cur):
            if n not in seen:
                seen.add(n)
                queue.append(n)

    logger.warning("no path exists from %s to %s", start, end)
    return False


def debug_step(algorithm: str, index: int, step: Step) -> None:
    logger.debug("[%s] step %d: current=%s frontier=%d visited=%d",
                 algorithm, index, step.current, len(step.frontier), len(step.visited))
