#!/usr/bin/env python3
from dataclasses import dataclass
from typing import Dict, Type

from pathviz.core.astar import AStarAlgo
from pathviz.core.bfs import BFSAlgo
from pathviz.core.dfs import DFSAlgo
from pathviz.core.dijkstra import DijkstraAlgo
from pathviz.core.search import SearchAlgo
from pathviz.core.types import Grid


@dataclass(frozen=True)
class AlgorithmInfo:
    kind: str
    name: str
    description: str
    time_complexity: str
    space_complexity: str


ALGORITHMS: Dict[str, Type[SearchAlgo]] = {
    "astar": AStarAlgo,
    "dijkstra": DijkstraAlgo,
    "bfs": BFSAlgo,
    "dfs": DFSAlgo,
}

ALGORITHM_INFO: Dict[str, AlgorithmInfo] = {
    "astar": AlgorithmInfo(
        "astar", "A* Search",
        "Informed search that orders the frontier by cost so far plus a heuristic "
        "estimate of the remaining cost, expanding nodes that look closest to the goal.",
        "O(E log V)", "O(V)"),
    "dijkstra": AlgorithmInfo(
        "dijkstra", "Dijkstra's Algorithm",
        "Explores nodes in order of their distance from the start and guarantees "
        "a shortest path.",
        "O(E log V)", "O(V)"),
    "bfs": AlgorithmInfo(
        "bfs", "Breadth-First Search",
        "Explores every node at the current depth before the next depth level. "
        "Shortest path on unweighted grids.",
        "O(V + E)", "O(V)"),
    "dfs": AlgorithmInfo(
        "dfs", "Depth-First Search",
        "Follows each branch as far as possible before backtracking. Finds a path "
        "if one exists, but not necessarily the shortest.",
        "O(V + E)", "O(V)"),
}


def create_engine(kind: str, grid: Grid) -> SearchAlgo:
    """Fresh engine for one run over an independent copy of grid."""
    try:
        cls = ALGORITHMS[kind]
    except KeyError:
        raise ValueError(f"unknown algorithm {kind!r}, expected one of {sorted(ALGORITHMS)}") from None
    algo = cls()
    algo.init(grid)
    return algo
