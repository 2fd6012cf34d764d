#!/usr/bin/env python3
"""
Run-time settings, map loading and logging setup.

- ENV: PATHVIZ_ROWS, PATHVIZ_COLS, PATHVIZ_ALGO, PATHVIZ_SPEED,
       PATHVIZ_DENSITY, PATHVIZ_MAP, PATHVIZ_LOG
- CLI: --rows=, --cols=, --algo=, --speed=, --density=, --map=, --log=
CLI values override the environment.
"""

import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from pathviz.core.algorithms import ALGORITHMS
from pathviz.core.grid import create_empty, find_start_end, grid_from_text, place_start_end
from pathviz.core.types import CellType, Grid, GridError, Position

logger = logging.getLogger(__name__)

MAP_DIR = Path(__file__).resolve().parents[1] / "maps"
LOG_FORMAT = "%(levelname)s: %(message)s"

_KEYS = ("rows", "cols", "algo", "speed", "density", "map", "log")


@dataclass
class Settings:
    rows: int = 20
    cols: int = 20
    algorithm: str = "astar"
    speed: int = 5
    wall_density: float = 0.3
    map_path: Optional[Path] = None
    log_level: str = "INFO"


def _raw_options(argv: Sequence[str], environ: Mapping[str, str]) -> Dict[str, str]:
    raw: Dict[str, str] = {}
    for key in _KEYS:
        val = environ.get(f"PATHVIZ_{key.upper()}")
        if val:
            raw[key] = val
    for arg in argv:
        if arg.startswith("--") and "=" in arg:
            key, val = arg[2:].split("=", 1)
            if key in _KEYS:
                raw[key] = val
    return raw


def _int_in(raw: Dict[str, str], key: str, default: int, lo: int, hi: int) -> int:
    if key not in raw:
        return default
    try:
        val = int(raw[key])
    except ValueError:
        logger.warning("ignoring %s=%r, not an integer", key, raw[key])
        return default
    if not lo <= val <= hi:
        logger.warning("ignoring %s=%d, expected %d..%d", key, val, lo, hi)
        return default
    return val


def resolve_settings(argv: Optional[Sequence[str]] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Settings:
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ
    raw = _raw_options(argv, environ)
    s = Settings()

    s.rows = _int_in(raw, "rows", s.rows, 3, 200)
    s.cols = _int_in(raw, "cols", s.cols, 3, 200)
    s.speed = _int_in(raw, "speed", s.speed, 1, 10)

    algo = raw.get("algo", s.algorithm).lower()
    if algo in ALGORITHMS:
        s.algorithm = algo
    else:
        logger.warning("unknown algorithm %r, using %s", algo, s.algorithm)

    if "density" in raw:
        try:
            density = float(raw["density"])
        except ValueError:
            density = -1.0
        if 0.0 <= density <= 1.0:
            s.wall_density = density
        else:
            logger.warning("ignoring density=%r, expected 0..1", raw["density"])

    if "map" in raw:
        p = Path(raw["map"])
        if not p.suffix:
            p = MAP_DIR / f"{p.name}.json"
        s.map_path = p

    level = raw.get("log", s.log_level).upper()
    if isinstance(logging.getLevelName(level), int):
        s.log_level = level
    else:
        logger.warning("unknown log level %r, using %s", level, s.log_level)
    return s


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


def _position(data: dict, key: str) -> Position:
    try:
        r, c = data[key]
        return Position(int(r), int(c))
    except (KeyError, TypeError, ValueError):
        raise GridError(f"map field {key!r} must be a [row, col] pair") from None


def load_map(path: Path) -> Grid:
    """
    Read a JSON map. Two shapes are accepted:
      {"rows": R, "cols": C, "start": [r, c], "end": [r, c], "walls": [[r, c], ...]}
      {"text": ["S..#", "...E"]}
    """
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as ex:
        raise GridError(f"cannot read map {path}: {ex}") from ex

    if "text" in data:
        grid = grid_from_text(data["text"])
        start, end = find_start_end(grid)
        if start is None or end is None:
            raise GridError("map text needs one 'S' and one 'E'")
    else:
        try:
            rows, cols = int(data["rows"]), int(data["cols"])
        except (KeyError, TypeError, ValueError):
            raise GridError("map needs integer 'rows' and 'cols'") from None
        grid = place_start_end(create_empty(rows, cols),
                               _position(data, "start"), _position(data, "end"))
        walls: List = data.get("walls", [])
        for w in walls:
            p = _position({"wall": w}, "wall")
            if not grid.in_bounds(p):
                raise GridError(f"wall {p} is outside the grid")
            if grid[p].type is CellType.EMPTY:
                grid[p].type = CellType.WALL
    logger.info("loaded map %s (%dx%d)", path, grid.rows, grid.cols)
    return grid
