#!/usr/bin/env python3
"""
Pathfinding Visualizer Viewer — Minimal Controls + Metrics

- Keyboard:
    [SPACE]      -> start / pause / resume
    [N]          -> single step
    [F]          -> finish the run at once
    [R]          -> reset run
    [C]/[M]/[G]  -> clear overlay / random maze / new empty grid
    [1]..[4]     -> A* / Dijkstra / BFS / DFS
    [+]/[-]      -> speed
    [Q]/[ESC]    -> quit
- Mouse: left click toggles a wall (between runs only).

Settings come from PATHVIZ_* environment variables or --key=value arguments
(see pathviz.config).
"""

import logging
from typing import Dict, List, Optional, Tuple

import pygame

from pathviz.app.driver import StepDriver, new_editor_grid
from pathviz.config import Settings, configure_logging, load_map, resolve_settings
from pathviz.core.algorithms import ALGORITHM_INFO
from pathviz.core.types import CellType, GridError, Position

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 320            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 24
FONT_NAME = None  # default pygame font

ALGO_KEYS = {pygame.K_1: "astar", pygame.K_2: "dijkstra", pygame.K_3: "bfs", pygame.K_4: "dfs"}

# Colors
BLACK       = (  0,  0,  0)
CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

CELL_COLORS: Dict[CellType, Tuple[int, int, int]] = {
    CellType.EMPTY:    (200, 200, 200),
    CellType.WALL:     ( 40,  44,  52),
    CellType.START:    ( 70, 130, 180),
    CellType.END:      (220,  50,  47),
    CellType.VISITED:  (255, 120, 180),
    CellType.FRONTIER: (  0, 170, 255),
    CellType.CURRENT:  (255, 210,   0),
    CellType.PATH:     (  0, 255, 200),
}

# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        if self.active and self.togglable:
            bg = (58, 86, 160, 235)
        elif self.hover:
            bg = (46, 50, 60, 230)
        else:
            bg = (36, 40, 48, 220)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255, 255), self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False

# ---------- Viewer ----------
class Viewer:
    def __init__(self, driver: StepDriver):
        pygame.init()

        self.driver = driver
        self.alive = True
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        grid = driver.grid
        cs = max(10, min(CELL_SIZE_DEFAULT, (720 - GRID_MARGIN*2) // grid.rows))
        win_w = GRID_MARGIN*2 + grid.cols * cs + PANEL_W
        win_h = max(GRID_MARGIN*2 + grid.rows * cs, 600)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding Visualizer")

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)
        self.clock = pygame.time.Clock()

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute an integer cell size that fits the window, grid on the left."""
        grid = self.driver.grid
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(4, min(avail_w // grid.cols, avail_h // grid.rows)))
        self._grid_origin = (GRID_MARGIN, GRID_MARGIN)
        self._right_band = pygame.Rect(win_w - PANEL_W, 0, PANEL_W, win_h)
        self._build_buttons()

    def cell_at(self, pixel: Tuple[int, int]) -> Optional[Position]:
        ox, oy = self._grid_origin
        x, y = pixel
        if x < ox or y < oy:
            return None
        p = Position((y - oy) // self.cell_size, (x - ox) // self.cell_size)
        return p if self.driver.grid.in_bounds(p) else None

    def run(self):
        while self.alive:
            self._handle_events()
            self.driver.tick(pygame.time.get_ticks())
            self._draw()
            self.clock.tick(60)
        pygame.quit()

    # ---------- input ----------
    def _handle_events(self):
        for e in pygame.event.get():
            self.handle_event(e)

    def handle_event(self, e: pygame.event.Event):
        if e.type == pygame.QUIT:
            self.alive = False
        elif e.type == pygame.KEYDOWN:
            self.handle_key(e.key)
        elif e.type == pygame.VIDEORESIZE:
            self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
            self._layout(e.w, e.h)
        elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
            if any(b.handle_mouse(e) for b in self._buttons):
                self._refresh_active_states()
                return
            if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                p = self.cell_at(e.pos)
                if p is not None:
                    self.driver.toggle_wall(p)

    def handle_key(self, key: int):
        d = self.driver
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self.alive = False
        elif key == pygame.K_SPACE:
            self._toggle_run()
        elif key == pygame.K_n:
            d.step()
        elif key == pygame.K_f:
            d.run_to_completion()
        elif key == pygame.K_r:
            d.reset()
        elif key == pygame.K_c:
            d.clear_grid()
        elif key == pygame.K_m:
            self._regrid(d.generate_maze)
        elif key == pygame.K_g:
            self._regrid(d.new_grid)
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            d.change_speed(d.speed + 1)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
            d.change_speed(d.speed - 1)
        elif key in ALGO_KEYS:
            d.change_algorithm(ALGO_KEYS[key])
        self._refresh_active_states()

    def _toggle_run(self):
        d = self.driver
        if not d.is_running:
            d.start()
        elif d.is_paused:
            d.resume()
        else:
            d.pause()
        self._refresh_active_states()

    def _regrid(self, edit):
        if edit():
            self._layout(*self.screen.get_size())

    def _switch_algo(self, kind: str):
        self.driver.change_algorithm(kind)
        self._refresh_active_states()

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill((24, 26, 32))
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        for row in self.driver.grid.cells:
            for cell in row:
                rect = pygame.Rect(ox + cell.position.col*cs, oy + cell.position.row*cs, cs, cs)
                pygame.draw.rect(self.screen, CELL_COLORS[cell.type], rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 32
        gap = 8

        def add(label, cb, *, togglable=False, store_as: str | None = None):
            nonlocal y
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)
            y += h + gap

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run")
        add("Step Once", self.driver.step)
        add("Reset", self.driver.reset)
        add("Random Maze", lambda: self._regrid(self.driver.generate_maze))
        self._algo_buttons: Dict[str, UIButton] = {}
        for kind, info in ALGORITHM_INFO.items():
            add(info.name, lambda k=kind: self._switch_algo(k), togglable=True)
            self._algo_buttons[kind] = self._buttons[-1]
        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.driver.is_running and not self.driver.is_paused)
        for kind, btn in getattr(self, "_algo_buttons", {}).items():
            btn.set_active(kind == self.driver.algorithm)

    def _state_label(self) -> str:
        d = self.driver
        if d.is_done:
            return "Done" if d.is_path_found else "No path"
        if d.is_running:
            return "Paused" if d.is_paused else "Running"
        return "Idle"

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        d = self.driver

        card = pygame.Surface((rb.width - 20, 230), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"State: {self._state_label()}")
        line(f"Algo: {ALGORITHM_INFO[d.algorithm].name}")
        line(f"Nodes explored: {d.nodes_explored}")
        line(f"Path length: {d.path_length}")
        line(f"Time: {d.execution_time:.1f} ms")
        line(f"Efficiency: {d.efficiency_score}")
        line(f"Speed: {d.speed} ({d.delay_ms():.0f} ms/step)")

        for b in self._buttons:
            b.draw(self.screen, self.font)

# ---------- main ----------
def build_driver(settings: Settings) -> StepDriver:
    grid = new_editor_grid(settings.rows, settings.cols)
    if settings.map_path is not None:
        try:
            grid = load_map(settings.map_path)
        except GridError as ex:
            logger.error("failed to load map %s: %s", settings.map_path, ex)
    return StepDriver(grid, algorithm=settings.algorithm, speed=settings.speed,
                      wall_density=settings.wall_density)


def main(argv=None):
    settings = resolve_settings(argv)
    configure_logging(settings.log_level)
    Viewer(build_driver(settings)).run()

if __name__ == "__main__":
    main()
