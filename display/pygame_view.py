#!/usr/bin/env python3
"""
Pygame window that drives a :class:`~trafficsim.simulation.Simulation`
and paints its grid cell by cell.

Module layout
─────────────
    display/
    ├── canvas.py          – GridCanvas (render events → cell buffer)
    ├── constants.py       – DisplayConstants mixin (colours, layout)
    ├── hud.py             – HudRenderer mixin (status, legend, splash, banners)
    ├── terminal.py        – TerminalDisplay (rich live view)
    └── pygame_view.py     – PygameGridView (this file – main loop)
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Optional

import pygame

from trafficsim.events import TickResult
from trafficsim.simulation import Simulation
from trafficsim.types import ColorClass

from .canvas import GridCanvas
from .constants import DisplayConstants
from .hud import HudRenderer

log = logging.getLogger("display")


class PygameGridView(DisplayConstants, HudRenderer):
    """Grid visualiser powered by Pygame.

    The window ticks the simulation once per frame at the policy's
    ``ticks_per_second`` until *total_ticks* frames have run, then
    shows a completion banner and waits for the user to close it.

    Parameters
    ----------
    simulation : Simulation
        The engine to drive.
    total_ticks : int
        Frames to run before the run is complete.
    """

    def __init__(self, simulation: Simulation, total_ticks: int) -> None:
        self.simulation = simulation
        self.total_ticks = int(total_ticks)
        self.fps = simulation.policy.ticks_per_second
        self.canvas = GridCanvas(simulation.initial_frame())

        self.width = self.canvas.width * self.CELL_W
        self.height = self.canvas.height * self.CELL_H + self.HUD_HEIGHT

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_cell: Optional[pygame.font.Font] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None

        self.time_seconds = 0.0
        self.last_result: Optional[TickResult] = None

        # UI state
        self.paused = False
        self.show_legend = True
        self.show_splash = True

    @property
    def finished(self) -> bool:
        return self.simulation.tick_index >= self.total_ticks

    # ------------------------------------------------------------------ #
    #  Fonts / screenshot                                                  #
    # ------------------------------------------------------------------ #
    @staticmethod
    def _load_font(size: int, bold: bool = False) -> pygame.font.Font:
        return pygame.font.SysFont("dejavusansmono,consolas,couriernew,monospace", size, bold=bold)

    def _take_screenshot(self) -> None:
        if self.screen is None:
            return
        os.makedirs(self.SCREENSHOT_DIR, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.SCREENSHOT_DIR, f"sim_{stamp}.png")
        pygame.image.save(self.screen, path)
        log.info("Screenshot saved to %s", path)

    # ------------------------------------------------------------------ #
    #  Simulation                                                          #
    # ------------------------------------------------------------------ #
    def step(self) -> TickResult:
        """Tick the simulation once and apply its events to the canvas."""
        result = self.simulation.tick()
        self.canvas.apply(result.events)
        self.last_result = result
        if self.finished:
            log.info("Run complete after %d frames: %s",
                     self.total_ticks, result.stats.as_dict())
        return result

    def restart(self) -> None:
        self.simulation.reset()
        self.canvas.reset()
        self.last_result = None
        self.paused = False

    # ------------------------------------------------------------------ #
    #  Drawing                                                             #
    # ------------------------------------------------------------------ #
    def draw_grid(self, surface: pygame.Surface) -> None:
        if self.font_cell is None:
            return
        geo = self.simulation.geometry
        road = pygame.Rect(
            geo.left * self.CELL_W, 0,
            (geo.right - geo.left + 1) * self.CELL_W, self.canvas.height * self.CELL_H,
        )
        pygame.draw.rect(surface, self.ROAD_COLOR, road)
        road = pygame.Rect(
            0, geo.top * self.CELL_H,
            self.canvas.width * self.CELL_W, (geo.bottom - geo.top + 1) * self.CELL_H,
        )
        pygame.draw.rect(surface, self.ROAD_COLOR, road)

        for y in range(self.canvas.height):
            for x in range(self.canvas.width):
                cell = self.canvas.cell(x, y)
                if cell.glyph == " ":
                    continue
                color = (
                    self.BORDER_COLOR
                    if cell.color_class is ColorClass.BACKGROUND
                    else self.CLASS_COLORS[cell.color_class]
                )
                img = self.font_cell.render(cell.glyph, True, color)
                rect = img.get_rect(
                    center=(x * self.CELL_W + self.CELL_W // 2, y * self.CELL_H + self.CELL_H // 2)
                )
                surface.blit(img, rect)

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> Optional[TickResult]:
        """Open the window and run until closed; returns the last tick's result."""
        pygame.init()
        pygame.display.set_caption("TRAFFIC INTERSECTION SIMULATION")
        self.screen = pygame.display.set_mode((self.width, self.height))
        self.clock = pygame.time.Clock()
        self.font_cell = self._load_font(self.CELL_H - 6, bold=True)
        self.font_small = self._load_font(13, bold=False)
        self.font_tiny = self._load_font(11, bold=False)
        self.font_title = self._load_font(28, bold=True)
        log.info("Pygame view opened %dx%d px at %d fps", self.width, self.height, self.fps)

        running = True
        while running:
            delta_time = self.clock.tick(self.fps) / 1000.0
            self.time_seconds += delta_time

            # ---- events ------------------------------------------------- #
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif self.show_splash:
                        self.show_splash = False
                    elif event.key == pygame.K_SPACE:
                        self.paused = not self.paused
                    elif event.key == pygame.K_l:
                        self.show_legend = not self.show_legend
                    elif event.key == pygame.K_r:
                        self.restart()
                    elif event.key == pygame.K_F12:
                        self._take_screenshot()

            # ---- splash ------------------------------------------------- #
            if self.show_splash:
                self.screen.fill(self.BG_COLOR)
                self._draw_splash(self.screen, self.time_seconds)
                pygame.display.flip()
                continue

            # ---- simulation tick ---------------------------------------- #
            if not self.paused and not self.finished:
                self.step()

            # ---- render ------------------------------------------------- #
            self.screen.fill(self.BG_COLOR)
            self.draw_grid(self.screen)
            if self.last_result is not None:
                lights, stats = self.last_result.lights, self.last_result.stats
            else:
                lights, stats = self.simulation.light_snapshots(), self.simulation.stats()
            self.draw_hud(self.screen, lights, stats, self.total_ticks)
            if self.show_legend:
                self._draw_legend(self.screen)
            if self.finished:
                self._draw_banner(self.screen, "SIMULATION COMPLETE")
            elif self.paused:
                self._draw_banner(self.screen, "PAUSED")

            pygame.display.flip()

        pygame.quit()
        return self.last_result


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_pygame_view(simulation: Simulation, total_ticks: int) -> Optional[TickResult]:
    view = PygameGridView(simulation=simulation, total_ticks=total_ticks)
    return view.run()
