#!/usr/bin/env python3
"""Status panel, legend, splash screen, and pause banner (mixin)."""

from __future__ import annotations

from typing import Sequence

import pygame

from trafficsim.events import LightSnapshot, Stats


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    # ------------------------------------------------------------------ #
    #  Status panel                                                        #
    # ------------------------------------------------------------------ #

    def draw_hud(
        self,
        surface: pygame.Surface,
        lights: Sequence[LightSnapshot],
        stats: Stats,
        total_ticks: int,
    ) -> None:
        if self.font_small is None or self.font_tiny is None:
            return

        panel_rect = pygame.Rect(
            8, self.height - self.HUD_HEIGHT + 8, self.width - 16, self.HUD_HEIGHT - 16
        )
        pygame.draw.rect(surface, self.HUD_BG_COLOR, panel_rect, border_radius=6)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, panel_rect, width=1, border_radius=6)

        x = panel_rect.x + 12
        y = panel_rect.y + 10
        header = self.font_tiny.render("TRAFFIC LIGHTS", True, (0, 200, 200))
        surface.blit(header, (x, y))
        y += 18

        for snapshot in lights:
            color = self.LIGHT_COLORS[snapshot.state]
            pygame.draw.circle(surface, color, (x + 6, y + 8), 6)
            text = self.font_small.render(
                f"{snapshot.label}  {snapshot.state.value:<6}  TIMER {snapshot.timer_remaining:>3}",
                True,
                self.HUD_TEXT_COLOR,
            )
            surface.blit(text, (x + 18, y))
            y += 20

        counters = [
            f"CARS {stats.active_count} ACTIVE / {stats.total_spawned} TOTAL",
            f"FRAME {stats.tick_index} / {total_ticks}",
        ]
        cy = panel_rect.y + 28
        for line in counters:
            text = self.font_small.render(line, True, self.HUD_TEXT_COLOR)
            surface.blit(text, (panel_rect.centerx, cy))
            cy += 20

    # ------------------------------------------------------------------ #
    #  Splash screen                                                       #
    # ------------------------------------------------------------------ #

    def _draw_splash(self, surface: pygame.Surface, tick: float) -> None:
        if self.font_title is None or self.font_small is None:
            return
        title = self.font_title.render("TRAFFIC INTERSECTION SIMULATION", True, (240, 240, 240))
        surface.blit(
            title,
            title.get_rect(center=(self.width // 2, self.height // 2 - 30)),
        )
        if int(tick * 2) % 2 == 0:
            prompt = self.font_small.render("Press any key to start", True, (160, 160, 160))
            surface.blit(
                prompt,
                prompt.get_rect(center=(self.width // 2, self.height // 2 + 20)),
            )
        lines = [
            "SPACE  Pause/Resume",
            "R      Restart run",
            "L      Toggle legend",
            "F12    Screenshot",
            "ESC    Quit",
        ]
        y = self.height // 2 + 60
        for line in lines:
            t = self.font_tiny.render(line, True, (100, 100, 100)) if self.font_tiny else None
            if t:
                surface.blit(t, t.get_rect(center=(self.width // 2, y)))
                y += 16

    # ------------------------------------------------------------------ #
    #  Legend                                                              #
    # ------------------------------------------------------------------ #

    def _draw_legend(self, surface: pygame.Surface) -> None:
        if self.font_tiny is None:
            return
        box_w, box_h = 150, len(self.LEGEND_ITEMS) * 18 + 10
        x = self.width - box_w - 2
        y = self.height - self.HUD_HEIGHT - box_h - 4
        pygame.draw.rect(
            surface, self.HUD_BG_COLOR, (x - 6, y - 4, box_w, box_h), border_radius=4
        )
        pygame.draw.rect(
            surface, self.HUD_BORDER_COLOR, (x - 6, y - 4, box_w, box_h), width=1, border_radius=4
        )
        for label, color_class in self.LEGEND_ITEMS:
            pygame.draw.circle(surface, self.CLASS_COLORS[color_class], (x + 4, y + 6), 4)
            text = self.font_tiny.render(label, True, (200, 200, 200))
            surface.blit(text, (x + 14, y))
            y += 18

    # ------------------------------------------------------------------ #
    #  Pause / completion banner                                           #
    # ------------------------------------------------------------------ #

    def _draw_banner(self, surface: pygame.Surface, label: str) -> None:
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 100))
        surface.blit(overlay, (0, 0))
        if self.font_title:
            text = self.font_title.render(label, True, (220, 220, 220))
            surface.blit(text, text.get_rect(center=(self.width // 2, self.height // 2)))
