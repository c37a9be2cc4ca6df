#!/usr/bin/env python3
"""Visual constants shared across the terminal and Pygame displays."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from trafficsim.types import ColorClass, LightState

ColorRGB = Tuple[int, int, int]


class DisplayConstants:
    """Mixin providing every visual / layout constant."""

    # ── Pygame colours ────────────────────────────────────────────────────
    BG_COLOR: ColorRGB = (15, 15, 15)
    ROAD_COLOR: ColorRGB = (30, 30, 30)
    BORDER_COLOR: ColorRGB = (120, 120, 120)
    HUD_BG_COLOR: ColorRGB = (22, 22, 22)
    HUD_BORDER_COLOR: ColorRGB = (42, 42, 42)
    HUD_TEXT_COLOR: ColorRGB = (200, 200, 200)

    CLASS_COLORS: Dict[ColorClass, ColorRGB] = {
        ColorClass.BACKGROUND:      (120, 120, 120),
        ColorClass.APPROACHING:     (86, 168, 255),
        ColorClass.AT_STOP_LINE:    (246, 191, 90),
        ColorClass.IN_INTERSECTION: (0, 255, 127),
        ColorClass.CROSSED:         (200, 110, 255),
    }

    LIGHT_COLORS: Dict[LightState, ColorRGB] = {
        LightState.RED:    (255, 60, 60),
        LightState.YELLOW: (246, 191, 90),
        LightState.GREEN:  (0, 255, 127),
    }

    LEGEND_ITEMS: Sequence[Tuple[str, ColorClass]] = (
        ("APPROACHING", ColorClass.APPROACHING),
        ("AT STOP LINE", ColorClass.AT_STOP_LINE),
        ("IN INTERSECTION", ColorClass.IN_INTERSECTION),
        ("CROSSED", ColorClass.CROSSED),
    )

    # ── Terminal (rich) styles ────────────────────────────────────────────
    CLASS_STYLES: Dict[ColorClass, str] = {
        ColorClass.BACKGROUND:      "white",
        ColorClass.APPROACHING:     "blue",
        ColorClass.AT_STOP_LINE:    "yellow",
        ColorClass.IN_INTERSECTION: "green",
        ColorClass.CROSSED:         "magenta",
    }

    LIGHT_STYLES: Dict[LightState, str] = {
        LightState.RED:    "bold red",
        LightState.YELLOW: "bold yellow",
        LightState.GREEN:  "bold green",
    }

    # ── Layout ────────────────────────────────────────────────────────────
    CELL_W = 12
    CELL_H = 22
    HUD_HEIGHT = 96
    SCREENSHOT_DIR = "screenshots"
