#!/usr/bin/env python3

from .canvas import Cell, GridCanvas
from .constants import ColorRGB, DisplayConstants
from .terminal import TerminalDisplay, configuration_panel, summary_panel
from .hud import HudRenderer
from .pygame_view import PygameGridView, run_pygame_view

__all__ = [
    "Cell",
    "GridCanvas",
    "ColorRGB",
    "DisplayConstants",
    "TerminalDisplay",
    "configuration_panel",
    "summary_panel",
    "HudRenderer",
    "PygameGridView",
    "run_pygame_view",
]
