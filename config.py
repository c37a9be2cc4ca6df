#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf; it never imports from
other project packages.
"""

# ── Grid defaults ────────────────────────────────────────────────────────────
DEFAULT_GRID_WIDTH: int = 80
DEFAULT_GRID_HEIGHT: int = 24
DEFAULT_INTERSECTION_X: int = 40
DEFAULT_INTERSECTION_Y: int = 12
DEFAULT_NS_LANE_WIDTH: int = 6
DEFAULT_EW_LANE_WIDTH: int = 4

# ── Signal defaults (ticks) ──────────────────────────────────────────────────
DEFAULT_GREEN_DURATION: int = 50
DEFAULT_YELLOW_DURATION: int = 10
DEFAULT_RED_DURATION: int = 50

# ── Traffic defaults ─────────────────────────────────────────────────────────
DEFAULT_MAX_CARS: int = 50
DEFAULT_SPAWN_INTERVAL: int = 30
DEFAULT_TICK_RATE_HZ: int = 10

# ── Run length (seconds) ─────────────────────────────────────────────────────
MIN_SIM_TIME: int = 1
MAX_SIM_TIME: int = 300
STANDARD_DURATION: int = 60

# ── Display defaults ─────────────────────────────────────────────────────────
DEFAULT_DISPLAY: str = "terminal"
DISPLAY_CHOICES = ("terminal", "pygame")

# ── Log files (relative to the working directory) ────────────────────────────
LOG_FILE: str = "traffic.log"
ENGINE_DEBUG_LOG_FILE: str = "engine_debug.log"
