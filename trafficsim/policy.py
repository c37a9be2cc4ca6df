#!/usr/bin/env python3
"""
trafficsim/policy.py
====================
Tunable grid, signal, spawn and pacing parameters for the intersection
simulation.  Every constant lives in the frozen :class:`SimulationPolicy`
dataclass so that experiments can swap policies without touching code.

:meth:`SimulationPolicy.validate` rejects configurations the engine
cannot run (non-positive light durations, lanes too narrow to hold a
lane centre-line, a grid too small for the intersection footprint).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .geometry import Geometry

MIN_LANE_WIDTH = 4
"""Narrowest road that still keeps both lane centre-lines off the borders."""


class ConfigurationError(ValueError):
    """Raised when a :class:`SimulationPolicy` cannot drive a simulation."""


@dataclass(frozen=True)
class SimulationPolicy:
    """Immutable bag of every tunable simulation parameter.

    Groups: grid geometry, signal timing, car pool / spawning,
    driver pacing.
    """

    # ── Grid geometry ─────────────────────────────────────────────────────
    grid_width: int = 80
    """Grid width in cells."""

    grid_height: int = 24
    """Grid height in cells."""

    intersection_x: int = 40
    """Column of the intersection centre."""

    intersection_y: int = 12
    """Row of the intersection centre."""

    ns_lane_width: int = 6
    """Width of the North-South road (columns)."""

    ew_lane_width: int = 4
    """Width of the East-West road (rows)."""

    # ── Signal timing (ticks) ─────────────────────────────────────────────
    green_duration: int = 50
    """Ticks a light stays GREEN."""

    yellow_duration: int = 10
    """Ticks a light stays YELLOW."""

    red_duration: int = 50
    """Ticks a light stays RED."""

    # ── Car pool / spawning ───────────────────────────────────────────────
    max_cars: int = 50
    """Number of car slots in the registry."""

    spawn_interval: int = 30
    """A spawn is attempted on every tick index divisible by this."""

    # ── Driver pacing ─────────────────────────────────────────────────────
    ticks_per_second: int = 10
    """Frames per simulated second; the engine itself is cadence agnostic."""

    def geometry(self) -> Geometry:
        """Build the :class:`~trafficsim.geometry.Geometry` for this grid."""
        return Geometry(
            width=self.grid_width,
            height=self.grid_height,
            cx=self.intersection_x,
            cy=self.intersection_y,
            ns_lane_width=self.ns_lane_width,
            ew_lane_width=self.ew_lane_width,
        )

    @property
    def cycle_length(self) -> int:
        """Ticks in one full GREEN → YELLOW → RED cycle."""
        return self.green_duration + self.yellow_duration + self.red_duration

    def total_ticks(self, duration_seconds: int) -> int:
        """Number of ticks a run of *duration_seconds* lasts."""
        return int(duration_seconds) * self.ticks_per_second

    def problems(self) -> List[str]:
        """Every violated constraint, as human-readable sentences."""
        problems: List[str] = []
        for name in ("green_duration", "yellow_duration", "red_duration"):
            value = getattr(self, name)
            if value <= 0:
                problems.append(f"{name} must be positive, got {value}")
        for name in ("ns_lane_width", "ew_lane_width"):
            value = getattr(self, name)
            if value < MIN_LANE_WIDTH:
                problems.append(f"{name} must be at least {MIN_LANE_WIDTH}, got {value}")
        if self.max_cars < 1:
            problems.append(f"max_cars must be at least 1, got {self.max_cars}")
        if self.spawn_interval < 1:
            problems.append(f"spawn_interval must be at least 1, got {self.spawn_interval}")
        if self.ticks_per_second < 1:
            problems.append(f"ticks_per_second must be at least 1, got {self.ticks_per_second}")
        if not any(p.startswith(("ns_lane_width", "ew_lane_width")) for p in problems):
            problems.extend(self.geometry().footprint_problems())
        return problems

    def validate(self) -> "SimulationPolicy":
        """Return ``self`` or raise :class:`ConfigurationError`."""
        problems = self.problems()
        if problems:
            raise ConfigurationError("invalid simulation policy: " + "; ".join(problems))
        return self
