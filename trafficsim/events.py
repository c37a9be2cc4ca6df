#!/usr/bin/env python3
"""
trafficsim/events.py
====================
Render-side records produced by one tick.

* :class:`RenderEvent`: one cell to (re)draw.
* :class:`LightSnapshot`: one light's phase for a status line.
* :class:`Stats`: spawn counters and tick count.
* :class:`TickResult`: everything a display needs for one frame.

:func:`render_events` diffs the movement steps of a tick into an
ordered list of render events.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .geometry import Geometry
from .lights import TrafficLight
from .movement import CarStep
from .types import Axis, ColorClass, LightState, StepOutcome


@dataclass(frozen=True)
class RenderEvent:
    """Draw *glyph* at cell *(x, y)* in *color_class*."""

    x: int
    y: int
    glyph: str
    color_class: ColorClass

    @property
    def is_erase(self) -> bool:
        return self.color_class is ColorClass.BACKGROUND


@dataclass(frozen=True)
class LightSnapshot:
    """Phase of one light at the end of a tick."""

    axis: Axis
    state: LightState
    timer_remaining: int

    @classmethod
    def of(cls, light: TrafficLight) -> "LightSnapshot":
        return cls(axis=light.axis, state=light.state, timer_remaining=light.timer)

    @property
    def label(self) -> str:
        """``"N-S"`` or ``"E-W"``."""
        return "-".join(self.axis.value)


@dataclass(frozen=True)
class Stats:
    """Spawn counters and completed-tick count."""

    total_spawned: int
    active_count: int
    tick_index: int

    def as_dict(self) -> dict:
        return {
            "total_spawned": self.total_spawned,
            "active_count": self.active_count,
            "tick_index": self.tick_index,
        }


@dataclass(frozen=True)
class TickResult:
    """Output of :meth:`trafficsim.simulation.Simulation.tick`.

    Attributes
    ----------
    tick_index : int
        Index of the tick that produced this result (0 for the first).
    events : tuple of RenderEvent
        Ordered draw / erase events.
    lights : tuple of LightSnapshot
        NS then EW.
    stats : Stats
        Counters after the tick.
    spawned : bool or None
        *None* when no spawn was attempted, else whether it succeeded.
    steps : tuple of CarStep
        Raw movement steps the events were derived from.
    """

    tick_index: int
    events: Tuple[RenderEvent, ...]
    lights: Tuple[LightSnapshot, ...]
    stats: Stats
    spawned: Optional[bool] = None
    steps: Tuple[CarStep, ...] = field(default=(), repr=False)

    def light(self, axis: Axis) -> LightSnapshot:
        for snapshot in self.lights:
            if snapshot.axis is axis:
                return snapshot
        raise KeyError(axis)


def _erase(geometry: Geometry, cell: Tuple[int, int]) -> RenderEvent:
    x, y = cell
    return RenderEvent(x, y, geometry.char_at_border(x, y), ColorClass.BACKGROUND)


def _draw(geometry: Geometry, step: CarStep) -> RenderEvent:
    x, y = step.after
    return RenderEvent(x, y, step.symbol, geometry.zone_of(x, y, step.direction))


def render_events(steps: Sequence[CarStep], geometry: Geometry) -> List[RenderEvent]:
    """Diff movement *steps* into ordered render events.

    RETIRED restores the background under the old cell, BLOCKED redraws
    in place with the current zone colour, MOVED restores the old cell
    and draws the new one.
    """
    events: List[RenderEvent] = []
    for step in steps:
        if step.outcome is StepOutcome.RETIRED:
            events.append(_erase(geometry, step.before))
        elif step.outcome is StepOutcome.BLOCKED:
            events.append(_draw(geometry, step))
        elif step.outcome is StepOutcome.MOVED:
            events.append(_erase(geometry, step.before))
            events.append(_draw(geometry, step))
        else:
            raise ValueError(f"unhandled step outcome {step.outcome!r}")
    return events
