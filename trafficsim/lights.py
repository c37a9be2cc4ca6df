#!/usr/bin/env python3
"""
trafficsim/lights.py
====================
Fixed-cycle traffic light, one instance per axis.

Each light counts down independently: GREEN → YELLOW → RED → GREEN.
There is no cross-axis interlock; two lights configured with equal
cycle lengths and opposite initial states stay complementary by
construction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict

from .types import Axis, LightState, NEXT_LIGHT_STATE
from .policy import SimulationPolicy

if TYPE_CHECKING:
    from .events import LightSnapshot

log = logging.getLogger("lights")

# Initial phase per axis.
_INITIAL_STATE: Dict[Axis, LightState] = {
    Axis.NS: LightState.GREEN,
    Axis.EW: LightState.RED,
}


@dataclass
class TrafficLight:
    """Countdown state machine for one axis.

    Attributes
    ----------
    axis : Axis
        ``NS`` or ``EW``.
    state : LightState
        Current phase.
    timer : int
        Ticks left in the current phase.
    green_duration, yellow_duration, red_duration : int
        Phase lengths in ticks.
    """

    axis: Axis
    state: LightState
    timer: int
    green_duration: int = 50
    yellow_duration: int = 10
    red_duration: int = 50
    transitions: int = field(default=0, repr=False)

    @classmethod
    def initial(cls, axis: Axis, policy: SimulationPolicy) -> "TrafficLight":
        """Light for *axis* in its start-of-simulation phase."""
        state = _INITIAL_STATE[axis]
        light = cls(
            axis=axis,
            state=state,
            timer=0,
            green_duration=policy.green_duration,
            yellow_duration=policy.yellow_duration,
            red_duration=policy.red_duration,
        )
        light.timer = light.duration_of(state)
        return light

    def duration_of(self, state: LightState) -> int:
        durations: Dict[LightState, int] = {
            LightState.GREEN:  self.green_duration,
            LightState.YELLOW: self.yellow_duration,
            LightState.RED:    self.red_duration,
        }
        return durations[state]

    def tick(self) -> bool:
        """Advance one tick.  Returns True when the phase changed."""
        self.timer -= 1
        if self.timer > 0:
            return False
        previous = self.state
        self.state = NEXT_LIGHT_STATE[previous]
        self.timer = self.duration_of(self.state)
        self.transitions += 1
        log.debug("%s light %s -> %s (timer=%d)",
                  self.axis.value, previous.value, self.state.value, self.timer)
        return True

    def snapshot(self) -> LightSnapshot:
        """Axis, phase and remaining ticks for a status line."""
        from .events import LightSnapshot as _Snapshot
        return _Snapshot.of(self)

    @property
    def permits_entry(self) -> bool:
        """YELLOW and GREEN both let a car past the stop line."""
        return self.state is not LightState.RED
