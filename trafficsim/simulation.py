#!/usr/bin/env python3
"""
trafficsim/simulation.py
========================
The :class:`Simulation` aggregate: grid geometry, both traffic lights,
the car registry and the tick clock.

One :meth:`Simulation.tick` call does all the work of one frame::

    advance NS and EW lights
    if tick_index % spawn_interval == 0: attempt one spawn
    advance every active car
    diff the car steps into render events

The simulation has no natural end; the driver decides how many ticks
to run.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, Iterator, List, Optional, Tuple

from .events import LightSnapshot, Stats, TickResult, render_events
from .lights import TrafficLight
from .movement import MovementEngine
from .policy import SimulationPolicy
from .registry import CarRegistry, RandomSource
from .types import Axis, Direction

log = logging.getLogger("engine")


class Simulation:
    """Single-intersection traffic simulation.

    Parameters
    ----------
    policy : SimulationPolicy or None
        Tunable constants; uses defaults when *None*.  Validated on
        construction, raising :class:`~trafficsim.policy.ConfigurationError`.
    rng : RandomSource or None
        Direction picker for spawns.
    seed : int or None
        Seed for the default :class:`random.Random` when *rng* is *None*.
    """

    def __init__(
        self,
        policy: Optional[SimulationPolicy] = None,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.policy = (policy or SimulationPolicy()).validate()
        self.geometry = self.policy.geometry()
        self._rng = rng or random.Random(seed)
        self.engine = MovementEngine(self.geometry)
        self._init_state()

        green, yellow, red = (self.policy.green_duration,
                              self.policy.yellow_duration,
                              self.policy.red_duration)
        if red < green or red > green + yellow:
            # No interlock between axes: red < green gives both-GREEN
            # windows, red > green + yellow gives both-RED windows.
            log.warning(
                "light durations g=%d y=%d r=%d let NS and EW phases "
                "overlap; the axes are not interlocked",
                self.policy.green_duration,
                self.policy.yellow_duration,
                self.policy.red_duration,
            )
        log.info(
            "Simulation ready: grid %dx%d, box x=[%d,%d] y=[%d,%d], %d slots",
            self.geometry.width, self.geometry.height,
            self.geometry.left, self.geometry.right,
            self.geometry.top, self.geometry.bottom,
            self.policy.max_cars,
        )

    # ── initialisation / reset ────────────────────────────────────────────

    def _init_state(self) -> None:
        self.lights: Dict[Axis, TrafficLight] = {
            Axis.NS: TrafficLight.initial(Axis.NS, self.policy),
            Axis.EW: TrafficLight.initial(Axis.EW, self.policy),
        }
        self.registry = CarRegistry(self.policy.max_cars, self.geometry, self._rng)
        self.tick_index: int = 0

    def reset(self) -> None:
        """Rebuild lights, registry and clock from the same policy."""
        self._init_state()
        log.info("Simulation reset")

    # ── queries ───────────────────────────────────────────────────────────

    def stats(self) -> Stats:
        """Counters; ``tick_index`` is the number of completed ticks."""
        return Stats(
            total_spawned=self.registry.total_spawned,
            active_count=self.registry.active_count,
            tick_index=self.tick_index,
        )

    def light_snapshots(self) -> Tuple[LightSnapshot, LightSnapshot]:
        return (self.lights[Axis.NS].snapshot(), self.lights[Axis.EW].snapshot())

    def initial_frame(self) -> List[str]:
        """Background rows for the display's first paint."""
        return self.geometry.background()

    def total_ticks(self, duration_seconds: int) -> int:
        return self.policy.total_ticks(duration_seconds)

    # ── tick ──────────────────────────────────────────────────────────────

    def spawn(self, direction: Optional[Direction] = None) -> bool:
        return self.registry.spawn(direction)

    def tick(self) -> TickResult:
        """Run one frame and return its render events and status."""
        index = self.tick_index

        for light in self.lights.values():
            light.tick()

        spawned: Optional[bool] = None
        if index % self.policy.spawn_interval == 0:
            spawned = self.registry.spawn()

        steps = self.engine.advance_all(self.registry, self.lights)
        events = render_events(steps, self.geometry)
        self.tick_index += 1

        if index % self.policy.ticks_per_second == 0:
            log.debug(
                "tick %d: NS=%s(%d) EW=%s(%d) active=%d spawned=%d",
                index,
                self.lights[Axis.NS].state.value, self.lights[Axis.NS].timer,
                self.lights[Axis.EW].state.value, self.lights[Axis.EW].timer,
                self.registry.active_count, self.registry.total_spawned,
            )

        return TickResult(
            tick_index=index,
            events=tuple(events),
            lights=self.light_snapshots(),
            stats=self.stats(),
            spawned=spawned,
            steps=tuple(steps),
        )

    def run(self, total_ticks: int) -> Iterator[TickResult]:
        """Yield the results of *total_ticks* consecutive ticks."""
        for _ in range(max(0, int(total_ticks))):
            yield self.tick()
