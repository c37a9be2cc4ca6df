#!/usr/bin/env python3
"""
trafficsim/movement.py
======================
Per-tick advance of every active car.

One pass over the registry in slot order.  Each car either leaves the
grid (retired), stays put (blocked by its light or by another car), or
moves one cell.  The pass records a :class:`CarStep` per car and never
touches a display; :func:`trafficsim.events.render_events` turns the
steps into draw / erase events afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .geometry import Geometry
from .lights import TrafficLight
from .registry import Car, CarRegistry
from .types import Axis, Direction, StepOutcome

log = logging.getLogger("engine")


@dataclass(frozen=True)
class CarStep:
    """What one car did during a movement pass."""

    car_id: int
    direction: Direction
    before: Tuple[int, int]
    after: Tuple[int, int]
    outcome: StepOutcome
    has_crossed: bool = False

    @property
    def symbol(self) -> str:
        return self.direction.symbol


class MovementEngine:
    """Moves cars under light and occupancy rules.

    Parameters
    ----------
    geometry : Geometry
        Grid layout (bounds, box, stop lines).
    """

    def __init__(self, geometry: Geometry) -> None:
        self.geometry = geometry

    def can_move(self, car: Car, lights: Dict[Axis, TrafficLight]) -> bool:
        """Light gate for *car* this tick.

        Crossed cars and cars already inside the box always continue.
        Cars short of the stop line move freely.  A car on its stop line
        waits only while its axis shows RED.
        """
        geo = self.geometry
        if car.has_crossed_intersection:
            return True
        if geo.is_in_intersection(car.x, car.y):
            return True
        if not geo.is_at_stop_line(car.x, car.y, car.direction):
            return True
        return lights[car.direction.axis].permits_entry

    def advance_all(
        self,
        registry: CarRegistry,
        lights: Dict[Axis, TrafficLight],
    ) -> List[CarStep]:
        """Advance every active car once; return one step per car."""
        geo = self.geometry
        steps: List[CarStep] = []

        for car in registry:
            if not car.active:
                continue
            before = car.position
            nx, ny = geo.next_cell(car.x, car.y, car.direction)

            if not geo.is_in_bounds(nx, ny):
                registry.retire(car.id)
                steps.append(CarStep(
                    car_id=car.id, direction=car.direction,
                    before=before, after=before,
                    outcome=StepOutcome.RETIRED,
                    has_crossed=car.has_crossed_intersection,
                ))
                continue

            if not self.can_move(car, lights) or registry.is_occupied(nx, ny, car.id):
                steps.append(CarStep(
                    car_id=car.id, direction=car.direction,
                    before=before, after=before,
                    outcome=StepOutcome.BLOCKED,
                    has_crossed=car.has_crossed_intersection,
                ))
                continue

            if geo.is_about_to_enter(car.x, car.y, car.direction):
                log.debug("car %d %s entering intersection at (%d,%d) on %s",
                          car.id, car.direction.name, nx, ny,
                          lights[car.direction.axis].state.value)
            car.x = nx
            car.y = ny
            if not car.has_crossed_intersection and geo.has_crossed(nx, ny, car.direction):
                car.has_crossed_intersection = True
            steps.append(CarStep(
                car_id=car.id, direction=car.direction,
                before=before, after=(nx, ny),
                outcome=StepOutcome.MOVED,
                has_crossed=car.has_crossed_intersection,
            ))

        return steps
