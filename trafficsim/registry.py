#!/usr/bin/env python3
"""
trafficsim/registry.py
======================
Fixed-capacity pool of car slots.

A car's identity is its slot index.  Slots are never freed: a retired
car is only marked inactive, and the next spawn reuses the lowest
inactive slot (first-fit).
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Protocol, Sequence, Set, Tuple

from .geometry import Geometry
from .types import DIRECTIONS, Direction

log = logging.getLogger("registry")


class RandomSource(Protocol):
    """Anything that can pick one element of a sequence."""

    def choice(self, seq: Sequence[Direction]) -> Direction: ...


@dataclass
class Car:
    """One car slot.

    Attributes
    ----------
    id : int
        Slot index; stable for the registry's lifetime.
    x, y : int
        Cell coordinates.
    direction : Direction
        Direction of travel.
    active : bool
        False while the slot is free.
    has_crossed_intersection : bool
        True once the car has passed the far border of the box.
    """

    id: int
    x: int = 0
    y: int = 0
    direction: Direction = Direction.NORTH
    active: bool = False
    has_crossed_intersection: bool = field(default=False)

    @property
    def symbol(self) -> str:
        return self.direction.symbol

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def as_dict(self) -> dict:
        """Serialisable mapping of ``id``, ``x``, ``y``, ``direction`` and flags."""
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "direction": self.direction.value,
            "active": self.active,
            "has_crossed_intersection": self.has_crossed_intersection,
        }


def _ahead_along(mover: Car, other: Car) -> bool:
    """True when *other* is in front of *mover* along mover's direction."""
    dx, dy = mover.direction.delta
    return (other.x - mover.x) * dx + (other.y - mover.y) * dy > 0


def _reaches(mover: Car, x: int, y: int, other: Car) -> bool:
    """True when cell *(x, y)* is at or beyond *other* along mover's direction."""
    dx, dy = mover.direction.delta
    return (x - other.x) * dx + (y - other.y) * dy >= 0


def same_lane_opposite(first: Car, second: Car) -> bool:
    """True when the cars travel opposite ways along the same lane.

    Only N/S pairs sharing an ``x`` and E/W pairs sharing a ``y`` match.
    """
    if second.direction is not first.direction.opposite:
        return False
    if first.direction in (Direction.NORTH, Direction.SOUTH):
        return first.x == second.x
    return first.y == second.y


class CarRegistry:
    """Arena of :class:`Car` slots plus spawn counters.

    Parameters
    ----------
    capacity : int
        Number of slots.
    geometry : Geometry
        Grid layout used to place spawned cars.
    rng : RandomSource or None
        Picks a direction when :meth:`spawn` gets none; a fresh
        :class:`random.Random` when *None*.
    """

    def __init__(
        self,
        capacity: int,
        geometry: Geometry,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.capacity = int(capacity)
        self.geometry = geometry
        self._rng = rng or random.Random()
        self._slots: List[Car] = [Car(id=i) for i in range(self.capacity)]
        self.total_spawned: int = 0
        self.active_count: int = 0

    # ── queries ───────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return self.capacity

    def __iter__(self) -> Iterator[Car]:
        return iter(self._slots)

    def car(self, car_id: int) -> Car:
        """Slot *car_id*; raises :class:`IndexError` when out of range."""
        if not 0 <= car_id < self.capacity:
            raise IndexError(f"car id {car_id} outside registry of {self.capacity} slots")
        return self._slots[car_id]

    def active_cars(self) -> List[Car]:
        return [car for car in self._slots if car.active]

    def occupied_cells(self) -> Set[Tuple[int, int]]:
        return {car.position for car in self._slots if car.active}

    def free_slot(self) -> Optional[int]:
        """Lowest inactive slot index, or *None* when the pool is full."""
        for car in self._slots:
            if not car.active:
                return car.id
        return None

    # ── occupancy ─────────────────────────────────────────────────────────

    def is_occupied(self, x: int, y: int, excluding_id: Optional[int] = None) -> bool:
        """True when cell *(x, y)* is taken for car *excluding_id*.

        A cell is taken when another active car stands on it, or when an
        oncoming car in the same lane is already at or before the cell
        from the mover's point of view.
        """
        mover: Optional[Car] = None
        if excluding_id is not None:
            candidate = self.car(excluding_id)
            if candidate.active:
                mover = candidate
        return self._blocked(x, y, mover, excluding_id)

    def _blocked(
        self,
        x: int,
        y: int,
        mover: Optional[Car],
        excluding_id: Optional[int],
    ) -> bool:
        for other in self._slots:
            if not other.active or other.id == excluding_id:
                continue
            if other.x == x and other.y == y:
                return True
            if (
                mover is not None
                and same_lane_opposite(mover, other)
                and _ahead_along(mover, other)
                and _reaches(mover, x, y, other)
            ):
                return True
        return False

    # ── lifecycle ─────────────────────────────────────────────────────────

    def spawn(self, direction: Optional[Direction] = None) -> bool:
        """Activate one car at its direction's entry cell.

        Returns False, changing nothing, when the pool is full or the
        entry cell is occupied.
        """
        if self.active_count >= self.capacity:
            log.debug("spawn skipped: all %d slots active", self.capacity)
            return False
        slot = self.free_slot()
        if slot is None:
            log.debug("spawn skipped: no inactive slot")
            return False

        if direction is None:
            direction = self._rng.choice(DIRECTIONS)
        x, y = self.geometry.entry_position(direction)
        candidate = Car(id=slot, x=x, y=y, direction=direction, active=True)
        if self._blocked(x, y, candidate, slot):
            log.debug("spawn rejected: %s entry (%d,%d) occupied", direction.name, x, y)
            return False

        car = self._slots[slot]
        car.x = x
        car.y = y
        car.direction = direction
        car.has_crossed_intersection = False
        car.active = True
        self.total_spawned += 1
        self.active_count += 1
        log.debug("spawned car %d %s at (%d,%d)", slot, direction.name, x, y)
        return True

    def place(self, car_id: int, x: int, y: int, direction: Direction,
              has_crossed: bool = False) -> Car:
        """Activate slot *car_id* at an explicit cell.

        Used to set up scenarios; counts as a spawn.  No occupancy check.
        """
        car = self.car(car_id)
        if not car.active:
            self.active_count += 1
            self.total_spawned += 1
        car.x = x
        car.y = y
        car.direction = direction
        car.has_crossed_intersection = has_crossed
        car.active = True
        return car

    def retire(self, car_id: int) -> None:
        """Mark slot *car_id* inactive.  Retiring a free slot is a no-op."""
        car = self.car(car_id)
        if not car.active:
            return
        car.active = False
        self.active_count -= 1
        log.debug("retired car %d at (%d,%d)", car_id, car.x, car.y)
