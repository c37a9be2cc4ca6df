"""
trafficsim/types.py
===================
Enumerations shared across the simulation core.

Every site that branches on one of these (light transition, movement
delta, spawn placement, zone colour) goes through a lookup table keyed
by the enum, so a missing member fails loudly at import or lookup time.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class Axis(Enum):
    """Traffic-flow axis governed by one light."""
    NS = "NS"
    EW = "EW"


class Direction(Enum):
    """Direction of travel.  Screen coordinates: north is decreasing y."""
    NORTH = "N"
    SOUTH = "S"
    EAST = "E"
    WEST = "W"

    @property
    def delta(self) -> Tuple[int, int]:
        """Unit step ``(dx, dy)`` for one tick of movement."""
        return _DELTAS[self]

    @property
    def axis(self) -> Axis:
        """Axis whose light controls this direction."""
        return _AXES[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def symbol(self) -> str:
        """Glyph drawn for a car travelling in this direction."""
        return _SYMBOLS[self]


class LightState(Enum):
    """Traffic-light phase."""
    RED = "RED"
    YELLOW = "YELLOW"
    GREEN = "GREEN"


class ColorClass(Enum):
    """Colour bucket a display assigns to one drawn cell."""
    BACKGROUND = "background"
    APPROACHING = "approaching"
    AT_STOP_LINE = "at_stop_line"
    IN_INTERSECTION = "in_intersection"
    CROSSED = "crossed"


class StepOutcome(Enum):
    """What happened to one car during a movement pass."""
    MOVED = "moved"
    BLOCKED = "blocked"
    RETIRED = "retired"


_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.EAST:  (1, 0),
    Direction.WEST:  (-1, 0),
}

_AXES: Dict[Direction, Axis] = {
    Direction.NORTH: Axis.NS,
    Direction.SOUTH: Axis.NS,
    Direction.EAST:  Axis.EW,
    Direction.WEST:  Axis.EW,
}

_OPPOSITES: Dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST:  Direction.WEST,
    Direction.WEST:  Direction.EAST,
}

_SYMBOLS: Dict[Direction, str] = {
    Direction.NORTH: "^",
    Direction.SOUTH: "v",
    Direction.EAST:  ">",
    Direction.WEST:  "<",
}

# Spawn order used when a random direction is drawn.
DIRECTIONS: Tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.SOUTH,
    Direction.EAST,
    Direction.WEST,
)

# Light cycle: each state maps to the one that follows it.
NEXT_LIGHT_STATE: Dict[LightState, LightState] = {
    LightState.GREEN:  LightState.YELLOW,
    LightState.YELLOW: LightState.RED,
    LightState.RED:    LightState.GREEN,
}
