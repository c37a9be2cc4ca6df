#!/usr/bin/env python3
"""
trafficsim/geometry.py
======================
Static intersection geometry derived from the grid configuration.

The grid uses screen coordinates: ``(0, 0)`` is the top-left cell and
``y`` grows downward, so a northbound car decreases ``y``.

The intersection box is bounded by four border lines::

    left   = cx - ns_lane_width // 2
    right  = cx + ns_lane_width // 2 - 1
    top    = cy - ew_lane_width // 2
    bottom = cy + ew_lane_width // 2 - 1

Each direction has one lane two cells inside the border on its side,
and a stop line exactly one cell outside the box on its approach side.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .types import ColorClass, Direction

STOP_LINE_DISTANCE = 1
"""Cells between the stop line and the intersection border."""

LANE_INSET = 2
"""Cells between a lane centre-line and the border it runs along."""

ENTRY_INSET = 2
"""Cells between a car's entry position and the grid edge it enters from."""

ENTRY_PUSHBACK = 3
"""Fallback distance outside the near border when the entry cell is unusable."""

Cell = Tuple[int, int]


@dataclass(frozen=True)
class Geometry:
    """Borders, lanes, stop lines and background glyphs of one grid.

    Parameters
    ----------
    width, height : int
        Grid size in cells.
    cx, cy : int
        Intersection centre cell.
    ns_lane_width, ew_lane_width : int
        Road widths of the North-South and East-West roads.
    """

    width: int
    height: int
    cx: int
    cy: int
    ns_lane_width: int = 6
    ew_lane_width: int = 4

    # ── borders ───────────────────────────────────────────────────────────

    @property
    def half_width_ns(self) -> int:
        return self.ns_lane_width // 2

    @property
    def half_width_ew(self) -> int:
        return self.ew_lane_width // 2

    @property
    def left(self) -> int:
        return self.cx - self.half_width_ns

    @property
    def right(self) -> int:
        return self.cx + self.half_width_ns - 1

    @property
    def top(self) -> int:
        return self.cy - self.half_width_ew

    @property
    def bottom(self) -> int:
        return self.cy + self.half_width_ew - 1

    # ── lanes ─────────────────────────────────────────────────────────────

    def lane(self, direction: Direction) -> int:
        """Lane centre-line: an x for N/S traffic, a y for E/W traffic."""
        lanes: Dict[Direction, int] = {
            Direction.NORTH: self.left + LANE_INSET,
            Direction.SOUTH: self.right - LANE_INSET,
            Direction.EAST:  self.bottom - LANE_INSET,
            Direction.WEST:  self.top + LANE_INSET,
        }
        return lanes[direction]

    def stop_line(self, direction: Direction) -> int:
        """Stop-line coordinate along the travel axis of *direction*."""
        lines: Dict[Direction, int] = {
            Direction.NORTH: self.bottom + STOP_LINE_DISTANCE,
            Direction.SOUTH: self.top - STOP_LINE_DISTANCE,
            Direction.EAST:  self.left - STOP_LINE_DISTANCE,
            Direction.WEST:  self.right + STOP_LINE_DISTANCE,
        }
        return lines[direction]

    # ── predicates ────────────────────────────────────────────────────────

    def is_in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_in_intersection(self, x: int, y: int) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def is_at_stop_line(self, x: int, y: int, direction: Direction) -> bool:
        """True when *(x, y)* is the stop-line cell row/column for *direction*."""
        along = y if direction in (Direction.NORTH, Direction.SOUTH) else x
        return along == self.stop_line(direction)

    def has_crossed(self, x: int, y: int, direction: Direction) -> bool:
        """True once *(x, y)* lies beyond the far border along *direction*."""
        crossed: Dict[Direction, bool] = {
            Direction.NORTH: y < self.top,
            Direction.SOUTH: y > self.bottom,
            Direction.EAST:  x > self.right,
            Direction.WEST:  x < self.left,
        }
        return crossed[direction]

    def is_upstream_of_stop_line(self, x: int, y: int, direction: Direction) -> bool:
        """True when the cell is strictly before the stop line on approach."""
        line = self.stop_line(direction)
        upstream: Dict[Direction, bool] = {
            Direction.NORTH: y > line,
            Direction.SOUTH: y < line,
            Direction.EAST:  x < line,
            Direction.WEST:  x > line,
        }
        return upstream[direction]

    def next_cell(self, x: int, y: int, direction: Direction) -> Cell:
        dx, dy = direction.delta
        return x + dx, y + dy

    def is_about_to_enter(self, x: int, y: int, direction: Direction) -> bool:
        """True when the car is outside the box and its next cell is inside."""
        nx, ny = self.next_cell(x, y, direction)
        return not self.is_in_intersection(x, y) and self.is_in_intersection(nx, ny)

    def is_on_border(self, x: int, y: int) -> bool:
        return x in (self.left, self.right) or y in (self.top, self.bottom)

    # ── spawn placement ───────────────────────────────────────────────────

    def entry_position(self, direction: Direction) -> Cell:
        """Canonical spawn cell for a car travelling in *direction*.

        The cell sits :data:`ENTRY_INSET` cells in from the grid edge on
        the car's lane.  When that lands inside the box or on the stop
        line it is pushed back to :data:`ENTRY_PUSHBACK` cells outside the
        near border.
        """
        entries: Dict[Direction, Cell] = {
            Direction.NORTH: (self.lane(Direction.NORTH), self.height - 1 - ENTRY_INSET),
            Direction.SOUTH: (self.lane(Direction.SOUTH), ENTRY_INSET),
            Direction.EAST:  (ENTRY_INSET, self.lane(Direction.EAST)),
            Direction.WEST:  (self.width - 1 - ENTRY_INSET, self.lane(Direction.WEST)),
        }
        x, y = entries[direction]
        if self.is_in_intersection(x, y) or self.is_at_stop_line(x, y, direction):
            pushed: Dict[Direction, Cell] = {
                Direction.NORTH: (x, self.bottom + ENTRY_PUSHBACK),
                Direction.SOUTH: (x, self.top - ENTRY_PUSHBACK),
                Direction.EAST:  (self.left - ENTRY_PUSHBACK, y),
                Direction.WEST:  (self.right + ENTRY_PUSHBACK, y),
            }
            x, y = pushed[direction]
        return x, y

    # ── display support ───────────────────────────────────────────────────

    def char_at_border(self, x: int, y: int) -> str:
        """Background glyph at *(x, y)* used to restore a vacated cell."""
        vertical = x in (self.left, self.right)
        horizontal = y in (self.top, self.bottom)
        if vertical and horizontal:
            return "+"
        if vertical:
            return "|"
        if horizontal:
            return "-"
        return " "

    def background(self) -> List[str]:
        """Full background as one string per row."""
        return [
            "".join(self.char_at_border(x, y) for x in range(self.width))
            for y in range(self.height)
        ]

    def zone_of(self, x: int, y: int, direction: Direction) -> ColorClass:
        """Colour class for a car drawn at *(x, y)* heading *direction*."""
        if self.is_at_stop_line(x, y, direction):
            return ColorClass.AT_STOP_LINE
        if self.is_in_intersection(x, y):
            return ColorClass.IN_INTERSECTION
        if self.has_crossed(x, y, direction):
            return ColorClass.CROSSED
        return ColorClass.APPROACHING

    # ── validation ────────────────────────────────────────────────────────

    def footprint_problems(self) -> List[str]:
        """Describe every way the grid fails to hold the intersection.

        Returns an empty list for a usable layout.
        """
        problems: List[str] = []
        if self.width <= 0 or self.height <= 0:
            return [f"grid size must be positive, got {self.width}x{self.height}"]
        if not self.is_in_bounds(self.cx, self.cy):
            problems.append(
                f"intersection centre ({self.cx}, {self.cy}) lies outside "
                f"the {self.width}x{self.height} grid"
            )
        if self.left - STOP_LINE_DISTANCE < 0 or self.right + STOP_LINE_DISTANCE >= self.width:
            problems.append(
                f"vertical borders x=[{self.left}, {self.right}] leave no room "
                f"for stop lines inside width {self.width}"
            )
        if self.top - STOP_LINE_DISTANCE < 0 or self.bottom + STOP_LINE_DISTANCE >= self.height:
            problems.append(
                f"horizontal borders y=[{self.top}, {self.bottom}] leave no room "
                f"for stop lines inside height {self.height}"
            )
        if problems:
            return problems
        for direction in Direction:
            x, y = self.entry_position(direction)
            if not self.is_in_bounds(x, y) or not self.is_upstream_of_stop_line(x, y, direction):
                problems.append(
                    f"no entry cell before the {direction.name.lower()}bound "
                    f"stop line (got ({x}, {y}))"
                )
        return problems
