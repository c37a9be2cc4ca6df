#!/usr/bin/env python3
"""
Geometry tests: borders, lanes, stop lines, spawn cells and glyphs.
"""

from __future__ import annotations

import unittest

from trafficsim.geometry import Geometry
from trafficsim.types import ColorClass, Direction


def _default() -> Geometry:
    return Geometry(width=80, height=24, cx=40, cy=12, ns_lane_width=6, ew_lane_width=4)


class GeometryLayoutTests(unittest.TestCase):
    def test_borders_for_default_grid(self) -> None:
        geo = _default()
        self.assertEqual((geo.left, geo.right, geo.top, geo.bottom), (37, 42, 10, 13))

    def test_lanes_sit_between_borders(self) -> None:
        geo = _default()
        self.assertEqual(geo.lane(Direction.NORTH), 39)
        self.assertEqual(geo.lane(Direction.SOUTH), 40)
        self.assertEqual(geo.lane(Direction.EAST), 11)
        self.assertEqual(geo.lane(Direction.WEST), 12)
        for direction in (Direction.NORTH, Direction.SOUTH):
            self.assertTrue(geo.left < geo.lane(direction) < geo.right)
        for direction in (Direction.EAST, Direction.WEST):
            self.assertTrue(geo.top < geo.lane(direction) < geo.bottom)

    def test_stop_lines_are_one_cell_outside_the_box(self) -> None:
        geo = _default()
        self.assertEqual(geo.stop_line(Direction.NORTH), 14)
        self.assertEqual(geo.stop_line(Direction.SOUTH), 9)
        self.assertEqual(geo.stop_line(Direction.EAST), 36)
        self.assertEqual(geo.stop_line(Direction.WEST), 43)

    def test_entry_positions(self) -> None:
        geo = _default()
        self.assertEqual(geo.entry_position(Direction.NORTH), (39, 21))
        self.assertEqual(geo.entry_position(Direction.SOUTH), (40, 2))
        self.assertEqual(geo.entry_position(Direction.EAST), (2, 11))
        self.assertEqual(geo.entry_position(Direction.WEST), (77, 12))
        for direction in Direction:
            x, y = geo.entry_position(direction)
            self.assertTrue(geo.is_upstream_of_stop_line(x, y, direction))
            self.assertFalse(geo.is_on_border(x, y))

    def test_entry_pushed_back_when_it_lands_on_stop_line(self) -> None:
        geo = Geometry(width=20, height=10, cx=10, cy=5)
        self.assertEqual(geo.entry_position(Direction.NORTH), (9, 9))
        self.assertEqual(geo.entry_position(Direction.SOUTH), (10, 0))
        self.assertEqual(geo.footprint_problems(), [])


class GeometryPredicateTests(unittest.TestCase):
    def test_intersection_box_is_inclusive(self) -> None:
        geo = _default()
        self.assertTrue(geo.is_in_intersection(37, 10))
        self.assertTrue(geo.is_in_intersection(42, 13))
        self.assertFalse(geo.is_in_intersection(36, 11))
        self.assertFalse(geo.is_in_intersection(39, 14))

    def test_has_crossed_depends_on_direction(self) -> None:
        geo = _default()
        self.assertTrue(geo.has_crossed(39, 9, Direction.NORTH))
        self.assertFalse(geo.has_crossed(39, 10, Direction.NORTH))
        self.assertTrue(geo.has_crossed(40, 14, Direction.SOUTH))
        self.assertTrue(geo.has_crossed(43, 11, Direction.EAST))
        self.assertTrue(geo.has_crossed(36, 12, Direction.WEST))
        self.assertFalse(geo.has_crossed(36, 11, Direction.EAST))

    def test_about_to_enter_only_from_outside(self) -> None:
        geo = _default()
        self.assertTrue(geo.is_about_to_enter(39, 14, Direction.NORTH))
        self.assertFalse(geo.is_about_to_enter(39, 13, Direction.NORTH))
        self.assertFalse(geo.is_about_to_enter(39, 15, Direction.NORTH))

    def test_zone_colours(self) -> None:
        geo = _default()
        self.assertIs(geo.zone_of(39, 18, Direction.NORTH), ColorClass.APPROACHING)
        self.assertIs(geo.zone_of(39, 14, Direction.NORTH), ColorClass.AT_STOP_LINE)
        self.assertIs(geo.zone_of(39, 12, Direction.NORTH), ColorClass.IN_INTERSECTION)
        self.assertIs(geo.zone_of(39, 5, Direction.NORTH), ColorClass.CROSSED)
        self.assertIs(geo.zone_of(36, 11, Direction.EAST), ColorClass.AT_STOP_LINE)
        self.assertIs(geo.zone_of(50, 11, Direction.EAST), ColorClass.CROSSED)


class GeometryBackgroundTests(unittest.TestCase):
    def test_border_glyphs(self) -> None:
        geo = _default()
        self.assertEqual(geo.char_at_border(37, 10), "+")
        self.assertEqual(geo.char_at_border(42, 0), "|")
        self.assertEqual(geo.char_at_border(0, 13), "-")
        self.assertEqual(geo.char_at_border(39, 20), " ")

    def test_background_matches_border_glyphs(self) -> None:
        geo = _default()
        rows = geo.background()
        self.assertEqual(len(rows), 24)
        self.assertTrue(all(len(row) == 80 for row in rows))
        for y, row in enumerate(rows):
            for x, glyph in enumerate(row):
                self.assertEqual(glyph, geo.char_at_border(x, y))


class GeometryFootprintTests(unittest.TestCase):
    def test_default_grid_has_no_problems(self) -> None:
        self.assertEqual(_default().footprint_problems(), [])

    def test_centre_outside_grid(self) -> None:
        problems = Geometry(width=10, height=24, cx=40, cy=12).footprint_problems()
        self.assertTrue(any("centre" in p for p in problems))

    def test_unreachable_entry_is_reported(self) -> None:
        problems = Geometry(width=10, height=10, cx=5, cy=5).footprint_problems()
        self.assertTrue(any("eastbound" in p for p in problems), problems)


if __name__ == "__main__":
    unittest.main()
