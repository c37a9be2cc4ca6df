#!/usr/bin/env python3
"""
Movement engine tests: stop-line gating, occupancy, retirement and the
render diff of each step.
"""

from __future__ import annotations

import random
import unittest
from typing import Dict

from trafficsim.events import render_events
from trafficsim.geometry import Geometry
from trafficsim.lights import TrafficLight
from trafficsim.movement import MovementEngine
from trafficsim.registry import CarRegistry
from trafficsim.types import Axis, ColorClass, Direction, LightState, StepOutcome


def _lights(ns: LightState, ew: LightState, timer: int = 20) -> Dict[Axis, TrafficLight]:
    return {
        Axis.NS: TrafficLight(Axis.NS, ns, timer),
        Axis.EW: TrafficLight(Axis.EW, ew, timer),
    }


class MovementTestBase(unittest.TestCase):
    def setUp(self) -> None:
        self.geo = Geometry(width=80, height=24, cx=40, cy=12)
        self.registry = CarRegistry(10, self.geo, random.Random(0))
        self.engine = MovementEngine(self.geo)


class CanMoveTests(MovementTestBase):
    def test_red_holds_car_on_stop_line(self) -> None:
        car = self.registry.place(0, 39, 14, Direction.NORTH)
        self.assertFalse(self.engine.can_move(car, _lights(LightState.RED, LightState.GREEN)))

    def test_yellow_and_green_release_car_on_stop_line(self) -> None:
        car = self.registry.place(0, 36, 11, Direction.EAST)
        for state in (LightState.YELLOW, LightState.GREEN):
            self.assertTrue(self.engine.can_move(car, _lights(LightState.RED, state)))

    def test_red_does_not_hold_car_before_stop_line(self) -> None:
        car = self.registry.place(0, 39, 17, Direction.NORTH)
        self.assertTrue(self.engine.can_move(car, _lights(LightState.RED, LightState.RED)))

    def test_car_inside_box_always_continues(self) -> None:
        car = self.registry.place(0, 39, 12, Direction.NORTH)
        self.assertTrue(self.engine.can_move(car, _lights(LightState.RED, LightState.RED)))

    def test_crossed_car_is_never_gated(self) -> None:
        car = self.registry.place(0, 39, 14, Direction.NORTH, has_crossed=True)
        self.assertTrue(self.engine.can_move(car, _lights(LightState.RED, LightState.RED)))


class AdvanceAllTests(MovementTestBase):
    def test_moves_one_cell_and_reports_step(self) -> None:
        self.registry.place(0, 10, 11, Direction.EAST)
        steps = self.engine.advance_all(self.registry, _lights(LightState.GREEN, LightState.RED))
        self.assertEqual(len(steps), 1)
        self.assertIs(steps[0].outcome, StepOutcome.MOVED)
        self.assertEqual((steps[0].before, steps[0].after), ((10, 11), (11, 11)))
        self.assertEqual(self.registry.car(0).position, (11, 11))

    def test_car_at_stop_line_with_red_stays(self) -> None:
        self.registry.place(0, 43, 12, Direction.WEST)
        steps = self.engine.advance_all(self.registry, _lights(LightState.GREEN, LightState.RED))
        self.assertIs(steps[0].outcome, StepOutcome.BLOCKED)
        self.assertEqual(self.registry.car(0).position, (43, 12))

    def test_car_in_box_clears_while_next_car_waits_on_red(self) -> None:
        self.registry.place(0, 42, 12, Direction.WEST)
        self.registry.place(1, 43, 12, Direction.WEST)
        steps = self.engine.advance_all(self.registry, _lights(LightState.GREEN, LightState.RED))
        by_id = {step.car_id: step.outcome for step in steps}
        self.assertIs(by_id[1], StepOutcome.BLOCKED)
        self.assertIs(by_id[0], StepOutcome.MOVED)

    def test_follower_in_lower_slot_is_blocked_by_leader(self) -> None:
        self.registry.place(0, 20, 11, Direction.EAST)
        self.registry.place(1, 21, 11, Direction.EAST)
        steps = self.engine.advance_all(self.registry, _lights(LightState.RED, LightState.GREEN))
        by_id = {step.car_id: step.outcome for step in steps}
        self.assertIs(by_id[0], StepOutcome.BLOCKED)
        self.assertIs(by_id[1], StepOutcome.MOVED)

    def test_leaving_grid_retires_car(self) -> None:
        self.registry.place(0, 0, 12, Direction.WEST, has_crossed=True)
        steps = self.engine.advance_all(self.registry, _lights(LightState.GREEN, LightState.RED))
        self.assertIs(steps[0].outcome, StepOutcome.RETIRED)
        self.assertFalse(self.registry.car(0).active)
        self.assertEqual(self.registry.active_count, 0)

    def test_retired_slot_is_reused_with_fresh_state(self) -> None:
        self.registry.place(0, 0, 12, Direction.WEST, has_crossed=True)
        self.registry.place(1, 10, 11, Direction.EAST)
        self.engine.advance_all(self.registry, _lights(LightState.GREEN, LightState.RED))
        self.assertTrue(self.registry.spawn(Direction.SOUTH))
        car = self.registry.car(0)
        self.assertTrue(car.active)
        self.assertIs(car.direction, Direction.SOUTH)
        self.assertEqual(car.position, self.geo.entry_position(Direction.SOUTH))
        self.assertFalse(car.has_crossed_intersection)

    def test_crossed_flag_set_past_far_border(self) -> None:
        self.registry.place(0, 39, 10, Direction.NORTH)
        steps = self.engine.advance_all(self.registry, _lights(LightState.GREEN, LightState.RED))
        self.assertTrue(self.registry.car(0).has_crossed_intersection)
        self.assertTrue(steps[0].has_crossed)

    def test_at_most_one_car_per_cell(self) -> None:
        lights = _lights(LightState.YELLOW, LightState.GREEN)
        rng = random.Random(5)
        for direction in (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST):
            self.registry.spawn(direction)
        for _ in range(120):
            if self.registry.free_slot() is not None:
                self.registry.spawn(rng.choice(list(Direction)))
            self.engine.advance_all(self.registry, lights)
            cells = [car.position for car in self.registry.active_cars()]
            self.assertEqual(len(cells), len(set(cells)))


class NorthboundHoldScenarioTests(MovementTestBase):
    def test_held_under_red_then_one_cell_per_tick(self) -> None:
        lights = _lights(LightState.GREEN, LightState.GREEN)
        lights[Axis.NS] = TrafficLight(Axis.NS, LightState.RED, timer=5)
        self.registry.place(0, 39, 14, Direction.NORTH)

        positions = []
        for _ in range(8):
            for light in lights.values():
                light.tick()
            self.engine.advance_all(self.registry, lights)
            positions.append(self.registry.car(0).position)

        # RED for the first four ticks, GREEN from the fifth onwards
        self.assertEqual(positions[:4], [(39, 14)] * 4)
        self.assertEqual(positions[4:], [(39, 13), (39, 12), (39, 11), (39, 10)])


class RenderEventTests(MovementTestBase):
    def test_move_erases_then_draws(self) -> None:
        self.registry.place(0, 39, 14, Direction.NORTH)
        steps = self.engine.advance_all(self.registry, _lights(LightState.GREEN, LightState.RED))
        events = render_events(steps, self.geo)
        self.assertEqual(len(events), 2)
        erase, draw = events
        self.assertEqual((erase.x, erase.y, erase.glyph), (39, 14, " "))
        self.assertTrue(erase.is_erase)
        self.assertEqual((draw.x, draw.y, draw.glyph), (39, 13, "^"))
        self.assertIs(draw.color_class, ColorClass.IN_INTERSECTION)

    def test_vacated_border_cell_is_restored(self) -> None:
        self.registry.place(0, 37, 11, Direction.EAST)
        self.registry.place(1, 39, 10, Direction.NORTH)
        steps = self.engine.advance_all(self.registry, _lights(LightState.GREEN, LightState.GREEN))
        erased = {(e.x, e.y): e.glyph for e in render_events(steps, self.geo) if e.is_erase}
        self.assertEqual(erased[(37, 11)], "|")
        self.assertEqual(erased[(39, 10)], "-")

    def test_blocked_car_is_redrawn_in_place(self) -> None:
        self.registry.place(0, 39, 14, Direction.NORTH)
        steps = self.engine.advance_all(self.registry, _lights(LightState.RED, LightState.GREEN))
        events = render_events(steps, self.geo)
        self.assertEqual(len(events), 1)
        self.assertEqual((events[0].x, events[0].y), (39, 14))
        self.assertIs(events[0].color_class, ColorClass.AT_STOP_LINE)

    def test_retired_car_is_erased(self) -> None:
        self.registry.place(0, 79, 11, Direction.EAST, has_crossed=True)
        steps = self.engine.advance_all(self.registry, _lights(LightState.RED, LightState.GREEN))
        events = render_events(steps, self.geo)
        self.assertEqual(len(events), 1)
        self.assertEqual((events[0].x, events[0].y, events[0].glyph), (79, 11, " "))


if __name__ == "__main__":
    unittest.main()
