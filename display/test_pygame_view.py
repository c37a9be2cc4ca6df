#!/usr/bin/env python3
"""
Pygame view tests that do not open a window.
"""

from __future__ import annotations

import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from display.pygame_view import PygameGridView
from trafficsim.policy import SimulationPolicy
from trafficsim.simulation import Simulation


class PygameGridViewTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sim = Simulation(SimulationPolicy(ticks_per_second=20), seed=2)
        self.view = PygameGridView(self.sim, total_ticks=40)

    def test_window_size_follows_grid(self) -> None:
        self.assertEqual(self.view.width, 80 * self.view.CELL_W)
        self.assertEqual(self.view.height, 24 * self.view.CELL_H + self.view.HUD_HEIGHT)
        self.assertEqual(self.view.fps, 20)

    def test_step_until_finished(self) -> None:
        while not self.view.finished:
            self.view.step()
        self.assertEqual(self.sim.tick_index, 40)
        self.assertEqual(self.view.last_result.tick_index, 39)
        expected = sorted((car.x, car.y, car.symbol) for car in self.sim.registry.active_cars())
        self.assertEqual(sorted(self.view.canvas.cars()), expected)

    def test_restart_clears_run(self) -> None:
        for _ in range(12):
            self.view.step()
        self.view.paused = True
        self.view.restart()
        self.assertFalse(self.view.paused)
        self.assertIsNone(self.view.last_result)
        self.assertEqual(self.sim.tick_index, 0)
        self.assertEqual(self.view.canvas.cars(), [])


if __name__ == "__main__":
    unittest.main()
