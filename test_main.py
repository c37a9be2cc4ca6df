#!/usr/bin/env python3
"""
Driver tests: environment overrides and the range-checked prompt.
"""

from __future__ import annotations

import io
import logging
import unittest
from unittest import mock

from rich.console import Console

import main
from trafficsim import ConfigurationError


class EnvironmentOverrideTests(unittest.TestCase):
    def test_defaults_without_overrides(self) -> None:
        policy = main.policy_from_env({})
        self.assertEqual((policy.grid_width, policy.grid_height), (80, 24))
        self.assertEqual((policy.intersection_x, policy.intersection_y), (40, 12))
        self.assertEqual(policy.spawn_interval, 30)
        self.assertIsNone(main.seed_from_env({}))
        self.assertEqual(main.display_from_env({}), "terminal")
        self.assertEqual(main.log_level_from_env({}), logging.INFO)

    def test_integer_overrides(self) -> None:
        env = {
            "TRAFFIC_GRID_WIDTH": "100",
            "TRAFFIC_GRID_HEIGHT": "30",
            "TRAFFIC_GREEN": "40",
            "TRAFFIC_RED": "40",
            "TRAFFIC_SEED": "12",
        }
        policy = main.policy_from_env(env)
        self.assertEqual((policy.intersection_x, policy.intersection_y), (50, 15))
        self.assertEqual((policy.green_duration, policy.red_duration), (40, 40))
        self.assertEqual(main.seed_from_env(env), 12)

    def test_non_integer_override_names_variable(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            main.policy_from_env({"TRAFFIC_MAX_CARS": "lots"})
        self.assertIn("TRAFFIC_MAX_CARS", str(ctx.exception))

    def test_invalid_policy_from_env_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            main.policy_from_env({"TRAFFIC_YELLOW": "0"})

    def test_unknown_display_rejected(self) -> None:
        self.assertEqual(main.display_from_env({"TRAFFIC_DISPLAY": " PyGame "}), "pygame")
        with self.assertRaises(ConfigurationError):
            main.display_from_env({"TRAFFIC_DISPLAY": "curses"})

    def test_log_level_names(self) -> None:
        self.assertEqual(main.log_level_from_env({"TRAFFIC_LOG_LEVEL": "debug"}), logging.DEBUG)
        with self.assertRaises(ConfigurationError):
            main.log_level_from_env({"TRAFFIC_LOG_LEVEL": "chatty"})


class PromptTests(unittest.TestCase):
    def test_out_of_range_answer_is_asked_again(self) -> None:
        console = Console(file=io.StringIO(), width=100, color_system=None)
        with mock.patch.object(main.IntPrompt, "ask", side_effect=[0, 400, 45]) as ask:
            value = main.ask_int(console, "Duration", 1, 300)
        self.assertEqual(value, 45)
        self.assertEqual(ask.call_count, 3)
        self.assertIn("between 1 and 300", console.file.getvalue())


class RunOnceTests(unittest.TestCase):
    def test_terminal_run_reports_summary(self) -> None:
        console = Console(file=io.StringIO(), width=120, color_system=None)
        policy = main.policy_from_env({"TRAFFIC_TICK_RATE": "1000"})
        with mock.patch.object(main.time, "sleep"):
            stats = main.run_once(1, policy, 3, "terminal", console)
        self.assertEqual(stats.tick_index, 1000)
        self.assertGreater(stats.total_spawned, 0)
        self.assertIn("SIMULATION COMPLETE", console.file.getvalue())


if __name__ == "__main__":
    unittest.main()
