#!/usr/bin/env python3
"""
main.py
=======
Interactive driver for the intersection simulation.

Shows the menu, asks for a run length, builds a fresh
:class:`~trafficsim.simulation.Simulation` per run and paces its ticks
through the chosen display back-end (``TRAFFIC_DISPLAY``: ``terminal``
or ``pygame``).

Environment overrides
---------------------
``TRAFFIC_GRID_WIDTH``, ``TRAFFIC_GRID_HEIGHT``, ``TRAFFIC_MAX_CARS``,
``TRAFFIC_SPAWN_INTERVAL``, ``TRAFFIC_TICK_RATE``, ``TRAFFIC_GREEN``,
``TRAFFIC_YELLOW``, ``TRAFFIC_RED``, ``TRAFFIC_SEED`` (integers),
``TRAFFIC_DISPLAY`` and ``TRAFFIC_LOG_LEVEL`` (names).

Usage::

    python main.py
"""

from __future__ import annotations

import logging
import os
import sys
import time
from typing import Mapping, Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import IntPrompt

import config
from logging_setup import setup_logging
from trafficsim import ConfigurationError, Simulation, SimulationPolicy, Stats
from display import TerminalDisplay, configuration_panel, run_pygame_view, summary_panel

log = logging.getLogger("main")

MENU_CUSTOM = 1
MENU_STANDARD = 2
MENU_EXIT = 3


# ---------------------------------------------------------------------- #
#  Environment                                                             #
# ---------------------------------------------------------------------- #
def _env_int(name: str, default: Optional[int], environ: Mapping[str, str]) -> Optional[int]:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def policy_from_env(environ: Optional[Mapping[str, str]] = None) -> SimulationPolicy:
    """Build a :class:`SimulationPolicy` from defaults plus ``TRAFFIC_*`` overrides."""
    env = os.environ if environ is None else environ
    width = _env_int("TRAFFIC_GRID_WIDTH", config.DEFAULT_GRID_WIDTH, env)
    height = _env_int("TRAFFIC_GRID_HEIGHT", config.DEFAULT_GRID_HEIGHT, env)
    return SimulationPolicy(
        grid_width=width,
        grid_height=height,
        # the intersection stays centred on a resized grid
        intersection_x=width // 2,
        intersection_y=height // 2,
        ns_lane_width=config.DEFAULT_NS_LANE_WIDTH,
        ew_lane_width=config.DEFAULT_EW_LANE_WIDTH,
        green_duration=_env_int("TRAFFIC_GREEN", config.DEFAULT_GREEN_DURATION, env),
        yellow_duration=_env_int("TRAFFIC_YELLOW", config.DEFAULT_YELLOW_DURATION, env),
        red_duration=_env_int("TRAFFIC_RED", config.DEFAULT_RED_DURATION, env),
        max_cars=_env_int("TRAFFIC_MAX_CARS", config.DEFAULT_MAX_CARS, env),
        spawn_interval=_env_int("TRAFFIC_SPAWN_INTERVAL", config.DEFAULT_SPAWN_INTERVAL, env),
        ticks_per_second=_env_int("TRAFFIC_TICK_RATE", config.DEFAULT_TICK_RATE_HZ, env),
    ).validate()


def seed_from_env(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    env = os.environ if environ is None else environ
    return _env_int("TRAFFIC_SEED", None, env)


def display_from_env(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    name = env.get("TRAFFIC_DISPLAY", config.DEFAULT_DISPLAY).strip().lower()
    if name not in config.DISPLAY_CHOICES:
        raise ConfigurationError(
            f"TRAFFIC_DISPLAY must be one of {', '.join(config.DISPLAY_CHOICES)}, got {name!r}"
        )
    return name


def log_level_from_env(environ: Optional[Mapping[str, str]] = None) -> int:
    env = os.environ if environ is None else environ
    name = env.get("TRAFFIC_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigurationError(f"TRAFFIC_LOG_LEVEL is not a logging level: {name!r}")
    return level


# ---------------------------------------------------------------------- #
#  Prompts                                                                 #
# ---------------------------------------------------------------------- #
def show_menu(console: Console) -> None:
    body = (
        "  1. Start Custom Simulation\n"
        f"  2. Start Standard Simulation ({config.STANDARD_DURATION} seconds)\n"
        "  3. Exit Program"
    )
    console.print(Panel(body, title="TRAFFIC INTERSECTION SIMULATION SYSTEM",
                        subtitle="MAIN MENU", border_style="cyan"))


def ask_int(console: Console, prompt: str, low: int, high: int) -> int:
    """Ask until the user types an integer in ``[low, high]``."""
    while True:
        value = IntPrompt.ask(prompt, console=console)
        if low <= value <= high:
            return value
        console.print(f"[red]Please enter a number between {low} and {high}.[/red]")


# ---------------------------------------------------------------------- #
#  Runs                                                                    #
# ---------------------------------------------------------------------- #
def run_terminal(sim: Simulation, total_ticks: int, console: Console) -> Stats:
    """Tick *sim* through the rich live view at the policy's tick rate."""
    frame_time = 1.0 / sim.policy.ticks_per_second
    display = TerminalDisplay(
        sim.initial_frame(), sim.light_snapshots(), sim.stats(), console=console
    )
    try:
        with display:
            for result in sim.run(total_ticks):
                display.show(result)
                time.sleep(frame_time)
    except KeyboardInterrupt:
        log.info("Run interrupted at frame %d", sim.tick_index)
    return sim.stats()


def run_once(
    duration_seconds: int,
    policy: SimulationPolicy,
    seed: Optional[int],
    display: str,
    console: Console,
) -> Stats:
    """One complete run with a fresh simulation; returns the final counters."""
    sim = Simulation(policy, seed=seed)
    total_ticks = sim.total_ticks(duration_seconds)
    log.info("Starting %d s run (%d frames) on the %s display",
             duration_seconds, total_ticks, display)
    console.print(configuration_panel(sim.geometry))

    if display == "pygame":
        run_pygame_view(sim, total_ticks)
        stats = sim.stats()
    else:
        stats = run_terminal(sim, total_ticks, console)

    log.info("Run finished: %s", stats.as_dict())
    console.print(summary_panel(duration_seconds, stats))
    return stats


def main() -> int:
    console = Console()
    try:
        level = log_level_from_env()
        display = display_from_env()
        policy = policy_from_env()
        seed = seed_from_env()
    except ConfigurationError as exc:
        setup_logging(logging.INFO)
        log.error("Configuration rejected: %s", exc)
        console.print(f"[red]Configuration error:[/red] {exc}")
        return 2

    # The live terminal view owns the screen; log to file only.
    setup_logging(level, console=(display != "terminal"))
    log.info("Starting traffic simulation (display=%s, seed=%s)", display, seed)

    try:
        while True:
            show_menu(console)
            choice = ask_int(console, "Enter your choice (1-3)", MENU_CUSTOM, MENU_EXIT)
            if choice == MENU_EXIT:
                console.print("[cyan]Thank you for using Traffic Simulation![/cyan]")
                break
            if choice == MENU_CUSTOM:
                duration = ask_int(
                    console,
                    f"Enter simulation duration in seconds "
                    f"({config.MIN_SIM_TIME}-{config.MAX_SIM_TIME})",
                    config.MIN_SIM_TIME,
                    config.MAX_SIM_TIME,
                )
            else:
                duration = config.STANDARD_DURATION
            run_once(duration, policy, seed, display, console)
            console.input("\nPress Enter to return to menu...")
    except (KeyboardInterrupt, EOFError):
        log.info("Shutting down...")
    except Exception:
        log.exception("Simulation aborted")
        console.print(f"[red]Simulation aborted; see {config.LOG_FILE} for details.[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
