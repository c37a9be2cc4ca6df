#!/usr/bin/env python3
"""
display/terminal.py
===================
Text display built on :mod:`rich`.

The grid is kept in a :class:`~display.canvas.GridCanvas`; every tick's
render events are applied to it and the whole frame (grid, light table,
counters, legend) is pushed through a :class:`rich.live.Live` region.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from trafficsim.events import LightSnapshot, Stats, TickResult
from trafficsim.geometry import Geometry
from trafficsim.types import Direction

from .canvas import GridCanvas
from .constants import DisplayConstants

log = logging.getLogger("display")


class TerminalDisplay(DisplayConstants):
    """Live terminal view of one simulation run.

    Parameters
    ----------
    background : sequence of str
        Background rows from :meth:`trafficsim.simulation.Simulation.initial_frame`.
    lights : sequence of LightSnapshot
        Light state to show before the first tick.
    stats : Stats
        Counters to show before the first tick.
    console : rich.console.Console or None
        Output console; a fresh one when *None*.
    """

    def __init__(
        self,
        background: Sequence[str],
        lights: Sequence[LightSnapshot],
        stats: Stats,
        console: Optional[Console] = None,
    ) -> None:
        self.console = console or Console()
        self.canvas = GridCanvas(background)
        self._lights = tuple(lights)
        self._stats = stats
        self._live: Optional[Live] = None

    # ── lifecycle ─────────────────────────────────────────────────────────

    def __enter__(self) -> "TerminalDisplay":
        self._live = Live(
            self.renderable(),
            console=self.console,
            auto_refresh=False,
            transient=False,
        )
        self._live.start()
        log.debug("terminal display started (%dx%d cells)", self.canvas.width, self.canvas.height)
        return self

    def __exit__(self, *exc_info) -> None:
        if self._live is not None:
            self._live.stop()
            self._live = None
            log.debug("terminal display stopped")

    # ── rendering ─────────────────────────────────────────────────────────

    def show(self, result: TickResult) -> None:
        """Apply one tick and refresh the live region."""
        self.canvas.apply(result.events)
        self._lights = result.lights
        self._stats = result.stats
        if self._live is not None:
            self._live.update(self.renderable(), refresh=True)

    def grid_text(self) -> Text:
        text = Text(no_wrap=True, overflow="crop")
        for y in range(self.canvas.height):
            for chunk, color_class in self.canvas.runs(y):
                text.append(chunk, style=self.CLASS_STYLES[color_class])
            if y < self.canvas.height - 1:
                text.append("\n")
        return text

    def light_table(self) -> Table:
        table = Table(title="TRAFFIC LIGHTS", title_style="cyan bold", show_lines=False)
        table.add_column("Light", style="cyan bold", justify="left")
        table.add_column("State", justify="center")
        table.add_column("Timer", style="magenta", justify="right")
        for snapshot in self._lights:
            table.add_row(
                f"{snapshot.label} Light",
                Text(snapshot.state.value, style=self.LIGHT_STYLES[snapshot.state]),
                str(snapshot.timer_remaining),
            )
        return table

    def status_line(self) -> Text:
        return Text(
            f"Cars: {self._stats.active_count} active / {self._stats.total_spawned} total"
            f"    Frame: {self._stats.tick_index}"
        )

    def legend(self) -> Text:
        text = Text("Car states: ")
        for label, color_class in self.LEGEND_ITEMS:
            text.append(label.title(), style=self.CLASS_STYLES[color_class])
            text.append("  ")
        return text

    def renderable(self) -> Group:
        return Group(self.grid_text(), self.light_table(), self.status_line(), self.legend())


def configuration_panel(geometry: Geometry) -> Panel:
    """Summary of borders, lanes and stop lines shown before a run."""
    lines = [
        f"Borders: X[{geometry.left},{geometry.right}], Y[{geometry.top},{geometry.bottom}]",
        "N-S lanes: north-bound x={} (^), south-bound x={} (v)".format(
            geometry.lane(Direction.NORTH), geometry.lane(Direction.SOUTH)),
        "E-W lanes: west-bound y={} (<), east-bound y={} (>)".format(
            geometry.lane(Direction.WEST), geometry.lane(Direction.EAST)),
        "Stop lines: N y={}, S y={}, E x={}, W x={}".format(
            geometry.stop_line(Direction.NORTH), geometry.stop_line(Direction.SOUTH),
            geometry.stop_line(Direction.EAST), geometry.stop_line(Direction.WEST)),
    ]
    return Panel("\n".join(lines), title="CONFIGURATION", border_style="cyan")


def summary_panel(duration_seconds: int, stats: Stats) -> Panel:
    """End-of-run report."""
    body = (
        f"Duration: {duration_seconds} seconds\n"
        f"Total cars spawned: {stats.total_spawned}\n"
        f"Active cars at end: {stats.active_count}\n"
        f"Frames run: {stats.tick_index}"
    )
    return Panel(body, title="SIMULATION COMPLETE", border_style="green")
