"""
display/canvas.py
=================
Cell buffer shared by every display back-end.

The canvas starts from the background rows of the grid and applies the
ordered :class:`~trafficsim.events.RenderEvent` list of each tick, so
it always mirrors what a cursor-addressed terminal would show.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Set, Tuple

from trafficsim.events import RenderEvent
from trafficsim.types import ColorClass


@dataclass
class Cell:
    """One drawn cell."""
    glyph: str
    color_class: ColorClass = ColorClass.BACKGROUND


class GridCanvas:
    """Mutable glyph/colour grid.

    Parameters
    ----------
    background : sequence of str
        One string per row, all the same width.
    """

    def __init__(self, background: Sequence[str]) -> None:
        self._background = [str(row) for row in background]
        self.height = len(self._background)
        self.width = len(self._background[0]) if self._background else 0
        self.dirty: Set[Tuple[int, int]] = set()
        self.reset()

    def reset(self) -> None:
        """Repaint the background and mark every cell dirty."""
        self._cells: List[List[Cell]] = [
            [Cell(glyph) for glyph in row] for row in self._background
        ]
        self.dirty = {(x, y) for y in range(self.height) for x in range(self.width)}

    def apply(self, events: Iterable[RenderEvent]) -> int:
        """Apply *events* in order; returns how many landed on the grid."""
        applied = 0
        for event in events:
            if not (0 <= event.x < self.width and 0 <= event.y < self.height):
                continue
            cell = self._cells[event.y][event.x]
            cell.glyph = event.glyph
            cell.color_class = event.color_class
            self.dirty.add((event.x, event.y))
            applied += 1
        return applied

    def cell(self, x: int, y: int) -> Cell:
        return self._cells[y][x]

    def take_dirty(self) -> Set[Tuple[int, int]]:
        """Return and clear the set of cells changed since the last call."""
        dirty, self.dirty = self.dirty, set()
        return dirty

    def rows(self) -> List[str]:
        return ["".join(cell.glyph for cell in row) for row in self._cells]

    def runs(self, y: int) -> Iterator[Tuple[str, ColorClass]]:
        """Consecutive same-colour segments of row *y*."""
        row = self._cells[y]
        if not row:
            return
        start_class = row[0].color_class
        chunk: List[str] = []
        for cell in row:
            if cell.color_class is not start_class:
                yield "".join(chunk), start_class
                chunk = []
                start_class = cell.color_class
            chunk.append(cell.glyph)
        yield "".join(chunk), start_class

    def cars(self) -> List[Tuple[int, int, str]]:
        """Every non-background cell as ``(x, y, glyph)``."""
        return [
            (x, y, cell.glyph)
            for y, row in enumerate(self._cells)
            for x, cell in enumerate(row)
            if cell.color_class is not ColorClass.BACKGROUND
        ]
