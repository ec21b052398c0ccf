"""
Grid coverage tracking for the rover simulator.

The grid records the last marker written to each cell. A cell counts as
visited once anything other than the UNVISITED sentinel has been written
to it, so both trail markers and heading glyphs count.
"""

from __future__ import annotations

from typing import Iterator

from rover_config import DEFAULT_BOUNDS, TRAIL, UNVISITED, GridBounds
from rover_errors import IncompleteCoverage
from rover_types import Position

__all__ = ["Grid", "UNVISITED", "TRAIL"]


class Grid:
    """
    Fixed-size cell store shared by every rover in a run.

    Cells are held in one flat list indexed by index_of(x, y). No bounds
    checking happens here; positions are already valid by construction.
    """

    def __init__(self, bounds: GridBounds = DEFAULT_BOUNDS) -> None:
        self.bounds = bounds
        self._cells: list[str] = [UNVISITED] * bounds.cell_count

    @property
    def max_x(self) -> int:
        return self.bounds.max_x

    @property
    def max_y(self) -> int:
        return self.bounds.max_y

    def index_of(self, x: int, y: int) -> int:
        return x * self.bounds.max_y + y

    def mark(self, position: Position, marker: str) -> None:
        """Overwrite the cell at position with marker."""
        self._cells[self.index_of(position.x, position.y)] = marker

    def marker_at(self, x: int, y: int) -> str:
        return self._cells[self.index_of(x, y)]

    def cells(self) -> Iterator[tuple[int, int, str]]:
        """Yield (x, y, marker) for every cell, x-major."""
        for x in range(self.bounds.max_x):
            for y in range(self.bounds.max_y):
                yield x, y, self._cells[self.index_of(x, y)]

    def unvisited(self) -> list[tuple[int, int]]:
        return [(x, y) for x, y, marker in self.cells() if marker == UNVISITED]

    def is_fully_covered(self) -> bool:
        return UNVISITED not in self._cells

    def must_be_fully_traversed(self) -> None:
        """Raise IncompleteCoverage if any cell was never visited."""
        if not self.is_fully_covered():
            raise IncompleteCoverage(self.unvisited())

    def __repr__(self) -> str:
        visited = self.bounds.cell_count - len(self.unvisited())
        return f"Grid({self.max_x}x{self.max_y}, visited={visited})"
