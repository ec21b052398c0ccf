"""
ASCII rendering for the rover grid.

Provides:
1. render_grid - the grid as a bordered character block, north at the top
2. LiveSink - an output sink that redraws the grid in a rich Live display
"""

from __future__ import annotations

from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from coverage_grid import Grid
from rover_config import TRAIL, UNVISITED


def _plain(s: str) -> str:
    return s


def marker_color(marker: str) -> Callable[[str], str]:
    """Colorizer for a cell marker: dim for unvisited, green trail, bright heading glyphs."""
    if marker == UNVISITED:
        return chalk.white
    if marker == TRAIL:
        return chalk.green
    return chalk.yellowBright


def render_grid(
    grid: Grid,
    cell_width: int = 3,
    title: str = "rovers",
    color: bool = True,
) -> str:
    """
    Render the grid as a bordered block of characters.

    Row y = max_y - 1 is printed first so north is up and east is right,
    matching the rover movement deltas.

    Args:
        grid: The grid to render
        cell_width: Characters per cell (default 3)
        title: Text centred in the top border
        color: Apply ANSI colours (disable for plain-text comparison)

    Returns:
        Rendered grid lines joined with newlines
    """
    rows: list[list[str]] = [[UNVISITED] * grid.max_x for _ in range(grid.max_y)]
    for x, y, marker in grid.cells():
        rows[grid.max_y - 1 - y][x] = marker

    border = chalk.white if color else _plain
    inner_width = grid.max_x * cell_width
    label = f" {title} "

    # Top border with title
    if len(label) <= inner_width:
        left = (inner_width - len(label)) // 2
        top = "┌" + "─" * left + label + "─" * (inner_width - left - len(label)) + "┐"
    else:
        top = "┌" + "─" * inner_width + "┐"

    lines = [border(top)]
    for row in rows:
        parts = [border("│")]
        for marker in row:
            content = marker if cell_width == 1 else marker.center(cell_width)
            parts.append(marker_color(marker)(content) if color else content)
        parts.append(border("│"))
        lines.append("".join(parts))
    lines.append(border("└" + "─" * inner_width + "┘"))

    return "\n".join(lines)


def render_coverage_summary(grid: Grid) -> str:
    """One line stating whether every cell was visited."""
    unvisited = grid.unvisited()
    if not unvisited:
        return f"Grid fully covered ({grid.bounds.cell_count} cells)"
    return f"Grid not fully covered: {len(unvisited)} of {grid.bounds.cell_count} cells unvisited"


# =============================================================================
# Output Sinks
# =============================================================================


class LiveSink:
    """
    Output sink that redraws a rich Panel with the grid and a status line.

    Use as a context manager around the run:

        with LiveSink() as sink:
            rover.go(grid, sink)
    """

    def __init__(self, console: Console | None = None, title: str = "Rover Simulator") -> None:
        self.console = console or Console()
        self.title = title
        self.rover_label = ""
        self.status_message = "Ready"
        self._live: Live | None = None

    def generate_display(self, grid: Grid) -> Panel:
        """Panel with the rendered grid, current rover and status."""
        body = Text()
        if self.rover_label:
            body.append("Rover: ", style="bold")
            body.append(f"{self.rover_label}\n\n")
        body.append(Text.from_ansi(render_grid(grid)))
        body.append("\n\n")
        body.append("─" * 40 + "\n", style="dim")
        body.append("Status: ", style="bold")
        body.append(self.status_message)
        return Panel(body, title=self.title, border_style="green", width=60)

    def __enter__(self) -> LiveSink:
        self._live = Live(console=self.console, refresh_per_second=8)
        self._live.__enter__()
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._live is not None:
            self._live.__exit__(*exc_info)  # type: ignore[arg-type]
            self._live = None

    def __call__(self, grid: Grid, status: str) -> None:
        self.status_message = status
        display = self.generate_display(grid)
        if self._live is None:
            self.console.print(display)
        else:
            self._live.update(display)
