"""
Run every rover in a movements file against one shared grid.

Usage:
    python rover_demo.py MOVEMENTS_FILE [--delay SECONDS] [--keep-going] [--no-wait] [--verbose]

Each rover is drawn step by step in a live panel. A failing line stops the
run unless --keep-going is given; invariant failures always stop it.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable

import readchar
from rich.console import Console
from rich.text import Text

from ascii_render import LiveSink, render_coverage_summary, render_grid
from coverage_grid import Grid
from line_parser import read_movements
from rover import OutputSink, Rover, null_sink
from rover_config import ANIMATION_DELAY_SECONDS, DEFAULT_BOUNDS, GridBounds
from rover_errors import InvariantFailure, RoverError, UnreadableMovementsFile

logger = logging.getLogger(__name__)

USAGE = (
    "usage: rover_demo.py MOVEMENTS_FILE "
    "[--delay SECONDS] [--keep-going] [--no-wait] [--verbose]"
)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


class RunOptions:
    """Options for one run, read from the command line."""

    def __init__(
        self,
        path: str,
        delay: float = ANIMATION_DELAY_SECONDS,
        keep_going: bool = False,
        wait: bool = True,
        verbose: bool = False,
    ) -> None:
        self.path = path
        self.delay = delay
        self.keep_going = keep_going
        self.wait = wait
        self.verbose = verbose


def parse_args(argv: list[str]) -> RunOptions:
    """
    Read run options from argv (without the program name).

    Raises:
        ValueError: On a missing or repeated file argument, an unknown flag,
            or a bad --delay value
    """
    path: str | None = None
    delay = ANIMATION_DELAY_SECONDS
    keep_going = False
    wait = True
    verbose = False

    args = list(argv)
    while args:
        arg = args.pop(0)
        if arg == "--delay":
            if not args:
                raise ValueError("--delay needs a value in seconds")
            value = args.pop(0)
            try:
                delay = float(value)
            except ValueError:
                raise ValueError(f"--delay must be a number, got {value!r}") from None
            if delay < 0:
                raise ValueError(f"--delay must not be negative, got {value!r}")
        elif arg == "--keep-going":
            keep_going = True
        elif arg == "--no-wait":
            wait = False
        elif arg == "--verbose":
            verbose = True
        elif arg.startswith("--"):
            raise ValueError(f"Unknown option: {arg}")
        elif path is None:
            path = arg
        else:
            raise ValueError(
                "Rover must be passed one argument; the path of the movements file"
            )

    if path is None:
        raise ValueError(
            "Rover must be passed one argument; the path of the movements file"
        )

    return RunOptions(path, delay, keep_going, wait, verbose)


def run_rovers(
    movements: list[tuple[int, str]],
    grid: Grid,
    sink: OutputSink = null_sink,
    delay: float = 0.0,
    keep_going: bool = False,
    bounds: GridBounds = DEFAULT_BOUNDS,
    on_line: Callable[[int, str], None] | None = None,
) -> list[tuple[int, RoverError]]:
    """
    Run rovers in order against the shared grid.

    Args:
        movements: (line_number, line) pairs, comments already removed
        grid: Grid shared by all rovers
        sink: Output sink passed to each rover
        delay: Seconds between steps
        keep_going: Report failed lines and continue instead of stopping
        bounds: Grid bounds for parsing and positions
        on_line: Called with (line_number, line) before each rover starts

    Returns:
        (line_number, error) for every line that failed; at most one entry
        unless keep_going is set

    Raises:
        InvariantFailure: Always propagated, whatever keep_going says
    """
    failures: list[tuple[int, RoverError]] = []

    for line_number, line in movements:
        if on_line is not None:
            on_line(line_number, line)
        try:
            rover = Rover.from_line(line, bounds)
            rover.go(grid, sink, delay)
        except InvariantFailure:
            raise
        except RoverError as e:
            logger.error("Line %d failed: %s", line_number, e)
            failures.append((line_number, e))
            if not keep_going:
                break
        else:
            logger.info("Line %d finished at %s", line_number, rover.describe())

    return failures


def main(argv: list[str] | None = None) -> int:
    """Entry point; returns the process exit code."""
    console = Console()

    try:
        options = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as e:
        console.print(Text(str(e), style="bold red"))
        console.print(USAGE, markup=False)
        return EXIT_USAGE

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        movements = read_movements(options.path)
    except (OSError, UnreadableMovementsFile) as e:
        console.print(Text(str(e), style="bold red"))
        return EXIT_FAILURE

    grid = Grid(DEFAULT_BOUNDS)
    try:
        with LiveSink(console) as sink:

            def show_line(line_number: int, line: str) -> None:
                sink.rover_label = f"line {line_number}: {line}"

            failures = run_rovers(
                movements,
                grid,
                sink,
                options.delay,
                options.keep_going,
                on_line=show_line,
            )
    except InvariantFailure as e:
        console.print(Text("Internal error, cannot continue:", style="bold red"))
        console.print(Text(str(e)))
        return EXIT_FAILURE

    console.print(Text.from_ansi(render_grid(grid)))
    for line_number, error in failures:
        console.print(Text(f"Line {line_number} failed:", style="red"))
        console.print(Text(str(error)))
    console.print(render_coverage_summary(grid))

    if options.wait:
        console.print("Finished! Press any key")
        readchar.readkey()

    return EXIT_FAILURE if failures else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
