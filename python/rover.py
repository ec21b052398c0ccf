"""
Rover replay: apply a command sequence to a starting pose, marking the grid as it goes.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from coverage_grid import Grid
from line_parser import parse_line
from rover_config import DEFAULT_BOUNDS, TRAIL, GridBounds
from rover_errors import OutOfBounds, UnexpectedLocation
from rover_types import Command, Direction, Position, advance, glyph, turn

__all__ = ["RoverState", "Rover", "OutputSink", "apply_command", "null_sink"]

logger = logging.getLogger(__name__)

# Called after every marked step with the grid and a status line
OutputSink = Callable[[Grid, str], None]


def null_sink(grid: Grid, status: str) -> None:
    """Discard output; used for headless runs and tests."""


@dataclass(frozen=True)
class RoverState:
    """Heading and location of a rover at one step."""

    direction: Direction
    position: Position

    @property
    def glyph(self) -> str:
        return glyph(self.direction)

    def describe(self) -> str:
        return f"({self.position.x}, {self.position.y}) {self.glyph}"


def apply_command(state: RoverState, command: Command) -> RoverState:
    """Return the state after one command; moving off the grid raises OutOfBounds."""
    if command is Command.MOVE_FORWARD:
        return RoverState(state.direction, advance(state.position, state.direction))
    return RoverState(turn(state.direction, command), state.position)


class Rover:
    """A rover with a starting pose and the commands it will replay."""

    def __init__(
        self,
        direction: Direction,
        position: Position,
        commands: tuple[Command, ...],
        line: str | None = None,
    ) -> None:
        self.state = RoverState(direction, position)
        self.commands = commands
        self.line = line  # movements line this rover came from, if any

    @classmethod
    def from_line(cls, line: str, bounds: GridBounds = DEFAULT_BOUNDS) -> Rover:
        """Build a rover from one movements line."""
        parsed = parse_line(line, bounds)
        position = Position(parsed.x, parsed.y, bounds)
        return cls(parsed.direction, position, parsed.commands, line)

    @property
    def direction(self) -> Direction:
        return self.state.direction

    @property
    def position(self) -> Position:
        return self.state.position

    def go(self, grid: Grid, sink: OutputSink = null_sink, delay: float = 0.0) -> None:
        """
        Replay every command against the grid.

        Before each command the current cell is marked as trail; after it the
        (possibly new) cell is marked with the heading glyph. A move off the
        grid raises OutOfBounds straight away, carrying the source line when
        there is one; marks already written stay.

        Args:
            grid: Grid shared by all rovers in the run
            sink: Receives the grid and a status line after every step
            delay: Seconds to sleep between steps (0 for none)
        """
        logger.debug("init: %s", self.describe())
        grid.mark(self.position, self.state.glyph)
        sink(grid, f"init:  {self.describe()}")

        for command in self.commands:
            grid.mark(self.position, TRAIL)
            try:
                self.state = apply_command(self.state, command)
            except OutOfBounds as e:
                if e.line is not None or self.line is None:
                    raise
                raise OutOfBounds(e.x, e.y, e.max_x, e.max_y, self.line) from e
            grid.mark(self.position, self.state.glyph)

            logger.debug("%s -> %s", command.value, self.describe())
            sink(grid, f"updated:  {self.describe()}")
            if delay:
                time.sleep(delay)

    def describe(self) -> str:
        return self.state.describe()

    def must_be_at(self, x: int, y: int) -> None:
        """Raise UnexpectedLocation unless the rover is at (x, y)."""
        actual = self.position.coords
        if actual != (x, y):
            raise UnexpectedLocation(
                f"Rover is not where expected\n"
                f"  Should be at: {x}, {y}\n"
                f"  Thinks it is at: {actual[0]}, {actual[1]}",
                expected=(x, y),
                actual=actual,
            )

    def must_face(self, direction: Direction) -> None:
        """Raise UnexpectedLocation unless the rover faces direction."""
        if self.direction is not direction:
            raise UnexpectedLocation(
                f"Rover is not facing the expected way\n"
                f"  Should face: {direction.value}\n"
                f"  Faces: {self.direction.value}",
                expected=direction,
                actual=self.direction,
            )

    def __repr__(self) -> str:
        commands = "".join(c.value for c in self.commands)
        return f"Rover({self.describe()}, commands={commands!r})"
