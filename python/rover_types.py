"""
Shared type definitions for the rover simulator: headings, commands and positions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from rover_config import DEFAULT_BOUNDS, GridBounds
from rover_errors import InvalidCommandChar, InvalidHeadingChar, InvariantFailure, OutOfBounds

__all__ = [
    "Direction",
    "Command",
    "Position",
    "direction_from_char",
    "command_from_char",
    "turn",
    "delta",
    "glyph",
    "advance",
]


class Direction(Enum):
    """Compass heading of a rover."""

    N = "N"  # Up (increasing y)
    S = "S"  # Down (decreasing y)
    E = "E"  # Right (increasing x)
    W = "W"  # Left (decreasing x)


class Command(Enum):
    """One instruction from a movements line."""

    TURN_LEFT = "L"
    TURN_RIGHT = "R"
    MOVE_FORWARD = "M"


# =============================================================================
# Direction State Machine
# =============================================================================


_GLYPHS: dict[Direction, str] = {
    Direction.N: "^",
    Direction.S: "V",
    Direction.E: ">",
    Direction.W: "<",
}

_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.N: (0, 1),
    Direction.S: (0, -1),
    Direction.E: (1, 0),
    Direction.W: (-1, 0),
}

# (heading, turn) -> new heading
_TRANSITIONS: dict[tuple[Direction, Command], Direction] = {
    (Direction.N, Command.TURN_LEFT): Direction.W,
    (Direction.N, Command.TURN_RIGHT): Direction.E,
    (Direction.S, Command.TURN_LEFT): Direction.E,
    (Direction.S, Command.TURN_RIGHT): Direction.W,
    (Direction.E, Command.TURN_LEFT): Direction.N,
    (Direction.E, Command.TURN_RIGHT): Direction.S,
    (Direction.W, Command.TURN_LEFT): Direction.S,
    (Direction.W, Command.TURN_RIGHT): Direction.N,
}


def direction_from_char(c: str) -> Direction:
    """
    Look up the heading for a single upper-case character.

    Raises:
        InvalidHeadingChar: If c is not one of N, S, E, W
    """
    try:
        return Direction(c)
    except ValueError:
        raise InvalidHeadingChar(
            f"Unrecognised heading {c!r}, must be one of: NSEW"
        ) from None


def command_from_char(c: str) -> Command:
    """
    Look up the command for a single upper-case character.

    Raises:
        InvalidCommandChar: If c is not one of L, R, M
    """
    try:
        return Command(c)
    except ValueError:
        raise InvalidCommandChar(
            f"Unrecognised command {c!r}, must be one of: LRM", bad_chars=c
        ) from None


def turn(direction: Direction, command: Command) -> Direction:
    """
    Heading after turning left or right.

    Raises:
        InvariantFailure: If command is not a turn
    """
    if command is Command.MOVE_FORWARD:
        raise InvariantFailure(f"Invalid turn command: {command.value}")
    return _TRANSITIONS[(direction, command)]


def delta(direction: Direction) -> tuple[int, int]:
    """(dx, dy) for one step forward."""
    return _DELTAS[direction]


def glyph(direction: Direction) -> str:
    return _GLYPHS[direction]


# =============================================================================
# Position
# =============================================================================


@dataclass(frozen=True)
class Position:
    """
    A cell on the grid.

    The only place bounds are enforced for movement: constructing a Position
    outside its bounds raises OutOfBounds, whether it is a starting point or
    the result of a move.
    """

    x: int
    y: int
    bounds: GridBounds = field(default=DEFAULT_BOUNDS, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.bounds.contains(self.x, self.y):
            raise OutOfBounds(self.x, self.y, self.bounds.max_x, self.bounds.max_y)

    @property
    def coords(self) -> tuple[int, int]:
        return (self.x, self.y)


def advance(position: Position, direction: Direction) -> Position:
    """Position one step forward; raises OutOfBounds if that leaves the grid."""
    dx, dy = delta(direction)
    return Position(position.x + dx, position.y + dy, position.bounds)
