"""
Movements line parsing for the rover simulator.

Each rover is described by one line:

    X Y H|CCCC...

- X, Y: single-digit starting coordinates
- H: starting heading, one of N, S, E, W
- C: commands, one or more of L (turn left), R (turn right), M (move forward)

Parsing is case-insensitive. Example: "0 0 E|MMMMMLMMMMMLMMMMMLMMMMM".
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from rover_config import DEFAULT_BOUNDS, GridBounds
from rover_errors import (
    EmptyCommandSequence,
    InvalidCommandChar,
    InvalidHeadingChar,
    InvariantFailure,
    MalformedStartingPosition,
    MissingSeparator,
    NonDigitCoordinate,
    OutOfBounds,
    UnreadableMovementsFile,
)
from rover_types import Command, Direction, command_from_char, direction_from_char

__all__ = ["ParsedLine", "parse_line", "iter_movement_lines", "read_movements"]

logger = logging.getLogger(__name__)

VALID_COMMANDS = "LRM"
VALID_HEADINGS = "NSEW"


@dataclass(frozen=True)
class ParsedLine:
    """Starting pose and command sequence for one rover."""

    x: int
    y: int
    heading: str
    commands: tuple[Command, ...]

    @property
    def direction(self) -> Direction:
        return direction_from_char(self.heading)

    @property
    def command_string(self) -> str:
        return "".join(c.value for c in self.commands)

    def canonical(self) -> str:
        """Reformat as a movements line (upper case)."""
        return f"{self.x} {self.y} {self.heading}|{self.command_string}"


def parse_line(line: str, bounds: GridBounds = DEFAULT_BOUNDS) -> ParsedLine:
    """
    Parse and validate one movements line.

    Checks run in a fixed order and the first failure raises. A line that
    passes every check must also reformat to exactly its upper-cased self.

    Args:
        line: Raw line, without its line terminator
        bounds: Grid bounds the starting position must fall within

    Returns:
        ParsedLine with the starting pose and commands

    Raises:
        MissingSeparator: No single '|' splitting pose from commands
        EmptyCommandSequence: Nothing after the '|'
        InvalidCommandChar: Commands other than L, R, M
        MalformedStartingPosition: Pose is not three space-separated tokens
        NonDigitCoordinate: x or y is not exactly one digit
        OutOfBounds: x or y lies outside bounds
        InvalidHeadingChar: Heading is not one of N, S, E, W
        InvariantFailure: The accepted line does not round-trip
    """
    upper = line.upper()

    parts = upper.split("|")
    if len(parts) != 2:
        raise MissingSeparator("Could not find a single vertical bar '|'", line)
    pose, cmds = parts
    original_cmds = line.split("|")[1]

    # Commands
    if not cmds:
        raise EmptyCommandSequence("Movement part was empty", line)

    bad_chars = "".join(
        dict.fromkeys(ch for ch in original_cmds if ch.upper() not in tuple(VALID_COMMANDS))
    )
    if bad_chars:
        raise InvalidCommandChar(
            f"Movement part contained these invalid characters: {bad_chars}",
            line,
            bad_chars=bad_chars,
        )

    if "LR" in cmds or "RL" in cmds:
        logger.warning("Redundant rotation of LR or RL found in %r", line)

    commands = tuple(command_from_char(ch) for ch in cmds)

    # Starting position
    tokens = pose.split(" ")
    if len(tokens) != 3:
        raise MalformedStartingPosition(
            f"Starting position must be 3 space-separated items, found {len(tokens)}",
            line,
        )
    x_str, y_str, heading = tokens

    if not (_is_single_digit(x_str) and _is_single_digit(y_str)):
        raise NonDigitCoordinate(
            f"x and y must be single digits, are: {x_str!r}, {y_str!r}", line
        )

    x, y = int(x_str), int(y_str)
    if not bounds.contains(x, y):
        raise OutOfBounds(x, y, bounds.max_x, bounds.max_y, line)

    if len(heading) != 1 or heading not in VALID_HEADINGS:
        raise InvalidHeadingChar(
            f"Invalid direction {heading!r}, must be one of: {VALID_HEADINGS}", line
        )

    parsed = ParsedLine(x, y, heading, commands)

    round_trip = parsed.canonical()
    if round_trip != upper:
        raise InvariantFailure(
            f"Round trip failed. Expected {upper!r} got {round_trip!r}", line
        )

    return parsed


def _is_single_digit(token: str) -> bool:
    return len(token) == 1 and token in string.digits


# =============================================================================
# Movements Files
# =============================================================================


def iter_movement_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    """
    Yield (line_number, line) for each rover line, skipping blanks and comments.

    Line numbers are 1-based. A comment is a line whose first character is '#'.
    Only the line terminator is removed; other whitespace is left for the
    parser to reject.
    """
    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip() or line.startswith("#"):
            continue
        yield line_number, line


def read_movements(path: str | Path) -> list[tuple[int, str]]:
    """
    Read a movements file and return its rover lines with line numbers.

    Raises:
        FileNotFoundError: Nothing exists at path
        OSError: path cannot be opened (a directory, no permission)
        UnreadableMovementsFile: The contents are not UTF-8
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Movements file does not exist: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            movements = list(iter_movement_lines(f))
    except UnicodeDecodeError as e:
        raise UnreadableMovementsFile(
            f"Movements file is not valid UTF-8: {path}\n"
            f"  Byte {e.start}: {e.reason}"
        ) from e

    logger.info("read_movements: %d rover line(s) from %s", len(movements), path)
    return movements
