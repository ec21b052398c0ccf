"""
Exception types raised by the rover simulator.

Input errors subclass ValueError, bounds errors IndexError, and internal
invariant or verification failures AssertionError, so callers can catch
either the rover-specific class or the builtin family.
"""

from __future__ import annotations


class RoverError(Exception):
    """Base class for every rover failure."""

    def __init__(self, reason: str, line: str | None = None) -> None:
        self.reason = reason
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line is None:
            return self.reason
        return (
            f"Problem with movements line\n"
            f"  Line was: {self.line!r}\n"
            f"  {self.reason}"
        )


# =============================================================================
# Input Errors
# =============================================================================


class RoverInputError(RoverError, ValueError):
    """A movements line failed validation."""


class MissingSeparator(RoverInputError):
    """The line did not split into exactly two parts on '|'."""


class EmptyCommandSequence(RoverInputError):
    """Nothing followed the '|' separator."""


class InvalidCommandChar(RoverInputError):
    """The command part held characters other than L, R and M."""

    def __init__(self, reason: str, line: str | None = None, bad_chars: str = "") -> None:
        self.bad_chars = bad_chars
        super().__init__(reason, line)


class MalformedStartingPosition(RoverInputError):
    """The starting position did not split into exactly three tokens."""


class NonDigitCoordinate(RoverInputError):
    """An x or y token was not a single digit."""


class InvalidHeadingChar(RoverInputError):
    """The heading token was not one of N, S, E, W."""


class UnreadableMovementsFile(RoverInputError):
    """A movements file could not be decoded as text."""


# =============================================================================
# Bounds Errors
# =============================================================================


class OutOfBounds(RoverError, IndexError):
    """A coordinate fell outside the grid."""

    def __init__(
        self, x: int, y: int, max_x: int, max_y: int, line: str | None = None
    ) -> None:
        self.x = x
        self.y = y
        self.max_x = max_x
        self.max_y = max_y
        super().__init__(
            f"X or Y co-ordinates invalid, are: {x}, {y}\n"
            f"  Valid range: 0 <= x < {max_x}, 0 <= y < {max_y}",
            line,
        )


# =============================================================================
# Internal Failures
# =============================================================================


class InvariantFailure(RoverError, AssertionError):
    """An internal contract was violated; never recoverable."""


class VerificationFailure(RoverError, AssertionError):
    """An expected post-condition did not hold."""


class UnexpectedLocation(VerificationFailure):
    """Rover did not end up where (or facing how) it was expected to."""

    def __init__(self, reason: str, expected: object, actual: object) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(reason)


class IncompleteCoverage(VerificationFailure):
    """Some grid cells were never reached by any rover."""

    def __init__(self, unvisited: list[tuple[int, int]]) -> None:
        self.unvisited = unvisited
        shown = ", ".join(f"({x}, {y})" for x, y in unvisited[:10])
        if len(unvisited) > 10:
            shown += f", ... ({len(unvisited) - 10} more)"
        super().__init__(
            f"The grid was not fully covered by rover(s)\n"
            f"  Unvisited cells: {shown}"
        )
