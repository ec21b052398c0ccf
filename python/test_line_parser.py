"""Tests for line_parser module."""

import logging

import pytest

from line_parser import ParsedLine, iter_movement_lines, parse_line, read_movements
from rover_config import GridBounds
from rover_errors import (
    EmptyCommandSequence,
    InvariantFailure,
    InvalidCommandChar,
    InvalidHeadingChar,
    MalformedStartingPosition,
    MissingSeparator,
    NonDigitCoordinate,
    OutOfBounds,
    RoverInputError,
    UnreadableMovementsFile,
)
from rover_types import Command, Direction


class TestParseLine:
    """Tests for parsing valid lines."""

    def test_simple_line(self) -> None:
        """Parse pose and commands."""
        parsed = parse_line("1 2 N|LMR")

        assert parsed.x == 1
        assert parsed.y == 2
        assert parsed.heading == "N"
        assert parsed.direction is Direction.N
        assert parsed.commands == (
            Command.TURN_LEFT,
            Command.MOVE_FORWARD,
            Command.TURN_RIGHT,
        )

    def test_case_insensitive(self) -> None:
        """Lower case input parses the same as upper case."""
        assert parse_line("0 0 e|mmlm") == parse_line("0 0 E|MMLM")

    def test_round_trip(self) -> None:
        """Reformatting a parsed line reproduces the upper-cased input."""
        for line in [
            "0 0 E|MMMMMLMMMMMLMMMMMLMMMMM",
            "5 5 w|m",
            "3 1 s|LLLLMMR",
            "0 5 N|M",
        ]:
            assert parse_line(line).canonical() == line.upper()

    def test_parsed_line_is_frozen(self) -> None:
        parsed = parse_line("1 1 N|M")
        assert isinstance(parsed, ParsedLine)
        with pytest.raises(AttributeError):
            parsed.x = 2  # type: ignore[misc]


class TestParseLineErrors:
    """Tests for each validation failure."""

    def test_missing_separator(self) -> None:
        with pytest.raises(MissingSeparator, match="vertical bar") as exc_info:
            parse_line("2 2 NLLLLL")
        assert exc_info.value.line == "2 2 NLLLLL"
        assert "2 2 NLLLLL" in str(exc_info.value)

    def test_two_separators(self) -> None:
        with pytest.raises(MissingSeparator):
            parse_line("2 2 N|LL|M")

    def test_empty_commands(self) -> None:
        with pytest.raises(EmptyCommandSequence, match="Movement part was empty"):
            parse_line("2 2 N|")

    def test_invalid_command_chars(self) -> None:
        """Every offending character is reported, not just the first."""
        with pytest.raises(InvalidCommandChar) as exc_info:
            parse_line("2 2 N|LMXQMZ")
        assert exc_info.value.bad_chars == "XQZ"
        assert "XQZ" in str(exc_info.value)

    def test_invalid_chars_reported_as_typed(self) -> None:
        """Offending characters are reported as written, not upper-cased."""
        with pytest.raises(InvalidCommandChar) as exc_info:
            parse_line("0 0 E|Mßx")
        assert exc_info.value.bad_chars == "ßx"

    def test_space_in_commands(self) -> None:
        with pytest.raises(InvalidCommandChar):
            parse_line("2 2 N|LM ")

    def test_too_many_position_items(self) -> None:
        with pytest.raises(MalformedStartingPosition, match="found 4"):
            parse_line("2 2 2 N|M")

    def test_too_few_position_items(self) -> None:
        with pytest.raises(MalformedStartingPosition, match="found 2"):
            parse_line("2 N|M")

    def test_double_space(self) -> None:
        with pytest.raises(MalformedStartingPosition):
            parse_line("2  2 N|M")

    def test_leading_whitespace(self) -> None:
        with pytest.raises(MalformedStartingPosition):
            parse_line(" 2 2 N|M")

    def test_multi_digit_coordinate(self) -> None:
        with pytest.raises(NonDigitCoordinate, match="single digits"):
            parse_line("2 23 N|LLLLL")

    def test_non_numeric_coordinate(self) -> None:
        with pytest.raises(NonDigitCoordinate):
            parse_line("a 2 N|M")
        with pytest.raises(NonDigitCoordinate):
            parse_line("2 - N|M")
        with pytest.raises(NonDigitCoordinate):
            parse_line("2 ² N|M")

    def test_coordinate_out_of_bounds(self) -> None:
        """A single digit beyond the grid is a bounds error, not an input error."""
        with pytest.raises(OutOfBounds) as exc_info:
            parse_line("6 0 N|M")
        assert exc_info.value.line == "6 0 N|M"
        assert not isinstance(exc_info.value, RoverInputError)

    def test_custom_bounds(self) -> None:
        bounds = GridBounds(max_x=10, max_y=10)
        assert parse_line("9 9 S|M", bounds).x == 9
        with pytest.raises(OutOfBounds):
            parse_line("3 0 N|M", GridBounds(3, 3))

    def test_invalid_heading(self) -> None:
        with pytest.raises(InvalidHeadingChar, match="must be one of: NSEW"):
            parse_line("2 2 Q|M")

    def test_multi_char_heading(self) -> None:
        with pytest.raises(InvalidHeadingChar):
            parse_line("2 2 NE|M")

    def test_empty_heading(self) -> None:
        with pytest.raises(InvalidHeadingChar):
            parse_line("2 2 |M")

    def test_input_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            parse_line("nonsense")

    def test_check_order(self) -> None:
        """Command checks run before position checks."""
        with pytest.raises(InvalidCommandChar):
            parse_line("99 99 Q|XYZ")


    def test_round_trip_mismatch(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A line that does not reformat to itself is an internal failure."""
        monkeypatch.setattr(ParsedLine, "canonical", lambda self: "9 9 N|M")

        with pytest.raises(InvariantFailure, match="Round trip failed") as exc_info:
            parse_line("1 1 n|m")
        assert not isinstance(exc_info.value, RoverInputError)
        assert exc_info.value.line == "1 1 n|m"


class TestRedundantRotationWarning:
    """Tests for the advisory LR/RL check."""

    def test_lr_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="line_parser"):
            parsed = parse_line("1 1 N|MLRM")
        assert "Redundant rotation" in caplog.text
        assert len(parsed.commands) == 4

    def test_rl_warns_case_insensitive(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="line_parser"):
            parse_line("1 1 N|mrlm")
        assert "Redundant rotation" in caplog.text

    def test_non_adjacent_does_not_warn(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="line_parser"):
            parse_line("1 1 N|LMMR")
        assert "Redundant rotation" not in caplog.text


class TestMovementLines:
    """Tests for comment and blank line filtering."""

    def test_filters_comments_and_blanks(self) -> None:
        lines = [
            "# header\n",
            "\n",
            "0 0 E|M\n",
            "   \n",
            "1 1 N|L\r\n",
            "#0 0 E|M\n",
        ]
        assert list(iter_movement_lines(lines)) == [(3, "0 0 E|M"), (5, "1 1 N|L")]

    def test_indented_hash_is_not_comment(self) -> None:
        """Only a '#' in the first column starts a comment."""
        assert list(iter_movement_lines(["  # x"])) == [(1, "  # x")]

    def test_read_movements(self, tmp_path) -> None:
        path = tmp_path / "movements.txt"
        path.write_text("# rovers\n0 0 E|MM\n\n5 5 S|M\n", encoding="utf-8")

        assert read_movements(path) == [(2, "0 0 E|MM"), (4, "5 5 S|M")]

    def test_read_missing_file(self, tmp_path) -> None:
        missing = tmp_path / "nope.txt"
        with pytest.raises(FileNotFoundError, match="does not exist"):
            read_movements(missing)

    def test_read_undecodable_file(self, tmp_path) -> None:
        path = tmp_path / "movements.txt"
        path.write_bytes(b"0 0 E|M\n\xff\xfe bad\n")

        with pytest.raises(UnreadableMovementsFile, match="not valid UTF-8") as exc_info:
            read_movements(path)
        assert str(path) in str(exc_info.value)

    def test_read_directory(self, tmp_path) -> None:
        """A directory exists, so it fails on open rather than as missing."""
        with pytest.raises(OSError) as exc_info:
            read_movements(tmp_path)
        assert not isinstance(exc_info.value, FileNotFoundError)
