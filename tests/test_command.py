"""Tests for PathCommand, the command registry and PathCommandProcessor."""

import math

import pytest

from avpath.command import COMMAND_INFO, PathCommand, PathCommandProcessor


class TestPathCommand:
    """Tests for the PathCommand value type."""

    def test_command_immutable(self):
        """PathCommand should be frozen (immutable)."""
        cmd = PathCommand("l", (1.0, 2.0))
        with pytest.raises(Exception):  # FrozenInstanceError
            cmd.type = "m"

    def test_values_stored_as_float_tuple(self):
        """Lists of ints are stored as tuple of floats."""
        cmd = PathCommand("l", [1, 2])
        assert cmd.values == (1.0, 2.0)
        assert all(isinstance(v, float) for v in cmd.values)

    def test_equality(self):
        """Commands compare by type and values."""
        assert PathCommand("l", (1, 2)) == PathCommand("l", [1.0, 2.0])
        assert PathCommand("l", (1, 2)) != PathCommand("m", (1, 2))

    def test_line_factory(self):
        """PathCommand.line builds a line to the given point."""
        assert PathCommand.line((3, 4)) == PathCommand("l", (3.0, 4.0))

    def test_str(self):
        """str() gives a readable command."""
        assert str(PathCommand("l", (1.5, 2))) == "l 1.5 2"
        assert str(PathCommand("z")) == "z"


class TestPathCommandInfoRegistry:
    """Tests for COMMAND_INFO registry."""

    def test_all_commands_registered(self):
        """All letters of the grammar should be in the registry."""
        assert set(COMMAND_INFO.keys()) == set("mzlhvcsqa")

    def test_arity_values(self):
        """Verify the number of values for each command."""
        expected = {"m": 2, "z": 0, "l": 2, "h": 1, "v": 1, "q": 4, "c": 6, "a": 7, "s": 4}
        for cmd, num_values in expected.items():
            assert COMMAND_INFO[cmd].num_values == num_values

    def test_curve_flags(self):
        """Move, close and smooth cubic have no evaluator."""
        assert not COMMAND_INFO["m"].is_curve
        assert not COMMAND_INFO["z"].is_curve
        assert not COMMAND_INFO["s"].is_curve
        for cmd in "lhvqca":
            assert COMMAND_INFO[cmd].is_curve


class TestPathCommandProcessor:
    """Tests for PathCommandProcessor static methods."""

    def test_is_curve_command_unknown(self):
        """Unknown letters are no curves."""
        assert not PathCommandProcessor.is_curve_command("x")

    def test_has_full_arity(self):
        """Too few values are detected, extra values are tolerated."""
        assert PathCommandProcessor.has_full_arity(PathCommand("l", (1, 2)))
        assert PathCommandProcessor.has_full_arity(PathCommand("l", (1, 2, 3)))
        assert not PathCommandProcessor.has_full_arity(PathCommand("q", (1, 2, 3)))

    def test_validate_command_ok(self):
        """Well-formed commands pass."""
        PathCommandProcessor.validate_command(PathCommand("c", (1, 2, 3, 4, 5, 6)))
        PathCommandProcessor.validate_command(PathCommand("z"))

    def test_validate_command_wrong_arity(self):
        """A wrong number of values raises ValueError."""
        with pytest.raises(ValueError, match="needs 2 values"):
            PathCommandProcessor.validate_command(PathCommand("l", (1,)))

    def test_validate_command_nan(self):
        """NaN values raise ValueError."""
        with pytest.raises(ValueError, match="non-finite"):
            PathCommandProcessor.validate_command(PathCommand("l", (1, math.nan)))

    def test_validate_command_unknown(self):
        """Unknown command letters raise ValueError."""
        with pytest.raises(ValueError, match="Unknown command"):
            PathCommandProcessor.validate_command(PathCommand("x", ()))

    def test_validate_command_sequence_must_start_with_move(self):
        """A path must start with a MoveTo."""
        with pytest.raises(ValueError, match="must start with 'm'"):
            PathCommandProcessor.validate_command_sequence([PathCommand("l", (1, 2))])

    def test_validate_command_sequence_reports_index(self):
        """The index of the first invalid command is reported."""
        cmds = [PathCommand("m", (0, 0)), PathCommand("l", (1, 2)), PathCommand("q", (1, 2))]
        with pytest.raises(ValueError, match="index 2"):
            PathCommandProcessor.validate_command_sequence(cmds)
