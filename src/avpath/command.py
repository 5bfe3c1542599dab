"""Path command record and command metadata.

This module contains the immutable PathCommand value type, the registry
describing each command letter and helpers to query and validate commands.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

from avpath.common import PathCmdType

###############################################################################
# PathCommandInfo
###############################################################################


@dataclass(frozen=True)
class PathCommandInfo:
    """Metadata for path commands.

    Attributes:
        num_values: Number of values this command carries
        is_curve: Whether an evaluator exists for this command
    """

    num_values: int
    is_curve: bool


# Command registry with metadata
COMMAND_INFO = {
    "m": PathCommandInfo(2, False),  # MoveTo
    "z": PathCommandInfo(0, False),  # ClosePath - sampled as line to the subpath start
    "l": PathCommandInfo(2, True),  # LineTo
    "h": PathCommandInfo(1, True),  # Horizontal LineTo
    "v": PathCommandInfo(1, True),  # Vertical LineTo
    "c": PathCommandInfo(6, True),  # Cubic
    "s": PathCommandInfo(4, False),  # Smooth cubic - reserved, no evaluator
    "q": PathCommandInfo(4, True),  # Quadratic
    "a": PathCommandInfo(7, True),  # Arc
}


###############################################################################
# PathCommand
###############################################################################


@dataclass(frozen=True)
class PathCommand:
    """One instruction of a path outline, e.g. ``l 10 20``.

    Values are absolute coordinates regardless of the lowercase letter.

    Attributes:
        type: The command letter (lowercase)
        values: The command's numbers in order
    """

    type: PathCmdType
    values: Tuple[float, ...] = ()

    def __post_init__(self):
        # Accept lists and ints (e.g. commands built by hand) but always store a tuple of floats
        object.__setattr__(self, "values", tuple(float(v) for v in self.values))

    @classmethod
    def line(cls, end: Sequence[float]) -> PathCommand:
        """Create a ``l`` command to the given end point."""
        return cls("l", (float(end[0]), float(end[1])))

    def __str__(self) -> str:
        if self.type == "z":
            return "z"
        return " ".join([self.type] + [f"{v:g}" for v in self.values])


###############################################################################
# PathCommandProcessor
###############################################################################


class PathCommandProcessor:
    """Handles queries and validation of single commands."""

    @staticmethod
    def is_curve_command(cmd: str) -> bool:
        """Return True if the command can be evaluated as a parametric curve."""
        info = COMMAND_INFO.get(cmd)
        return info is not None and info.is_curve

    @staticmethod
    def has_full_arity(cmd: PathCommand) -> bool:
        """Return True if the command carries at least as many values as its type requires."""
        info = COMMAND_INFO.get(cmd.type)
        return info is not None and len(cmd.values) >= info.num_values

    @staticmethod
    def validate_command(cmd: PathCommand) -> None:
        """Validate type, arity and numbers of a command.

        Raises:
            ValueError: If the command is unknown, has a wrong number of values
                or carries non-finite numbers.
        """
        if cmd.type not in COMMAND_INFO:
            raise ValueError(f"Unknown command '{cmd.type}'")
        expected = COMMAND_INFO[cmd.type].num_values
        if len(cmd.values) != expected:
            raise ValueError(f"Command '{cmd.type}' needs {expected} values, got {len(cmd.values)}")
        for i, value in enumerate(cmd.values):
            if not math.isfinite(value):
                raise ValueError(f"Command '{cmd.type}' has non-finite value {value} at position {i}")

    @staticmethod
    def validate_command_sequence(commands: Sequence[PathCommand]) -> None:
        """Validate every command and that drawing starts with a MoveTo.

        Raises:
            ValueError: On the first invalid command.
        """
        for i, cmd in enumerate(commands):
            try:
                PathCommandProcessor.validate_command(cmd)
            except ValueError as e:
                raise ValueError(f"Invalid command at index {i}: {e}") from e
        if commands and commands[0].type != "m":
            raise ValueError(f"Path must start with 'm', found '{commands[0].type}'")
