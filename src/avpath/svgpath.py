"""Handling path strings: parsing to and serializing from PathCommand sequences"""

from __future__ import annotations

import math
import re
from typing import Callable, ClassVar, List, Optional, Sequence

from avpath.command import PathCommand
from avpath.common import PATH_CMDS


class AvSvgPath:
    """
    This class provides a collection of static methods to read and write path strings.
    A path string is a sequence of commands, each a letter followed by its numbers.
    Commands (command : number of values : command-character):
        MoveTo:           2: m
        LineTo:           2: l   1: h(x)   1: v(y)
        CubicBezier:      6: c   4: s (reserved)
        QuadraticBezier:  4: q
        ArcCurve:         7: a
        ClosePath:        0: z
    Letters are accepted in both cases; lowercase is the canonical form.
    """

    # Command letters:
    SVG_CMDS: ClassVar[str] = PATH_CMDS
    # Separator between numbers:
    SVG_SEPARATORS: ClassVar[str] = r"[\s,]+"

    @staticmethod
    def _parse_number(token: str) -> float:
        try:
            return float(token)
        except ValueError:
            return math.nan

    @staticmethod
    def _format_number(value: float) -> str:
        if math.isfinite(value) and float(value).is_integer():
            return str(int(value))
        return repr(float(value))

    @staticmethod
    def parse(path_string: str) -> List[PathCommand]:
        """Parse the given _path_string_ into a list of commands.

        Malformed numbers become NaN, nothing is rejected.

        Args:
            path_string (str): a path string like "m 0 0 l 10,0 z"

        Returns:
            List[PathCommand]: the commands in order
        """
        org_commands = re.findall(
            f"([{AvSvgPath.SVG_CMDS}])([^{AvSvgPath.SVG_CMDS}]*)", path_string, flags=re.IGNORECASE
        )
        commands = []
        for command_letter, arg_string in org_commands:
            args = [arg for arg in re.split(AvSvgPath.SVG_SEPARATORS, arg_string.strip()) if arg]
            values = tuple(AvSvgPath._parse_number(arg) for arg in args)
            commands.append(PathCommand(command_letter.lower(), values))
        return commands

    @staticmethod
    def serialize(commands: Sequence[PathCommand], round_func: Optional[Callable] = None) -> str:
        """
        Write the given _commands_ as path string.
        Each value is passed through _round_func_ first if given.

        Args:
            commands (Sequence[PathCommand]): the commands
            round_func (Optional[Callable], optional):
                a function that takes a float and returns a float. Defaults to None.

        Returns:
            str: the path string
        """
        ret_commands = []
        for cmd in commands:
            if cmd.type == "z":
                ret_commands.append("z")
                continue
            values = [round_func(v) if round_func else v for v in cmd.values]
            ret_commands.append(" ".join([cmd.type.lower()] + [AvSvgPath._format_number(v) for v in values]))
        return " ".join(ret_commands).strip()

    @staticmethod
    def to_svg_path_data(commands: Sequence[PathCommand], round_func: Optional[Callable] = None) -> str:
        """Write the given _commands_ as SVG "d" attribute.

        Values are absolute, so the SVG form uses uppercase letters.
        """
        ret_commands = []
        for cmd in commands:
            values = [round_func(v) if round_func else v for v in cmd.values]
            ret_commands.append(" ".join([cmd.type.upper()] + [AvSvgPath._format_number(v) for v in values]))
        return " ".join(ret_commands).strip()
