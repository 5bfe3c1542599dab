"""Sampling of path commands into polylines."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from avpath.command import PathCommand
from avpath.common import DEFAULT_PRECISION, Point
from avpath.curve import AvCurve


class AvPathSampler:
    """Class to polygonize single commands and command sequences.

    Polylines are arrays of shape (n, 2) holding (x, y) per row.
    """

    @staticmethod
    def get_points(cmd: PathCommand, start: Sequence[float], count: int) -> Optional[NDArray[np.float64]]:
        """Sample a command at _count_ evenly spaced parameters t in [0, 1] (both included).

        Args:
            cmd: The command to sample
            start: The current point (x, y) before the command
            count: Number of samples, at least 2 to get both end points

        Returns:
            Array of shape (count, 2), or None if the command is no curve.
        """
        fn = AvCurve.get_fn(cmd, start)
        if fn is None:
            return None

        result = np.empty((count, 2), dtype=np.float64)
        for i, t in enumerate(np.linspace(0.0, 1.0, count, dtype=np.float64)):
            result[i] = fn(float(t))
        return result

    @staticmethod
    def get_points_many(
        cmds: Sequence[PathCommand],
        curve_start: Sequence[float],
        start: Sequence[float],
        count: int = DEFAULT_PRECISION,
    ) -> NDArray[np.float64]:
        """Walk a command sequence and sample it into one polyline.

        The polyline begins with _start_ (unless the first command is a MoveTo).
        A MoveTo adds its single point and starts a new subpath, a ClosePath is
        sampled as line back to the subpath start and every other command adds its
        samples without the first one, which duplicates the current point.
        Commands without an evaluator are skipped.

        Args:
            cmds: The commands to walk
            curve_start: Start point of the current subpath (target of "z")
            start: The current point before the first command
            count: Number of samples per command

        Returns:
            Array of shape (n, 2).
        """
        chunks = []
        subpath_start: Point = (float(curve_start[0]), float(curve_start[1]))
        current: Point = (float(start[0]), float(start[1]))

        if not cmds or cmds[0].type != "m":
            chunks.append(np.array([current], dtype=np.float64))

        for cmd in cmds:
            # Jump
            if cmd.type == "m":
                if len(cmd.values) < 2:
                    continue
                current = (cmd.values[0], cmd.values[1])
                subpath_start = current
                chunks.append(np.array([current], dtype=np.float64))
                continue

            # Close path
            if cmd.type == "z":
                cmd = PathCommand.line(subpath_start)

            pts = AvPathSampler.get_points(cmd, current, count)
            if pts is None or len(pts) == 0:
                continue

            chunks.append(pts[1:])
            current = (float(pts[-1, 0]), float(pts[-1, 1]))

        if not chunks:
            return np.empty((0, 2), dtype=np.float64)
        return np.concatenate(chunks, axis=0)

    @staticmethod
    def end_point(cmds: Sequence[PathCommand], curve_start: Sequence[float], start: Sequence[float]) -> Point:
        """Return the current point after walking _cmds_, sampled at 2-point resolution.

        Commands without an evaluator (e.g. "s") leave the current point unchanged.
        """
        pts = AvPathSampler.get_points_many(cmds, curve_start, start, 2)
        if len(pts) == 0:
            return (float(start[0]), float(start[1]))
        return (float(pts[-1, 0]), float(pts[-1, 1]))
