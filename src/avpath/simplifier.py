"""Windowed greedy simplification of paths."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from avpath.approximation import PathApproximator
from avpath.command import PathCommand, PathCommandProcessor
from avpath.common import DEFAULT_PRECISION, Point
from avpath.config import DEFAULT_CONFIG, SimplifyConfig
from avpath.sampler import AvPathSampler
from avpath.svgpath import AvSvgPath

logger = logging.getLogger(__name__)


###############################################################################
# AvPathSimplifier
###############################################################################


class AvPathSimplifier:
    """Replace runs of commands by single commands within an error bound."""

    @staticmethod
    def _window_end(cmds: Sequence[PathCommand], index: int, window_size: int) -> int:
        """Exclusive end of the window starting at _index_; stops before the next MoveTo."""
        end = min(index + window_size, len(cmds))
        for j in range(index + 1, end):
            if cmds[j].type == "m":
                return j
        return end

    @staticmethod
    def _is_approximable(window: Sequence[PathCommand]) -> bool:
        return all(
            cmd.type == "z"
            or (PathCommandProcessor.is_curve_command(cmd.type) and PathCommandProcessor.has_full_arity(cmd))
            for cmd in window
        )

    @staticmethod
    def simplify(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        cmds: Sequence[PathCommand],
        approximate_fn: PathApproximator,
        window_size: int,
        threshold: float = 0.1,
        precision: int = DEFAULT_PRECISION,
    ) -> List[PathCommand]:
        """Simplify a path by replacing windows of commands with single fitted commands.

        MoveTo commands are kept and start a new subpath. Every other run of up to
        _window_size_ commands (never crossing a MoveTo) is sampled with _precision_
        points per command and handed to _approximate_fn_. A fit with an error below
        _threshold_ replaces the whole window, otherwise the window is kept as is.
        Windows holding commands without an evaluator (e.g. "s") are always kept.
        A window of a single command is refit like any other, so its replacement may
        differ from it by float noise or change its type (e.g. "h" becomes "l").

        Args:
            cmds: The commands of the path
            approximate_fn: Maps sampled points to an ApproximationResult (or None)
            window_size: Number of commands to replace at once; values below 1 count as 1
            threshold: Errors below this value are accepted
            precision: Number of samples per command

        Returns:
            List[PathCommand]: the simplified commands
        """
        if window_size < 1:
            logger.warning("window_size %s is below 1, using 1", window_size)
            window_size = 1

        out: List[PathCommand] = []
        current: Point = (0.0, 0.0)
        subpath_start: Point = (0.0, 0.0)

        i = 0
        while i < len(cmds):
            cmd = cmds[i]

            # Move command
            if cmd.type == "m":
                out.append(cmd)
                if len(cmd.values) >= 2:
                    current = (cmd.values[0], cmd.values[1])
                    subpath_start = current
                i += 1
                continue

            end = AvPathSimplifier._window_end(cmds, i, window_size)
            window = list(cmds[i:end])

            approx = None
            if AvPathSimplifier._is_approximable(window):
                points = AvPathSampler.get_points_many(window, subpath_start, current, precision)
                approx = approximate_fn(points)
            else:
                logger.debug("Window %d..%d has commands without evaluator, kept", i, end)

            if approx is not None and approx.error < threshold:
                out.append(approx.cmd)
            else:
                if approx is not None:
                    logger.debug("Window %d..%d kept, error %g >= %g", i, end, approx.error, threshold)
                out.extend(window)

            # Current point always follows the original window
            current = AvPathSampler.end_point(window, subpath_start, current)

            i = end

        return out

    @staticmethod
    def simplify_path_string(path_string: str, config: Optional[SimplifyConfig] = None) -> str:
        """Parse, simplify with the given _config_ (defaults if None) and serialize a path string."""
        config = config or DEFAULT_CONFIG
        cmds = AvSvgPath.parse(path_string)
        simplified = AvPathSimplifier.simplify(
            cmds,
            config.build_approximator(),
            config.window_size,
            config.threshold,
            config.precision,
        )
        logger.debug("Simplified %d commands to %d", len(cmds), len(simplified))
        return AvSvgPath.serialize(simplified)
