"""Fitting of lines, quadratic and cubic Bezier curves to sampled polylines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from avpath.command import PathCommand
from avpath.common import APPROXIMATION_SENTINEL_ERROR, DEFAULT_PRECISION, Point
from avpath.sampler import AvPathSampler

PointsLike = Union[Sequence[Tuple[float, float]], NDArray[np.float64]]


###############################################################################
# ApproximationResult
###############################################################################


@dataclass(frozen=True)
class ApproximationResult:
    """A replacement command and how well it fits.

    Attributes:
        cmd: The fitted command, drawn from the first sample point
        error: Mean distance between the samples and the fitted curve at matching t
        start: The first sample point (informational)
    """

    cmd: PathCommand
    error: float
    start: Optional[Point] = None


# An approximator maps a sampled polyline to its best replacement
PathApproximator = Callable[[PointsLike], Optional[ApproximationResult]]


###############################################################################
# AvCurveApproximator
###############################################################################


class AvCurveApproximator:
    """Class to fit single commands to sampled polylines.

    All fits keep the first and last sample as end points and assign sample i
    the parameter t = i / (n - 1). The error is parametric: the mean Euclidean
    distance between sample i and the fitted curve at the same t, not the
    geometric distance to the curve.
    """

    @staticmethod
    def _as_xy(points: PointsLike) -> NDArray[np.float64]:
        if isinstance(points, np.ndarray) and points.dtype == np.float64:
            points_array = points
        else:
            points_array = np.asarray(points, dtype=np.float64)
        if points_array.size == 0:
            return np.empty((0, 2), dtype=np.float64)
        if points_array.ndim != 2 or points_array.shape[1] < 2:
            raise ValueError("Approximation requires (x, y) formatted points.")
        return points_array[:, :2]

    @staticmethod
    def _params(num_points: int) -> NDArray[np.float64]:
        return np.arange(num_points, dtype=np.float64) / float(num_points - 1)

    @staticmethod
    def _mean_error(xy_points: NDArray[np.float64], fitted: NDArray[np.float64]) -> float:
        deltas = xy_points - fitted
        return float(np.mean(np.hypot(deltas[:, 0], deltas[:, 1])))

    @staticmethod
    def _start(xy_points: NDArray[np.float64]) -> Point:
        return (float(xy_points[0, 0]), float(xy_points[0, 1]))

    @staticmethod
    def _fallback_line(xy_points: NDArray[np.float64]) -> ApproximationResult:
        """Line to the last sample carrying the sentinel error, for fits without interior samples."""
        return ApproximationResult(
            PathCommand.line(xy_points[-1]),
            APPROXIMATION_SENTINEL_ERROR,
            AvCurveApproximator._start(xy_points),
        )

    @classmethod
    def approximate_line(cls, points: PointsLike) -> Optional[ApproximationResult]:
        """Fit a straight line from the first to the last sample.

        Args:
            points: Sampled points as (x, y) tuples or array of shape (n, 2)

        Returns:
            ApproximationResult with a "l" command, or None for fewer than two points.
        """
        xy_points = cls._as_xy(points)
        num_points = xy_points.shape[0]
        if num_points < 2:
            return None

        t = cls._params(num_points)[:, np.newaxis]
        fitted = xy_points[0] + (xy_points[-1] - xy_points[0]) * t

        return ApproximationResult(
            PathCommand.line(xy_points[-1]),
            cls._mean_error(xy_points, fitted),
            cls._start(xy_points),
        )

    @classmethod
    def approximate_quadratic(cls, points: PointsLike) -> Optional[ApproximationResult]:
        """Fit a quadratic Bezier curve with fixed end points.

        Each interior sample is solved for the control point by inverting
        B(t) = (1-t)^2*P0 + 2*(1-t)*t*P1 + t^2*P2; the candidates are averaged.

        Args:
            points: Sampled points as (x, y) tuples or array of shape (n, 2)

        Returns:
            ApproximationResult with a "q" command, a "l" command with the
            sentinel error if there are no interior samples, or None for fewer
            than two points.
        """
        xy_points = cls._as_xy(points)
        num_points = xy_points.shape[0]
        if num_points < 2:
            return None
        if num_points < 3:
            return cls._fallback_line(xy_points)

        p0 = xy_points[0]
        p2 = xy_points[-1]
        params = cls._params(num_points)

        # Interior samples only: 0 < t < 1
        t = params[1:-1, np.newaxis]
        omt = 1.0 - t
        base = omt * omt * p0 + t * t * p2
        candidates = (xy_points[1:-1] - base) / (2.0 * omt * t)
        ctrl = np.mean(candidates, axis=0)

        t_all = params[:, np.newaxis]
        omt_all = 1.0 - t_all
        fitted = omt_all * omt_all * p0 + 2.0 * omt_all * t_all * ctrl + t_all * t_all * p2

        return ApproximationResult(
            PathCommand("q", (float(ctrl[0]), float(ctrl[1]), float(p2[0]), float(p2[1]))),
            cls._mean_error(xy_points, fitted),
            cls._start(xy_points),
        )

    @classmethod
    def approximate_cubic(cls, points: PointsLike) -> Optional[ApproximationResult]:
        """Fit a cubic Bezier curve with fixed end points.

        Each interior sample's residual R = P - ((1-t)^3*P0 + t^3*P3) is split between
        the two control points using the Bernstein weights w1 = 3(1-t)^2*t and
        w2 = 3(1-t)*t^2 as partition ratio r = w1 / (w1 + w2); the per-sample
        candidates R*r/w1 and R*(1-r)/w2 are averaged.

        Args:
            points: Sampled points as (x, y) tuples or array of shape (n, 2)

        Returns:
            ApproximationResult with a "c" command, a "l" command with the
            sentinel error if there are no interior samples, or None for fewer
            than two points.
        """
        xy_points = cls._as_xy(points)
        num_points = xy_points.shape[0]
        if num_points < 2:
            return None
        if num_points < 3:
            return cls._fallback_line(xy_points)

        p0 = xy_points[0]
        p3 = xy_points[-1]
        params = cls._params(num_points)

        t = params[1:-1, np.newaxis]
        omt = 1.0 - t
        w1 = 3.0 * omt * omt * t
        w2 = 3.0 * omt * t * t
        residual = xy_points[1:-1] - (omt * omt * omt * p0 + t * t * t * p3)

        ratio = w1 / (w1 + w2)
        ctrl1 = np.mean(residual * ratio / w1, axis=0)
        ctrl2 = np.mean(residual * (1.0 - ratio) / w2, axis=0)

        t_all = params[:, np.newaxis]
        omt_all = 1.0 - t_all
        fitted = (
            omt_all**3 * p0
            + 3.0 * omt_all * omt_all * t_all * ctrl1
            + 3.0 * omt_all * t_all * t_all * ctrl2
            + t_all**3 * p3
        )

        values = (float(ctrl1[0]), float(ctrl1[1]), float(ctrl2[0]), float(ctrl2[1]), float(p3[0]), float(p3[1]))
        return ApproximationResult(
            PathCommand("c", values),
            cls._mean_error(xy_points, fitted),
            cls._start(xy_points),
        )

    @classmethod
    def approximate_auto(
        cls, threshold_line: float, threshold_quadratic: float, threshold_cubic: float
    ) -> PathApproximator:
        """Create an approximator trying line, quadratic and cubic in this order.

        The first fit whose error is within its own threshold wins. If none
        qualifies the lowest-error fit is returned.

        Args:
            threshold_line: Accepted error of a line fit
            threshold_quadratic: Accepted error of a quadratic fit
            threshold_cubic: Accepted error of a cubic fit

        Returns:
            Function mapping sampled points to the chosen ApproximationResult
            (None only if no fit was possible).
        """

        def approximate(points: PointsLike) -> Optional[ApproximationResult]:
            xy_points = cls._as_xy(points)

            line_approx = cls.approximate_line(xy_points)
            if line_approx and line_approx.error <= threshold_line:
                return line_approx

            quad_approx = cls.approximate_quadratic(xy_points)
            if quad_approx and quad_approx.error <= threshold_quadratic:
                return quad_approx

            cubic_approx = cls.approximate_cubic(xy_points)
            if cubic_approx and cubic_approx.error <= threshold_cubic:
                return cubic_approx

            approximations = [a for a in (line_approx, quad_approx, cubic_approx) if a is not None]
            if not approximations:
                return None
            return min(approximations, key=lambda a: a.error)

        return approximate

    @staticmethod
    def approximate_commands(
        approximator: PathApproximator,
        cmds: Sequence[PathCommand],
        curve_start: Sequence[float],
        start: Sequence[float],
        count: int = DEFAULT_PRECISION,
    ) -> Optional[ApproximationResult]:
        """Sample a command window from _start_ and fit it with _approximator_."""
        points = AvPathSampler.get_points_many(cmds, curve_start, start, count)
        return approximator(points)
