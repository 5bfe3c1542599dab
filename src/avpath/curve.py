"""Parametric evaluation of path commands."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from avpath.command import PathCommand, PathCommandProcessor
from avpath.common import Point

logger = logging.getLogger(__name__)

CurveFn = Callable[[float], Point]


###############################################################################
# ArcCenterParams
###############################################################################


@dataclass(frozen=True)
class ArcCenterParams:
    """Center parameterization of an elliptical arc.

    Attributes:
        cx: x-coordinate of the ellipse center
        cy: y-coordinate of the ellipse center
        rx: x-radius, scaled up if the endpoints were out of reach
        ry: y-radius, scaled up if the endpoints were out of reach
        phi: rotation of the ellipse's x-axis in radians
        start_angle: angle of the start point in radians
        delta_angle: swept angle in radians, negative for sweep-flag 0
    """

    cx: float
    cy: float
    rx: float
    ry: float
    phi: float
    start_angle: float
    delta_angle: float

    def point_at(self, t: float) -> Point:
        """Return the point of the arc at parameter _t_ (0 = start, 1 = end)."""
        angle = self.start_angle + t * self.delta_angle
        cos_phi = math.cos(self.phi)
        sin_phi = math.sin(self.phi)
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        x = self.cx + self.rx * cos_phi * cos_a - self.ry * sin_phi * sin_a
        y = self.cy + self.rx * sin_phi * cos_a + self.ry * cos_phi * sin_a
        return (x, y)


###############################################################################
# AvCurve
###############################################################################


class AvCurve:
    """Class to provide parametric functions t -> (x, y) for path commands."""

    @staticmethod
    def _vector_angle(ux: float, uy: float, vx: float, vy: float) -> float:
        """Signed angle from vector u to vector v in radians."""
        dot = ux * vx + uy * vy
        length = math.sqrt((ux * ux + uy * uy) * (vx * vx + vy * vy))
        angle = math.acos(min(max(dot / length, -1.0), 1.0))
        if ux * vy - uy * vx < 0:
            angle = -angle
        return angle

    @staticmethod
    def arc_to_center(start: Sequence[float], values: Sequence[float]) -> Optional[ArcCenterParams]:
        """Convert an arc from endpoint to center parameterization.

        Follows the conversion from the SVG implementation notes: rotate the half chord into
        the ellipse frame, scale the radii up if the end point is out of reach, recover the
        center and derive start and swept angle.

        Args:
            start: The current point (x, y)
            values: The arc values (rx, ry, x-axis-rotation in degrees, large-arc-flag, sweep-flag, x, y)

        Returns:
            ArcCenterParams or None if the arc is degenerate (a zero or non-finite
            radius, a non-finite rotation, start and end point coincide or the
            radii are too far out of scale with the chord).
        """
        rx, ry, x_axis_rotation, large_arc_flag, sweep_flag, ex, ey = values[:7]
        sx, sy = start[0], start[1]

        if not (math.isfinite(rx) and math.isfinite(ry) and math.isfinite(x_axis_rotation)):
            return None

        rx = abs(rx)
        ry = abs(ry)
        # Zero radius (squares underflowing to zero included)
        if rx * rx == 0.0 or ry * ry == 0.0:
            return None

        phi = math.radians(x_axis_rotation)
        cos_phi = math.cos(phi)
        sin_phi = math.sin(phi)

        # Half chord in the ellipse frame
        dx2 = (sx - ex) / 2.0
        dy2 = (sy - ey) / 2.0
        x1p = cos_phi * dx2 + sin_phi * dy2
        y1p = -sin_phi * dx2 + cos_phi * dy2
        if x1p == 0.0 and y1p == 0.0:
            return None

        x1p2 = x1p * x1p
        y1p2 = y1p * y1p

        # Out-of-reach end point: scale radii up
        lam = x1p2 / (rx * rx) + y1p2 / (ry * ry)
        if lam > 1.0:
            scale = math.sqrt(lam)
            rx *= scale
            ry *= scale

        rx2 = rx * rx
        ry2 = ry * ry

        denominator = rx2 * y1p2 + ry2 * x1p2
        if denominator == 0.0:
            return None

        sign = 1.0 if bool(large_arc_flag) != bool(sweep_flag) else -1.0
        radicand = (rx2 * ry2 - rx2 * y1p2 - ry2 * x1p2) / denominator
        coef = sign * math.sqrt(max(0.0, radicand))

        cxp = coef * (rx * y1p) / ry
        cyp = coef * -(ry * x1p) / rx

        cx = cos_phi * cxp - sin_phi * cyp + (sx + ex) / 2.0
        cy = sin_phi * cxp + cos_phi * cyp + (sy + ey) / 2.0

        ux = (x1p - cxp) / rx
        uy = (y1p - cyp) / ry
        vx = (-x1p - cxp) / rx
        vy = (-y1p - cyp) / ry

        # Direction vectors underflowing to zero length
        if (ux * ux + uy * uy) * (vx * vx + vy * vy) == 0.0:
            return None

        start_angle = AvCurve._vector_angle(1.0, 0.0, ux, uy)
        delta_angle = AvCurve._vector_angle(ux, uy, vx, vy)

        if not sweep_flag and delta_angle > 0:
            delta_angle -= 2.0 * math.pi
        elif sweep_flag and delta_angle < 0:
            delta_angle += 2.0 * math.pi

        return ArcCenterParams(cx, cy, rx, ry, phi, start_angle, delta_angle)

    @staticmethod
    def _line_fn(sx: float, sy: float, x: float, y: float) -> CurveFn:
        return lambda t: (sx * (1 - t) + x * t, sy * (1 - t) + y * t)

    @staticmethod
    def get_fn(cmd: PathCommand, start: Sequence[float]) -> Optional[CurveFn]:
        """Return the parametric function of the given command.

        The function maps t in [0, 1] to (x, y) with t=0 at _start_ and t=1 at the
        command's end point.

        Args:
            cmd: The command to evaluate
            start: The current point (x, y) before the command

        Returns:
            The function, or None if the command is no curve (m, z, s, unknown)
            or carries too few values.
        """
        if not PathCommandProcessor.is_curve_command(cmd.type):
            return None
        if not PathCommandProcessor.has_full_arity(cmd):
            logger.debug("Command '%s' has too few values: %s", cmd.type, cmd.values)
            return None

        sx, sy = float(start[0]), float(start[1])

        if cmd.type == "l":
            x, y = cmd.values[:2]
            return AvCurve._line_fn(sx, sy, x, y)

        if cmd.type == "h":
            x = cmd.values[0]
            return lambda t: (sx * (1 - t) + x * t, sy)

        if cmd.type == "v":
            y = cmd.values[0]
            return lambda t: (sx, sy * (1 - t) + y * t)

        if cmd.type == "q":
            x1, y1, x2, y2 = cmd.values[:4]

            def quadratic(t: float) -> Point:
                # B(t) = (1-t)^2*P0 + 2*(1-t)*t*P1 + t^2*P2
                u = 1 - t
                return (
                    u * u * sx + 2 * u * t * x1 + t * t * x2,
                    u * u * sy + 2 * u * t * y1 + t * t * y2,
                )

            return quadratic

        if cmd.type == "c":
            x1, y1, x2, y2, x3, y3 = cmd.values[:6]

            def cubic(t: float) -> Point:
                # B(t) = (1-t)^3*P0 + 3*(1-t)^2*t*P1 + 3*(1-t)*t^2*P2 + t^3*P3
                u = 1 - t
                return (
                    u * u * u * sx + 3 * u * u * t * x1 + 3 * u * t * t * x2 + t * t * t * x3,
                    u * u * u * sy + 3 * u * u * t * y1 + 3 * u * t * t * y2 + t * t * t * y3,
                )

            return cubic

        # cmd.type == "a"
        params = AvCurve.arc_to_center((sx, sy), cmd.values)
        if params is None:
            # Degenerate arc: straight segment
            logger.debug("Degenerate arc %s from (%g, %g), using a line", cmd.values, sx, sy)
            return AvCurve._line_fn(sx, sy, cmd.values[5], cmd.values[6])
        return params.point_at
