"""Central module containing types and constants for path processing."""

from __future__ import annotations

from typing import Literal, Tuple

###############################################################################
# Types
###############################################################################


PathCmdType = Literal[  # Type-Definition for path commands (absolute values, lowercase letters)
    # MoveTo (2) - start a new subpath and move the current point to (x,y)
    "m",
    # ClosePath (0) - close subpath by drawing a line from the current point to start point
    "z",
    # LineTo (2) - draw a straight line from the current point to (x,y)
    "l",
    # Horizontal LineTo (1) - draw a horizontal line to the given x coordinate (y stays unchanged)
    "h",
    # Vertical LineTo (1) - draw a vertical line to the given y coordinate (x stays unchanged)
    "v",
    # Cubic Bezier To (6) - draw a cubic Bezier curve with two control points and an endpoint (x,y)
    "c",
    # Smooth cubic Bezier To (4) - reserved, no evaluator
    "s",
    # Quadratic Bezier To (4) - draw a quadratic Bezier curve with one control point and an endpoint (x,y)
    "q",
    # Arc (7) - draw an elliptical arc (rx ry x-axis-rotation large-arc-flag sweep-flag x y)
    "a",
]

Point = Tuple[float, float]


###############################################################################
# Consts
###############################################################################

# Command letters (lowercase is canonical):
PATH_CMDS: str = "mzlhvcsqa"

# Error reported by a fit that had no interior samples to solve for
APPROXIMATION_SENTINEL_ERROR: float = 1.0e9

# Number of samples per segment if nothing else is given
DEFAULT_PRECISION: int = 20
