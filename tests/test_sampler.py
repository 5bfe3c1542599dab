"""Tests for AvPathSampler."""

import numpy as np
import pytest

from avpath.command import PathCommand
from avpath.sampler import AvPathSampler
from avpath.svgpath import AvSvgPath


class TestGetPoints:
    """Tests for sampling single commands."""

    def test_line_samples(self):
        """Evenly spaced t including both ends."""
        pts = AvPathSampler.get_points(PathCommand("l", (10, 0)), (0.0, 0.0), 5)
        np.testing.assert_allclose(pts, [[0, 0], [2.5, 0], [5, 0], [7.5, 0], [10, 0]])

    def test_shape(self):
        """Result has one row per sample."""
        pts = AvPathSampler.get_points(PathCommand("c", (0, 1, 1, 1, 1, 0)), (0.0, 0.0), 20)
        assert pts.shape == (20, 2)
        assert pts.dtype == np.float64

    def test_no_curve(self):
        """Move and close give None."""
        assert AvPathSampler.get_points(PathCommand("m", (1, 1)), (0.0, 0.0), 5) is None
        assert AvPathSampler.get_points(PathCommand("z"), (0.0, 0.0), 5) is None


class TestGetPointsMany:
    """Tests for sampling command sequences."""

    def test_starts_with_current_point(self):
        """Without MoveTo the polyline starts at the current point."""
        cmds = AvSvgPath.parse("l 10 0 l 10 10")
        pts = AvPathSampler.get_points_many(cmds, (0.0, 0.0), (0.0, 0.0), 3)
        np.testing.assert_allclose(pts, [[0, 0], [5, 0], [10, 0], [10, 5], [10, 10]])

    def test_segments_share_one_point(self):
        """Each command adds count - 1 points."""
        cmds = AvSvgPath.parse("l 10 0 q 15 5 10 10 c 5 10 0 5 0 0")
        pts = AvPathSampler.get_points_many(cmds, (0.0, 0.0), (0.0, 0.0), 20)
        assert pts.shape == (1 + 3 * 19, 2)
        # no duplicated consecutive points
        assert np.all(np.hypot(*np.diff(pts, axis=0).T) > 0)

    def test_move_resets(self):
        """MoveTo emits a single point and becomes the subpath start."""
        cmds = AvSvgPath.parse("m 5 5 l 7 5 z")
        pts = AvPathSampler.get_points_many(cmds, (0.0, 0.0), (0.0, 0.0), 3)
        np.testing.assert_allclose(pts, [[5, 5], [6, 5], [7, 5], [6, 5], [5, 5]])

    def test_close_uses_curve_start(self):
        """ClosePath returns to the given subpath start when there is no MoveTo."""
        cmds = AvSvgPath.parse("l 4 4 z")
        pts = AvPathSampler.get_points_many(cmds, (0.0, 4.0), (4.0, 0.0), 2)
        np.testing.assert_allclose(pts, [[4, 0], [4, 4], [0, 4]])

    def test_horizontal_vertical(self):
        """h and v follow the current point."""
        cmds = AvSvgPath.parse("m 1 1 h 3 v 4")
        pts = AvPathSampler.get_points_many(cmds, (0.0, 0.0), (0.0, 0.0), 2)
        np.testing.assert_allclose(pts, [[1, 1], [3, 1], [3, 4]])

    def test_unsupported_command_skipped(self):
        """Commands without evaluator are skipped."""
        cmds = AvSvgPath.parse("l 1 0 s 1 2 3 4 l 2 0")
        pts = AvPathSampler.get_points_many(cmds, (0.0, 0.0), (0.0, 0.0), 2)
        np.testing.assert_allclose(pts, [[0, 0], [1, 0], [2, 0]])

    def test_default_count(self):
        """Default is 20 samples per command."""
        pts = AvPathSampler.get_points_many([PathCommand("l", (1, 0))], (0.0, 0.0), (0.0, 0.0))
        assert len(pts) == 20

    def test_empty(self):
        """No commands give just the current point."""
        pts = AvPathSampler.get_points_many([], (0.0, 0.0), (3.0, 4.0))
        np.testing.assert_allclose(pts, [[3, 4]])


class TestEndPoint:
    """Tests for AvPathSampler.end_point"""

    def test_end_point_after_curves(self):
        """End point of the last command."""
        cmds = AvSvgPath.parse("l 10 0 a 5 5 0 0 1 20 0")
        assert AvPathSampler.end_point(cmds, (0.0, 0.0), (0.0, 0.0)) == pytest.approx((20.0, 0.0))

    def test_end_point_after_close(self):
        """ClosePath returns to the subpath start."""
        cmds = AvSvgPath.parse("l 10 0 z")
        assert AvPathSampler.end_point(cmds, (1.0, 1.0), (0.0, 0.0)) == pytest.approx((1.0, 1.0))
