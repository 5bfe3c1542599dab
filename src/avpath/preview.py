"""SVG preview comparing an original path with its simplified version."""

from __future__ import annotations

import gzip
import io
from typing import Optional, Sequence, Tuple

import numpy as np
import svgwrite
import svgwrite.container
from svgwrite.extensions import Inkscape

from avpath.command import PathCommand
from avpath.common import DEFAULT_PRECISION
from avpath.sampler import AvPathSampler
from avpath.svgpath import AvSvgPath


class AvSvgPreview:
    """A drawing with one layer per path and a debug layer with the sampled polyline.

    Layers:
        - original    -- the input path (grey)
        - simplified  -- the simplified path (red)
        - debug       -- sample points of the simplified path (blue dots)
    The y-axis points up, as in glyph outlines.
    """

    drawing: svgwrite.Drawing
    root_group: svgwrite.container.Group

    def __init__(self, extent: Tuple[float, float, float, float], margin: float = 0.05):
        """Initialize the drawing for the given _extent_ (xmin, ymin, xmax, ymax).

        Args:
            extent: Area to show
            margin: Space around the extent relative to its larger side
        """
        xmin, ymin, xmax, ymax = extent
        size = max(xmax - xmin, ymax - ymin, 1e-9)
        pad = size * margin
        vb_x = xmin - pad
        vb_width = xmax - xmin + 2 * pad
        vb_height = ymax - ymin + 2 * pad
        self.stroke_width = size / 500.0

        # profile="full" to support numbers with more than 4 decimal digits.
        # debug=False: paths may carry "nan" from malformed input, which the validator rejects
        self.drawing = svgwrite.Drawing(
            size=("100%", "100%"),
            viewBox=f"{vb_x} {-(ymax + pad)} {vb_width} {vb_height}",
            profile="full",
            debug=False,
        )
        self.root_group = self.drawing.g(id="root", transform="scale(1,-1)")
        self.drawing.add(self.root_group)

        self._inkscape = Inkscape(self.drawing)
        self.original_layer = self._inkscape.layer(label="original", locked=False)
        self.simplified_layer = self._inkscape.layer(label="simplified", locked=False)
        self.debug_layer = self._inkscape.layer(label="debug", locked=False)
        self.root_group.add(self.original_layer)
        self.root_group.add(self.simplified_layer)
        self.root_group.add(self.debug_layer)

    @staticmethod
    def _extent(points: np.ndarray) -> Tuple[float, float, float, float]:
        finite = points[np.all(np.isfinite(points), axis=1)]
        if len(finite) == 0:
            return (0.0, 0.0, 1.0, 1.0)
        return (
            float(finite[:, 0].min()),
            float(finite[:, 1].min()),
            float(finite[:, 0].max()),
            float(finite[:, 1].max()),
        )

    @classmethod
    def render(
        cls,
        original: Sequence[PathCommand],
        simplified: Sequence[PathCommand],
        filename: Optional[str] = None,
        precision: int = DEFAULT_PRECISION,
    ) -> AvSvgPreview:
        """Draw _original_ and _simplified_ on top of each other.

        Args:
            original: Commands of the input path
            simplified: Commands of the simplified path
            filename: Save the drawing there if given (".svgz" is compressed)
            precision: Number of samples per command for the debug layer

        Returns:
            AvSvgPreview: the preview
        """
        original_points = AvPathSampler.get_points_many(original, (0.0, 0.0), (0.0, 0.0), precision)
        simplified_points = AvPathSampler.get_points_many(simplified, (0.0, 0.0), (0.0, 0.0), precision)
        preview = cls(cls._extent(np.concatenate([original_points, simplified_points], axis=0)))

        preview.original_layer.add(
            preview.drawing.path(
                d=AvSvgPath.to_svg_path_data(original),
                stroke="grey",
                stroke_width=preview.stroke_width * 3,
                fill="none",
            )
        )
        preview.simplified_layer.add(
            preview.drawing.path(
                d=AvSvgPath.to_svg_path_data(simplified),
                stroke="red",
                stroke_width=preview.stroke_width,
                fill="none",
            )
        )
        for x, y in simplified_points:
            if np.isfinite(x) and np.isfinite(y):
                preview.debug_layer.add(
                    preview.drawing.circle(center=(float(x), float(y)), r=preview.stroke_width * 1.5, fill="blue")
                )

        if filename:
            preview.save_as(filename)
        return preview

    def to_string(self, pretty: bool = False, indent: int = 2) -> str:
        """Return the SVG document as string."""
        svg_buffer = io.StringIO()
        self.drawing.write(svg_buffer, pretty=pretty, indent=indent)
        return svg_buffer.getvalue()

    def save_as(self, filename: str, pretty: bool = True, indent: int = 2):
        """Save as SVG file; a filename ending in ".svgz" is saved compressed.

        Args:
            filename (str): path and filename
            pretty (bool, optional): True for easy readable output. Defaults to True.
            indent (int, optional): Indention if pretty is enabled. Defaults to 2 spaces.
        """
        output_data = self.to_string(pretty=pretty, indent=indent).encode("utf-8")
        if str(filename).endswith(".svgz"):
            output_data = gzip.compress(output_data)

        with open(filename, "wb") as svg_file:
            svg_file.write(output_data)
