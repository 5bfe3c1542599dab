"""Simplification of glyph outlines stored in typeface JSON documents.

A typeface JSON document holds its glyphs as
    {"glyphs": {"A": {"o": "m 10 0 l ...", "ha": 600, ...}, ...}, ...}
where "o" is the glyph's outline as path string.
"""

from __future__ import annotations

import copy
import gzip
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from avpath.config import FONT_GLYPH_CONFIG, SimplifyConfig
from avpath.simplifier import AvPathSimplifier
from avpath.svgpath import AvSvgPath

logger = logging.getLogger(__name__)


@dataclass
class FontSimplifyStats:
    """Counts collected while simplifying a font."""

    glyphs: int = 0
    commands_before: int = 0
    commands_after: int = 0

    @property
    def ratio(self) -> float:
        """Commands after / commands before (1.0 if there were none)."""
        if self.commands_before == 0:
            return 1.0
        return self.commands_after / self.commands_before


class AvFontSimplifier:
    """Static helpers to load, simplify and save typeface JSON documents."""

    OUTLINE_KEY = "o"

    @staticmethod
    def load_font_data(filename: Union[str, Path]) -> Dict[str, Any]:
        """Read a typeface JSON document; files ending in ".gz" are decompressed.

        Raises:
            ValueError: If the document has no "glyphs" mapping.
        """
        filename = Path(filename)
        if filename.suffix == ".gz":
            with gzip.open(filename, "rt", encoding="utf-8") as gzip_file:
                data = json.load(gzip_file)
        else:
            with open(filename, "r", encoding="utf-8") as json_file:
                data = json.load(json_file)
        AvFontSimplifier._check_font_data(data)
        return data

    @staticmethod
    def save_font_data(data: Dict[str, Any], filename: Union[str, Path]) -> None:
        """Write a typeface JSON document; files ending in ".gz" are compressed."""
        filename = Path(filename)
        if filename.suffix == ".gz":
            with gzip.open(filename, "wt", encoding="utf-8") as gzip_file:
                json.dump(data, gzip_file)
        else:
            with open(filename, "w", encoding="utf-8") as json_file:
                json.dump(data, json_file)

    @staticmethod
    def _check_font_data(data: Any) -> None:
        if not isinstance(data, dict) or not isinstance(data.get("glyphs"), dict):
            raise ValueError('Font data must be a JSON object with a "glyphs" object')

    @staticmethod
    def simplify_font_data(
        data: Dict[str, Any], config: Optional[SimplifyConfig] = None
    ) -> Tuple[Dict[str, Any], FontSimplifyStats]:
        """Simplify every glyph outline of a typeface document.

        The given _data_ is not modified; glyphs without outline are copied unchanged.

        Args:
            data: The typeface document
            config: Simplification settings, FONT_GLYPH_CONFIG if None

        Returns:
            Tuple of (simplified copy of _data_, statistics)

        Raises:
            ValueError: If _data_ has no "glyphs" mapping.
        """
        AvFontSimplifier._check_font_data(data)
        config = config or FONT_GLYPH_CONFIG
        approximator = config.build_approximator()

        result = copy.deepcopy(data)
        stats = FontSimplifyStats()

        for name, glyph in result["glyphs"].items():
            if not isinstance(glyph, dict) or not isinstance(glyph.get(AvFontSimplifier.OUTLINE_KEY), str):
                continue

            cmds = AvSvgPath.parse(glyph[AvFontSimplifier.OUTLINE_KEY])
            simplified = AvPathSimplifier.simplify(
                cmds, approximator, config.window_size, config.threshold, config.precision
            )
            glyph[AvFontSimplifier.OUTLINE_KEY] = AvSvgPath.serialize(simplified)

            stats.glyphs += 1
            stats.commands_before += len(cmds)
            stats.commands_after += len(simplified)
            logger.debug("Glyph %r: %d -> %d commands", name, len(cmds), len(simplified))

        logger.info(
            "Simplified %d glyphs: %d -> %d commands (%.1f%%)",
            stats.glyphs,
            stats.commands_before,
            stats.commands_after,
            100.0 * stats.ratio,
        )
        return result, stats
