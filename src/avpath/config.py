"""Settings of the path simplification and their presets."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Literal, Union

from avpath.approximation import AvCurveApproximator, PathApproximator
from avpath.common import DEFAULT_PRECISION

ApproximatorName = Literal["auto", "line", "quadratic", "cubic"]

APPROXIMATOR_NAMES = ("auto", "line", "quadratic", "cubic")


###############################################################################
# SimplifyConfig
###############################################################################


@dataclass(frozen=True)
class SimplifyConfig:
    """Settings for AvPathSimplifier.

    Attributes:
        window_size: Number of commands replaced at once.
        threshold: Replacements with an error below this value are accepted.
        precision: Number of samples per command.
        approximator: Which fit to use: "auto" tries line, quadratic and cubic in this order.
        line_threshold: Error a line fit may have to be chosen by "auto".
        quadratic_threshold: Error a quadratic fit may have to be chosen by "auto".
        cubic_threshold: Error a cubic fit may have to be chosen by "auto".
    """

    window_size: int = 2
    threshold: float = 0.1
    precision: int = DEFAULT_PRECISION
    approximator: ApproximatorName = "auto"
    line_threshold: float = 0.1
    quadratic_threshold: float = 0.5
    cubic_threshold: float = 0.5

    def __post_init__(self):
        if self.window_size < 1:
            raise ValueError(f"window_size must be at least 1, got {self.window_size}")
        if self.precision < 2:
            raise ValueError(f"precision must be at least 2, got {self.precision}")
        if self.approximator not in APPROXIMATOR_NAMES:
            raise ValueError(f"Unknown approximator '{self.approximator}', use one of {APPROXIMATOR_NAMES}")
        for name in ("threshold", "line_threshold", "quadratic_threshold", "cubic_threshold"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)}")

    def build_approximator(self) -> PathApproximator:
        """Return the approximator function selected by this config."""
        if self.approximator == "line":
            return AvCurveApproximator.approximate_line
        if self.approximator == "quadratic":
            return AvCurveApproximator.approximate_quadratic
        if self.approximator == "cubic":
            return AvCurveApproximator.approximate_cubic
        return AvCurveApproximator.approximate_auto(
            self.line_threshold, self.quadratic_threshold, self.cubic_threshold
        )

    def to_dict(self) -> dict:
        """Convert config to a dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> SimplifyConfig:
        """Create SimplifyConfig from a dictionary; missing keys take the defaults.

        Raises:
            ValueError: If _data_ holds unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        try:
            return cls(**data)
        except TypeError as e:
            raise ValueError(f"Invalid config value: {e}") from e

    @classmethod
    def from_json_file(cls, filename: Union[str, Path]) -> SimplifyConfig:
        """Load a config from a JSON file holding one object."""
        with open(filename, "r", encoding="utf-8") as json_file:
            data = json.load(json_file)
        if not isinstance(data, dict):
            raise ValueError(f"Config file {filename} must hold a JSON object")
        return cls.from_dict(data)

    def __str__(self) -> str:
        config_str = (
            f"window={self.window_size}"
            f", threshold={self.threshold:g}"
            f", precision={self.precision}"
            f", approximator={self.approximator}"
        )
        if self.approximator == "auto":
            config_str += (
                f", line<={self.line_threshold:g}"
                f", quadratic<={self.quadratic_threshold:g}"
                f", cubic<={self.cubic_threshold:g}"
            )
        return f"SimplifyConfig({config_str})"


# Config constants for different kinds of paths
DEFAULT_CONFIG = SimplifyConfig()

LINE_ONLY_CONFIG = SimplifyConfig(
    window_size=2,
    threshold=0.01,
    approximator="line",
)

FONT_GLYPH_CONFIG = SimplifyConfig(
    window_size=2,
    threshold=0.5,
    precision=8,
    approximator="auto",
    line_threshold=0.1,
    quadratic_threshold=0.5,
    cubic_threshold=0.5,
)
