"""Tests for SimplifyConfig and its presets."""

import json

import pytest

from avpath.approximation import AvCurveApproximator
from avpath.config import DEFAULT_CONFIG, FONT_GLYPH_CONFIG, LINE_ONLY_CONFIG, SimplifyConfig


class TestSimplifyConfig:
    """Tests for SimplifyConfig dataclass."""

    def test_default_values(self):
        """Test default configuration values."""
        config = SimplifyConfig()
        assert config.window_size == 2
        assert config.threshold == 0.1
        assert config.precision == 20
        assert config.approximator == "auto"
        assert config.line_threshold == 0.1
        assert config.quadratic_threshold == 0.5
        assert config.cubic_threshold == 0.5

    def test_custom_values(self):
        """Test custom configuration values."""
        config = SimplifyConfig(window_size=4, threshold=0.25, precision=8, approximator="cubic")
        assert config.window_size == 4
        assert config.threshold == 0.25
        assert config.precision == 8
        assert config.approximator == "cubic"

    def test_frozen(self):
        """Test that config is immutable."""
        config = SimplifyConfig()
        with pytest.raises(Exception):  # FrozenInstanceError
            config.window_size = 3

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"window_size": 0}, "window_size"),
            ({"precision": 1}, "precision"),
            ({"approximator": "spline"}, "Unknown approximator"),
            ({"threshold": -0.1}, "threshold"),
            ({"cubic_threshold": -1.0}, "cubic_threshold"),
        ],
    )
    def test_invalid_values(self, kwargs, message):
        """Invalid values raise ValueError."""
        with pytest.raises(ValueError, match=message):
            SimplifyConfig(**kwargs)

    def test_str(self):
        """Test string representation."""
        assert str(LINE_ONLY_CONFIG) == "SimplifyConfig(window=2, threshold=0.01, precision=20, approximator=line)"
        config_str = str(DEFAULT_CONFIG)
        assert "approximator=auto" in config_str
        assert "quadratic<=0.5" in config_str


class TestBuildApproximator:
    """Tests for SimplifyConfig.build_approximator"""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("line", AvCurveApproximator.approximate_line),
            ("quadratic", AvCurveApproximator.approximate_quadratic),
            ("cubic", AvCurveApproximator.approximate_cubic),
        ],
    )
    def test_single_approximators(self, name, expected):
        """Named approximators map to the fit functions."""
        assert SimplifyConfig(approximator=name).build_approximator() == expected

    def test_auto_uses_thresholds(self):
        """The auto approximator respects the per-fit thresholds."""
        points = [(0.0, 0.0), (1.0, 1.0), (2.0, 0.0)]
        strict = SimplifyConfig(line_threshold=0.0).build_approximator()
        relaxed = SimplifyConfig(line_threshold=1.0).build_approximator()
        assert strict(points).cmd.type == "q"
        assert relaxed(points).cmd.type == "l"


class TestSerialization:
    """Tests for to_dict, from_dict and from_json_file."""

    def test_to_dict(self):
        """All fields are exported."""
        data = FONT_GLYPH_CONFIG.to_dict()
        assert data == {
            "window_size": 2,
            "threshold": 0.5,
            "precision": 8,
            "approximator": "auto",
            "line_threshold": 0.1,
            "quadratic_threshold": 0.5,
            "cubic_threshold": 0.5,
        }

    def test_from_dict_roundtrip(self):
        """Test roundtrip conversion."""
        assert SimplifyConfig.from_dict(FONT_GLYPH_CONFIG.to_dict()) == FONT_GLYPH_CONFIG

    def test_from_dict_partial(self):
        """Missing keys take the defaults."""
        config = SimplifyConfig.from_dict({"threshold": 0.3})
        assert config.threshold == 0.3
        assert config.window_size == DEFAULT_CONFIG.window_size

    def test_from_dict_unknown_key(self):
        """Unknown keys raise ValueError."""
        with pytest.raises(ValueError, match="Unknown config keys"):
            SimplifyConfig.from_dict({"window": 3})

    def test_from_dict_wrong_type(self):
        """Values of the wrong type raise ValueError."""
        with pytest.raises(ValueError, match="Invalid config value"):
            SimplifyConfig.from_dict({"window_size": "3"})

    def test_from_json_file(self, tmp_path):
        """A JSON object is read as config."""
        filename = tmp_path / "config.json"
        filename.write_text(json.dumps({"window_size": 3, "approximator": "quadratic"}), encoding="utf-8")
        config = SimplifyConfig.from_json_file(filename)
        assert config.window_size == 3
        assert config.approximator == "quadratic"

    def test_from_json_file_not_an_object(self, tmp_path):
        """A JSON list is rejected."""
        filename = tmp_path / "config.json"
        filename.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            SimplifyConfig.from_json_file(filename)
