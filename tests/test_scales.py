"""Tests for the common/actual scale converters."""

from __future__ import annotations

import pytest

from bookstyle.core.scales import (
    THEME_STROKE_RANGES,
    actual_to_common_font_size,
    actual_to_common_radius,
    actual_to_common_stroke_width,
    actual_to_theme_json_stroke_width,
    clamp_stroke_width_to_theme,
    common_to_actual_font_size,
    common_to_actual_radius,
    common_to_actual_stroke_width,
    get_max_common_width,
    get_min_actual_stroke_width,
    theme_json_to_actual_stroke_width,
)


class TestStrokeWidth:
    """Tests for per-theme stroke and border widths."""

    def test_common_one_is_theme_minimum(self) -> None:
        """Test that common 1 maps to the theme's thinnest width."""
        assert common_to_actual_stroke_width(1, "candy") == 12
        assert common_to_actual_stroke_width(1, "zigzag") == 3
        assert common_to_actual_stroke_width(1, "default") == 1

    def test_common_hundred_is_theme_maximum(self) -> None:
        """Test that common 100 maps to the theme's widest width."""
        assert common_to_actual_stroke_width(100, "candy") == 50
        assert common_to_actual_stroke_width(100, "glow") == 50

    def test_zero_means_no_border(self) -> None:
        """Test that zero stays zero in both directions."""
        assert common_to_actual_stroke_width(0, "candy") == 0
        assert actual_to_common_stroke_width(0, "candy") == 0

    def test_out_of_range_is_clamped(self) -> None:
        """Test that values outside the scale clamp instead of raising."""
        assert common_to_actual_stroke_width(500, "zigzag") == 40
        assert actual_to_common_stroke_width(2, "candy") == 1
        assert actual_to_common_stroke_width(999, "candy") == 100

    def test_unknown_theme_uses_default_range(self) -> None:
        """Test that an unknown theme behaves like the default theme."""
        assert get_min_actual_stroke_width("no-such-theme") == 1
        assert common_to_actual_stroke_width(100, "no-such-theme") == 100

    def test_max_common_width(self) -> None:
        """Test that the slider maximum is theme independent."""
        assert get_max_common_width() == 100

    def test_min_actual_width(self) -> None:
        """Test the minimum actual width per theme."""
        assert get_min_actual_stroke_width("candy") == 12
        assert get_min_actual_stroke_width("zigzag") == 3

    def test_theme_json_helpers(self) -> None:
        """Test the helpers used for widths stored in theme data."""
        assert theme_json_to_actual_stroke_width(1, "candy") == 12
        assert actual_to_theme_json_stroke_width(12, "candy") == 1

    def test_clamp_to_theme(self) -> None:
        """Test clamping an existing width into a new theme's range."""
        assert clamp_stroke_width_to_theme(1, "candy") == 12
        assert clamp_stroke_width_to_theme(80, "glow") == 50
        assert clamp_stroke_width_to_theme(20, "candy") == 20
        assert clamp_stroke_width_to_theme(0, "candy") == 0

    @pytest.mark.parametrize("theme", sorted(THEME_STROKE_RANGES))
    def test_round_trip(self, theme: str) -> None:
        """Test that every common value survives a round trip within one step."""
        for common in range(1, 101):
            actual = common_to_actual_stroke_width(common, theme)
            assert abs(actual_to_common_stroke_width(actual, theme) - common) <= 1


class TestFontSize:
    """Tests for font size conversion."""

    def test_common_fourteen_is_fifty_eight_pixels(self) -> None:
        """Test the reference point of the font scale."""
        assert common_to_actual_font_size(14) == 58
        assert actual_to_common_font_size(58) == 14

    def test_clamped(self) -> None:
        """Test that font sizes clamp to the common range."""
        assert common_to_actual_font_size(0) == common_to_actual_font_size(1)
        assert actual_to_common_font_size(100000) == 100

    def test_round_trip(self) -> None:
        """Test the font size round trip for every common value."""
        for common in range(1, 101):
            assert abs(actual_to_common_font_size(common_to_actual_font_size(common)) - common) <= 1


class TestCornerRadius:
    """Tests for corner radius conversion."""

    def test_bounds(self) -> None:
        """Test the ends of the radius scale."""
        assert common_to_actual_radius(0) == 0
        assert common_to_actual_radius(100) == 300
        assert actual_to_common_radius(300) == 100

    def test_clamped(self) -> None:
        """Test that radii clamp instead of raising."""
        assert common_to_actual_radius(-5) == 0
        assert actual_to_common_radius(1000) == 100

    def test_round_trip(self) -> None:
        """Test the radius round trip for every common value."""
        for common in range(101):
            assert abs(actual_to_common_radius(common_to_actual_radius(common)) - common) <= 1
