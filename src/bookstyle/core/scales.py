"""Conversion between the common 0-100 slider scale and actual units.

Every slider in the editor works on the same common scale. Stroke and border
widths map onto a per-theme physical range, font sizes and corner radii onto
fixed ranges. Out-of-range input is clamped, never rejected.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScaleRange:
    """An inclusive numeric range.

    Attributes:
        min: Lower bound.
        max: Upper bound.
    """

    min: float
    max: float

    def clamp(self, value: float) -> float:
        """Clamp ``value`` into the range."""
        return max(self.min, min(self.max, value))


COMMON_STROKE_WIDTH_RANGE = ScaleRange(1, 100)
COMMON_FONT_SIZE_RANGE = ScaleRange(1, 100)
COMMON_CORNER_RADIUS_RANGE = ScaleRange(0, 100)

THEME_STROKE_RANGES: dict[str, ScaleRange] = {
    "default": ScaleRange(1, 100),
    "rough": ScaleRange(1, 100),
    "glow": ScaleRange(1, 50),
    "candy": ScaleRange(12, 50),
    "zigzag": ScaleRange(3, 40),
    "wobbly": ScaleRange(1, 50),
    "sketchy": ScaleRange(1, 100),
    "dashed": ScaleRange(1, 100),
}

# Common font size 14 is 58 actual pixels.
FONT_SIZE_FACTOR = 58 / 14
ACTUAL_CORNER_RADIUS_RANGE = ScaleRange(0, 300)


def get_stroke_range(theme: str | None = "default") -> ScaleRange:
    """Return the actual stroke width range for a border/stroke theme."""
    return THEME_STROKE_RANGES.get(theme or "default", THEME_STROKE_RANGES["default"])


def common_to_actual_stroke_width(common_width: float, theme: str | None = "default") -> float:
    """Convert a common-scale width (0-100) to the theme's actual width.

    Zero means "no border" and stays zero. Values 1-100 map linearly onto the
    theme's range, so common 1 is always the theme's minimum width.
    """
    if common_width == 0:
        return 0
    stroke_range = get_stroke_range(theme)
    normalized = COMMON_STROKE_WIDTH_RANGE.clamp(common_width)
    return stroke_range.min + ((normalized - 1) / 99) * (stroke_range.max - stroke_range.min)


def actual_to_common_stroke_width(actual_width: float, theme: str | None = "default") -> int:
    """Convert an actual theme width back to the common scale (0-100)."""
    if actual_width == 0:
        return 0
    stroke_range = get_stroke_range(theme)
    if actual_width <= stroke_range.min:
        return 1
    if actual_width >= stroke_range.max:
        return 100
    return round(1 + ((actual_width - stroke_range.min) / (stroke_range.max - stroke_range.min)) * 99)


def get_max_common_width() -> int:
    """Return the slider maximum; the common scale is theme independent."""
    return 100


def get_min_actual_stroke_width(theme: str | None = "default") -> float:
    """Return the thinnest actual width a theme can render."""
    return get_stroke_range(theme).min


def theme_json_to_actual_stroke_width(theme_json_width: float, theme: str | None = "default") -> float:
    """Theme data stores widths on the common scale; convert to actual."""
    return common_to_actual_stroke_width(theme_json_width, theme)


def actual_to_theme_json_stroke_width(actual_width: float, theme: str | None = "default") -> int:
    """Convert an actual width back to the common value stored in theme data."""
    return actual_to_common_stroke_width(actual_width, theme)


def clamp_stroke_width_to_theme(actual_width: float, theme: str | None = "default") -> float:
    """Clamp an actual width into a theme's range, keeping zero as zero."""
    if actual_width == 0:
        return 0
    return get_stroke_range(theme).clamp(actual_width)


def common_to_actual_font_size(common_size: float) -> int:
    """Convert a common font size (1-100) to actual pixels."""
    return round(COMMON_FONT_SIZE_RANGE.clamp(common_size) * FONT_SIZE_FACTOR)


def actual_to_common_font_size(actual_size: float) -> int:
    """Convert an actual pixel font size to the common scale (1-100)."""
    return round(COMMON_FONT_SIZE_RANGE.clamp(actual_size / FONT_SIZE_FACTOR))


def common_to_actual_radius(common_radius: float) -> int:
    """Convert a common corner radius (0-100) to actual pixels (0-300)."""
    fraction = COMMON_CORNER_RADIUS_RANGE.clamp(common_radius) / COMMON_CORNER_RADIUS_RANGE.max
    return round(fraction * ACTUAL_CORNER_RADIUS_RANGE.max)


def actual_to_common_radius(actual_radius: float) -> int:
    """Convert an actual corner radius in pixels to the common scale (0-100)."""
    fraction = ACTUAL_CORNER_RADIUS_RANGE.clamp(actual_radius) / ACTUAL_CORNER_RADIUS_RANGE.max
    return round(fraction * COMMON_CORNER_RADIUS_RANGE.max)
