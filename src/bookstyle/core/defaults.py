"""Theme defaults table.

Produces the default attribute bundle for a (theme, element kind) pair:
hardcoded base defaults, overlaid by the theme's element defaults converted
from the common scale to actual units, overlaid by palette colors when a
palette is given. Output uses the flattened camelCase keys stored on
elements.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from bookstyle.core.scales import (
    common_to_actual_font_size,
    common_to_actual_radius,
    theme_json_to_actual_stroke_width,
)
from bookstyle.core.types import SHAPE_TYPES, ThemeCategory, ToolType

if TYPE_CHECKING:
    from bookstyle.core.palettes import Palette
    from bookstyle.core.themes import Theme
    from bookstyle.stores.base import ThemeSource

_STROKE_DEFAULTS: dict[str, Any] = {"theme": "default", "strokeWidth": 2, "stroke": "#1f2937"}
_SHAPE_DEFAULTS: dict[str, Any] = {**_STROKE_DEFAULTS, "fill": "transparent"}
_TEXT_DEFAULTS: dict[str, Any] = {
    "fontSize": 58,
    "fontFamily": "Arial, sans-serif",
    "fontBold": False,
    "fontItalic": False,
    "fontColor": "#1f2937",
    "fontOpacity": 1,
    "align": "left",
    "paragraphSpacing": "medium",
    "ruledLines": False,
    "ruledLinesTheme": "rough",
    "ruledLinesColor": "#1f2937",
    "ruledLinesWidth": 1,
    "cornerRadius": 0,
    "borderWidth": 0,
    "borderColor": "#000000",
    "backgroundColor": "transparent",
    "padding": 4,
}

BASE_TOOL_DEFAULTS: dict[str, dict[str, Any]] = {
    **{tool: dict(_SHAPE_DEFAULTS) for tool in SHAPE_TYPES},
    ToolType.LINE: dict(_STROKE_DEFAULTS),
    ToolType.BRUSH: {**_STROKE_DEFAULTS, "strokeWidth": 3},
    ToolType.RECT: {**_SHAPE_DEFAULTS, "cornerRadius": 0},
    ToolType.TEXT: dict(_TEXT_DEFAULTS),
    ToolType.QUESTION: {
        key: value
        for key, value in _TEXT_DEFAULTS.items()
        if not key.startswith("ruledLines") and key != "paragraphSpacing"
    },
    ToolType.ANSWER: dict(_TEXT_DEFAULTS),
    ToolType.QNA_INLINE: {
        **_TEXT_DEFAULTS,
        "questionSettings": {"fontSize": 58},
        "answerSettings": {"fontSize": 50},
    },
    ToolType.FREE_TEXT: {**_TEXT_DEFAULTS, "fontSize": 50},
}

# Sub-bundle keys that only carry per-section font values.
SECTION_FONT_KEYS = ("fontSize", "fontFamily", "fontBold", "fontItalic", "fontColor", "fontOpacity")


def get_theme_category(kind: str) -> ThemeCategory:
    """Map an element or tool kind to the theme category holding its defaults."""
    if kind in (ThemeCategory.QUESTION, ThemeCategory.ANSWER, ThemeCategory.BRUSH, ThemeCategory.IMAGE):
        return ThemeCategory(kind)
    if kind in ("text", "qna", "qna_inline", "free_text"):
        return ThemeCategory.TEXT
    if kind in ("placeholder", "sticker"):
        return ThemeCategory.IMAGE
    return ThemeCategory.SHAPE


def get_base_defaults(kind: str) -> dict[str, Any]:
    """Return a fresh copy of the hardcoded defaults for a kind.

    Unknown kinds fall back to the rectangle defaults.
    """
    if kind == "qna":
        kind = ToolType.QNA_INLINE
    return copy.deepcopy(BASE_TOOL_DEFAULTS.get(kind, BASE_TOOL_DEFAULTS[ToolType.RECT]))


def flatten_theme_defaults(theme: Theme, raw: dict[str, Any]) -> dict[str, Any]:
    """Flatten one theme category record into element keys in actual units.

    Colors in theme data are ignored; they come from the palette.

    Args:
        theme: The theme the record belongs to.
        raw: The raw category record with common-scale widths and sizes.

    Returns:
        Flattened defaults, e.g. ``borderWidth`` instead of ``border.borderWidth``.
    """
    result: dict[str, Any] = {"theme": theme.id}
    if "strokeWidth" in raw:
        stroke_theme = raw.get("inheritTheme") or theme.id
        result["strokeWidth"] = theme_json_to_actual_stroke_width(raw["strokeWidth"], stroke_theme)
    if "inheritTheme" in raw:
        result["inheritTheme"] = raw["inheritTheme"]
    if "cornerRadius" in raw:
        result["cornerRadius"] = common_to_actual_radius(raw["cornerRadius"])
    if "opacity" in raw:
        result["borderOpacity"] = raw["opacity"]
        result["backgroundOpacity"] = raw["opacity"]

    font = raw.get("font") or {}
    if "fontSize" in font:
        result["fontSize"] = common_to_actual_font_size(font["fontSize"])
    for key in ("fontFamily", "fontBold", "fontItalic", "fontOpacity"):
        if key in font:
            result[key] = font[key]

    border = raw.get("border") or {}
    border_theme = border.get("borderTheme") or border.get("theme")
    if border_theme:
        result["borderTheme"] = border_theme
    width = border.get("borderWidth", border.get("width"))
    if width is not None:
        result["borderWidth"] = theme_json_to_actual_stroke_width(width, border_theme or theme.id)
    opacity = border.get("borderOpacity", border.get("opacity"))
    if opacity is not None:
        result["borderOpacity"] = opacity
    if "enabled" in border:
        result["borderEnabled"] = border["enabled"]

    background = raw.get("background") or {}
    opacity = background.get("backgroundOpacity", background.get("opacity"))
    if opacity is not None:
        result["backgroundOpacity"] = opacity
    if "enabled" in background:
        result["backgroundEnabled"] = background["enabled"]

    text_format = raw.get("format") or {}
    if "textAlign" in text_format:
        result["align"] = text_format["textAlign"]
    for key in ("paragraphSpacing", "padding"):
        if key in text_format:
            result[key] = text_format[key]

    ruled_lines = raw.get("ruledLines") or {}
    lines_theme = ruled_lines.get("ruledLinesTheme") or ruled_lines.get("theme")
    if lines_theme:
        result["ruledLinesTheme"] = lines_theme
    width = ruled_lines.get("lineWidth", ruled_lines.get("width"))
    if width is not None:
        result["ruledLinesWidth"] = theme_json_to_actual_stroke_width(width, lines_theme or theme.id)
    opacity = ruled_lines.get("lineOpacity", ruled_lines.get("opacity"))
    if opacity is not None:
        result["ruledLinesOpacity"] = opacity
    if "enabled" in ruled_lines:
        result["ruledLines"] = ruled_lines["enabled"]

    for section in ("questionSettings", "answerSettings"):
        if section in raw:
            result[section] = _section_font_defaults(raw[section])
    return result


def _section_font_defaults(raw: dict[str, Any]) -> dict[str, Any]:
    section = {key: raw[key] for key in SECTION_FONT_KEYS if key in raw and key != "fontColor"}
    if "fontSize" in section:
        section["fontSize"] = common_to_actual_font_size(section["fontSize"])
    return section


def _category_chain(kind: str) -> tuple[str, ...]:
    """Theme categories merged in order for a kind; later entries win."""
    if kind in ("question", "answer"):
        return ("text", kind)
    if kind in ("qna", "qna_inline"):
        return ("text", "qna")
    return (get_theme_category(kind).value,)


def get_theme_element_defaults(theme: Theme, kind: str) -> dict[str, Any]:
    """Return a theme's flattened defaults for a kind, without base defaults or colors."""
    result: dict[str, Any] = {}
    for category in _category_chain(kind):
        raw = theme.element_defaults.get(category)
        if raw:
            result.update(flatten_theme_defaults(theme, raw))
    if kind in SHAPE_TYPES or kind in (ToolType.BRUSH, ToolType.LINE):
        result.setdefault("inheritTheme", theme.id)
    return result


def palette_colors_for(palette: Palette, kind: str) -> dict[str, Any]:
    """Return the color fields a palette assigns to a kind of element."""
    if kind in ("qna", "qna_inline"):
        return {
            "fontColor": palette.part("qnaQuestionText"),
            "borderColor": palette.part("qnaBorder"),
            "backgroundColor": palette.part("qnaBackground"),
            "ruledLinesColor": palette.part("qnaAnswerRuledLines"),
            "questionSettings": {"fontColor": palette.part("qnaQuestionText")},
            "answerSettings": {"fontColor": palette.part("qnaAnswerText")},
        }
    if kind == "free_text":
        return {
            "fontColor": palette.part("freeTextText"),
            "borderColor": palette.part("freeTextBorder"),
            "backgroundColor": palette.part("freeTextBackground"),
            "ruledLinesColor": palette.part("freeTextRuledLines"),
        }
    if kind in ("text", "question", "answer"):
        return {
            "fontColor": palette.role("text"),
            "borderColor": palette.role("secondary"),
            "backgroundColor": palette.role("surface"),
            "ruledLinesColor": palette.role("accent"),
        }
    if kind == ToolType.BRUSH:
        return {"stroke": palette.part("brushStroke")}
    if kind == ToolType.LINE:
        return {"stroke": palette.part("lineStroke")}
    if kind in ("image", "placeholder", "sticker"):
        return {"borderColor": palette.role("secondary"), "backgroundColor": palette.role("background")}
    return {"stroke": palette.part("shapeStroke"), "fill": palette.part("shapeFill", fallback_role="accent")}


def apply_palette_colors(defaults: dict[str, Any], palette: Palette, kind: str) -> dict[str, Any]:
    """Overlay palette colors onto a defaults bundle, merging section sub-bundles."""
    result = dict(defaults)
    for key, value in palette_colors_for(palette, kind).items():
        if isinstance(value, dict):
            result[key] = {**result.get(key, {}), **{k: v for k, v in value.items() if v is not None}}
        elif value is not None:
            result[key] = value
    return result


def get_theme_defaults(
    catalog: ThemeSource,
    theme_id: str | None,
    kind: str,
    palette_id: str | None = None,
) -> dict[str, Any]:
    """Return the complete default bundle for a kind under a theme.

    Only the given palette is applied, never the theme's own default palette.
    An unknown theme yields the base defaults.

    Args:
        catalog: Theme and palette lookup.
        theme_id: Theme to resolve against.
        kind: Element or tool kind.
        palette_id: Palette whose colors are applied, if any.

    Returns:
        A new dict of flattened defaults in actual units.
    """
    defaults = get_base_defaults(kind)
    theme = catalog.get_theme(theme_id)
    if theme is None:
        return defaults
    for key, value in get_theme_element_defaults(theme, kind).items():
        if isinstance(value, dict) and isinstance(defaults.get(key), dict):
            defaults[key] = {**defaults[key], **value}
        else:
            defaults[key] = value
    palette = catalog.get_palette(palette_id)
    if palette is not None:
        defaults = apply_palette_colors(defaults, palette, kind)
    return defaults


def get_tool_defaults(catalog: ThemeSource, theme_id: str | None, palette_id: str | None = None) -> dict[str, dict]:
    """Return defaults for every tool type, in tool order."""
    return {str(tool): get_theme_defaults(catalog, theme_id, tool, palette_id) for tool in ToolType}
