"""Tests for the theme catalog, palettes and theme defaults."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from bookstyle.core.defaults import (
    get_base_defaults,
    get_theme_category,
    get_theme_defaults,
    get_theme_element_defaults,
    get_tool_defaults,
)
from bookstyle.core.palettes import Palette
from bookstyle.core.themes import ThemeCatalog
from bookstyle.core.types import ThemeCategory, ToolType
from bookstyle.exceptions import ThemeDataError
from bookstyle.stores.base import ThemeSource

if TYPE_CHECKING:
    from pathlib import Path


class TestThemeCatalog:
    """Tests for loading and looking up catalog records."""

    def test_bundled_catalog_loads(self, catalog: ThemeCatalog) -> None:
        """Test that the bundled data contains the built-in themes."""
        ids = [theme.id for theme in catalog.list_themes()]
        assert ids[0] == "default"
        assert {"rough", "glow", "candy", "zigzag", "wobbly", "sketchy"} <= set(ids)
        assert catalog.get_palette("default-palette") is not None

    def test_catalog_satisfies_theme_source(self, catalog: ThemeCatalog) -> None:
        """Test that the catalog implements the lookup protocol."""
        assert isinstance(catalog, ThemeSource)

    def test_unknown_ids_return_none(self, catalog: ThemeCatalog) -> None:
        """Test that unknown or empty ids are not errors."""
        assert catalog.get_theme("nope") is None
        assert catalog.get_theme(None) is None
        assert catalog.get_palette("") is None
        assert catalog.get_background_template("nope") is None
        assert catalog.get_theme_palette_id("nope") is None

    def test_theme_palette_id(self, catalog: ThemeCatalog) -> None:
        """Test looking up a theme's default palette."""
        assert catalog.get_theme_palette_id("candy") == "candy-palette"

    def test_pattern_stroke_width_converted(self, catalog: ThemeCatalog) -> None:
        """Test that pattern widths in theme data are converted to actual units."""
        candy = catalog.get_theme("candy")
        assert candy is not None
        assert candy.page_settings.background_pattern is not None
        assert candy.page_settings.background_pattern.stroke_width == 12
        assert candy.page_settings.background_opacity == 0.8

    def test_background_template_parsed(self, catalog: ThemeCatalog) -> None:
        """Test template size, fill and palette awareness."""
        template = catalog.get_background_template("minimal-dots-01")
        assert template is not None
        assert template.default_size == "contain-repeat"
        assert template.background_color == "#fafaf9"
        assert template.background_color_enabled is True
        floral = catalog.get_background_template("floral/simple-clean-green-floral-01")
        assert floral is not None
        assert floral.background_color_enabled is False
        assert floral.palette_aware is False

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Test that a missing data file raises ThemeDataError."""
        with pytest.raises(ThemeDataError) as exc_info:
            ThemeCatalog.from_files(themes_path=tmp_path / "missing.json")
        assert "missing.json" in exc_info.value.source

    def test_malformed_file_raises(self, tmp_path: Path) -> None:
        """Test that invalid JSON and malformed records raise ThemeDataError."""
        broken = tmp_path / "themes.json"
        broken.write_text("{not json", encoding="utf-8")
        with pytest.raises(ThemeDataError):
            ThemeCatalog.from_files(themes_path=broken)

        palettes = tmp_path / "palettes.json"
        palettes.write_text(json.dumps({"palettes": [{"name": "no id"}]}), encoding="utf-8")
        with pytest.raises(ThemeDataError):
            ThemeCatalog.from_files(palettes_path=palettes)

    def test_non_object_file_raises(self, tmp_path: Path) -> None:
        """Test that a JSON array at the top level is rejected."""
        path = tmp_path / "themes.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ThemeDataError):
            ThemeCatalog.from_files(themes_path=path)


class TestPalette:
    """Tests for palette roles and parts."""

    def test_role_fallbacks(self) -> None:
        """Test that missing roles resolve through related roles."""
        palette = Palette(id="p", name="P", colors={"background": "#ffffff", "primary": "#000000"})
        assert palette.role("surface") == "#ffffff"
        assert palette.role("accent") == "#000000"
        assert palette.role("text") == "#000000"

    def test_part_override(self, catalog: ThemeCatalog) -> None:
        """Test that a palette can remap a semantic part to another role."""
        candy = catalog.get_palette("candy-palette")
        default = catalog.get_palette("default-palette")
        assert candy is not None
        assert default is not None
        assert candy.part("qnaBorder") == candy.role("accent")
        assert default.part("qnaBorder") == default.role("primary")

    def test_part_fallback(self) -> None:
        """Test the explicit fallback of an unknown part."""
        palette = Palette(id="p", name="P")
        assert palette.part("unknownPart", fallback="#123456") == "#123456"


class TestThemeDefaults:
    """Tests for flattened theme defaults per element kind."""

    def test_theme_category(self) -> None:
        """Test mapping element kinds to theme categories."""
        assert get_theme_category("qna") == ThemeCategory.TEXT
        assert get_theme_category("answer") == ThemeCategory.ANSWER
        assert get_theme_category("heart") == ThemeCategory.SHAPE
        assert get_theme_category("sticker") == ThemeCategory.IMAGE

    def test_base_defaults_are_copies(self) -> None:
        """Test that callers cannot mutate the shared base table."""
        defaults = get_base_defaults("qna")
        defaults["questionSettings"]["fontSize"] = 1
        assert get_base_defaults("qna")["questionSettings"]["fontSize"] == 58

    def test_widths_in_actual_units(self, catalog: ThemeCatalog) -> None:
        """Test that theme widths and sizes are converted from the common scale."""
        candy = catalog.get_theme("candy")
        assert candy is not None
        defaults = get_theme_element_defaults(candy, "text")
        assert defaults["borderTheme"] == "candy"
        assert defaults["borderWidth"] == 12
        assert defaults["fontSize"] == 58
        assert defaults["cornerRadius"] == 24

    def test_theme_defaults_carry_no_colors(self, catalog: ThemeCatalog) -> None:
        """Test that theme element defaults never contain colors."""
        rough = catalog.get_theme("rough")
        assert rough is not None
        defaults = get_theme_element_defaults(rough, "text")
        assert "fontColor" not in defaults
        assert "borderColor" not in defaults
        assert defaults["borderTheme"] == "rough"

    def test_palette_colors_applied(self, catalog: ThemeCatalog) -> None:
        """Test that a given palette colors the defaults."""
        defaults = get_theme_defaults(catalog, "candy", "rect", "candy-palette")
        assert defaults["stroke"] == "#ec4899"
        assert defaults["inheritTheme"] == "candy"

    def test_unknown_theme_yields_base_defaults(self, catalog: ThemeCatalog) -> None:
        """Test that an unknown theme falls back to the base defaults."""
        assert get_theme_defaults(catalog, "nope", "brush") == get_base_defaults("brush")

    def test_tool_defaults_cover_every_tool(self, catalog: ThemeCatalog) -> None:
        """Test that tool defaults are produced for every tool type."""
        defaults = get_tool_defaults(catalog, "glow")
        assert list(defaults) == [str(tool) for tool in ToolType]
        assert defaults["brush"]["strokeWidth"] > 0
