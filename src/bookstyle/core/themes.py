"""Theme records and the catalog that looks them up.

Themes are immutable bundles of per-element-kind defaults. Colors are never
baked into a theme: they come from the palette in effect at resolution time.
Widths in theme data are stored on the common scale.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from bookstyle.core.palettes import Palette
from bookstyle.core.scales import theme_json_to_actual_stroke_width
from bookstyle.exceptions import ThemeDataError

logger = structlog.get_logger(__name__)

DATA_DIRECTORY = Path(__file__).parent.parent / "data"


@dataclass(frozen=True)
class PatternSettings:
    """A theme's page pattern configuration.

    Attributes:
        enabled: Whether the theme uses a pattern background.
        style: Pattern id (dots, grid, lines, crosses, ...).
        size: Pattern scale.
        stroke_width: Actual stroke width of pattern lines.
        pattern_background_opacity: Opacity of the area behind the pattern.
    """

    enabled: bool = False
    style: str = "dots"
    size: float = 6
    stroke_width: float = 1
    pattern_background_opacity: float = 1.0


@dataclass(frozen=True)
class BackgroundImageSettings:
    """A theme's page background image configuration.

    Attributes:
        enabled: Whether the theme uses a background image.
        template_id: Background image template to apply.
        size: cover, contain or stretch.
        repeat: Whether a contained image tiles.
        opacity: Image opacity; None uses the page background opacity.
        position: Anchor corner of a contained image.
        width: Width of a contained image in percent of the page.
    """

    enabled: bool = False
    template_id: str | None = None
    size: str = "cover"
    repeat: bool = False
    opacity: float | None = None
    position: str | None = None
    width: float | None = None


@dataclass(frozen=True)
class PageSettings:
    """Page-level defaults of a theme.

    Attributes:
        background_opacity: Default opacity of the page background.
        corner_radius: Default corner radius for page elements.
        background_pattern: Pattern configuration, if any.
        background_image: Image configuration, if any.
    """

    background_opacity: float = 1.0
    corner_radius: float = 0
    background_pattern: PatternSettings | None = None
    background_image: BackgroundImageSettings | None = None


@dataclass(frozen=True)
class Theme:
    """An immutable named bundle of default style values.

    Attributes:
        id: Unique theme identifier.
        name: Display name.
        description: Short description.
        palette_id: The theme's default palette.
        page_settings: Page-level defaults.
        element_defaults: Category to raw defaults (common-scale widths, no colors).
    """

    id: str
    name: str
    description: str = ""
    palette_id: str | None = None
    page_settings: PageSettings = field(default_factory=PageSettings)
    element_defaults: dict[str, dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, theme_id: str, data: dict[str, Any]) -> Theme:
        """Build a theme from its JSON record.

        Pattern stroke widths are converted from the common scale to the
        theme's actual range here, once.
        """
        page = data.get("pageSettings", {})
        pattern = page.get("backgroundPattern")
        image = page.get("backgroundImage")
        page_settings = PageSettings(
            background_opacity=page.get("backgroundOpacity") or 1.0,
            corner_radius=page.get("cornerRadius", 0),
            background_pattern=PatternSettings(
                enabled=bool(pattern.get("enabled")),
                style=pattern.get("style", "dots"),
                size=pattern.get("size", 6),
                stroke_width=theme_json_to_actual_stroke_width(pattern.get("strokeWidth", 1), theme_id),
                pattern_background_opacity=pattern.get("patternBackgroundOpacity", 1.0),
            )
            if pattern
            else None,
            background_image=BackgroundImageSettings(
                enabled=bool(image.get("enabled")),
                template_id=image.get("templateId"),
                size=image.get("size", "cover"),
                repeat=bool(image.get("repeat", False)),
                opacity=image.get("opacity"),
                position=image.get("position"),
                width=image.get("width"),
            )
            if image
            else None,
        )
        return cls(
            id=theme_id,
            name=data.get("name", theme_id),
            description=data.get("description", ""),
            palette_id=data.get("palette"),
            page_settings=page_settings,
            element_defaults={key: dict(value) for key, value in data.get("elementDefaults", {}).items()},
        )


@dataclass(frozen=True)
class BackgroundImageTemplate:
    """A reusable background image a page background can reference.

    Attributes:
        id: Unique template identifier.
        name: Display name.
        url: Image URL.
        default_size: cover, contain, contain-repeat or stretch.
        background_color: Default fill behind the image.
        background_color_enabled: Whether the template paints a fill behind the image.
        palette_aware: Whether palette colors can be applied to the image.
    """

    id: str
    name: str
    url: str
    default_size: str = "cover"
    background_color: str | None = None
    background_color_enabled: bool = False
    palette_aware: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BackgroundImageTemplate:
        """Build a template from its JSON record."""
        background_color = data.get("backgroundColor") or {}
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            url=data.get("url", ""),
            default_size=data.get("defaultSize", "cover"),
            background_color=background_color.get("defaultValue"),
            background_color_enabled=bool(background_color.get("enabled")),
            palette_aware=data.get("paletteSlots") in ("standard", "auto"),
        )


class ThemeCatalog:
    """Read-only lookup of themes, palettes and background image templates.

    Lookups return None for unknown ids; callers treat that as "no theme".
    """

    def __init__(
        self,
        themes: dict[str, Theme] | None = None,
        palettes: dict[str, Palette] | None = None,
        templates: dict[str, BackgroundImageTemplate] | None = None,
    ) -> None:
        """Initialize the catalog.

        Args:
            themes: Themes keyed by id.
            palettes: Palettes keyed by id.
            templates: Background image templates keyed by id.
        """
        self._themes = dict(themes or {})
        self._palettes = dict(palettes or {})
        self._templates = dict(templates or {})

    def get_theme(self, theme_id: str | None) -> Theme | None:
        """Return the theme with ``theme_id`` or None."""
        return self._themes.get(theme_id) if theme_id else None

    def get_palette(self, palette_id: str | None) -> Palette | None:
        """Return the palette with ``palette_id`` or None."""
        return self._palettes.get(palette_id) if palette_id else None

    def get_background_template(self, template_id: str | None) -> BackgroundImageTemplate | None:
        """Return the background image template with ``template_id`` or None."""
        return self._templates.get(template_id) if template_id else None

    def get_theme_palette_id(self, theme_id: str | None) -> str | None:
        """Return the default palette id of a theme, or None if the theme is unknown."""
        theme = self.get_theme(theme_id)
        return theme.palette_id if theme else None

    def list_themes(self) -> list[Theme]:
        """Return all themes in catalog order."""
        return list(self._themes.values())

    def list_palettes(self) -> list[Palette]:
        """Return all palettes in catalog order."""
        return list(self._palettes.values())

    @classmethod
    def from_files(
        cls,
        themes_path: Path | str | None = None,
        palettes_path: Path | str | None = None,
        backgrounds_path: Path | str | None = None,
    ) -> ThemeCatalog:
        """Load a catalog from JSON files, defaulting to the bundled data.

        Raises:
            ThemeDataError: If a file is missing or malformed.
        """
        themes_data = _load_json(Path(themes_path or DATA_DIRECTORY / "themes.json"))
        palettes_data = _load_json(Path(palettes_path or DATA_DIRECTORY / "palettes.json"))
        backgrounds_data = _load_json(Path(backgrounds_path or DATA_DIRECTORY / "background_images.json"))
        try:
            themes = {key: Theme.from_dict(key, value) for key, value in themes_data.get("themes", {}).items()}
            palettes = {item["id"]: Palette.from_dict(item) for item in palettes_data.get("palettes", [])}
            templates = {
                item["id"]: BackgroundImageTemplate.from_dict(item) for item in backgrounds_data.get("images", [])
            }
        except (KeyError, TypeError, AttributeError) as exc:
            raise ThemeDataError("theme catalog", f"malformed record ({exc!r})") from exc
        logger.debug("Theme catalog loaded", themes=len(themes), palettes=len(palettes), templates=len(templates))
        return cls(themes, palettes, templates)


def _load_json(path: Path) -> dict[str, Any]:
    """Read a JSON object from ``path``."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ThemeDataError(str(path), str(exc)) from exc
    if not isinstance(data, dict):
        raise ThemeDataError(str(path), "expected a JSON object")
    return data
