"""Page background composition.

A page background is one of three modes: flat color, pattern, or image.
Switching modes never throws away the inactive modes' settings: they stay on
the background and the values that would be overwritten are copied into the
``saved_*`` shadow fields first, so switching back restores them exactly.
Opacity carries over across every switch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from bookstyle.core.accessors import get_active_template_ids
from bookstyle.core.models import PageBackground
from bookstyle.core.types import BackgroundType, ImageSize

if TYPE_CHECKING:
    from bookstyle.core.models import Book, Page
    from bookstyle.core.palettes import Palette
    from bookstyle.core.themes import BackgroundImageTemplate, Theme
    from bookstyle.stores.base import ThemeSource

logger = structlog.get_logger(__name__)

DEFAULT_BACKGROUND_OPACITY = 0.15
DEFAULT_BACKGROUND_COLOR = "#ffffff"
DEFAULT_PATTERN = "dots"
DEFAULT_PATTERN_SIZE = 6
DEFAULT_PATTERN_STROKE_WIDTH = 10
DEFAULT_PATTERN_COLOR = "#1f2937"
DEFAULT_CONTAIN_WIDTH_PERCENT = 100
DEFAULT_IMAGE_POSITION = "top-left"

# Template defaultSize -> (imageSize, imageRepeat)
TEMPLATE_SIZE_MODES: dict[str, tuple[ImageSize, bool]] = {
    "cover": (ImageSize.COVER, False),
    "contain": (ImageSize.CONTAIN, False),
    "contain-repeat": (ImageSize.CONTAIN, True),
    "stretch": (ImageSize.STRETCH, False),
}


def initialize_background(page: Page, book: Book | None, catalog: ThemeSource) -> PageBackground:
    """Return the page background, synthesizing one if the page has none.

    A new background is a flat color from the active palette's background
    role (or white) at opacity 0.15. An existing background without an
    opacity gets 0.15; any other background is returned unchanged.
    """
    if page.background is None:
        palette = catalog.get_palette(get_active_template_ids(page, book).color_palette_id)
        color = (palette.role("background") if palette else None) or DEFAULT_BACKGROUND_COLOR
        logger.debug("Initialized page background", page_id=page.id, color=color)
        return PageBackground(type=BackgroundType.COLOR, value=color, opacity=DEFAULT_BACKGROUND_OPACITY)
    if page.background.opacity is None:
        return page.background.merged({"opacity": DEFAULT_BACKGROUND_OPACITY})
    return page.background


def update_background(background: PageBackground | None, **updates: object) -> PageBackground:
    """Merge field updates into a background.

    Opacity is always stored explicitly after a write.
    """
    updated = (background or PageBackground()).merged(updates)
    if updated.opacity is None:
        updated = updated.merged({"opacity": DEFAULT_BACKGROUND_OPACITY})
    return updated


def snapshot_shadows(background: PageBackground) -> PageBackground:
    """Copy the active mode's value into its shadow field.

    Template images are shadowed too, so their URL survives a template that
    can no longer be looked up.
    """
    updates: dict[str, object] = {}
    if background.type == BackgroundType.COLOR:
        updates["saved_color_value"] = background.value
    elif background.type == BackgroundType.PATTERN:
        updates["saved_pattern_value"] = background.value
    elif background.type == BackgroundType.IMAGE:
        updates["saved_image_value"] = background.value
    return background.merged(updates)


def apply_background_image_template(
    template: BackgroundImageTemplate,
    base: PageBackground | None = None,
    *,
    image_size: str | None = None,
    image_repeat: bool | None = None,
    image_position: str | None = None,
    image_width: float | None = None,
    opacity: float | None = None,
    background_color: str | None = None,
) -> PageBackground:
    """Build an image background from a template.

    Explicit ``image_size`` wins over the template's ``defaultSize``. The
    template's fill color is only painted when the template enables it.

    Args:
        template: The background image template.
        base: Background whose inactive fields are kept.
        image_size: cover, contain or stretch.
        image_repeat: Whether a contained image tiles.
        image_position: Anchor corner of a contained image.
        image_width: Width of a contained image in percent of the page.
        opacity: Background opacity; defaults to 1.
        background_color: Fill painted behind the image.

    Returns:
        The image background.
    """
    if image_size:
        size, repeat = image_size, bool(image_repeat)
    else:
        size, repeat = TEMPLATE_SIZE_MODES.get(template.default_size, TEMPLATE_SIZE_MODES["cover"])
    updates: dict[str, object] = {
        "type": BackgroundType.IMAGE,
        "value": template.url,
        "opacity": 1.0 if opacity is None else opacity,
        "image_size": size,
        "image_repeat": repeat,
        "background_image_template_id": template.id,
    }
    if image_position is not None:
        updates["image_position"] = image_position
    if image_width is not None:
        updates["image_contain_width_percent"] = image_width
    if template.background_color_enabled and (background_color or template.background_color):
        updates["background_color"] = background_color or template.background_color
        updates["background_color_enabled"] = True
    base = base or PageBackground()
    if base.apply_palette is None and template.palette_aware:
        updates["apply_palette"] = True
    return base.merged(updates)


def switch_background_mode(
    background: PageBackground | None,
    mode: BackgroundType | str,
    *,
    palette: Palette | None = None,
    catalog: ThemeSource | None = None,
) -> PageBackground:
    """Switch a background to another mode without losing the other modes' state.

    Args:
        background: The current background. None is treated as a fresh color background.
        mode: The target mode.
        palette: Active palette, used for new colors.
        catalog: Lookup used to reapply a previously chosen image template.

    Returns:
        The background in the target mode.
    """
    current = background or PageBackground(opacity=DEFAULT_BACKGROUND_OPACITY)
    opacity = current.opacity if current.opacity is not None else DEFAULT_BACKGROUND_OPACITY
    shadowed = snapshot_shadows(current)
    mode = BackgroundType(mode)

    if mode == BackgroundType.COLOR:
        color = (
            shadowed.saved_color_value
            or (palette.role("background") if palette else None)
            or DEFAULT_BACKGROUND_COLOR
        )
        return shadowed.merged({"type": BackgroundType.COLOR, "value": color, "opacity": opacity})

    if mode == BackgroundType.PATTERN:
        foreground = shadowed.pattern_foreground_color
        if foreground is None and palette is not None:
            foreground = palette.role("primary") or palette.role("accent")
        return shadowed.merged(
            {
                "type": BackgroundType.PATTERN,
                "value": shadowed.saved_pattern_value or DEFAULT_PATTERN,
                "opacity": opacity,
                "pattern_size": shadowed.pattern_size or DEFAULT_PATTERN_SIZE,
                "pattern_stroke_width": shadowed.pattern_stroke_width or DEFAULT_PATTERN_STROKE_WIDTH,
                "pattern_foreground_color": foreground or DEFAULT_PATTERN_COLOR,
                "pattern_background_color": shadowed.pattern_background_color or "transparent",
                "pattern_background_opacity": (
                    1.0 if shadowed.pattern_background_opacity is None else shadowed.pattern_background_opacity
                ),
            }
        )

    template_id = shadowed.background_image_template_id
    template = catalog.get_background_template(template_id) if catalog and template_id else None
    if template_id and template is None:
        logger.warning("Background image template not found", template_id=template_id)
    if template is not None:
        return apply_background_image_template(
            template,
            shadowed,
            image_size=shadowed.image_size or ImageSize.COVER,
            image_repeat=bool(shadowed.image_repeat),
            image_position=shadowed.image_position,
            image_width=shadowed.image_contain_width_percent,
            opacity=opacity,
            background_color=(palette.role("background") if palette and shadowed.apply_palette else None),
        )
    if shadowed.saved_image_value:
        return shadowed.merged(
            {
                "type": BackgroundType.IMAGE,
                "value": shadowed.saved_image_value,
                "opacity": opacity,
                "image_size": shadowed.image_size or ImageSize.COVER,
                "image_repeat": bool(shadowed.image_repeat),
                "image_position": shadowed.image_position or DEFAULT_IMAGE_POSITION,
                "image_contain_width_percent": shadowed.image_contain_width_percent or DEFAULT_CONTAIN_WIDTH_PERCENT,
            }
        )
    # No image chosen yet: an image placeholder filled with the current color.
    fill = current.value if current.type == BackgroundType.COLOR else DEFAULT_BACKGROUND_COLOR
    return shadowed.merged(
        {
            "type": BackgroundType.IMAGE,
            "value": fill,
            "opacity": opacity,
            "image_contain_width_percent": shadowed.image_contain_width_percent or DEFAULT_CONTAIN_WIDTH_PERCENT,
        }
    )


def page_background_colors(palette: Palette | None) -> tuple[str, str]:
    """Return ``(background color, pattern color)`` for a page under a palette."""
    if palette is None:
        return DEFAULT_BACKGROUND_COLOR, DEFAULT_PATTERN_COLOR
    colors = palette.colors
    background = colors.get("background") or DEFAULT_BACKGROUND_COLOR
    pattern = colors.get("primary") or colors.get("surface") or colors.get("accent") or background
    return background, pattern


def recolor_background(background: PageBackground | None, palette: Palette | None) -> PageBackground:
    """Replace the palette-derived colors of a background, keeping its structure."""
    current = background or PageBackground(opacity=DEFAULT_BACKGROUND_OPACITY)
    background_color, pattern_color = page_background_colors(palette)
    if current.type == BackgroundType.PATTERN:
        return current.merged({"pattern_foreground_color": pattern_color, "pattern_background_color": background_color})
    if current.type == BackgroundType.IMAGE:
        if current.apply_palette is False or not current.background_color_enabled:
            return current
        return current.merged({"background_color": background_color})
    return current.merged({"value": background_color})


def build_theme_background(
    theme: Theme,
    palette: Palette | None,
    catalog: ThemeSource,
    existing: PageBackground | None = None,
) -> PageBackground:
    """Build the background a theme prescribes for a page.

    Order of preference: the theme's image configuration, its pattern
    configuration, then a flat color. Colors always come fresh from the
    palette. Structural image settings of the existing background survive
    unless the theme sets them.

    Args:
        theme: The theme being applied.
        palette: The palette the page will use.
        catalog: Lookup for background image templates.
        existing: The page's current background, if any.

    Returns:
        The new background, tagged with the theme id.
    """
    base = snapshot_shadows(existing) if existing is not None else PageBackground()
    background_color, pattern_color = page_background_colors(palette)
    settings = theme.page_settings
    opacity = settings.background_opacity or 1.0

    image = settings.background_image
    if image is not None and image.enabled and image.template_id:
        template = catalog.get_background_template(image.template_id)
        if template is None:
            logger.warning("Theme background template not found", theme_id=theme.id, template_id=image.template_id)
        else:
            background = apply_background_image_template(
                template,
                base,
                image_size=image.size,
                image_repeat=image.repeat,
                image_position=image.position or base.image_position,
                image_width=image.width if image.width is not None else base.image_contain_width_percent,
                opacity=image.opacity if image.opacity is not None else opacity,
                background_color=background_color,
            )
            return background.merged({"page_theme": theme.id})

    pattern = settings.background_pattern
    if pattern is not None and pattern.enabled:
        return base.merged(
            {
                "type": BackgroundType.PATTERN,
                "value": pattern.style,
                "opacity": opacity,
                "page_theme": theme.id,
                "pattern_size": pattern.size,
                "pattern_stroke_width": pattern.stroke_width,
                "pattern_background_opacity": pattern.pattern_background_opacity,
                "pattern_foreground_color": pattern_color,
                "pattern_background_color": background_color,
            }
        )

    return base.merged(
        {"type": BackgroundType.COLOR, "value": background_color, "opacity": opacity, "page_theme": theme.id}
    )
