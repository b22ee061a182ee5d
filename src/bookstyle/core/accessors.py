"""Attribute accessors.

Every visual attribute resolves through the same ordered chain of lookups,
first present value wins:

1. the element's own value (for question/answer elements the active
   section's ``questionSettings`` / ``answerSettings`` bundle first);
2. the shared top-level value on the element, including legacy nested
   shapes such as ``border.borderColor``;
3. the page theme default;
4. the book theme default;
5. a hardcoded fallback.

The chain for each attribute is described once in ``ATTRIBUTES`` and reused
by every ``resolve_*`` function.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from bookstyle.core.defaults import apply_palette_colors, get_theme_element_defaults
from bookstyle.core.style import BackgroundStyle, BorderStyle, FontStyle, RuledLinesStyle
from bookstyle.core.types import QnaSection

if TYPE_CHECKING:
    from bookstyle.core.models import Book, Element, Page
    from bookstyle.stores.base import ThemeSource

DEFAULT_THEME_ID = "default"

Path = tuple[str, ...]


@dataclass(frozen=True)
class ActiveTemplateIds:
    """Theme, palette and layout in effect for a page.

    Attributes:
        theme_id: Page theme if explicitly set, else the book theme, else "default".
        color_palette_id: Page palette, else book palette. None means the theme's default.
        layout_template_id: Page layout, else book layout.
    """

    theme_id: str
    color_palette_id: str | None
    layout_template_id: str | None


def get_active_template_ids(page: Page | None, book: Book | None) -> ActiveTemplateIds:
    """Resolve the theme, palette and layout ids in effect for a page.

    A page theme equal to the book theme still counts as explicit.
    """
    if book is None:
        return ActiveTemplateIds(
            theme_id=(page.theme_id if page else None) or DEFAULT_THEME_ID,
            color_palette_id=page.color_palette_id if page else None,
            layout_template_id=page.layout_template_id if page else None,
        )
    book_theme = book.theme_id or DEFAULT_THEME_ID
    if page is None:
        return ActiveTemplateIds(book_theme, book.color_palette_id, book.layout_template_id)
    return ActiveTemplateIds(
        theme_id=page.theme_id if page.theme_id is not None else book_theme,
        color_palette_id=page.color_palette_id or book.color_palette_id,
        layout_template_id=page.layout_template_id or book.layout_template_id,
    )


def get_effective_palette_id(page: Page | None, book: Book | None, catalog: ThemeSource) -> str | None:
    """Return the palette in effect: explicit page/book palette, else the active theme's default."""
    active = get_active_template_ids(page, book)
    return active.color_palette_id or catalog.get_theme_palette_id(active.theme_id)


@dataclass(frozen=True)
class ResolveContext:
    """Everything one resolution walks through.

    Attributes:
        element: The element being resolved.
        page: The page owning the element, if known.
        book: The book owning the page, if known.
        catalog: Theme and palette lookup.
        section: Active question/answer section, if any.
    """

    element: Element
    page: Page | None
    book: Book | None
    catalog: ThemeSource
    section: QnaSection | None = None

    @property
    def section_key(self) -> str | None:
        return f"{self.section}Settings" if self.section else None


Lookup = Callable[[ResolveContext, "AttributeSpec"], Any]


@dataclass(frozen=True)
class AttributeSpec:
    """How one attribute is stored and defaulted.

    Attributes:
        key: Flattened element key, also the key in theme defaults.
        legacy_paths: Older nested locations, probed after ``key``.
        fallback: Value used once the chain is exhausted.
        section_scoped: Whether the section bundle of a question/answer element
            owns this attribute. Shared attributes are stored once on the element.
    """

    key: str
    legacy_paths: tuple[Path, ...] = ()
    fallback: Any = None
    section_scoped: bool = False

    @property
    def paths(self) -> tuple[Path, ...]:
        return ((self.key,), *self.legacy_paths)


def _first_present(source: Any, paths: tuple[Path, ...]) -> Any:
    for path in paths:
        current = source
        for step in path:
            if not isinstance(current, dict):
                current = None
                break
            current = current.get(step)
        if current is not None:
            return current
    return None


def _lookup_section(ctx: ResolveContext, spec: AttributeSpec) -> Any:
    if not spec.section_scoped or ctx.section_key is None:
        return None
    return _first_present(ctx.element.get(ctx.section_key), spec.paths)


def _lookup_element(ctx: ResolveContext, spec: AttributeSpec) -> Any:
    return _first_present(ctx.element.attributes, spec.paths)


def _lookup_legacy_section(ctx: ResolveContext, spec: AttributeSpec) -> Any:
    """Shared attributes older documents stored inside a section bundle."""
    if spec.section_scoped or ctx.section_key is None:
        return None
    return _first_present(ctx.element.get(ctx.section_key), spec.paths)


def _theme_default(ctx: ResolveContext, spec: AttributeSpec, theme_id: str | None) -> Any:
    theme = ctx.catalog.get_theme(theme_id)
    if theme is None:
        return None
    kind = ctx.element.kind
    defaults = get_theme_element_defaults(theme, kind)
    palette_id = get_active_template_ids(ctx.page, ctx.book).color_palette_id or theme.palette_id
    palette = ctx.catalog.get_palette(palette_id)
    if palette is not None:
        defaults = apply_palette_colors(defaults, palette, kind)
    if spec.section_scoped and ctx.section_key:
        value = _first_present(defaults.get(ctx.section_key), spec.paths)
        if value is not None:
            return value
    return _first_present(defaults, spec.paths)


def _lookup_page_theme(ctx: ResolveContext, spec: AttributeSpec) -> Any:
    return _theme_default(ctx, spec, get_active_template_ids(ctx.page, ctx.book).theme_id)


def _lookup_book_theme(ctx: ResolveContext, spec: AttributeSpec) -> Any:
    book_theme = (ctx.book.theme_id if ctx.book else None) or DEFAULT_THEME_ID
    return _theme_default(ctx, spec, book_theme)


RESOLUTION_CHAIN: tuple[Lookup, ...] = (
    _lookup_section,
    _lookup_element,
    _lookup_legacy_section,
    _lookup_page_theme,
    _lookup_book_theme,
)

ATTRIBUTES: dict[str, AttributeSpec] = {
    "font_size": AttributeSpec("fontSize", (("font", "fontSize"),), 58, section_scoped=True),
    "font_family": AttributeSpec("fontFamily", (("font", "fontFamily"),), "Arial, sans-serif", section_scoped=True),
    "font_bold": AttributeSpec("fontBold", (("font", "fontBold"),), False, section_scoped=True),
    "font_italic": AttributeSpec("fontItalic", (("font", "fontItalic"),), False, section_scoped=True),
    "font_color": AttributeSpec("fontColor", (("font", "fontColor"),), "#1f2937", section_scoped=True),
    "font_opacity": AttributeSpec("fontOpacity", (("font", "fontOpacity"),), 1.0, section_scoped=True),
    "border_enabled": AttributeSpec("borderEnabled", (("border", "enabled"),), False),
    "border_width": AttributeSpec("borderWidth", (("border", "borderWidth"), ("border", "width")), 0),
    "border_color": AttributeSpec("borderColor", (("border", "borderColor"), ("border", "color")), "#000000"),
    "border_opacity": AttributeSpec("borderOpacity", (("border", "borderOpacity"), ("border", "opacity")), 1.0),
    "border_theme": AttributeSpec("borderTheme", (("border", "borderTheme"), ("border", "theme")), "default"),
    "background_enabled": AttributeSpec("backgroundEnabled", (("background", "enabled"),), False),
    "background_color": AttributeSpec(
        "backgroundColor", (("background", "backgroundColor"), ("background", "color")), "transparent"
    ),
    "background_opacity": AttributeSpec(
        "backgroundOpacity", (("background", "backgroundOpacity"), ("background", "opacity")), 1.0
    ),
    "corner_radius": AttributeSpec("cornerRadius", (), 0),
    "padding": AttributeSpec("padding", (("format", "padding"),), 4),
    "align": AttributeSpec("align", (("format", "textAlign"),), "left"),
    "paragraph_spacing": AttributeSpec("paragraphSpacing", (("format", "paragraphSpacing"),), "medium"),
    "ruled_lines_enabled": AttributeSpec("ruledLinesEnabled", (("ruledLines", "enabled"), ("ruledLines",)), False),
    "ruled_lines_color": AttributeSpec("ruledLinesColor", (("ruledLines", "lineColor"),), "#1f2937"),
    "ruled_lines_width": AttributeSpec("ruledLinesWidth", (("ruledLines", "lineWidth"),), 1),
    "ruled_lines_theme": AttributeSpec("ruledLinesTheme", (("ruledLines", "ruledLinesTheme"),), "rough"),
    "ruled_lines_opacity": AttributeSpec("ruledLinesOpacity", (("ruledLines", "lineOpacity"),), 1.0),
    "stroke": AttributeSpec("stroke", (), "#1f2937"),
    "stroke_width": AttributeSpec("strokeWidth", (), 2),
    "stroke_theme": AttributeSpec("theme", (("inheritTheme",),), "default"),
    "fill": AttributeSpec("fill", (), "transparent"),
}


def resolve(
    attribute: str,
    element: Element,
    page: Page | None,
    book: Book | None,
    catalog: ThemeSource,
    section: QnaSection | str | None = None,
) -> Any:
    """Return the effective value of an attribute.

    Args:
        attribute: Name in ``ATTRIBUTES`` such as ``border_color``.
        element: The element being resolved.
        page: The page owning the element, if known.
        book: The book owning the page, if known.
        catalog: Theme and palette lookup.
        section: Active question/answer section, if any.

    Returns:
        The first present value in the resolution chain, or the fallback.

    Raises:
        KeyError: If ``attribute`` is not a known attribute name.
    """
    spec = ATTRIBUTES[attribute]
    ctx = ResolveContext(element, page, book, catalog, QnaSection(section) if section else None)
    for lookup in RESOLUTION_CHAIN:
        value = lookup(ctx, spec)
        if value is not None:
            return _normalize(spec, value)
    return spec.fallback


def _normalize(spec: AttributeSpec, value: Any) -> Any:
    # Older documents stored ruled lines as a bare flag or a nested bundle under one key.
    if spec.key == "ruledLinesEnabled" and isinstance(value, dict):
        return bool(value.get("enabled", False))
    return value


def _resolver(attribute: str) -> Callable[..., Any]:
    def resolve_attribute(
        element: Element,
        page: Page | None,
        book: Book | None,
        catalog: ThemeSource,
        section: QnaSection | str | None = None,
    ) -> Any:
        return resolve(attribute, element, page, book, catalog, section)

    resolve_attribute.__name__ = f"resolve_{attribute}"
    resolve_attribute.__doc__ = f"Return the effective ``{ATTRIBUTES[attribute].key}`` of an element."
    return resolve_attribute


resolve_font_size = _resolver("font_size")
resolve_font_family = _resolver("font_family")
resolve_font_color = _resolver("font_color")
resolve_font_opacity = _resolver("font_opacity")
resolve_border_enabled = _resolver("border_enabled")
resolve_border_width = _resolver("border_width")
resolve_border_color = _resolver("border_color")
resolve_border_opacity = _resolver("border_opacity")
resolve_border_theme = _resolver("border_theme")
resolve_background_enabled = _resolver("background_enabled")
resolve_background_color = _resolver("background_color")
resolve_background_opacity = _resolver("background_opacity")
resolve_corner_radius = _resolver("corner_radius")
resolve_padding = _resolver("padding")
resolve_align = _resolver("align")
resolve_paragraph_spacing = _resolver("paragraph_spacing")
resolve_ruled_lines_enabled = _resolver("ruled_lines_enabled")
resolve_ruled_lines_color = _resolver("ruled_lines_color")
resolve_stroke = _resolver("stroke")
resolve_stroke_width = _resolver("stroke_width")
resolve_stroke_theme = _resolver("stroke_theme")
resolve_fill = _resolver("fill")


def resolve_font(
    element: Element,
    page: Page | None,
    book: Book | None,
    catalog: ThemeSource,
    section: QnaSection | str | None = None,
) -> FontStyle:
    """Return the effective font bundle of an element or question/answer section."""
    return FontStyle(
        font_size=resolve("font_size", element, page, book, catalog, section),
        font_family=resolve("font_family", element, page, book, catalog, section),
        font_bold=bool(resolve("font_bold", element, page, book, catalog, section)),
        font_italic=bool(resolve("font_italic", element, page, book, catalog, section)),
        font_color=resolve("font_color", element, page, book, catalog, section),
        font_opacity=resolve("font_opacity", element, page, book, catalog, section),
    )


def resolve_border(
    element: Element,
    page: Page | None,
    book: Book | None,
    catalog: ThemeSource,
    section: QnaSection | str | None = None,
) -> BorderStyle:
    """Return the effective border bundle. Disabled borders keep their other fields."""
    return BorderStyle(
        enabled=bool(resolve("border_enabled", element, page, book, catalog, section)),
        width=resolve("border_width", element, page, book, catalog, section),
        color=resolve("border_color", element, page, book, catalog, section),
        opacity=resolve("border_opacity", element, page, book, catalog, section),
        theme=resolve("border_theme", element, page, book, catalog, section),
    )


def resolve_background(
    element: Element,
    page: Page | None,
    book: Book | None,
    catalog: ThemeSource,
    section: QnaSection | str | None = None,
) -> BackgroundStyle:
    """Return the effective element background bundle."""
    return BackgroundStyle(
        enabled=bool(resolve("background_enabled", element, page, book, catalog, section)),
        color=resolve("background_color", element, page, book, catalog, section),
        opacity=resolve("background_opacity", element, page, book, catalog, section),
    )


def resolve_ruled_lines(
    element: Element,
    page: Page | None,
    book: Book | None,
    catalog: ThemeSource,
    section: QnaSection | str | None = None,
) -> RuledLinesStyle:
    """Return the effective ruled-lines bundle."""
    return RuledLinesStyle(
        enabled=bool(resolve("ruled_lines_enabled", element, page, book, catalog, section)),
        color=resolve("ruled_lines_color", element, page, book, catalog, section),
        width=resolve("ruled_lines_width", element, page, book, catalog, section),
        theme=resolve("ruled_lines_theme", element, page, book, catalog, section),
        opacity=resolve("ruled_lines_opacity", element, page, book, catalog, section),
    )
