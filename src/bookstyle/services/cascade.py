"""Theme and palette cascade.

A theme or palette change at page or book level is one user action, but it
touches many things: the page theme or book theme itself, the page
backgrounds, the theme-owned fields of every element, and the defaults of
every drawing tool. ``ThemeCascade`` turns one such action into a single
``Transaction`` of patches the host applies in order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from bookstyle.core.accessors import DEFAULT_THEME_ID, get_active_template_ids
from bookstyle.core.background import build_theme_background, recolor_background
from bookstyle.core.commands import (
    ApplyThemeToElementsPatch,
    Patch,
    SetBookPalettePatch,
    SetBookThemePatch,
    SetPagePalettePatch,
    SetPageThemePatch,
    Transaction,
    UpdatePageBackgroundPatch,
    UpdateToolSettingsPatch,
)
from bookstyle.core.defaults import get_theme_defaults, get_theme_element_defaults
from bookstyle.core.logging import bound_document
from bookstyle.core.scales import clamp_stroke_width_to_theme
from bookstyle.core.types import ToolType

if TYPE_CHECKING:
    from bookstyle.core.models import Book, Element, Page
    from bookstyle.core.palettes import Palette
    from bookstyle.core.themes import Theme
    from bookstyle.stores.base import ThemeSource

logger = structlog.get_logger(__name__)

BOOK_THEME_SENTINEL = "__BOOK_THEME__"


def is_color_key(key: str) -> bool:
    """Return whether a settings key holds a color.

    ``fill``, ``stroke``, anything ending in ``color``/``colors`` and anything
    containing ``color`` count as colors, except gradient ``colorStop`` keys.
    """
    lowered = key.lower()
    return (
        lowered in ("fill", "stroke")
        or lowered.endswith(("color", "colors"))
        or ("color" in lowered and "colorstop" not in lowered)
    )


def strip_color_fields(payload: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``payload`` without color keys at any depth.

    Lists are walked item by item. Nested objects left empty are dropped.
    """
    result: dict[str, Any] = {}
    for key, value in payload.items():
        if is_color_key(key):
            continue
        if isinstance(value, dict):
            value = strip_color_fields(value)
            if not value:
                continue
        elif isinstance(value, list):
            value = _strip_list(value)
        result[key] = value
    return result


def _strip_list(items: list[Any]) -> list[Any]:
    stripped = []
    for item in items:
        if isinstance(item, dict):
            item = strip_color_fields(item)
            if not item:
                continue
        elif isinstance(item, list):
            item = _strip_list(item)
        stripped.append(item)
    return stripped


class ThemeCascade:
    """Turns theme and palette changes into ordered patch transactions.

    Within a transaction the theme (or palette) patch comes first. Then each
    affected page gets its background patch and its apply-theme-to-elements
    patch, pages in page order. The per-tool default patches come last.
    Unknown theme or palette ids produce an empty transaction.
    """

    def __init__(self, catalog: ThemeSource) -> None:
        """Initialize the cascade.

        Args:
            catalog: Theme, palette and background template lookup.
        """
        self._catalog = catalog

    def set_page_theme(self, book: Book, page_index: int, theme_id: str) -> Transaction:
        """Change the theme of one page.

        Args:
            book: Snapshot of the book.
            page_index: Index of the page to change.
            theme_id: Explicit theme id, or ``BOOK_THEME_SENTINEL`` to make the
                page inherit the book theme again.

        Returns:
            The patches to apply, labelled for a single undo entry.
        """
        inherit = theme_id == BOOK_THEME_SENTINEL
        resolved = (book.theme_id or DEFAULT_THEME_ID) if inherit else theme_id
        theme = self._catalog.get_theme(resolved)
        label = 'Apply Theme "Book Theme"' if inherit else f'Apply Theme "{theme.name if theme else theme_id}"'
        if not 0 <= page_index < len(book.pages):
            logger.warning("Page theme change skipped, no such page", book_id=book.id, page_index=page_index)
            return Transaction(label)
        if theme is None:
            logger.info("Page theme change skipped, unknown theme", book_id=book.id, theme_id=resolved)
            return Transaction(label)

        with bound_document(book.id, theme_id=resolved):
            page = book.pages[page_index]
            transaction = Transaction(label, [SetPageThemePatch(page_index, theme_id, skip_history=True)])
            palette, palette_patch = self._follow_theme_palette(page, book, resolved, page_index)
            if palette_patch is not None:
                transaction.add(palette_patch)
            transaction.extend(self._page_patches(page_index, page, theme, palette, resolved))
            transaction.extend(self.tool_settings_patches(resolved))
            logger.info("Page theme cascade built", page_index=page_index, patches=len(transaction))
            return transaction

    def set_book_theme(self, book: Book, theme_id: str, *, clear_page_backgrounds: bool = False) -> Transaction:
        """Change the book theme and cascade it to every page.

        Pages that inherit the book theme get the new theme's background and
        element defaults. Pages with their own theme keep it and have their
        elements recomputed from it; with ``clear_page_backgrounds`` they
        also get the book's background.

        Args:
            book: Snapshot of the book.
            theme_id: The new book theme.
            clear_page_backgrounds: Whether page-level backgrounds are replaced too.

        Returns:
            The patches to apply, labelled for a single undo entry.
        """
        theme = self._catalog.get_theme(theme_id)
        label = f'Apply Theme "{theme.name if theme else theme_id}" to all pages'
        if theme is None:
            logger.info("Book theme change skipped, unknown theme", book_id=book.id, theme_id=theme_id)
            return Transaction(label)

        with bound_document(book.id, theme_id=theme_id):
            transaction = Transaction(label, [SetBookThemePatch(theme_id, skip_history=True)])
            book_palette_id = book.color_palette_id
            old_default = self._catalog.get_theme_palette_id(book.theme_id or DEFAULT_THEME_ID)
            if book_palette_id is not None and book_palette_id == old_default:
                book_palette_id = self._catalog.get_theme_palette_id(theme_id)
                transaction.add(SetBookPalettePatch(book_palette_id, skip_history=True))

            for index, page in enumerate(book.pages):
                inherits = page.theme_id is None
                if inherits or clear_page_backgrounds:
                    palette = self._catalog.get_palette(page.color_palette_id or book_palette_id or theme.palette_id)
                    background = build_theme_background(theme, palette, self._catalog, page.background)
                    transaction.add(UpdatePageBackgroundPatch(index, background))
                element_theme = theme_id if inherits else page.theme_id
                transaction.add(
                    ApplyThemeToElementsPatch(index, element_theme, skip_history=True, preserve_colors=True)
                )

            transaction.extend(self.tool_settings_patches(theme_id))
            logger.info("Book theme cascade built", pages=len(book.pages), patches=len(transaction))
            return transaction

    def set_page_palette(self, book: Book, page_index: int, palette_id: str | None) -> Transaction:
        """Change the palette of one page and recolor its background.

        Args:
            book: Snapshot of the book.
            page_index: Index of the page to change.
            palette_id: New palette id, or None to fall back to the theme's default.

        Returns:
            The patches to apply, labelled for a single undo entry.
        """
        if not 0 <= page_index < len(book.pages):
            logger.warning("Page palette change skipped, no such page", book_id=book.id, page_index=page_index)
            return Transaction()
        page = book.pages[page_index]
        palette = self._resolve_palette(palette_id, get_active_template_ids(page, book).theme_id)
        label = f'Apply Palette "{palette.name if palette else palette_id}"'
        if palette_id is not None and palette is None:
            logger.info("Page palette change skipped, unknown palette", book_id=book.id, palette_id=palette_id)
            return Transaction(label)
        return Transaction(
            label,
            [
                SetPagePalettePatch(page_index, palette_id, skip_history=True),
                UpdatePageBackgroundPatch(page_index, recolor_background(page.background, palette)),
            ],
        )

    def set_book_palette(self, book: Book, palette_id: str | None) -> Transaction:
        """Change the book palette and recolor backgrounds of pages without their own palette."""
        palette = self._resolve_palette(palette_id, book.theme_id or DEFAULT_THEME_ID)
        label = f'Apply Palette "{palette.name if palette else palette_id}" to Book'
        if palette_id is not None and palette is None:
            logger.info("Book palette change skipped, unknown palette", book_id=book.id, palette_id=palette_id)
            return Transaction(label)
        transaction = Transaction(label, [SetBookPalettePatch(palette_id, skip_history=True)])
        for index, page in enumerate(book.pages):
            if page.color_palette_id is None:
                page_palette = palette or self._resolve_palette(None, get_active_template_ids(page, book).theme_id)
                transaction.add(UpdatePageBackgroundPatch(index, recolor_background(page.background, page_palette)))
        return transaction

    def tool_settings_patches(
        self,
        theme_id: str,
        palette_id: str | None = None,
        *,
        preserve_colors: bool = True,
    ) -> list[UpdateToolSettingsPatch]:
        """Return one tool-defaults patch per tool type, in tool order.

        Args:
            theme_id: Theme whose defaults are used.
            palette_id: Palette applied to the defaults, if any.
            preserve_colors: Strip color fields so current tool colors survive.
        """
        patches = []
        for tool in ToolType:
            settings = get_theme_defaults(self._catalog, theme_id, tool, palette_id)
            if preserve_colors:
                settings = strip_color_fields(settings)
            patches.append(UpdateToolSettingsPatch(str(tool), settings))
        return patches

    def element_theme_updates(self, element: Element, theme_id: str, *, preserve_colors: bool = True) -> dict[str, Any]:
        """Return the fields an apply-theme-to-elements patch writes on one element.

        Non-color fields come from the theme's defaults for the element kind.
        A border or stroke width the theme does not set is clamped into the
        new border or stroke theme's range.

        Args:
            element: The element to recompute.
            theme_id: Theme being applied.
            preserve_colors: Leave the element's colors untouched.

        Returns:
            Partial fields to shallow-merge into the element; empty for an unknown theme.
        """
        theme = self._catalog.get_theme(theme_id)
        if theme is None:
            return {}
        updates = get_theme_element_defaults(theme, element.kind)
        if preserve_colors:
            updates = strip_color_fields(updates)
        for width_key, theme_key in (("borderWidth", "borderTheme"), ("strokeWidth", "theme")):
            width = element.get(width_key)
            if width_key not in updates and theme_key in updates and isinstance(width, int | float):
                updates[width_key] = clamp_stroke_width_to_theme(width, updates[theme_key])
        return updates

    def _page_patches(
        self,
        page_index: int,
        page: Page,
        theme: Theme,
        palette: Palette | None,
        theme_id: str,
    ) -> list[Patch]:
        background = build_theme_background(theme, palette, self._catalog, page.background)
        return [
            UpdatePageBackgroundPatch(page_index, background),
            ApplyThemeToElementsPatch(page_index, theme_id, skip_history=True, preserve_colors=True),
        ]

    def _follow_theme_palette(
        self,
        page: Page,
        book: Book,
        new_theme_id: str,
        page_index: int,
    ) -> tuple[Palette | None, SetPagePalettePatch | None]:
        """Pick the palette a page uses after a theme change.

        A page still on its current theme's default palette follows the new
        theme's default. Otherwise the active palette stays.
        """
        active_palette_id = page.color_palette_id or book.color_palette_id
        current_theme = get_active_template_ids(page, book).theme_id
        if active_palette_id is not None and active_palette_id == self._catalog.get_theme_palette_id(current_theme):
            new_palette_id = self._catalog.get_theme_palette_id(new_theme_id)
            return (
                self._catalog.get_palette(new_palette_id),
                SetPagePalettePatch(page_index, new_palette_id, skip_history=True),
            )
        return self._resolve_palette(active_palette_id, new_theme_id), None

    def _resolve_palette(self, palette_id: str | None, theme_id: str) -> Palette | None:
        if palette_id is not None:
            return self._catalog.get_palette(palette_id)
        return self._catalog.get_palette(self._catalog.get_theme_palette_id(theme_id))
