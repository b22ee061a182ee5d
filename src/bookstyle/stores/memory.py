"""In-memory implementations of the host collaborators.

``InMemoryLastValueStore`` backs the feature toggles. ``InMemoryDocument`` is
a reference host: it applies the patches the engine proposes to a book and
records one history label per committed transaction.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any

import structlog

from bookstyle.core.commands import (
    ApplyThemeToElementsPatch,
    SetBookPalettePatch,
    SetBookThemePatch,
    SetPagePalettePatch,
    SetPageThemePatch,
    UpdateElementPatch,
    UpdateGroupedElementPatch,
    UpdatePageBackgroundPatch,
    UpdateToolSettingsPatch,
)
from bookstyle.exceptions import ElementNotFoundError, PageNotFoundError
from bookstyle.services.cascade import BOOK_THEME_SENTINEL, ThemeCascade

if TYPE_CHECKING:
    from bookstyle.core.commands import Patch, Transaction
    from bookstyle.core.models import Book, Element, Page
    from bookstyle.stores.base import ThemeSource

logger = structlog.get_logger(__name__)


class InMemoryLastValueStore:
    """Dictionary-backed last-value store.

    Note:
        Values are lost when the process exits.
    """

    def __init__(self, values: dict[str, str] | None = None) -> None:
        """Initialize the store, optionally pre-filled with ``values``."""
        self._values: dict[str, str] = dict(values or {})

    def get(self, key: str) -> str | None:
        """Return the stored value for ``key``, or None."""
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        self._values[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)


class InMemoryDocument:
    """Reference host that applies patches to an in-memory book.

    Patches are applied in order. Each one replaces the touched page and
    element objects instead of mutating them, so snapshots handed out earlier
    stay unchanged.

    Attributes:
        tool_settings: Defaults for newly created elements, keyed by tool.
        history: Labels of committed transactions, oldest first.
    """

    def __init__(self, book: Book, catalog: ThemeSource) -> None:
        """Initialize the document.

        Args:
            book: The book to edit.
            catalog: Theme lookup used to apply themes to elements.
        """
        self._book = book
        self._cascade = ThemeCascade(catalog)
        self.tool_settings: dict[str, dict[str, Any]] = {}
        self.history: list[str] = []

    @property
    def book(self) -> Book:
        """The current book snapshot."""
        return self._book

    def commit(self, transaction: Transaction) -> Book:
        """Apply every patch of a transaction and record its history label.

        An empty transaction records nothing.

        Args:
            transaction: The patches to apply.

        Returns:
            The book after the transaction.

        Raises:
            PageNotFoundError: If a patch addresses a missing page.
            ElementNotFoundError: If a patch addresses a missing element.
        """
        if transaction.is_empty:
            return self._book
        for patch in transaction:
            self.apply(patch)
        if transaction.history_label:
            self.history.append(transaction.history_label)
        logger.debug("Transaction committed", label=transaction.history_label, patches=len(transaction))
        return self._book

    def apply(self, patch: Patch) -> Book:
        """Apply a single patch.

        Args:
            patch: The patch to apply.

        Returns:
            The book after the patch.
        """
        if isinstance(patch, UpdateElementPatch):
            self._update_element(patch.id, patch.updates)
        elif isinstance(patch, UpdateGroupedElementPatch):
            self._update_element(patch.element_id, patch.updates, group_id=patch.group_id)
        elif isinstance(patch, UpdatePageBackgroundPatch):
            self._replace_page(patch.page_index, background=patch.background)
        elif isinstance(patch, UpdateToolSettingsPatch):
            self.tool_settings[patch.tool] = {**self.tool_settings.get(patch.tool, {}), **patch.settings}
        elif isinstance(patch, SetPageThemePatch):
            theme_id = None if patch.theme_id == BOOK_THEME_SENTINEL else patch.theme_id
            self._replace_page(patch.page_index, theme_id=theme_id)
        elif isinstance(patch, SetBookThemePatch):
            self._book = replace(self._book, theme_id=patch.theme_id)
        elif isinstance(patch, SetPagePalettePatch):
            self._replace_page(patch.page_index, color_palette_id=patch.palette_id)
        elif isinstance(patch, SetBookPalettePatch):
            self._book = replace(self._book, color_palette_id=patch.palette_id)
        elif isinstance(patch, ApplyThemeToElementsPatch):
            page = self._page(patch.page_index)
            elements = [
                element.merged(
                    self._cascade.element_theme_updates(element, patch.theme_id, preserve_colors=patch.preserve_colors)
                )
                for element in page.elements
            ]
            self._replace_page(patch.page_index, elements=elements)
        return self._book

    def _page(self, page_index: int) -> Page:
        if not 0 <= page_index < len(self._book.pages):
            raise PageNotFoundError(page_index)
        return self._book.pages[page_index]

    def _replace_page(self, page_index: int, **changes: Any) -> None:
        pages = list(self._book.pages)
        pages[page_index] = replace(self._page(page_index), **changes)
        self._book = replace(self._book, pages=pages)

    def _update_element(self, element_id: str, updates: dict[str, Any], group_id: str | None = None) -> None:
        for page_index, page in enumerate(self._book.pages):
            elements: list[Element] = []
            found = False
            for element in page.elements:
                if element.id == element_id and (group_id is None or element.group_id == group_id):
                    elements.append(element.merged(updates))
                    found = True
                else:
                    elements.append(element)
            if found:
                self._replace_page(page_index, elements=elements)
                return
        raise ElementNotFoundError(element_id)
