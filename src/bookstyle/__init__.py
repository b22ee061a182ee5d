"""bookstyle: hierarchical style resolution for a book and page editor.

Resolves the effective value of every visual attribute of an element by
cascading through element, page and book overrides down to theme defaults,
and proposes document updates as patch transactions the host applies.

Key Components:
    - Core Models: Book, Page, Element, PageBackground
    - Catalog: ThemeCatalog with themes, palettes and background templates
    - Accessors: resolve() and the resolve_* functions
    - Services: ThemeCascade, FeatureToggles
    - Stores: LastValueStore, InMemoryDocument (reference host)

Quick Start:
    >>> from bookstyle import Book, Page, ThemeCascade, ThemeCatalog
    >>>
    >>> catalog = ThemeCatalog.from_files()
    >>> book = Book(pages=[Page()])
    >>> transaction = ThemeCascade(catalog).set_book_theme(book, "candy")
    >>> transaction.history_label
    'Apply Theme "Candy" to all pages'
"""

from __future__ import annotations

from bookstyle.config import BookstyleConfig
from bookstyle.core.accessors import get_active_template_ids, get_effective_palette_id, resolve
from bookstyle.core.commands import Transaction
from bookstyle.core.models import Book, Element, Page, PageBackground
from bookstyle.core.themes import ThemeCatalog
from bookstyle.exceptions import BookstyleError, ElementNotFoundError, PageNotFoundError, ThemeDataError
from bookstyle.services import BOOK_THEME_SENTINEL, FeatureToggles, ThemeCascade
from bookstyle.stores import InMemoryDocument, InMemoryLastValueStore

__version__ = "0.1.0"

__all__ = [
    "BOOK_THEME_SENTINEL",
    "Book",
    "BookstyleConfig",
    "BookstyleError",
    "Element",
    "ElementNotFoundError",
    "FeatureToggles",
    "InMemoryDocument",
    "InMemoryLastValueStore",
    "Page",
    "PageBackground",
    "PageNotFoundError",
    "ThemeCascade",
    "ThemeCatalog",
    "ThemeDataError",
    "Transaction",
    "__version__",
    "get_active_template_ids",
    "get_effective_palette_id",
    "resolve",
]
