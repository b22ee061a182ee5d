"""Pytest configuration and fixtures for bookstyle tests."""

from __future__ import annotations

import pytest

from bookstyle.core.models import Book, Element, Page
from bookstyle.core.themes import ThemeCatalog
from bookstyle.core.types import ElementType, TextType
from bookstyle.stores.memory import InMemoryLastValueStore


# Catalog fixtures


@pytest.fixture
def catalog() -> ThemeCatalog:
    """Load the bundled theme catalog."""
    return ThemeCatalog.from_files()


@pytest.fixture
def store() -> InMemoryLastValueStore:
    """Create a fresh last-value store for each test."""
    return InMemoryLastValueStore()


# Model fixtures


@pytest.fixture
def text_element() -> Element:
    """Create a plain text element without overrides."""
    return Element(id="text-1", element_type=ElementType.TEXT, text_type=TextType.TEXT)


@pytest.fixture
def bordered_text() -> Element:
    """Create a text element with an enabled one-pixel border."""
    return Element(
        id="text-border",
        element_type=ElementType.TEXT,
        text_type=TextType.TEXT,
        attributes={
            "borderEnabled": True,
            "borderWidth": 1,
            "borderColor": "#ff0000",
            "borderOpacity": 0.5,
            "borderTheme": "default",
        },
    )


@pytest.fixture
def qna_element() -> Element:
    """Create a question/answer element with per-section fonts."""
    return Element(
        id="qna-1",
        element_type=ElementType.TEXT,
        text_type=TextType.QNA,
        attributes={
            "questionSettings": {"fontSize": 70, "fontColor": "#111111"},
            "answerSettings": {"fontSize": 40},
            "borderColor": "#00ff00",
        },
    )


@pytest.fixture
def rect_element() -> Element:
    """Create a rectangle with a visible stroke."""
    return Element(
        id="rect-1",
        element_type=ElementType.RECT,
        attributes={"stroke": "#123456", "strokeWidth": 5, "fill": "#abcdef"},
    )


@pytest.fixture
def sample_book(text_element: Element, bordered_text: Element, rect_element: Element) -> Book:
    """Create a two-page book on the default theme; the second page has its own theme."""
    return Book(
        id="book-1",
        name="Test Book",
        pages=[
            Page(id="page-1", page_number=1, elements=[text_element, bordered_text]),
            Page(id="page-2", page_number=2, elements=[rect_element], theme_id="rough"),
        ],
    )
