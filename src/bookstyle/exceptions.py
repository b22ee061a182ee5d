"""Custom exceptions for bookstyle.

The resolution engine itself never raises into its host: unknown theme or
palette ids fall through to defaults. These exceptions belong to the data
loading boundary and the in-memory reference host.
"""

from __future__ import annotations


class BookstyleError(Exception):
    """Base exception class for all bookstyle errors."""


class ThemeDataError(BookstyleError):
    """Raised when a theme, palette or background template file cannot be loaded.

    Attributes:
        source: The path or name of the data source that failed.
    """

    def __init__(self, source: str, reason: str) -> None:
        """Initialize the exception with the failing source.

        Args:
            source: The path or name of the data source that failed.
            reason: Description of why loading failed.
        """
        self.source = source
        super().__init__(f"Could not load theme data from {source}: {reason}")


class PageNotFoundError(BookstyleError):
    """Raised when a patch addresses a page index that does not exist.

    Attributes:
        page_index: The page index that was not found.
    """

    def __init__(self, page_index: int) -> None:
        """Initialize the exception with the page index.

        Args:
            page_index: The page index that was not found.
        """
        self.page_index = page_index
        super().__init__(f"Page with index {page_index} not found")


class ElementNotFoundError(BookstyleError):
    """Raised when a patch addresses an element that does not exist.

    Attributes:
        element_id: The ID of the element that was not found.
    """

    def __init__(self, element_id: str) -> None:
        """Initialize the exception with the element ID.

        Args:
            element_id: The ID of the element that was not found.
        """
        self.element_id = element_id
        super().__init__(f"Element with ID {element_id} not found")
