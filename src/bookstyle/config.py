"""Configuration for bookstyle."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from bookstyle.core.themes import ThemeCatalog

TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in TRUTHY


@dataclass
class BookstyleConfig:
    """Configuration for theme data and logging.

    Unset file paths fall back to the data files bundled with the package.

    Environment variables:
        BOOKSTYLE_THEMES_FILE: Path to a themes JSON file
        BOOKSTYLE_PALETTES_FILE: Path to a palettes JSON file
        BOOKSTYLE_BACKGROUNDS_FILE: Path to a background images JSON file
        BOOKSTYLE_DEFAULT_THEME: Theme used when a book has none (default: "default")
        BOOKSTYLE_DEBUG: Enable debug logging
        BOOKSTYLE_JSON_LOGS: Render logs as JSON
    """

    # Theme data
    themes_file: str | None = field(default_factory=lambda: os.getenv("BOOKSTYLE_THEMES_FILE") or None)
    palettes_file: str | None = field(default_factory=lambda: os.getenv("BOOKSTYLE_PALETTES_FILE") or None)
    backgrounds_file: str | None = field(default_factory=lambda: os.getenv("BOOKSTYLE_BACKGROUNDS_FILE") or None)
    default_theme: str = field(default_factory=lambda: os.getenv("BOOKSTYLE_DEFAULT_THEME", "default"))

    # Logging
    debug: bool = field(default_factory=lambda: _env_flag("BOOKSTYLE_DEBUG"))
    json_logs: bool = field(default_factory=lambda: _env_flag("BOOKSTYLE_JSON_LOGS"))

    def load_catalog(self) -> ThemeCatalog:
        """Load the theme catalog from the configured files.

        Raises:
            ThemeDataError: If a configured file is missing or malformed.
        """
        return ThemeCatalog.from_files(self.themes_file, self.palettes_file, self.backgrounds_file)
