"""Collaborator protocols the engine is given by its host."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from bookstyle.core.palettes import Palette
    from bookstyle.core.themes import BackgroundImageTemplate, Theme


@runtime_checkable
class ThemeSource(Protocol):
    """Protocol defining read-only lookup of themes, palettes and templates.

    Every lookup returns None for an unknown or empty id. Callers treat that
    as "no theme" and fall through to defaults.
    """

    def get_theme(self, theme_id: str | None) -> Theme | None:
        """Return the theme with ``theme_id``.

        Args:
            theme_id: The theme identifier.

        Returns:
            The theme if found, None otherwise.
        """
        ...

    def get_palette(self, palette_id: str | None) -> Palette | None:
        """Return the palette with ``palette_id``.

        Args:
            palette_id: The palette identifier.

        Returns:
            The palette if found, None otherwise.
        """
        ...

    def get_background_template(self, template_id: str | None) -> BackgroundImageTemplate | None:
        """Return the background image template with ``template_id``.

        Args:
            template_id: The template identifier.

        Returns:
            The template if found, None otherwise.
        """
        ...

    def get_theme_palette_id(self, theme_id: str | None) -> str | None:
        """Return the default palette id of a theme.

        Args:
            theme_id: The theme identifier.

        Returns:
            The palette id, or None if the theme is unknown or has no palette.
        """
        ...


@runtime_checkable
class LastValueStore(Protocol):
    """Protocol for the host-owned "last known value" side store.

    Keys have the form ``<feature>-<property>-<elementId>``. Values are
    strings; callers convert numbers themselves.
    """

    def get(self, key: str) -> str | None:
        """Return the stored value for ``key``, or None if nothing was stored."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...
