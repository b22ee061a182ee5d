"""Resolved style bundles for canvas elements."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FontStyle:
    """Effective font configuration for an element or question/answer section.

    Attributes:
        font_size: Font size in actual pixels.
        font_family: Font family name.
        font_bold: Whether the font is bold.
        font_italic: Whether the font is italic.
        font_color: The font color in hex format.
        font_opacity: Opacity level from 0.0 (transparent) to 1.0 (opaque).
    """

    font_size: float = 58
    font_family: str = "Arial, sans-serif"
    font_bold: bool = False
    font_italic: bool = False
    font_color: str = "#1f2937"
    font_opacity: float = 1.0


@dataclass(frozen=True)
class BorderStyle:
    """Effective border configuration.

    A disabled border still carries its width, color, opacity and theme so
    re-enabling it shows the previous configuration.

    Attributes:
        enabled: Whether the border is drawn.
        width: Border width in actual theme units.
        color: Border color in hex format.
        opacity: Opacity level from 0.0 (transparent) to 1.0 (opaque).
        theme: Border rendering theme id.
    """

    enabled: bool = False
    width: float = 0
    color: str = "#000000"
    opacity: float = 1.0
    theme: str = "default"


@dataclass(frozen=True)
class BackgroundStyle:
    """Effective element background configuration.

    Attributes:
        enabled: Whether the background is painted.
        color: Background color in hex format or "transparent".
        opacity: Opacity level from 0.0 (transparent) to 1.0 (opaque).
    """

    enabled: bool = False
    color: str = "transparent"
    opacity: float = 1.0


@dataclass(frozen=True)
class RuledLinesStyle:
    """Effective ruled-lines configuration for text answers.

    Attributes:
        enabled: Whether ruled lines are drawn.
        color: Line color in hex format.
        width: Line width in actual theme units.
        theme: Line rendering theme id.
        opacity: Opacity level from 0.0 (transparent) to 1.0 (opaque).
    """

    enabled: bool = False
    color: str = "#1f2937"
    width: float = 1
    theme: str = "rough"
    opacity: float = 1.0
