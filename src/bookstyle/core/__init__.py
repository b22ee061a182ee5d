"""Core domain models and resolution logic for bookstyle."""

from bookstyle.core.commands import (
    ApplyThemeToElementsPatch,
    Patch,
    SetBookPalettePatch,
    SetBookThemePatch,
    SetPagePalettePatch,
    SetPageThemePatch,
    Transaction,
    UpdateElementPatch,
    UpdateGroupedElementPatch,
    UpdatePageBackgroundPatch,
    UpdateToolSettingsPatch,
)
from bookstyle.core.models import Book, Element, Page, PageBackground
from bookstyle.core.palettes import Palette
from bookstyle.core.style import BackgroundStyle, BorderStyle, FontStyle, RuledLinesStyle
from bookstyle.core.themes import BackgroundImageTemplate, Theme, ThemeCatalog
from bookstyle.core.types import BackgroundType, ElementType, PatchKind, QnaSection, TextType, ToolType

__all__ = [
    "ApplyThemeToElementsPatch",
    "BackgroundImageTemplate",
    "BackgroundStyle",
    "BackgroundType",
    "Book",
    "BorderStyle",
    "Element",
    "ElementType",
    "FontStyle",
    "Page",
    "PageBackground",
    "Palette",
    "Patch",
    "PatchKind",
    "QnaSection",
    "RuledLinesStyle",
    "SetBookPalettePatch",
    "SetBookThemePatch",
    "SetPagePalettePatch",
    "SetPageThemePatch",
    "TextType",
    "Theme",
    "ThemeCatalog",
    "ToolType",
    "Transaction",
    "UpdateElementPatch",
    "UpdateGroupedElementPatch",
    "UpdatePageBackgroundPatch",
    "UpdateToolSettingsPatch",
]
