"""Core type definitions for bookstyle."""

from __future__ import annotations

from enum import StrEnum


class ElementType(StrEnum):
    """Enumeration of canvas element types."""

    TEXT = "text"
    IMAGE = "image"
    PLACEHOLDER = "placeholder"
    STICKER = "sticker"
    BRUSH = "brush"
    LINE = "line"
    RECT = "rect"
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    POLYGON = "polygon"
    HEART = "heart"
    STAR = "star"
    SPEECH_BUBBLE = "speech-bubble"
    DOG = "dog"
    CAT = "cat"
    SMILEY = "smiley"


class TextType(StrEnum):
    """Sub-kinds of text elements."""

    TEXT = "text"
    QUESTION = "question"
    ANSWER = "answer"
    QNA = "qna"
    QNA_INLINE = "qna_inline"
    FREE_TEXT = "free_text"


class QnaSection(StrEnum):
    """The active section of a question/answer element."""

    QUESTION = "question"
    ANSWER = "answer"


class ThemeCategory(StrEnum):
    """Element-default categories a theme carries."""

    TEXT = "text"
    QUESTION = "question"
    ANSWER = "answer"
    IMAGE = "image"
    SHAPE = "shape"
    BRUSH = "brush"


class ToolType(StrEnum):
    """Tools whose default settings are recomputed on a theme change."""

    BRUSH = "brush"
    LINE = "line"
    RECT = "rect"
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    POLYGON = "polygon"
    HEART = "heart"
    STAR = "star"
    SPEECH_BUBBLE = "speech-bubble"
    DOG = "dog"
    CAT = "cat"
    SMILEY = "smiley"
    TEXT = "text"
    QUESTION = "question"
    ANSWER = "answer"
    QNA_INLINE = "qna_inline"
    FREE_TEXT = "free_text"


class BackgroundType(StrEnum):
    """The active variant of a page background."""

    COLOR = "color"
    PATTERN = "pattern"
    IMAGE = "image"


class ImageSize(StrEnum):
    """How a background image is fitted to the page."""

    COVER = "cover"
    CONTAIN = "contain"
    STRETCH = "stretch"


class PatchKind(StrEnum):
    """Kinds of patch commands proposed to the host."""

    UPDATE_ELEMENT = "updateElement"
    UPDATE_GROUPED_ELEMENT = "updateGroupedElement"
    UPDATE_PAGE_BACKGROUND = "updatePageBackground"
    UPDATE_TOOL_SETTINGS = "updateToolSettings"
    SET_PAGE_THEME = "setPageTheme"
    SET_BOOK_THEME = "setBookTheme"
    SET_PAGE_PALETTE = "setPagePalette"
    SET_BOOK_PALETTE = "setBookPalette"
    APPLY_THEME_TO_ELEMENTS = "applyThemeToElements"


SHAPE_TYPES = frozenset(
    {
        ElementType.LINE,
        ElementType.RECT,
        ElementType.CIRCLE,
        ElementType.TRIANGLE,
        ElementType.POLYGON,
        ElementType.HEART,
        ElementType.STAR,
        ElementType.SPEECH_BUBBLE,
        ElementType.DOG,
        ElementType.CAT,
        ElementType.SMILEY,
    }
)
