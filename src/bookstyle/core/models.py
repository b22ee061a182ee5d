"""Core document models for bookstyle.

Books own pages, pages own elements. Every level carries sparse overrides:
an absent value means "inherit from the next broader level". The models map
to and from the editor's camelCase document JSON through ``to_dict`` and
``from_dict``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any
from uuid import uuid4

from bookstyle.core.types import BackgroundType, ElementType, TextType

BACKGROUND_FIELD_KEYS: dict[str, str] = {
    "type": "type",
    "value": "value",
    "opacity": "opacity",
    "page_theme": "pageTheme",
    "pattern_size": "patternSize",
    "pattern_stroke_width": "patternStrokeWidth",
    "pattern_foreground_color": "patternForegroundColor",
    "pattern_background_color": "patternBackgroundColor",
    "pattern_background_opacity": "patternBackgroundOpacity",
    "background_image_template_id": "backgroundImageTemplateId",
    "image_size": "imageSize",
    "image_repeat": "imageRepeat",
    "image_position": "imagePosition",
    "image_contain_width_percent": "imageContainWidthPercent",
    "apply_palette": "applyPalette",
    "background_color": "backgroundColor",
    "background_color_enabled": "backgroundColorEnabled",
    "saved_image_value": "_savedImageValue",
    "saved_color_value": "_savedColorValue",
    "saved_pattern_value": "_savedPatternValue",
}


def _coerce(enum_type: type, value: Any) -> Any:
    """Return the enum member for ``value`` or the raw value if it is unknown."""
    try:
        return enum_type(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class PageBackground:
    """A page background: a tagged union over color, pattern and image.

    Only ``type`` selects the active variant. Fields that belong to inactive
    variants are kept, so switching back restores the prior configuration.

    Attributes:
        type: The active variant.
        value: Color hex, pattern id, or image URL depending on ``type``.
        opacity: Background opacity from 0.0 to 1.0. None until first written.
        page_theme: Theme id the background was built from.
        pattern_size: Pattern scale (1-11).
        pattern_stroke_width: Stroke width of pattern lines.
        pattern_foreground_color: Color of the pattern drawing.
        pattern_background_color: Color behind the pattern.
        pattern_background_opacity: Opacity of the pattern background.
        background_image_template_id: Template the image came from.
        image_size: cover, contain or stretch.
        image_repeat: Whether a contained image tiles.
        image_position: Anchor corner of a contained image.
        image_contain_width_percent: Width of a contained image in percent.
        apply_palette: Whether palette colors are applied to template images.
        background_color: Fill behind a template image.
        background_color_enabled: Whether ``background_color`` is painted.
        saved_image_value: Shadow of the last image URL.
        saved_color_value: Shadow of the last flat color.
        saved_pattern_value: Shadow of the last pattern id.
    """

    type: BackgroundType = BackgroundType.COLOR
    value: str = "#ffffff"
    opacity: float | None = None
    page_theme: str | None = None
    pattern_size: float | None = None
    pattern_stroke_width: float | None = None
    pattern_foreground_color: str | None = None
    pattern_background_color: str | None = None
    pattern_background_opacity: float | None = None
    background_image_template_id: str | None = None
    image_size: str | None = None
    image_repeat: bool | None = None
    image_position: str | None = None
    image_contain_width_percent: float | None = None
    apply_palette: bool | None = None
    background_color: str | None = None
    background_color_enabled: bool | None = None
    saved_image_value: str | None = None
    saved_color_value: str | None = None
    saved_pattern_value: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the document's camelCase shape, omitting unset fields."""
        result: dict[str, Any] = {}
        for name, key in BACKGROUND_FIELD_KEYS.items():
            value = getattr(self, name)
            if value is not None:
                result[key] = str(value) if name == "type" else value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PageBackground:
        """Build a background from the document's camelCase shape.

        ``templateId`` is accepted as an alias of ``backgroundImageTemplateId``.
        """
        kwargs: dict[str, Any] = {}
        for name, key in BACKGROUND_FIELD_KEYS.items():
            if key in data and data[key] is not None:
                kwargs[name] = data[key]
        if "background_image_template_id" not in kwargs and data.get("templateId"):
            kwargs["background_image_template_id"] = data["templateId"]
        kwargs["type"] = _coerce(BackgroundType, kwargs.get("type", BackgroundType.COLOR))
        return cls(**kwargs)

    def merged(self, updates: dict[str, Any]) -> PageBackground:
        """Return a copy with snake_case field ``updates`` applied."""
        known = {f.name for f in fields(self)}
        return replace(self, **{k: v for k, v in updates.items() if k in known})


@dataclass
class Element:
    """A canvas element with its sparse style overrides.

    Attributes:
        id: Unique identifier for the element.
        element_type: Kind of canvas object.
        text_type: Sub-kind for text elements (question, answer, qna, ...).
        group_id: ID of the parent group if the element is grouped.
        attributes: Sparse camelCase attribute overrides as stored in the
            document, including legacy nested bundles.
    """

    id: str = field(default_factory=lambda: str(uuid4()))
    element_type: ElementType = ElementType.TEXT
    text_type: TextType | None = None
    group_id: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> str:
        """The most specific kind: text sub-type for text elements, else the element type."""
        if self.element_type == ElementType.TEXT and self.text_type:
            return str(self.text_type)
        return str(self.element_type)

    def get(self, key: str, default: Any = None) -> Any:
        """Return a top-level attribute or ``default`` if absent."""
        value = self.attributes.get(key)
        return default if value is None else value

    def get_path(self, *path: str) -> Any:
        """Return a nested attribute, or None if any step is missing."""
        current: Any = self.attributes
        for key in path:
            if not isinstance(current, dict):
                return None
            current = current.get(key)
        return current

    def merged(self, updates: dict[str, Any]) -> Element:
        """Return a copy with ``updates`` shallow-merged into the attributes."""
        return replace(self, attributes={**self.attributes, **updates})

    def to_dict(self) -> dict[str, Any]:
        """Convert to the document's flat camelCase shape."""
        result: dict[str, Any] = {"id": self.id, "type": str(self.element_type)}
        if self.text_type:
            result["textType"] = str(self.text_type)
        if self.group_id:
            result["groupId"] = self.group_id
        result.update(self.attributes)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Element:
        """Build an element from the document's flat camelCase shape."""
        attributes = {k: v for k, v in data.items() if k not in ("id", "type", "textType", "groupId")}
        text_type = data.get("textType")
        return cls(
            id=str(data.get("id") or uuid4()),
            element_type=_coerce(ElementType, data.get("type", ElementType.TEXT)),
            text_type=_coerce(TextType, text_type) if text_type else None,
            group_id=data.get("groupId"),
            attributes=attributes,
        )


@dataclass
class Page:
    """A page of a book.

    Attributes:
        id: Unique identifier for the page.
        page_number: One-based position in the book.
        elements: Ordered elements on the page.
        background: The page background, None if never set.
        theme_id: Explicit page theme. None means the page inherits the book theme.
        color_palette_id: Explicit page palette. None means the theme's default.
        layout_template_id: Explicit page layout template.
    """

    id: str = field(default_factory=lambda: str(uuid4()))
    page_number: int = 1
    elements: list[Element] = field(default_factory=list)
    background: PageBackground | None = None
    theme_id: str | None = None
    color_palette_id: str | None = None
    layout_template_id: str | None = None

    def find_element(self, element_id: str) -> Element | None:
        """Return the element with ``element_id`` or None."""
        return next((element for element in self.elements if element.id == element_id), None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the document's camelCase shape."""
        result: dict[str, Any] = {
            "id": self.id,
            "pageNumber": self.page_number,
            "elements": [element.to_dict() for element in self.elements],
        }
        if self.background is not None:
            result["background"] = self.background.to_dict()
        if self.theme_id is not None:
            result["themeId"] = self.theme_id
        if self.color_palette_id is not None:
            result["colorPaletteId"] = self.color_palette_id
        if self.layout_template_id is not None:
            result["layoutTemplateId"] = self.layout_template_id
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Page:
        """Build a page from the document's camelCase shape."""
        background = data.get("background")
        return cls(
            id=str(data.get("id") or uuid4()),
            page_number=int(data.get("pageNumber", 1)),
            elements=[Element.from_dict(item) for item in data.get("elements", [])],
            background=PageBackground.from_dict(background) if background else None,
            theme_id=data.get("themeId"),
            color_palette_id=data.get("colorPaletteId"),
            layout_template_id=data.get("layoutTemplateId"),
        )


@dataclass
class Book:
    """A book: the root of the document tree.

    Attributes:
        id: Unique identifier for the book.
        name: Display name of the book.
        pages: Ordered pages of the book.
        theme_id: Book theme. None means "default".
        color_palette_id: Book palette. None means the theme's default palette.
        layout_template_id: Book layout template.
    """

    id: str = field(default_factory=lambda: str(uuid4()))
    name: str = "Untitled Book"
    pages: list[Page] = field(default_factory=list)
    theme_id: str | None = None
    color_palette_id: str | None = None
    layout_template_id: str | None = None

    def find_element(self, element_id: str) -> tuple[int, Element] | None:
        """Return ``(page_index, element)`` for ``element_id`` or None."""
        for index, page in enumerate(self.pages):
            element = page.find_element(element_id)
            if element is not None:
                return index, element
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the document's camelCase shape."""
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "pages": [page.to_dict() for page in self.pages],
        }
        if self.theme_id is not None:
            result["bookTheme"] = self.theme_id
        if self.color_palette_id is not None:
            result["colorPaletteId"] = self.color_palette_id
        if self.layout_template_id is not None:
            result["layoutTemplateId"] = self.layout_template_id
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Book:
        """Build a book from the document's camelCase shape.

        Both ``themeId`` and the older ``bookTheme`` key are accepted.
        """
        return cls(
            id=str(data.get("id") or uuid4()),
            name=data.get("name", "Untitled Book"),
            pages=[Page.from_dict(item) for item in data.get("pages", [])],
            theme_id=data.get("themeId") or data.get("bookTheme"),
            color_palette_id=data.get("colorPaletteId"),
            layout_template_id=data.get("layoutTemplateId"),
        )
