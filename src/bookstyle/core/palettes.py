"""Color palettes and the semantic parts they color."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

PALETTE_ROLES = ("background", "surface", "primary", "secondary", "accent", "text")

DEFAULT_PALETTE_PARTS: dict[str, str] = {
    "pageBackground": "background",
    "pagePatternForeground": "primary",
    "pagePatternBackground": "background",
    "qnaBorder": "primary",
    "qnaBackground": "surface",
    "qnaQuestionText": "text",
    "qnaQuestionBackground": "surface",
    "qnaQuestionBorder": "secondary",
    "qnaAnswerText": "text",
    "qnaAnswerBackground": "surface",
    "qnaAnswerBorder": "primary",
    "qnaAnswerRuledLines": "primary",
    "freeTextText": "text",
    "freeTextBorder": "secondary",
    "freeTextBackground": "surface",
    "freeTextRuledLines": "accent",
    "shapeStroke": "primary",
    "shapeFill": "surface",
    "lineStroke": "primary",
    "brushStroke": "primary",
}


@dataclass(frozen=True)
class Palette:
    """An immutable named set of semantic color roles.

    Attributes:
        id: Unique palette identifier.
        name: Display name.
        colors: Role name to hex color.
        parts: Optional part name to role overrides of ``DEFAULT_PALETTE_PARTS``.
        category: Grouping label used by pickers.
    """

    id: str
    name: str
    colors: dict[str, str] = field(default_factory=dict)
    parts: dict[str, str] = field(default_factory=dict)
    category: str = ""

    def role(self, name: str) -> str | None:
        """Return the color of a role, falling back through related roles."""
        return with_role_fallbacks(self.colors).get(name)

    def part(self, part_name: str, fallback_role: str | None = None, fallback: str | None = None) -> str | None:
        """Return the color assigned to a semantic part.

        Args:
            part_name: Part name such as ``pageBackground`` or ``shapeStroke``.
            fallback_role: Role to use when the part's role has no color.
            fallback: Color to use when nothing else resolves.

        Returns:
            The resolved color or ``fallback``.
        """
        slot = {**DEFAULT_PALETTE_PARTS, **self.parts}.get(part_name)
        colors = with_role_fallbacks(self.colors)
        if slot and colors.get(slot):
            return colors[slot]
        if fallback_role and colors.get(fallback_role):
            return colors[fallback_role]
        return fallback

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Palette:
        """Build a palette from its JSON record."""
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            colors=dict(data.get("colors", {})),
            parts=dict(data.get("parts", {})),
            category=data.get("category", ""),
        )


def with_role_fallbacks(colors: dict[str, str]) -> dict[str, str]:
    """Fill missing roles from related ones so every role resolves if any does."""
    background = (
        colors.get("background")
        or colors.get("surface")
        or colors.get("primary")
        or colors.get("secondary")
        or colors.get("accent")
    )
    surface = colors.get("surface") or background
    primary = colors.get("primary") or background
    secondary = colors.get("secondary") or surface
    accent = colors.get("accent") or primary
    text = colors.get("text") or primary or background
    resolved = {
        "background": background,
        "surface": surface,
        "primary": primary,
        "secondary": secondary,
        "accent": accent,
        "text": text,
    }
    return {role: color for role, color in resolved.items() if color}
