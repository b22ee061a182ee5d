"""Patch commands proposed to the host editor.

The engine never mutates a document. It returns patches the host's reducer
applies in order, grouped in a ``Transaction`` that the host commits under
a single undo entry. The engine sets history flags but never reads history.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from bookstyle.core.types import PatchKind

if TYPE_CHECKING:
    from collections.abc import Iterator

    from bookstyle.core.models import PageBackground


@dataclass(frozen=True)
class Patch(ABC):
    """Abstract base class for all patch commands."""

    kind: ClassVar[PatchKind]

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Convert the patch to its ``kind``-tagged payload."""
        ...


@dataclass(frozen=True)
class UpdateElementPatch(Patch):
    """Shallow-merge ``updates`` into an element addressed by id.

    Attributes:
        id: Target element id.
        updates: Partial camelCase fields.
        preserve_selection: Whether the host keeps the current selection.
    """

    kind: ClassVar[PatchKind] = PatchKind.UPDATE_ELEMENT

    id: str
    updates: dict[str, Any]
    preserve_selection: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "kind": str(self.kind),
            "id": self.id,
            "updates": self.updates,
            "preserveSelection": self.preserve_selection,
        }


@dataclass(frozen=True)
class UpdateGroupedElementPatch(Patch):
    """Shallow-merge ``updates`` into an element inside a group."""

    kind: ClassVar[PatchKind] = PatchKind.UPDATE_GROUPED_ELEMENT

    group_id: str
    element_id: str
    updates: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "kind": str(self.kind),
            "groupId": self.group_id,
            "elementId": self.element_id,
            "updates": self.updates,
        }


@dataclass(frozen=True)
class UpdatePageBackgroundPatch(Patch):
    """Replace the background of the page at ``page_index``."""

    kind: ClassVar[PatchKind] = PatchKind.UPDATE_PAGE_BACKGROUND

    page_index: int
    background: PageBackground

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"kind": str(self.kind), "pageIndex": self.page_index, "background": self.background.to_dict()}


@dataclass(frozen=True)
class UpdateToolSettingsPatch(Patch):
    """Merge default settings for newly created elements of one tool."""

    kind: ClassVar[PatchKind] = PatchKind.UPDATE_TOOL_SETTINGS

    tool: str
    settings: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"kind": str(self.kind), "tool": self.tool, "settings": self.settings}


@dataclass(frozen=True)
class SetPageThemePatch(Patch):
    """Set or clear a page theme.

    Attributes:
        page_index: Target page.
        theme_id: Explicit theme id, or the book-theme sentinel to inherit.
        skip_history: Whether the host records no undo step for this patch.
    """

    kind: ClassVar[PatchKind] = PatchKind.SET_PAGE_THEME

    page_index: int
    theme_id: str
    skip_history: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "kind": str(self.kind),
            "pageIndex": self.page_index,
            "themeId": self.theme_id,
            "skipHistory": self.skip_history,
        }


@dataclass(frozen=True)
class SetBookThemePatch(Patch):
    """Set the book theme."""

    kind: ClassVar[PatchKind] = PatchKind.SET_BOOK_THEME

    theme_id: str
    skip_history: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"kind": str(self.kind), "themeId": self.theme_id, "skipHistory": self.skip_history}


@dataclass(frozen=True)
class SetPagePalettePatch(Patch):
    """Set or clear (None) a page palette."""

    kind: ClassVar[PatchKind] = PatchKind.SET_PAGE_PALETTE

    page_index: int
    palette_id: str | None
    skip_history: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "kind": str(self.kind),
            "pageIndex": self.page_index,
            "colorPaletteId": self.palette_id,
            "skipHistory": self.skip_history,
        }


@dataclass(frozen=True)
class SetBookPalettePatch(Patch):
    """Set or clear (None) the book palette."""

    kind: ClassVar[PatchKind] = PatchKind.SET_BOOK_PALETTE

    palette_id: str | None
    skip_history: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"kind": str(self.kind), "colorPaletteId": self.palette_id, "skipHistory": self.skip_history}


@dataclass(frozen=True)
class ApplyThemeToElementsPatch(Patch):
    """Recompute theme-owned fields of every element on a page.

    Attributes:
        page_index: Target page.
        theme_id: Theme whose defaults are applied.
        skip_history: Whether the host records no undo step for this patch.
        preserve_colors: Whether element colors are left untouched.
    """

    kind: ClassVar[PatchKind] = PatchKind.APPLY_THEME_TO_ELEMENTS

    page_index: int
    theme_id: str
    skip_history: bool = True
    preserve_colors: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "kind": str(self.kind),
            "pageIndex": self.page_index,
            "themeId": self.theme_id,
            "skipHistory": self.skip_history,
            "preserveColors": self.preserve_colors,
        }


@dataclass
class Transaction:
    """An ordered batch of patches committed under one undo entry.

    An empty transaction is valid and means "nothing to do".

    Attributes:
        history_label: Label of the single undo entry, None to record none.
        patches: Patches in the order the host must apply them.
    """

    history_label: str | None = None
    patches: list[Patch] = field(default_factory=list)

    def add(self, patch: Patch) -> None:
        """Append a patch."""
        self.patches.append(patch)

    def extend(self, patches: list[Patch]) -> None:
        """Append several patches in order."""
        self.patches.extend(patches)

    def of_kind(self, kind: PatchKind | str) -> list[Patch]:
        """Return the patches of one kind, in order."""
        return [patch for patch in self.patches if patch.kind == kind]

    @property
    def is_empty(self) -> bool:
        """Whether the transaction holds no patches."""
        return not self.patches

    def __iter__(self) -> Iterator[Patch]:
        return iter(self.patches)

    def __len__(self) -> int:
        return len(self.patches)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"historyLabel": self.history_label, "patches": [patch.to_dict() for patch in self.patches]}
