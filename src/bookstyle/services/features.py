"""Feature toggles for element borders, backgrounds and ruled lines.

Turning a feature off never deletes its settings. The current values are
written to the host's last-value store under ``<feature>-<property>-<id>``
and kept on the element, and turning the feature back on restores them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from bookstyle.core.accessors import resolve, resolve_background, resolve_border, resolve_ruled_lines
from bookstyle.core.commands import UpdateElementPatch, UpdateGroupedElementPatch
from bookstyle.core.scales import get_min_actual_stroke_width
from bookstyle.core.types import SHAPE_TYPES, ElementType

if TYPE_CHECKING:
    from bookstyle.core.commands import Patch
    from bookstyle.core.models import Book, Element, Page
    from bookstyle.stores.base import LastValueStore, ThemeSource

logger = structlog.get_logger(__name__)

DEFAULT_SHAPE_BORDER_WIDTH = 2
DEFAULT_SHAPE_BORDER_COLOR = "#1f2937"
DEFAULT_SHAPE_FILL = "#ffffff"


def last_value_key(feature: str, prop: str, element_id: str) -> str:
    """Build a side-store key such as ``border-width-<element id>``."""
    return f"{feature}-{prop}-{element_id}"


def _parse_number(value: str) -> int | float:
    number = float(value)
    return int(number) if number.is_integer() else number


def _is_stroke_element(element: Element) -> bool:
    return element.element_type in SHAPE_TYPES or element.element_type == ElementType.BRUSH


class FeatureToggles:
    """Builds the patches behind the border, background and ruled-lines checkboxes.

    Patches address a grouped element through ``UpdateGroupedElementPatch``
    when a group is given, otherwise an ``UpdateElementPatch`` that keeps the
    current selection.
    """

    def __init__(self, catalog: ThemeSource, store: LastValueStore) -> None:
        """Initialize the toggles.

        Args:
            catalog: Theme and palette lookup used for effective values.
            store: Host-owned last-value side store.
        """
        self._catalog = catalog
        self._store = store

    def toggle_border(
        self,
        element: Element,
        enabled: bool,
        *,
        page: Page | None = None,
        book: Book | None = None,
        group_id: str | None = None,
    ) -> Patch:
        """Enable or disable an element's border.

        Shapes draw their border with ``stroke``/``strokeWidth``; disabling
        sets the width to 0 and enabling restores it.
        """
        if element.element_type in SHAPE_TYPES:
            return self._address(element, self._toggle_shape_border(element, enabled), group_id)

        current = resolve_border(element, page, book, self._catalog)
        values: dict[str, Any] = {
            "width": current.width,
            "color": current.color,
            "opacity": current.opacity,
            "theme": current.theme,
        }
        if enabled:
            values = self._restore("border", element.id, values, numeric=("width", "opacity"))
            if not values["width"]:
                values["width"] = get_min_actual_stroke_width(values["theme"])
        else:
            self._remember("border", element.id, values)
        updates = {
            "borderEnabled": enabled,
            "borderWidth": values["width"],
            "borderColor": values["color"],
            "borderOpacity": values["opacity"],
            "borderTheme": values["theme"],
        }
        logger.debug("Border toggled", element_id=element.id, enabled=enabled)
        return self._address(element, updates, group_id)

    def toggle_background(
        self,
        element: Element,
        enabled: bool,
        *,
        page: Page | None = None,
        book: Book | None = None,
        group_id: str | None = None,
    ) -> Patch:
        """Enable or disable an element's background.

        Shapes paint their background with ``fill``; disabling makes it
        transparent and enabling restores the last fill.
        """
        if element.element_type in SHAPE_TYPES:
            key = last_value_key("shape-fill", "color", element.id)
            if enabled:
                fill = self._store.get(key) or DEFAULT_SHAPE_FILL
            else:
                self._store.set(key, element.get("fill", DEFAULT_SHAPE_FILL))
                fill = "transparent"
            return self._address(element, {"backgroundEnabled": enabled, "fill": fill}, group_id)

        current = resolve_background(element, page, book, self._catalog)
        values: dict[str, Any] = {"color": current.color, "opacity": current.opacity}
        if enabled:
            values = self._restore("background", element.id, values, numeric=("opacity",))
        else:
            self._remember("background", element.id, values)
        updates = {
            "backgroundEnabled": enabled,
            "backgroundColor": values["color"],
            "backgroundOpacity": values["opacity"],
        }
        return self._address(element, updates, group_id)

    def toggle_ruled_lines(
        self,
        element: Element,
        enabled: bool,
        *,
        page: Page | None = None,
        book: Book | None = None,
        group_id: str | None = None,
    ) -> Patch:
        """Enable or disable the ruled lines of a text or answer element."""
        current = resolve_ruled_lines(element, page, book, self._catalog)
        values: dict[str, Any] = {
            "color": current.color,
            "width": current.width,
            "theme": current.theme,
            "opacity": current.opacity,
        }
        if enabled:
            values = self._restore("ruledLines", element.id, values, numeric=("width", "opacity"))
        else:
            self._remember("ruledLines", element.id, values)
        updates = {
            "ruledLinesEnabled": enabled,
            "ruledLinesColor": values["color"],
            "ruledLinesWidth": values["width"],
            "ruledLinesTheme": values["theme"],
            "ruledLinesOpacity": values["opacity"],
        }
        return self._address(element, updates, group_id)

    def change_border_theme(
        self,
        element: Element,
        theme: str,
        *,
        page: Page | None = None,
        book: Book | None = None,
        group_id: str | None = None,
    ) -> Patch:
        """Change the border rendering theme.

        A visible border is reset to the new theme's thinnest width, so a
        width valid for the old theme never falls outside the new range.
        """
        width = resolve("border_width", element, page, book, self._catalog)
        enabled = resolve("border_enabled", element, page, book, self._catalog)
        updates: dict[str, Any] = {"borderTheme": theme}
        if enabled and width > 0:
            updates["borderWidth"] = get_min_actual_stroke_width(theme)
        return self._address(element, updates, group_id)

    def change_stroke_theme(
        self,
        element: Element,
        theme: str,
        *,
        page: Page | None = None,
        book: Book | None = None,
        group_id: str | None = None,
    ) -> Patch:
        """Change the stroke theme of a shape, line or brush stroke."""
        updates: dict[str, Any] = {"theme": theme, "inheritTheme": theme}
        width = resolve("stroke_width", element, page, book, self._catalog)
        if _is_stroke_element(element) and width > 0:
            updates["strokeWidth"] = get_min_actual_stroke_width(theme)
        return self._address(element, updates, group_id)

    def _toggle_shape_border(self, element: Element, enabled: bool) -> dict[str, Any]:
        width_key = last_value_key("shape-border", "width", element.id)
        color_key = last_value_key("shape-border", "color", element.id)
        if enabled:
            width = _parse_number(self._store.get(width_key) or str(DEFAULT_SHAPE_BORDER_WIDTH))
            return {
                "borderEnabled": True,
                "strokeWidth": max(1, width),
                "stroke": self._store.get(color_key) or DEFAULT_SHAPE_BORDER_COLOR,
            }
        stroke_width = element.get("strokeWidth", 0)
        if stroke_width > 0:
            self._store.set(width_key, str(stroke_width))
        self._store.set(color_key, element.get("stroke", DEFAULT_SHAPE_BORDER_COLOR))
        return {"borderEnabled": False, "strokeWidth": 0}

    def _remember(self, feature: str, element_id: str, values: dict[str, Any]) -> None:
        for prop, value in values.items():
            self._store.set(last_value_key(feature, prop, element_id), str(value))

    def _restore(
        self,
        feature: str,
        element_id: str,
        current: dict[str, Any],
        numeric: tuple[str, ...] = (),
    ) -> dict[str, Any]:
        """Read remembered values back, keeping ``current`` where nothing was stored."""
        restored = dict(current)
        for prop in current:
            stored = self._store.get(last_value_key(feature, prop, element_id))
            if stored is None:
                continue
            restored[prop] = _parse_number(stored) if prop in numeric else stored
        return restored

    @staticmethod
    def _address(element: Element, updates: dict[str, Any], group_id: str | None) -> Patch:
        if group_id is not None:
            return UpdateGroupedElementPatch(group_id, element.id, updates)
        return UpdateElementPatch(element.id, updates, preserve_selection=True)
