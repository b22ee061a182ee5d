"""Tests for feature toggles and border/stroke theme changes."""

from __future__ import annotations

import pytest

from bookstyle.core.commands import UpdateElementPatch, UpdateGroupedElementPatch
from bookstyle.core.models import Element
from bookstyle.core.themes import ThemeCatalog
from bookstyle.core.types import ElementType, TextType
from bookstyle.services.features import FeatureToggles, last_value_key
from bookstyle.stores.base import LastValueStore
from bookstyle.stores.memory import InMemoryLastValueStore


@pytest.fixture
def toggles(catalog: ThemeCatalog, store: InMemoryLastValueStore) -> FeatureToggles:
    """Create feature toggles over the bundled catalog and a fresh store."""
    return FeatureToggles(catalog, store)


def _apply(element: Element, patch: UpdateElementPatch | UpdateGroupedElementPatch) -> Element:
    return element.merged(patch.updates)


class TestLastValueStore:
    """Tests for the in-memory last-value store."""

    def test_get_and_set(self, store: InMemoryLastValueStore) -> None:
        """Test storing and reading values."""
        assert store.get("border-width-x") is None
        store.set("border-width-x", "4")
        assert store.get("border-width-x") == "4"
        assert "border-width-x" in store
        assert len(store) == 1

    def test_satisfies_protocol(self, store: InMemoryLastValueStore) -> None:
        """Test that the store implements the side-store protocol."""
        assert isinstance(store, LastValueStore)

    def test_key_format(self) -> None:
        """Test the side-store key layout."""
        assert last_value_key("border", "width", "el-1") == "border-width-el-1"


class TestToggleBorder:
    """Tests for enabling and disabling borders."""

    def test_disable_then_enable_restores_values(self, toggles: FeatureToggles, bordered_text: Element) -> None:
        """Test that off then on restores width, color, opacity and theme exactly."""
        disabled = _apply(bordered_text, toggles.toggle_border(bordered_text, False))
        assert disabled.attributes["borderEnabled"] is False
        enabled = _apply(disabled, toggles.toggle_border(disabled, True))
        assert enabled.attributes["borderEnabled"] is True
        for key in ("borderWidth", "borderColor", "borderOpacity", "borderTheme"):
            assert enabled.attributes[key] == bordered_text.attributes[key]

    def test_disable_keeps_fields(self, toggles: FeatureToggles, bordered_text: Element) -> None:
        """Test that disabling writes the current values instead of deleting them."""
        patch = toggles.toggle_border(bordered_text, False)
        assert patch.updates["borderWidth"] == 1
        assert patch.updates["borderColor"] == "#ff0000"

    def test_restores_after_other_edits(
        self, toggles: FeatureToggles, store: InMemoryLastValueStore, bordered_text: Element
    ) -> None:
        """Test that the stored values win over what the element holds now."""
        disabled = _apply(bordered_text, toggles.toggle_border(bordered_text, False))
        assert store.get("border-color-text-border") == "#ff0000"
        edited = disabled.merged({"borderColor": "#000000"})
        enabled = _apply(edited, toggles.toggle_border(edited, True))
        assert enabled.attributes["borderColor"] == "#ff0000"

    def test_fractional_width_survives(self, toggles: FeatureToggles, bordered_text: Element) -> None:
        """Test that non-integer widths are restored exactly."""
        element = bordered_text.merged({"borderWidth": 3.5, "borderOpacity": 0.25})
        disabled = _apply(element, toggles.toggle_border(element, False))
        enabled = _apply(disabled, toggles.toggle_border(disabled, True))
        assert enabled.attributes["borderWidth"] == 3.5
        assert enabled.attributes["borderOpacity"] == 0.25

    def test_enable_without_memory_uses_effective_values(self, store: InMemoryLastValueStore) -> None:
        """Test that enabling a never-disabled border uses the effective values."""
        toggles = FeatureToggles(ThemeCatalog(), store)
        element = Element(id="plain", element_type=ElementType.TEXT, text_type=TextType.TEXT)
        patch = toggles.toggle_border(element, True)
        assert patch.updates["borderEnabled"] is True
        assert patch.updates["borderWidth"] == 1
        assert patch.updates["borderColor"] == "#000000"

    def test_patch_addressing(self, toggles: FeatureToggles, bordered_text: Element) -> None:
        """Test plain and grouped patch addressing."""
        plain = toggles.toggle_border(bordered_text, False)
        assert isinstance(plain, UpdateElementPatch)
        assert plain.preserve_selection is True
        grouped = toggles.toggle_border(bordered_text, False, group_id="group-1")
        assert isinstance(grouped, UpdateGroupedElementPatch)
        assert grouped.group_id == "group-1"
        assert grouped.element_id == "text-border"


class TestToggleShapeBorder:
    """Tests for shape borders drawn through the stroke."""

    def test_disable_then_enable(
        self, toggles: FeatureToggles, store: InMemoryLastValueStore, rect_element: Element
    ) -> None:
        """Test that the stroke width and color come back."""
        disabled = _apply(rect_element, toggles.toggle_border(rect_element, False))
        assert disabled.attributes["strokeWidth"] == 0
        assert store.get("shape-border-width-rect-1") == "5"
        enabled = _apply(disabled, toggles.toggle_border(disabled, True))
        assert enabled.attributes["strokeWidth"] == 5
        assert enabled.attributes["stroke"] == "#123456"

    def test_zero_width_not_remembered(self, toggles: FeatureToggles, store: InMemoryLastValueStore) -> None:
        """Test that a zero width is not stored, so enabling falls back to 2."""
        shape = Element(id="circle-1", element_type=ElementType.CIRCLE, attributes={"strokeWidth": 0})
        toggles.toggle_border(shape, False)
        assert store.get("shape-border-width-circle-1") is None
        patch = toggles.toggle_border(shape, True)
        assert patch.updates["strokeWidth"] == 2
        assert patch.updates["stroke"] == "#1f2937"

    def test_enable_width_at_least_one(self, store: InMemoryLastValueStore, catalog: ThemeCatalog) -> None:
        """Test that a remembered width below one is raised to one."""
        store.set("shape-border-width-star-1", "0.5")
        shape = Element(id="star-1", element_type=ElementType.STAR)
        patch = FeatureToggles(catalog, store).toggle_border(shape, True)
        assert patch.updates["strokeWidth"] == 1


class TestToggleBackground:
    """Tests for enabling and disabling element backgrounds."""

    def test_shape_fill(self, toggles: FeatureToggles, rect_element: Element) -> None:
        """Test that a shape's fill becomes transparent and comes back."""
        disabled = _apply(rect_element, toggles.toggle_background(rect_element, False))
        assert disabled.attributes["fill"] == "transparent"
        enabled = _apply(disabled, toggles.toggle_background(disabled, True))
        assert enabled.attributes["fill"] == "#abcdef"

    def test_shape_fill_default(self, toggles: FeatureToggles) -> None:
        """Test the fill used when nothing was remembered."""
        shape = Element(id="heart-1", element_type=ElementType.HEART)
        assert toggles.toggle_background(shape, True).updates["fill"] == "#ffffff"

    def test_text_background(self, toggles: FeatureToggles) -> None:
        """Test that a text background's color and opacity come back."""
        element = Element(
            id="bg",
            element_type=ElementType.TEXT,
            text_type=TextType.TEXT,
            attributes={"backgroundEnabled": True, "backgroundColor": "#eeeeee", "backgroundOpacity": 0.3},
        )
        disabled = _apply(element, toggles.toggle_background(element, False))
        assert disabled.attributes["backgroundEnabled"] is False
        enabled = _apply(disabled.merged({"backgroundColor": "#000000"}), toggles.toggle_background(disabled, True))
        assert enabled.attributes["backgroundColor"] == "#eeeeee"
        assert enabled.attributes["backgroundOpacity"] == 0.3


class TestToggleRuledLines:
    """Tests for enabling and disabling ruled lines."""

    def test_disable_then_enable(self, toggles: FeatureToggles, store: InMemoryLastValueStore) -> None:
        """Test that ruled line settings come back."""
        element = Element(
            id="answer-1",
            element_type=ElementType.TEXT,
            text_type=TextType.ANSWER,
            attributes={"ruledLinesEnabled": True, "ruledLinesColor": "#ff0000", "ruledLinesWidth": 2},
        )
        disabled = _apply(element, toggles.toggle_ruled_lines(element, False))
        assert disabled.attributes["ruledLinesEnabled"] is False
        assert store.get("ruledLines-width-answer-1") == "2"
        enabled = _apply(disabled, toggles.toggle_ruled_lines(disabled, True))
        assert enabled.attributes["ruledLinesEnabled"] is True
        assert enabled.attributes["ruledLinesColor"] == "#ff0000"
        assert enabled.attributes["ruledLinesWidth"] == 2


class TestThemeChanges:
    """Tests for border and stroke theme changes."""

    def test_border_theme_reclamps_to_minimum(self, toggles: FeatureToggles, bordered_text: Element) -> None:
        """Test that an enabled one-pixel border moves to candy's minimum of 12."""
        patch = toggles.change_border_theme(bordered_text, "candy")
        assert patch.updates == {"borderTheme": "candy", "borderWidth": 12}

    def test_disabled_border_keeps_width(self, toggles: FeatureToggles, bordered_text: Element) -> None:
        """Test that a disabled border only changes its theme."""
        element = bordered_text.merged({"borderEnabled": False})
        assert toggles.change_border_theme(element, "zigzag").updates == {"borderTheme": "zigzag"}

    def test_stroke_theme(self, toggles: FeatureToggles, rect_element: Element) -> None:
        """Test that a visible stroke moves to the new theme's minimum width."""
        patch = toggles.change_stroke_theme(rect_element, "zigzag")
        assert patch.updates == {"theme": "zigzag", "inheritTheme": "zigzag", "strokeWidth": 3}

    def test_stroke_theme_without_stroke(self, toggles: FeatureToggles) -> None:
        """Test that an invisible stroke stays invisible."""
        shape = Element(id="line-1", element_type=ElementType.LINE, attributes={"strokeWidth": 0})
        assert "strokeWidth" not in toggles.change_stroke_theme(shape, "candy").updates
