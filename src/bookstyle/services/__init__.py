"""Services that turn user actions into patch transactions."""

from bookstyle.services.cascade import BOOK_THEME_SENTINEL, ThemeCascade, strip_color_fields
from bookstyle.services.features import FeatureToggles

__all__ = ["BOOK_THEME_SENTINEL", "FeatureToggles", "ThemeCascade", "strip_color_fields"]
