"""Tests for the theme system and its ReportLab adapters."""

from __future__ import annotations

import pytest

from inspectdocs.layout.styles import themed_fonts, to_color
from inspectdocs.layout.themes import (
    DEFAULT_THEME,
    SLATE_THEME,
    WASLA_THEME,
    Theme,
    ThemeColors,
    ThemeLayout,
    get_theme,
    list_themes,
    register_theme,
)


class TestThemeRegistry:
    def test_list_themes_returns_builtin(self):
        names = [t.name for t in list_themes()]
        assert "wasla" in names
        assert "slate" in names
        assert "mono" in names

    def test_get_theme_returns_correct_theme(self):
        assert get_theme("slate") is SLATE_THEME

    def test_get_theme_case_insensitive(self):
        assert get_theme(" SLATE ") is SLATE_THEME

    def test_get_theme_unknown_raises(self):
        with pytest.raises(KeyError, match="Available"):
            get_theme("nonexistent")

    def test_default_is_wasla(self):
        assert DEFAULT_THEME is WASLA_THEME

    def test_register_custom_theme(self):
        custom = Theme(
            name="test_custom",
            display_name="Test",
            colors=ThemeColors(primary=(255, 0, 0), accent=(0, 0, 255)),
            layout=ThemeLayout(block_spacing=6),
        )
        register_theme(custom)
        assert "test_custom" in [t.name for t in list_themes()]
        assert get_theme("test_custom") is custom


class TestThemeValues:
    def test_themes_are_immutable(self):
        with pytest.raises(AttributeError):
            WASLA_THEME.name = "other"  # type: ignore[misc]

    def test_with_fonts_swaps_family(self):
        themed = WASLA_THEME.with_fonts("Custom", "Custom-Bold")
        assert (themed.fonts.body, themed.fonts.bold, themed.fonts.italic) == ("Custom", "Custom-Bold", "Custom")
        assert themed.fonts.body_size == WASLA_THEME.fonts.body_size
        assert WASLA_THEME.fonts.body == "Helvetica"

    def test_with_fonts_single_face(self):
        assert WASLA_THEME.with_fonts("Custom").fonts.bold == "Custom"

    def test_margins_leave_room_for_furniture(self):
        for theme in list_themes():
            lay = theme.layout
            assert lay.margin_top > lay.header_height
            assert lay.margin_bottom > lay.footer_height


class TestStyles:
    def test_to_color(self):
        color = to_color((255, 0, 51))
        assert (color.red, color.green, color.blue) == pytest.approx((1.0, 0.0, 0.2))

    def test_themed_fonts_without_path_is_identity(self):
        assert themed_fonts(WASLA_THEME, None) is WASLA_THEME

    def test_themed_fonts_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            themed_fonts(WASLA_THEME, str(tmp_path / "missing.ttf"))
