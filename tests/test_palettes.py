"""Tests for the curated palette catalog."""
import pytest

from paintguide.color_utils import HEX_PATTERN
from paintguide.palettes import (
    PALETTE_CATEGORIES,
    PALETTES,
    get_palette,
    palettes_by_category,
    resolve_palette_colors,
)
from paintguide.types import PaletteError


class TestCatalog:
    """Test catalog contents."""

    def test_every_color_is_hex(self):
        """Test all catalog colors are valid hex codes."""
        for palette in PALETTES.values():
            assert palette.colors
            for color in palette.colors:
                assert HEX_PATTERN.match(color), color

    def test_categories_known(self):
        """Test each palette has a known category."""
        for palette in PALETTES.values():
            assert palette.category in PALETTE_CATEGORIES

    def test_category_split(self):
        """Test the catalog splits across categories."""
        assert len(palettes_by_category("artist")) == 4
        assert len(palettes_by_category("mood")) == 6
        assert len(palettes_by_category("classic")) == 3
        assert len(PALETTES) == 13

    def test_unknown_category(self):
        """Test an unknown category raises PaletteError."""
        with pytest.raises(PaletteError):
            palettes_by_category("baroque")


class TestGetPalette:
    """Test palette lookup."""

    def test_known(self):
        """Test lookup by key."""
        palette = get_palette("zorn")
        assert palette.name == "Anders Zorn"
        assert palette.colors[0] == "#FFE4B5"

    def test_unknown_lists_available(self):
        """Test unknown keys report the available keys."""
        with pytest.raises(PaletteError, match="Available: .*zorn"):
            get_palette("monet")


class TestResolvePaletteColors:
    """Test palette references."""

    def test_none(self):
        """Test None resolves to no colors."""
        assert resolve_palette_colors(None) == []

    def test_catalog_key(self):
        """Test a key resolves to the catalog colors."""
        assert resolve_palette_colors("grayscale") == list(PALETTES["grayscale"].colors)

    def test_comma_separated(self):
        """Test comma-separated hex codes are split and trimmed."""
        assert resolve_palette_colors("#FF0000, #00ff00 ,#0000FF") == [
            "#FF0000", "#00ff00", "#0000FF"
        ]

    def test_sequence(self):
        """Test a list is passed through."""
        assert resolve_palette_colors(["#123456"]) == ["#123456"]

    def test_garbage_string(self):
        """Test an unrecognized string raises PaletteError."""
        with pytest.raises(PaletteError):
            resolve_palette_colors("not-a-palette")
