"""Tests for palette synthesis and remapping."""
import numpy as np
import pytest

from paintguide.palette_matcher import (
    best_matches,
    find_closest_palette_color,
    remap_to_palette,
)
from paintguide.palette_synthesizer import expected_candidate_count, synthesize_palette
from paintguide.palettes import PALETTES
from paintguide.types import PaletteEntry

BLACK_WHITE = ["#000000", "#FFFFFF"]


class TestSynthesizePalette:
    """Test palette expansion."""

    @pytest.mark.parametrize("n", range(0, 9))
    def test_candidate_count(self, n):
        """Test count == n * 7 + C(n, 2) * 3."""
        rng = np.random.default_rng(n)
        base = [f"#{int(v):06X}" for v in rng.integers(0, 0xFFFFFF, size=n)]
        palette = synthesize_palette(base)
        assert len(palette) == n * 7 + (n * (n - 1) // 2) * 3
        assert len(palette) == expected_candidate_count(n)

    def test_black_white_has_seventeen(self):
        """Test two base colors expand to 17 candidates."""
        assert len(synthesize_palette(BLACK_WHITE)) == 17

    def test_sorted_by_luminosity(self):
        """Test ascending luminosity order."""
        palette = synthesize_palette(PALETTES["zorn"].colors)
        lums = [entry.luminosity for entry in palette]
        assert lums == sorted(lums)

    def test_no_deduplication(self):
        """Test identical synthesized colors remain distinct entries."""
        palette = synthesize_palette(BLACK_WHITE)
        mid_grays = [e for e in palette if (e.r, e.g, e.b) == (128, 128, 128)]
        # black tint 0.5, white shade 0.5, and the 0.5 blend
        assert len(mid_grays) == 3

    def test_tints_and_shades(self):
        """Test tint and shade ratios for a single base color."""
        palette = synthesize_palette(["#FF0000"])
        colors = {(e.r, e.g, e.b) for e in palette}
        assert colors == {
            (255, 0, 0),
            (255, 64, 64), (255, 128, 128), (255, 191, 191),
            (191, 0, 0), (128, 0, 0), (64, 0, 0),
        }

    def test_pair_blends(self):
        """Test blends at 0.33 / 0.5 / 0.66."""
        palette = synthesize_palette(BLACK_WHITE)
        grays = sorted(e.r for e in palette)
        assert 84 in grays and 168 in grays

    def test_malformed_base_is_black(self):
        """Test an unparseable base color acts as black."""
        palette = synthesize_palette(["oops"])
        assert max(e.r for e in palette) == 191
        assert all(e.g == e.r and e.b == e.r for e in palette)


class TestRemapToPalette:
    """Test nearest-match remapping."""

    def test_mid_gray_selects_half_blend(self):
        """Test (128,128,128) remaps to itself with a black/white palette."""
        buffer = np.array([128, 128, 128, 77], dtype=np.uint8)
        result = remap_to_palette(buffer, BLACK_WHITE)
        np.testing.assert_array_equal(result, [128, 128, 128, 77])

    def test_extremes(self):
        """Test black and white stay put."""
        buffer = np.array([0, 0, 0, 255, 255, 255, 255, 10], dtype=np.uint8)
        result = remap_to_palette(buffer, BLACK_WHITE)
        np.testing.assert_array_equal(result, buffer)

    def test_every_output_is_a_candidate(self):
        """Test remapped colors all come from the expanded palette."""
        rng = np.random.default_rng(3)
        buffer = rng.integers(0, 256, size=30 * 4, dtype=np.uint8)
        base = PALETTES["vanGogh"].colors
        candidates = {(e.r, e.g, e.b) for e in synthesize_palette(base)}

        result = remap_to_palette(buffer, base).reshape(-1, 4)

        for r, g, b, _ in result:
            assert (int(r), int(g), int(b)) in candidates
        np.testing.assert_array_equal(result[:, 3], buffer.reshape(-1, 4)[:, 3])

    def test_dark_pixel_maps_to_shade(self):
        """Test a dark red pixel picks the darkest red shade."""
        buffer = np.array([80, 0, 0, 255], dtype=np.uint8)
        result = remap_to_palette(buffer, ["#FF0000"])
        assert tuple(result[:3]) == (64, 0, 0)

    def test_empty_palette_copies(self):
        """Test an empty palette returns an unchanged copy."""
        buffer = np.array([1, 2, 3, 4], dtype=np.uint8)
        result = remap_to_palette(buffer, [])
        np.testing.assert_array_equal(result, buffer)
        assert result is not buffer

    def test_shape_preserved(self):
        """Test (H, W, 4) input keeps its shape."""
        image = np.full((2, 3, 4), 200, dtype=np.uint8)
        assert remap_to_palette(image, BLACK_WHITE).shape == (2, 3, 4)

    def test_tie_goes_to_first_candidate(self):
        """Test equal scores resolve in scan order."""
        first = PaletteEntry(0, 0, 0, 0.0)
        second = PaletteEntry(0, 0, 0, 0.0)
        winners = best_matches(np.array([[5, 5, 5]]), [first, second])
        assert winners.tolist() == [0]


class TestFindClosestPaletteColor:
    """Test plain Euclidean lookup."""

    def test_closest(self):
        """Test the nearest base color is returned as given."""
        assert find_closest_palette_color(250, 10, 10, ["#0000ff", "#ff0000"]) == "#ff0000"

    def test_empty(self):
        """Test an empty palette returns black."""
        assert find_closest_palette_color(1, 2, 3, []) == "#000000"
