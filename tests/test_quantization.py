"""Tests for level reduction."""
import numpy as np
import pytest

from paintguide.quantization import posterize, quantize, to_grayscale
from paintguide.types import BufferGeometryError


def all_values_buffer() -> np.ndarray:
    """One pixel per byte value, with distinct alpha."""
    values = np.arange(256, dtype=np.uint8)
    pixels = np.stack([values, values[::-1], values, values[::-1]], axis=1)
    return pixels.reshape(-1)


class TestQuantize:
    """Test quantize."""

    def test_level_two_on_200(self):
        """Test levels=2 gives step 128, so 200 becomes 128."""
        result = quantize(np.array([200, 200, 200, 255], dtype=np.uint8), 2)
        np.testing.assert_array_equal(result, [128, 128, 128, 255])

    def test_idempotent_for_every_level(self):
        """Test quantize(quantize(x, L), L) == quantize(x, L)."""
        buffer = all_values_buffer()
        for levels in range(1, 257):
            once = quantize(buffer, levels)
            twice = quantize(once, levels)
            np.testing.assert_array_equal(once, twice, err_msg=f"levels={levels}")

    def test_alpha_preserved(self):
        """Test alpha is copied through."""
        buffer = all_values_buffer()
        result = quantize(buffer, 3)
        np.testing.assert_array_equal(result[3::4], buffer[3::4])

    def test_input_not_mutated(self):
        """Test a new buffer is returned."""
        buffer = all_values_buffer()
        original = buffer.copy()
        result = quantize(buffer, 4)
        assert result is not buffer
        np.testing.assert_array_equal(buffer, original)

    def test_shape_preserved(self):
        """Test (H, W, 4) input keeps its shape."""
        image = np.full((3, 5, 4), 77, dtype=np.uint8)
        assert quantize(image, 4).shape == (3, 5, 4)

    def test_single_level_is_black(self):
        """Test levels=1 maps every channel to 0."""
        result = quantize(np.array([255, 128, 1, 9], dtype=np.uint8), 1)
        np.testing.assert_array_equal(result, [0, 0, 0, 9])

    @pytest.mark.parametrize("levels", [0, -3, 257])
    def test_invalid_levels(self, levels):
        """Test out of range level counts are rejected."""
        with pytest.raises(ValueError, match="levels must be"):
            quantize(np.zeros(4, dtype=np.uint8), levels)

    def test_bad_geometry(self):
        """Test buffers not made of whole pixels are rejected."""
        with pytest.raises(BufferGeometryError):
            quantize(np.zeros(6, dtype=np.uint8), 4)


class TestPosterize:
    """Test posterize."""

    def test_factor(self):
        """Test levels=4 gives factor 64."""
        result = posterize(np.array([200, 63, 64, 10], dtype=np.uint8), 4)
        np.testing.assert_array_equal(result, [192, 0, 64, 10])

    def test_idempotent(self):
        """Test repeated posterize is stable."""
        buffer = all_values_buffer()
        for levels in (2, 3, 5, 7, 8, 16):
            once = posterize(buffer, levels)
            np.testing.assert_array_equal(posterize(once, levels), once)

    def test_never_brightens(self):
        """Test output channels never exceed input channels."""
        buffer = all_values_buffer()
        result = posterize(buffer, 6)
        assert np.all(result <= buffer)


class TestGrayscale:
    """Test grayscale conversion."""

    def test_truncated_luminosity(self):
        """Test red becomes 76 (76.245 truncated) and alpha is kept."""
        result = to_grayscale(np.array([255, 0, 0, 7], dtype=np.uint8))
        np.testing.assert_array_equal(result, [76, 76, 76, 7])
