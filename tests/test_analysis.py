"""Tests for image analysis."""
import numpy as np
import pytest

from paintguide.analysis import analyze_image, compute_histogram
from paintguide.color_utils import luminosity_plane


def white_bin() -> int:
    return int(luminosity_plane(np.array([[255, 255, 255]], dtype=np.uint8))[0])


@pytest.fixture
def mixed_2x2():
    """Two black pixels, one white pixel, one transparent red pixel."""
    image = np.array([
        [0, 0, 0, 255],
        [0, 0, 0, 255],
        [255, 255, 255, 255],
        [255, 0, 0, 0],
    ], dtype=np.uint8)
    return image.reshape(-1), 2, 2


class TestComputeHistogram:
    """Test per-channel histograms."""

    def test_bins(self, mixed_2x2):
        """Test counts land in the expected bins."""
        buffer, _, _ = mixed_2x2
        histogram = compute_histogram(buffer)

        assert len(histogram.red) == 256
        assert histogram.red[0] == 2
        assert histogram.red[255] == 1
        assert histogram.luminosity[0] == 2
        assert histogram.luminosity[white_bin()] == 1

    def test_transparent_excluded(self, mixed_2x2):
        """Test alpha 0 pixels are not counted."""
        buffer, _, _ = mixed_2x2
        histogram = compute_histogram(buffer)
        for channel in (histogram.red, histogram.green, histogram.blue, histogram.luminosity):
            assert sum(channel) == 3

    def test_luminosity_truncated(self, make_solid):
        """Test luminosity uses the integer part."""
        histogram = compute_histogram(make_solid(1, 1, (255, 0, 0, 255)))
        # 0.299 * 255 = 76.245
        assert histogram.luminosity[76] == 1


class TestAnalyzeImage:
    """Test brightness, contrast and dominant colors."""

    def test_uniform_black(self, make_solid):
        """Test a black image is dark with no contrast."""
        result = analyze_image(make_solid(8, 8, (0, 0, 0, 255)), 8, 8)
        assert result.average_brightness == 0.0
        assert result.contrast == 0.0
        assert [c.hex for c in result.dominant_colors] == ["#000000"] * len(result.dominant_colors)

    def test_brightness_over_all_pixels(self, mixed_2x2):
        """Test the mean divides by every pixel, transparent included."""
        buffer, width, height = mixed_2x2
        result = analyze_image(buffer, width, height, num_colors=2, sample_stride=1)

        mean = white_bin() / 4
        assert result.average_brightness == pytest.approx(mean / 255)
        expected_contrast = np.sqrt((white_bin() - mean) ** 2 / 4 + 2 * mean ** 2 / 4) / 255
        assert result.contrast == pytest.approx(expected_contrast)

    def test_half_split_contrast(self, black_white_10x10):
        """Test an even black/white split has contrast near 0.5."""
        buffer, width, height = black_white_10x10
        result = analyze_image(buffer, width, height)
        assert result.average_brightness == pytest.approx(white_bin() / 2 / 255)
        assert result.contrast == pytest.approx(white_bin() / 2 / 255)
        assert 0 < len(result.dominant_colors) <= 5

    def test_empty_image(self):
        """Test a zero-pixel image reports zeros."""
        result = analyze_image(np.zeros(0, dtype=np.uint8), 0, 0)
        assert result.average_brightness == 0.0
        assert result.contrast == 0.0
        assert result.dominant_colors == []
        assert sum(result.histogram.red) == 0
