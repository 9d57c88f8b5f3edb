"""Histogram, brightness and contrast analysis of a source image."""
import logging

import numpy as np

from paintguide.color_extractor import extract_dominant_colors
from paintguide.color_utils import luminosity_plane, pixel_rows, validate_buffer
from paintguide.types import AnalysisResult, Histogram

logger = logging.getLogger(__name__)

BINS = 256


def compute_histogram(buffer) -> Histogram:
    """
    256-bin histograms of red, green, blue and luminosity.

    Fully transparent pixels are not counted. Luminosity is truncated to
    an integer bin.
    """
    rows = pixel_rows(validate_buffer(buffer))
    visible = rows[rows[:, 3] > 0]

    lum = np.minimum(luminosity_plane(visible).astype(np.int64), BINS - 1)

    return Histogram(
        red=np.bincount(visible[:, 0], minlength=BINS).tolist(),
        green=np.bincount(visible[:, 1], minlength=BINS).tolist(),
        blue=np.bincount(visible[:, 2], minlength=BINS).tolist(),
        luminosity=np.bincount(lum, minlength=BINS).tolist(),
    )


def analyze_image(
    buffer,
    width: int,
    height: int,
    num_colors: int = 5,
    sample_stride: int = 4
) -> AnalysisResult:
    """
    Summarize an image for the reference panel.

    Brightness is the mean luminosity bin over all pixels (transparent
    ones count as zero), normalized to 0-1. Contrast is the standard
    deviation of luminosity around that mean, normalized to 0-1.

    Args:
        buffer: RGBA pixel buffer
        width: Image width
        height: Image height
        num_colors: Dominant colors to extract
        sample_stride: Sampling stride for color extraction

    Returns:
        AnalysisResult
    """
    validate_buffer(buffer, width, height)
    histogram = compute_histogram(buffer)
    total_pixels = width * height

    if total_pixels == 0:
        return AnalysisResult(
            histogram=histogram,
            dominant_colors=[],
            average_brightness=0.0,
            contrast=0.0,
        )

    bins = np.arange(BINS, dtype=np.float64)
    counts = np.asarray(histogram.luminosity, dtype=np.float64)

    average_brightness = float(np.sum(bins * counts) / total_pixels / 255.0)
    mean = average_brightness * 255.0
    variance = float(np.sum((bins - mean) ** 2 * counts) / total_pixels)
    contrast = float(np.sqrt(variance) / 255.0)

    dominant_colors = extract_dominant_colors(
        buffer, width, height, num_colors, sample_stride
    )
    logger.debug(
        f"Analysis: brightness={average_brightness:.3f}, contrast={contrast:.3f}"
    )

    return AnalysisResult(
        histogram=histogram,
        dominant_colors=dominant_colors,
        average_brightness=average_brightness,
        contrast=contrast,
    )
