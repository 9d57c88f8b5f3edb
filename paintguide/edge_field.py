"""Sobel edge detection and line thickening for the line-art guide."""
import logging

import cv2
import numpy as np
from scipy import ndimage

from paintguide.color_utils import luminosity_plane, pixel_rows, validate_buffer
from paintguide.types import DetailSettings, PixelBuffer

logger = logging.getLogger(__name__)

EDGE_VALUE = 0
BACKGROUND_VALUE = 255

# (max level, threshold, thickness). Low levels keep only major edges
# with thick lines, high levels keep fine detail with thin lines.
DETAIL_TABLE = (
    (2, 100.0, 4),
    (4, 70.0, 3),
    (6, 45.0, 2),
    (8, 30.0, 2),
)
FINEST_DETAIL = DetailSettings(threshold=20.0, thickness=1)


def detail_settings(level: int) -> DetailSettings:
    """
    Edge threshold and line thickness for a detail level (1-10).

    Levels above the table fall through to the finest setting.
    """
    for max_level, threshold, thickness in DETAIL_TABLE:
        if level <= max_level:
            return DetailSettings(threshold=threshold, thickness=thickness)
    return FINEST_DETAIL


def _blank_output(array: np.ndarray) -> np.ndarray:
    """Opaque white buffer with the input's shape."""
    return np.full(array.shape, BACKGROUND_VALUE, dtype=np.uint8)


def gradient_magnitude(gray: np.ndarray) -> np.ndarray:
    """
    Sobel gradient magnitude of a luminosity plane.

    Only interior values are meaningful; the 1-pixel border depends on
    OpenCV's border extrapolation and must be ignored by callers.
    """
    gx = cv2.Sobel(gray, cv2.CV_64F, 1, 0, ksize=3)
    gy = cv2.Sobel(gray, cv2.CV_64F, 0, 1, ksize=3)
    return np.sqrt(gx * gx + gy * gy)


def detect_edges(buffer, width: int, height: int, threshold: float) -> PixelBuffer:
    """
    Binarize the Sobel gradient of the image's luminosity.

    Interior pixels with magnitude > threshold become opaque black, all
    others opaque white. The 1-pixel border is never convolved and stays
    white.

    Args:
        buffer: RGBA pixel buffer
        width: Image width
        height: Image height
        threshold: Gradient magnitude threshold

    Returns:
        New RGBA buffer with the same shape

    Raises:
        BufferGeometryError: If buffer geometry is invalid
    """
    array = validate_buffer(buffer, width, height)
    output = _blank_output(array)

    if width < 3 or height < 3:
        return output

    gray = luminosity_plane(pixel_rows(array).reshape(height, width, 4))
    magnitude = gradient_magnitude(gray)

    interior = np.zeros((height, width), dtype=bool)
    interior[1:-1, 1:-1] = magnitude[1:-1, 1:-1] > threshold

    out_rows = pixel_rows(output).reshape(height, width, 4)
    out_rows[interior, :3] = EDGE_VALUE

    logger.debug(
        f"Sobel threshold {threshold}: {int(interior.sum())} edge pixels "
        f"of {width * height}"
    )
    return output


def edge_mask(buffer, width: int, height: int) -> np.ndarray:
    """(height, width) bool mask of black-line pixels (red channel == 0)."""
    array = validate_buffer(buffer, width, height)
    return pixel_rows(array)[:, 0].reshape(height, width) == EDGE_VALUE


def thicken_lines(buffer, width: int, height: int, thickness: int) -> PixelBuffer:
    """
    Dilate line pixels into squares for visibility.

    Every edge pixel paints a (2 * (thickness // 2) + 1)-sided black
    square; everything else is white. Thickness <= 1 returns an unchanged
    copy.

    Args:
        buffer: Edge buffer from detect_edges
        width: Image width
        height: Image height
        thickness: Line thickness in pixels

    Returns:
        New RGBA buffer with the same shape
    """
    array = validate_buffer(buffer, width, height)
    if thickness <= 1:
        return array.copy()

    radius = thickness // 2
    structure = np.ones((2 * radius + 1, 2 * radius + 1), dtype=bool)
    mask = edge_mask(array, width, height)
    if mask.size:
        mask = ndimage.binary_dilation(mask, structure=structure)

    output = _blank_output(array)
    out_rows = pixel_rows(output).reshape(height, width, 4)
    out_rows[mask, :3] = EDGE_VALUE
    return output
