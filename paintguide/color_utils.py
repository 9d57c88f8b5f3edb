"""Pixel buffer validation and color helpers shared by the engine."""
import math
import re
from typing import Optional, Sequence

import numpy as np

from paintguide.types import RGB, BufferGeometryError, PixelBuffer

HEX_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)

# Perceptual weights for luminosity
LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114


def as_pixel_array(buffer) -> np.ndarray:
    """
    View any byte-like or array-like buffer as a uint8 numpy array.

    Args:
        buffer: bytes, bytearray, memoryview, list or ndarray

    Returns:
        uint8 array (not necessarily a copy)
    """
    if isinstance(buffer, (bytes, bytearray, memoryview)):
        return np.frombuffer(buffer, dtype=np.uint8)
    array = np.asarray(buffer)
    if array.dtype != np.uint8:
        array = array.astype(np.uint8)
    return array


def validate_buffer(
    buffer,
    width: Optional[int] = None,
    height: Optional[int] = None
) -> PixelBuffer:
    """
    Check RGBA buffer geometry before any processing starts.

    Args:
        buffer: Pixel buffer (flat or H x W x 4)
        width: Expected width in pixels, or None to skip the size check
        height: Expected height in pixels, or None to skip the size check

    Returns:
        The buffer as a uint8 numpy array

    Raises:
        BufferGeometryError: If the length is not a multiple of 4 or does
            not equal width * height * 4
    """
    array = as_pixel_array(buffer)
    size = array.size

    if size % 4 != 0:
        raise BufferGeometryError(
            f"Buffer length {size} is not a multiple of 4 (RGBA)"
        )

    if width is not None and height is not None:
        if width < 0 or height < 0:
            raise BufferGeometryError(
                f"Invalid image dimensions {width}x{height}"
            )
        expected = width * height * 4
        if size != expected:
            raise BufferGeometryError(
                f"Buffer length {size} does not match {width}x{height}x4 = {expected}"
            )

    return array


def pixel_rows(array: np.ndarray) -> np.ndarray:
    """Reshape a validated buffer to (N, 4)."""
    return array.reshape(-1, 4)


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Parse '#RRGGBB' (case-insensitive, '#' optional).

    Malformed input parses as black.
    """
    if not isinstance(hex_color, str):
        return (0, 0, 0)
    match = HEX_PATTERN.match(hex_color.strip())
    if not match:
        return (0, 0, 0)
    return tuple(int(part, 16) for part in match.groups())


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format an RGB triple as uppercase '#RRGGBB'."""
    return f"#{int(r):02X}{int(g):02X}{int(b):02X}"


def luminosity(r: float, g: float, b: float) -> float:
    """Perceptual luminosity of a single color."""
    return LUMA_R * r + LUMA_G * g + LUMA_B * b


def luminosity_plane(pixels: np.ndarray) -> np.ndarray:
    """
    Luminosity of every pixel.

    Args:
        pixels: (..., >=3) array with RGB in the first three channels

    Returns:
        float64 array with the channel axis removed
    """
    rgb = pixels[..., :3].astype(np.float64)
    return LUMA_R * rgb[..., 0] + LUMA_G * rgb[..., 1] + LUMA_B * rgb[..., 2]


def round_half_up(values):
    """Round .5 away from zero for non-negative values (not banker's rounding)."""
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def mix_colors(color_a: Sequence[int], color_b: Sequence[int], ratio: float) -> RGB:
    """
    Linear blend color_a * (1 - ratio) + color_b * ratio, rounded per channel.
    """
    return tuple(
        int(math.floor(a * (1 - ratio) + b * ratio + 0.5))
        for a, b in zip(color_a, color_b)
    )
