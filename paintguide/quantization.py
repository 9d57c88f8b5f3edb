"""Per-channel level reduction (quantize / posterize)."""
import logging

import numpy as np

from paintguide.color_utils import luminosity_plane, pixel_rows, validate_buffer
from paintguide.types import PixelBuffer

logger = logging.getLogger(__name__)


def _level_step(levels: int) -> int:
    if not 1 <= levels <= 256:
        raise ValueError(f"levels must be in 1..256, got {levels}")
    return 256 // levels


def _reduce_channels(buffer, step: int) -> PixelBuffer:
    """Snap RGB down to multiples of `step`, alpha copied."""
    array = validate_buffer(buffer)
    output = array.copy()
    rows = pixel_rows(output)
    channels = rows[:, :3].astype(np.int32)
    rows[:, :3] = ((channels // step) * step).astype(np.uint8)
    return output


def quantize(buffer, levels: int) -> PixelBuffer:
    """
    Quantize each color channel to `levels` discrete values.

    step = floor(256 / levels); channel = floor(value / step) * step.
    Idempotent for a fixed level count.

    Args:
        buffer: RGBA pixel buffer
        levels: Number of levels per channel (1-256)

    Returns:
        New buffer with the same shape

    Raises:
        BufferGeometryError: If buffer length is not a multiple of 4
        ValueError: If levels is out of range
    """
    step = _level_step(levels)
    logger.debug(f"Quantizing to {levels} levels (step {step})")
    return _reduce_channels(buffer, step)


def posterize(buffer, levels: int) -> PixelBuffer:
    """
    Posterize to `levels` values per channel.

    factor = floor(256 / levels); channel = floor(value / factor) * factor,
    with no rounding step.
    """
    factor = _level_step(levels)
    logger.debug(f"Posterizing to {levels} levels (factor {factor})")
    return _reduce_channels(buffer, factor)


def to_grayscale(buffer) -> PixelBuffer:
    """Replace RGB with truncated luminosity; alpha is kept."""
    array = validate_buffer(buffer)
    output = array.copy()
    rows = pixel_rows(output)
    gray = np.clip(luminosity_plane(rows), 0, 255).astype(np.uint8)
    rows[:, 0] = gray
    rows[:, 1] = gray
    rows[:, 2] = gray
    return output
