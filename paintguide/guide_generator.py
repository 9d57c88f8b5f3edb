"""Paint-by-numbers guide rendering: clean line art or flat color blocks."""
import logging
from typing import List, Optional, Sequence, Union

import numpy as np

from paintguide.color_utils import pixel_rows, round_half_up, validate_buffer
from paintguide.edge_field import detail_settings, detect_edges, thicken_lines
from paintguide.palette_matcher import remap_to_palette
from paintguide.quantization import posterize
from paintguide.region_tracer import (
    DEFAULT_COLOR_TOLERANCE,
    DEFAULT_EPSILON,
    DEFAULT_MIN_REGION_SIZE,
    trace_regions,
)
from paintguide.types import GuideMode, PixelBuffer, TracedRegion

logger = logging.getLogger(__name__)

BORDER_DARKEN_FACTOR = 0.85


def _as_mode(mode: Union[str, GuideMode]) -> GuideMode:
    if isinstance(mode, GuideMode):
        return mode
    try:
        return GuideMode(str(mode).lower())
    except ValueError:
        raise ValueError(
            f"Unknown guide mode '{mode}', expected 'lines' or 'blocks'"
        ) from None


def generate_line_guide(buffer, width: int, height: int, level: int) -> PixelBuffer:
    """Sobel outline art with threshold and thickness picked by detail level."""
    settings = detail_settings(level)
    logger.debug(
        f"Line guide level {level}: threshold={settings.threshold}, "
        f"thickness={settings.thickness}"
    )
    edges = detect_edges(buffer, width, height, settings.threshold)
    return thicken_lines(edges, width, height, settings.thickness)


def darken_region_borders(
    buffer,
    width: int,
    height: int,
    factor: float = BORDER_DARKEN_FACTOR
) -> PixelBuffer:
    """
    Darken pixels whose right or bottom neighbor has a different color.

    RGB is scaled by `factor` and rounded; alpha is untouched.
    """
    array = validate_buffer(buffer, width, height)
    output = array.copy()
    if width == 0 or height == 0:
        return output

    image = pixel_rows(array).reshape(height, width, 4)
    rgb = image[..., :3]

    border = np.zeros((height, width), dtype=bool)
    border[:, :-1] |= np.any(rgb[:, :-1] != rgb[:, 1:], axis=2)
    border[:-1, :] |= np.any(rgb[:-1, :] != rgb[1:, :], axis=2)

    out_image = pixel_rows(output).reshape(height, width, 4)
    darkened = round_half_up(rgb[border].astype(np.float64) * factor)
    out_image[border, :3] = np.clip(darkened, 0, 255).astype(np.uint8)
    return output


def generate_block_guide(
    buffer,
    width: int,
    height: int,
    level: int,
    palette_hex_colors: Optional[Sequence[str]] = None
) -> PixelBuffer:
    """Posterized flat color blocks, optionally recolored to a palette, with thin borders."""
    validate_buffer(buffer, width, height)
    blocks = posterize(buffer, level)
    if palette_hex_colors:
        logger.debug(f"Remapping blocks to {len(palette_hex_colors)}-color palette")
        blocks = remap_to_palette(blocks, palette_hex_colors)
    return darken_region_borders(blocks, width, height)


def generate_guide(
    buffer,
    width: int,
    height: int,
    mode: Union[str, GuideMode],
    level: int,
    palette_hex_colors: Optional[Sequence[str]] = None
) -> PixelBuffer:
    """
    Render a paint-by-numbers guide.

    Args:
        buffer: RGBA pixel buffer
        width: Image width
        height: Image height
        mode: 'lines' for outline art or 'blocks' for flat color areas
        level: Detail level for lines, posterize level count for blocks
        palette_hex_colors: Optional palette for blocks mode

    Returns:
        Full-size RGBA buffer with the input's shape

    Raises:
        BufferGeometryError: If buffer geometry is invalid
        ValueError: If the mode is unknown
    """
    mode = _as_mode(mode)
    validate_buffer(buffer, width, height)

    if mode is GuideMode.LINES:
        return generate_line_guide(buffer, width, height, level)
    return generate_block_guide(buffer, width, height, level, palette_hex_colors)


def trace_guide_contours(
    buffer,
    width: int,
    height: int,
    min_size: int = DEFAULT_MIN_REGION_SIZE,
    epsilon: float = DEFAULT_EPSILON,
    tolerance: int = DEFAULT_COLOR_TOLERANCE
) -> List[TracedRegion]:
    """Vector outline path: simplified contours of every color region."""
    return trace_regions(buffer, width, height, min_size, epsilon, tolerance)
