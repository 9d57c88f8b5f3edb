"""Nearest-match remapping of pixels onto a synthesized palette."""
import logging
from typing import List, Sequence

import numpy as np

from paintguide.color_utils import (
    LUMA_B,
    LUMA_G,
    LUMA_R,
    hex_to_rgb,
    pixel_rows,
    validate_buffer,
)
from paintguide.palette_synthesizer import synthesize_palette
from paintguide.types import PaletteEntry, PixelBuffer

logger = logging.getLogger(__name__)

LUMINOSITY_WEIGHT = 1.5
COLOR_DISTANCE_WEIGHT = 0.15

# Upper bound on colors x candidates evaluated per batch
MATCH_BATCH_ELEMENTS = 4_000_000


def match_scores(colors: np.ndarray, palette: List[PaletteEntry]) -> np.ndarray:
    """
    Score every color against every candidate.

    score = 1.5 * |L_pixel - L_candidate| + 0.15 * ||pixel - candidate||

    Args:
        colors: (n, 3) RGB array
        palette: Candidates in scan order

    Returns:
        (n, m) float64 score matrix
    """
    rgb = colors.astype(np.float64)
    pixel_lum = LUMA_R * rgb[:, 0] + LUMA_G * rgb[:, 1] + LUMA_B * rgb[:, 2]

    candidate_rgb = np.array([(e.r, e.g, e.b) for e in palette], dtype=np.float64)
    candidate_lum = np.array([e.luminosity for e in palette], dtype=np.float64)

    lum_diff = np.abs(pixel_lum[:, None] - candidate_lum[None, :])
    diff = rgb[:, None, :] - candidate_rgb[None, :, :]
    color_dist = np.sqrt(np.sum(diff * diff, axis=2))

    return lum_diff * LUMINOSITY_WEIGHT + color_dist * COLOR_DISTANCE_WEIGHT


def best_matches(colors: np.ndarray, palette: List[PaletteEntry]) -> np.ndarray:
    """
    Index of the winning candidate for each color.

    The first candidate with the lowest score wins, so ties resolve in
    palette scan order.
    """
    batch = max(1, MATCH_BATCH_ELEMENTS // max(len(palette), 1))
    winners = np.empty(len(colors), dtype=np.int64)
    for start in range(0, len(colors), batch):
        scores = match_scores(colors[start:start + batch], palette)
        winners[start:start + batch] = np.argmin(scores, axis=1)
    return winners


def remap_to_palette(buffer, base_hex_colors: Sequence[str]) -> PixelBuffer:
    """
    Remap every pixel to its closest expanded-palette color.

    Luminosity difference is weighted heavily so the value structure of
    the photograph survives the recoloring. Alpha is copied unchanged.

    Args:
        buffer: RGBA pixel buffer
        base_hex_colors: Base palette as hex strings

    Returns:
        New buffer with the same shape

    Raises:
        BufferGeometryError: If buffer length is not a multiple of 4
    """
    array = validate_buffer(buffer)
    output = array.copy()
    if not base_hex_colors:
        return output

    palette = synthesize_palette(base_hex_colors)
    palette_rgb = np.array([(e.r, e.g, e.b) for e in palette], dtype=np.uint8)

    rows = pixel_rows(output)
    # Score each distinct color once
    keys = (
        rows[:, 0].astype(np.int64) << 16
        | rows[:, 1].astype(np.int64) << 8
        | rows[:, 2].astype(np.int64)
    )
    unique_keys, inverse = np.unique(keys, return_inverse=True)
    unique_colors = np.stack(
        [(unique_keys >> 16) & 0xFF, (unique_keys >> 8) & 0xFF, unique_keys & 0xFF],
        axis=1,
    )
    logger.debug(
        f"Matching {len(unique_colors)} distinct colors against {len(palette)} candidates"
    )

    winners = best_matches(unique_colors, palette)
    rows[:, :3] = palette_rgb[winners[inverse.reshape(-1)]]
    return output


def find_closest_palette_color(
    r: int,
    g: int,
    b: int,
    palette_hex_colors: Sequence[str]
) -> str:
    """
    Closest base palette color by Euclidean RGB distance.

    Returns:
        The matching hex string as given in the palette, or '#000000' for
        an empty palette
    """
    if not palette_hex_colors:
        return "#000000"

    closest = palette_hex_colors[0]
    min_distance = float("inf")
    for hex_color in palette_hex_colors:
        pr, pg, pb = hex_to_rgb(hex_color)
        distance = ((r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2) ** 0.5
        if distance < min_distance:
            min_distance = distance
            closest = hex_color
    return closest
