"""Expand a small base palette into tints, shades and pairwise mixes."""
import logging
from typing import List, Sequence

from paintguide.color_utils import hex_to_rgb, luminosity, mix_colors
from paintguide.types import RGB, PaletteEntry

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

TINT_SHADE_RATIOS = (0.25, 0.5, 0.75)
BLEND_RATIOS = (0.33, 0.5, 0.66)


def _entry(color: RGB) -> PaletteEntry:
    r, g, b = color
    return PaletteEntry(r=r, g=g, b=b, luminosity=luminosity(r, g, b))


def expected_candidate_count(base_count: int) -> int:
    """n * 7 + C(n, 2) * 3."""
    return base_count * 7 + (base_count * (base_count - 1) // 2) * 3


def synthesize_palette(base_hex_colors: Sequence[str]) -> List[PaletteEntry]:
    """
    Build the expanded candidate set for palette matching.

    Order before sorting: every base color, then per base color three
    tints (toward white) and three shades (toward black), then three
    blends for every unordered pair of base colors. Identical entries are
    kept. The result is stably sorted by ascending luminosity.

    Args:
        base_hex_colors: Base palette as '#RRGGBB' strings

    Returns:
        List of PaletteEntry, len == n * 7 + C(n, 2) * 3
    """
    base_colors = [hex_to_rgb(hex_color) for hex_color in base_hex_colors]
    candidates = [_entry(color) for color in base_colors]

    for color in base_colors:
        for ratio in TINT_SHADE_RATIOS:
            candidates.append(_entry(mix_colors(color, WHITE, ratio)))
        for ratio in TINT_SHADE_RATIOS:
            candidates.append(_entry(mix_colors(color, BLACK, ratio)))

    for i, color_a in enumerate(base_colors):
        for color_b in base_colors[i + 1:]:
            for ratio in BLEND_RATIOS:
                candidates.append(_entry(mix_colors(color_a, color_b, ratio)))

    logger.debug(
        f"Synthesized {len(candidates)} candidates from {len(base_colors)} base colors"
    )
    return sorted(candidates, key=lambda entry: entry.luminosity)
