"""paintguide: photo simplification and paint-by-numbers guide engine.

Color clustering, palette synthesis and remapping, Sobel edge guides,
region segmentation and outline tracing over flat RGBA buffers.
"""
from paintguide.analysis import analyze_image
from paintguide.color_extractor import extract_dominant_colors, snap_colors_to_palette
from paintguide.edge_field import detail_settings, detect_edges, thicken_lines
from paintguide.guide_generator import generate_guide, trace_guide_contours
from paintguide.palette_matcher import find_closest_palette_color, remap_to_palette
from paintguide.palette_synthesizer import synthesize_palette
from paintguide.palettes import PALETTES, get_palette
from paintguide.quantization import posterize, quantize, to_grayscale
from paintguide.region_tracer import (
    segment_regions,
    simplify_contour,
    trace_contour,
    trace_regions,
)
from paintguide.types import (
    BufferGeometryError,
    DominantColor,
    GuideConfig,
    GuideError,
    GuideMode,
    PaletteEntry,
    PaletteError,
)

__version__ = "0.1.0"

__all__ = [
    "analyze_image",
    "extract_dominant_colors",
    "snap_colors_to_palette",
    "detail_settings",
    "detect_edges",
    "thicken_lines",
    "generate_guide",
    "trace_guide_contours",
    "find_closest_palette_color",
    "remap_to_palette",
    "synthesize_palette",
    "PALETTES",
    "get_palette",
    "posterize",
    "quantize",
    "to_grayscale",
    "segment_regions",
    "simplify_contour",
    "trace_contour",
    "trace_regions",
    "BufferGeometryError",
    "DominantColor",
    "GuideConfig",
    "GuideError",
    "GuideMode",
    "PaletteEntry",
    "PaletteError",
]
