"""Core types for the paint-by-numbers guide engine."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union
import warnings

import numpy as np

# Type aliases
PixelBuffer = np.ndarray
RGB = Tuple[int, int, int]
Point = Tuple[int, int]
Contour = List[Point]
RegionPixels = Set[Point]


class GuideMode(Enum):
    """Guide rendering styles."""
    LINES = "lines"
    BLOCKS = "blocks"


@dataclass
class DominantColor:
    """A color produced by clustering, with its hex code."""
    r: int
    g: int
    b: int
    hex: str

    @property
    def rgb(self) -> RGB:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class PaletteEntry:
    """Synthesized palette candidate."""
    r: int
    g: int
    b: int
    luminosity: float


@dataclass(frozen=True)
class Palette:
    """Named, curated set of base colors."""
    name: str
    category: str  # "artist", "mood" or "classic"
    colors: Tuple[str, ...]
    description: Optional[str] = None


@dataclass(frozen=True)
class DetailSettings:
    """Edge threshold and line thickness for a detail level."""
    threshold: float
    thickness: int


@dataclass
class TracedRegion:
    """Segmented region with its simplified outline."""
    region_id: int
    color: RGB
    size: int
    contour: Contour = field(default_factory=list)


@dataclass
class Histogram:
    """Per-channel 256-bin histograms."""
    red: List[int]
    green: List[int]
    blue: List[int]
    luminosity: List[int]


@dataclass
class AnalysisResult:
    """Summary statistics for a source image."""
    histogram: Histogram
    dominant_colors: List[DominantColor]
    average_brightness: float
    contrast: float


@dataclass
class GuideConfig:
    """Configuration for the guide pipeline."""
    # Guide rendering
    mode: GuideMode = GuideMode.LINES
    level: int = 5  # detail level 1-10
    palette: Optional[Union[str, List[str]]] = None  # catalog name or hex list

    # Dominant colors
    num_colors: int = 5
    sample_stride: int = 4

    # Segmentation / tracing
    min_region_size: int = 50
    color_tolerance: int = 5
    simplify_epsilon: float = 2.5
    export_contours: bool = False

    # Debug output
    save_stages: Optional[Path] = None

    def __post_init__(self):
        """Normalize mode and validate ranges."""
        if isinstance(self.mode, str):
            self.mode = GuideMode(self.mode)
        if not 1 <= self.level <= 10:
            raise ValueError(f"level must be in 1..10, got {self.level}")
        if self.num_colors < 1:
            raise ValueError(f"num_colors must be >= 1, got {self.num_colors}")
        if self.sample_stride < 1:
            raise ValueError(f"sample_stride must be >= 1, got {self.sample_stride}")
        if self.mode is GuideMode.BLOCKS and self.level == 1:
            warnings.warn(
                "Blocks mode with level 1 posterizes every channel to 0. "
                "Consider level >= 2."
            )


@dataclass
class RasterImage:
    """Decoded RGBA image."""
    buffer: PixelBuffer
    width: int
    height: int
    path: str = ""


@dataclass
class GuideResult:
    """Result of running the guide pipeline on one image."""
    guide: PixelBuffer
    width: int
    height: int
    mode: GuideMode
    level: int
    dominant_colors: List[DominantColor] = field(default_factory=list)
    traced_regions: List[TracedRegion] = field(default_factory=list)
    svg: Optional[str] = None
    timings: Dict[str, float] = field(default_factory=dict)


class GuideError(Exception):
    """Base exception for guide generation errors."""
    pass


class BufferGeometryError(GuideError, ValueError):
    """Pixel buffer length does not match the declared geometry."""
    pass


class PaletteError(GuideError):
    """Unknown or unusable palette."""
    pass


class ImageLoadError(GuideError):
    """Image file could not be decoded."""
    pass
