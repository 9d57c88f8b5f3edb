"""File-to-file guide pipeline with optional stage dumps."""
from pathlib import Path
from typing import List, Optional, Union
import logging
import time

import numpy as np

from paintguide.color_extractor import extract_dominant_colors, snap_colors_to_palette
from paintguide.guide_generator import generate_guide, trace_guide_contours
from paintguide.palette_matcher import remap_to_palette
from paintguide.palettes import resolve_palette_colors
from paintguide.quantization import posterize, quantize
from paintguide.raster_ingest import load_rgba, save_rgba
from paintguide.svg_export import contours_to_svg
from paintguide.types import GuideConfig, GuideMode, GuideResult, TracedRegion

logger = logging.getLogger(__name__)


class GuidePipeline:
    """Photo to paint-by-numbers guide, reference colors and outline SVG."""

    def __init__(self, config: Optional[GuideConfig] = None):
        """
        Initialize guide pipeline.

        Args:
            config: Configuration (uses defaults if None)
        """
        self.config = config or GuideConfig()
        self.palette_colors = resolve_palette_colors(self.config.palette)
        self.stages_dir = Path(self.config.save_stages) if self.config.save_stages else None

        if self.stages_dir is not None:
            self.stages_dir.mkdir(parents=True, exist_ok=True)

    def process(
        self,
        input_path: Union[str, Path],
        output_path: Optional[Union[str, Path]] = None
    ) -> GuideResult:
        """
        Run the guide pipeline on an image file.

        Args:
            input_path: Path to input image
            output_path: Optional path for the guide PNG; the outline SVG,
                when enabled, is written next to it

        Returns:
            GuideResult
        """
        config = self.config
        timings = {}
        input_path = Path(input_path)

        # Step 1: Load
        start = time.time()
        logger.info(f"Loading {input_path}")
        image = load_rgba(input_path)
        width, height = image.width, image.height
        timings["load"] = time.time() - start
        logger.info(f"  Image: {width}x{height}")
        self._save_stage(image.buffer, width, height, "stage_01_original.png")

        # Step 2: Reference colors
        start = time.time()
        dominant_colors = extract_dominant_colors(
            image.buffer, width, height, config.num_colors, config.sample_stride
        )
        if self.palette_colors:
            dominant_colors = snap_colors_to_palette(dominant_colors, self.palette_colors)
        timings["colors"] = time.time() - start
        logger.info(f"  Dominant colors: {', '.join(c.hex for c in dominant_colors)}")

        # Step 3: Value-simplified preview
        start = time.time()
        reduced = self._reduce(image.buffer)
        timings["reduce"] = time.time() - start
        self._save_stage(reduced, width, height, "stage_02_reduced.png")

        # Step 4: Guide
        start = time.time()
        logger.info(f"Generating {config.mode.value} guide at level {config.level}")
        guide = generate_guide(
            image.buffer, width, height, config.mode, config.level,
            self.palette_colors or None
        )
        timings["guide"] = time.time() - start
        self._save_stage(guide, width, height, "stage_03_guide.png")

        if output_path:
            output_path = Path(output_path)
            save_rgba(guide, width, height, output_path)
            logger.info(f"  Saved guide to: {output_path}")

        # Step 5: Optional outline export
        traced_regions: List[TracedRegion] = []
        svg = None
        if config.export_contours:
            start = time.time()
            traced_regions = trace_guide_contours(
                reduced, width, height,
                min_size=config.min_region_size,
                epsilon=config.simplify_epsilon,
                tolerance=config.color_tolerance,
            )
            svg = contours_to_svg(traced_regions, width, height)
            timings["trace"] = time.time() - start
            logger.info(f"  Traced {len(traced_regions)} region outlines")
            self._save_contour_preview(traced_regions, width, height, "stage_04_contours.png")

            if output_path:
                svg_path = output_path.with_suffix('.svg')
                svg_path.write_text(svg, encoding='utf-8')
                logger.info(f"  Saved outlines to: {svg_path}")

        return GuideResult(
            guide=guide,
            width=width,
            height=height,
            mode=config.mode,
            level=config.level,
            dominant_colors=dominant_colors,
            traced_regions=traced_regions,
            svg=svg,
            timings=timings,
        )

    def _reduce(self, buffer) -> np.ndarray:
        """Level-reduced image used for the preview and for tracing."""
        levels = max(self.config.level, 2)
        if self.config.mode is GuideMode.BLOCKS:
            reduced = posterize(buffer, levels)
            if self.palette_colors:
                reduced = remap_to_palette(reduced, self.palette_colors)
            return reduced
        return quantize(buffer, levels)

    def _save_stage(self, buffer, width: int, height: int, filename: str):
        """Save an intermediate stage image."""
        if self.stages_dir is None:
            return
        try:
            output_path = save_rgba(buffer, width, height, self.stages_dir / filename)
            logger.info(f"  Saved stage: {output_path}")
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to save stage {filename}: {e}")

    def _save_contour_preview(
        self,
        regions: List[TracedRegion],
        width: int,
        height: int,
        filename: str
    ):
        """Save a rasterized preview of traced outlines."""
        if self.stages_dir is None:
            return
        try:
            from PIL import Image, ImageDraw

            img = Image.new('RGB', (max(width, 1), max(height, 1)), (255, 255, 255))
            draw = ImageDraw.Draw(img)
            for region in regions:
                if len(region.contour) >= 2:
                    draw.line(region.contour + region.contour[:1], fill=(0, 0, 0), width=1)

            output_path = self.stages_dir / filename
            img.save(output_path)
            logger.info(f"  Saved stage: {output_path}")
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to save stage {filename}: {e}")
