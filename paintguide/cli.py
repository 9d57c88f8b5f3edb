"""Command line interface for paintguide."""
import argparse
import logging
import sys
from pathlib import Path

from paintguide.analysis import analyze_image
from paintguide.palettes import PALETTE_CATEGORIES, PALETTES
from paintguide.pipeline import GuidePipeline
from paintguide.raster_ingest import load_rgba
from paintguide.types import GuideConfig, GuideError


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog='paintguide',
        description='Turn a photograph into paint-by-numbers reference aids'
    )

    parser.add_argument(
        'input',
        type=str,
        nargs='?',
        help='Input image path'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        help='Output guide path (default: <input>_guide.png)'
    )

    parser.add_argument(
        '--mode',
        type=str,
        choices=['lines', 'blocks'],
        default='lines',
        help='Guide style: lines (outline art) or blocks (flat color areas)'
    )

    parser.add_argument(
        '--level',
        type=int,
        default=5,
        help='Detail level 1-10 (default: 5)'
    )

    parser.add_argument(
        '--palette',
        type=str,
        default=None,
        help='Catalog palette name or comma-separated hex colors'
    )

    parser.add_argument(
        '--colors',
        type=int,
        default=5,
        help='Number of dominant colors to report (default: 5)'
    )

    parser.add_argument(
        '--stride',
        type=int,
        default=4,
        help='Pixel sampling stride for color extraction (default: 4)'
    )

    parser.add_argument(
        '--min-region',
        type=int,
        default=50,
        help='Minimum region size in pixels for outline tracing (default: 50)'
    )

    parser.add_argument(
        '--epsilon',
        type=float,
        default=2.5,
        help='Outline simplification tolerance in pixels (default: 2.5)'
    )

    parser.add_argument(
        '--svg',
        action='store_true',
        help='Also trace region outlines and write them as SVG'
    )

    parser.add_argument(
        '--analyze',
        action='store_true',
        help='Print brightness, contrast and dominant colors, then exit'
    )

    parser.add_argument(
        '--list-palettes',
        action='store_true',
        help='List the built-in palettes and exit'
    )

    parser.add_argument(
        '--save-stages',
        type=str,
        default=None,
        help='Directory to save pipeline stage debug images'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser


def print_palettes():
    """Print the palette catalog grouped by category."""
    for category, title in PALETTE_CATEGORIES.items():
        print(f"{title}:")
        for key, palette in PALETTES.items():
            if palette.category == category:
                print(f"  {key:<14} {palette.name} - {palette.description}")


def run_analysis(input_path: Path, num_colors: int, stride: int) -> int:
    """Print image statistics."""
    image = load_rgba(input_path)
    result = analyze_image(image.buffer, image.width, image.height, num_colors, stride)

    print(f"Image: {image.width}x{image.height}")
    print(f"  Average brightness: {result.average_brightness:.3f}")
    print(f"  Contrast: {result.contrast:.3f}")
    print("  Dominant colors:")
    for color in result.dominant_colors:
        print(f"    {color.hex}  ({color.r}, {color.g}, {color.b})")
    return 0


def main(args=None):
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed_args.verbose else logging.INFO,
        format='%(message)s'
    )

    if parsed_args.list_palettes:
        print_palettes()
        return 0

    if not parsed_args.input:
        parser.print_usage(sys.stderr)
        print("Error: an input image is required", file=sys.stderr)
        return 1

    # Resolve input path
    input_path = Path(parsed_args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}", file=sys.stderr)
        return 1

    if parsed_args.analyze:
        try:
            return run_analysis(input_path, parsed_args.colors, parsed_args.stride)
        except (GuideError, OSError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    # Determine output path
    if parsed_args.output:
        output_path = Path(parsed_args.output)
    else:
        output_path = input_path.with_name(f"{input_path.stem}_guide.png")

    try:
        config = GuideConfig(
            mode=parsed_args.mode,
            level=parsed_args.level,
            palette=parsed_args.palette,
            num_colors=parsed_args.colors,
            sample_stride=parsed_args.stride,
            min_region_size=parsed_args.min_region,
            simplify_epsilon=parsed_args.epsilon,
            export_contours=parsed_args.svg,
            save_stages=Path(parsed_args.save_stages) if parsed_args.save_stages else None,
        )
        print(f"Mode: {config.mode.value} (level {config.level})")

        pipeline = GuidePipeline(config)
        result = pipeline.process(input_path, output_path)
    except (GuideError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Saved guide to: {output_path}")
    if result.svg is not None:
        print(f"Saved outlines to: {output_path.with_suffix('.svg')} "
              f"({len(result.traced_regions)} regions)")
    print(f"Colors: {' '.join(c.hex for c in result.dominant_colors)}")
    print(f"\nCompleted in {sum(result.timings.values()):.2f}s")
    return 0


if __name__ == '__main__':
    sys.exit(main())
