"""SVG export of traced region outlines."""
from typing import List, Sequence

from paintguide.color_utils import rgb_to_hex
from paintguide.types import Contour, TracedRegion


def contour_to_path_data(contour: Contour) -> str:
    """
    Convert a contour to closed SVG path data.

    Args:
        contour: Ordered (x, y) points

    Returns:
        Path data string, empty for contours under 2 points
    """
    if len(contour) < 2:
        return ""
    x0, y0 = contour[0]
    commands = [f"M{int(x0)},{int(y0)}"]
    for x, y in contour[1:]:
        commands.append(f"L{int(x)},{int(y)}")
    commands.append("Z")
    return ' '.join(commands)


def contours_to_svg(
    regions: Sequence[TracedRegion],
    width: int,
    height: int,
    stroke: str = "#000000",
    stroke_width: float = 1,
    fill: bool = False
) -> str:
    """
    Render traced regions as an outline SVG.

    Args:
        regions: Traced regions with simplified contours
        width: Image width
        height: Image height
        stroke: Outline color
        stroke_width: Outline width in pixels
        fill: Fill each outline with its region color instead of leaving it empty

    Returns:
        Complete SVG string
    """
    path_elements: List[str] = []

    for region in regions:
        path_data = contour_to_path_data(region.contour)
        if not path_data:
            continue
        fill_value = rgb_to_hex(*region.color) if fill else "none"
        path_elements.append(
            f'<path data-region="{region.region_id}" d="{path_data}" '
            f'fill="{fill_value}" stroke="{stroke}" stroke-width="{stroke_width}"/>'
        )

    svg_content = '\n  '.join(path_elements)

    svg = f'''<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width} {height}" width="{width}" height="{height}">
  {svg_content}
</svg>'''

    return svg


def save_svg(svg_string: str, output_path: str) -> None:
    """Save SVG string to file."""
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(svg_string)
