"""Region segmentation, Moore-neighbor boundary tracing and RDP simplification."""
import logging
from collections import deque
from typing import Dict, List, Sequence, Tuple

import numpy as np

from paintguide.color_utils import pixel_rows, validate_buffer
from paintguide.types import RGB, Contour, Point, RegionPixels, TracedRegion

logger = logging.getLogger(__name__)

DEFAULT_MIN_REGION_SIZE = 50
DEFAULT_COLOR_TOLERANCE = 5
DEFAULT_EPSILON = 2.5

MAX_TRACE_STEPS = 10000
MIN_TRACE_REGION = 3
MIN_CONTOUR_POINTS = 4

# Moore neighborhood in image coordinates (y grows downward), starting
# to the right and turning counter-clockwise.
DIRECTIONS = (
    (1, 0),    # right
    (1, -1),   # up-right
    (0, -1),   # up
    (-1, -1),  # up-left
    (-1, 0),   # left
    (-1, 1),   # down-left
    (0, 1),    # down
    (1, 1),    # down-right
)

FOUR_NEIGHBORS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def _flood_fill(
    colors: List[List[int]],
    width: int,
    height: int,
    seed_x: int,
    seed_y: int,
    visited: np.ndarray,
    tolerance: int
) -> RegionPixels:
    """
    Grow a 4-connected region around a seed pixel.

    Pixels join when every channel is within `tolerance` of the seed color.
    Joined pixels are marked in the caller-owned `visited` array; pixels
    that fail the color test stay unvisited so they can seed later regions.
    """
    target_r, target_g, target_b = colors[seed_y * width + seed_x]
    region = set()
    queue = deque([(seed_x, seed_y)])
    visited[seed_y * width + seed_x] = True

    while queue:
        x, y = queue.popleft()
        region.add((x, y))

        for dx, dy in FOUR_NEIGHBORS:
            nx, ny = x + dx, y + dy
            if nx < 0 or nx >= width or ny < 0 or ny >= height:
                continue
            index = ny * width + nx
            if visited[index]:
                continue
            r, g, b = colors[index]
            if (abs(r - target_r) > tolerance
                    or abs(g - target_g) > tolerance
                    or abs(b - target_b) > tolerance):
                continue
            visited[index] = True
            queue.append((nx, ny))

    return region


def _segment(
    buffer,
    width: int,
    height: int,
    min_size: int,
    tolerance: int
) -> List[Tuple[RGB, RegionPixels]]:
    """Segment into (seed color, pixels) pairs in raster discovery order."""
    array = validate_buffer(buffer, width, height)
    colors = pixel_rows(array)[:, :3].astype(np.int16).tolist()

    # Shared across every flood fill of this pass only
    visited = np.zeros(width * height, dtype=bool)
    regions = []
    discarded = 0

    for y in range(height):
        row_start = y * width
        for x in range(width):
            if visited[row_start + x]:
                continue
            region = _flood_fill(colors, width, height, x, y, visited, tolerance)
            if len(region) > min_size:
                regions.append((tuple(colors[row_start + x]), region))
            else:
                discarded += 1

    logger.debug(
        f"Segmented {width}x{height}: {len(regions)} regions kept, "
        f"{discarded} at or below {min_size} px discarded"
    )
    return regions


def segment_regions(
    buffer,
    width: int,
    height: int,
    min_size: int = DEFAULT_MIN_REGION_SIZE,
    tolerance: int = DEFAULT_COLOR_TOLERANCE
) -> Dict[int, RegionPixels]:
    """
    Find connected regions of near-uniform color.

    Args:
        buffer: RGBA pixel buffer
        width: Image width
        height: Image height
        min_size: Regions with this many pixels or fewer are dropped as noise
        tolerance: Per-channel distance from the seed color

    Returns:
        Mapping of region id (0, 1, ... in discovery order) to a set of
        (x, y) pixel coordinates

    Raises:
        BufferGeometryError: If buffer geometry is invalid
    """
    regions = _segment(buffer, width, height, min_size, tolerance)
    return {region_id: pixels for region_id, (_, pixels) in enumerate(regions)}


def _touches_outside(region: RegionPixels, x: int, y: int, width: int, height: int) -> bool:
    """True when any 8-neighbor is outside the image or outside the region."""
    for dx, dy in DIRECTIONS:
        bx, by = x + dx, y + dy
        if bx < 0 or bx >= width or by < 0 or by >= height or (bx, by) not in region:
            return True
    return False


def trace_contour(
    region: RegionPixels,
    width: int,
    height: int,
    start_x: int,
    start_y: int
) -> Contour:
    """
    Walk a region's boundary with Moore-neighbor tracing.

    From the current pixel, the eight neighbors are scanned starting at the
    current facing direction; the walk moves to the first one that is in
    the region and itself touches a non-region pixel, and faces the
    direction just taken. The walk ends back at the start, after
    min(2 * region size, 10000) steps, or when no neighbor qualifies.

    Args:
        region: Set of (x, y) pixels
        width: Image width
        height: Image height
        start_x: Starting pixel x
        start_y: Starting pixel y

    Returns:
        Ordered boundary points, or [] for regions under 3 pixels and
        paths under 4 points
    """
    if len(region) < MIN_TRACE_REGION:
        return []

    start = (start_x, start_y)
    max_steps = min(len(region) * 2, MAX_TRACE_STEPS)
    contour = []
    x, y = start
    direction = 0
    steps = 0

    while True:
        contour.append((x, y))

        found = False
        for turn in range(8):
            check = (direction + turn) % 8
            dx, dy = DIRECTIONS[check]
            nx, ny = x + dx, y + dy
            if (nx, ny) in region and _touches_outside(region, nx, ny, width, height):
                x, y = nx, ny
                direction = check
                found = True
                break

        if not found:
            break
        steps += 1
        if (x, y) == start or steps >= max_steps:
            break

    if len(contour) < MIN_CONTOUR_POINTS:
        return []
    return contour


def perpendicular_distances(
    points: np.ndarray,
    line_start: Sequence[float],
    line_end: Sequence[float]
) -> np.ndarray:
    """Distance of each point to the infinite line through two points (0 for a degenerate line)."""
    x1, y1 = float(line_start[0]), float(line_start[1])
    x2, y2 = float(line_end[0]), float(line_end[1])
    denominator = np.hypot(y2 - y1, x2 - x1)
    if denominator == 0:
        return np.zeros(len(points))
    x = points[:, 0]
    y = points[:, 1]
    numerator = np.abs((y2 - y1) * x - (x2 - x1) * y + x2 * y1 - y2 * x1)
    return numerator / denominator


def simplify_contour(points: Sequence[Point], epsilon: float = DEFAULT_EPSILON) -> Contour:
    """
    Ramer-Douglas-Peucker polyline simplification.

    Uses an explicit work stack instead of recursion. Each split keeps one
    more point, so the stack never holds more than len(points) segments.

    Args:
        points: Ordered (x, y) points
        epsilon: Maximum allowed perpendicular deviation

    Returns:
        Simplified points; first and last are always kept and sequences
        under 3 points are returned unchanged
    """
    points = [tuple(p) for p in points]
    n = len(points)
    if n < 3:
        return points

    coords = np.asarray(points, dtype=np.float64)
    keep = np.zeros(n, dtype=bool)
    keep[0] = keep[-1] = True
    stack = [(0, n - 1)]

    while stack:
        first, last = stack.pop()
        if last - first < 2:
            continue
        distances = perpendicular_distances(
            coords[first + 1:last], coords[first], coords[last]
        )
        offset = int(np.argmax(distances))
        if distances[offset] > epsilon:
            split = first + 1 + offset
            keep[split] = True
            stack.append((split, last))
            stack.append((first, split))

    return [p for p, kept in zip(points, keep) if kept]


def trace_regions(
    buffer,
    width: int,
    height: int,
    min_size: int = DEFAULT_MIN_REGION_SIZE,
    epsilon: float = DEFAULT_EPSILON,
    tolerance: int = DEFAULT_COLOR_TOLERANCE
) -> List[TracedRegion]:
    """
    Segment, trace and simplify every region of an image.

    Each trace starts at the region's top-most, then left-most pixel,
    which is always on the boundary. Regions whose trace is discarded are
    left out of the result.
    """
    traced = []
    for region_id, (color, pixels) in enumerate(
        _segment(buffer, width, height, min_size, tolerance)
    ):
        start_x, start_y = min(pixels, key=lambda p: (p[1], p[0]))
        contour = trace_contour(pixels, width, height, start_x, start_y)
        if not contour:
            continue
        traced.append(TracedRegion(
            region_id=region_id,
            color=color,
            size=len(pixels),
            contour=simplify_contour(contour, epsilon),
        ))

    logger.debug(f"Traced {len(traced)} contours")
    return traced
