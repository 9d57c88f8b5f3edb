"""Dominant color extraction with a fixed-iteration k-means."""
import logging
from typing import List, Sequence

import numpy as np

from paintguide.color_utils import (
    hex_to_rgb,
    pixel_rows,
    rgb_to_hex,
    round_half_up,
    validate_buffer,
)
from paintguide.palette_matcher import find_closest_palette_color
from paintguide.types import DominantColor

logger = logging.getLogger(__name__)

# Refinement passes are capped for interactive latency, not run to convergence
KMEANS_ITERATIONS = 3

# Samples per distance batch
ASSIGN_CHUNK = 65536


def sample_pixels(buffer, width: int, height: int, sample_stride: int = 4) -> np.ndarray:
    """
    Take every `sample_stride`-th pixel of an RGBA buffer.

    Returns:
        (n, 4) uint8 array of sampled pixels
    """
    if sample_stride < 1:
        raise ValueError(f"sample_stride must be >= 1, got {sample_stride}")
    array = validate_buffer(buffer, width, height)
    return pixel_rows(array)[::sample_stride]


def init_centroids(samples: np.ndarray, num_colors: int) -> np.ndarray:
    """
    Seed centroids at evenly spaced sample indices i * floor(n / k).

    With fewer samples than requested colors, every sample becomes a seed.
    """
    n = len(samples)
    if n == 0:
        return np.zeros((0, 3), dtype=np.int64)
    step = max(n // num_colors, 1)
    indices = [i * step for i in range(num_colors) if i * step < n]
    return samples[indices, :3].astype(np.int64)


def assign_to_centroids(samples: np.ndarray, centroids: np.ndarray,
                        chunk_size: int = ASSIGN_CHUNK) -> np.ndarray:
    """Index of the nearest centroid (Euclidean RGB) for every sample; ties go to the lowest index."""
    labels = np.empty(len(samples), dtype=np.int64)
    for start in range(0, len(samples), chunk_size):
        chunk = samples[start:start + chunk_size, :3].astype(np.int64)
        diff = chunk[:, None, :] - centroids[None, :, :]
        distances = np.einsum("ijk,ijk->ij", diff, diff)
        labels[start:start + chunk_size] = np.argmin(distances, axis=1)
    return labels


def kmeans_colors(samples: np.ndarray, num_colors: int,
                  iterations: int = KMEANS_ITERATIONS) -> np.ndarray:
    """
    Approximate k-means over RGB samples.

    Each pass assigns samples to the nearest centroid and moves every
    centroid to the rounded mean of its members. Empty clusters keep
    their previous value.

    Args:
        samples: (n, >=3) sample array
        num_colors: Requested number of clusters
        iterations: Number of refinement passes

    Returns:
        (m, 3) int array of centroids, m <= num_colors
    """
    centroids = init_centroids(samples, num_colors)
    if len(centroids) == 0:
        return centroids

    rgb = samples[:, :3].astype(np.int64)
    k = len(centroids)

    for _ in range(iterations):
        labels = assign_to_centroids(rgb, centroids)
        counts = np.bincount(labels, minlength=k)
        new_centroids = centroids.copy()
        occupied = counts > 0
        for channel in range(3):
            sums = np.bincount(labels, weights=rgb[:, channel], minlength=k)
            means = round_half_up(sums[occupied] / counts[occupied])
            new_centroids[occupied, channel] = means.astype(np.int64)
        centroids = new_centroids

    return centroids


def extract_dominant_colors(
    buffer,
    width: int,
    height: int,
    num_colors: int = 5,
    sample_stride: int = 4
) -> List[DominantColor]:
    """
    Extract dominant colors from an RGBA buffer.

    Args:
        buffer: RGBA pixel buffer
        width: Image width
        height: Image height
        num_colors: Number of colors to find (must be >= 1)
        sample_stride: Read one pixel every `sample_stride` pixels

    Returns:
        At most `num_colors` colors with uppercase hex codes

    Raises:
        BufferGeometryError: If buffer geometry is invalid
        ValueError: If num_colors < 1
    """
    if num_colors < 1:
        raise ValueError(f"num_colors must be >= 1, got {num_colors}")

    samples = sample_pixels(buffer, width, height, sample_stride)
    logger.debug(f"Clustering {len(samples)} samples into {num_colors} colors")

    centroids = kmeans_colors(samples, num_colors)

    return [
        DominantColor(r=int(r), g=int(g), b=int(b), hex=rgb_to_hex(r, g, b))
        for r, g, b in centroids
    ]


def snap_colors_to_palette(
    colors: List[DominantColor],
    palette_hex_colors: Sequence[str]
) -> List[DominantColor]:
    """
    Replace each color with its nearest base palette color.

    Args:
        colors: Extracted colors
        palette_hex_colors: Base palette as hex strings

    Returns:
        New list; input is returned as copies when the palette is empty
    """
    snapped = []
    for color in colors:
        if not palette_hex_colors:
            snapped.append(DominantColor(color.r, color.g, color.b, color.hex))
            continue
        closest = find_closest_palette_color(color.r, color.g, color.b, palette_hex_colors)
        r, g, b = hex_to_rgb(closest)
        snapped.append(DominantColor(r=r, g=g, b=b, hex=rgb_to_hex(r, g, b)))
    return snapped
