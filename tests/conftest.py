"""Pytest configuration and fixtures."""
import numpy as np
import pytest


def solid_buffer(width: int, height: int, rgba) -> np.ndarray:
    """Flat RGBA buffer filled with one color."""
    return np.tile(np.array(rgba, dtype=np.uint8), width * height)


def split_buffer(width: int, height: int, left, right, split: int) -> np.ndarray:
    """Flat RGBA buffer with columns [0, split) in `left` and the rest in `right`."""
    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[:, :split] = left
    image[:, split:] = right
    return image.reshape(-1)


@pytest.fixture
def make_solid():
    """Factory for single-color buffers."""
    return solid_buffer


@pytest.fixture
def make_split():
    """Factory for two-color vertical split buffers."""
    return split_buffer


@pytest.fixture
def red_4x4():
    """4x4 opaque red image as (buffer, width, height)."""
    return solid_buffer(4, 4, (255, 0, 0, 255)), 4, 4


@pytest.fixture
def black_white_10x10():
    """10x10 image, left half black, right half white."""
    return split_buffer(10, 10, (0, 0, 0, 255), (255, 255, 255, 255), 5), 10, 10
