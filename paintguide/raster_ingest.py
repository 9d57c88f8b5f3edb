"""Raster image loading and saving as flat RGBA buffers."""
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image
from PIL import ImageOps

from paintguide.color_utils import validate_buffer
from paintguide.types import ImageLoadError, RasterImage


def load_rgba(path: Union[str, Path]) -> RasterImage:
    """
    Load an image file as a flat RGBA buffer.

    Args:
        path: Path to image file

    Returns:
        RasterImage with a uint8 buffer of length width * height * 4

    Raises:
        FileNotFoundError: If file doesn't exist
        ImageLoadError: If file cannot be decoded
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    if not path.is_file():
        raise ImageLoadError(f"Path is not a file: {path}")

    try:
        with Image.open(path) as img:
            # Apply EXIF orientation transformation to handle rotation
            img = ImageOps.exif_transpose(img)
            if img.mode != 'RGBA':
                img = img.convert('RGBA')
            width, height = img.size
            buffer = np.asarray(img, dtype=np.uint8).reshape(-1).copy()
    except (IOError, OSError) as e:
        raise ImageLoadError(f"Failed to load image {path}: {e}") from e

    return RasterImage(buffer=buffer, width=width, height=height, path=str(path))


def buffer_to_image(buffer, width: int, height: int) -> Image.Image:
    """Wrap an RGBA buffer as a PIL image."""
    array = validate_buffer(buffer, width, height)
    return Image.fromarray(array.reshape(height, width, 4))


def save_rgba(buffer, width: int, height: int, path: Union[str, Path]) -> Path:
    """
    Save an RGBA buffer to an image file; format follows the suffix.

    Returns:
        The output path
    """
    path = Path(path)
    image = buffer_to_image(buffer, width, height)
    if path.suffix.lower() in ('.jpg', '.jpeg'):
        image = image.convert('RGB')
    image.save(path)
    return path
