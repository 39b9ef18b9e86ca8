"""Image loading: decode an image source into the RGBA buffer the core consumes.

Images are decoded with Pillow, converted to RGBA and downscaled so the longest
side is at most ``max_dimension`` pixels (200 by default); palette extraction
does not need more detail than that.
"""

import io
import logging
import math
import os
from dataclasses import dataclass
from typing import Any, BinaryIO, Union

from PIL import Image

from .errors import ConfigurationError, ImageLoadError

__all__ = ["PixelBuffer", "load_pixels", "DEFAULT_MAX_DIMENSION"]

logger = logging.getLogger(__name__)

DEFAULT_MAX_DIMENSION = 200

ImageSource = Union[str, "os.PathLike[str]", bytes, bytearray, BinaryIO, Image.Image]


@dataclass(frozen=True)
class PixelBuffer:
    """Row-major RGBA pixels, 4 bytes per pixel."""

    data: bytes
    width: int
    height: int


def _describe(source: Any) -> str:
    if isinstance(source, (str, os.PathLike)):
        return f"'{os.fspath(source)}'"
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    return repr(source)


def _scaled_size(width: int, height: int, max_dimension: int) -> tuple[int, int]:
    scale = min(1.0, max_dimension / max(width, height))
    return max(1, math.floor(width * scale)), max(1, math.floor(height * scale))


def _to_rgba(image: Image.Image, max_dimension: int) -> PixelBuffer:
    if image.width == 0 or image.height == 0:
        # Nothing to sample; extraction turns this into an empty palette
        return PixelBuffer(b"", image.width, image.height)

    rgba = image.convert("RGBA")
    size = _scaled_size(rgba.width, rgba.height, max_dimension)
    if size != rgba.size:
        rgba = rgba.resize(size, Image.Resampling.BILINEAR)
    return PixelBuffer(rgba.tobytes(), rgba.width, rgba.height)


def load_pixels(
    source: ImageSource, max_dimension: int = DEFAULT_MAX_DIMENSION
) -> PixelBuffer:
    """Decode an image into an RGBA ``PixelBuffer``.

    Args:
        source: A file path, encoded image bytes, a binary file object, or an
            already opened ``PIL.Image.Image``.
        max_dimension: Longest side of the returned buffer in pixels. Smaller
            images are left at their original size.

    Returns:
        PixelBuffer: The decoded, possibly downscaled, pixels.

    Raises:
        ConfigurationError: If ``max_dimension`` is below 1.
        ImageLoadError: If the source cannot be opened or decoded.
    """
    if max_dimension < 1:
        raise ConfigurationError(f"max_dimension must be >= 1, got {max_dimension}")

    if isinstance(source, Image.Image):
        return _to_rgba(source, max_dimension)

    stream = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
    try:
        with Image.open(stream) as image:
            image.load()
            buffer = _to_rgba(image, max_dimension)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageLoadError(f"Could not load image {_describe(source)}: {e}") from e

    logger.debug(
        "Loaded %s as %dx%d RGBA", _describe(source), buffer.width, buffer.height
    )
    return buffer
