"""Pixel sampling for palette extraction.

Turns a raw RGBA buffer into the flat list of RGB samples the clusterer works
on. Pixels are visited at a fixed stride, and transparent, near-white and
near-black pixels are dropped since they are usually flat backgrounds that
would otherwise dominate the palette.
"""

import logging
from typing import Any

import numpy as np

from .errors import ConfigurationError, check_positive_int

__all__ = [
    "sample_pixels",
    "ALPHA_THRESHOLD",
    "NEAR_WHITE_THRESHOLD",
    "NEAR_BLACK_THRESHOLD",
]

logger = logging.getLogger(__name__)

ALPHA_THRESHOLD = 125
NEAR_WHITE_THRESHOLD = 250
NEAR_BLACK_THRESHOLD = 5


def _as_rgba_rows(pixels: Any, width: int, height: int) -> np.ndarray:
    """View a row-major RGBA buffer as an (width * height, 4) uint8 array."""
    if width < 0 or height < 0:
        raise ConfigurationError(
            f"Image dimensions must be non-negative, got {width}x{height}"
        )

    if isinstance(pixels, (bytes, bytearray, memoryview)):
        data = np.frombuffer(pixels, dtype=np.uint8)
    else:
        data = np.asarray(pixels, dtype=np.uint8).ravel()

    expected = width * height * 4
    if data.size != expected:
        raise ConfigurationError(
            f"Pixel buffer holds {data.size} bytes, expected {expected} "
            f"for a {width}x{height} RGBA image"
        )

    return data.reshape(-1, 4)


def sample_pixels(
    pixels: Any,
    width: int,
    height: int,
    quality: int = 10,
    sample_size: int = 10000,
) -> np.ndarray:
    """Down-sample an RGBA buffer into opaque, non-extreme RGB samples.

    Args:
        pixels: ``width * height`` RGBA pixels, row-major, 4 bytes per pixel.
            Accepts ``bytes``, ``bytearray``, ``memoryview`` or any array-like
            of 8-bit values.
        width: Image width in pixels.
        height: Image height in pixels.
        quality: Sampling coarseness multiplier; larger means fewer samples.
        sample_size: Target number of samples before the quality multiplier.

    Returns:
        Integer array of shape ``(n, 3)``. Empty when the buffer is empty or
        every visited pixel was filtered out.

    Raises:
        ConfigurationError: If ``quality`` or ``sample_size`` is not a positive
            integer, or
            the buffer does not match the given dimensions.
    """
    check_positive_int("quality", quality)
    check_positive_int("sample_size", sample_size)

    rgba = _as_rgba_rows(pixels, width, height)
    pixel_count = width * height
    step = max(1, (pixel_count // sample_size) * quality)

    visited = rgba[::step]
    rgb = visited[:, :3]
    opaque = visited[:, 3] >= ALPHA_THRESHOLD
    near_white = np.all(rgb > NEAR_WHITE_THRESHOLD, axis=1)
    near_black = np.all(rgb < NEAR_BLACK_THRESHOLD, axis=1)
    keep = opaque & ~near_white & ~near_black

    samples = rgb[keep].astype(np.int64)
    logger.debug(
        "Sampled %d of %d pixels (step=%d)", len(samples), pixel_count, step
    )
    return samples
