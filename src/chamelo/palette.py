"""Palette extraction: sample, cluster and rank the dominant colors of an image.

The externally visible result is a list of ``ExtractedColor`` entries ordered
by a score that combines how much of the image a color covers with how vivid
it is, so a moderately frequent saturated color can outrank a slightly more
frequent gray.

Example:
    >>> from chamelo.palette import extract_palette
    >>> red = bytes([255, 0, 0, 255]) * 100
    >>> [c.hex for c in extract_palette(red, 10, 10, color_count=3)]
    ['#ff0000']
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from .clustering import Clustering, RandomSource, kmeans
from .colors import RGB, rgb_to_hex, rgb_to_hsl
from .errors import check_positive_int
from .sampling import sample_pixels

__all__ = [
    "ExtractedColor",
    "ExtractionOptions",
    "rank_palette",
    "extract_palette",
    "extract_colors",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractedColor:
    """One palette entry: a centroid color and its share of the samples."""

    rgb: RGB
    hex: str
    population: int
    percentage: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "rgb": self.rgb._asdict(),
            "hex": self.hex,
            "population": self.population,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class ExtractionOptions:
    """Tuning knobs for ``extract_palette``; every value must be a positive int."""

    color_count: int = 5
    quality: int = 10
    max_iterations: int = 100
    sample_size: int = 10000

    def __post_init__(self) -> None:
        for option in dataclasses.fields(self):
            check_positive_int(option.name, getattr(self, option.name))


def _score(color: ExtractedColor) -> float:
    saturation = rgb_to_hsl(color.rgb).s
    return color.percentage * (0.7 + 0.3 * saturation)


def rank_palette(clustering: Clustering) -> list[ExtractedColor]:
    """Turn clusters into palette entries, most prominent first.

    Zero-population clusters are dropped; they are seeding leftovers rather
    than colors present in the image. Ties keep cluster order.
    """
    total = sum(clustering.counts)
    if total == 0:
        return []

    colors = [
        ExtractedColor(
            rgb=centroid,
            hex=rgb_to_hex(centroid),
            population=count,
            percentage=count / total * 100,
        )
        for centroid, count in zip(clustering.centroids, clustering.counts)
        if count > 0
    ]
    return sorted(colors, key=_score, reverse=True)


def _resolve_options(
    options: ExtractionOptions | None, overrides: dict[str, Any]
) -> ExtractionOptions:
    if options is None:
        return ExtractionOptions(**overrides)
    if overrides:
        return dataclasses.replace(options, **overrides)
    return options


def extract_palette(
    pixels: Any,
    width: int,
    height: int,
    options: ExtractionOptions | None = None,
    *,
    rng: RandomSource | None = None,
    **overrides: Any,
) -> list[ExtractedColor]:
    """Extract a ranked color palette from a raw RGBA pixel buffer.

    Args:
        pixels: Row-major RGBA buffer of ``width * height`` pixels.
        width: Image width in pixels.
        height: Image height in pixels.
        options: Extraction options; keyword overrides such as
            ``color_count=3`` are applied on top of it.
        rng: Source of uniform draws for k-means++ seeding. Pass a seeded
            generator for reproducible palettes.

    Returns:
        Up to ``color_count`` colors whose percentages sum to 100. Empty when
        no pixel survives sampling, which is a valid result and not an error.

    Raises:
        ConfigurationError: On invalid options or a buffer that does not
            match its dimensions.
    """
    opts = _resolve_options(options, overrides)
    samples = sample_pixels(pixels, width, height, opts.quality, opts.sample_size)
    if len(samples) == 0:
        logger.debug("No usable pixels in %dx%d buffer", width, height)
        return []

    clustering = kmeans(samples, opts.color_count, opts.max_iterations, rng)
    palette = rank_palette(clustering)
    logger.debug(
        "Extracted %d colors from %d samples in %d iterations",
        len(palette),
        len(samples),
        clustering.iterations,
    )
    return palette


def extract_colors(
    source: Any,
    options: ExtractionOptions | None = None,
    *,
    max_dimension: int = 200,
    rng: RandomSource | None = None,
    **overrides: Any,
) -> list[ExtractedColor]:
    """Load an image and extract its palette in one call.

    ``source`` is anything ``chamelo.image_loading.load_pixels`` accepts.
    Loader failures surface as ``ImageLoadError``.
    """
    from .image_loading import load_pixels

    buffer = load_pixels(source, max_dimension=max_dimension)
    return extract_palette(
        buffer.data, buffer.width, buffer.height, options, rng=rng, **overrides
    )
