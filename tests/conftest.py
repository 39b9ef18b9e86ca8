"""Test configuration and fixtures for chamelo tests."""

from typing import Callable, Iterable

import numpy as np
import pytest
from PIL import Image

from chamelo.colors import RGB
from chamelo.palette import ExtractedColor


class SequenceRandom:
    """Random source that replays a fixed sequence of draws."""

    def __init__(self, values: Iterable[float]):
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self._values[self.calls % len(self._values)]
        self.calls += 1
        return value


@pytest.fixture
def sequence_random() -> Callable[..., SequenceRandom]:
    """Build a random source replaying the given draws."""
    return lambda *values: SequenceRandom(values)


@pytest.fixture
def solid_rgba() -> Callable[..., bytes]:
    """Build a width x height RGBA buffer filled with one color."""

    def build(width: int, height: int, rgb: tuple[int, int, int], alpha: int = 255) -> bytes:
        return bytes([*rgb, alpha]) * (width * height)

    return build


@pytest.fixture
def striped_rgba() -> Callable[..., np.ndarray]:
    """Build an RGBA array whose rows cycle through the given colors."""

    def build(width: int, height: int, colors: list[tuple[int, int, int]]) -> np.ndarray:
        pixels = np.zeros((height, width, 4), dtype=np.uint8)
        for row in range(height):
            pixels[row, :, :3] = colors[row % len(colors)]
        pixels[:, :, 3] = 255
        return pixels

    return build


@pytest.fixture
def make_color() -> Callable[..., ExtractedColor]:
    """Build an ExtractedColor with a matching hex string."""

    def build(rgb: tuple[int, int, int], percentage: float, population: int = 1) -> ExtractedColor:
        r, g, b = rgb
        return ExtractedColor(
            rgb=RGB(r, g, b),
            hex=f"#{r:02x}{g:02x}{b:02x}",
            population=population,
            percentage=percentage,
        )

    return build


@pytest.fixture
def image_file(tmp_path) -> Callable[..., str]:
    """Write a solid-color PNG and return its path."""

    def build(
        rgb: tuple[int, int, int] = (255, 0, 0),
        size: tuple[int, int] = (10, 10),
        name: str = "image.png",
    ) -> str:
        path = tmp_path / name
        Image.new("RGB", size, rgb).save(path)
        return str(path)

    return build


@pytest.fixture
def known_luminance_values() -> list[tuple[RGB, float]]:
    """Provide colors with known luminance values for testing."""
    return [
        (RGB(0, 0, 0), 0.0),
        (RGB(255, 255, 255), 1.0),
        (RGB(255, 0, 0), 0.2126),
        (RGB(0, 255, 0), 0.7152),
        (RGB(0, 0, 255), 0.0722),
    ]


@pytest.fixture(autouse=True)
def reset_random_seed():
    """Reset numpy random seed before each test for reproducibility."""
    np.random.seed(42)
