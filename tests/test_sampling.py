"""Tests for chamelo.sampling module."""

import numpy as np
import pytest

from chamelo.errors import ConfigurationError
from chamelo.sampling import sample_pixels


def _rgba(*pixels: tuple[int, int, int, int]) -> bytes:
    return bytes(channel for pixel in pixels for channel in pixel)


class TestSamplePixels:
    """Test the sample_pixels function."""

    def test_solid_image(self, solid_rgba):
        """Test that every pixel of a small opaque image is sampled."""
        samples = sample_pixels(solid_rgba(10, 10, (255, 0, 0)), 10, 10)
        assert samples.shape == (100, 3)
        assert np.all(samples == [255, 0, 0])

    def test_empty_buffer(self):
        """Test that an empty buffer yields no samples."""
        samples = sample_pixels(b"", 0, 0)
        assert samples.shape == (0, 3)

    def test_alpha_threshold(self):
        """Test that pixels below alpha 125 are dropped."""
        buffer = _rgba((10, 20, 30, 124), (10, 20, 30, 125), (10, 20, 30, 255))
        samples = sample_pixels(buffer, 3, 1)
        assert len(samples) == 2

    def test_near_white_excluded(self):
        """Test that only pixels with every channel above 250 are dropped."""
        buffer = _rgba((251, 251, 251, 255), (251, 251, 250, 255))
        samples = sample_pixels(buffer, 2, 1)
        assert samples.tolist() == [[251, 251, 250]]

    def test_near_black_excluded(self):
        """Test that only pixels with every channel below 5 are dropped."""
        buffer = _rgba((4, 4, 4, 255), (4, 4, 5, 255))
        samples = sample_pixels(buffer, 2, 1)
        assert samples.tolist() == [[4, 4, 5]]

    def test_fully_filtered_buffer(self, solid_rgba):
        """Test that an all-white image yields no samples rather than failing."""
        samples = sample_pixels(solid_rgba(8, 8, (255, 255, 255)), 8, 8)
        assert len(samples) == 0

    def test_step_uses_quality(self):
        """Test the stride of floor(pixels / sample_size) * quality."""
        pixels = np.zeros((100, 4), dtype=np.uint8)
        pixels[:, 0] = np.arange(100)
        pixels[:, 1:3] = 100
        pixels[:, 3] = 255
        samples = sample_pixels(pixels, 100, 1, quality=3, sample_size=50)
        # step = floor(100 / 50) * 3 = 6
        assert samples[:, 0].tolist() == list(range(0, 100, 6))

    def test_small_image_ignores_quality(self, solid_rgba):
        """Test that images smaller than sample_size are read pixel by pixel."""
        samples = sample_pixels(solid_rgba(5, 5, (1, 2, 200)), 5, 5, quality=10)
        assert len(samples) == 25

    def test_accepts_numpy_arrays(self, striped_rgba):
        """Test that an (h, w, 4) array is accepted."""
        pixels = striped_rgba(4, 2, [(200, 10, 10), (10, 200, 10)])
        samples = sample_pixels(pixels, 4, 2)
        assert samples.tolist() == [[200, 10, 10]] * 4 + [[10, 200, 10]] * 4

    def test_mismatched_buffer_raises(self):
        """Test that a buffer not matching its dimensions is rejected."""
        with pytest.raises(ConfigurationError, match="expected 16"):
            sample_pixels(b"\x00" * 12, 2, 2)

    def test_negative_dimensions_raise(self):
        """Test that negative dimensions are rejected."""
        with pytest.raises(ConfigurationError):
            sample_pixels(b"", -1, 0)

    @pytest.mark.parametrize(
        "quality,sample_size",
        [(0, 10), (1, 0), (-5, 10), (1.5, 10), (1, 2.5), (True, 10), (10, None)],
    )
    def test_invalid_options_raise(self, quality, sample_size):
        """Test that non-positive and non-integer options are rejected, not clamped."""
        with pytest.raises(ConfigurationError):
            sample_pixels(b"\x00" * 4, 1, 1, quality=quality, sample_size=sample_size)
