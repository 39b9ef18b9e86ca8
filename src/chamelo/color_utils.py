"""Color string parsing and palette formatting for chamelo.

Accepted inputs are ``#RRGGBB``, ``rgb(R, G, B)`` with 8-bit channels, and
``hsl(H, S%, L%)`` / ``hsv(H, S%, V%)`` with the hue in degrees. Every parser
returns an 8-bit ``RGB`` or None when the string is not in its format.
"""

import re
from typing import Callable

import colour
import numpy as np

from .colors import HSL, RGB, hsl_to_rgb, rgb_to_hex
from .errors import ConfigurationError

__all__ = [
    "parse_hex_color",
    "parse_rgb_color",
    "parse_hsl_color",
    "parse_hsv_color",
    "parse_color",
    "format_color_output",
]

_NUMBER = r"(\d+(?:\.\d+)?)"

_HEX_PATTERN = re.compile(r"#([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})", re.IGNORECASE)
_RGB_PATTERN = re.compile(r"rgb\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)", re.IGNORECASE)


def _cylindrical_pattern(name: str) -> re.Pattern[str]:
    return re.compile(
        rf"{name}\s*\(\s*{_NUMBER}\s*,\s*{_NUMBER}\s*%\s*,\s*{_NUMBER}\s*%\s*\)",
        re.IGNORECASE,
    )


_HSL_PATTERN = _cylindrical_pattern("hsl")
_HSV_PATTERN = _cylindrical_pattern("hsv")


def _cylindrical_components(
    pattern: re.Pattern[str], color_str: str
) -> tuple[float, float, float] | None:
    """Hue in degrees plus two fractions in [0, 1], or None when out of range."""
    match = pattern.fullmatch(color_str.strip())
    if match is None:
        return None

    hue, second, third = (float(group) for group in match.groups())
    if hue > 360 or second > 100 or third > 100:
        return None
    return hue, second / 100, third / 100


def parse_hex_color(color_str: str) -> RGB | None:
    """Parse ``#RRGGBB`` (either case)."""
    match = _HEX_PATTERN.fullmatch(color_str.strip())
    if match is None:
        return None
    return RGB(*(int(pair, 16) for pair in match.groups()))


def parse_rgb_color(color_str: str) -> RGB | None:
    """Parse ``rgb(R, G, B)`` with channels in 0..255."""
    match = _RGB_PATTERN.fullmatch(color_str.strip())
    if match is None:
        return None

    channels = [int(group) for group in match.groups()]
    if any(channel > 255 for channel in channels):
        return None
    return RGB(*channels)


def parse_hsl_color(color_str: str) -> RGB | None:
    """Parse ``hsl(H, S%, L%)``."""
    components = _cylindrical_components(_HSL_PATTERN, color_str)
    if components is None:
        return None
    return hsl_to_rgb(HSL(*components))


def parse_hsv_color(color_str: str) -> RGB | None:
    """Parse ``hsv(H, S%, V%)``."""
    components = _cylindrical_components(_HSV_PATTERN, color_str)
    if components is None:
        return None

    hue, saturation, value = components
    rgb = colour.HSV_to_RGB(np.array([(hue % 360) / 360, saturation, value]))
    channels = np.clip(np.floor(np.asarray(rgb) * 255 + 0.5), 0, 255)
    return RGB(*(int(channel) for channel in channels))


_PARSERS: tuple[Callable[[str], RGB | None], ...] = (
    parse_hex_color,
    parse_rgb_color,
    parse_hsl_color,
    parse_hsv_color,
)


def parse_color(color_str: str) -> RGB:
    """Parse a color in any supported format.

    Raises:
        ValueError: If no format matches.
    """
    for parser in _PARSERS:
        result = parser(color_str)
        if result is not None:
            return result

    raise ValueError(
        f"Invalid color format: '{color_str.strip()}'. "
        "Supported formats: #RRGGBB, rgb(R,G,B), hsl(H,S%,L%), hsv(H,S%,V%)"
    )


_FORMATTERS: dict[str, Callable[[RGB], str]] = {
    "hex": rgb_to_hex,
    "rgb": lambda c: f"rgb({c.r}, {c.g}, {c.b})",
    "raw": lambda c: f"({c.r / 255:.4f}, {c.g / 255:.4f}, {c.b / 255:.4f})",
}


def format_color_output(colors: list[RGB], format_type: str = "hex") -> list[str]:
    """Format colors as hex strings, ``rgb()`` strings or normalized tuples."""
    try:
        formatter = _FORMATTERS[format_type]
    except KeyError:
        raise ConfigurationError(
            f"Unknown color format: {format_type!r}. "
            f"Expected one of: {', '.join(_FORMATTERS)}"
        ) from None
    return [formatter(color) for color in colors]
