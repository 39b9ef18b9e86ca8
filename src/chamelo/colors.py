"""Color science primitives for chamelo.

This module holds the stateless conversions and accessibility measurements the
rest of the package builds on: RGB/HSL conversion, WCAG 2.0 relative luminance
and contrast ratio, and a handful of small helpers for nudging a color's
lightness or saturation.

Colors are exchanged as 8-bit ``RGB`` tuples (0-255 per channel) and ``HSL``
tuples (hue in degrees, saturation and lightness in [0, 1]). Any value produced
by arithmetic is rounded half-up and clamped back into the 8-bit range.

Dependencies:
    - colour-science: cylindrical RGB <-> HSL conversions
    - numpy: array plumbing for colour-science

Standards Compliance:
    - WCAG 2.0 Level AA: 4.5:1 minimum contrast ratio for normal text
    - sRGB color space: Standard RGB color space with gamma correction

Example:
    >>> from chamelo.colors import RGB, contrast_ratio
    >>> contrast_ratio(RGB(0, 0, 0), RGB(255, 255, 255))
    21.0
"""

import math
import warnings
from typing import NamedTuple

import colour
import numpy as np

__all__ = [
    "RGB",
    "HSL",
    "BLACK",
    "WHITE",
    "rgb_to_hex",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "relative_luminance",
    "contrast_ratio",
    "adjust_lightness",
    "adjust_saturation",
    "is_dark",
    "to_rgba",
]


class RGB(NamedTuple):
    """An 8-bit sRGB color."""

    r: int
    g: int
    b: int


class HSL(NamedTuple):
    """A color in HSL space: hue in degrees [0, 360), s and l in [0, 1]."""

    h: float
    s: float
    l: float  # noqa: E741


BLACK = RGB(0, 0, 0)
WHITE = RGB(255, 255, 255)


def _clamp_channel(value: float) -> int:
    """Round half-up and clamp a channel value into 0-255."""
    return int(min(255, max(0, math.floor(value + 0.5))))


def rgb_to_hex(rgb: RGB) -> str:
    """Format a color as a lowercase ``#rrggbb`` string."""
    r, g, b = (_clamp_channel(c) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def rgb_to_hsl(rgb: RGB) -> HSL:
    """Convert an 8-bit RGB color to HSL.

    Achromatic colors (all channels equal) map to hue 0 and saturation 0.

    Examples:
        >>> rgb_to_hsl(RGB(255, 0, 0))
        HSL(h=0.0, s=1.0, l=0.5)
        >>> rgb_to_hsl(RGB(128, 128, 128)).s
        0.0
    """
    normalized = np.array(rgb, dtype=float) / 255.0
    maximum = float(np.max(normalized))
    minimum = float(np.min(normalized))
    if maximum == minimum:
        return HSL(0.0, 0.0, (maximum + minimum) / 2)

    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        h, s, lightness = colour.RGB_to_HSL(normalized)

    return HSL((float(h) * 360.0) % 360.0, float(s), float(lightness))


def hsl_to_rgb(hsl: HSL) -> RGB:
    """Convert an HSL color back to 8-bit RGB.

    Hue wraps modulo 360; saturation and lightness are expected in [0, 1].
    """
    h, s, lightness = hsl
    if s == 0:
        value = _clamp_channel(lightness * 255)
        return RGB(value, value, value)

    hsl_array = np.array([(h % 360.0) / 360.0, s, lightness], dtype=float)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        rgb = colour.HSL_to_RGB(hsl_array)

    r, g, b = (_clamp_channel(c * 255) for c in rgb)
    return RGB(r, g, b)


def relative_luminance(rgb: RGB) -> float:
    """Compute the relative luminance of an 8-bit sRGB color per WCAG 2.0.

    Each channel is normalized to [0, 1] and linearized with the sRGB transfer
    function before being weighted by the eye's sensitivity to red, green and
    blue light.

    Args:
        rgb: Color as three 8-bit channels. Any sequence of three numbers
            works, ``RGB`` tuples are the usual input.

    Returns:
        float: Relative luminance in [0.0, 1.0]; 0.0 for black and 1.0 for
            white.

    Algorithm Details:
        Linearization (gamma correction):
        - For c <= 0.03928: linear_c = c / 12.92
        - For c > 0.03928: linear_c = ((c + 0.055) / 1.055)^2.4

        Luminance calculation:
        - L = 0.2126 x R_linear + 0.7152 x G_linear + 0.0722 x B_linear

    Examples:
        >>> relative_luminance(RGB(0, 0, 0))
        0.0
        >>> relative_luminance(RGB(255, 255, 255))
        1.0
        >>> round(relative_luminance(RGB(255, 0, 0)), 4)
        0.2126

    References:
        - WCAG 2.0: https://www.w3.org/TR/WCAG20/#relativeluminancedef
    """
    def linearize(c: float) -> float:
        c = c / 255.0
        if c <= 0.03928:
            return c / 12.92
        return ((c + 0.055) / 1.055) ** 2.4

    r, g, b = rgb
    r_lin = linearize(r)
    g_lin = linearize(g)
    b_lin = linearize(b)
    return 0.2126 * r_lin + 0.7152 * g_lin + 0.0722 * b_lin


def contrast_ratio(rgb1: RGB, rgb2: RGB) -> float:
    """Calculate the WCAG 2.0 contrast ratio between two colors.

    The ratio is order-independent and always in [1.0, 21.0].

    Algorithm:
        ratio = (L_lighter + 0.05) / (L_darker + 0.05)

    Examples:
        >>> contrast_ratio(BLACK, WHITE)
        21.0
        >>> contrast_ratio(RGB(10, 20, 30), RGB(10, 20, 30))
        1.0

    WCAG Compliance Levels:
        - Level AA Normal Text: >= 4.5:1
        - Level AA Large Text: >= 3.0:1
        - Level AAA Normal Text: >= 7.0:1

    References:
        - WCAG 2.0 Section 1.4.3: https://www.w3.org/TR/WCAG20/#contrast-ratiodef
    """
    l1 = relative_luminance(rgb1)
    l2 = relative_luminance(rgb2)
    light = max(l1, l2)
    dark = min(l1, l2)
    return (light + 0.05) / (dark + 0.05)


def adjust_lightness(rgb: RGB, amount: float) -> RGB:
    """Shift a color's HSL lightness by ``amount``, clamped to [0, 1]."""
    h, s, lightness = rgb_to_hsl(rgb)
    return hsl_to_rgb(HSL(h, s, max(0.0, min(1.0, lightness + amount))))


def adjust_saturation(rgb: RGB, amount: float) -> RGB:
    """Shift a color's HSL saturation by ``amount``, clamped to [0, 1]."""
    h, s, lightness = rgb_to_hsl(rgb)
    return hsl_to_rgb(HSL(h, max(0.0, min(1.0, s + amount)), lightness))


def is_dark(rgb: RGB) -> bool:
    """Return True when the color's relative luminance is below 0.5."""
    return relative_luminance(rgb) < 0.5


def to_rgba(rgb: RGB, alpha: float) -> str:
    """Format a CSS ``rgba()`` string for a translucent overlay."""
    r, g, b = rgb
    return f"rgba({r}, {g}, {b}, {alpha:g})"
