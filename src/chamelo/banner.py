"""Banner color selection: background, readable text, gradient and accent.

Given a ranked palette this module picks the entry best suited as a banner
background, searches for a text color that meets a WCAG contrast threshold
against it, and builds CSS gradient strings from the palette.

Key Features:
    - Heuristic background scoring favoring moderately saturated, mid-lightness
      colors
    - WCAG AA text color search (4.5:1 by default) with a same-hue fallback
    - Linear gradients from up to three palette colors, or a soft gradient
      synthesized from a single color
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Literal, get_args

from .colors import (
    BLACK,
    HSL,
    RGB,
    WHITE,
    contrast_ratio,
    hsl_to_rgb,
    relative_luminance,
    rgb_to_hex,
    rgb_to_hsl,
)
from .errors import ConfigurationError
from .palette import ExtractedColor

__all__ = [
    "BannerColors",
    "BannerOptions",
    "GradientDirection",
    "DEFAULT_BACKGROUND",
    "select_banner_background",
    "find_readable_text_color",
    "create_gradient",
    "create_soft_gradient",
    "derive_banner_colors",
    "generate_banner_colors",
]

logger = logging.getLogger(__name__)

GradientDirection = Literal["horizontal", "vertical", "diagonal"]

DEFAULT_BACKGROUND = RGB(26, 26, 26)

_DIRECTION_KEYWORDS: dict[str, str] = {
    "horizontal": "to right",
    "vertical": "to bottom",
    "diagonal": "to bottom right",
}


def _direction_keyword(direction: str) -> str:
    try:
        return _DIRECTION_KEYWORDS[direction]
    except KeyError:
        raise ConfigurationError(
            f"Unknown gradient direction: {direction!r}. "
            f"Expected one of: {', '.join(get_args(GradientDirection))}"
        ) from None


def _check_contrast_threshold(min_contrast_ratio: float) -> None:
    if not 1.0 <= min_contrast_ratio <= 21.0:
        raise ConfigurationError(
            f"Minimum contrast ratio must be between 1 and 21, got {min_contrast_ratio}"
        )


@dataclass(frozen=True)
class BannerOptions:
    """Options for ``derive_banner_colors``."""

    prefer_dark: bool = False
    use_gradient: bool = True
    gradient_direction: GradientDirection = "horizontal"
    min_contrast_ratio: float = 4.5

    def __post_init__(self) -> None:
        _direction_keyword(self.gradient_direction)
        _check_contrast_threshold(self.min_contrast_ratio)


@dataclass(frozen=True)
class BannerColors:
    """Background/text pair for a banner, with optional gradient and accent."""

    background: str
    background_rgb: RGB
    text: str
    text_rgb: RGB
    gradient: str | None = None
    accent: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting absent optional entries."""
        result: dict[str, Any] = {
            "background": self.background,
            "backgroundRgb": self.background_rgb._asdict(),
            "text": self.text,
            "textRgb": self.text_rgb._asdict(),
        }
        if self.gradient is not None:
            result["gradient"] = self.gradient
        if self.accent is not None:
            result["accent"] = self.accent
        return result


def _background_score(color: ExtractedColor, prefer_dark: bool) -> float:
    _, saturation, lightness = rgb_to_hsl(color.rgb)
    score = color.percentage

    if 0.2 < saturation < 0.8:
        score *= 1.3

    if lightness < 0.15 or lightness > 0.85:
        score *= 0.5

    if prefer_dark and lightness < 0.5:
        score *= 1.2
    elif not prefer_dark and 0.3 < lightness < 0.7:
        score *= 1.2

    return score


def select_banner_background(
    colors: list[ExtractedColor], prefer_dark: bool = False
) -> ExtractedColor | None:
    """Pick the palette entry best suited as a banner background.

    Each color starts from its percentage and is then boosted when moderately
    saturated (x1.3), penalized when near black or white (x0.5), and boosted
    when its lightness matches the requested tone (x1.2). The first color
    wins on equal scores.

    Returns:
        The chosen color, or None for an empty palette.
    """
    if not colors:
        return None
    return max(colors, key=lambda color: _background_score(color, prefer_dark))


def find_readable_text_color(
    background_color: RGB, min_contrast_ratio: float = 4.5
) -> RGB:
    """Find a text color that is readable on ``background_color``.

    Pure white and pure black are tried first; white wins when it meets the
    threshold and contrasts at least as much as black. Otherwise a low
    saturation probe sharing the background's hue is scanned: from lightness
    1.0 down to 0.5 on dark backgrounds (luminance < 0.5), from 0.0 up to 0.5
    on light ones, in 0.05 steps.

    Args:
        background_color: Background as 8-bit RGB.
        min_contrast_ratio: Required WCAG contrast ratio; 4.5 is AA for body
            text, 3.0 is AA for large text.

    Returns:
        RGB: The text color.

    Note:
        When no probe reaches the threshold the result is white on dark
        backgrounds and black on light ones. That fallback is best effort and
        does not meet ``min_contrast_ratio``; callers that need a hard
        guarantee should check ``contrast_ratio`` on the result.

    Raises:
        ConfigurationError: If ``min_contrast_ratio`` is outside [1, 21].
    """
    _check_contrast_threshold(min_contrast_ratio)

    white_contrast = contrast_ratio(background_color, WHITE)
    black_contrast = contrast_ratio(background_color, BLACK)

    if white_contrast >= min_contrast_ratio and white_contrast >= black_contrast:
        return WHITE
    if black_contrast >= min_contrast_ratio:
        return BLACK

    hue, saturation, _ = rgb_to_hsl(background_color)
    probe_saturation = min(0.1, saturation)

    if relative_luminance(background_color) < 0.5:
        lightness_levels = [1.0 - step * 0.05 for step in range(11)]
        fallback = WHITE
    else:
        lightness_levels = [step * 0.05 for step in range(11)]
        fallback = BLACK

    for lightness in lightness_levels:
        candidate = hsl_to_rgb(HSL(hue, probe_saturation, lightness))
        if contrast_ratio(background_color, candidate) >= min_contrast_ratio:
            return candidate

    logger.debug(
        "No text color reaches %.2f:1 on %s, falling back to %s",
        min_contrast_ratio,
        rgb_to_hex(background_color),
        rgb_to_hex(fallback),
    )
    return fallback


def create_gradient(
    colors: list[ExtractedColor], direction: GradientDirection = "horizontal"
) -> str:
    """Build a CSS linear gradient from up to the first three colors.

    Returns ``"transparent"`` for no colors and the plain hex for a single
    color. Stops are evenly spaced from 0% to 100%.

    Example:
        >>> from chamelo.palette import ExtractedColor
        >>> red = ExtractedColor(RGB(255, 0, 0), "#ff0000", 60, 60.0)
        >>> blue = ExtractedColor(RGB(0, 0, 255), "#0000ff", 40, 40.0)
        >>> create_gradient([red, blue])
        'linear-gradient(to right, #ff0000 0%, #0000ff 100%)'
    """
    keyword = _direction_keyword(direction)
    if not colors:
        return "transparent"
    if len(colors) == 1:
        return colors[0].hex

    selected = colors[:3]
    last = len(selected) - 1
    stops = ", ".join(
        f"{color.hex} {i / last * 100:g}%" for i, color in enumerate(selected)
    )
    return f"linear-gradient({keyword}, {stops})"


def create_soft_gradient(
    base_color: RGB, direction: GradientDirection = "horizontal"
) -> str:
    """Build a three-stop gradient around a single color.

    The first stop is 10% more saturated and 15% lighter (lightness capped at
    0.9), the middle stop is the base color, and the last stop shifts the hue
    by 10 degrees and is 15% darker (lightness floored at 0.1).
    """
    keyword = _direction_keyword(direction)
    hue, saturation, lightness = rgb_to_hsl(base_color)

    lighter = hsl_to_rgb(
        HSL(hue, min(1.0, saturation * 1.1), min(0.9, lightness * 1.15))
    )
    shifted = hsl_to_rgb(
        HSL((hue + 10) % 360, saturation, max(0.1, lightness * 0.85))
    )

    return (
        f"linear-gradient({keyword}, {rgb_to_hex(lighter)}, "
        f"{rgb_to_hex(base_color)}, {rgb_to_hex(shifted)})"
    )


def derive_banner_colors(
    colors: list[ExtractedColor],
    options: BannerOptions | None = None,
    **overrides: Any,
) -> BannerColors:
    """Derive banner colors from a ranked palette.

    Args:
        colors: Palette as returned by ``extract_palette``.
        options: Banner options; keyword overrides such as
            ``prefer_dark=True`` are applied on top of it.

    Returns:
        BannerColors: For an empty palette, a ``#1a1a1a`` background with
            white text and neither gradient nor accent. Otherwise the selected
            background, a readable text color, a gradient when
            ``use_gradient`` is set, and the second-ranked color as accent
            when there are at least two colors.
    """
    if options is None:
        opts = BannerOptions(**overrides)
    elif overrides:
        opts = dataclasses.replace(options, **overrides)
    else:
        opts = options

    selected = select_banner_background(colors, opts.prefer_dark)
    if selected is None:
        return BannerColors(
            background=rgb_to_hex(DEFAULT_BACKGROUND),
            background_rgb=DEFAULT_BACKGROUND,
            text=rgb_to_hex(WHITE),
            text_rgb=WHITE,
        )

    text_rgb = find_readable_text_color(selected.rgb, opts.min_contrast_ratio)

    gradient = None
    if opts.use_gradient:
        if len(colors) >= 2:
            gradient = create_gradient(colors[:3], opts.gradient_direction)
        else:
            gradient = create_soft_gradient(selected.rgb, opts.gradient_direction)

    accent = colors[1].hex if len(colors) >= 2 else None

    logger.debug(
        "Selected banner background %s with text %s",
        selected.hex,
        rgb_to_hex(text_rgb),
    )
    return BannerColors(
        background=selected.hex,
        background_rgb=selected.rgb,
        text=rgb_to_hex(text_rgb),
        text_rgb=text_rgb,
        gradient=gradient,
        accent=accent,
    )


generate_banner_colors = derive_banner_colors
