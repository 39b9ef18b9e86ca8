"""chamelo - Extract image palettes and accessible banner colors"""

__version__ = "0.1.0"

from .banner import (
    BannerColors,
    BannerOptions,
    GradientDirection,
    create_gradient,
    create_soft_gradient,
    derive_banner_colors,
    find_readable_text_color,
    generate_banner_colors,
)
from .color_utils import format_color_output, parse_color
from .colors import (
    HSL,
    RGB,
    adjust_lightness,
    adjust_saturation,
    contrast_ratio,
    hsl_to_rgb,
    is_dark,
    relative_luminance,
    rgb_to_hex,
    rgb_to_hsl,
    to_rgba,
)
from .dispatch import ExtractionWorker
from .errors import ChameloError, ConfigurationError, ImageLoadError, WorkerError
from .image_loading import PixelBuffer, load_pixels
from .palette import ExtractedColor, ExtractionOptions, extract_colors, extract_palette

__all__ = [
    "extract_palette",
    "extract_colors",
    "derive_banner_colors",
    "generate_banner_colors",
    "find_readable_text_color",
    "create_gradient",
    "create_soft_gradient",
    "contrast_ratio",
    "relative_luminance",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "rgb_to_hex",
    "adjust_lightness",
    "adjust_saturation",
    "is_dark",
    "to_rgba",
    "load_pixels",
    "ExtractionWorker",
    "RGB",
    "HSL",
    "ExtractedColor",
    "ExtractionOptions",
    "BannerColors",
    "BannerOptions",
    "GradientDirection",
    "PixelBuffer",
    "ChameloError",
    "ConfigurationError",
    "ImageLoadError",
    "WorkerError",
    "parse_color",
    "format_color_output",
]
