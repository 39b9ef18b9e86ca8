"""Exception hierarchy for chamelo."""

import numbers

__all__ = [
    "ChameloError",
    "ConfigurationError",
    "ImageLoadError",
    "WorkerError",
    "check_positive_int",
]


class ChameloError(Exception):
    """Base class for every error raised by chamelo."""


class ConfigurationError(ChameloError, ValueError):
    """An option or argument violates the caller contract.

    Raised at the boundary instead of silently clamping the value. Subclasses
    ``ValueError`` so callers that already guard numeric input keep working.
    """


class ImageLoadError(ChameloError):
    """The image source could not be read or decoded.

    Distinct from an empty palette: a decodable image whose pixels are all
    filtered out is a successful extraction with no colors.
    """


class WorkerError(ChameloError):
    """The extraction worker was used outside of its start/terminate lifecycle."""


def check_positive_int(name: str, value: object) -> None:
    """Raise ``ConfigurationError`` unless ``value`` is an integer >= 1.

    Booleans are rejected even though they subclass ``int``.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
