"""Preview image generation for chamelo."""

import math

import click
import matplotlib.patches as patches
import matplotlib.pyplot as plt

from .banner import BannerColors
from .colors import RGB
from .palette import ExtractedColor


def _normalized(rgb: RGB) -> tuple[float, float, float]:
    return (rgb.r / 255.0, rgb.g / 255.0, rgb.b / 255.0)


def create_palette_png(
    banner: BannerColors,
    colors: list[ExtractedColor],
    columns: int,
    output_file: str,
    tile_size: int = 16,
    tile_margin: int = 5,
) -> None:
    """Render palette tiles on the banner background and save them as PNG.

    Tiles are laid out in a grid, most prominent color first. The banner's
    background hex is written in the banner's text color along the bottom
    margin so the pair can be judged at a glance.
    """
    n_colors = len(colors)
    if n_colors == 0:
        raise ValueError("No colors provided")

    rows = math.ceil(n_colors / columns)

    w = (columns * (tile_size + tile_margin)) + tile_margin
    # Extra bottom margin holds the caption
    h = (rows * (tile_size + tile_margin)) + tile_margin + tile_size

    fig, ax = plt.subplots(figsize=(w / 100, h / 100), dpi=100)  # type: ignore[misc]

    background = _normalized(banner.background_rgb)
    fig.patch.set_facecolor(background)
    ax.set_facecolor(background)

    ax.set_xlim(0, w)
    ax.set_ylim(0, h)
    ax.axis("off")

    for i, color in enumerate(colors):
        row = i // columns
        col = i % columns

        # Flip the y-axis so the first row is drawn at the top
        x = tile_margin + col * (tile_size + tile_margin)
        y = h - tile_margin - (row + 1) * (tile_size + tile_margin)

        rect = patches.Rectangle(
            (x, y), tile_size, tile_size, linewidth=0, facecolor=_normalized(color.rgb)
        )
        ax.add_patch(rect)

    ax.text(
        tile_margin,
        tile_size / 2,
        banner.background,
        color=_normalized(banner.text_rgb),
        fontsize=6,
        va="center",
    )

    plt.tight_layout()
    plt.savefig(output_file, bbox_inches="tight", pad_inches=0, dpi=100)  # type: ignore[misc]
    plt.close()

    click.echo(f"PNG preview saved to: {output_file}")
