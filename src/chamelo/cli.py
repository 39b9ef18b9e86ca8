"""Command-line interface for chamelo."""

import json
import logging
import sys

import click
import numpy as np

from . import __version__
from .banner import BannerOptions, derive_banner_colors, find_readable_text_color
from .color_utils import format_color_output, parse_color
from .colors import contrast_ratio, rgb_to_hex
from .errors import ChameloError
from .image_generation import create_palette_png
from .image_loading import load_pixels
from .palette import ExtractionOptions, extract_palette


@click.group()
@click.version_option(version=__version__, prog_name="chamelo")
@click.option("-v", "--verbose", is_flag=True, help="Log pipeline details to stderr")
def main(verbose: bool) -> None:
    """Extract image palettes and accessible banner colors."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


@main.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-n",
    "--colors",
    "color_count",
    type=click.IntRange(1, 32),
    default=5,
    help="Number of palette colors to extract (default: 5)",
)
@click.option(
    "-q",
    "--quality",
    type=click.IntRange(min=1),
    default=10,
    help="Sampling coarseness; higher is faster and rougher (default: 10)",
)
@click.option(
    "--max-iterations",
    type=click.IntRange(min=1),
    default=100,
    help="Upper bound on k-means iterations (default: 100)",
)
@click.option(
    "--sample-size",
    type=click.IntRange(min=1),
    default=10000,
    help="Target number of sampled pixels (default: 10000)",
)
@click.option(
    "--max-dimension",
    type=click.IntRange(min=1),
    default=200,
    help="Downscale the image so its longest side fits (default: 200)",
)
@click.option(
    "--prefer-dark", is_flag=True, help="Favor dark banner backgrounds"
)
@click.option(
    "--gradient/--no-gradient",
    "use_gradient",
    default=True,
    help="Include a CSS gradient in the banner colors (default: on)",
)
@click.option(
    "-d",
    "--direction",
    type=click.Choice(["horizontal", "vertical", "diagonal"], case_sensitive=False),
    default="horizontal",
    help="Gradient direction (default: horizontal)",
)
@click.option(
    "--contrast-ratio",
    "min_contrast",
    type=click.FloatRange(1.0, 21.0),
    default=4.5,
    help="Minimum text contrast ratio (default: 4.5, WCAG AA)",
)
@click.option(
    "-f",
    "--format",
    type=click.Choice(["hex", "rgb", "raw"], case_sensitive=False),
    default="hex",
    help="Output format for colors (default: hex)",
)
@click.option(
    "-F",
    "--output-format",
    type=click.Choice(["grid", "json", "png"], case_sensitive=False),
    default="grid",
    help="Output format (default: grid)",
)
@click.option(
    "-c",
    "--columns",
    type=click.IntRange(1, 32),
    default=5,
    help="Number of columns for the PNG preview (default: 5)",
)
@click.option(
    "-o", "--output", type=str, help="Output file path (required for PNG format)"
)
@click.option("--seed", type=int, help="Seed for reproducible palettes")
def extract(
    image: str,
    color_count: int,
    quality: int,
    max_iterations: int,
    sample_size: int,
    max_dimension: int,
    prefer_dark: bool,
    use_gradient: bool,
    direction: str,
    min_contrast: float,
    format: str,
    output_format: str,
    columns: int,
    output: str,
    seed: int | None,
) -> None:
    """Extract a palette and banner colors from IMAGE.

    Examples:

        chamelo extract photo.jpg

        chamelo extract photo.jpg -n 8 --prefer-dark

        chamelo extract photo.jpg -F json --seed 42

        chamelo extract photo.jpg -F png -o preview.png
    """
    try:
        buffer = load_pixels(image, max_dimension=max_dimension)
        options = ExtractionOptions(
            color_count=color_count,
            quality=quality,
            max_iterations=max_iterations,
            sample_size=sample_size,
        )
        palette = extract_palette(
            buffer.data,
            buffer.width,
            buffer.height,
            options,
            rng=np.random.default_rng(seed),
        )
        banner = derive_banner_colors(
            palette,
            BannerOptions(
                prefer_dark=prefer_dark,
                use_gradient=use_gradient,
                gradient_direction=direction.lower(),  # type: ignore[arg-type]
                min_contrast_ratio=min_contrast,
            ),
        )

        formatted_colors = format_color_output(
            [color.rgb for color in palette], format.lower()
        )

        if output_format == "json":
            data = {
                "palette": [
                    {
                        "color": formatted,
                        "population": color.population,
                        "percentage": color.percentage,
                    }
                    for formatted, color in zip(formatted_colors, palette)
                ],
                "banner": banner.to_dict(),
            }
            click.echo(json.dumps(data, indent=2))
        elif output_format == "png":
            if not output:
                click.echo("Error: PNG output requires -o/--output filename", err=True)
                sys.exit(1)

            if not palette:
                click.echo("Error: No colors found to render", err=True)
                sys.exit(1)

            create_palette_png(banner, palette, columns, output)
        else:  # grid format
            click.echo(f"Extracted {len(palette)} colors from {image}:")
            click.echo()
            for formatted, color in zip(formatted_colors, palette):
                click.echo(f"  {formatted:24}{color.percentage:6.1f}%")

            click.echo()
            click.echo("Banner:")
            click.echo(f"  background  {banner.background}")
            click.echo(
                f"  text        {banner.text} "
                f"({contrast_ratio(banner.background_rgb, banner.text_rgb):.2f}:1)"
            )
            if banner.gradient:
                click.echo(f"  gradient    {banner.gradient}")
            if banner.accent:
                click.echo(f"  accent      {banner.accent}")

    except (ValueError, ChameloError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option(
    "-b",
    "--background-color",
    required=True,
    help=(
        "Background color in format: #RRGGBB, rgb(R,G,B), hsl(H,S%,L%), or hsv(H,S%,V%)"
    ),
)
@click.option(
    "-t",
    "--text-color",
    help="Text color to check; a readable one is suggested when omitted",
)
@click.option(
    "--contrast-ratio",
    "min_contrast",
    type=click.FloatRange(1.0, 21.0),
    default=4.5,
    help=(
        "Minimum contrast ratio for WCAG compliance (default: 4.5). "
        "Common values: 3.0 (AA large text), 4.5 (AA normal text), "
        "7.0 (AAA normal text)"
    ),
)
def contrast(background_color: str, text_color: str | None, min_contrast: float) -> None:
    """Check or suggest a readable text color for a background.

    Examples:

        chamelo contrast -b "#336699"

        chamelo contrast -b "#ffffff" -t "rgb(120, 120, 120)"

        chamelo contrast -b "hsl(200, 60%, 40%)" --contrast-ratio 7.0
    """
    try:
        bg_rgb = parse_color(background_color)
        if text_color is None:
            fg_rgb = find_readable_text_color(bg_rgb, min_contrast)
        else:
            fg_rgb = parse_color(text_color)

        ratio = contrast_ratio(bg_rgb, fg_rgb)
        verdict = "passes" if ratio >= min_contrast else "fails"

        click.echo(f"Background: {rgb_to_hex(bg_rgb)}")
        click.echo(f"Text:       {rgb_to_hex(fg_rgb)}")
        click.echo(f"Contrast:   {ratio:.2f}:1 ({verdict} {min_contrast:g}:1)")

    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
