"""Command-line interface for adaptive-ticks.

This module provides the Click-based CLI for computing axis ticks and rendering
data files to PNG plots.
"""

import json
from pathlib import Path

import click
import numpy as np

from adaptive_ticks.core.config import DEFAULTS, TickConfig
from adaptive_ticks.core.state import PlotMode, PlotState
from adaptive_ticks.rendering.plot_renderer import PlotRenderer
from adaptive_ticks.ticks.generator import generate_ticks, normalize_range

_MODE_CHOICES = {"line": PlotMode.LINE, "scatter": PlotMode.SCATTER, "hist": PlotMode.HISTOGRAM}


def load_series(path: Path) -> tuple[np.ndarray | None, np.ndarray]:
    """Load a data file with one (y) or two (x, y) columns.

    Files ending in .csv are comma separated, anything else is split on
    whitespace. Lines starting with "#" are skipped.

    Returns:
        Tuple of (x or None, y)

    Raises:
        click.ClickException: If the file cannot be read or has no usable columns
    """
    delimiter = "," if path.suffix.lower() == ".csv" else None
    try:
        data = np.loadtxt(path, delimiter=delimiter, ndmin=2)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Cannot read {path}: {e}") from e

    if data.size == 0:
        raise click.ClickException(f"{path} contains no data")
    if data.shape[1] == 1:
        return None, data[:, 0]
    if data.shape[1] == 2:
        return data[:, 0], data[:, 1]
    raise click.ClickException(f"{path} has {data.shape[1]} columns, expected 1 (y) or 2 (x, y)")


@click.group()
@click.version_option(package_name="adaptive-ticks")
def main():
    """adaptive-ticks - Nice axis ticks for interactive plots.

    \b
    Examples:
        adaptive-ticks ticks 0 10                    # Ticks for [0, 10]
        adaptive-ticks ticks --json -- -5 5          # Negative bounds after --
        adaptive-ticks render data.csv -o plot.png   # Render a data file
    """


@main.command(context_settings={"ignore_unknown_options": True})
@click.argument("vmin", type=float)
@click.argument("vmax", type=float)
@click.option("--count", "-n", type=int, default=DEFAULTS.TARGET_TICK_COUNT, show_default=True, help="Target tick count")
@click.option("--pixels", "-p", type=float, default=DEFAULTS.PIXEL_LENGTH, show_default=True, help="Axis length in pixels")
@click.option(
    "--min-spacing",
    type=float,
    default=DEFAULTS.MIN_SPACING_PX,
    show_default=True,
    help="Minimum pixel gap between adjacent ticks",
)
@click.option("--max-count", type=int, default=DEFAULTS.MAX_TICK_COUNT, show_default=True, help="Maximum tick count")
@click.option("--json", "as_json", is_flag=True, help="Print the tick set as JSON")
def ticks(vmin, vmax, count, pixels, min_spacing, max_count, as_json):
    """Compute ticks for the range VMIN..VMAX."""
    try:
        config = TickConfig(target_count=count, max_count=max_count, min_spacing_px=min_spacing)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    tick_set = generate_ticks(vmin, vmax, count, pixels, config=config)

    if tick_set.synthetic:
        low, high, _ = normalize_range(vmin, vmax)
        click.echo(f"Warning: range [{vmin}, {vmax}] is unusable, ticks cover [{low}, {high}]", err=True)

    if as_json:
        payload = tick_set.to_dict()
        payload["synthetic"] = tick_set.synthetic
        payload["scientific"] = tick_set.scientific
        click.echo(json.dumps(payload))
        return

    for value, label in zip(tick_set.values, tick_set.labels):
        click.echo(f"{value!r}\t{label}")


@main.command()
@click.argument("datafile", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), required=True, help="PNG file to write")
@click.option("--mode", "-m", type=click.Choice(sorted(_MODE_CHOICES)), default="line", show_default=True, help="Plot mode")
@click.option("--width", "-W", type=click.IntRange(min=1), default=DEFAULTS.PLOT_WIDTH, show_default=True, help="Plot area width")
@click.option("--height", "-H", type=click.IntRange(min=1), default=DEFAULTS.PLOT_HEIGHT, show_default=True, help="Plot area height")
@click.option("--bins", type=click.IntRange(min=1), default=DEFAULTS.BIN_COUNT, show_default=True, help="Histogram bin count")
@click.option("--density", is_flag=True, help="Histogram shows density instead of frequency")
@click.option("--title", default="", help="Chart title")
@click.option("--xlabel", default="", help="X axis title")
@click.option("--ylabel", default="", help="Y axis title")
def render(datafile, output, mode, width, height, bins, density, title, xlabel, ylabel):
    """Render DATAFILE (one y column or x,y columns) to a PNG plot."""
    x, y = load_series(datafile)

    state = PlotState()
    state.plot_width = width
    state.plot_height = height
    state.title = title
    state.x_label = xlabel
    state.y_label = ylabel
    state.set_plot_mode(_MODE_CHOICES[mode])
    state.set_bin_count(bins)
    state.hist_y_mode = "density" if density else "freq"
    state.set_data(y, x)

    image = PlotRenderer().render(state)
    try:
        image.save(output, format="PNG")
    except OSError as e:
        raise click.ClickException(f"Cannot write {output}: {e}") from e

    click.echo(f"Wrote {output} ({image.width}x{image.height})")


if __name__ == "__main__":
    main()
