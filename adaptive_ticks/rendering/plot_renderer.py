"""Plot rendering with Pillow.

Draws the data series of a PlotState (polyline, points or histogram bars) into
the plot area, then the axes with adaptive ticks around it.
"""

import base64
import io

import numpy as np
from PIL import Image, ImageDraw

from adaptive_ticks.core.state import PlotMode, PlotState
from adaptive_ticks.rendering.axis_renderer import AxisRenderer, get_font, required_left_margin
from adaptive_ticks.utils.coordinate_transform import CoordinateTransform


def _finite_runs(xs: np.ndarray, ys: np.ndarray) -> list[list[tuple[float, float]]]:
    """Split a polyline at non-finite points."""
    runs: list[list[tuple[float, float]]] = []
    current: list[tuple[float, float]] = []
    for x, y in zip(xs.tolist(), ys.tolist()):
        if np.isfinite(x) and np.isfinite(y):
            current.append((x, y))
        elif current:
            runs.append(current)
            current = []
    if current:
        runs.append(current)
    return runs


class PlotRenderer:
    """Renders a PlotState to an image.

    This is a stateless renderer: dimensions and colors come from the state,
    ticks from its per-axis generators. The left margin grows to fit the widest
    y tick label.

    Example:
        renderer = PlotRenderer()
        image = renderer.render(state)
        png_bytes = renderer.render_png(state)
    """

    def render(self, state: PlotState) -> Image.Image:
        """Render the plot to a PIL image.

        Args:
            state: PlotState containing data, view bounds and display options

        Returns:
            RGBA image of the whole canvas (plot area plus margins)
        """
        font = get_font(state.font_size)
        y_ticks = state.ticks("y", state.plot_height)
        margin_left = required_left_margin(y_ticks.labels, font, state.font_size)

        canvas_width = margin_left + state.plot_width + state.margin_right
        canvas = Image.new("RGBA", (canvas_width, state.canvas_height), state.background_color)

        if state.has_data:
            # Series are drawn on their own layer so nothing spills into the margins
            plot_img = Image.new("RGBA", (state.plot_width, state.plot_height), (0, 0, 0, 0))
            self._draw_series(plot_img, state)
            canvas.paste(plot_img, (margin_left, state.margin_top), plot_img)

        axis_renderer = AxisRenderer(state.plot_width, state.plot_height, margin_left, state.margin_top)
        return axis_renderer.draw(canvas, state)

    def render_png(self, state: PlotState) -> bytes:
        """Render the plot and encode it as PNG."""
        buffer = io.BytesIO()
        self.render(state).save(buffer, format="PNG")
        return buffer.getvalue()

    def render_base64(self, state: PlotState) -> str:
        """Render the plot to a base64-encoded PNG string."""
        return base64.b64encode(self.render_png(state)).decode("utf-8")

    def _draw_series(self, plot_img: Image.Image, state: PlotState) -> None:
        draw = ImageDraw.Draw(plot_img)
        # Plot-area coordinates: the layer is pasted at the margins afterwards
        transform = CoordinateTransform(state.plot_width, state.plot_height, 0, 0)
        x_min, x_max = state.visible_range("x")
        y_min, y_max = state.visible_range("y")

        if state.plot_mode == PlotMode.HISTOGRAM:
            heights, edges = state.histogram()
            base = transform.to_screen_y(0.0, y_min, y_max)
            for height, left, right in zip(heights, edges[:-1], edges[1:]):
                if height <= 0:
                    continue
                x0 = transform.to_screen_x(left, x_min, x_max)
                x1 = transform.to_screen_x(right, x_min, x_max)
                top = transform.to_screen_y(height, y_min, y_max)
                draw.rectangle([x0, top, max(x0, x1 - 1), base], fill=state.series_color)
            return

        xs = np.broadcast_to(transform.to_screen_x(state.data_x, x_min, x_max), state.data_x.shape)
        ys = np.broadcast_to(transform.to_screen_y(state.data_y, y_min, y_max), state.data_y.shape)

        if state.plot_mode == PlotMode.SCATTER:
            r = state.point_size
            for run in _finite_runs(xs, ys):
                for x, y in run:
                    draw.ellipse([x - r, y - r, x + r, y + r], fill=state.series_color)
            return

        width = max(1, round(state.line_width))
        for run in _finite_runs(xs, ys):
            if len(run) == 1:
                x, y = run[0]
                draw.point((x, y), fill=state.series_color)
            else:
                draw.line(run, fill=state.series_color, width=width)
