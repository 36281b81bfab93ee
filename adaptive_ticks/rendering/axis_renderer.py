"""Axis rendering: border, adaptive ticks, labels and titles."""

import math
from typing import Sequence

from PIL import Image, ImageDraw, ImageFont

from adaptive_ticks.core.config import DEFAULTS
from adaptive_ticks.core.state import PlotMode, PlotState
from adaptive_ticks.utils.coordinate_transform import CoordinateTransform


def get_font(size: int = 12):
    """Get a font, falling back to default if system fonts not available."""
    try:
        return ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", size)
    except OSError:
        try:
            return ImageFont.truetype("/usr/share/fonts/TTF/DejaVuSans.ttf", size)
        except OSError:
            return ImageFont.load_default()


def text_size(font, text: str) -> tuple[int, int]:
    """Width and height of text rendered with font."""
    left, top, right, bottom = font.getbbox(text)
    return int(right - left), int(bottom - top)


def required_left_margin(labels: Sequence[str], font, font_size: int = DEFAULTS.FONT_SIZE) -> int:
    """Left margin that fits the widest y tick label plus the rotated axis title.

    Args:
        labels: Y tick labels
        font: Font the labels are drawn with
        font_size: Axis title font size (room for the rotated title)

    Returns:
        Margin in pixels, at least MIN_MARGIN_LEFT
    """
    widest = max((text_size(font, label)[0] for label in labels), default=0)
    required = widest + DEFAULTS.TICK_LABEL_OFFSET + DEFAULTS.TICK_MARK_LENGTH + font_size + 10
    return max(DEFAULTS.MIN_MARGIN_LEFT, math.ceil(required))


def axis_titles(state: PlotState) -> tuple[str, str]:
    """Axis titles for the current plot mode.

    Line/scatter plots show the sample index on x and the variable on y.
    Histograms show the variable on x and frequency (or density) on y.
    """
    if state.plot_mode == PlotMode.HISTOGRAM:
        y_title = "Density" if state.hist_y_mode == "density" else "Frequency"
        return state.y_label or "Value", y_title
    return state.x_label or "Index", state.y_label or "Value"


class AxisRenderer:
    """Renders axes with adaptive ticks and labels on plot images."""

    def __init__(
        self,
        plot_width: int,
        plot_height: int,
        margin_left: int,
        margin_top: int,
    ):
        """Initialize axis renderer.

        Args:
            plot_width: Width of the plot area
            plot_height: Height of the plot area
            margin_left: Left margin (for y-axis labels)
            margin_top: Top margin
        """
        self.plot_width = plot_width
        self.plot_height = plot_height
        self.margin_left = margin_left
        self.margin_top = margin_top
        self.transform = CoordinateTransform(plot_width, plot_height, margin_left, margin_top)

    def draw(self, canvas: Image.Image, state: PlotState) -> Image.Image:
        """Draw axes on the canvas.

        Ticks come from the per-axis generators of state, so repeated draws of an
        unchanged view reuse the cached tick sets.

        Args:
            canvas: PIL Image to draw on (with margins)
            state: PlotState for ranges and settings

        Returns:
            Canvas with axes drawn
        """
        draw = ImageDraw.Draw(canvas)
        font = get_font(state.font_size)
        title_font = get_font(state.font_size + 2)

        plot_left = self.margin_left
        plot_right = self.margin_left + self.plot_width
        plot_top = self.margin_top
        plot_bottom = self.margin_top + self.plot_height

        # Draw border
        draw.rectangle(
            [plot_left, plot_top, plot_right, plot_bottom],
            outline=state.axis_color,
            width=1,
        )

        x_title, y_title = axis_titles(state)
        self._draw_x_axis(draw, font, title_font, state, x_title, plot_left, plot_bottom)
        self._draw_y_axis(draw, font, state, plot_left)
        self._draw_rotated_y_title(canvas, y_title, title_font, state, plot_top)

        if state.title:
            title_width, _ = text_size(title_font, state.title)
            draw.text(
                (plot_left + self.plot_width // 2 - title_width // 2, max(0, plot_top - state.font_size - 10)),
                state.title,
                fill=state.label_color,
                font=title_font,
            )

        return canvas

    def _draw_x_axis(self, draw, font, title_font, state, title, plot_left, plot_bottom):
        """Draw x-axis ticks, labels and title."""
        x_min, x_max = state.visible_range("x")
        ticks = state.ticks("x", self.plot_width)

        for value, label in zip(ticks.values, ticks.labels):
            # The tick set covers the range, so its end ticks can fall outside
            if not x_min <= value <= x_max:
                continue
            x = round(self.transform.to_screen_x(value, x_min, x_max))
            draw.line([(x, plot_bottom), (x, plot_bottom + DEFAULTS.TICK_MARK_LENGTH)], fill=state.tick_color, width=1)
            label_width, _ = text_size(font, label)
            draw.text(
                (x - label_width // 2, plot_bottom + DEFAULTS.TICK_LABEL_OFFSET),
                label,
                fill=state.label_color,
                font=font,
            )

        title_width, _ = text_size(title_font, title)
        draw.text(
            (plot_left + self.plot_width // 2 - title_width // 2, plot_bottom + DEFAULTS.TICK_LABEL_OFFSET + state.font_size + 12),
            title,
            fill=state.label_color,
            font=title_font,
        )

    def _draw_y_axis(self, draw, font, state, plot_left):
        """Draw y-axis ticks and right-aligned labels."""
        y_min, y_max = state.visible_range("y")
        ticks = state.ticks("y", self.plot_height)

        for value, label in zip(ticks.values, ticks.labels):
            if not y_min <= value <= y_max:
                continue
            y = round(self.transform.to_screen_y(value, y_min, y_max))
            draw.line([(plot_left - DEFAULTS.TICK_MARK_LENGTH, y), (plot_left, y)], fill=state.tick_color, width=1)
            label_width, label_height = text_size(font, label)
            draw.text(
                (plot_left - label_width - DEFAULTS.TICK_LABEL_OFFSET, y - label_height // 2),
                label,
                fill=state.label_color,
                font=font,
            )

    def _draw_rotated_y_title(self, canvas, title, font, state, plot_top):
        """Draw rotated y-axis title."""
        title_width, title_height = text_size(font, title)
        txt_img = Image.new("RGBA", (title_width + 4, title_height + 8), (0, 0, 0, 0))
        txt_draw = ImageDraw.Draw(txt_img)
        txt_draw.text((0, 0), title, fill=state.label_color, font=font)
        txt_img = txt_img.rotate(90, expand=True)

        y_title_x = 5
        y_title_y = plot_top + self.plot_height // 2 - txt_img.height // 2
        canvas.paste(txt_img, (y_title_x, y_title_y), txt_img)
