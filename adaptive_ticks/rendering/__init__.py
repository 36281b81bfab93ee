"""Rendering modules for plots and axes."""

from adaptive_ticks.rendering.axis_renderer import AxisRenderer, get_font, required_left_margin
from adaptive_ticks.rendering.plot_renderer import PlotRenderer

__all__ = [
    "PlotRenderer",
    "AxisRenderer",
    "get_font",
    "required_left_margin",
]
