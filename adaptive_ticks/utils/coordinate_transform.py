"""Coordinate transformation utilities for pixel <-> data conversion."""

from adaptive_ticks.core.state import PlotState


class CoordinateTransform:
    """Coordinate transformation utilities for pixel <-> data conversion.

    Handles transformation between:
    - Canvas pixel coordinates (margins included)
    - Data coordinates on the x and y axes

    The y axis is inverted: larger values are drawn closer to the top. A
    degenerate (zero-width) range maps every value to the low edge of the plot.
    """

    def __init__(
        self,
        plot_width: int,
        plot_height: int,
        margin_left: int,
        margin_top: int,
    ):
        """Initialize transformer.

        Args:
            plot_width: Width of the plot area (excluding margins)
            plot_height: Height of the plot area (excluding margins)
            margin_left: Left margin in pixels
            margin_top: Top margin in pixels
        """
        self.plot_width = plot_width
        self.plot_height = plot_height
        self.margin_left = margin_left
        self.margin_top = margin_top

    @classmethod
    def for_state(cls, state: PlotState) -> "CoordinateTransform":
        return cls(state.plot_width, state.plot_height, state.margin_left, state.margin_top)

    def to_screen_x(self, value: float, vmin: float, vmax: float) -> float:
        span = vmax - vmin
        if span == 0:
            return float(self.margin_left)
        return self.margin_left + (value - vmin) / span * self.plot_width

    def to_screen_y(self, value: float, vmin: float, vmax: float) -> float:
        span = vmax - vmin
        if span == 0:
            return float(self.margin_top + self.plot_height)
        return self.margin_top + (1 - (value - vmin) / span) * self.plot_height

    def from_screen_x(self, pixel: float, vmin: float, vmax: float) -> float:
        return vmin + (pixel - self.margin_left) / self.plot_width * (vmax - vmin)

    def from_screen_y(self, pixel: float, vmin: float, vmax: float) -> float:
        return vmax - (pixel - self.margin_top) / self.plot_height * (vmax - vmin)

    def data_to_pixel(self, state: PlotState, x: float, y: float) -> tuple[int, int]:
        """Convert data coordinates to canvas pixel coordinates.

        Args:
            state: PlotState with the current visible ranges
            x: X data value
            y: Y data value

        Returns:
            Tuple of (x, y) pixel coordinates (including margins)
        """
        x_min, x_max = state.visible_range("x")
        y_min, y_max = state.visible_range("y")
        return (
            int(round(self.to_screen_x(x, x_min, x_max))),
            int(round(self.to_screen_y(y, y_min, y_max))),
        )

    def pixel_to_data(self, state: PlotState, pixel_x: int, pixel_y: int) -> tuple[float, float]:
        """Convert canvas pixel coordinates to data coordinates.

        Args:
            state: PlotState with the current visible ranges
            pixel_x: X pixel coordinate (including margin)
            pixel_y: Y pixel coordinate (including margin)

        Returns:
            Tuple of (x, y) data coordinates
        """
        # Clamp to plot area
        pixel_x = max(self.margin_left, min(self.margin_left + self.plot_width, pixel_x))
        pixel_y = max(self.margin_top, min(self.margin_top + self.plot_height, pixel_y))

        x_min, x_max = state.visible_range("x")
        y_min, y_max = state.visible_range("y")
        return self.from_screen_x(pixel_x, x_min, x_max), self.from_screen_y(pixel_y, y_min, y_max)
