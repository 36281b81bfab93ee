"""Central state container for a 1-D plot surface.

PlotState owns the data series, the current view (pan/zoom), the plot mode and
one tick generator per axis. Each axis has its own TickCache because the x and
y ranges evolve independently; the caches are dropped whenever the data bounds
change or a view-history entry is restored.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

import numpy as np

from adaptive_ticks.core.config import DEFAULT_TICK_CONFIG, DEFAULTS, TickConfig
from adaptive_ticks.core.events import EventBus, EventType
from adaptive_ticks.ticks.cache import TickCache
from adaptive_ticks.ticks.generator import TickGenerator
from adaptive_ticks.ticks.tick_set import TickSet

AXES = ("x", "y")


class PlotMode(str, Enum):
    """How the data series is drawn."""

    LINE = "plot"
    SCATTER = "scatter"
    HISTOGRAM = "hist"


@dataclass
class ViewBounds:
    """Current view bounds for both axes."""

    x_min: float = 0.0
    x_max: float = 1.0
    y_min: float = 0.0
    y_max: float = 1.0


@dataclass
class DataBounds:
    """Padded data extent (recomputed when data or custom limits change)."""

    x_min: float = 0.0
    x_max: float = 1.0
    y_min: float = 0.0
    y_max: float = 1.0


def _check_axis(axis: str) -> str:
    if axis not in AXES:
        raise ValueError(f"Unknown axis: {axis!r} (expected 'x' or 'y')")
    return axis


def _finite_bounds(values: Optional[np.ndarray]) -> tuple[float, float]:
    """Min/max of the finite entries, or (0, 1) if there are none."""
    if values is None:
        return 0.0, 1.0
    finite = values[np.isfinite(values)]
    if finite.size == 0:
        return 0.0, 1.0
    return float(finite.min()), float(finite.max())


def _padded_bounds(
    values: Optional[np.ndarray],
    limits: tuple[Optional[float], Optional[float]],
) -> tuple[float, float]:
    """Auto limits with padding so edge points stay visible; custom limits win."""
    lo, hi = _finite_bounds(values)
    padding = (hi - lo) * DEFAULTS.DATA_PADDING_RATIO or DEFAULTS.FLAT_DATA_PADDING
    low_limit, high_limit = limits
    vmin = low_limit if low_limit is not None and not np.isnan(low_limit) else lo - padding
    vmax = high_limit if high_limit is not None and not np.isnan(high_limit) else hi + padding
    if vmin > vmax:
        vmin, vmax = vmax, vmin
    return float(vmin), float(vmax)


def _clamp_axis(lo: float, hi: float, data_lo: float, data_hi: float) -> tuple[float, float]:
    """Keep a view interval inside the data extent and above the zoom limit."""
    data_width = data_hi - data_lo
    if data_width <= 0:
        return data_lo, data_hi
    width = min(max(hi - lo, data_width / DEFAULTS.MAX_ZOOM), data_width)
    lo = min(max(lo, data_lo), data_hi - width)
    return lo, lo + width


class PlotState:
    """Central state container for one plot.

    Attributes are organized into groups:
    - Data series
    - Data bounds and view bounds
    - Display options
    - View history
    - Tick generators (one cache per axis)
    - Event bus

    Example usage:
        state = PlotState()
        state.set_data([3.0, 1.0, 4.0, 1.0, 5.0])
        x_ticks = state.ticks("x")
        state.zoom_at_point(0.5, 0.5)
        x_ticks = state.ticks("x")  # recomputed for the new view
    """

    def __init__(self, tick_config: Optional[TickConfig] = None):
        # ========== DATA SERIES ==========
        self.data_x: Optional[np.ndarray] = None
        self.data_y: Optional[np.ndarray] = None

        # ========== DATA BOUNDS (padded extent) ==========
        self.x_min: float = 0.0
        self.x_max: float = 1.0
        self.y_min: float = 0.0
        self.y_max: float = 1.0

        # ========== VIEW BOUNDS (current view) ==========
        self.view_x_min: Optional[float] = None
        self.view_x_max: Optional[float] = None
        self.view_y_min: Optional[float] = None
        self.view_y_max: Optional[float] = None

        # ========== DISPLAY OPTIONS ==========
        self.plot_mode: PlotMode = PlotMode.LINE
        self.bin_count: int = DEFAULTS.BIN_COUNT
        self.hist_y_mode: str = DEFAULTS.HIST_Y_MODE
        self.x_limits: tuple[Optional[float], Optional[float]] = (None, None)
        self.y_limits: tuple[Optional[float], Optional[float]] = (None, None)
        self.title: str = ""
        self.x_label: str = ""
        self.y_label: str = ""
        self.font_size: int = DEFAULTS.FONT_SIZE
        self.line_width: float = DEFAULTS.LINE_WIDTH
        self.point_size: int = DEFAULTS.POINT_SIZE

        # ========== COLORS ==========
        self.background_color: tuple = DEFAULTS.BACKGROUND_COLOR
        self.axis_color: tuple = DEFAULTS.AXIS_COLOR
        self.tick_color: tuple = DEFAULTS.TICK_COLOR
        self.label_color: tuple = DEFAULTS.LABEL_COLOR
        self.series_color: tuple = DEFAULTS.SERIES_COLOR

        # ========== IMAGE DIMENSIONS ==========
        self.plot_width: int = DEFAULTS.PLOT_WIDTH
        self.plot_height: int = DEFAULTS.PLOT_HEIGHT
        self.margin_left: int = DEFAULTS.MARGIN_LEFT
        self.margin_right: int = DEFAULTS.MARGIN_RIGHT
        self.margin_top: int = DEFAULTS.MARGIN_TOP
        self.margin_bottom: int = DEFAULTS.MARGIN_BOTTOM

        # ========== VIEW HISTORY ==========
        self.view_history: list[tuple[float, float, float, float]] = []
        self.history_index: int = -1
        self.max_view_history: int = DEFAULTS.MAX_VIEW_HISTORY

        # ========== TICKS ==========
        self.tick_config: TickConfig = tick_config or DEFAULT_TICK_CONFIG
        self.tick_generators: dict[str, TickGenerator] = {
            axis: TickGenerator(self.tick_config, TickCache()) for axis in AXES
        }

        # ========== EVENT BUS ==========
        self._event_bus = EventBus()
        self._event_bus.subscribe(EventType.HISTORY_RESTORED, self._invalidate_ticks)

    # ========== COMPUTED PROPERTIES ==========

    @property
    def canvas_width(self) -> int:
        """Total canvas width including margins."""
        return self.plot_width + self.margin_left + self.margin_right

    @property
    def canvas_height(self) -> int:
        """Total canvas height including margins."""
        return self.plot_height + self.margin_top + self.margin_bottom

    @property
    def has_data(self) -> bool:
        return self.data_y is not None and self.data_y.size > 0

    # ========== DATA ==========

    def set_data(self, y, x=None, emit_event: bool = True) -> None:
        """Load a data series.

        Args:
            y: Data values
            x: X coordinates (None = sample index)
            emit_event: If True, emit data_loaded event

        Raises:
            ValueError: If x and y lengths differ
        """
        data_y = np.asarray(y, dtype=float).ravel()
        if x is None:
            data_x = np.arange(data_y.size, dtype=float)
        else:
            data_x = np.asarray(x, dtype=float).ravel()
            if data_x.size != data_y.size:
                raise ValueError(f"x has {data_x.size} values but y has {data_y.size}")

        self.data_x = data_x
        self.data_y = data_y
        self.update_data_bounds()
        self.view_history = []
        self.history_index = -1
        self.reset_view(emit_event=False)

        if emit_event:
            self.emit_data_loaded()

    def set_limits(
        self,
        x_limits: Optional[tuple[Optional[float], Optional[float]]] = None,
        y_limits: Optional[tuple[Optional[float], Optional[float]]] = None,
        emit_event: bool = True,
    ) -> None:
        """Set custom axis limits (None entries = automatic)."""
        if x_limits is not None:
            self.x_limits = x_limits
        if y_limits is not None:
            self.y_limits = y_limits
        self.update_data_bounds()
        self.reset_view(emit_event=False)

        if emit_event:
            self.emit_data_loaded()

    def update_data_bounds(self) -> None:
        """Recompute padded data bounds and drop cached tick sets."""
        self.x_min, self.x_max = _padded_bounds(self.data_x, self.x_limits)
        self.y_min, self.y_max = _padded_bounds(self.data_y, self.y_limits)
        self._invalidate_ticks()

    def histogram(self) -> tuple[np.ndarray, np.ndarray]:
        """Bin the y data for histogram mode.

        Returns:
            Tuple of (heights, edges); heights are counts, or densities when
            hist_y_mode is "density"
        """
        values = np.empty(0) if self.data_y is None else self.data_y[np.isfinite(self.data_y)]
        if values.size == 0:
            return np.zeros(self.bin_count), np.linspace(0.0, 1.0, self.bin_count + 1)

        lo, hi = float(values.min()), float(values.max())
        if hi == lo:
            hi = lo + 1.0
        counts, edges = np.histogram(values, bins=self.bin_count, range=(lo, hi))
        heights = counts.astype(float)
        if self.hist_y_mode == "density":
            heights = heights / (values.size * (edges[1] - edges[0]))
        return heights, edges

    # ========== VIEW ACCESSORS ==========

    def get_view_bounds(self) -> ViewBounds:
        """Get current view bounds as a ViewBounds object."""
        return ViewBounds(
            x_min=self.view_x_min if self.view_x_min is not None else self.x_min,
            x_max=self.view_x_max if self.view_x_max is not None else self.x_max,
            y_min=self.view_y_min if self.view_y_min is not None else self.y_min,
            y_max=self.view_y_max if self.view_y_max is not None else self.y_max,
        )

    def get_data_bounds(self) -> DataBounds:
        """Get padded data bounds as a DataBounds object."""
        return DataBounds(x_min=self.x_min, x_max=self.x_max, y_min=self.y_min, y_max=self.y_max)

    def visible_range(self, axis: str) -> tuple[float, float]:
        """Data-space range currently shown on an axis.

        Line and scatter plots use the view bounds. Histograms show the data
        value range on x and [0, tallest bin] on y.

        Args:
            axis: "x" or "y"

        Returns:
            Tuple of (min, max) with min <= max; may be degenerate, the tick
            engine copes
        """
        _check_axis(axis)
        if self.plot_mode == PlotMode.HISTOGRAM:
            if axis == "x":
                return _finite_bounds(self.data_y) if self.has_data else (0.0, 1.0)
            heights, _ = self.histogram()
            return 0.0, float(heights.max()) if heights.size else 1.0

        bounds = self.get_view_bounds()
        if axis == "x":
            lo, hi = bounds.x_min, bounds.x_max
        else:
            lo, hi = bounds.y_min, bounds.y_max
        # set_view stores whatever it is given
        if lo > hi:
            lo, hi = hi, lo
        return lo, hi

    def ticks(
        self,
        axis: str,
        pixel_length: Optional[float] = None,
        target_count: Optional[int] = None,
    ) -> TickSet:
        """Ticks for an axis over its visible range.

        Args:
            axis: "x" or "y"
            pixel_length: Axis length in pixels (None = plot width/height)
            target_count: Desired tick count (None = tick config default)

        Returns:
            TickSet, served from the axis cache when nothing changed
        """
        _check_axis(axis)
        if pixel_length is None:
            pixel_length = self.plot_width if axis == "x" else self.plot_height
        vmin, vmax = self.visible_range(axis)
        return self.tick_generators[axis].generate(vmin, vmax, target_count, pixel_length)

    # ========== VIEW MANIPULATION ==========

    def set_view(
        self,
        x_min: Optional[float] = None,
        x_max: Optional[float] = None,
        y_min: Optional[float] = None,
        y_max: Optional[float] = None,
        emit_event: bool = True,
    ) -> None:
        """Set view bounds.

        Args:
            x_min, x_max, y_min, y_max: New bounds (None = keep current)
            emit_event: If True, emit view_changed event
        """
        if x_min is not None:
            self.view_x_min = x_min
        if x_max is not None:
            self.view_x_max = x_max
        if y_min is not None:
            self.view_y_min = y_min
        if y_max is not None:
            self.view_y_max = y_max

        if emit_event:
            self.emit_view_changed()

    def reset_view(self, emit_event: bool = True) -> None:
        """Reset view to the full padded data extent."""
        self.view_x_min = self.x_min
        self.view_x_max = self.x_max
        self.view_y_min = self.y_min
        self.view_y_max = self.y_max
        self.push_view_history()

        if emit_event:
            self.emit_view_changed()

    def zoom_at_point(self, x_frac: float, y_frac: float, zoom_in: bool = True, emit_event: bool = True) -> None:
        """Zoom centered on a point given as fraction of the plot area.

        The view never gets narrower than 1/MAX_ZOOM of the data extent, which
        keeps tick labels from needing absurd precision.

        Args:
            x_frac: Horizontal position (0=left, 1=right) in plot area
            y_frac: Vertical position (0=top, 1=bottom) in plot area
            zoom_in: True to zoom in, False to zoom out
            emit_event: If True, emit view_changed event
        """
        bounds = self.get_view_bounds()
        x_range = bounds.x_max - bounds.x_min
        y_range = bounds.y_max - bounds.y_min

        factor = 0.7 if zoom_in else 1.4
        new_x_range = x_range * factor
        new_y_range = y_range * factor

        # Keep the point under the cursor at the same position (y is inverted)
        x_point = bounds.x_min + x_frac * x_range
        y_point = bounds.y_max - y_frac * y_range
        new_x_min = x_point - x_frac * new_x_range
        new_x_max = x_point + (1 - x_frac) * new_x_range
        new_y_min = y_point - (1 - y_frac) * new_y_range
        new_y_max = y_point + y_frac * new_y_range

        self.view_x_min, self.view_x_max = _clamp_axis(new_x_min, new_x_max, self.x_min, self.x_max)
        self.view_y_min, self.view_y_max = _clamp_axis(new_y_min, new_y_max, self.y_min, self.y_max)
        self.push_view_history()

        if emit_event:
            self.emit_view_changed()

    def pan(self, x_frac: float = 0.0, y_frac: float = 0.0, emit_event: bool = True) -> None:
        """Pan the view by a fraction of the current range.

        Args:
            x_frac: Fraction of x range to pan (positive = right)
            y_frac: Fraction of y range to pan (positive = up)
            emit_event: If True, emit view_changed event
        """
        bounds = self.get_view_bounds()
        x_shift = (bounds.x_max - bounds.x_min) * x_frac
        y_shift = (bounds.y_max - bounds.y_min) * y_frac

        self.view_x_min, self.view_x_max = _clamp_axis(
            bounds.x_min + x_shift, bounds.x_max + x_shift, self.x_min, self.x_max
        )
        self.view_y_min, self.view_y_max = _clamp_axis(
            bounds.y_min + y_shift, bounds.y_max + y_shift, self.y_min, self.y_max
        )
        self.push_view_history()

        if emit_event:
            self.emit_view_changed()

    # ========== VIEW HISTORY ==========

    def push_view_history(self) -> None:
        """Record the current view; forward entries are dropped."""
        bounds = self.get_view_bounds()
        entry = (bounds.x_min, bounds.x_max, bounds.y_min, bounds.y_max)

        # Don't add if same as current entry
        if 0 <= self.history_index < len(self.view_history) and self.view_history[self.history_index] == entry:
            return

        self.view_history = self.view_history[: self.history_index + 1]
        self.view_history.append(entry)
        self.history_index += 1

        # Limit history size
        if len(self.view_history) > self.max_view_history:
            self.view_history.pop(0)
            self.history_index -= 1

    def can_go_back(self) -> bool:
        return self.history_index > 0

    def can_go_forward(self) -> bool:
        return self.history_index < len(self.view_history) - 1

    def go_to_view_history(self, index: int, emit_event: bool = True) -> None:
        """Restore a view history entry; out-of-range indices are ignored."""
        if index < 0 or index >= len(self.view_history):
            return

        self.view_x_min, self.view_x_max, self.view_y_min, self.view_y_max = self.view_history[index]
        self.history_index = index
        self._event_bus.emit(EventType.HISTORY_RESTORED, index=index)

        if emit_event:
            self.emit_view_changed()

    def go_back(self, emit_event: bool = True) -> None:
        self.go_to_view_history(self.history_index - 1, emit_event=emit_event)

    def go_forward(self, emit_event: bool = True) -> None:
        self.go_to_view_history(self.history_index + 1, emit_event=emit_event)

    # ========== DISPLAY OPTIONS ==========

    def set_plot_mode(self, mode: str, emit_event: bool = True) -> None:
        """Switch between line, scatter and histogram drawing.

        Raises:
            ValueError: If mode is not a PlotMode value
        """
        self.plot_mode = PlotMode(mode)
        if emit_event:
            self.emit_display_options_changed("plot_mode", self.plot_mode)

    def set_bin_count(self, bin_count: int, emit_event: bool = True) -> None:
        """Set the histogram bin count (at least 1)."""
        self.bin_count = max(1, int(bin_count))
        if emit_event:
            self.emit_display_options_changed("bin_count", self.bin_count)

    # ========== TICK CACHES ==========

    def _invalidate_ticks(self, **kwargs) -> None:
        for generator in self.tick_generators.values():
            generator.invalidate()

    # ========== EVENT BUS DELEGATION ==========

    def on_data_loaded(self, callback: Callable) -> Callable:
        """Register a callback for when data or custom limits change.

        Callback signature: callback()
        """
        return self._event_bus.subscribe(EventType.DATA_LOADED, callback)

    def on_view_changed(self, callback: Callable) -> Callable:
        """Register a callback for when the view (zoom/pan/history) changes.

        Callback signature: callback()
        """
        return self._event_bus.subscribe(EventType.VIEW_CHANGED, callback)

    def on_display_options_changed(self, callback: Callable) -> Callable:
        """Register a callback for when display options change.

        Callback signature: callback(option_name: str, value: Any)
        """
        return self._event_bus.subscribe(EventType.DISPLAY_OPTIONS_CHANGED, callback)

    def emit_data_loaded(self) -> None:
        """Emit data loaded event."""
        self._event_bus.emit(EventType.DATA_LOADED)

    def emit_view_changed(self) -> None:
        """Emit view changed event."""
        self._event_bus.emit(EventType.VIEW_CHANGED)

    def emit_display_options_changed(self, option_name: str, value: Any) -> None:
        """Emit display options changed event.

        Args:
            option_name: Name of the option that changed
            value: New value
        """
        self._event_bus.emit(EventType.DISPLAY_OPTIONS_CHANGED, option_name=option_name, value=value)
