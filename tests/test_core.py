"""Tests for the adaptive_ticks core module (state, events, config)."""

import numpy as np
import pytest

from adaptive_ticks.core.config import DEFAULT_TICK_CONFIG, DEFAULTS, TickConfig
from adaptive_ticks.core.events import EventBus, EventType
from adaptive_ticks.core.state import DataBounds, PlotMode, PlotState, ViewBounds


@pytest.fixture
def state():
    """Create a PlotState with five samples: x 0..4, y 1..5."""
    plot_state = PlotState()
    plot_state.set_data([1.0, 2.0, 3.0, 4.0, 5.0])
    return plot_state


class TestPlotState:
    """Tests for PlotState data handling."""

    def test_init_defaults(self):
        """Test PlotState initializes with correct defaults."""
        plot_state = PlotState()

        assert plot_state.data_x is None
        assert plot_state.data_y is None
        assert not plot_state.has_data

        assert plot_state.view_x_min is None
        assert plot_state.view_y_max is None

        assert plot_state.plot_mode == PlotMode.LINE
        assert plot_state.bin_count == DEFAULTS.BIN_COUNT
        assert plot_state.hist_y_mode == "freq"
        assert plot_state.tick_config is DEFAULT_TICK_CONFIG
        assert set(plot_state.tick_generators) == {"x", "y"}

    def test_separate_cache_per_axis(self):
        """Test each axis owns its own tick cache."""
        plot_state = PlotState()
        assert plot_state.tick_generators["x"].cache is not plot_state.tick_generators["y"].cache

    def test_set_data_default_x(self, state):
        """Test x defaults to the sample index."""
        np.testing.assert_array_equal(state.data_x, [0.0, 1.0, 2.0, 3.0, 4.0])

    def test_set_data_padding(self, state):
        """Test data bounds are padded by 5% of the extent."""
        bounds = state.get_data_bounds()
        assert bounds.x_min == pytest.approx(-0.2)
        assert bounds.x_max == pytest.approx(4.2)
        assert bounds.y_min == pytest.approx(0.8)
        assert bounds.y_max == pytest.approx(5.2)

    def test_set_data_resets_view(self, state):
        """Test loading data shows the full padded extent."""
        bounds = state.get_view_bounds()
        assert bounds.x_min == state.x_min
        assert bounds.x_max == state.x_max
        assert bounds.y_min == state.y_min
        assert bounds.y_max == state.y_max

    def test_flat_data_padding(self):
        """Test flat data gets a fixed padding."""
        plot_state = PlotState()
        plot_state.set_data([3.0, 3.0, 3.0])
        assert plot_state.y_min == pytest.approx(2.9)
        assert plot_state.y_max == pytest.approx(3.1)

    def test_non_finite_values_ignored_for_bounds(self):
        """Test NaN and inf samples do not affect the bounds."""
        plot_state = PlotState()
        plot_state.set_data([1.0, np.nan, 3.0, np.inf])
        assert plot_state.y_min == pytest.approx(0.9)
        assert plot_state.y_max == pytest.approx(3.1)

    def test_explicit_x(self):
        """Test explicit x coordinates."""
        plot_state = PlotState()
        plot_state.set_data([1.0, 2.0], x=[10.0, 20.0])
        assert plot_state.x_min == pytest.approx(9.5)
        assert plot_state.x_max == pytest.approx(20.5)

    def test_length_mismatch(self):
        """Test mismatched x and y raise ValueError."""
        with pytest.raises(ValueError):
            PlotState().set_data([1.0, 2.0], x=[1.0])

    def test_custom_limits(self, state):
        """Test custom limits override the automatic ones."""
        state.set_limits(y_limits=(0.0, 10.0))
        assert state.y_min == 0.0
        assert state.y_max == 10.0
        assert state.visible_range("y") == (0.0, 10.0)
        # x stays automatic
        assert state.x_min == pytest.approx(-0.2)

    def test_partial_custom_limits(self, state):
        """Test one-sided custom limits."""
        state.set_limits(x_limits=(None, 100.0))
        assert state.x_min == pytest.approx(-0.2)
        assert state.x_max == 100.0

    def test_swapped_custom_limits(self, state):
        """Test reversed custom limits are stored low to high."""
        state.set_limits(x_limits=(10.0, 0.0))
        assert (state.x_min, state.x_max) == (0.0, 10.0)
        assert state.visible_range("x") == (0.0, 10.0)

        lo, hi = state.visible_range("x")
        assert any(lo <= value <= hi for value in state.ticks("x").values)

    def test_swapped_view_bounds(self, state):
        """Test a reversed view reports its range low to high."""
        state.set_view(x_min=3.0, x_max=1.0)
        assert state.visible_range("x") == (1.0, 3.0)

    def test_canvas_size(self):
        """Test canvas size includes margins."""
        plot_state = PlotState()
        assert plot_state.canvas_width == DEFAULTS.PLOT_WIDTH + DEFAULTS.MARGIN_LEFT + DEFAULTS.MARGIN_RIGHT
        assert plot_state.canvas_height == DEFAULTS.PLOT_HEIGHT + DEFAULTS.MARGIN_TOP + DEFAULTS.MARGIN_BOTTOM


class TestPlotModes:
    """Tests for plot modes, histogram binning and visible ranges."""

    @pytest.fixture
    def hist_state(self):
        """Create a histogram PlotState with three bins."""
        plot_state = PlotState()
        plot_state.set_data([1.0, 2.0, 2.0, 3.0, 3.0, 3.0])
        plot_state.set_plot_mode("hist")
        plot_state.set_bin_count(3)
        return plot_state

    def test_set_plot_mode(self, state):
        """Test switching modes by value."""
        state.set_plot_mode("scatter")
        assert state.plot_mode == PlotMode.SCATTER
        state.set_plot_mode(PlotMode.LINE)
        assert state.plot_mode == PlotMode.LINE

    def test_unknown_plot_mode(self, state):
        """Test an unknown mode raises ValueError."""
        with pytest.raises(ValueError):
            state.set_plot_mode("pie")

    def test_unknown_axis(self, state):
        """Test an unknown axis raises ValueError."""
        with pytest.raises(ValueError):
            state.visible_range("z")
        with pytest.raises(ValueError):
            state.ticks("z")

    def test_line_visible_range(self, state):
        """Test line mode uses the view bounds."""
        state.set_view(x_min=1.0, x_max=2.0)
        assert state.visible_range("x") == (1.0, 2.0)

    def test_histogram_counts(self, hist_state):
        """Test frequency binning."""
        heights, edges = hist_state.histogram()
        np.testing.assert_array_equal(heights, [1.0, 2.0, 3.0])
        assert edges[0] == 1.0
        assert edges[-1] == 3.0

    def test_histogram_density(self, hist_state):
        """Test density binning integrates to one."""
        hist_state.hist_y_mode = "density"
        heights, edges = hist_state.histogram()
        assert np.sum(heights * np.diff(edges)) == pytest.approx(1.0)

    def test_histogram_flat_data(self):
        """Test flat data still bins into a unit-wide range."""
        plot_state = PlotState()
        plot_state.set_data([2.0, 2.0])
        plot_state.set_bin_count(2)
        heights, edges = plot_state.histogram()
        assert heights.sum() == 2
        assert edges[-1] - edges[0] == pytest.approx(1.0)

    def test_histogram_visible_range(self, hist_state):
        """Test histogram x shows the value range and y starts at zero."""
        assert hist_state.visible_range("x") == (1.0, 3.0)
        assert hist_state.visible_range("y") == (0.0, 3.0)

    def test_histogram_ticks(self, hist_state):
        """Test histogram y ticks cover zero to the tallest bin."""
        ticks = hist_state.ticks("y")
        assert ticks.values[0] <= 0.0
        assert ticks.values[-1] >= 3.0

    def test_bin_count_floor(self, state):
        """Test the bin count never drops below one."""
        state.set_bin_count(0)
        assert state.bin_count == 1


class TestPlotStateTicks:
    """Tests for tick generation and cache invalidation through PlotState."""

    def test_ticks_cover_view(self, state):
        """Test ticks cover the visible range."""
        ticks = state.ticks("x")
        x_min, x_max = state.visible_range("x")
        assert ticks.values[0] <= x_min
        assert ticks.values[-1] >= x_max

    def test_repeat_is_cached(self, state):
        """Test an unchanged view reuses the cached tick set."""
        first = state.ticks("x")
        assert state.ticks("x") is first
        assert state.tick_generators["x"].cache.hits == 1

    def test_view_change_recomputes(self, state):
        """Test zooming produces a new tick set."""
        first = state.ticks("x")
        state.zoom_at_point(0.5, 0.5)
        assert state.ticks("x") is not first

    def test_data_loaded_invalidates(self, state):
        """Test loading data drops both caches."""
        state.ticks("x")
        state.ticks("y")
        state.set_data([10.0, 20.0])
        assert len(state.tick_generators["x"].cache) == 0
        assert len(state.tick_generators["y"].cache) == 0

    def test_history_restore_invalidates(self, state):
        """Test restoring a history entry drops both caches."""
        state.zoom_at_point(0.5, 0.5)
        state.ticks("x")
        state.go_back()
        assert len(state.tick_generators["x"].cache) == 0

    def test_custom_tick_config(self):
        """Test a PlotState-wide tick config reaches both generators."""
        config = TickConfig(max_count=4)
        plot_state = PlotState(tick_config=config)
        assert plot_state.tick_generators["x"].config is config
        plot_state.set_data(np.arange(100.0))
        assert len(plot_state.ticks("y")) <= 4


class TestZoomAndPan:
    """Tests for zoom, pan and view limits."""

    def test_zoom_in_centered(self, state):
        """Test zooming in at the center keeps the center."""
        state.zoom_at_point(0.5, 0.5)
        bounds = state.get_view_bounds()
        assert bounds.x_max - bounds.x_min == pytest.approx(4.4 * 0.7)
        assert (bounds.x_min + bounds.x_max) / 2 == pytest.approx(2.0)

    def test_zoom_out_clamped_to_data(self, state):
        """Test zooming out never exceeds the data extent."""
        state.zoom_at_point(0.5, 0.5, zoom_in=False)
        bounds = state.get_view_bounds()
        assert bounds.x_min == pytest.approx(state.x_min)
        assert bounds.x_max == pytest.approx(state.x_max)

    def test_max_zoom(self, state):
        """Test the view never gets narrower than 1/MAX_ZOOM of the data."""
        for _ in range(100):
            state.zoom_at_point(0.3, 0.6)
        bounds = state.get_view_bounds()
        data_width = state.x_max - state.x_min
        assert bounds.x_max - bounds.x_min >= data_width / DEFAULTS.MAX_ZOOM * (1 - 1e-9)

    def test_pan(self, state):
        """Test panning shifts by a fraction of the view."""
        state.zoom_at_point(0.5, 0.5)
        before = state.get_view_bounds()
        state.pan(x_frac=0.1)
        after = state.get_view_bounds()
        width = before.x_max - before.x_min
        assert after.x_min == pytest.approx(before.x_min + 0.1 * width)
        assert after.x_max - after.x_min == pytest.approx(width)

    def test_pan_clamped(self, state):
        """Test panning stops at the data edge."""
        state.zoom_at_point(0.5, 0.5)
        state.pan(x_frac=10.0)
        assert state.get_view_bounds().x_max == pytest.approx(state.x_max)

    def test_reset_view(self, state):
        """Test reset shows the full extent again."""
        state.zoom_at_point(0.2, 0.2)
        state.reset_view()
        bounds = state.get_view_bounds()
        assert bounds.x_min == state.x_min
        assert bounds.y_max == state.y_max


class TestViewHistory:
    """Tests for view history navigation."""

    def test_initial_entry(self, state):
        """Test loading data records the full view."""
        assert len(state.view_history) == 1
        assert state.history_index == 0
        assert not state.can_go_back()

    def test_zoom_pushes_entry(self, state):
        """Test zooming records a new entry."""
        state.zoom_at_point(0.5, 0.5)
        assert len(state.view_history) == 2
        assert state.can_go_back()

    def test_duplicate_not_pushed(self, state):
        """Test an unchanged view is not recorded twice."""
        state.push_view_history()
        state.push_view_history()
        assert len(state.view_history) == 1

    def test_back_and_forward(self, state):
        """Test navigating back and forward restores views."""
        full = state.get_view_bounds()
        state.zoom_at_point(0.5, 0.5)
        zoomed = state.get_view_bounds()

        state.go_back()
        assert state.get_view_bounds() == full
        assert state.can_go_forward()

        state.go_forward()
        assert state.get_view_bounds() == zoomed
        assert not state.can_go_forward()

    def test_new_view_drops_forward_entries(self, state):
        """Test a new view after going back discards the forward branch."""
        state.zoom_at_point(0.5, 0.5)
        state.zoom_at_point(0.5, 0.5)
        state.go_back()
        state.pan(x_frac=0.1)
        assert len(state.view_history) == 3
        assert not state.can_go_forward()

    def test_invalid_index_ignored(self, state):
        """Test out-of-range indices leave the view alone."""
        before = state.get_view_bounds()
        state.go_to_view_history(5)
        state.go_to_view_history(-1)
        assert state.get_view_bounds() == before

    def test_history_max_size(self, state):
        """Test history is capped."""
        state.zoom_at_point(0.5, 0.5)
        for i in range(60):
            state.pan(x_frac=0.1 if i % 2 == 0 else -0.1)
        assert len(state.view_history) == DEFAULTS.MAX_VIEW_HISTORY
        assert state.history_index == DEFAULTS.MAX_VIEW_HISTORY - 1


class TestStateEvents:
    """Tests for PlotState event delegation."""

    def test_view_changed_on_zoom(self, state):
        """Test zooming notifies view subscribers."""
        calls = []
        state.on_view_changed(lambda: calls.append("view"))
        state.zoom_at_point(0.5, 0.5)
        assert calls == ["view"]

    def test_data_loaded(self):
        """Test loading data notifies data subscribers."""
        plot_state = PlotState()
        calls = []
        plot_state.on_data_loaded(lambda: calls.append("data"))
        plot_state.set_data([1.0, 2.0])
        assert calls == ["data"]

    def test_display_options_changed(self, state):
        """Test display option subscribers receive name and value."""
        received = []
        state.on_display_options_changed(lambda option_name, value: received.append((option_name, value)))
        state.set_plot_mode("scatter")
        assert received == [("plot_mode", PlotMode.SCATTER)]

    def test_no_event_when_suppressed(self, state):
        """Test emit_event=False stays silent."""
        calls = []
        state.on_view_changed(lambda: calls.append("view"))
        state.zoom_at_point(0.5, 0.5, emit_event=False)
        assert calls == []


class TestViewBounds:
    """Tests for ViewBounds and DataBounds dataclasses."""

    def test_view_bounds_creation(self):
        """Test creating ViewBounds."""
        bounds = ViewBounds(x_min=1.0, x_max=2.0, y_min=3.0, y_max=4.0)
        assert bounds.x_min == 1.0
        assert bounds.y_max == 4.0

    def test_defaults(self):
        """Test default bounds are the unit square."""
        assert ViewBounds() == ViewBounds(0.0, 1.0, 0.0, 1.0)
        assert DataBounds() == DataBounds(0.0, 1.0, 0.0, 1.0)


class TestEventBus:
    """Tests for EventBus class."""

    def test_subscribe_and_emit(self):
        """Test subscribing to and emitting events."""
        bus = EventBus()
        received_data = []

        def handler(**kwargs):
            received_data.append(kwargs)

        bus.subscribe("test_event", handler)
        bus.emit("test_event", key="value")

        assert received_data == [{"key": "value"}]

    def test_enum_and_string_keys_match(self):
        """Test EventType members reach subscribers registered by string."""
        bus = EventBus()
        calls = []
        bus.subscribe("view_changed", lambda: calls.append(1))
        bus.emit(EventType.VIEW_CHANGED)
        assert calls == [1]

    def test_emit_nonexistent_event(self):
        """Test emitting event with no subscribers doesn't raise."""
        bus = EventBus()
        bus.emit("nonexistent_event", data="test")

    def test_unsubscribe(self):
        """Test unsubscribing from events."""
        bus = EventBus()
        received_data = []

        def handler(**kwargs):
            received_data.append(kwargs)

        bus.subscribe("test_event", handler)
        bus.emit("test_event", data="first")
        bus.unsubscribe("test_event", handler)
        bus.emit("test_event", data="second")
        assert len(received_data) == 1

    def test_handler_error_does_not_stop_chain(self, capsys):
        """Test a failing handler is reported and later handlers still run."""
        bus = EventBus()
        calls = []

        def failing(**kwargs):
            raise RuntimeError("boom")

        bus.subscribe("test_event", failing)
        bus.subscribe("test_event", lambda **kwargs: calls.append(1))
        bus.emit("test_event")

        assert calls == [1]
        assert "boom" in capsys.readouterr().out

    def test_clear(self):
        """Test clearing one event and all events."""
        bus = EventBus()
        bus.subscribe("a", lambda: None)
        bus.subscribe("b", lambda: None)
        bus.clear("a")
        assert not bus.has_subscribers("a")
        assert bus.has_subscribers("b")
        bus.clear()
        assert not bus.has_subscribers("b")


class TestConfig:
    """Tests for configuration constants."""

    def test_defaults_class(self):
        """Test DEFAULTS values used by the tick engine."""
        assert DEFAULTS.TARGET_TICK_COUNT == 6
        assert DEFAULTS.MIN_SPACING_PX == 40
        assert DEFAULTS.MIN_RANGE_WIDTH == 1e-10
        assert DEFAULTS.MAX_RANGE_WIDTH == 1e15
        assert DEFAULTS.SCIENTIFIC_UPPER == 1e6
        assert DEFAULTS.SCIENTIFIC_LOWER == 1e-3

    def test_default_tick_config_matches_defaults(self):
        """Test the process-wide TickConfig is built from DEFAULTS."""
        assert DEFAULT_TICK_CONFIG == TickConfig(
            target_count=DEFAULTS.TARGET_TICK_COUNT,
            min_count=DEFAULTS.MIN_TICK_COUNT,
            max_count=DEFAULTS.MAX_TICK_COUNT,
            min_spacing_px=DEFAULTS.MIN_SPACING_PX,
        )
