"""Configuration constants, tick defaults, and display settings."""

from dataclasses import dataclass


# Default display and tick settings
class DEFAULTS:
    """Default configuration values."""

    # Tick generation
    TARGET_TICK_COUNT = 6
    MIN_TICK_COUNT = 2
    MAX_TICK_COUNT = 10
    MIN_SPACING_PX = 40
    PIXEL_LENGTH = 400

    # Range normalization
    DEFAULT_RANGE = (0.0, 1.0)  # Substituted for NaN/inf bounds
    MIN_RANGE_WIDTH = 1e-10
    MAX_RANGE_WIDTH = 1e15
    RELATIVE_RANGE_WIDTH = 1e-9  # Narrower ranges (relative to magnitude) lose float precision
    MAX_STEP_RAISES = 6

    # Label formatting
    SCIENTIFIC_UPPER = 1e6
    SCIENTIFIC_LOWER = 1e-3
    SCIENTIFIC_DIGITS = 2

    # Image dimensions
    PLOT_WIDTH = 800
    PLOT_HEIGHT = 450

    # Margins
    MARGIN_LEFT = 70
    MARGIN_RIGHT = 40
    MARGIN_TOP = 30
    MARGIN_BOTTOM = 55
    MIN_MARGIN_LEFT = 60

    # Axis layout
    FONT_SIZE = 15
    TICK_MARK_LENGTH = 4
    TICK_LABEL_OFFSET = 8

    # Data and view
    DATA_PADDING_RATIO = 0.05  # Padding around auto limits so edge points stay visible
    FLAT_DATA_PADDING = 0.1
    BIN_COUNT = 50
    HIST_Y_MODE = "freq"  # "freq" or "density"
    MAX_ZOOM = 1000  # Narrowest view is 1/MAX_ZOOM of the data extent
    MAX_VIEW_HISTORY = 50

    # Colors (RGBA tuples)
    BACKGROUND_COLOR = (255, 255, 255, 255)
    AXIS_COLOR = (85, 85, 85, 255)
    TICK_COLOR = (85, 85, 85, 255)
    LABEL_COLOR = (51, 51, 51, 255)
    SERIES_COLOR = (31, 119, 180, 255)
    LINE_WIDTH = 1.5
    POINT_SIZE = 3


@dataclass(frozen=True)
class TickConfig:
    """Tunable tick generation parameters.

    Process-wide defaults come from DEFAULTS; pass a different instance per call
    to override them.
    """

    target_count: int = DEFAULTS.TARGET_TICK_COUNT
    min_count: int = DEFAULTS.MIN_TICK_COUNT
    max_count: int = DEFAULTS.MAX_TICK_COUNT
    min_spacing_px: float = DEFAULTS.MIN_SPACING_PX

    def __post_init__(self):
        if self.min_count < 2:
            raise ValueError(f"min_count must be at least 2, got {self.min_count}")
        if self.max_count < self.min_count:
            raise ValueError(
                f"max_count ({self.max_count}) must not be below min_count ({self.min_count})"
            )
        if self.min_spacing_px < 0:
            raise ValueError(f"min_spacing_px must be non-negative, got {self.min_spacing_px}")

    def clamp_count(self, count: int) -> int:
        """Clamp a requested tick count into [min_count, max_count]."""
        return max(self.min_count, min(self.max_count, int(count)))


DEFAULT_TICK_CONFIG = TickConfig()
