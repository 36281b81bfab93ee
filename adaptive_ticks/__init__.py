"""
adaptive-ticks: nice, non-overlapping axis ticks for interactive 1-D plots.

Tick sets are recomputed on every pan and zoom, so generation is cheap and
memoized per axis.
"""

__version__ = "0.1.0"

from adaptive_ticks.cli import main
from adaptive_ticks.core.events import EventBus
from adaptive_ticks.core.state import PlotState
from adaptive_ticks.ticks import (
    TickCache,
    TickGenerator,
    TickSet,
    format_tick_label,
    generate_ticks,
    nice_number,
)

__all__ = [
    "generate_ticks",
    "nice_number",
    "format_tick_label",
    "TickGenerator",
    "TickCache",
    "TickSet",
    "PlotState",
    "EventBus",
    "main",
    "__version__",
]
