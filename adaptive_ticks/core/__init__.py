"""Core modules for adaptive-ticks: events and configuration.

PlotState lives in adaptive_ticks.core.state; it is not re-exported here because
it depends on the tick engine, which itself depends on core.config.
"""

from adaptive_ticks.core.config import DEFAULT_TICK_CONFIG, DEFAULTS, TickConfig
from adaptive_ticks.core.events import EventBus, EventType

__all__ = [
    "EventBus",
    "EventType",
    "TickConfig",
    "DEFAULTS",
    "DEFAULT_TICK_CONFIG",
]
