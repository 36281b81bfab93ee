"""Tick engine: nice steps, label formatting, overlap resolution, and caching."""

from adaptive_ticks.ticks.cache import CacheKey, TickCache
from adaptive_ticks.ticks.generator import (
    NormalizedRange,
    TickGenerator,
    compute_ticks,
    generate_ticks,
    normalize_range,
)
from adaptive_ticks.ticks.label_formatter import format_tick_label, format_tick_labels
from adaptive_ticks.ticks.nice_number import nice_number
from adaptive_ticks.ticks.overlap import constrain
from adaptive_ticks.ticks.tick_set import TickSet

__all__ = [
    "generate_ticks",
    "compute_ticks",
    "normalize_range",
    "NormalizedRange",
    "TickGenerator",
    "TickSet",
    "TickCache",
    "CacheKey",
    "nice_number",
    "format_tick_label",
    "format_tick_labels",
    "constrain",
]
