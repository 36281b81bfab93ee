"""Single-slot memo for the last tick set computed on an axis."""

import struct
from dataclasses import dataclass
from typing import Optional

from adaptive_ticks.core.config import TickConfig
from adaptive_ticks.ticks.tick_set import TickSet


def _bits(value: float) -> bytes:
    return struct.pack("<d", float(value))


@dataclass(frozen=True)
class CacheKey:
    """Request parameters a cached tick set was computed for.

    Numbers are stored as their IEEE-754 bit patterns, so equality is exact:
    no tolerance, NaN matches the same NaN, and 0.0 differs from -0.0.
    """

    min_bits: bytes
    max_bits: bytes
    target_bits: bytes
    pixel_bits: bytes
    config: TickConfig

    @classmethod
    def from_request(
        cls,
        vmin: float,
        vmax: float,
        target_count: float,
        pixel_length: float,
        config: TickConfig,
    ) -> "CacheKey":
        return cls(_bits(vmin), _bits(vmax), _bits(target_count), _bits(pixel_length), config)


class TickCache:
    """Holds the most recent tick set of one axis.

    Use one instance per axis; the x and y ranges of a plot evolve independently.
    There is no eviction beyond overwriting the slot.

    Thread Safety:
        Not thread-safe. Each cache is owned by the render pass of its axis.
    """

    def __init__(self):
        self._key: Optional[CacheKey] = None
        self._value: Optional[TickSet] = None
        self.hits = 0
        self.misses = 0

    def get(self, key: CacheKey) -> Optional[TickSet]:
        """Return the cached tick set if key matches the stored one, else None."""
        if self._value is not None and self._key == key:
            self.hits += 1
            return self._value
        self.misses += 1
        return None

    def put(self, key: CacheKey, value: TickSet) -> None:
        """Store value under key, replacing whatever was cached."""
        self._key = key
        self._value = value

    def invalidate(self) -> None:
        """Drop the cached entry (data bounds or restored view changed)."""
        self._key = None
        self._value = None

    def __len__(self) -> int:
        return 0 if self._value is None else 1
