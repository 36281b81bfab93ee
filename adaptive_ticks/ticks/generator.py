"""Adaptive tick generation for a single axis.

Turns a visible range, a target tick count and the available pixel length into a
TickSet of nice, evenly spaced values with consistently formatted labels.

Malformed numeric input never raises: NaN/inf bounds, swapped or equal bounds and
extreme widths are replaced by a usable window, and the result is flagged as
synthetic. A plot must always be able to draw its axes.

Example usage:
    generator = TickGenerator(cache=TickCache())
    ticks = generator.generate(0.0, 10.0, target_count=6, pixel_length=600)
    ticks.values  # (0.0, 2.0, 4.0, 6.0, 8.0, 10.0)
"""

import math
from typing import NamedTuple, Optional

from adaptive_ticks.core.config import DEFAULT_TICK_CONFIG, DEFAULTS, TickConfig
from adaptive_ticks.ticks.cache import CacheKey, TickCache
from adaptive_ticks.ticks.label_formatter import format_tick_labels
from adaptive_ticks.ticks.nice_number import (
    decompose,
    next_nice_number,
    nice_number,
    previous_nice_number,
)
from adaptive_ticks.ticks.overlap import constrain
from adaptive_ticks.ticks.tick_set import TickSet

# Slack when converting range bounds to step indices (in units of one step)
_INDEX_EPS = 1e-9


class NormalizedRange(NamedTuple):
    """Range bounds after input substitution."""

    min: float
    max: float
    synthetic: bool


def normalize_range(vmin: float, vmax: float) -> NormalizedRange:
    """Make a visible range safe for tick computation.

    - NaN or infinite bound: the default window [0, 1]
    - min > max: swapped
    - width below 1e-10 (or too narrow for float precision at this magnitude):
      [min - 1, min + 1], [-1, 1] around zero, +-10% of min for huge magnitudes
    - width above 1e15: a 1e15 wide window around the midpoint

    Args:
        vmin: Requested lower bound
        vmax: Requested upper bound

    Returns:
        NormalizedRange with min < max and a flag telling if it was synthesized
    """
    if not (math.isfinite(vmin) and math.isfinite(vmax)):
        low, high = DEFAULTS.DEFAULT_RANGE
        return NormalizedRange(float(low), float(high), True)

    vmin, vmax = float(vmin), float(vmax)
    if vmin > vmax:
        vmin, vmax = vmax, vmin

    width = vmax - vmin
    magnitude = max(abs(vmin), abs(vmax))

    if width < DEFAULTS.MIN_RANGE_WIDTH or width < magnitude * DEFAULTS.RELATIVE_RANGE_WIDTH:
        if vmin == 0:
            return NormalizedRange(-1.0, 1.0, True)
        offset = 1.0
        if 2 * offset < abs(vmin) * DEFAULTS.RELATIVE_RANGE_WIDTH:
            offset = abs(vmin) * 0.1
        return NormalizedRange(vmin - offset, vmin + offset, True)

    if width > DEFAULTS.MAX_RANGE_WIDTH:
        center = vmin / 2 + vmax / 2
        half_width = DEFAULTS.MAX_RANGE_WIDTH / 2
        if half_width >= abs(center) * DEFAULTS.RELATIVE_RANGE_WIDTH:
            return NormalizedRange(center - half_width, center + half_width, True)
        if math.isinf(width):
            # Bounds near the float limit; halving keeps the width finite
            return NormalizedRange(vmin / 2, vmax / 2, True)

    return NormalizedRange(vmin, vmax, False)


def _resolve_target(target_count: Optional[float], config: TickConfig) -> int:
    if target_count is None or not math.isfinite(target_count):
        return config.target_count
    return config.clamp_count(target_count)


def _step_ndigits(step: float) -> int:
    """Decimal places that represent every multiple of step exactly."""
    _, exponent = decompose(step)
    return max(0, 1 - exponent)


def _tick_value(index: int, step: float, ndigits: int) -> float:
    # Multiplying avoids the drift of repeated addition; rounding strips
    # artifacts like 0.6000000000000001
    return round(index * step, ndigits)


def _index_bounds(low: float, high: float, step: float) -> tuple[int, int]:
    """Step indices of the first tick <= low and the first tick >= high."""
    ndigits = _step_ndigits(step)

    first = math.floor(low / step + _INDEX_EPS)
    while _tick_value(first, step, ndigits) > low:
        first -= 1

    last = math.ceil(high / step - _INDEX_EPS)
    while _tick_value(last, step, ndigits) < high:
        last += 1

    return first, last


def _sequence(low: float, high: float, step: float) -> list[float]:
    first, last = _index_bounds(low, high, step)
    ndigits = _step_ndigits(step)
    return [_tick_value(i, step, ndigits) for i in range(first, last + 1)]


def _fit_sequence(low: float, high: float, step: float, limit: int) -> Optional[tuple[list[float], float]]:
    """Build the anchored tick sequence, raising the step until it fits in limit ticks.

    Returns:
        Tuple of (values, step), or None if no nice step within reach fits
    """
    for _ in range(DEFAULTS.MAX_STEP_RAISES + 1):
        first, last = _index_bounds(low, high, step)
        if last - first + 1 <= limit:
            return _sequence(low, high, step), step
        step = next_nice_number(step)
    return None


def _fixed_count_sequence(low: float, high: float, count: int) -> tuple[list[float], float]:
    """Exactly count ticks covering [low, high] when no anchored sequence fits.

    Happens when the range straddles a multiple of every candidate step, e.g.
    [-0.01, 0.01] with room for two ticks only, or when no 1-2-5 step yields a
    count inside [min_count, limit]. The first tick sits on a multiple of the
    range's nice width, the step is the smallest nice number reaching high.
    """
    anchor_step = nice_number(high - low, round=False)
    anchor = _tick_value(math.floor(low / anchor_step), anchor_step, _step_ndigits(anchor_step))
    if anchor > low:
        anchor = _tick_value(math.floor(low / anchor_step) - 1, anchor_step, _step_ndigits(anchor_step))

    step = nice_number((high - anchor) / (count - 1), round=False)
    ndigits = max(_step_ndigits(step), _step_ndigits(anchor_step))
    while round(anchor + (count - 1) * step, ndigits) < high:
        step = next_nice_number(step)
    return [round(anchor + i * step, ndigits) for i in range(count)], step


def _layout(low: float, high: float, step: float, min_count: int, limit: int) -> tuple[list[float], float]:
    """Tick sequence with between min_count and limit entries, starting from step."""
    fitted = _fit_sequence(low, high, step, limit)
    if fitted is not None:
        values, step = fitted
        # Raising the step can leave fewer than min_count ticks
        while len(values) < min_count:
            finer_step = previous_nice_number(step)
            finer = _sequence(low, high, finer_step)
            if len(finer) > limit:
                break
            values, step = finer, finer_step
        if len(values) >= min_count:
            return values, step
    return _fixed_count_sequence(low, high, min_count)


def compute_ticks(
    vmin: float,
    vmax: float,
    target_count: Optional[float] = None,
    pixel_length: float = DEFAULTS.PIXEL_LENGTH,
    config: Optional[TickConfig] = None,
) -> TickSet:
    """Compute a tick set without consulting any cache.

    Args:
        vmin: Lower bound of the visible range
        vmax: Upper bound of the visible range
        target_count: Desired number of ticks (None = config default)
        pixel_length: Axis length in pixels
        config: Tick parameters (None = process-wide defaults)

    Returns:
        TickSet covering the (normalized) range
    """
    config = config or DEFAULT_TICK_CONFIG
    low, high, synthetic = normalize_range(vmin, vmax)
    target = _resolve_target(target_count, config)
    width = high - low

    # First pass: closest nice step for the requested density
    rough_step = width / (target - 1)
    limit = min(config.max_count, target + 2)
    values, step = _layout(low, high, nice_number(rough_step, round=True), config.min_count, limit)

    # Too sparse for the target: try finer steps while staying within limit
    while len(values) < target - 2:
        finer_step = previous_nice_number(step)
        finer = _sequence(low, high, finer_step)
        if len(finer) > limit:
            break
        values, step = finer, finer_step

    # Overlap pass: regenerate with a larger step instead of dropping entries,
    # so spacing stays uniform and both ends stay covered
    effective_count = constrain(len(values), pixel_length, config.min_spacing_px, config.min_count)
    if effective_count < len(values):
        rough_step = width / (effective_count - 1)
        values, step = _layout(
            low, high, nice_number(rough_step, round=False), config.min_count, effective_count
        )

    labels, scientific = format_tick_labels(values, step)
    return TickSet(
        values=tuple(values),
        labels=tuple(labels),
        step=step,
        synthetic=synthetic,
        scientific=scientific,
    )


def generate_ticks(
    vmin: float,
    vmax: float,
    target_count: Optional[float] = None,
    pixel_length: float = DEFAULTS.PIXEL_LENGTH,
    config: Optional[TickConfig] = None,
    cache: Optional[TickCache] = None,
) -> TickSet:
    """Generate ticks for an axis, memoized through cache when given.

    A cache hit requires min, max, target_count and pixel_length to be
    bit-identical to the previous call on the same cache (and the same config).

    Args:
        vmin: Lower bound of the visible range
        vmax: Upper bound of the visible range
        target_count: Desired number of ticks (None = config default, usually 6)
        pixel_length: Axis length in pixels
        config: Tick parameters (None = process-wide defaults)
        cache: Per-axis cache owned by the caller, or None

    Returns:
        TickSet for the range
    """
    config = config or DEFAULT_TICK_CONFIG
    if target_count is None:
        target_count = config.target_count

    if cache is None:
        return compute_ticks(vmin, vmax, target_count, pixel_length, config)

    key = CacheKey.from_request(vmin, vmax, target_count, pixel_length, config)
    cached = cache.get(key)
    if cached is not None:
        return cached

    result = compute_ticks(vmin, vmax, target_count, pixel_length, config)
    cache.put(key, result)
    return result


class TickGenerator:
    """Tick generator for one axis, bundling a config and an optional cache."""

    def __init__(self, config: Optional[TickConfig] = None, cache: Optional[TickCache] = None):
        """Initialize generator.

        Args:
            config: Tick parameters (None = process-wide defaults)
            cache: Cache for this axis, or None to always recompute
        """
        self.config = config or DEFAULT_TICK_CONFIG
        self.cache = cache

    def generate(
        self,
        vmin: float,
        vmax: float,
        target_count: Optional[float] = None,
        pixel_length: float = DEFAULTS.PIXEL_LENGTH,
    ) -> TickSet:
        """Generate ticks for the visible range [vmin, vmax]."""
        return generate_ticks(vmin, vmax, target_count, pixel_length, self.config, self.cache)

    def invalidate(self) -> None:
        """Drop the cached tick set, if any."""
        if self.cache is not None:
            self.cache.invalidate()
