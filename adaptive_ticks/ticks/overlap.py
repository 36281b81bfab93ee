"""Tick count reduction so adjacent labels keep a minimum pixel gap."""

from adaptive_ticks.core.config import DEFAULTS


def tick_spacing(count: int, pixel_length: float) -> float:
    """Pixel distance between adjacent ticks when count ticks span pixel_length."""
    if count < 2:
        return float(pixel_length)
    return pixel_length / (count - 1)


def constrain(
    candidate_count: int,
    pixel_length: float,
    min_spacing_px: float = DEFAULTS.MIN_SPACING_PX,
    min_count: int = DEFAULTS.MIN_TICK_COUNT,
) -> int:
    """Determine the largest tick count that respects the minimum label spacing.

    The first and last ticks are always kept; the caller achieves the reduction
    by regenerating with a larger step, so thinning only ever removes interior
    ticks.

    Args:
        candidate_count: Number of ticks currently generated
        pixel_length: Available axis length in pixels
        min_spacing_px: Minimum gap between adjacent ticks
        min_count: Floor for the returned count

    Returns:
        Effective tick count, never below min_count
    """
    # "not >" also catches NaN
    if not pixel_length > 0:
        return min_count

    effective_count = candidate_count
    while effective_count > min_count and tick_spacing(effective_count, pixel_length) < min_spacing_px:
        effective_count -= 1

    return max(effective_count, min_count)
