"""Tick label formatting with consistent precision across an axis."""

import math
from typing import Sequence

from adaptive_ticks.core.config import DEFAULTS


def needs_scientific(value: float) -> bool:
    """Check if a value is outside the fixed-notation range.

    Args:
        value: Tick value

    Returns:
        True for |value| >= 1e6 or 0 < |value| < 1e-3
    """
    magnitude = abs(value)
    return magnitude >= DEFAULTS.SCIENTIFIC_UPPER or (value != 0 and magnitude < DEFAULTS.SCIENTIFIC_LOWER)


def step_decimals(step: float) -> int:
    """Number of decimal places needed to tell ticks spaced by step apart.

    Args:
        step: Spacing between consecutive ticks

    Returns:
        max(0, 1 - floor(log10(|step|)))
    """
    if step == 0 or not math.isfinite(step):
        return 0
    step_magnitude = math.floor(math.log10(abs(step)))
    return max(0, -step_magnitude + 1)


def to_exponential(value: float, digits: int = DEFAULTS.SCIENTIFIC_DIGITS) -> str:
    """Format a value in scientific notation without exponent zero padding.

    Example: 2e7 -> "2.00e+7", 1.5e-4 -> "1.50e-4"
    """
    mantissa, exponent = f"{value:.{digits}e}".split("e")
    return f"{mantissa}e{int(exponent):+d}"


def format_tick_label(value: float, step: float) -> str:
    """Format a single tick label based on the step size.

    Args:
        value: The tick value to format
        step: The step size between ticks

    Returns:
        Fixed-decimal label, or scientific notation for very large/small values
    """
    if value == 0:
        value = 0.0  # Avoid "-0.0"
    decimals = step_decimals(step)
    if needs_scientific(value):
        return to_exponential(value)
    return f"{value:.{decimals}f}"


def format_tick_labels(values: Sequence[float], step: float) -> tuple[list[str], bool]:
    """Format all labels of a tick set in one notation mode.

    If any value would switch to scientific notation, the whole set does, so an
    axis never mixes "0.5" with "1.00e+6". Scientific labels keep two mantissa
    digits, so ticks closer together than that precision share a label: a
    narrow range around 1e300 prints "1.00e+300" for every tick.

    Args:
        values: Tick values of one axis
        step: The step size between ticks

    Returns:
        Tuple of (labels, scientific)
    """
    scientific = any(needs_scientific(v) for v in values)
    if not scientific:
        return [format_tick_label(v, step) for v in values], False
    return [to_exponential(0.0 if v == 0 else v) for v in values], True
