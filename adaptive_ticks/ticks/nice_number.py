"""Nice number rounding for axis steps."""

import math

# Mantissas a nice step may take, in ascending order
NICE_FRACTIONS = (1, 2, 5, 10)


def nice_number(value: float, round: bool) -> float:
    """Convert a positive number to a "nice" number of the form k * 10^n, k in {1, 2, 5}.

    Callers must reject zero, NaN and infinity before calling.

    Args:
        value: Positive number to convert
        round: If True, snap to the closest nice number. If False, return the
            smallest nice number that is >= value (ceiling policy).

    Returns:
        Nice number close to value
    """
    exponent = math.floor(math.log10(value))
    fraction = value / 10**exponent

    if round:
        if fraction < 1.5:
            nice_fraction = 1
        elif fraction < 3:
            nice_fraction = 2
        elif fraction < 7:
            nice_fraction = 5
        else:
            nice_fraction = 10
    else:
        if fraction <= 1:
            nice_fraction = 1
        elif fraction <= 2:
            nice_fraction = 2
        elif fraction <= 5:
            nice_fraction = 5
        else:
            nice_fraction = 10

    return float(nice_fraction * 10**exponent)


def decompose(step: float) -> tuple[int, int]:
    """Split a nice number into (k, exponent) with k in {1, 2, 5}."""
    exponent = math.floor(math.log10(step))
    k = int(round(step / 10**exponent))
    if k == 10:
        return 1, exponent + 1
    return k, exponent


def next_nice_number(step: float) -> float:
    """Return the next nice number above step on the 1-2-5 ladder."""
    k, exponent = decompose(step)
    if k == 1:
        return float(2 * 10**exponent)
    if k == 2:
        return float(5 * 10**exponent)
    return float(10 ** (exponent + 1))


def previous_nice_number(step: float) -> float:
    """Return the next nice number below step on the 1-2-5 ladder."""
    k, exponent = decompose(step)
    if k == 5:
        return float(2 * 10**exponent)
    if k == 2:
        return float(1 * 10**exponent)
    return float(5 * 10 ** (exponent - 1))
