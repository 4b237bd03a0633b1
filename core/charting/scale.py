"""Linear value scaling shared by every chart type."""

from __future__ import annotations

from collections.abc import Iterable
from math import isfinite


def domain_max(values: Iterable[float], *, headroom: float = 1.0) -> float:
    """Return the upper bound of a zero-based value domain.

    Args:
        values: Dataset values.
        headroom: Multiplier applied to the largest value (e.g. 1.1 leaves 10%
            free space above the tallest point).

    Returns:
        `max(values) * headroom`, or 1.0 when `values` is empty or its maximum
        is not positive so callers never divide by zero. When the headroom
        would overflow, the bare maximum is returned instead.
    """

    peak = max(values, default=0.0)
    if peak <= 0:
        return 1.0
    padded = peak * headroom
    return padded if isfinite(padded) else peak


def scale(value: float, domain_max: float, output_max: float) -> float:
    """Map `value` from `[0, domain_max]` onto `[0, output_max]`.

    No clamping is applied; callers decide how to treat values outside the
    domain.
    """

    return (value / domain_max) * output_max


def x_position(index: int, count: int, width: float) -> float:
    """Return the horizontal position of point `index` spread across `width`.

    A single point sits at the origin instead of dividing by zero.
    """

    if count <= 1:
        return 0.0
    return (index / (count - 1)) * width
