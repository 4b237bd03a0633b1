"""Polar geometry for donut charts.

Each data point becomes an annular wedge whose sweep is proportional to its
share of the dataset total. Wedges are laid out consecutively from 0 degrees
so together they close the full circle.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from math import cos, floor, fsum, pi, sin

from .paths import ArcTo, ClosePath, LineTo, MoveTo, PathCommand
from .schema import Coordinate, DataPoint

FULL_CIRCLE = 360.0
HALF_CIRCLE = 180.0
FULL_CIRCLE_TOLERANCE = 1e-9


@dataclass(frozen=True, slots=True)
class WedgeSegment:
    """Geometry and legend data for one donut wedge.

    Args:
        path: Closed path outlining the annular sector.
        color: Fill color (point override or palette fallback).
        percentage_of_total: Unrounded share of the total in [0, 1].
        source_index: Index of the DataPoint this wedge came from.
        label: Source point label.
        value: Source point value.
        start_angle: Start angle in degrees.
        end_angle: End angle in degrees.
    """

    path: tuple[PathCommand, ...]
    color: str
    percentage_of_total: float
    source_index: int
    label: str
    value: float
    start_angle: float
    end_angle: float

    @property
    def sweep_angle(self) -> float:
        """Angular extent of the wedge in degrees."""

        return self.end_angle - self.start_angle


def polar_to_cartesian(center: Coordinate, radius: float, angle_degrees: float) -> Coordinate:
    """Convert a polar position around `center` to output coordinates."""

    theta = angle_degrees * pi / 180
    return Coordinate(center.x + radius * cos(theta), center.y + radius * sin(theta))


def large_arc_flag(sweep_degrees: float) -> int:
    """Return 1 when an arc spans more than a semicircle, else 0."""

    return 1 if sweep_degrees > HALF_CIRCLE else 0


def palette_color(index: int, palette: Sequence[str]) -> str:
    """Return the palette entry for `index`, cycling through the palette."""

    return palette[index % len(palette)]


def wedge_path(
    *,
    center: Coordinate,
    radius: float,
    inner_radius: float,
    start_angle: float,
    end_angle: float,
) -> tuple[PathCommand, ...]:
    """Build the outline of one annular sector.

    The outer arc is traversed forward, a radial line moves inward, and the
    inner arc is traversed backward before closing.
    """

    sweep = end_angle - start_angle
    if sweep >= FULL_CIRCLE - FULL_CIRCLE_TOLERANCE:
        return _full_ring_path(center=center, radius=radius, inner_radius=inner_radius, start_angle=start_angle)

    large_arc = large_arc_flag(sweep)
    outer_start = polar_to_cartesian(center, radius, start_angle)
    outer_end = polar_to_cartesian(center, radius, end_angle)
    inner_end = polar_to_cartesian(center, inner_radius, end_angle)
    inner_start = polar_to_cartesian(center, inner_radius, start_angle)
    return (
        MoveTo(outer_start.x, outer_start.y),
        ArcTo(radius, large_arc, 1, outer_end.x, outer_end.y),
        LineTo(inner_end.x, inner_end.y),
        ArcTo(inner_radius, large_arc, 0, inner_start.x, inner_start.y),
        ClosePath(),
    )


def _full_ring_path(
    *,
    center: Coordinate,
    radius: float,
    inner_radius: float,
    start_angle: float,
) -> tuple[PathCommand, ...]:
    """Outline a complete ring as two half arcs per radius.

    A single arc whose endpoints coincide is not drawn by SVG renderers.
    """

    mid_angle = start_angle + HALF_CIRCLE
    end_angle = start_angle + FULL_CIRCLE
    outer_start = polar_to_cartesian(center, radius, start_angle)
    outer_mid = polar_to_cartesian(center, radius, mid_angle)
    outer_end = polar_to_cartesian(center, radius, end_angle)
    inner_end = polar_to_cartesian(center, inner_radius, end_angle)
    inner_mid = polar_to_cartesian(center, inner_radius, mid_angle)
    inner_start = polar_to_cartesian(center, inner_radius, start_angle)
    return (
        MoveTo(outer_start.x, outer_start.y),
        ArcTo(radius, 0, 1, outer_mid.x, outer_mid.y),
        ArcTo(radius, 0, 1, outer_end.x, outer_end.y),
        LineTo(inner_end.x, inner_end.y),
        ArcTo(inner_radius, 0, 0, inner_mid.x, inner_mid.y),
        ArcTo(inner_radius, 0, 0, inner_start.x, inner_start.y),
        ClosePath(),
    )


def build_wedges(
    points: Sequence[DataPoint],
    *,
    center: Coordinate,
    radius: float,
    thickness: float,
    palette: Sequence[str],
) -> tuple[WedgeSegment, ...]:
    """Convert an ordered dataset into consecutive donut wedges.

    Args:
        points: Ordered dataset; wedge order follows input order.
        center: Donut center in output space.
        radius: Outer radius.
        thickness: Ring thickness; the inner radius is `radius - thickness`.
        palette: Fallback colors used when a point has no color.

    Returns:
        One WedgeSegment per point, or an empty tuple when the total is zero
        (no division is attempted).
    """

    # Values are divided by the largest magnitude first so the sum stays finite
    # even for values near the float limit.
    magnitude = max((abs(point.value) for point in points), default=0.0)
    if magnitude == 0:
        return ()
    weights = [point.value / magnitude for point in points]
    total = fsum(weights)
    if total == 0:
        return ()

    inner_radius = radius - thickness
    wedges: list[WedgeSegment] = []
    cumulative_angle = 0.0
    for idx, point in enumerate(points):
        share = weights[idx] / total
        sweep = share * FULL_CIRCLE
        start_angle = cumulative_angle
        end_angle = cumulative_angle + sweep
        cumulative_angle += sweep
        wedges.append(
            WedgeSegment(
                path=wedge_path(
                    center=center,
                    radius=radius,
                    inner_radius=inner_radius,
                    start_angle=start_angle,
                    end_angle=end_angle,
                ),
                color=point.color or palette_color(idx, palette),
                percentage_of_total=share,
                source_index=idx,
                label=point.label,
                value=point.value,
                start_angle=start_angle,
                end_angle=end_angle,
            )
        )
    return tuple(wedges)


def percent_label(fraction: float) -> str:
    """Format a share of the total as a whole percent, rounding halves up."""

    return f"{floor(fraction * 100 + 0.5)}%"
