"""Vector path commands and builders for line and area shapes.

Paths are kept as typed command tuples so geometry can be asserted on
directly in tests; `path_data` converts them to SVG path syntax for the
rendering surface.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeAlias

from .schema import Coordinate


class InsufficientDataError(ValueError):
    """Raised when a path needs more coordinates than were provided."""

    def __init__(self, *, required: int, actual: int) -> None:
        """Initialize the error.

        Args:
            required: Minimum number of coordinates needed.
            actual: Number of coordinates supplied.
        """

        super().__init__(f"At least {required} coordinates are required to build a path, got {actual}.")
        self.required = required
        self.actual = actual


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new sub-path at (x, y)."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class LineTo:
    """Draw a straight segment to (x, y)."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class ArcTo:
    """Draw a circular arc to (x, y).

    Args:
        radius: Arc radius (both axes; only circular arcs are produced).
        large_arc: 1 when the arc spans more than 180 degrees, else 0.
        sweep: 1 for the positive-angle direction, 0 for the reverse.
        x: End point x.
        y: End point y.
    """

    radius: float
    large_arc: int
    sweep: int
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class ClosePath:
    """Close the current sub-path."""


PathCommand: TypeAlias = MoveTo | LineTo | ArcTo | ClosePath

MIN_PATH_POINTS = 2


def build_polyline(coords: Sequence[Coordinate]) -> tuple[PathCommand, ...]:
    """Build an open, piecewise-linear path through `coords` in order.

    Raises:
        InsufficientDataError: When fewer than two coordinates are given.
    """

    if len(coords) < MIN_PATH_POINTS:
        raise InsufficientDataError(required=MIN_PATH_POINTS, actual=len(coords))
    first, *rest = coords
    commands: list[PathCommand] = [MoveTo(first.x, first.y)]
    commands.extend(LineTo(c.x, c.y) for c in rest)
    return tuple(commands)


def build_area(coords: Sequence[Coordinate], *, baseline_y: float) -> tuple[PathCommand, ...]:
    """Build a closed area-under-curve path for `coords`.

    The polyline is followed by a drop to `baseline_y` under the last point,
    a run back to the first point's x along the baseline, then a close.

    Args:
        coords: Ordered coordinates of the line.
        baseline_y: Output-space y of the zero value.

    Returns:
        Path commands for the filled area.

    Raises:
        InsufficientDataError: When fewer than two coordinates are given.
    """

    polyline = build_polyline(coords)
    return polyline + (
        LineTo(coords[-1].x, baseline_y),
        LineTo(coords[0].x, baseline_y),
        ClosePath(),
    )


def format_number(value: float) -> str:
    """Format a coordinate with at most four decimals and no trailing zeros."""

    text = f"{value:.4f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def path_data(commands: Sequence[PathCommand]) -> str:
    """Serialize path commands into an SVG `d` attribute string."""

    parts: list[str] = []
    for command in commands:
        if isinstance(command, MoveTo):
            parts.append(f"M {format_number(command.x)} {format_number(command.y)}")
        elif isinstance(command, LineTo):
            parts.append(f"L {format_number(command.x)} {format_number(command.y)}")
        elif isinstance(command, ArcTo):
            radius = format_number(command.radius)
            parts.append(
                f"A {radius} {radius} 0 {command.large_arc} {command.sweep} "
                f"{format_number(command.x)} {format_number(command.y)}"
            )
        elif isinstance(command, ClosePath):
            parts.append("Z")
        else:
            raise TypeError(f"Unsupported path command: {command!r}")
    return " ".join(parts)
