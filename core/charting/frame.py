"""Render frame types: the drawable output of a chart render pass.

A RenderFrame is a flat, ordered list of primitives plus the text (labels,
legend, tooltip) derived from the dataset. Draw order is list order. Any
vector surface can consume it; `core.charting.svg` is the one shipped here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

from .interaction import Tooltip
from .paths import PathCommand
from .schema import ChartKind, Coordinate, OutputExtent

TextAnchor = Literal["start", "middle", "end"]
EmptyReason = Literal["no_data", "insufficient_data"]
FrameKind = ChartKind | Literal["grouped_bar", "multi_line"]


@dataclass(frozen=True, slots=True)
class GradientFill:
    """Vertical linear gradient of a single color (used under line charts).

    Args:
        id: Identifier unique within the frame.
        color: Gradient color.
        top_opacity: Opacity at the top of the shape.
        bottom_opacity: Opacity at the baseline.
    """

    id: str
    color: str
    top_opacity: float
    bottom_opacity: float


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle (a bar)."""

    x: float
    y: float
    width: float
    height: float
    fill: str
    opacity: float = 1.0
    index: int | None = None


@dataclass(frozen=True, slots=True)
class PathShape:
    """Filled and/or stroked path.

    Args:
        commands: Path geometry.
        fill: Fill color, or None for an unfilled path.
        stroke: Stroke color, or None for no outline.
        stroke_width: Outline width.
        opacity: Element opacity.
        gradient: Gradient fill taking precedence over `fill`.
        index: Data index the shape represents, when interactive.
    """

    commands: tuple[PathCommand, ...]
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float = 0.0
    opacity: float = 1.0
    gradient: GradientFill | None = None
    index: int | None = None


@dataclass(frozen=True, slots=True)
class CircleMarker:
    """Circular point marker on a line chart."""

    cx: float
    cy: float
    r: float
    fill: str
    opacity: float = 1.0
    index: int | None = None


@dataclass(frozen=True, slots=True)
class GuideLine:
    """Non-interactive reference line (grid line or hover guide)."""

    x1: float
    y1: float
    x2: float
    y2: float
    dashed: bool = False


@dataclass(frozen=True, slots=True)
class TextLabel:
    """Positioned text (axis labels, donut total)."""

    x: float
    y: float
    text: str
    anchor: TextAnchor = "middle"
    role: str = "axis"


@dataclass(frozen=True, slots=True)
class LegendEntry:
    """One legend row.

    `index` matches the `index` of the marks the row describes. It is None for
    series legends (grouped bars, multi-line), whose rows name a series
    rather than a hoverable group or x position.
    """

    index: int | None
    label: str
    color: str
    opacity: float = 1.0
    detail: str | None = None


Primitive: TypeAlias = Rect | PathShape | CircleMarker | GuideLine


@dataclass(frozen=True, slots=True)
class RenderFrame:
    """The complete output of one render pass.

    Args:
        kind: Chart variant that produced the frame.
        extent: Size of the plotting area.
        shapes: Primitives in draw order.
        labels: Axis and annotation text.
        legend: Legend rows (empty when the chart has no legend).
        tooltip: Tooltip for the highlighted element, if any.
        active_index: Highlighted index after stale-index correction.
        rotation: Rotation in degrees applied around the frame center when
            drawn (donuts start at 12 o'clock).
        total: Dataset total (shown in the donut center).
    """

    kind: FrameKind
    extent: OutputExtent
    shapes: tuple[Primitive, ...]
    labels: tuple[TextLabel, ...] = ()
    legend: tuple[LegendEntry, ...] = ()
    tooltip: Tooltip | None = None
    active_index: int | None = None
    rotation: float = 0.0
    total: float | None = None

    @property
    def center(self) -> Coordinate:
        """Center of the plotting area (rotation origin)."""

        return Coordinate(self.extent.width / 2, self.extent.height / 2)


@dataclass(frozen=True, slots=True)
class EmptyState:
    """A chart that cannot be drawn for the given data.

    Args:
        kind: Chart variant that was requested.
        extent: Size reserved for the placeholder.
        reason: Machine-readable reason.
        message: Placeholder text for the UI.
    """

    kind: FrameKind
    extent: OutputExtent
    reason: EmptyReason
    message: str


RenderResult: TypeAlias = RenderFrame | EmptyState
