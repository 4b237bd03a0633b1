"""Chart renderers: datasets in, render frames out.

Every renderer is a pure function of `(dataset, extent, highlight, defaults)`.
Geometry does not depend on the highlight; only opacity, the hover guide and
the tooltip do, so hosts can re-render cheaply on every pointer event.

Degenerate inputs never raise: empty datasets and single-point line charts
return an `EmptyState`, and all-zero datasets render flat bars or an empty
donut.
"""

from __future__ import annotations

from collections.abc import Sequence
from math import fsum

from .arcs import build_wedges, percent_label, polar_to_cartesian
from .configs import DEFAULTS, ChartDefaults
from .frame import (
    CircleMarker,
    EmptyReason,
    EmptyState,
    FrameKind,
    GradientFill,
    GuideLine,
    LegendEntry,
    PathShape,
    Primitive,
    Rect,
    RenderFrame,
    RenderResult,
    TextAnchor,
    TextLabel,
)
from .interaction import IDLE, HighlightState, Tooltip, effective_index, emphasis_for, format_value, tooltip_for
from .labels import thin_label_indices
from .paths import MIN_PATH_POINTS, build_area, build_polyline
from .scale import domain_max, scale, x_position
from .schema import ChartKind, Coordinate, DataPoint, GroupedDataPoint, LineSeries, OutputExtent

AXIS_LABEL_OFFSET = 14.0
DONUT_ROTATION = -90.0
GROUPED_BAR_GAP = 4.0

NO_DATA_MESSAGE = "No data to display."
INSUFFICIENT_DATA_MESSAGE = "At least two data points are needed to draw a line chart."

__all__ = [
    "render_bar",
    "render_chart",
    "render_donut",
    "render_grouped_bar",
    "render_line",
    "render_multi_line",
]


def render_bar(
    points: Sequence[DataPoint],
    extent: OutputExtent | None = None,
    highlight: HighlightState = IDLE,
    *,
    defaults: ChartDefaults | None = None,
) -> RenderResult:
    """Render a vertical bar chart.

    The largest value fills the full plot height; every other bar is exactly
    `value / max` of it. An all-zero dataset uses a domain of 1, which yields
    zero-height bars.

    Args:
        points: Ordered dataset (x-axis order).
        extent: Plot size; defaults to `defaults.width` x `defaults.height`.
        highlight: Current hover snapshot.
        defaults: Rendering defaults.

    Returns:
        RenderFrame with one Rect per point, or EmptyState for an empty dataset.
    """

    defaults = defaults or DEFAULTS
    extent = extent or _default_extent(defaults)
    if not points:
        return _empty("bar", extent, reason="no_data")

    count = len(points)
    active = effective_index(highlight, count)
    peak = domain_max(point.value for point in points)
    slot = extent.width / count
    bar_width = min(slot * defaults.bar_fill_ratio, defaults.max_bar_width)

    shapes: list[Primitive] = list(_horizontal_guides(extent))
    labels: list[TextLabel] = []
    tooltip: Tooltip | None = None
    for idx, point in enumerate(points):
        center_x = slot * idx + slot / 2
        bar_height = max(0.0, scale(point.value, peak, extent.height))
        top = extent.height - bar_height
        emphasis = emphasis_for(active, idx, dimmed_opacity=defaults.dimmed_opacity)
        shapes.append(
            Rect(
                x=center_x - bar_width / 2,
                y=top,
                width=bar_width,
                height=bar_height,
                fill=point.color or defaults.bar_color,
                opacity=emphasis.opacity,
                index=idx,
            )
        )
        labels.append(TextLabel(x=center_x, y=extent.height + AXIS_LABEL_OFFSET, text=point.label))
        if idx == active:
            tooltip = tooltip_for(point, anchor=Coordinate(center_x, top), index=idx)

    return RenderFrame(
        kind="bar",
        extent=extent,
        shapes=tuple(shapes),
        labels=tuple(labels),
        tooltip=tooltip,
        active_index=active,
    )


def render_donut(
    points: Sequence[DataPoint],
    extent: OutputExtent | None = None,
    highlight: HighlightState = IDLE,
    *,
    defaults: ChartDefaults | None = None,
) -> RenderResult:
    """Render a donut chart with a legend and the dataset total in the center.

    The donut occupies a square whose side is `extent.height`. Wedge angles
    start at 0 degrees; the frame carries a -90 degree rotation so the first
    wedge starts at 12 o'clock when drawn. Tooltip anchors are reported in
    drawn (rotated) coordinates.

    Args:
        points: Ordered dataset (wedge order).
        extent: Output size; only the height is used.
        highlight: Current hover snapshot, shared by wedges and legend rows.
        defaults: Rendering defaults (palette, ring proportions).

    Returns:
        RenderFrame with one wedge path per point (none when the total is
        zero), or EmptyState for an empty dataset.
    """

    defaults = defaults or DEFAULTS
    size = (extent or _default_extent(defaults)).height
    square = OutputExtent(width=size, height=size)
    if not points:
        return _empty("donut", square, reason="no_data")

    center = Coordinate(size / 2, size / 2)
    radius = size * defaults.donut_radius_ratio
    thickness = size * defaults.donut_thickness_ratio
    wedges = build_wedges(points, center=center, radius=radius, thickness=thickness, palette=defaults.palette)
    total = fsum(point.value for point in points)
    active = effective_index(highlight, len(points))

    shapes: list[Primitive] = []
    tooltip: Tooltip | None = None
    for wedge in wedges:
        emphasis = emphasis_for(active, wedge.source_index, dimmed_opacity=defaults.dimmed_opacity)
        shapes.append(PathShape(commands=wedge.path, fill=wedge.color, opacity=emphasis.opacity, index=wedge.source_index))
        if wedge.source_index == active:
            mid_angle = (wedge.start_angle + wedge.end_angle) / 2 + DONUT_ROTATION
            anchor = polar_to_cartesian(center, radius - thickness / 2, mid_angle)
            tooltip = tooltip_for(points[wedge.source_index], anchor=anchor, index=wedge.source_index)

    wedge_by_index = {wedge.source_index: wedge for wedge in wedges}
    legend: list[LegendEntry] = []
    for idx, point in enumerate(points):
        wedge = wedge_by_index.get(idx)
        legend.append(
            LegendEntry(
                index=idx,
                label=point.label,
                color=wedge.color if wedge else (point.color or defaults.palette[idx % defaults.palette_length]),
                opacity=emphasis_for(active, idx, dimmed_opacity=defaults.dimmed_opacity).opacity,
                detail=percent_label(wedge.percentage_of_total) if wedge else None,
            )
        )

    return RenderFrame(
        kind="donut",
        extent=square,
        shapes=tuple(shapes),
        labels=(TextLabel(x=center.x, y=center.y, text=format_value(total), role="total"),),
        legend=tuple(legend),
        tooltip=tooltip,
        active_index=active,
        rotation=DONUT_ROTATION,
        total=total,
    )


def render_line(
    points: Sequence[DataPoint],
    extent: OutputExtent | None = None,
    highlight: HighlightState = IDLE,
    *,
    defaults: ChartDefaults | None = None,
) -> RenderResult:
    """Render a single-series line chart with a gradient area and point markers.

    Args:
        points: Ordered dataset (x-axis order).
        extent: Plot size.
        highlight: Current hover snapshot.
        defaults: Rendering defaults.

    Returns:
        RenderFrame, or EmptyState when fewer than two points are supplied.
    """

    defaults = defaults or DEFAULTS
    extent = extent or _default_extent(defaults)
    if len(points) < MIN_PATH_POINTS:
        return _empty("line", extent, reason="insufficient_data")

    count = len(points)
    active = effective_index(highlight, count)
    peak = domain_max((point.value for point in points), headroom=defaults.line_headroom)
    coords = _line_coordinates([point.value for point in points], extent=extent, peak=peak)
    color = defaults.line_color
    gradient = GradientFill(
        id="line-area-0",
        color=color,
        top_opacity=defaults.area_opacity_top,
        bottom_opacity=defaults.area_opacity_bottom,
    )

    shapes: list[Primitive] = list(_horizontal_guides(extent))
    shapes.append(PathShape(commands=build_area(coords, baseline_y=extent.height), gradient=gradient))
    shapes.append(PathShape(commands=build_polyline(coords), stroke=color, stroke_width=defaults.stroke_width))
    if active is not None:
        shapes.append(_hover_guide(coords[active].x, extent))
    shapes.extend(_markers(coords, color=color, active=active, defaults=defaults))

    tooltip = None
    if active is not None:
        tooltip = tooltip_for(points[active], anchor=coords[active], index=active)

    return RenderFrame(
        kind="line",
        extent=extent,
        shapes=tuple(shapes),
        labels=_thinned_axis_labels([point.label for point in points], coords, extent=extent, defaults=defaults),
        tooltip=tooltip,
        active_index=active,
    )


def render_multi_line(
    labels: Sequence[str],
    series: Sequence[LineSeries],
    extent: OutputExtent | None = None,
    highlight: HighlightState = IDLE,
    *,
    defaults: ChartDefaults | None = None,
) -> RenderResult:
    """Render several line series over shared x labels.

    All series share one value domain. Hovering an index highlights that
    x position across every series and lists each series in the tooltip.

    Args:
        labels: Shared x-axis labels.
        series: Series whose values align with `labels`.
        extent: Plot size.
        highlight: Current hover snapshot (an x index).
        defaults: Rendering defaults.

    Returns:
        RenderFrame, or EmptyState when there are no series or fewer than two
        labels.

    Raises:
        ValueError: When a series length differs from the number of labels.
    """

    defaults = defaults or DEFAULTS
    extent = extent or _default_extent(defaults)
    if not series:
        return _empty("multi_line", extent, reason="no_data")
    if len(labels) < MIN_PATH_POINTS:
        return _empty("multi_line", extent, reason="insufficient_data")
    for item in series:
        if len(item.values) != len(labels):
            raise ValueError(
                f"Series {item.label!r} has {len(item.values)} values but the chart has {len(labels)} labels."
            )

    active = effective_index(highlight, len(labels))
    peak = domain_max((value for item in series for value in item.values), headroom=defaults.line_headroom)
    shapes: list[Primitive] = list(_horizontal_guides(extent))
    series_coords: list[tuple[Coordinate, ...]] = []
    for item in series:
        coords = _line_coordinates(item.values, extent=extent, peak=peak)
        series_coords.append(coords)
        shapes.append(PathShape(commands=build_polyline(coords), stroke=item.color, stroke_width=defaults.stroke_width))
        shapes.extend(_markers(coords, color=item.color, active=active, defaults=defaults))

    tooltip = None
    if active is not None:
        x = series_coords[0][active].x
        shapes.append(_hover_guide(x, extent))
        tooltip = Tooltip(
            index=active,
            anchor=Coordinate(x, min(coords[active].y for coords in series_coords)),
            title=labels[active],
            lines=tuple(f"{item.label}: {format_value(item.values[active], thousands=True)}" for item in series),
        )

    return RenderFrame(
        kind="multi_line",
        extent=extent,
        shapes=tuple(shapes),
        labels=_thinned_axis_labels(list(labels), series_coords[0], extent=extent, defaults=defaults),
        legend=tuple(
            LegendEntry(index=None, label=item.label, color=item.color) for item in series
        ),
        tooltip=tooltip,
        active_index=active,
    )


def render_grouped_bar(
    groups: Sequence[GroupedDataPoint],
    extent: OutputExtent | None = None,
    highlight: HighlightState = IDLE,
    *,
    series_labels: tuple[str, str] = ("Series 1", "Series 2"),
    defaults: ChartDefaults | None = None,
) -> RenderResult:
    """Render pairs of bars (e.g. allocated vs spent) per group label.

    Args:
        groups: Ordered groups.
        extent: Plot size.
        highlight: Current hover snapshot (a group index).
        series_labels: Legend/tooltip names of the two series.
        defaults: Rendering defaults.

    Returns:
        RenderFrame with two Rects per group, or EmptyState for no groups.
    """

    defaults = defaults or DEFAULTS
    extent = extent or _default_extent(defaults)
    if not groups:
        return _empty("grouped_bar", extent, reason="no_data")

    count = len(groups)
    active = effective_index(highlight, count)
    peak = domain_max(
        (value for group in groups for value in (group.value1, group.value2)),
        headroom=defaults.grouped_headroom,
    )
    slot = extent.width / count
    bar_width = max(0.0, min((slot * defaults.bar_fill_ratio - GROUPED_BAR_GAP) / 2, defaults.max_bar_width / 2))
    color1, color2 = defaults.grouped_colors

    shapes: list[Primitive] = list(_horizontal_guides(extent))
    labels: list[TextLabel] = []
    tooltip: Tooltip | None = None
    for idx, group in enumerate(groups):
        center_x = slot * idx + slot / 2
        opacity = emphasis_for(active, idx, dimmed_opacity=defaults.dimmed_opacity).opacity
        height1 = max(0.0, scale(group.value1, peak, extent.height))
        height2 = max(0.0, scale(group.value2, peak, extent.height))
        shapes.append(
            Rect(
                x=center_x - GROUPED_BAR_GAP / 2 - bar_width,
                y=extent.height - height1,
                width=bar_width,
                height=height1,
                fill=group.color1 or color1,
                opacity=opacity,
                index=idx,
            )
        )
        shapes.append(
            Rect(
                x=center_x + GROUPED_BAR_GAP / 2,
                y=extent.height - height2,
                width=bar_width,
                height=height2,
                fill=group.color2 or color2,
                opacity=opacity,
                index=idx,
            )
        )
        labels.append(TextLabel(x=center_x, y=extent.height + AXIS_LABEL_OFFSET, text=group.label))
        if idx == active:
            tooltip = Tooltip(
                index=idx,
                anchor=Coordinate(center_x, extent.height - max(height1, height2)),
                title=group.label,
                lines=(
                    f"{series_labels[0]}: {format_value(group.value1, thousands=True)}",
                    f"{series_labels[1]}: {format_value(group.value2, thousands=True)}",
                ),
            )

    return RenderFrame(
        kind="grouped_bar",
        extent=extent,
        shapes=tuple(shapes),
        labels=tuple(labels),
        legend=(
            LegendEntry(index=None, label=series_labels[0], color=color1),
            LegendEntry(index=None, label=series_labels[1], color=color2),
        ),
        tooltip=tooltip,
        active_index=active,
    )


_RENDERERS = {
    "bar": render_bar,
    "donut": render_donut,
    "line": render_line,
}


def render_chart(
    kind: ChartKind,
    points: Sequence[DataPoint],
    extent: OutputExtent | None = None,
    highlight: HighlightState = IDLE,
    *,
    defaults: ChartDefaults | None = None,
) -> RenderResult:
    """Render `points` with the renderer registered for `kind`.

    Raises:
        ValueError: When `kind` is not a supported chart kind.
    """

    renderer = _RENDERERS.get(kind)
    if renderer is None:
        raise ValueError(f"Unsupported chart kind: {kind!r}.")
    return renderer(points, extent, highlight, defaults=defaults)


def _default_extent(defaults: ChartDefaults) -> OutputExtent:
    return OutputExtent(width=defaults.width, height=defaults.height)


def _empty(kind: FrameKind, extent: OutputExtent, *, reason: EmptyReason) -> EmptyState:
    """Build the placeholder frame for data that cannot be drawn."""

    message = INSUFFICIENT_DATA_MESSAGE if reason == "insufficient_data" else NO_DATA_MESSAGE
    return EmptyState(kind=kind, extent=extent, reason=reason, message=message)


def _horizontal_guides(extent: OutputExtent) -> tuple[GuideLine, ...]:
    """Top, middle (dashed) and baseline grid lines."""

    return (
        GuideLine(0.0, 0.0, extent.width, 0.0),
        GuideLine(0.0, extent.height / 2, extent.width, extent.height / 2, dashed=True),
        GuideLine(0.0, extent.height, extent.width, extent.height),
    )


def _hover_guide(x: float, extent: OutputExtent) -> GuideLine:
    return GuideLine(x, 0.0, x, extent.height, dashed=True)


def _line_coordinates(values: Sequence[float], *, extent: OutputExtent, peak: float) -> tuple[Coordinate, ...]:
    """Map values to output space; tooltips reuse these exact coordinates."""

    count = len(values)
    return tuple(
        Coordinate(x_position(idx, count, extent.width), extent.height - scale(value, peak, extent.height))
        for idx, value in enumerate(values)
    )


def _markers(
    coords: Sequence[Coordinate],
    *,
    color: str,
    active: int | None,
    defaults: ChartDefaults,
) -> list[CircleMarker]:
    markers: list[CircleMarker] = []
    for idx, coord in enumerate(coords):
        emphasis = emphasis_for(active, idx, dimmed_opacity=defaults.dimmed_opacity)
        radius = defaults.marker_radius * (1.5 if idx == active else 1.0)
        markers.append(CircleMarker(cx=coord.x, cy=coord.y, r=radius, fill=color, opacity=emphasis.opacity, index=idx))
    return markers


def _thinned_axis_labels(
    labels: Sequence[str],
    coords: Sequence[Coordinate],
    *,
    extent: OutputExtent,
    defaults: ChartDefaults,
) -> tuple[TextLabel, ...]:
    """X-axis labels for the thinned subset of indices; edge labels hug the plot bounds."""

    last = len(labels) - 1
    out: list[TextLabel] = []
    for idx in thin_label_indices(len(labels), max_labels=defaults.max_labels):
        anchor: TextAnchor = "start" if idx == 0 else "end" if idx == last else "middle"
        out.append(TextLabel(x=coords[idx].x, y=extent.height + AXIS_LABEL_OFFSET, text=labels[idx], anchor=anchor))
    return tuple(out)
