"""SVG markup for render frames.

The markup is deterministic for a given frame. Interactive elements carry a
`data-index` attribute so host-side scripts can forward pointer events to the
chart's hover controller.
"""

from __future__ import annotations

from django.utils.html import format_html, format_html_join
from django.utils.safestring import SafeString, mark_safe

from .configs import GRID_COLOR, HOVER_GUIDE_COLOR
from .frame import (
    CircleMarker,
    EmptyState,
    GradientFill,
    GuideLine,
    PathShape,
    Primitive,
    Rect,
    RenderFrame,
    RenderResult,
    TextLabel,
)
from .interaction import Tooltip
from .paths import format_number, path_data

SVG_NS = "http://www.w3.org/2000/svg"
LABEL_BAND = 24.0
TOOLTIP_LINE_HEIGHT = 14.0

_n = format_number


def render_svg(result: RenderResult) -> SafeString:
    """Return standalone SVG markup for a frame or empty state."""

    if isinstance(result, EmptyState):
        return _render_empty(result)

    frame = result
    width = frame.extent.width
    height = frame.extent.height + (LABEL_BAND if frame.kind != "donut" else 0.0)
    gradients = [shape.gradient for shape in frame.shapes if isinstance(shape, PathShape) and shape.gradient]

    body = [
        _render_defs(gradients),
        _render_shape_group(frame),
        format_html_join("", "{}", ((_render_label(label),) for label in frame.labels)),
    ]
    if frame.tooltip is not None:
        body.append(_render_tooltip(frame.tooltip))

    return format_html(
        '<svg xmlns="{}" viewBox="0 0 {} {}" width="{}" height="{}" class="chart chart-{}" role="img">{}</svg>',
        SVG_NS,
        _n(width),
        _n(height),
        _n(width),
        _n(height),
        frame.kind.replace("_", "-"),
        mark_safe("".join(body)),
    )


def render_legend_html(frame: RenderFrame) -> SafeString:
    """Return the legend as an HTML list (empty string when there is no legend).

    Rows of series legends carry no `data-index`, so hover forwarding only
    reaches rows that describe a single mark.
    """

    if not frame.legend:
        return mark_safe("")
    rows = format_html_join(
        "",
        '<li class="chart-legend-entry"{} style="opacity: {}">'
        '<span class="chart-legend-swatch" style="background-color: {}"></span>'
        '<span class="chart-legend-label">{}</span>{}</li>',
        (
            (
                _index_attr(entry.index),
                _n(entry.opacity),
                entry.color,
                entry.label,
                format_html(' <span class="chart-legend-detail">({})</span>', entry.detail) if entry.detail else "",
            )
            for entry in frame.legend
        ),
    )
    return format_html('<ul class="chart-legend">{}</ul>', rows)


def _render_empty(empty: EmptyState) -> SafeString:
    width = empty.extent.width
    height = empty.extent.height
    return format_html(
        '<svg xmlns="{}" viewBox="0 0 {} {}" width="{}" height="{}" class="chart chart-empty" role="img" '
        'data-reason="{}"><rect x="0" y="0" width="{}" height="{}" fill="{}" opacity="0.3"/>'
        '<text x="{}" y="{}" text-anchor="middle" class="chart-empty-message">{}</text></svg>',
        SVG_NS,
        _n(width),
        _n(height),
        _n(width),
        _n(height),
        empty.reason,
        _n(width),
        _n(height),
        GRID_COLOR,
        _n(width / 2),
        _n(height / 2),
        empty.message,
    )


def _render_defs(gradients: list[GradientFill]) -> str:
    if not gradients:
        return ""
    stops = format_html_join(
        "",
        '<linearGradient id="{}" x1="0" y1="0" x2="0" y2="1">'
        '<stop offset="0%" stop-color="{}" stop-opacity="{}"/>'
        '<stop offset="100%" stop-color="{}" stop-opacity="{}"/></linearGradient>',
        (
            (g.id, g.color, _n(g.top_opacity), g.color, _n(g.bottom_opacity))
            for g in gradients
        ),
    )
    return format_html("<defs>{}</defs>", stops)


def _render_shape_group(frame: RenderFrame) -> str:
    shapes = mark_safe("".join(_render_shape(shape) for shape in frame.shapes))
    if frame.rotation:
        center = frame.center
        return format_html(
            '<g class="chart-shapes" transform="rotate({} {} {})">{}</g>',
            _n(frame.rotation),
            _n(center.x),
            _n(center.y),
            shapes,
        )
    return format_html('<g class="chart-shapes">{}</g>', shapes)


def _render_shape(shape: Primitive) -> str:
    if isinstance(shape, Rect):
        return format_html(
            '<rect x="{}" y="{}" width="{}" height="{}" fill="{}" opacity="{}"{}/>',
            _n(shape.x),
            _n(shape.y),
            _n(shape.width),
            _n(shape.height),
            shape.fill,
            _n(shape.opacity),
            _index_attr(shape.index),
        )
    if isinstance(shape, PathShape):
        if shape.gradient is not None:
            fill = f"url(#{shape.gradient.id})"
        else:
            fill = shape.fill or "none"
        return format_html(
            '<path d="{}" fill="{}" stroke="{}" stroke-width="{}" opacity="{}"{}/>',
            path_data(shape.commands),
            fill,
            shape.stroke or "none",
            _n(shape.stroke_width),
            _n(shape.opacity),
            _index_attr(shape.index),
        )
    if isinstance(shape, CircleMarker):
        return format_html(
            '<circle cx="{}" cy="{}" r="{}" fill="{}" opacity="{}"{}/>',
            _n(shape.cx),
            _n(shape.cy),
            _n(shape.r),
            shape.fill,
            _n(shape.opacity),
            _index_attr(shape.index),
        )
    if isinstance(shape, GuideLine):
        is_vertical = shape.x1 == shape.x2 and shape.y1 != shape.y2
        return format_html(
            '<line x1="{}" y1="{}" x2="{}" y2="{}" stroke="{}" stroke-width="1"{}/>',
            _n(shape.x1),
            _n(shape.y1),
            _n(shape.x2),
            _n(shape.y2),
            HOVER_GUIDE_COLOR if is_vertical else GRID_COLOR,
            mark_safe(' stroke-dasharray="4"') if shape.dashed else "",
        )
    raise TypeError(f"Unsupported primitive: {shape!r}")


def _index_attr(index: int | None) -> str:
    if index is None:
        return ""
    return format_html(' data-index="{}"', index)


def _render_label(label: TextLabel) -> str:
    return format_html(
        '<text x="{}" y="{}" text-anchor="{}" dominant-baseline="middle" class="chart-label chart-label-{}">{}</text>',
        _n(label.x),
        _n(label.y),
        label.anchor,
        label.role,
        label.text,
    )


def _render_tooltip(tooltip: Tooltip) -> str:
    lines = ([tooltip.title] if tooltip.title else []) + list(tooltip.lines)
    spans = format_html_join(
        "",
        '<tspan x="{}" dy="{}">{}</tspan>',
        (
            (_n(tooltip.anchor.x), _n(0 if idx == 0 else TOOLTIP_LINE_HEIGHT), line)
            for idx, line in enumerate(lines)
        ),
    )
    offset_y = tooltip.anchor.y - TOOLTIP_LINE_HEIGHT * len(lines)
    return format_html(
        '<g class="chart-tooltip" data-index="{}"><text x="{}" y="{}" text-anchor="middle">{}</text></g>',
        tooltip.index,
        _n(tooltip.anchor.x),
        _n(offset_y),
        spans,
    )
