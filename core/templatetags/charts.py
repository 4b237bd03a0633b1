"""Template tags that render charts inline.

Usage::

    {% load charts %}
    {% bar_chart rating_points height=180 %}
    {% donut_chart activity_points highlight=0 %}
    {% line_chart enrollment_points width=600 %}

Datasets may be lists of `{label, value, color?}` dicts or DataPoint-like
objects (for example the points returned by `analysis.distributions`).
"""

from __future__ import annotations

import logging

from django import template
from django.utils.html import format_html
from django.utils.safestring import SafeString

from core.charting.configs import chart_defaults
from core.charting.frame import EmptyState, RenderFrame, RenderResult
from core.charting.render import NO_DATA_MESSAGE
from core.charting.schema import OutputExtent
from core.charting.svg import render_legend_html, render_svg
from core.charting.validator import ChartPayloadError
from core.services import render_payload

logger = logging.getLogger(__name__)

register = template.Library()


@register.simple_tag
def bar_chart(data, height=None, width=None, highlight=None) -> SafeString:
    """Render a bar chart."""

    return _chart_markup("bar", data, height=height, width=width, highlight=highlight)


@register.simple_tag
def donut_chart(data, height=None, highlight=None) -> SafeString:
    """Render a donut chart followed by its percentage legend."""

    return _chart_markup("donut", data, height=height, width=None, highlight=highlight)


@register.simple_tag
def line_chart(data, height=None, width=None, highlight=None) -> SafeString:
    """Render a single-series line chart."""

    return _chart_markup("line", data, height=height, width=width, highlight=highlight)


def _chart_markup(kind: str, data, *, height, width, highlight) -> SafeString:
    height = float(height) if height else None
    width = float(width) if width else None
    try:
        result: RenderResult = render_payload(
            kind,
            list(data or []),
            height=height,
            width=width,
            highlight=int(highlight) if highlight is not None else None,
        )
    except ChartPayloadError as exc:
        logger.warning("Rejected %s chart data in template: %s", kind, "; ".join(exc.errors))
        result = _no_data(kind, height=height, width=width)
    legend = render_legend_html(result) if isinstance(result, RenderFrame) else ""
    return format_html('<figure class="chart-widget chart-widget-{}">{}{}</figure>', kind, render_svg(result), legend)


def _no_data(kind: str, *, height: float | None, width: float | None) -> EmptyState:
    """Placeholder shown in place of a chart whose data was rejected."""

    defaults = chart_defaults()
    height = height or defaults.height
    width = height if kind == "donut" else width or defaults.width
    return EmptyState(
        kind=kind,  # type: ignore[arg-type]
        extent=OutputExtent(width=width, height=height),
        reason="no_data",
        message=NO_DATA_MESSAGE,
    )
