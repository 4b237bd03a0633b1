"""Integration tests for the `charts` template tag library."""

from __future__ import annotations

import logging

import pytest
from django.template import Context, Template

from analysis.distributions import rating_distribution_points, yes_no_points

pytestmark = pytest.mark.integration


def _render(source: str, **context) -> str:
    return Template("{% load charts %}" + source).render(Context(context))


def test_bar_chart_tag_renders_inline_svg() -> None:
    """Aggregation points render as an inline bar chart."""

    html = _render("{% bar_chart points height=180 %}", points=rating_distribution_points({5: 3, 4: 1}))

    assert html.startswith('<figure class="chart-widget chart-widget-bar">')
    assert 'viewBox="0 0 400 204"' in html
    assert "5 Stars" in html


def test_donut_chart_tag_includes_legend() -> None:
    """Donut charts are followed by their percentage legend."""

    html = _render("{% donut_chart points %}", points=yes_no_points(3, 1))

    assert '<ul class="chart-legend">' in html
    assert "(75%)" in html
    assert 'fill="#10B981"' in html


def test_line_chart_tag_accepts_dict_records() -> None:
    """Plain dict records work as datasets."""

    points = [{"label": "W1", "value": 3}, {"label": "W2", "value": 8}]
    html = _render("{% line_chart points width=300 highlight=1 %}", points=points)

    assert 'viewBox="0 0 300 224"' in html
    assert "W2: 8" in html


def test_line_chart_tag_with_single_point_shows_placeholder() -> None:
    """A one-point line renders the insufficient-data placeholder."""

    html = _render("{% line_chart points %}", points=[{"label": "W1", "value": 3}])
    assert "chart-empty" in html


def test_invalid_tag_data_renders_no_data_placeholder(caplog) -> None:
    """Rejected records fall back to the placeholder instead of failing the page."""

    points = [{"label": "Mon", "value": "ten"}]
    with caplog.at_level(logging.WARNING, logger="core.templatetags.charts"):
        html = _render("{% bar_chart points height=120 %}", points=points)

    assert html.startswith('<figure class="chart-widget chart-widget-bar">')
    assert 'data-reason="no_data"' in html
    assert 'viewBox="0 0 400 120"' in html
    assert "Rejected bar chart data in template" in caplog.text
    assert "dataset[0].value must be a finite number." in caplog.text


def test_invalid_donut_tag_data_keeps_a_square_placeholder() -> None:
    """The donut placeholder uses the donut's square footprint."""

    html = _render("{% donut_chart points height=150 %}", points=[{"value": 2}])
    assert 'viewBox="0 0 150 150"' in html
    assert "chart-empty" in html
