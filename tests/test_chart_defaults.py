"""Tests for chart defaults and their settings overrides."""

from __future__ import annotations

import pytest
from django.core.exceptions import ImproperlyConfigured

from core.charting.configs import DEFAULTS, DONUT_PALETTE, build_chart_defaults, chart_defaults


@pytest.mark.unit
def test_builtin_defaults() -> None:
    """Recognized defaults match the documented values."""

    assert (DEFAULTS.width, DEFAULTS.height) == (400, 200)
    assert DEFAULTS.palette == DONUT_PALETTE
    assert DEFAULTS.palette_length == 5
    assert DEFAULTS.max_labels == 5
    assert (DEFAULTS.area_opacity_top, DEFAULTS.area_opacity_bottom) == (0.5, 0)
    assert DEFAULTS.dimmed_opacity == 0.4


@pytest.mark.unit
def test_overrides_return_new_defaults() -> None:
    """Overrides replace fields and coerce palettes to tuples."""

    defaults = build_chart_defaults({"height": 320, "palette": ["#000000", "#FFFFFF"]})

    assert defaults.height == 320
    assert defaults.palette == ("#000000", "#FFFFFF")
    assert DEFAULTS.height == 200
    assert build_chart_defaults(None) is DEFAULTS


@pytest.mark.unit
@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"colour": "red"}, "unknown keys"),
        ({"height": 0}, "width and height must be positive"),
        ({"palette": []}, "palette must contain"),
        ({"grouped_colors": ["#000000"]}, "exactly two colors"),
        ({"dimmed_opacity": 1.5}, "dimmed_opacity"),
        ({"max_labels": 1}, "max_labels"),
        ({"height": "tall"}, "Invalid CHART_DEFAULTS value type"),
    ],
)
def test_invalid_overrides_are_improperly_configured(overrides: dict, message: str) -> None:
    """Configuration mistakes fail fast with a descriptive error."""

    with pytest.raises(ImproperlyConfigured, match=message):
        build_chart_defaults(overrides)


@pytest.mark.integration
def test_chart_defaults_reads_django_settings(settings) -> None:
    """`CHART_DEFAULTS` in settings feeds the configured defaults."""

    settings.CHART_DEFAULTS = {"height": 150, "dimmed_opacity": 0.25}
    defaults = chart_defaults()

    assert defaults.height == 150
    assert defaults.dimmed_opacity == 0.25
    assert defaults.width == 400
