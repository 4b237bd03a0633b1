"""Chart rendering defaults and their Django settings overrides.

Renderers take an explicit `ChartDefaults` so geometry stays independent of
Django. Views, template tags and commands obtain one through
`chart_defaults()`, which layers `settings.CHART_DEFAULTS` over the built-in
values.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Final

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

DONUT_PALETTE: Final[tuple[str, ...]] = ("#FFD700", "#5B8FB9", "#8BA9C7", "#E6C200", "#1F2937")

PRIMARY_COLOR: Final[str] = "#FFD700"
MUTED_COLOR: Final[str] = "#D1D5DB"
GRID_COLOR: Final[str] = "#E5E7EB"
HOVER_GUIDE_COLOR: Final[str] = "#9CA3AF"


@dataclass(frozen=True, slots=True)
class ChartDefaults:
    """Tunable sizing, color and interaction defaults for all chart types.

    Args:
        width: Default plot width for bar and line charts.
        height: Default plot height (donuts use it as their side length).
        palette: Fallback wedge colors, cycled by index.
        max_labels: Axis label budget for label thinning.
        area_opacity_top: Line-chart area gradient opacity at the top.
        area_opacity_bottom: Line-chart area gradient opacity at the baseline.
        dimmed_opacity: Opacity of non-highlighted elements while hovering.
        bar_color: Fill for bars without an explicit color.
        bar_fill_ratio: Share of each bar slot occupied by the bar.
        max_bar_width: Upper bound on a single bar's width.
        grouped_colors: Fills for the two series of a grouped bar chart.
        grouped_headroom: Domain multiplier for grouped bar charts.
        line_color: Stroke for single-series line charts.
        line_headroom: Domain multiplier leaving space above the highest point.
        marker_radius: Line-chart point marker radius.
        stroke_width: Line-chart stroke width.
        donut_radius_ratio: Outer radius as a share of the donut side length.
        donut_thickness_ratio: Ring thickness as a share of the side length.
    """

    width: float = 400.0
    height: float = 200.0
    palette: tuple[str, ...] = DONUT_PALETTE
    max_labels: int = 5
    area_opacity_top: float = 0.5
    area_opacity_bottom: float = 0.0
    dimmed_opacity: float = 0.4
    bar_color: str = PRIMARY_COLOR
    bar_fill_ratio: float = 0.8
    max_bar_width: float = 40.0
    grouped_colors: tuple[str, str] = (MUTED_COLOR, PRIMARY_COLOR)
    grouped_headroom: float = 1.1
    line_color: str = PRIMARY_COLOR
    line_headroom: float = 1.1
    marker_radius: float = 3.0
    stroke_width: float = 2.0
    donut_radius_ratio: float = 0.4
    donut_thickness_ratio: float = 0.125

    @property
    def palette_length(self) -> int:
        """Number of fallback palette colors."""

        return len(self.palette)


DEFAULTS: Final[ChartDefaults] = ChartDefaults()

_FIELD_NAMES: Final[frozenset[str]] = frozenset(f.name for f in fields(ChartDefaults))


def build_chart_defaults(overrides: dict[str, Any] | None = None) -> ChartDefaults:
    """Return ChartDefaults with `overrides` applied.

    Args:
        overrides: Mapping of ChartDefaults field names to values.

    Returns:
        A new ChartDefaults instance.

    Raises:
        ImproperlyConfigured: When a key is unknown or a value is unusable.
    """

    if not overrides:
        return DEFAULTS

    unknown = sorted(set(overrides) - _FIELD_NAMES)
    if unknown:
        raise ImproperlyConfigured(f"CHART_DEFAULTS contains unknown keys: {unknown}.")

    values = dict(overrides)
    for key in ("palette", "grouped_colors"):
        if key in values:
            values[key] = tuple(str(color) for color in values[key])
    defaults = replace(DEFAULTS, **values)
    try:
        errors = _defaults_errors(defaults)
    except TypeError as exc:
        raise ImproperlyConfigured(f"Invalid CHART_DEFAULTS value type: {exc}") from exc
    if errors:
        raise ImproperlyConfigured("Invalid CHART_DEFAULTS: " + " ".join(errors))
    return defaults


def _defaults_errors(defaults: ChartDefaults) -> list[str]:
    """Return human-readable problems with a ChartDefaults instance."""

    errors: list[str] = []
    if defaults.width <= 0 or defaults.height <= 0:
        errors.append("width and height must be positive.")
    if not defaults.palette:
        errors.append("palette must contain at least one color.")
    if len(defaults.grouped_colors) != 2:
        errors.append("grouped_colors must contain exactly two colors.")
    if defaults.max_labels < 2:
        errors.append("max_labels must be at least 2.")
    if not 0 <= defaults.dimmed_opacity <= 1:
        errors.append("dimmed_opacity must be within [0, 1].")
    if not 0 < defaults.bar_fill_ratio <= 1:
        errors.append("bar_fill_ratio must be within (0, 1].")
    if not 0 < defaults.donut_thickness_ratio <= defaults.donut_radius_ratio:
        errors.append("donut_thickness_ratio must be positive and not exceed donut_radius_ratio.")
    return errors


def chart_defaults() -> ChartDefaults:
    """Return ChartDefaults configured through `settings.CHART_DEFAULTS`."""

    return build_chart_defaults(getattr(settings, "CHART_DEFAULTS", None))
