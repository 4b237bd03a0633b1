"""Chart geometry and rendering for dashboard widgets.

Bar, donut and line charts are rendered by pure functions that turn an
ordered dataset into a `RenderFrame` of vector primitives. Hover state lives
in a per-chart `HoverController`; renderers only read its immutable snapshot.
"""

from .interaction import IDLE, HighlightState, HoverController
from .render import render_bar, render_chart, render_donut, render_grouped_bar, render_line, render_multi_line
from .schema import DataPoint, GroupedDataPoint, LineSeries, OutputExtent

__all__ = [
    "IDLE",
    "DataPoint",
    "GroupedDataPoint",
    "HighlightState",
    "HoverController",
    "LineSeries",
    "OutputExtent",
    "render_bar",
    "render_chart",
    "render_donut",
    "render_grouped_bar",
    "render_line",
    "render_multi_line",
]
