"""Service-layer functions for the core app.

Services in `core` coordinate request-level concerns (settings, payload
decoding) with the pure chart renderers in `core.charting`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Literal

from core.charting.configs import ChartDefaults, chart_defaults
from core.charting.frame import RenderResult
from core.charting.interaction import IDLE, HighlightState
from core.charting.render import render_chart, render_grouped_bar, render_multi_line
from core.charting.schema import CHART_KINDS, Dataset, OutputExtent, as_dataset
from core.charting.validator import (
    MAX_ABS_VALUE,
    ChartPayloadError,
    parse_dataset,
    parse_grouped_dataset,
    parse_multi_line,
)

logger = logging.getLogger(__name__)

RequestKind = Literal["bar", "donut", "line", "grouped_bar", "multi_line"]

REQUEST_KINDS: tuple[RequestKind, ...] = (*CHART_KINDS, "grouped_bar", "multi_line")


def coerce_dataset(data: object) -> Dataset:
    """Return a Dataset from decoded JSON records or label/value objects.

    Args:
        data: A list of `{label, value, color?}` mappings (decoded JSON), or
            an iterable of DataPoint-like objects built in Python code.

    Returns:
        Dataset in input order.

    Raises:
        ChartPayloadError: When JSON records fail validation, or objects lack
            `label`/`value` attributes or carry out-of-range values.
    """

    if isinstance(data, list) and all(isinstance(item, Mapping) for item in data):
        return parse_dataset([dict(item) for item in data])
    if isinstance(data, (str, bytes, Mapping)) or not isinstance(data, Sequence):
        raise ChartPayloadError(("dataset must be a list of objects.",))
    try:
        dataset = as_dataset(data)
    except (TypeError, ValueError) as exc:
        raise ChartPayloadError((str(exc),)) from exc
    errors = tuple(
        f"dataset[{idx}].value must be a finite number between -{MAX_ABS_VALUE:g} and {MAX_ABS_VALUE:g}."
        for idx, point in enumerate(dataset)
        if not abs(point.value) <= MAX_ABS_VALUE
    )
    if errors:
        raise ChartPayloadError(errors)
    return dataset


def render_payload(
    kind: str,
    payload: Any,
    *,
    height: float | None = None,
    width: float | None = None,
    highlight: int | None = None,
    series_labels: tuple[str, str] | None = None,
    defaults: ChartDefaults | None = None,
) -> RenderResult:
    """Validate `payload` and render it with the renderer for `kind`.

    Args:
        kind: One of `REQUEST_KINDS`.
        payload: Decoded JSON payload; a record list for every kind except
            `multi_line`, which takes `{labels, datasets}`.
        height: Optional plot height; defaults to the configured height.
        width: Optional plot width; defaults to the configured width.
        highlight: Optional hovered index to render as highlighted.
        series_labels: Legend names for grouped bars.
        defaults: Rendering defaults; read from settings when omitted.

    Returns:
        RenderFrame or EmptyState.

    Raises:
        ValueError: When `kind` is unknown.
        ChartPayloadError: When the payload is invalid for `kind`.
    """

    if kind not in REQUEST_KINDS:
        raise ValueError(f"Unsupported chart kind: {kind!r}.")

    defaults = defaults or chart_defaults()
    extent = OutputExtent(
        width=float(width) if width else defaults.width,
        height=float(height) if height else defaults.height,
    )
    state = HighlightState(active_index=highlight) if highlight is not None else IDLE

    if kind == "multi_line":
        labels, series = parse_multi_line(payload)
        result = render_multi_line(labels, series, extent, state, defaults=defaults)
    elif kind == "grouped_bar":
        groups = parse_grouped_dataset(payload)
        result = render_grouped_bar(
            groups,
            extent,
            state,
            series_labels=series_labels or ("Series 1", "Series 2"),
            defaults=defaults,
        )
    else:
        result = render_chart(kind, coerce_dataset(payload), extent, state, defaults=defaults)  # type: ignore[arg-type]

    logger.debug("Rendered %s chart (%s).", kind, type(result).__name__)
    return result
