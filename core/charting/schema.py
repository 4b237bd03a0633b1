"""Input and geometry value types for chart rendering.

Charts are rendered from plain, immutable inputs (ordered datasets plus an
output extent) so every render pass is a pure function of its arguments.
Nothing in this module touches Django.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal, TypeAlias

ChartKind = Literal["bar", "donut", "line"]

CHART_KINDS: tuple[ChartKind, ...] = ("bar", "donut", "line")


@dataclass(frozen=True, slots=True)
class DataPoint:
    """A single labelled value in a dataset.

    Args:
        label: Display label (x-axis label, legend entry, tooltip prefix).
        value: Numeric value; non-negative values are expected but not enforced.
        color: Optional fill color overriding the palette for this point.
    """

    label: str
    value: float
    color: str | None = None


Dataset: TypeAlias = tuple[DataPoint, ...]


@dataclass(frozen=True, slots=True)
class GroupedDataPoint:
    """A labelled pair of values rendered side by side (e.g. allocated vs spent).

    Args:
        label: Group label shown under the pair of bars.
        value1: Value for the first series.
        value2: Value for the second series.
        color1: Optional color override for the first bar.
        color2: Optional color override for the second bar.
    """

    label: str
    value1: float
    value2: float
    color1: str | None = None
    color2: str | None = None


@dataclass(frozen=True, slots=True)
class LineSeries:
    """One named series of a multi-line chart.

    Args:
        label: Legend label for the series.
        values: Values aligned to the chart's shared x labels.
        color: Stroke color for the series.
    """

    label: str
    values: tuple[float, ...]
    color: str


@dataclass(frozen=True, slots=True)
class OutputExtent:
    """Size of the plotting area in abstract output units."""

    width: float = 400.0
    height: float = 200.0


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A point in output space."""

    x: float
    y: float


def as_dataset(points: Iterable[object]) -> Dataset:
    """Return `points` as an immutable dataset tuple.

    Objects exposing `label`/`value` (and optionally `color`) attributes, such
    as the DTOs produced by `analysis.distributions`, are converted to
    DataPoint entries.

    Args:
        points: DataPoint entries or label/value objects.

    Returns:
        Tuple of DataPoint entries in their original order.

    Raises:
        TypeError: When an entry has no `label`/`value` attributes.
    """

    dataset: list[DataPoint] = []
    for idx, point in enumerate(points):
        if isinstance(point, DataPoint):
            dataset.append(point)
            continue
        if not hasattr(point, "label") or not hasattr(point, "value"):
            raise TypeError(f"dataset[{idx}] must provide label and value, got {type(point).__name__}.")
        dataset.append(
            DataPoint(
                label=str(getattr(point, "label")),
                value=float(getattr(point, "value")),
                color=getattr(point, "color", None),
            )
        )
    return tuple(dataset)
