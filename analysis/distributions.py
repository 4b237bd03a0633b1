"""Turn survey and regional aggregates into chart-ready series.

These helpers sit between the data layer (which delivers rating counts,
yes/no tallies and per-region statistics) and the chart renderers, which only
understand ordered `{label, value, color?}` points.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Final

from .dto import ChartSeriesPoint, RegionActivity

RATING_SCALE: Final[tuple[int, ...]] = (1, 2, 3, 4, 5)

YES_COLOR: Final[str] = "#10B981"
NO_COLOR: Final[str] = "#EF4444"

HIGH_ACTIVITY_COLOR: Final[str] = "#10B981"
MODERATE_ACTIVITY_COLOR: Final[str] = "#FBBF24"
LOW_ACTIVITY_COLOR: Final[str] = "#EF4444"


def rating_distribution_points(distribution: Mapping[int | str, int]) -> tuple[ChartSeriesPoint, ...]:
    """Build one bar per star rating from a rating histogram.

    Args:
        distribution: Mapping of star rating (1-5, int or numeric string) to
            response count. Missing ratings count as zero.

    Returns:
        Five points labelled `1 Star` through `5 Stars`, in rating order.
    """

    counts: dict[int, int] = {}
    for key, count in distribution.items():
        counts[int(key)] = counts.get(int(key), 0) + int(count)
    return tuple(
        ChartSeriesPoint(label=_rating_label(rating), value=float(counts.get(rating, 0)))
        for rating in RATING_SCALE
    )


def average_rating(distribution: Mapping[int | str, int]) -> float | None:
    """Return the mean star rating rounded to one decimal, or None without responses."""

    total = 0
    weighted = 0
    for key, count in distribution.items():
        total += int(count)
        weighted += int(key) * int(count)
    if total == 0:
        return None
    return round(weighted / total, 1)


def yes_no_points(yes: int, no: int) -> tuple[ChartSeriesPoint, ChartSeriesPoint]:
    """Build the two-wedge Yes/No donut dataset."""

    return (
        ChartSeriesPoint(label="Yes", value=float(yes), color=YES_COLOR),
        ChartSeriesPoint(label="No", value=float(no), color=NO_COLOR),
    )


def activity_level_points(
    regions: Iterable[RegionActivity],
    *,
    high_threshold: int = 200,
    low_threshold: int = 50,
) -> tuple[ChartSeriesPoint, ...]:
    """Count regions per activity band for the activity donut.

    A region is high activity above `high_threshold` active learners,
    moderate above `low_threshold`, and low/underserved otherwise.

    Args:
        regions: Per-region statistics.
        high_threshold: Exclusive lower bound of the high band.
        low_threshold: Exclusive lower bound of the moderate band.

    Returns:
        Points for High Activity, Moderate and Low/Underserved, in that order.

    Raises:
        ValueError: When `low_threshold` exceeds `high_threshold`.
    """

    if low_threshold > high_threshold:
        raise ValueError("low_threshold must not exceed high_threshold.")

    high = moderate = low = 0
    for region in regions:
        if region.active_learners > high_threshold:
            high += 1
        elif region.active_learners > low_threshold:
            moderate += 1
        else:
            low += 1
    return (
        ChartSeriesPoint(label="High Activity", value=float(high), color=HIGH_ACTIVITY_COLOR),
        ChartSeriesPoint(label="Moderate", value=float(moderate), color=MODERATE_ACTIVITY_COLOR),
        ChartSeriesPoint(label="Low/Underserved", value=float(low), color=LOW_ACTIVITY_COLOR),
    )


def top_regions_points(regions: Iterable[RegionActivity], *, limit: int = 5) -> tuple[ChartSeriesPoint, ...]:
    """Return the `limit` regions with the most users, largest first.

    Ties keep their input order.
    """

    ranked = sorted(regions, key=lambda region: region.user_count, reverse=True)
    return tuple(ChartSeriesPoint(label=region.county, value=float(region.user_count)) for region in ranked[:limit])


def _rating_label(rating: int) -> str:
    return f"{rating} Star" if rating == 1 else f"{rating} Stars"
