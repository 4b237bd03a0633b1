"""DTO types consumed by the distribution helpers.

DTOs are plain data containers delivered by the data layer. They
intentionally avoid any Django/ORM dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RegionActivity:
    """Learner activity for one region (county).

    Attributes:
        county: Region name.
        user_count: Registered users in the region.
        active_learners: Learners active in the reporting window.
        completion_rate: Course completion rate in percent.
    """

    county: str
    user_count: int
    active_learners: int
    completion_rate: float = 0.0


@dataclass(frozen=True)
class ChartSeriesPoint:
    """A labelled value ready to become a chart DataPoint.

    Attributes:
        label: Display label.
        value: Numeric value.
        color: Optional fixed color.
    """

    label: str
    value: float
    color: str | None = None
