"""Pure analysis package for eduportal.

This package contains deterministic, testable computations that operate on
in-memory inputs and return DTOs. It must not import Django or perform any
database I/O.
"""

from .distributions import (
    activity_level_points,
    average_rating,
    rating_distribution_points,
    top_regions_points,
    yes_no_points,
)

__all__ = [
    "activity_level_points",
    "average_rating",
    "rating_distribution_points",
    "top_regions_points",
    "yes_no_points",
]
