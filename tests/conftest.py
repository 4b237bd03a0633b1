"""Pytest fixtures shared across chart tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from core.charting.schema import DataPoint


@pytest.fixture
def weekday_points() -> tuple[DataPoint, ...]:
    """Return a small five-point dataset with distinct values."""

    return (
        DataPoint("Mon", 12),
        DataPoint("Tue", 30),
        DataPoint("Wed", 18),
        DataPoint("Thu", 0),
        DataPoint("Fri", 24),
    )


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no database access.
    - `integration`: tests touching Django views, templates, commands, or IO.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
