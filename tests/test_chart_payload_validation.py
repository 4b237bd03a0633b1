"""Tests for chart payload validation and coercion."""

from __future__ import annotations

import pytest

from analysis.distributions import yes_no_points
from core.charting.schema import DataPoint, GroupedDataPoint, LineSeries, as_dataset
from core.charting.validator import (
    MAX_ABS_VALUE,
    MAX_DATASET_POINTS,
    ChartPayloadError,
    parse_dataset,
    parse_grouped_dataset,
    parse_multi_line,
    validate_dataset,
)
from core.services import coerce_dataset

pytestmark = pytest.mark.unit


def test_parse_dataset_builds_points_in_order() -> None:
    """Valid records become DataPoints; blank colors are dropped."""

    dataset = parse_dataset(
        [
            {"label": "Mon", "value": 3},
            {"label": "Tue", "value": 4.5, "color": "#10B981"},
            {"label": "Wed", "value": 0, "color": ""},
        ]
    )
    assert dataset == (
        DataPoint("Mon", 3.0),
        DataPoint("Tue", 4.5, "#10B981"),
        DataPoint("Wed", 0.0),
    )


def test_parse_dataset_collects_every_error() -> None:
    """All invalid fields are reported together."""

    with pytest.raises(ChartPayloadError) as excinfo:
        parse_dataset(
            [
                {"label": 1, "value": 3},
                {"label": "b", "value": "3"},
                {"label": "c", "value": True},
                {"label": "d", "value": float("nan")},
                {"label": "e", "value": 1, "color": "url(javascript:x)"},
                "oops",
            ]
        )
    errors = excinfo.value.errors
    assert "dataset[0].label must be a string." in errors
    assert "dataset[1].value must be a finite number." in errors
    assert "dataset[2].value must be a finite number." in errors
    assert "dataset[3].value must be a finite number." in errors
    assert any(error.startswith("dataset[4].color") for error in errors)
    assert "dataset[5] must be an object." in errors


def test_parse_dataset_rejects_non_list_and_oversized_payloads() -> None:
    """Payloads must be lists within the point limit."""

    with pytest.raises(ChartPayloadError, match="must be a list"):
        parse_dataset({"label": "a", "value": 1})
    with pytest.raises(ChartPayloadError, match="at most"):
        parse_dataset([{"label": str(i), "value": i} for i in range(MAX_DATASET_POINTS + 1)])


def test_validate_dataset_warns_on_negative_values() -> None:
    """Negative values are accepted with a warning."""

    result = validate_dataset([{"label": "a", "value": -2}])
    assert result.is_valid is True
    assert result.warnings and "negative" in result.warnings[0]
    assert "non-negative values" in result.warnings[0]
    assert "height" not in result.warnings[0]


def test_parse_dataset_rejects_values_whose_sum_could_overflow() -> None:
    """Finite values beyond the magnitude cap are errors, not silent infinities."""

    with pytest.raises(ChartPayloadError) as excinfo:
        parse_dataset([{"label": "a", "value": 1e308}, {"label": "b", "value": -1e308}, {"label": "c", "value": 5}])

    assert excinfo.value.errors == (
        f"dataset[0].value must be between -{MAX_ABS_VALUE:g} and {MAX_ABS_VALUE:g}.",
        f"dataset[1].value must be between -{MAX_ABS_VALUE:g} and {MAX_ABS_VALUE:g}.",
    )
    assert parse_dataset([{"label": "a", "value": MAX_ABS_VALUE}])[0].value == MAX_ABS_VALUE


def test_grouped_and_multi_line_payloads_apply_the_magnitude_cap() -> None:
    """Grouped values and series data share the same bound."""

    with pytest.raises(ChartPayloadError, match=r"groups\[0\]\.value2 must be between"):
        parse_grouped_dataset([{"label": "Math", "value1": 1, "value2": 1e308}])
    with pytest.raises(ChartPayloadError, match=r"datasets\[0\]\.data values must be between"):
        parse_multi_line(
            {"labels": ["Jan", "Feb"], "datasets": [{"label": "Users", "data": [1, 1e308], "color": "#FFD700"}]}
        )


def test_parse_grouped_dataset() -> None:
    """Grouped records need two numeric values."""

    groups = parse_grouped_dataset([{"label": "Math", "value1": 10, "value2": 8, "color2": "#FFD700"}])
    assert groups == (GroupedDataPoint("Math", 10.0, 8.0, None, "#FFD700"),)
    with pytest.raises(ChartPayloadError, match=r"groups\[0\]\.value2"):
        parse_grouped_dataset([{"label": "Math", "value1": 10}])


def test_parse_multi_line() -> None:
    """Multi-line payloads pair shared labels with colored series."""

    labels, series = parse_multi_line(
        {"labels": ["Jan", "Feb"], "datasets": [{"label": "Users", "data": [1, 2], "color": "#5B8FB9"}]}
    )
    assert labels == ("Jan", "Feb")
    assert series == (LineSeries("Users", (1.0, 2.0), "#5B8FB9"),)


def test_parse_multi_line_reports_length_mismatch_and_missing_color() -> None:
    """Series must match the label count and declare a color."""

    with pytest.raises(ChartPayloadError) as excinfo:
        parse_multi_line({"labels": ["Jan", "Feb"], "datasets": [{"label": "Users", "data": [1]}]})
    errors = excinfo.value.errors
    assert "datasets[0].color is required." in errors
    assert "datasets[0].data has 1 values but there are 2 labels." in errors


def test_as_dataset_converts_label_value_objects() -> None:
    """Aggregation DTOs are accepted wherever DataPoints are."""

    assert as_dataset(yes_no_points(3, 1)) == (
        DataPoint("Yes", 3.0, "#10B981"),
        DataPoint("No", 1.0, "#EF4444"),
    )
    with pytest.raises(TypeError, match=r"dataset\[0\]"):
        as_dataset([object()])


def test_coerce_dataset_accepts_records_and_objects() -> None:
    """The service layer accepts JSON records and DataPoint-like objects."""

    assert coerce_dataset([{"label": "a", "value": 1}]) == (DataPoint("a", 1.0),)
    assert coerce_dataset(list(yes_no_points(1, 1)))[0].label == "Yes"
    with pytest.raises(ChartPayloadError):
        coerce_dataset("a,b,c")
    with pytest.raises(ChartPayloadError):
        coerce_dataset([1, 2])


def test_coerce_dataset_bounds_object_values() -> None:
    """Label/value objects are held to the same finite, bounded range as records."""

    with pytest.raises(ChartPayloadError, match=r"dataset\[1\]\.value must be a finite number"):
        coerce_dataset([DataPoint("a", 1), DataPoint("b", 1e308)])
    with pytest.raises(ChartPayloadError, match=r"dataset\[0\]"):
        coerce_dataset([DataPoint("a", float("inf"))])
