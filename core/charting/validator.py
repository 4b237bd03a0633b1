"""Validation and coercion of raw chart payloads.

Datasets arrive from the data layer (or HTTP requests) as JSON-like records.
Validation is strict and collects every problem before failing, so callers
can report all errors at once.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

from .schema import Dataset, DataPoint, GroupedDataPoint, LineSeries

MAX_DATASET_POINTS = 400
# Keeps sums of up to MAX_DATASET_POINTS values and line headroom finite.
MAX_ABS_VALUE = 1e300

_COLOR_RE = re.compile(r"^(#[0-9A-Fa-f]{3,8}|[A-Za-z]{3,20})$")


class ChartPayloadError(ValueError):
    """Raised when a chart payload cannot be turned into a dataset."""

    def __init__(self, errors: tuple[str, ...]) -> None:
        """Initialize the error.

        Args:
            errors: Human-readable validation errors.
        """

        super().__init__("Invalid chart payload: " + " ".join(errors))
        self.errors = errors


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating a chart payload."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_dataset(raw: object) -> ValidationResult:
    """Validate a list of `{label, value, color?}` records without raising.

    Negative values are accepted but reported as warnings since bar heights
    and wedge sweeps assume non-negative data.
    """

    errors: list[str] = []
    warnings: list[str] = []
    records = _records(raw, name="dataset", errors=errors)
    for idx, record in enumerate(records):
        prefix = f"dataset[{idx}]"
        _label(record, "label", prefix=prefix, errors=errors)
        value = _number(record, "value", prefix=prefix, errors=errors)
        _color(record, "color", prefix=prefix, errors=errors)
        if value is not None and value < 0:
            warnings.append(f"{prefix}.value is negative ({value}); chart geometry assumes non-negative values.")
    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def parse_dataset(raw: object) -> Dataset:
    """Convert `{label, value, color?}` records into DataPoint entries.

    Args:
        raw: A list of mappings, typically decoded JSON.

    Returns:
        Dataset in input order.

    Raises:
        ChartPayloadError: When any record is invalid.
    """

    result = validate_dataset(raw)
    if not result.is_valid:
        raise ChartPayloadError(result.errors)
    return tuple(
        DataPoint(
            label=str(record["label"]),
            value=float(record["value"]),
            color=record.get("color") or None,
        )
        for record in raw  # type: ignore[union-attr]
    )


def parse_grouped_dataset(raw: object) -> tuple[GroupedDataPoint, ...]:
    """Convert `{label, value1, value2, color1?, color2?}` records into groups.

    Raises:
        ChartPayloadError: When any record is invalid.
    """

    errors: list[str] = []
    records = _records(raw, name="groups", errors=errors)
    groups: list[GroupedDataPoint] = []
    for idx, record in enumerate(records):
        prefix = f"groups[{idx}]"
        label = _label(record, "label", prefix=prefix, errors=errors)
        value1 = _number(record, "value1", prefix=prefix, errors=errors)
        value2 = _number(record, "value2", prefix=prefix, errors=errors)
        color1 = _color(record, "color1", prefix=prefix, errors=errors)
        color2 = _color(record, "color2", prefix=prefix, errors=errors)
        if label is not None and value1 is not None and value2 is not None:
            groups.append(GroupedDataPoint(label=label, value1=value1, value2=value2, color1=color1, color2=color2))
    if errors:
        raise ChartPayloadError(tuple(errors))
    return tuple(groups)


def parse_multi_line(raw: object) -> tuple[tuple[str, ...], tuple[LineSeries, ...]]:
    """Convert `{labels: [...], datasets: [{label, data, color}]}` into series.

    Returns:
        Tuple of (x labels, series).

    Raises:
        ChartPayloadError: When the payload shape is wrong or series lengths
            do not match the labels.
    """

    errors: list[str] = []
    if not isinstance(raw, dict):
        raise ChartPayloadError(("Multi-line payload must be an object with 'labels' and 'datasets'.",))

    raw_labels = raw.get("labels")
    labels: tuple[str, ...] = ()
    if not isinstance(raw_labels, list) or not all(isinstance(item, str) for item in raw_labels):
        errors.append("labels must be a list of strings.")
    else:
        labels = tuple(raw_labels)

    series: list[LineSeries] = []
    for idx, record in enumerate(_records(raw.get("datasets"), name="datasets", errors=errors)):
        prefix = f"datasets[{idx}]"
        label = _label(record, "label", prefix=prefix, errors=errors)
        color = _color(record, "color", prefix=prefix, errors=errors)
        if color is None:
            errors.append(f"{prefix}.color is required.")
        data = record.get("data")
        if not isinstance(data, list):
            errors.append(f"{prefix}.data must be a list of numbers.")
            continue
        values = [_coerce_number(item) for item in data]
        if any(value is None for value in values):
            errors.append(f"{prefix}.data must contain only finite numbers.")
            continue
        if any(abs(value) > MAX_ABS_VALUE for value in values):  # type: ignore[arg-type]
            errors.append(f"{prefix}.data values must be between -{MAX_ABS_VALUE:g} and {MAX_ABS_VALUE:g}.")
            continue
        if labels and len(values) != len(labels):
            errors.append(f"{prefix}.data has {len(values)} values but there are {len(labels)} labels.")
        if label is not None and color is not None:
            series.append(LineSeries(label=label, values=tuple(values), color=color))  # type: ignore[arg-type]

    if errors:
        raise ChartPayloadError(tuple(errors))
    return labels, tuple(series)


def _records(raw: object, *, name: str, errors: list[str]) -> list[dict[str, Any]]:
    """Return `raw` as a list of mappings, recording shape errors."""

    if not isinstance(raw, list):
        errors.append(f"{name} must be a list of objects.")
        return []
    if len(raw) > MAX_DATASET_POINTS:
        errors.append(f"{name} has {len(raw)} entries; at most {MAX_DATASET_POINTS} can be rendered.")
        return []
    records: list[dict[str, Any]] = []
    for idx, record in enumerate(raw):
        if not isinstance(record, dict):
            errors.append(f"{name}[{idx}] must be an object.")
            continue
        records.append(record)
    return records


def _label(record: dict[str, Any], key: str, *, prefix: str, errors: list[str]) -> str | None:
    value = record.get(key)
    if not isinstance(value, str):
        errors.append(f"{prefix}.{key} must be a string.")
        return None
    return value


def _number(record: dict[str, Any], key: str, *, prefix: str, errors: list[str]) -> float | None:
    value = _coerce_number(record.get(key))
    if value is None:
        errors.append(f"{prefix}.{key} must be a finite number.")
        return None
    if abs(value) > MAX_ABS_VALUE:
        errors.append(f"{prefix}.{key} must be between -{MAX_ABS_VALUE:g} and {MAX_ABS_VALUE:g}.")
        return None
    return value


def _coerce_number(value: object) -> float | None:
    """Return `value` as a finite float, or None (booleans are not numbers)."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return number


def _color(record: dict[str, Any], key: str, *, prefix: str, errors: list[str]) -> str | None:
    value = record.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str) or not _COLOR_RE.match(value):
        errors.append(f"{prefix}.{key} must be a hex color (#RRGGBB) or a color name.")
        return None
    return value
