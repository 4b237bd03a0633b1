"""Tests for hover state, emphasis and tooltips."""

from __future__ import annotations

import logging

import pytest

from core.charting.interaction import (
    IDLE,
    HighlightState,
    HoverController,
    Tooltip,
    effective_index,
    emphasis_for,
    format_value,
    tooltip_for,
)
from core.charting.schema import Coordinate, DataPoint

pytestmark = pytest.mark.unit


def test_emphasis_dims_everything_but_the_active_element() -> None:
    """Only non-active elements are dimmed while hovering."""

    assert emphasis_for(1, 1, dimmed_opacity=0.4).opacity == 1.0
    assert emphasis_for(1, 0, dimmed_opacity=0.4).dimmed is True
    assert emphasis_for(1, 2, dimmed_opacity=0.4).opacity == 0.4
    assert emphasis_for(None, 0, dimmed_opacity=0.4).dimmed is False


def test_effective_index_ignores_stale_indices() -> None:
    """Indices outside the current dataset resolve to idle."""

    assert effective_index(HighlightState(2), 3) == 2
    assert effective_index(HighlightState(3), 3) is None
    assert effective_index(HighlightState(-1), 3) is None
    assert effective_index(IDLE, 3) is None


def test_tooltip_text_is_label_and_value() -> None:
    """Single-point tooltips read `<label>: <value>`."""

    tooltip = tooltip_for(DataPoint("Tue", 30), anchor=Coordinate(1, 2), index=1)
    assert tooltip.text == "Tue: 30"
    assert tooltip.anchor == Coordinate(1, 2)


def test_tooltip_text_includes_title_line() -> None:
    """Titled tooltips put the title above the body lines."""

    tooltip = Tooltip(index=0, anchor=Coordinate(0, 0), lines=("A: 1", "B: 2"), title="Jan")
    assert tooltip.text == "Jan\nA: 1\nB: 2"


def test_format_value_drops_integral_decimals() -> None:
    """Whole numbers print without `.0`; thousands separators are optional."""

    assert format_value(20.0) == "20"
    assert format_value(2.5) == "2.5"
    assert format_value(12500, thousands=True) == "12,500"
    assert format_value(1234.5, thousands=True) == "1,234.5"


def test_controller_enter_and_leave_fire_callback_on_change_only() -> None:
    """The hover callback fires once per distinct state transition."""

    seen: list[int | None] = []
    controller = HoverController(on_hover_change=seen.append)

    controller.enter(1)
    controller.enter(1)
    controller.enter(2)
    controller.leave()
    controller.leave()

    assert seen == [1, 2, None]
    assert controller.state == IDLE


def test_controller_last_write_wins() -> None:
    """Rapid event sequences leave the latest state in place."""

    controller = HoverController()
    for index in (0, 2, 1, 0, 2):
        controller.enter(index)
    assert controller.active_index == 2


def test_controller_clears_highlight_when_dataset_reference_changes(caplog) -> None:
    """Binding a new dataset resets a now-stale highlight."""

    seen: list[int | None] = []
    controller = HoverController(on_hover_change=seen.append)
    first = (DataPoint("a", 1), DataPoint("b", 2), DataPoint("c", 3))
    controller.bind(first)
    controller.enter(2)

    controller.bind(first)
    assert controller.active_index == 2

    with caplog.at_level(logging.DEBUG, logger="core.charting.interaction"):
        controller.bind((DataPoint("a", 1),))

    assert controller.state.is_idle
    assert seen == [2, None]
    assert "clearing highlight" in caplog.text


def test_controller_out_of_range_enter_resets_to_idle() -> None:
    """Entering an index the bound dataset does not have clears the highlight."""

    controller = HoverController()
    controller.bind((DataPoint("a", 1), DataPoint("b", 2)))
    controller.enter(1)
    controller.enter(5)
    assert controller.active_index is None


def test_controller_negative_enter_is_ignored_before_binding() -> None:
    """A negative index never becomes active, even with no dataset bound."""

    seen: list[int | None] = []
    controller = HoverController(on_hover_change=seen.append)

    controller.enter(-1)
    assert controller.active_index is None
    assert seen == []

    controller.enter(0)
    controller.enter(-3)
    assert controller.state == IDLE
    assert seen == [0, None]
