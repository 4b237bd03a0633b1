"""Tests for donut wedge geometry."""

from __future__ import annotations

import math

import pytest

from core.charting.arcs import (
    build_wedges,
    large_arc_flag,
    palette_color,
    percent_label,
    polar_to_cartesian,
    wedge_path,
)
from core.charting.configs import DONUT_PALETTE
from core.charting.paths import ArcTo, ClosePath, LineTo, MoveTo
from core.charting.schema import Coordinate, DataPoint

pytestmark = pytest.mark.unit

CENTER = Coordinate(100, 100)


def _wedges(points):
    return build_wedges(points, center=CENTER, radius=80, thickness=25, palette=DONUT_PALETTE)


def test_yes_no_wedges_split_three_to_one() -> None:
    """A 3:1 dataset sweeps 270 then 90 degrees, 75% and 25%."""

    yes, no = _wedges([DataPoint("Yes", 3), DataPoint("No", 1)])

    assert yes.sweep_angle == pytest.approx(270.0)
    assert no.sweep_angle == pytest.approx(90.0)
    assert yes.start_angle == 0.0
    assert no.start_angle == pytest.approx(270.0)
    assert percent_label(yes.percentage_of_total) == "75%"
    assert percent_label(no.percentage_of_total) == "25%"


@pytest.mark.parametrize(
    "values",
    [
        [1, 1, 1],
        [3, 7, 11, 13, 17, 19, 23],
        [0.1, 0.2, 0.3],
        [1e-6, 5e6, 42],
        [5, 0, 5],
        [9],
    ],
)
def test_wedge_sweeps_close_the_full_circle(values: list[float]) -> None:
    """Consecutive wedges cover exactly 360 degrees for any positive total."""

    wedges = _wedges([DataPoint(f"p{i}", v) for i, v in enumerate(values)])

    assert sum(w.sweep_angle for w in wedges) == pytest.approx(360.0, abs=1e-6)
    assert wedges[-1].end_angle == pytest.approx(360.0, abs=1e-6)
    for previous, current in zip(wedges, wedges[1:]):
        assert current.start_angle == previous.end_angle


def test_zero_total_produces_no_wedges() -> None:
    """An all-zero dataset renders nothing instead of dividing by zero."""

    assert _wedges([DataPoint("a", 0), DataPoint("b", 0)]) == ()


def test_wedge_colors_prefer_point_color_then_cycle_palette() -> None:
    """Explicit colors win; otherwise the palette is indexed by position."""

    points = [DataPoint(f"p{i}", 1) for i in range(6)]
    points[1] = DataPoint("custom", 1, color="#123456")
    colors = [w.color for w in _wedges(points)]

    assert colors[0] == DONUT_PALETTE[0]
    assert colors[1] == "#123456"
    assert colors[5] == DONUT_PALETTE[0]
    assert palette_color(7, DONUT_PALETTE) == DONUT_PALETTE[2]


def test_wedge_path_traces_outer_forward_and_inner_backward() -> None:
    """A quarter wedge is outer arc, radial line, reversed inner arc, close."""

    path = wedge_path(center=CENTER, radius=80, inner_radius=55, start_angle=0, end_angle=90)

    assert path[0] == MoveTo(180, 100)
    assert isinstance(path[1], ArcTo) and (path[1].large_arc, path[1].sweep) == (0, 1)
    assert path[1].x == pytest.approx(100) and path[1].y == pytest.approx(180)
    assert isinstance(path[2], LineTo)
    assert path[2].x == pytest.approx(100) and path[2].y == pytest.approx(155)
    assert isinstance(path[3], ArcTo) and path[3].radius == 55 and path[3].sweep == 0
    assert path[3].x == pytest.approx(155) and path[3].y == pytest.approx(100)
    assert path[4] == ClosePath()


def test_large_arc_flag_only_beyond_semicircle() -> None:
    """The large-arc flag is set for sweeps strictly above 180 degrees."""

    assert large_arc_flag(180) == 0
    assert large_arc_flag(180.5) == 1
    (wedge,) = _wedges([DataPoint("only", 1)])
    assert wedge.sweep_angle == 360.0


def test_single_full_wedge_is_drawn_as_two_half_arcs() -> None:
    """A 360 degree wedge does not collapse into a zero-length arc."""

    (wedge,) = _wedges([DataPoint("only", 5)])
    arcs = [command for command in wedge.path if isinstance(command, ArcTo)]

    assert len(arcs) == 4
    assert all(arc.large_arc == 0 for arc in arcs)
    assert arcs[0].x == pytest.approx(20) and arcs[0].y == pytest.approx(100)


def test_wedge_coordinates_are_finite() -> None:
    """Tiny shares still yield finite geometry."""

    for wedge in _wedges([DataPoint("big", 1e9), DataPoint("tiny", 1e-9)]):
        for command in wedge.path:
            for value in (getattr(command, "x", 0.0), getattr(command, "y", 0.0)):
                assert math.isfinite(value)


def test_polar_to_cartesian_uses_degrees() -> None:
    """Zero degrees points right; 90 degrees points down in screen space."""

    right = polar_to_cartesian(CENTER, 10, 0)
    down = polar_to_cartesian(CENTER, 10, 90)
    assert (right.x, right.y) == (110, 100)
    assert down.x == pytest.approx(100) and down.y == pytest.approx(110)


def test_percent_label_rounds_half_up() -> None:
    """Presentation rounding happens on the label only."""

    assert percent_label(0.125) == "13%"
    assert percent_label(1 / 3) == "33%"
    assert percent_label(1.0) == "100%"
