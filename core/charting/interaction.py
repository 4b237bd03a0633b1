"""Hover highlight state and the visual effects derived from it.

A chart instance owns exactly one `HoverController`. Pointer events on any of
its interactive elements (bars, wedges, markers, legend entries) call
`enter(index)` / `leave()` on that controller, so at most one index is ever
highlighted. Renderers never see the controller itself: they receive the
immutable `HighlightState` snapshot and derive opacity and tooltips from it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .schema import Coordinate, DataPoint

logger = logging.getLogger(__name__)

HoverCallback = Callable[[int | None], None]

FULL_OPACITY = 1.0


@dataclass(frozen=True, slots=True)
class HighlightState:
    """Snapshot of the highlighted element index (None when idle)."""

    active_index: int | None = None

    @property
    def is_idle(self) -> bool:
        """Return True when nothing is highlighted."""

        return self.active_index is None


IDLE = HighlightState()


@dataclass(frozen=True, slots=True)
class Emphasis:
    """Visual treatment for one element under the current highlight.

    Args:
        opacity: Opacity to draw the element with.
        dimmed: True when another element is highlighted.
    """

    opacity: float
    dimmed: bool


@dataclass(frozen=True, slots=True)
class Tooltip:
    """Tooltip descriptor for the highlighted element.

    Args:
        index: Highlighted element index.
        anchor: Output-space point the tooltip is attached to.
        lines: Body lines (`"<label>: <value>"` entries).
        title: Optional heading shown above the lines.
    """

    index: int
    anchor: Coordinate
    lines: tuple[str, ...]
    title: str | None = None

    @property
    def text(self) -> str:
        """Return the full tooltip text, one entry per line."""

        parts = ([self.title] if self.title else []) + list(self.lines)
        return "\n".join(parts)


def format_value(value: float, *, thousands: bool = False) -> str:
    """Format a dataset value for labels and tooltips.

    Integral values render without a decimal part (`20`, not `20.0`).

    Args:
        value: Value to format.
        thousands: Insert thousands separators (`1,250`).

    Returns:
        Display string.
    """

    number = float(value)
    if number.is_integer():
        return f"{int(number):,}" if thousands else str(int(number))
    return f"{number:,}" if thousands else repr(number)


def effective_index(state: HighlightState, count: int) -> int | None:
    """Return the highlighted index if it is valid for a dataset of `count` items.

    Stale indices (for example left over from a longer dataset) resolve to
    None so a mismatched element is never highlighted.
    """

    index = state.active_index
    if index is None or not 0 <= index < count:
        return None
    return index


def emphasis_for(active_index: int | None, element_index: int, *, dimmed_opacity: float) -> Emphasis:
    """Return the emphasis of `element_index` while `active_index` is highlighted."""

    if active_index is None or active_index == element_index:
        return Emphasis(opacity=FULL_OPACITY, dimmed=False)
    return Emphasis(opacity=dimmed_opacity, dimmed=True)


def tooltip_for(point: DataPoint, *, anchor: Coordinate, index: int) -> Tooltip:
    """Build the `"<label>: <value>"` tooltip for a single data point."""

    return Tooltip(index=index, anchor=anchor, lines=(f"{point.label}: {format_value(point.value)}",))


@dataclass
class HoverController:
    """Mutable hover state owned by one rendered chart instance.

    Transitions are plain assignments (last write wins), so rapid
    enter/leave sequences need no queuing. `on_hover_change` is invoked with
    the new active index (or None) whenever it changes.

    Args:
        on_hover_change: Optional callback fired on every state change.
    """

    on_hover_change: HoverCallback | None = None
    _state: HighlightState = field(default=IDLE, init=False)
    _dataset: Sequence[object] | None = field(default=None, init=False, repr=False)

    @property
    def state(self) -> HighlightState:
        """Return the current immutable highlight snapshot."""

        return self._state

    @property
    def active_index(self) -> int | None:
        """Return the highlighted index, or None when idle."""

        return self._state.active_index

    def bind(self, dataset: Sequence[object]) -> None:
        """Attach the dataset currently on screen.

        A different dataset reference clears any highlight, because the old
        index may not refer to the same element (or any element) any more.
        """

        if dataset is self._dataset:
            return
        self._dataset = dataset
        if self._state.active_index is not None:
            logger.debug("Dataset changed; clearing highlight index %s.", self._state.active_index)
            self._set(IDLE)

    def enter(self, index: int) -> None:
        """Highlight `index` (pointer entered the element)."""

        if index < 0 or (self._dataset is not None and index >= len(self._dataset)):
            logger.debug("Ignoring out-of-range highlight index %s.", index)
            self._set(IDLE)
            return
        self._set(HighlightState(active_index=index))

    def leave(self) -> None:
        """Clear the highlight (pointer left the element)."""

        self._set(IDLE)

    def _set(self, state: HighlightState) -> None:
        if state == self._state:
            return
        self._state = state
        if self.on_hover_change is not None:
            self.on_hover_change(state.active_index)
