"""Axis label thinning for dense datasets."""

from __future__ import annotations

from math import ceil

DEFAULT_MAX_LABELS = 5


def thin_label_indices(count: int, *, max_labels: int = DEFAULT_MAX_LABELS) -> tuple[int, ...]:
    """Select which axis labels to draw for a dataset of `count` points.

    The first and last labels are always kept, plus every
    `ceil(count / (max_labels - 1))`-th label in between. With the default
    budget of 5 that is every `ceil(count / 4)`-th label, so axes of up to
    four points keep every label.

    Args:
        count: Number of points on the axis.
        max_labels: Label budget; values below 2 are treated as 2.

    Returns:
        Sorted tuple of label indices to render.
    """

    if count <= 0:
        return ()
    step = ceil(count / (max(max_labels, 2) - 1))
    selected = set(range(0, count, step))
    selected.add(count - 1)
    return tuple(sorted(selected))
