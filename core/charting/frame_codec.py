"""JSON encoding for render frames.

The encoded payload is what the chart API returns to browser-side renderers.
Key order and number formatting are stable, so equal frames always encode to
byte-identical JSON.
"""

from __future__ import annotations

import json
from typing import Any

from .frame import CircleMarker, EmptyState, GuideLine, PathShape, Primitive, Rect, RenderResult
from .interaction import Tooltip
from .paths import ArcTo, ClosePath, LineTo, MoveTo, PathCommand, path_data

FRAME_VERSION = "chart_frame_v1"


def encode_frame(result: RenderResult) -> dict[str, Any]:
    """Encode a RenderFrame or EmptyState into a JSON-serializable dictionary.

    Args:
        result: Output of any renderer.

    Returns:
        Dict payload; empty states carry `"empty": true` plus the reason.
    """

    extent = {"width": result.extent.width, "height": result.extent.height}
    if isinstance(result, EmptyState):
        return {
            "version": FRAME_VERSION,
            "kind": result.kind,
            "extent": extent,
            "empty": True,
            "reason": result.reason,
            "message": result.message,
        }

    return {
        "version": FRAME_VERSION,
        "kind": result.kind,
        "extent": extent,
        "empty": False,
        "rotation": result.rotation,
        "total": result.total,
        "active_index": result.active_index,
        "shapes": [_encode_shape(shape) for shape in result.shapes],
        "labels": [
            {"x": label.x, "y": label.y, "text": label.text, "anchor": label.anchor, "role": label.role}
            for label in result.labels
        ],
        "legend": [
            {
                "index": entry.index,
                "label": entry.label,
                "color": entry.color,
                "opacity": entry.opacity,
                "detail": entry.detail,
            }
            for entry in result.legend
        ],
        "tooltip": _encode_tooltip(result.tooltip),
    }


def dumps_frame(result: RenderResult) -> str:
    """Serialize a frame to compact JSON text."""

    return json.dumps(encode_frame(result), sort_keys=True, separators=(",", ":"), allow_nan=False)


def _encode_shape(shape: Primitive) -> dict[str, Any]:
    """Encode one primitive with a `type` discriminator."""

    if isinstance(shape, Rect):
        return {
            "type": "rect",
            "x": shape.x,
            "y": shape.y,
            "width": shape.width,
            "height": shape.height,
            "fill": shape.fill,
            "opacity": shape.opacity,
            "index": shape.index,
        }
    if isinstance(shape, PathShape):
        gradient = shape.gradient
        return {
            "type": "path",
            "d": path_data(shape.commands),
            "commands": [_encode_command(command) for command in shape.commands],
            "fill": shape.fill,
            "stroke": shape.stroke,
            "stroke_width": shape.stroke_width,
            "opacity": shape.opacity,
            "gradient": None
            if gradient is None
            else {
                "id": gradient.id,
                "color": gradient.color,
                "top_opacity": gradient.top_opacity,
                "bottom_opacity": gradient.bottom_opacity,
            },
            "index": shape.index,
        }
    if isinstance(shape, CircleMarker):
        return {
            "type": "circle",
            "cx": shape.cx,
            "cy": shape.cy,
            "r": shape.r,
            "fill": shape.fill,
            "opacity": shape.opacity,
            "index": shape.index,
        }
    if isinstance(shape, GuideLine):
        return {
            "type": "line",
            "x1": shape.x1,
            "y1": shape.y1,
            "x2": shape.x2,
            "y2": shape.y2,
            "dashed": shape.dashed,
        }
    raise TypeError(f"Unsupported primitive: {shape!r}")


def _encode_command(command: PathCommand) -> dict[str, Any]:
    if isinstance(command, MoveTo):
        return {"op": "M", "x": command.x, "y": command.y}
    if isinstance(command, LineTo):
        return {"op": "L", "x": command.x, "y": command.y}
    if isinstance(command, ArcTo):
        return {
            "op": "A",
            "radius": command.radius,
            "large_arc": command.large_arc,
            "sweep": command.sweep,
            "x": command.x,
            "y": command.y,
        }
    if isinstance(command, ClosePath):
        return {"op": "Z"}
    raise TypeError(f"Unsupported path command: {command!r}")


def _encode_tooltip(tooltip: Tooltip | None) -> dict[str, Any] | None:
    if tooltip is None:
        return None
    return {
        "index": tooltip.index,
        "anchor": {"x": tooltip.anchor.x, "y": tooltip.anchor.y},
        "title": tooltip.title,
        "lines": list(tooltip.lines),
        "text": tooltip.text,
    }
