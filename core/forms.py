"""Forms for chart requests.

Charts are requested with a JSON-encoded dataset plus optional size and
highlight parameters, either as query parameters or as a JSON request body.
"""

from __future__ import annotations

import json
from typing import Any

from django import forms


class ChartRequestForm(forms.Form):
    """Validate the parameters of a chart render request."""

    data = forms.CharField(
        label="Data",
        help_text="JSON-encoded dataset, e.g. [{\"label\": \"Mon\", \"value\": 3}].",
    )
    height = forms.FloatField(required=False, min_value=1, max_value=4000, label="Height")
    width = forms.FloatField(required=False, min_value=1, max_value=4000, label="Width")
    highlight = forms.IntegerField(
        required=False,
        min_value=0,
        label="Highlight",
        help_text="Optional index of the element rendered as hovered.",
    )
    series1 = forms.CharField(required=False, max_length=80, label="First series name")
    series2 = forms.CharField(required=False, max_length=80, label="Second series name")

    def clean_data(self) -> Any:
        """Decode the dataset JSON.

        Returns:
            The decoded payload (list or object).
        """

        raw = self.cleaned_data.get("data") or ""
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise forms.ValidationError(f"Data is not valid JSON: {exc.msg}.") from exc
        if not isinstance(payload, (list, dict)):
            raise forms.ValidationError("Data must be a JSON list or object.")
        return payload

    def series_labels(self) -> tuple[str, str] | None:
        """Return grouped-bar series names when both were supplied."""

        first = (self.cleaned_data.get("series1") or "").strip()
        second = (self.cleaned_data.get("series2") or "").strip()
        if first and second:
            return (first, second)
        return None

    @classmethod
    def from_json_body(cls, body: bytes) -> ChartRequestForm:
        """Build a bound form from a JSON request body.

        The body's `data` member may be an embedded list/object; it is
        re-encoded so the same cleaning path applies.

        Raises:
            ValueError: When the body is not a JSON object.
        """

        decoded = json.loads(body.decode("utf-8") or "{}")
        if not isinstance(decoded, dict):
            raise ValueError("Request body must be a JSON object.")
        values = {key: value for key, value in decoded.items() if value is not None}
        if "data" in values and not isinstance(values["data"], str):
            values["data"] = json.dumps(values["data"])
        return cls(values)
