"""Views for the core app."""

from __future__ import annotations

import json
import logging

from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from core.charting.frame import RenderResult
from core.charting.frame_codec import encode_frame
from core.charting.svg import render_svg
from core.charting.validator import ChartPayloadError
from core.forms import ChartRequestForm
from core.services import REQUEST_KINDS, render_payload

logger = logging.getLogger(__name__)


@require_GET
def chart_svg(request: HttpRequest, kind: str) -> HttpResponse:
    """Render a chart as a standalone SVG document."""

    _require_kind(kind)
    form = ChartRequestForm(request.GET)
    if not form.is_valid():
        return _bad_request(kind, _form_errors(form))
    try:
        result = _render_form(kind, form)
    except ChartPayloadError as exc:
        return _bad_request(kind, list(exc.errors))
    return HttpResponse(render_svg(result), content_type="image/svg+xml")


@csrf_exempt
@require_http_methods(["GET", "POST"])
def chart_frame_api(request: HttpRequest, kind: str) -> JsonResponse:
    """Return the encoded render frame for a chart as JSON.

    GET reads query parameters; POST reads a JSON object body whose `data`
    member holds the dataset.
    """

    _require_kind(kind)
    if request.method == "POST":
        try:
            form = ChartRequestForm.from_json_body(request.body)
        except (ValueError, UnicodeDecodeError):
            return _bad_request(kind, ["Request body must be a JSON object."])
    else:
        form = ChartRequestForm(request.GET)

    if not form.is_valid():
        return _bad_request(kind, _form_errors(form))
    try:
        result = _render_form(kind, form)
    except ChartPayloadError as exc:
        return _bad_request(kind, list(exc.errors))
    return JsonResponse({"ok": True, "frame": encode_frame(result)})


def _require_kind(kind: str) -> None:
    if kind not in REQUEST_KINDS:
        raise Http404(f"Unknown chart kind: {kind}")


def _render_form(kind: str, form: ChartRequestForm) -> RenderResult:
    cleaned = form.cleaned_data
    return render_payload(
        kind,
        cleaned["data"],
        height=cleaned.get("height"),
        width=cleaned.get("width"),
        highlight=cleaned.get("highlight"),
        series_labels=form.series_labels(),
    )


def _form_errors(form: ChartRequestForm) -> list[str]:
    return [f"{field}: {message}" for field, messages in form.errors.items() for message in messages]


def _bad_request(kind: str, errors: list[str]) -> JsonResponse:
    """Log and return a 400 response listing every validation error."""

    logger.warning("Rejected %s chart request: %s", kind, json.dumps(errors))
    return JsonResponse({"ok": False, "errors": errors}, status=400)
