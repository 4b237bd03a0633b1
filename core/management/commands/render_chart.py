"""Render a chart from a JSON dataset file to SVG or frame JSON."""

from __future__ import annotations

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from core.charting.frame_codec import dumps_frame
from core.charting.svg import render_svg
from core.charting.validator import ChartPayloadError
from core.services import REQUEST_KINDS, render_payload


class Command(BaseCommand):
    """Render one chart offline, e.g. for reports or fixtures."""

    help = "Render a chart from a JSON dataset file and print SVG (default) or the encoded frame."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("kind", choices=REQUEST_KINDS, help="Chart kind to render.")
        parser.add_argument("path", help="Path to a JSON file holding the dataset.")
        parser.add_argument("--height", type=float, default=None, help="Plot height (default from settings).")
        parser.add_argument("--width", type=float, default=None, help="Plot width (default from settings).")
        parser.add_argument("--highlight", type=int, default=None, help="Index to render as hovered.")
        parser.add_argument(
            "--format",
            choices=("svg", "json"),
            default="svg",
            help="Output format: SVG markup or the encoded render frame.",
        )
        parser.add_argument("--output", default=None, help="Write to this file instead of stdout.")

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        path = Path(options["path"])
        if not path.is_file():
            raise CommandError(f"Dataset file not found: {path}")
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CommandError(f"{path} is not valid JSON: {exc.msg} (line {exc.lineno}).") from exc

        try:
            result = render_payload(
                options["kind"],
                payload,
                height=options["height"],
                width=options["width"],
                highlight=options["highlight"],
            )
        except ChartPayloadError as exc:
            raise CommandError("Invalid dataset:\n" + "\n".join(f"- {error}" for error in exc.errors)) from exc

        rendered = dumps_frame(result) if options["format"] == "json" else str(render_svg(result))
        output = options["output"]
        if output:
            Path(output).write_text(rendered + "\n", encoding="utf-8")
            self.stdout.write(self.style.SUCCESS(f"Wrote {options['kind']} chart to {output}."))
            return None
        self.stdout.write(rendered)
        return None
