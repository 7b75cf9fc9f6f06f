from __future__ import annotations

import argparse
import io
import logging
from pathlib import Path
from typing import Sequence

from chartbox.config import load_chart
from chartbox.demo import DEMOS
from chartbox.errors import ChartError, OutputWriteError
from chartbox.renderer import SUPPORTED_FORMATS, renderer_provider


LOGGER = logging.getLogger("chartbox")

_SUFFIX_FORMATS = {
    ".png": "PNG",
    ".bmp": "BMP",
    ".tif": "TIFF",
    ".tiff": "TIFF",
    ".webp": "WEBP",
}


def _output_format(out: Path, explicit: str | None) -> str:
    if explicit is not None:
        return explicit.upper()
    return _SUFFIX_FORMATS.get(out.suffix.lower(), "PNG")


def _render_to_file(chart, out: Path, image_format: str) -> None:
    buf = io.BytesIO()
    chart.render(renderer_provider(image_format), buf)
    try:
        out.write_bytes(buf.getvalue())
    except OSError as exc:
        raise OutputWriteError(f"cannot write {out}: {exc}") from exc
    print(f"wrote {out} ({len(buf.getvalue())} bytes)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chartbox")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log layout decisions at DEBUG level.")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a chart described by a JSON config file.")
    render.add_argument("config", type=Path)
    render.add_argument("-o", "--output", type=Path, required=True)
    render.add_argument("--format", choices=[f.lower() for f in SUPPORTED_FORMATS], default=None)

    demo = sub.add_parser("demo", help="Render a built-in example chart.")
    demo.add_argument("kind", choices=sorted(DEMOS))
    demo.add_argument("-o", "--output", type=Path, required=True)
    demo.add_argument("--format", choices=[f.lower() for f in SUPPORTED_FORMATS], default=None)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "render":
            chart = load_chart(args.config)
        elif args.command == "demo":
            chart = DEMOS[args.kind]()
        else:
            raise RuntimeError(f"unsupported command: {args.command}")
        _render_to_file(chart, args.output, _output_format(args.output, args.format))
    except ChartError as exc:
        LOGGER.error("%s", exc)
        return 2
    return 0
