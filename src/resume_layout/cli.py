"""Command-line interface: paginate a resume, write export HTML or a PDF."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from resume_layout.config import configure_logging
from resume_layout.models.layout import DocumentError
from resume_layout.services.document import load_document
from resume_layout.services.layout import ExportError, build_export_payload, export_pdf, layout_estimated
from resume_layout.services.rasterizer import PdfServiceRasterizer
from resume_layout.services.style_config import list_presets
from resume_layout.templates import list_templates


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def _style_from_args(args: argparse.Namespace) -> dict[str, Any]:
    style = _read_json(args.style) if args.style else {}
    if not isinstance(style, dict):
        msg = f"expected a JSON object, got {type(style).__name__}"
        raise ValueError(msg)
    for key in ("template", "preset", "page_size"):
        value = getattr(args, key)
        if value is not None:
            style[key] = value
    return style


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-layout",
        description="Paginate a resume and export it as printable pages.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from RESUME_LAYOUT_LOG_LEVEL)")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("document", type=Path, help="Path to the resume document (JSON)")
    common.add_argument("--style", type=Path, help="Path to style settings (JSON)")
    common.add_argument("--template", choices=list_templates(), help="Template id")
    common.add_argument("--preset", choices=list_presets(), help="Style preset")
    common.add_argument("--page-size", dest="page_size", help="Page size (letter or a4)")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("paginate", parents=[common], help="Print the page breakdown")

    html_parser = subparsers.add_parser("html", parents=[common], help="Write the export HTML")
    html_parser.add_argument("-o", "--output", type=Path, required=True, help="Output HTML file")

    pdf_parser = subparsers.add_parser("pdf", parents=[common], help="Render a PDF through the PDF service")
    pdf_parser.add_argument("-o", "--output", type=Path, required=True, help="Output PDF file")
    pdf_parser.add_argument("--service-url", help="PDF service base URL (default from PDF_SERVICE_URL)")
    return parser


def _print_pages(document: Any, style: dict[str, Any]) -> None:
    layout = layout_estimated(document, style)
    print(f"{layout.page_count} page(s), {layout.geometry.page_size}, template {layout.style.template}")
    print("-" * 60)
    for page in layout.pages:
        print(f"Page {page.index + 1} ({page.height:.1f}px of {layout.geometry.content_height:.1f}px)")
        for section in layout.sections_for(page):
            print(f"  - {section.title} ({len(section.entries)} entr{'y' if len(section.entries) == 1 else 'ies'})")
        if not page.section_ids:
            print("  (empty)")


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse *argv* and run one command.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        document = load_document(_read_json(args.document))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Error: cannot read {args.document}: {exc}", file=sys.stderr)
        return 1
    except DocumentError as exc:
        print(f"Error: invalid resume document: {exc}", file=sys.stderr)
        return 1

    try:
        style = _style_from_args(args)
    except (OSError, ValueError) as exc:
        print(f"Error: cannot read {args.style}: {exc}", file=sys.stderr)
        return 1

    if args.command == "paginate":
        _print_pages(document, style)
        return 0

    if args.command == "html":
        payload = build_export_payload(document, style)
        args.output.write_text(payload.html, encoding="utf-8")
        print(f"Wrote {payload.page_count} page(s) to {args.output}")
        return 0

    rasterizer = PdfServiceRasterizer(base_url=args.service_url)
    try:
        pdf = export_pdf(document, style, rasterizer)
    except ExportError as exc:
        print(f"Error: PDF export failed: {exc}", file=sys.stderr)
        return 1
    args.output.write_bytes(pdf)
    print(f"Wrote {len(pdf)} bytes to {args.output}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the CLI application."""
    try:
        return run_cli(argv)
    except KeyboardInterrupt:
        print("\nInterrupted by user. Exiting.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
