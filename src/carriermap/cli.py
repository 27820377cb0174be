# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""carriermap CLI: classify, check, url, find, carriers commands.

Usage:
    python -m carriermap classify NUMBER [--url URL] [--html FILE | --context FILE | --live] [--format json]
    python -m carriermap check NUMBER
    python -m carriermap url CARRIER NUMBER
    python -m carriermap find FILE
    python -m carriermap carriers
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from . import CarrierId, PageContext
from .errors import CarrierMapError
from .logging_config import configure, level_from_env


def _require_table_deps() -> None:
    """Check that the optional table renderer is installed."""
    try:
        from tabulate import tabulate  # noqa: F401
    except ImportError as e:
        print(
            f"Missing CLI dependency: {e.name}\nInstall with: pip install retio-carriermap[cli]",
            file=sys.stderr,
        )
        sys.exit(1)


def _read_input(path_str: str) -> str:
    """Read a text file, or stdin for ``-``."""
    if path_str == "-":
        return sys.stdin.read()
    path = Path(path_str)
    if not path.is_file():
        raise CarrierMapError(f"File not found: {path_str}")
    return path.read_text(encoding="utf-8", errors="replace")


def _page_context_for(args: argparse.Namespace) -> PageContext | None:
    """Build the optional page context from --context / --html / --url (no --live)."""
    if args.context:
        from .schemas import load_page_context

        context = load_page_context(_read_input(args.context))
        if args.url and not context.url:
            context = PageContext(url=args.url, text=context.text, images=context.images)
        return context
    if args.html:
        from .page_extractor import context_from_html

        return context_from_html(_read_input(args.html), url=args.url)
    if args.url:
        return PageContext(url=args.url)
    return None


def cmd_classify(args: argparse.Namespace) -> None:
    """Classify one tracking number, optionally with page context."""
    from .resolver import classify
    from .schemas import ClassificationOut

    if args.live:
        if not args.url:
            raise CarrierMapError("--live requires --url")
        from .page_extractor import ExtractionConfig, classify_with_page

        result = asyncio.run(classify_with_page(args.number, url=args.url, config=ExtractionConfig.from_env()))
    else:
        result = classify(args.number, _page_context_for(args))

    out = ClassificationOut.from_classification(result, args.number)
    if args.format == "json":
        print(out.model_dump_json(indent=2))
        return
    print(f"carrier:    {out.carrier}")
    print(f"confidence: {out.confidence}")
    print(f"source:     {out.source or 'none'}")
    if out.tracking_url:
        print(f"track:      {out.tracking_url}")


def cmd_check(args: argparse.Namespace) -> None:
    """Plausibility + form validation for one tracking number."""
    from .validation import clean_tracking_number, is_plausible_tracking_number, validate_tracking_number

    cleaned = clean_tracking_number(args.number)
    validation = validate_tracking_number(args.number)
    report = {
        "input": args.number,
        "cleaned": cleaned,
        "plausible": is_plausible_tracking_number(args.number),
        "valid": validation.valid,
        "errors": list(validation.errors),
    }
    if args.format == "json":
        print(json.dumps(report, indent=2))
    else:
        for key, value in report.items():
            print(f"{key + ':':<11}{value}")
    if not validation.valid:
        sys.exit(1)


def cmd_url(args: argparse.Namespace) -> None:
    """Print the carrier's tracking URL for a number."""
    from .validation import tracking_url

    carrier = CarrierId.parse(args.carrier)
    url = tracking_url(carrier, args.number)
    if url is None:
        print(f"No tracking page for carrier '{carrier.value}'", file=sys.stderr)
        sys.exit(1)
    print(url)


def cmd_find(args: argparse.Namespace) -> None:
    """List tracking numbers found in a text file."""
    from .number_finder import find_tracking_numbers

    found = find_tracking_numbers(_read_input(args.file))
    rows = [(f.number, f.carrier.value, f.confidence.name.lower()) for f in found]
    if args.format == "json":
        print(json.dumps([dict(zip(("number", "carrier", "confidence"), row, strict=True)) for row in rows], indent=2))
        return
    if not rows:
        print("No tracking numbers found.")
        return
    _require_table_deps()
    from tabulate import tabulate

    print(tabulate(rows, headers=["Number", "Carrier", "Confidence"]))


def cmd_carriers(args: argparse.Namespace) -> None:
    """Table of known carriers."""
    from .carriers import available_carriers

    infos = available_carriers()
    if args.format == "json":
        payload = [{"id": i.carrier.value, "label": i.label, "tracking_url": i.url_template is not None} for i in infos]
        print(json.dumps(payload, indent=2))
        return
    _require_table_deps()
    from tabulate import tabulate

    rows = [(i.carrier.value, i.label, "yes" if i.url_template else "no") for i in infos]
    print(tabulate(rows, headers=["Id", "Label", "Tracking URL"]))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Shipping carrier classification",
        prog="python -m carriermap",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    parser.add_argument("--log-json", action="store_true", help="Emit log records as JSON lines")
    subparsers = parser.add_subparsers(dest="command", required=True)

    fmt = argparse.ArgumentParser(add_help=False)
    fmt.add_argument("--format", choices=["text", "json"], default="text", help="Output format (default: text)")

    _classify_epilog = """\
examples:
  %(prog)s 1Z999AA10123456784                              Pattern only
  %(prog)s 123456 --url https://www.ups.com/track          Domain evidence
  %(prog)s 123456 --url https://shop.example --html p.html Offline page content
  %(prog)s 123456 --context capture.json --format json     Captured page context
  %(prog)s 123456 --url https://shop.example --live        Fetch page with Chromium
"""
    p_classify = subparsers.add_parser(
        "classify",
        parents=[fmt],
        help="Classify a tracking number",
        epilog=_classify_epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p_classify.add_argument("number", help="Tracking number")
    p_classify.add_argument("--url", metavar="URL", help="URL of the page the number was seen on")
    source = p_classify.add_mutually_exclusive_group()
    source.add_argument("--html", metavar="FILE", help="Saved HTML of the page ('-' for stdin)")
    source.add_argument("--context", metavar="FILE", help="Page-context JSON {url, text, images} ('-' for stdin)")
    source.add_argument("--live", action="store_true", help="Fetch --url with headless Chromium")

    p_check = subparsers.add_parser("check", parents=[fmt], help="Validate a tracking number")
    p_check.add_argument("number", help="Tracking number")

    p_url = subparsers.add_parser("url", help="Print the carrier tracking URL")
    p_url.add_argument("carrier", help="Carrier id (ups, fedex, usps, dhl, amazon, ontrac, lasership)")
    p_url.add_argument("number", help="Tracking number")

    p_find = subparsers.add_parser("find", parents=[fmt], help="Find tracking numbers in a text file")
    p_find.add_argument("file", help="Text file ('-' for stdin)")

    subparsers.add_parser("carriers", parents=[fmt], help="List known carriers")
    return parser


_COMMANDS = {
    "classify": cmd_classify,
    "check": cmd_check,
    "url": cmd_url,
    "find": cmd_find,
    "carriers": cmd_carriers,
}


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure(json_output=args.log_json, level="DEBUG" if args.verbose else level_from_env())

    try:
        _COMMANDS[args.command](args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
    except CarrierMapError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
