"""
Command-line entry point.

Usage:
    deck-export slides.html slides.pdf                  # 3840x2160 (4K)
    deck-export slides.html slides.pdf 1920 1080        # custom resolution
    deck-export slides.html slides.pdf --preset 1440p
    deck-export slides.html slides.pdf --headed -v      # watch the browser
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from deckpdf.config import (
    INIT_DELAY_MS,
    LOAD_TIMEOUT_MS,
    RESOLUTION_PRESETS,
    SLIDE_DELAY_MS,
    RenderSettings,
    resolve_preset,
)
from deckpdf.errors import ConfigurationError, ExportError
from deckpdf.export_schema import ExportRequest
from deckpdf.pipeline import export_deck

log = logging.getLogger(__name__)


def _preset_lines() -> str:
    return "\n".join(
        f"    {name:6s} {w}x{h}" for name, (w, h) in RESOLUTION_PRESETS.items()
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deck-export",
        description="Convert a reveal.js HTML presentation to a PDF, one page per slide.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
width, height: optional resolution in pixels, given together (default: 3840x2160)

Presets (--preset):
{_preset_lines()}

Examples:
  deck-export talk.html talk.pdf
  deck-export talk.html talk.pdf 1920 1080
  deck-export talk.html talk.pdf --preset 1440p
""",
    )
    parser.add_argument("input", help="HTML presentation (path or http(s)/file URL)")
    parser.add_argument("output", help="PDF to write (overwritten if it exists)")
    parser.add_argument("width", nargs="?", help="Page width in pixels")
    parser.add_argument("height", nargs="?", help="Page height in pixels")
    parser.add_argument(
        "--preset",
        metavar="NAME",
        help=f"Named resolution ({', '.join(RESOLUTION_PRESETS)})",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window while rendering (it is still closed at the end)",
    )
    parser.add_argument(
        "--init-delay",
        type=int,
        default=None,
        metavar="MS",
        help=f"Wait after load for reveal.js to initialise (default: $DECKPDF_INIT_DELAY_MS or {INIT_DELAY_MS})",
    )
    parser.add_argument(
        "--slide-delay",
        type=int,
        default=None,
        metavar="MS",
        help=f"Wait after each slide change (default: $DECKPDF_SLIDE_DELAY_MS or {SLIDE_DELAY_MS})",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        metavar="MS",
        help=f"Page load timeout (default: $DECKPDF_LOAD_TIMEOUT_MS or {LOAD_TIMEOUT_MS})",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors")
    return parser


def _request_from_args(args: argparse.Namespace) -> ExportRequest:
    if args.preset:
        if args.width is not None or args.height is not None:
            raise ConfigurationError("--preset cannot be combined with width/height")
        width, height = resolve_preset(args.preset)
        return ExportRequest(args.input, args.output, width, height)
    return ExportRequest.from_cli(args.input, args.output, args.width, args.height)


def _settings_from_args(args: argparse.Namespace) -> RenderSettings:
    """Flags win over DECKPDF_*_MS environment variables, which win over built-in defaults."""
    overrides = {
        "init_delay_ms": args.init_delay,
        "slide_delay_ms": args.slide_delay,
        "load_timeout_ms": args.timeout,
    }
    return RenderSettings(
        headless=not args.headed,
        **{k: v for k, v in overrides.items() if v is not None},
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s  %(name)s  %(message)s")

    try:
        request = _request_from_args(args)
        settings = _settings_from_args(args)
        result = export_deck(request, settings)
    except ExportError as e:
        log.error("Error: %s", e)
        return e.exit_code

    print(f"{result.output_path} ({result.page_count} pages, {request.width}x{request.height})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
