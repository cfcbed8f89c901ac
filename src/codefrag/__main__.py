#!/usr/bin/env python3
"""Render code excerpts and argument dumps from the command line.

``codefrag excerpt FILE LINE`` prints the highlighted excerpt around a line;
``codefrag args [JSON_FILE]`` prints an argument dump given as JSON.
"""

import argparse
import json
import logging
import sys

from .config import Settings
from .exceptions import CodeFragError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="codefrag",
        description="Render debug HTML fragments for source excerpts and arguments",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    excerpt = subparsers.add_parser("excerpt", help="Print a source excerpt")
    excerpt.add_argument("file", help="Source file to excerpt")
    excerpt.add_argument("line", type=int, help="Selected line (1-indexed)")
    excerpt.add_argument(
        "--context",
        type=int,
        default=None,
        help="Lines shown around the selected one; -1 for the whole file "
        "(default: CODEFRAG_CONTEXT_LINES or 3)",
    )
    excerpt.add_argument(
        "--style",
        default=None,
        help="Pygments style (default: CODEFRAG_STYLE or 'default')",
    )

    args = subparsers.add_parser("args", help="Print an argument dump")
    args.add_argument(
        "json_file",
        nargs="?",
        default=None,
        help="JSON file holding [kind, value] pairs (default: stdin)",
    )
    args.add_argument(
        "--text",
        action="store_true",
        help="Print plain text instead of HTML.",
    )

    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
    )


def _run_excerpt(args, settings: Settings, *, out) -> int:
    if args.style:
        settings.style = args.style
    renderer = settings.build_renderer()
    html = renderer.file_excerpt(args.file, args.line, args.context)
    if html is None:
        print(f"✗ No excerpt available for {args.file}", file=sys.stderr)
        return 1
    print(html, file=out)
    return 0


def _run_args(args, settings: Settings, *, out) -> int:
    if args.json_file:
        with open(args.json_file, encoding="utf-8") as handle:
            raw = json.load(handle)
    else:
        raw = json.load(sys.stdin)

    renderer = settings.build_renderer()
    if args.text:
        print(renderer.format_args_as_text(raw), file=out)
    else:
        print(renderer.format_args(raw), file=out)
    return 0


def main(argv=None, *, out=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    _configure_logging(args.verbose)
    out = out if out is not None else sys.stdout

    try:
        settings = Settings.from_env()
        if args.command == "excerpt":
            return _run_excerpt(args, settings, out=out)
        return _run_args(args, settings, out=out)
    except (CodeFragError, OSError, ValueError) as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
