# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Command-line entry point.

Reads an HTML page from a file (or stdin) and writes it in the requested
format to stdout. Pipeline settings come from ``DOMTRIM_*`` variables; logs
go to stderr so stdout stays clean for piping.

    python -m domtrim.cli page.html
    curl -s https://example.com | python -m domtrim.cli --format markdown
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from domtrim.config import CleanSettings
from domtrim.logging_config import configure
from domtrim.preprocessing.preprocess import Format, preprocess
from domtrim.pruning.pipeline import clean, clean_with_stats

logger = logging.getLogger(__name__)


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Prune an HTML page into compact text for LLM prompts",
        prog="python -m domtrim.cli",
    )
    parser.add_argument("source", nargs="?", default="-", help="HTML file to read (default: stdin)")
    parser.add_argument(
        "--format",
        choices=[f.value for f in Format],
        default=Format.CLEAN.value,
        help="Output format (default: clean)",
    )
    parser.add_argument("--stats", action="store_true", help="Log token and timing stats (clean format only)")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure(json_output=args.json_logs, level="DEBUG" if args.verbose else "INFO")

    try:
        settings = CleanSettings.from_env()
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    try:
        raw_html = _read_input(args.source)
    except OSError as e:
        print(f"ERROR: cannot read {args.source}: {e.strerror or e}", file=sys.stderr)
        return 1

    fmt = Format(args.format)
    if fmt is not Format.CLEAN:
        content = preprocess(raw_html, fmt).content
    elif args.stats:
        result = clean_with_stats(raw_html, settings)
        content = result.content
        logger.info(
            "%d → %d tokens (%.1f%% reduction) in %.1f ms",
            result.raw_token_count,
            result.cleaned_token_count,
            result.token_reduction_pct,
            result.elapsed_ms,
        )
    else:
        content = clean(raw_html, settings)

    sys.stdout.write(content + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
