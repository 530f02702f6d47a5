#!/usr/bin/env python3
"""Local CLI entrypoint to run the analyzer with explicit paths.

Usage:
  python scripts/analyze.py [--root node_modules] [--output report.json]
                            [--config analyzer.json] [--isolate-failures]
                            [--summary] [--log-format console|json]

Without options this behaves like the ``pkg-analyzer`` console script.
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from pkg_analyzer.config import load_settings
from pkg_analyzer.core import run_analysis
from pkg_analyzer.errors import AnalyzerError
from pkg_analyzer.logging import setup_logging
from pkg_analyzer.summary import render_summary


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--root", type=Path, default=None)
    parser.add_argument("--output", type=Path, default=None)
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--isolate-failures", action="store_true")
    parser.add_argument("--summary", action="store_true")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-format", choices=("console", "json"), default="console")
    args = parser.parse_args()

    setup_logging(args.log_level, args.log_format)

    try:
        settings = load_settings(args.config)
    except AnalyzerError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    overrides = {}
    if args.root is not None:
        overrides["root"] = args.root
    if args.output is not None:
        overrides["output"] = args.output
    if args.isolate_failures:
        overrides["isolate_failures"] = True
    settings = dataclasses.replace(settings, **overrides)

    try:
        result = run_analysis(settings)
    except (AnalyzerError, OSError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if args.summary:
        print(render_summary(result.records))

    for failure in result.failures:
        print(f"WARNING: skipped {failure.name}: {failure.error}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
