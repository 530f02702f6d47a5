#!/usr/bin/env python3
"""Browse a package report and filter it by package name.

Usage:
  python scripts/view_report.py [--report path] [--sort name|dependencies|version]
                                [--search TEXT]

With ``--search`` the filtered list is printed once; otherwise an
interactive prompt reads search terms until EOF or ``:q``.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pkg_analyzer.config import DEFAULT_OUTPUT
from pkg_analyzer.errors import ReportFormatError
from pkg_analyzer.view import SORT_KEYS, PackageListView, run_interactive


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--report", type=Path, default=DEFAULT_OUTPUT)
    parser.add_argument("--sort", choices=SORT_KEYS, default="name")
    parser.add_argument("--search", type=str, default=None)
    args = parser.parse_args()

    try:
        view = PackageListView.from_path(args.report, sort_key=args.sort)
    except (OSError, ReportFormatError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if args.search is not None:
        view.set_search_term(args.search)
        print(view.render())
        return 0

    run_interactive(view)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
