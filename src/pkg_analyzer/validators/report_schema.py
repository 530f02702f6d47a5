"""CLI entrypoint for validating a written package report."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ..config import DEFAULT_OUTPUT
from ..errors import ReportFormatError
from ..report import load_report


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--input",
        type=Path,
        default=DEFAULT_OUTPUT,
        help="Path to the JSON report to validate",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        records = load_report(args.input)
    except OSError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except ReportFormatError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(f"Report {args.input} is valid ({len(records)} packages)")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
