"""Core analysis entrypoints.

``run_analysis`` performs one scan → aggregate → write pass and raises on
failure. ``analyze`` is the process entry point: it runs with the default
settings, logs any failure and returns an empty list instead of raising.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from .config import Settings
from .discovery import scan
from .errors import AnalyzerError
from .models import PackageFailure, PackageRecord
from .report import aggregate, aggregate_isolated, write_report

log = structlog.get_logger("pkg_analyzer.core")


@dataclass(slots=True)
class AnalysisResult:
    """Outcome of a completed analysis run."""

    records: list[PackageRecord]
    output_path: Path
    duration_seconds: float
    failures: list[PackageFailure] = field(default_factory=list)


async def analyze_async(settings: Settings) -> AnalysisResult:
    started = time.perf_counter()

    packages = await scan(settings.root, settings.manifest_name, settings.excluded)

    failures: list[PackageFailure] = []
    if settings.isolate_failures:
        records, failures = await aggregate_isolated(
            settings.root, packages, settings.manifest_name
        )
    else:
        records = await aggregate(settings.root, packages, settings.manifest_name)

    output_path = await asyncio.to_thread(write_report, records, settings.output)

    return AnalysisResult(
        records=records,
        output_path=output_path,
        duration_seconds=time.perf_counter() - started,
        failures=failures,
    )


def run_analysis(settings: Settings | None = None) -> AnalysisResult:
    """Scan ``settings.root``, aggregate every manifest and write the report.

    Nothing is written when scanning or aggregation fails.

    Raises:
        DirectoryReadError: a directory in the tree could not be listed.
        ManifestAccessError, ManifestParseError: a manifest was unusable and
            ``settings.isolate_failures`` is off.
    """
    settings = settings or Settings()
    result = asyncio.run(analyze_async(settings))
    log.info(
        "analysis.complete",
        root=str(settings.root),
        packages=len(result.records),
        failures=len(result.failures),
        duration_seconds=round(result.duration_seconds, 3),
    )
    return result


def analyze() -> list[PackageRecord]:
    """Analyse the default ``node_modules`` tree and write the report.

    Failures are logged and yield an empty list.
    """
    try:
        return run_analysis().records
    except (AnalyzerError, OSError) as exc:
        log.error("analysis.failed", error=str(exc), exc_info=True)
        return []


def main() -> int:
    from .logging import setup_logging

    setup_logging()
    analyze()
    return 0
