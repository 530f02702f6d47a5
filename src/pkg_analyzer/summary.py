"""Human-readable Markdown summary of a package report."""

from __future__ import annotations

from collections.abc import Sequence

from .models import PackageRecord


def render_summary(records: Sequence[PackageRecord]) -> str:
    """Return a Markdown string with totals and one table row per package."""
    total_deps = sum(len(r.dependencies) for r in records)
    total_dev = sum(len(r.dev_dependencies) for r in records)

    lines = []
    lines.append("# pkg-analyzer Summary")
    lines.append("")
    lines.append(
        f"Packages: {len(records)} | Dependencies: {total_deps} | Dev dependencies: {total_dev}"
    )
    lines.append("")
    lines.append("| Package | Version | Dependencies | Dev dependencies |")
    lines.append("| --- | --- | --- | --- |")

    for record in records:
        version = record.version or "n/a"
        lines.append(
            f"| {record.name} | {version} | {len(record.dependencies)} | "
            f"{len(record.dev_dependencies)} |"
        )

    if not records:
        lines.append("| (no packages found) | n/a | 0 | 0 |")

    return "\n".join(lines) + "\n"
