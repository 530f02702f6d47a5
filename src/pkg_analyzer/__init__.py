"""pkg-analyzer core package.

Scans an installed ``node_modules`` tree, aggregates every package manifest
into a single report, and provides a filterable view over that report.
"""

__all__ = [
    "core",
]
