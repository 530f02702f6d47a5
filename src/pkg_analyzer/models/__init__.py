"""Data models for the package report."""

from __future__ import annotations

from .package_record import PackageFailure, PackageRecord

__all__ = [
    "PackageFailure",
    "PackageRecord",
]
