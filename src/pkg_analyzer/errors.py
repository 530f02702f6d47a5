"""Error types raised by the scanner, aggregator and report loader."""

from __future__ import annotations

from pathlib import Path


class AnalyzerError(RuntimeError):
    """Base class for all pkg-analyzer failures."""


class DirectoryReadError(AnalyzerError):
    """Raised when a directory cannot be listed during a scan."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        message = f"Failed to read directory: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ManifestAccessError(AnalyzerError):
    """Raised when a package manifest is missing or cannot be read."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        message = f"Cannot access manifest: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ManifestParseError(AnalyzerError):
    """Raised when a manifest is not a valid package descriptor."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid manifest {path}: {reason}")


class ReportFormatError(AnalyzerError):
    """Raised when a report document does not match the report schema."""


class ConfigError(AnalyzerError):
    """Raised when the configuration file cannot be loaded or is invalid."""
