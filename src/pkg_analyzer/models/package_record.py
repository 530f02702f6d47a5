"""Package record model."""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Mapping
from typing import Any


@dataclass(frozen=True)
class PackageRecord:
    """One installed package as it appears in the report."""

    name: str
    version: str
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Package name must be non-empty")

    @property
    def num_dependencies(self) -> int:
        return len(self.dependencies) + len(self.dev_dependencies)

    def to_dict(self) -> dict[str, Any]:
        return {
            "packageName": self.name,
            "dependencies": dict(self.dependencies),
            "devDependencies": dict(self.dev_dependencies),
            "version": self.version,
            "numDependencies": self.num_dependencies,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PackageRecord:
        return cls(
            name=str(data["packageName"]),
            version=str(data.get("version", "")),
            dependencies=dict(data.get("dependencies") or {}),
            dev_dependencies=dict(data.get("devDependencies") or {}),
        )


@dataclass(frozen=True)
class PackageFailure:
    """A package whose manifest could not be turned into a record."""

    name: str
    error: str

    def to_dict(self) -> dict[str, str]:
        return {"packageName": self.name, "error": self.error}
