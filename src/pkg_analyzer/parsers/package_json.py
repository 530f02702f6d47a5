"""Parse package.json and extract the fields carried into the report."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..errors import ManifestAccessError, ManifestParseError


SECTIONS = ("dependencies", "devDependencies")


@dataclass(frozen=True)
class Manifest:
    """The subset of a package.json the report needs, before normalisation."""

    version: str
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)


def read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestAccessError(path, str(exc)) from exc


def _section(data: dict[str, Any], key: str, path: Path) -> dict[str, str]:
    deps = data.get(key)
    if deps is None:
        return {}
    if not isinstance(deps, dict):
        raise ManifestParseError(path, f"'{key}' must be an object")
    for name, version in deps.items():
        if not isinstance(version, str):
            raise ManifestParseError(path, f"'{key}.{name}' must be a string")
    return dict(deps)


def parse_text(text: str, path: Path) -> Manifest:
    """Parse manifest ``text`` read from ``path``.

    Missing ``dependencies``/``devDependencies`` (or ``null``) are empty
    mappings; a missing ``version`` is the empty string.

    Raises:
        ManifestParseError: invalid JSON, a non-object document, a non-object
            dependency section or a non-string version.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc

    if not isinstance(data, dict):
        raise ManifestParseError(path, "manifest must be a JSON object")

    version = data.get("version", "")
    if version is None:
        version = ""
    if not isinstance(version, str):
        raise ManifestParseError(path, "'version' must be a string")

    dependencies, dev_dependencies = (_section(data, key, path) for key in SECTIONS)
    return Manifest(
        version=version,
        dependencies=dependencies,
        dev_dependencies=dev_dependencies,
    )


def parse(path: Path) -> Manifest:
    """Read and parse the manifest at ``path``."""
    return parse_text(read(path), path)
