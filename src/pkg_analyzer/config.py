"""Configuration for a scan run.

The entry point runs with the fixed conventions below: the ``node_modules``
directory one level above this package, and ``packagesLists.json`` written
next to it. A JSON configuration file can override any of them for local
runs. Recognised keys are ``root``, ``output``, ``manifestName``,
``excluded`` and ``isolateFailures``; all are optional.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError


PROGRAM_DIR = Path(__file__).resolve().parent
DEFAULT_ROOT = PROGRAM_DIR.parent / "node_modules"
DEFAULT_OUTPUT = PROGRAM_DIR / "packagesLists.json"
MANIFEST_NAME = "package.json"
EXCLUDED_DIRS = frozenset({".bin"})


@dataclass(slots=True, frozen=True)
class Settings:
    """Resolved settings for one analysis run."""

    root: Path = DEFAULT_ROOT
    output: Path = DEFAULT_OUTPUT
    manifest_name: str = MANIFEST_NAME
    excluded: frozenset[str] = field(default=EXCLUDED_DIRS)
    isolate_failures: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> Settings:
        """Create Settings from a config mapping, validating each field.

        Relative ``root``/``output`` paths are resolved against ``base_dir``
        when given.
        """
        defaults = cls()

        root = _read_path(data, "root", defaults.root, base_dir)
        output = _read_path(data, "output", defaults.output, base_dir)

        manifest_name = data.get("manifestName", defaults.manifest_name)
        if not isinstance(manifest_name, str) or not manifest_name:
            raise ConfigError("'manifestName' must be a non-empty string")

        excluded = data.get("excluded", sorted(defaults.excluded))
        if not isinstance(excluded, list) or not all(
            isinstance(name, str) and name for name in excluded
        ):
            raise ConfigError("'excluded' must be an array of non-empty strings")

        isolate_failures = data.get("isolateFailures", defaults.isolate_failures)
        if not isinstance(isolate_failures, bool):
            raise ConfigError("'isolateFailures' must be a boolean")

        return cls(
            root=root,
            output=output,
            manifest_name=manifest_name,
            excluded=frozenset(excluded),
            isolate_failures=isolate_failures,
        )


def _read_path(data: dict[str, Any], key: str, default: Path, base_dir: Path | None) -> Path:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a non-empty string")
    path = Path(value)
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return path


def load_settings(path: Path | str | None = None) -> Settings:
    """Load settings from a JSON file, or return the defaults.

    Args:
        path: Optional path to the config file. When omitted the fixed
            defaults are used.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    if path is None:
        return Settings()

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    return Settings.from_dict(data, base_dir=config_path.resolve().parent)
