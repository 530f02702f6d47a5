"""Shared pytest fixtures for pkg-analyzer tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def write_manifest(directory: Path, data: dict | str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    manifest = directory / "package.json"
    text = data if isinstance(data, str) else json.dumps(data)
    manifest.write_text(text, encoding="utf-8")
    return manifest


@pytest.fixture
def node_modules(tmp_path: Path) -> Path:
    """A small installed tree: two plain packages, one scope, and .bin."""
    root = tmp_path / "node_modules"
    write_manifest(
        root / "a",
        {"name": "a", "version": "^1.2.3", "dependencies": {"x": "~2.0.0"}},
    )
    write_manifest(
        root / "lodash",
        {"name": "lodash", "version": "4.17.21", "devDependencies": {"mocha": ">=10.0.0"}},
    )
    write_manifest(root / "@scope" / "pkg", {"name": "@scope/pkg", "version": "0.1.0"})
    (root / ".bin").mkdir()
    (root / ".bin" / "tool").write_text("#!/bin/sh\n", encoding="utf-8")
    (root / ".package-lock.json").write_text("{}", encoding="utf-8")
    return root
