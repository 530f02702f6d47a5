"""Package directory discovery under an installed-dependencies tree."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Collection
from pathlib import Path

import structlog

from .config import EXCLUDED_DIRS, MANIFEST_NAME
from .errors import DirectoryReadError, ManifestAccessError

log = structlog.get_logger("pkg_analyzer.discovery")


def _probe_manifest(directory: Path, manifest_name: str) -> None:
    manifest = directory / manifest_name
    try:
        manifest = manifest.resolve()
        exists = manifest.exists()
    except (OSError, RuntimeError) as exc:
        raise ManifestAccessError(manifest, str(exc)) from exc
    if not exists:
        raise ManifestAccessError(manifest, "not found")


def has_manifest(directory: Path, manifest_name: str = MANIFEST_NAME) -> bool:
    """Return True when ``directory`` directly contains a manifest file.

    Any access failure counts as "no manifest".
    """
    try:
        _probe_manifest(directory, manifest_name)
    except ManifestAccessError:
        return False
    return True


def _list_dir(directory: Path) -> list[str]:
    try:
        return os.listdir(directory)
    except OSError as exc:
        raise DirectoryReadError(directory, exc.strerror or str(exc)) from exc


async def _scan_entry(
    directory: Path,
    name: str,
    manifest_name: str,
    excluded: Collection[str],
    ancestors: frozenset[str],
) -> list[str]:
    if name in excluded:
        return []

    path = directory / name
    if not await asyncio.to_thread(path.is_dir):
        return []

    if await asyncio.to_thread(has_manifest, path, manifest_name):
        return [name]

    real = await asyncio.to_thread(os.path.realpath, path)
    if real in ancestors:
        log.debug("scan.cycle_skipped", path=str(path), target=real)
        return []

    nested = await _scan_dir(path, manifest_name, excluded, ancestors | {real})
    return [f"{name}/{sub}" for sub in nested]


async def _scan_dir(
    directory: Path,
    manifest_name: str,
    excluded: Collection[str],
    ancestors: frozenset[str],
) -> list[str]:
    entries = await asyncio.to_thread(_list_dir, directory)
    results = await asyncio.gather(
        *(_scan_entry(directory, name, manifest_name, excluded, ancestors) for name in entries)
    )
    return [found for group in results for found in group]


async def scan(
    root: Path,
    manifest_name: str = MANIFEST_NAME,
    excluded: Collection[str] = EXCLUDED_DIRS,
) -> list[str]:
    """Return relative paths of every package directory under ``root``.

    A directory holding a manifest is a package and is not descended into.
    A directory without one is searched recursively, and what it contains is
    reported as ``parent/child``. Entries named in ``excluded`` and plain
    files are ignored. Siblings are examined concurrently; the result keeps
    directory listing order.

    Directories that resolve back onto one of their own ancestors (symlink
    cycles) are skipped.

    Raises:
        DirectoryReadError: ``root`` or any directory being recursed into
            could not be listed.
    """
    root = Path(root)
    real_root = await asyncio.to_thread(os.path.realpath, root)
    packages = await _scan_dir(root, manifest_name, excluded, frozenset({real_root}))
    log.debug("scan.complete", root=str(root), packages=len(packages))
    return packages


def scan_sync(
    root: Path,
    manifest_name: str = MANIFEST_NAME,
    excluded: Collection[str] = EXCLUDED_DIRS,
) -> list[str]:
    """Blocking wrapper around :func:`scan`."""
    return asyncio.run(scan(root, manifest_name, excluded))
