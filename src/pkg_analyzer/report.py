"""Manifest aggregation and report persistence."""

from __future__ import annotations

import asyncio
import json
import re
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import structlog
from jsonschema import Draft202012Validator

from .config import MANIFEST_NAME
from .errors import ManifestAccessError, ManifestParseError, ReportFormatError
from .models import PackageFailure, PackageRecord
from .parsers.package_json import parse as parse_manifest
from .parsers.version import normalize_dependencies, normalize_version

log = structlog.get_logger("pkg_analyzer.report")

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "packages-list.schema.json"


def build_record(root: Path, package: str, manifest_name: str = MANIFEST_NAME) -> PackageRecord:
    """Read one package's manifest and return its normalised record."""
    manifest = parse_manifest(root / package / manifest_name)
    return PackageRecord(
        name=package,
        version=normalize_version(manifest.version),
        dependencies=normalize_dependencies(manifest.dependencies),
        dev_dependencies=normalize_dependencies(manifest.dev_dependencies),
    )


async def _build(root: Path, package: str, manifest_name: str) -> PackageRecord:
    return await asyncio.to_thread(build_record, root, package, manifest_name)


async def aggregate(
    root: Path,
    packages: Sequence[str],
    manifest_name: str = MANIFEST_NAME,
) -> list[PackageRecord]:
    """Build a record for every package, in the order given.

    All manifests are read concurrently. The first failure aborts the batch.

    Raises:
        ManifestAccessError: a manifest could not be read.
        ManifestParseError: a manifest is not a valid package descriptor.
    """
    root = Path(root)
    records = await asyncio.gather(*(_build(root, pkg, manifest_name) for pkg in packages))
    return list(records)


async def aggregate_isolated(
    root: Path,
    packages: Sequence[str],
    manifest_name: str = MANIFEST_NAME,
) -> tuple[list[PackageRecord], list[PackageFailure]]:
    """Like :func:`aggregate`, but a bad manifest only drops its own package.

    Returns the records that could be built (in input order) and one
    :class:`PackageFailure` per package that could not.
    """
    root = Path(root)
    results = await asyncio.gather(
        *(_build(root, pkg, manifest_name) for pkg in packages), return_exceptions=True
    )

    records: list[PackageRecord] = []
    failures: list[PackageFailure] = []
    for package, result in zip(packages, results):
        if isinstance(result, (ManifestAccessError, ManifestParseError)):
            log.warning("aggregate.package_failed", package=package, error=str(result))
            failures.append(PackageFailure(name=package, error=str(result)))
        elif isinstance(result, BaseException):
            raise result
        else:
            records.append(result)
    return records, failures


def aggregate_sync(
    root: Path,
    packages: Sequence[str],
    manifest_name: str = MANIFEST_NAME,
) -> list[PackageRecord]:
    """Blocking wrapper around :func:`aggregate`."""
    return asyncio.run(aggregate(root, packages, manifest_name))


_LONE_SURROGATE_RE = re.compile("[\ud800-\udfff]")


def escape_surrogates(text: str) -> str:
    """Replace unpaired surrogates in JSON ``text`` with ``\\uXXXX`` escapes.

    ``json.loads`` accepts escapes such as ``"\\ud800"`` but the resulting
    character cannot be encoded as UTF-8. Surrogates only occur inside JSON
    strings, so the escaped text decodes back to the same value.
    """
    return _LONE_SURROGATE_RE.sub(lambda m: f"\\u{ord(m.group()):04x}", text)


def dumps(records: Iterable[PackageRecord]) -> str:
    text = json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False)
    return escape_surrogates(text)


def write_report(records: Iterable[PackageRecord], path: Path) -> Path:
    """Serialise ``records`` to ``path``, replacing any previous report."""
    path = Path(path)
    payload = dumps(records).encode("utf-8")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload)
    log.info("report.written", path=str(path))
    return path


# ---- Loading & validation ----------------------------------------------------------------


def _load_schema() -> dict[str, Any]:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_report(document: Any) -> None:
    """Check a decoded report document against the report schema.

    Raises:
        ReportFormatError: listing every violation, one per line.
    """
    validator = Draft202012Validator(_load_schema())
    errors = sorted(validator.iter_errors(document), key=lambda e: list(e.path))
    if errors:
        raise ReportFormatError("Report failed validation:\n" + _format_errors(errors))

    for index, entry in enumerate(document):
        expected = len(entry["dependencies"]) + len(entry["devDependencies"])
        if entry["numDependencies"] != expected:
            raise ReportFormatError(
                f"Report failed validation:\n- {index}/numDependencies: "
                f"{entry['numDependencies']} does not match {expected} declared dependencies"
            )


def load_report(path: Path) -> list[PackageRecord]:
    """Read and validate a report written by :func:`write_report`.

    Raises:
        OSError: the file cannot be read.
        ReportFormatError: the file is not valid JSON or fails validation.
    """
    content = Path(path).read_text(encoding="utf-8")
    try:
        document = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ReportFormatError(f"Report is not valid JSON: {exc}") from exc

    validate_report(document)
    return [PackageRecord.from_dict(entry) for entry in document]
