"""Tests for the package.json parser."""

from __future__ import annotations

from pathlib import Path

import pytest

from pkg_analyzer.errors import ManifestAccessError, ManifestParseError
from pkg_analyzer.parsers.package_json import parse, parse_text

from .conftest import write_manifest

PATH = Path("pkg/package.json")


class TestParseText:
    def test_extracts_fields(self):
        manifest = parse_text(
            '{"version": "^1.0.0", "dependencies": {"a": "1"}, "devDependencies": {"b": "2"}}',
            PATH,
        )
        assert manifest.version == "^1.0.0"
        assert manifest.dependencies == {"a": "1"}
        assert manifest.dev_dependencies == {"b": "2"}

    def test_missing_sections_are_empty(self):
        manifest = parse_text('{"version": "1.0.0"}', PATH)
        assert manifest.dependencies == {}
        assert manifest.dev_dependencies == {}

    def test_null_sections_are_empty(self):
        manifest = parse_text('{"version": "1.0.0", "dependencies": null}', PATH)
        assert manifest.dependencies == {}

    def test_missing_version_is_empty_string(self):
        assert parse_text("{}", PATH).version == ""

    def test_invalid_json(self):
        with pytest.raises(ManifestParseError, match="invalid JSON"):
            parse_text("{not json", PATH)

    def test_non_object_document(self):
        with pytest.raises(ManifestParseError, match="JSON object"):
            parse_text("[1, 2]", PATH)

    def test_non_object_section(self):
        with pytest.raises(ManifestParseError, match="'dependencies'"):
            parse_text('{"dependencies": ["a"]}', PATH)

    def test_non_string_dependency_version(self):
        with pytest.raises(ManifestParseError, match="'devDependencies.a'"):
            parse_text('{"devDependencies": {"a": 1}}', PATH)

    def test_non_string_version(self):
        with pytest.raises(ManifestParseError, match="'version'"):
            parse_text('{"version": 1}', PATH)


class TestParse:
    def test_reads_file(self, tmp_path: Path):
        manifest = write_manifest(tmp_path / "pkg", {"version": "2.0.0"})
        assert parse(manifest).version == "2.0.0"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ManifestAccessError):
            parse(tmp_path / "missing" / "package.json")
