"""Tests for the report validation CLI."""

from __future__ import annotations

from pathlib import Path

from pkg_analyzer.models import PackageRecord
from pkg_analyzer.report import write_report
from pkg_analyzer.validators.report_schema import main


class TestReportSchemaCli:
    def test_valid_report(self, tmp_path: Path, capsys):
        out = tmp_path / "report.json"
        write_report([PackageRecord(name="a", version="1.0.0")], out)
        assert main(["--input", str(out)]) == 0
        assert "is valid (1 packages)" in capsys.readouterr().out

    def test_invalid_report(self, tmp_path: Path, capsys):
        out = tmp_path / "report.json"
        out.write_text('[{"packageName": "a"}]', encoding="utf-8")
        assert main(["--input", str(out)]) == 1
        assert "failed validation" in capsys.readouterr().err

    def test_missing_report(self, tmp_path: Path, capsys):
        assert main(["--input", str(tmp_path / "missing.json")]) == 1
        assert "ERROR" in capsys.readouterr().err
