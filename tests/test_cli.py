"""Tests for the command-line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from inspectdocs import __version__
from inspectdocs.cli import main


@pytest.fixture
def runner(monkeypatch):
    for name in ("INSPECTDOCS_LOGO", "INSPECTDOCS_FONT_PATH", "INSPECTDOCS_BOLD_FONT_PATH"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


class TestCli:
    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_themes(self, runner):
        result = runner.invoke(main, ["themes"])
        assert result.exit_code == 0
        assert "wasla" in result.output
        assert "slate" in result.output

    def test_validate_valid(self, runner, tmp_path, invoice_json):
        path = tmp_path / "inv.json"
        path.write_text(json.dumps(invoice_json), encoding="utf-8")
        result = runner.invoke(main, ["validate", str(path)])
        assert result.exit_code == 0
        assert "is valid" in result.output

    def test_validate_invalid(self, runner, tmp_path, invoice_json):
        invoice_json["clientEmail"] = "nope"
        path = tmp_path / "inv.json"
        path.write_text(json.dumps(invoice_json), encoding="utf-8")
        result = runner.invoke(main, ["validate", str(path)])
        assert result.exit_code == 1
        assert "clientEmail" in result.output

    def test_demo(self, runner, tmp_path):
        result = runner.invoke(main, ["demo", "-o", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert len(list(tmp_path.glob("*.pdf"))) == 5

    def test_report(self, runner, tmp_path, inspection_json):
        path = tmp_path / "insp.json"
        path.write_text(json.dumps(inspection_json), encoding="utf-8")
        out = tmp_path / "out"
        result = runner.invoke(main, ["report", str(path), "-o", str(out), "-t", "mono", "--photo-limit", "2"])
        assert result.exit_code == 0, result.output
        assert len(list(out.glob("InspectionReport_SalmaAlHabsi_*.pdf"))) == 1

    def test_report_missing_source(self, runner, tmp_path):
        result = runner.invoke(main, ["report", str(tmp_path / "missing.json"), "-o", str(tmp_path)])
        assert result.exit_code == 1

    def test_unknown_theme(self, runner, tmp_path):
        result = runner.invoke(main, ["demo", "-o", str(tmp_path), "-t", "neon"])
        assert result.exit_code == 2
        assert "Unknown theme" in result.output

    def test_layout_tree(self, runner, tmp_path, invoice_json):
        path = tmp_path / "inv.json"
        path.write_text(json.dumps(invoice_json), encoding="utf-8")
        result = runner.invoke(main, ["layout", str(path), "-k", "invoice"])
        assert result.exit_code == 0
        assert "Page 1" in result.output
        assert "table_row" in result.output

    def test_themes_marks_defaults(self, runner):
        result = runner.invoke(main, ["themes"])
        assert "Document Themes" in result.output
        assert "report" in result.output
        assert "invoice" in result.output

    def test_validate_malformed_json(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(main, ["validate", str(path)])
        assert result.exit_code == 1
        assert not isinstance(result.exception, ValueError)
        assert "Could not load" in result.output

    def test_layout_invalid_record(self, runner, tmp_path):
        path = tmp_path / "insp.json"
        path.write_text(json.dumps({"areas": "not a list"}), encoding="utf-8")
        result = runner.invoke(main, ["layout", str(path)])
        assert result.exit_code == 1
        assert "Could not load" in result.output
