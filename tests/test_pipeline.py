"""Tests for configuration loading and the render pipeline."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from inspectdocs.config import RenderConfig
from inspectdocs.pipeline import Pipeline, load_inspection, load_invoice

TODAY = date(2024, 3, 15)


@pytest.fixture
def pipeline(tmp_path):
    return Pipeline(RenderConfig(output_dir=tmp_path), today=TODAY)


def _write(tmp_path: Path, name: str, payload: dict) -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestRenderConfig:
    def test_defaults(self):
        cfg = RenderConfig()
        assert cfg.theme == "wasla"
        assert cfg.invoice_theme == "slate"
        assert cfg.watermark is True
        assert cfg.photo_limit is None

    def test_from_env(self):
        cfg = RenderConfig.from_env({
            "INSPECTDOCS_OUTPUT_DIR": "/tmp/reports",
            "INSPECTDOCS_PHOTO_LIMIT": "3",
            "INSPECTDOCS_WATERMARK": "false",
            "INSPECTDOCS_ASSET_TIMEOUT": "5",
            "INSPECTDOCS_COMPANY_NAME": "Acme",
            "INSPECTDOCS_LOGO": "",
        })
        assert cfg.output_dir == Path("/tmp/reports")
        assert cfg.photo_limit == 3
        assert cfg.watermark is False
        assert cfg.asset_timeout == 5.0
        assert cfg.company_name == "Acme"
        assert cfg.logo is None

    def test_overrides_win_and_none_is_ignored(self):
        cfg = RenderConfig.from_env({"INSPECTDOCS_THEME": "mono"}, theme="slate", photo_limit=None)
        assert cfg.theme == "slate"
        assert cfg.photo_limit is None


class TestLoaders:
    def test_load_inspection(self, tmp_path, inspection_json):
        record = load_inspection(_write(tmp_path, "insp.json", inspection_json))
        assert record.client_name == "Salma Al Habsi"

    def test_load_invoice(self, tmp_path, invoice_json):
        assert load_invoice(_write(tmp_path, "inv.json", invoice_json)).total_amount == 399

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_invoice(tmp_path / "missing.json")


class TestPipeline:
    def test_run_demo(self, pipeline, tmp_path):
        result = pipeline.run_demo()
        assert len(result.results) == 5
        assert not result.failed
        assert len(list(tmp_path.glob("*.pdf"))) == 5

    def test_run_report(self, pipeline, tmp_path, inspection_json):
        result = pipeline.run_report(_write(tmp_path, "insp.json", inspection_json))
        assert [r.success for r in result.results] == [True]
        assert result.results[0].output_path.name == "InspectionReport_SalmaAlHabsi_2024-03-15.pdf"

    def test_run_invoice(self, pipeline, tmp_path, invoice_json):
        result = pipeline.run_invoice(_write(tmp_path, "inv.json", invoice_json))
        assert result.succeeded[0].output_path.exists()

    def test_missing_source_renders_nothing(self, pipeline, tmp_path):
        result = pipeline.run_report(tmp_path / "missing.json")
        assert result.results == []

    def test_malformed_json_renders_nothing(self, pipeline, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert pipeline.run_invoice(path).results == []

    def test_strict_refuses_invalid_invoice(self, pipeline, tmp_path, invoice_json):
        invoice_json["clientEmail"] = "nope"
        path = _write(tmp_path, "inv.json", invoice_json)
        assert pipeline.run_invoice(path, strict=True).results == []
        assert pipeline.run_invoice(path).succeeded

    def test_recompute_totals(self, pipeline, tmp_path, invoice_json, monkeypatch):
        invoice_json.update({"subtotal": 0, "tax": 0, "totalAmount": 0})
        path = _write(tmp_path, "inv.json", invoice_json)
        seen = []

        from inspectdocs.generators.invoice_generator import InvoiceGenerator

        build = InvoiceGenerator.build_document

        def spy(self, record):
            seen.append(record.total_amount)
            return build(self, record)

        monkeypatch.setattr(InvoiceGenerator, "build_document", spy)
        assert pipeline.run_invoice(path, recompute=True).succeeded
        assert seen == [399.0]

    def test_failure_is_recorded(self, tmp_path):
        config = RenderConfig(output_dir=tmp_path, logo=str(tmp_path / "missing.png"))
        result = Pipeline(config, today=TODAY).run_demo()
        assert len(result.failed) == 5
