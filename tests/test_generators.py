"""Tests for the report and invoice generators."""

from __future__ import annotations

from datetime import date

import pytest

from inspectdocs.config import RenderConfig
from inspectdocs.core.records import InspectionArea, InspectionData, InspectionItem, InspectionPhoto
from inspectdocs.generators import InspectionReportGenerator, InvoiceGenerator
from inspectdocs.layout.page import ImageOp

TODAY = date(2024, 3, 15)


def _all_text(pages):
    return [t for page in pages for t in page.text()]


def _photo_record(png_base64, count: int) -> InspectionData:
    items = [
        InspectionItem(id=f"i{n}", point=f"Point {n}", status="Fail",
                       photos=[InspectionPhoto(id=f"p{n}", base64=png_base64)])
        for n in range(count)
    ]
    return InspectionData(client_name="Test Client", inspection_date="2024-03-15",
                          areas=[InspectionArea(name="Roof", items=items)])


# ---------------------------------------------------------------------------
# Inspection report
# ---------------------------------------------------------------------------

class TestInspectionReportGenerator:
    def test_render_returns_pdf(self, inspection):
        data = InspectionReportGenerator(today=TODAY).render(inspection)
        assert data.startswith(b"%PDF")

    def test_generates_pdf(self, inspection, tmp_path):
        gen = InspectionReportGenerator(today=TODAY)
        result = gen.generate(inspection, tmp_path, on=TODAY)
        assert result.success
        assert result.output_path.name == "InspectionReport_AhmedAlFarsi_2024-03-15.pdf"
        assert result.output_path.read_bytes().startswith(b"%PDF")
        assert result.page_count >= 4

    def test_footer_counts_pages(self, inspection):
        pages = InspectionReportGenerator(today=TODAY).layout(inspection)
        total = len(pages)
        for page in pages:
            assert f"Page {page.number} of {total}" in page.text()

    def test_sections_in_order(self, inspection):
        pages = InspectionReportGenerator(today=TODAY).layout(inspection)
        headings = [
            b.text()[0] for page in pages for b in page.blocks_of("heading")
        ]
        order = ["PROPERTY INFORMATION", "OVERVIEW & DISCLAIMER", "IMPORTANT NOTICES",
                 "INSPECTION FINDINGS", "INSPECTION SUMMARY"]
        found = [next(i for i, h in enumerate(headings) if name in h.upper()) for name in order]
        assert found == sorted(found)

    def test_findings_rows(self, inspection):
        pages = InspectionReportGenerator(today=TODAY).layout(inspection)
        rows = [b for page in pages for b in page.blocks_of("table_row")]
        texts = [t for row in rows for t in row.text()]
        assert "LIVING ROOM" in texts
        assert "Fail" in texts
        # three area rows plus eight items
        assert len(rows) == 11

    def test_missing_photo_gets_placeholder(self, inspection):
        pages = InspectionReportGenerator(today=TODAY).layout(inspection)
        assert "[Image Not Available]" in _all_text(pages)

    def test_photo_drawn(self, png_base64):
        pages = InspectionReportGenerator(today=TODAY).layout(_photo_record(png_base64, 1))
        photo_rows = [b for page in pages for b in page.blocks_of("photo_row")]
        assert any(isinstance(op, ImageOp) for op in photo_rows[0].ops)

    def test_photo_limit(self, png_base64):
        gen = InspectionReportGenerator(config=RenderConfig(photo_limit=1), today=TODAY)
        pages = gen.layout(_photo_record(png_base64, 3))
        assert "+ 2 more photos available in full report" in _all_text(pages)

    def test_empty_record(self):
        pages = InspectionReportGenerator(today=TODAY).layout(InspectionData())
        text = _all_text(pages)
        assert "No inspection items were recorded." in text
        assert not any(page.blocks_of("table_row") for page in pages)

    def test_summary_values(self, inspection):
        pages = InspectionReportGenerator(today=TODAY).layout(inspection)
        assert "71%" in _all_text(pages)

    def test_missing_logo_fails_generation(self, inspection, tmp_path):
        config = RenderConfig(logo=str(tmp_path / "missing.png"))
        result = InspectionReportGenerator(config=config, today=TODAY).generate(inspection, tmp_path, on=TODAY)
        assert not result.success
        assert "Asset not found" in result.error
        assert not result.output_path.exists()

    def test_missing_font_propagates(self, inspection, tmp_path):
        config = RenderConfig(font_path=str(tmp_path / "missing.ttf"))
        with pytest.raises(FileNotFoundError):
            InspectionReportGenerator(config=config, today=TODAY).render(inspection)

    def test_logo_watermark(self, inspection, tmp_path, png_bytes):
        logo = tmp_path / "logo.png"
        logo.write_bytes(png_bytes)
        pages = InspectionReportGenerator(config=RenderConfig(logo=str(logo)), today=TODAY).layout(inspection)
        assert all(any(isinstance(op, ImageOp) for op in page.header) for page in pages)

        plain = InspectionReportGenerator(config=RenderConfig(logo=str(logo), watermark=False), today=TODAY)
        assert not any(isinstance(op, ImageOp) for op in plain.layout(inspection)[0].header)


# ---------------------------------------------------------------------------
# Invoice
# ---------------------------------------------------------------------------

class TestInvoiceGenerator:
    def test_generates_pdf(self, invoices, tmp_path):
        result = InvoiceGenerator(today=TODAY).generate(invoices[0], tmp_path, on=TODAY)
        assert result.success
        assert result.output_path.name == "Invoice_AhmedAlFarsi_2024-03-15.pdf"
        assert result.output_path.read_bytes().startswith(b"%PDF")

    def test_uses_invoice_theme(self):
        assert InvoiceGenerator().theme.name == "slate"
        assert InspectionReportGenerator().theme.name == "wasla"

    def test_totals(self, invoices):
        text = _all_text(InvoiceGenerator(today=TODAY).layout(invoices[0]))
        assert "INVOICE" in text
        assert "PAID" in text
        assert "OMR 775.00" in text
        assert "OMR 38.75" in text
        assert "OMR 813.75" in text
        assert "Residential Property Inspection (350 m²)" in text

    def test_partial_shows_balance(self, invoices):
        text = _all_text(InvoiceGenerator(today=TODAY).layout(invoices[3]))
        assert "Amount Paid:" in text
        assert "Balance Due:" in text
        assert "OMR 382.25" in text

    def test_unpaid_has_no_balance_rows(self, invoices):
        text = _all_text(InvoiceGenerator(today=TODAY).layout(invoices[1]))
        assert "Amount Paid:" not in text

    def test_property_line_listed_once(self, invoices):
        text = _all_text(InvoiceGenerator(today=TODAY).layout(invoices[0]))
        assert text.count("Residential Property Inspection (350 m²)") == 1

    def test_no_services(self, invoices):
        bare = invoices[2].model_copy(update={"services": [], "property_area": None})
        text = _all_text(InvoiceGenerator(today=TODAY).layout(bare))
        assert "No services listed" in text
