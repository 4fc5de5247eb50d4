"""Invoice PDF: header facts, bill-to, services table and totals."""

from __future__ import annotations

import logging
from datetime import date

from ..core.formatting import format_currency, format_date, or_fallback, sanitize_text
from ..core.models import (
    CellStyle,
    ContentBlock,
    DocumentKind,
    DocumentMetadata,
    DocumentModel,
    HeadingBlock,
    ParagraphBlock,
    Section,
    SpacerBlock,
    TableBlock,
    TableCell,
)
from ..core.records import Invoice, InvoiceStatus
from . import text as T
from .base import BaseGenerator

log = logging.getLogger(__name__)

# Relative services column widths (description, quantity, unit price, total)
_SERVICE_WEIGHTS = (80, 25, 35, 35)

_TAGLINE = "Professional Property Inspection Services"

_STATUS_COLORS = {
    InvoiceStatus.PAID: (34, 197, 94),
    InvoiceStatus.UNPAID: (239, 68, 68),
    InvoiceStatus.PARTIAL: (245, 158, 11),
    InvoiceStatus.DRAFT: (107, 114, 128),
}


class InvoiceGenerator(BaseGenerator):
    """Builds an invoice document.

    Amounts printed in the totals block are the ones stored on the invoice;
    call ``Invoice.with_computed_totals()`` first to print recomputed ones.
    The services table lists ``Invoice.billable_lines()``, which adds the
    area-based property inspection line when it is not already present.
    """

    kind = DocumentKind.INVOICE

    def __init__(self, *args, today: date | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.today = today

    def _theme_name(self) -> str:
        return self.config.invoice_theme

    def client_name(self, record: Invoice) -> str:
        return record.client_name

    def header_subtitle(self, doc: DocumentModel) -> str:
        return _TAGLINE

    def build_document(self, record: Invoice) -> DocumentModel:
        today = self.today or date.today()
        log.debug("Building invoice %s", record.invoice_number or "-")

        sections = [self._heading(record), self._bill_to(record)]
        if sanitize_text(record.property_location):
            sections.append(self._property(record))
        sections.append(self._services(record))
        sections.append(self._totals(record))
        if sanitize_text(record.notes):
            sections.append(Section(blocks=[
                HeadingBlock(level=3, text="Notes:"),
                ParagraphBlock(text=sanitize_text(record.notes)),
            ]))
        sections.append(self._closing(today))

        metadata = DocumentMetadata(
            kind=self.kind,
            title=f"Invoice {record.invoice_number}".strip(),
            subtitle=_TAGLINE,
            client_name=sanitize_text(record.client_name),
            property_location=sanitize_text(record.property_location),
            reference=record.invoice_number,
            generated_at=today.isoformat(),
        )
        return DocumentModel(metadata=metadata, sections=sections)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _heading(self, record: Invoice) -> Section:
        c, f = self.theme.colors, self.theme.fonts
        facts = "\n".join([
            f"Invoice #: {or_fallback(record.invoice_number)}",
            f"Date: {format_date(record.invoice_date)}",
            f"Due Date: {format_date(record.due_date)}",
        ])
        return Section(blocks=[
            ParagraphBlock(text=T.INVOICE_TITLE[0], bold=True, font_size=f.title_size, align="right",
                           color=c.primary),
            ParagraphBlock(text=facts, font_size=10, align="right"),
            ParagraphBlock(text=record.status.value.upper(), bold=True, align="right",
                           color=_STATUS_COLORS.get(record.status, _STATUS_COLORS[InvoiceStatus.DRAFT])),
        ])

    def _bill_to(self, record: Invoice) -> Section:
        lines = [
            or_fallback(record.client_name),
            sanitize_text(record.client_email),
            *[sanitize_text(line) for line in record.client_address.split("\n")],
        ]
        return Section(blocks=[
            HeadingBlock(level=3, text="Bill To:"),
            ParagraphBlock(text="\n".join(line for line in lines if line), font_size=10),
        ])

    def _property(self, record: Invoice) -> Section:
        blocks: list[ContentBlock] = [
            HeadingBlock(level=3, text="Property:"),
            ParagraphBlock(text=sanitize_text(record.property_location), font_size=10),
        ]
        if record.property_type and record.property_area:
            blocks.append(ParagraphBlock(
                text=f"Type: {record.property_type.value} • Area: {record.property_area:g} m²",
                font_size=10,
            ))
        return Section(blocks=blocks)

    def _services(self, record: Invoice) -> Section:
        currency = record.effective_config.currency
        width = self.geometry().content_width
        total_weight = sum(_SERVICE_WEIGHTS)

        rows = [
            [
                TableCell(text=sanitize_text(line.description)),
                TableCell(text=f"{line.quantity:g}"),
                TableCell(text=format_currency(line.unit_price, currency)),
                TableCell(text=format_currency(line.total, currency)),
            ]
            for line in record.billable_lines()
        ]
        if not rows:
            rows = [[TableCell(text="No services listed", colspan=4, style=CellStyle(align="center"))]]

        return Section(blocks=[
            SpacerBlock(height=8),
            TableBlock(
                header=[TableCell(text=h) for h in ("Description", "Quantity", "Unit Price", "Total")],
                rows=rows,
                col_widths=[width * w / total_weight for w in _SERVICE_WEIGHTS],
                align=["left", "center", "right", "right"],
                striped=True,
            ),
        ])

    def _totals(self, record: Invoice) -> Section:
        c = self.theme.colors
        currency = record.effective_config.currency
        width = self.geometry().content_width
        label_w, value_w = 110.0, 100.0
        vat = record.effective_config.vat_rate

        def row(label: str, amount: float, *, strong: bool = False) -> list[TableCell]:
            style = CellStyle(bold=True, color=c.primary) if strong else None
            return [
                TableCell(),
                TableCell(text=label, style=style),
                TableCell(text=format_currency(amount, currency), style=style),
            ]

        rows = [
            row("Subtotal:", record.subtotal),
            row(f"VAT ({vat:g}%):", record.tax),
            row("Total:", record.total_amount, strong=True),
        ]
        if record.amount_paid:
            rows.append(row("Amount Paid:", record.amount_paid))
            rows.append(row("Balance Due:", float(record.balance_due), strong=True))

        return Section(blocks=[TableBlock(
            rows=rows,
            col_widths=[width - label_w - value_w, label_w, value_w],
            align=["left", "left", "right"],
            grid=False,
        )])

    def _closing(self, today: date) -> Section:
        muted = self.theme.colors.muted
        return Section(blocks=[
            SpacerBlock(height=12),
            ParagraphBlock(text=T.INVOICE_CLOSING, align="center", color=muted),
            ParagraphBlock(text=f"Generated on {format_date(today)}", align="center", color=muted,
                           font_size=self.theme.fonts.small_size),
        ])
