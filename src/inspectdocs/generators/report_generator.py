"""Bilingual property inspection report."""

from __future__ import annotations

import logging
from datetime import date

from ..core.formatting import format_date, format_short_date, or_fallback, sanitize_text
from ..core.models import (
    BilingualBlock,
    CalloutBlock,
    CellStyle,
    ContentBlock,
    DocumentKind,
    DocumentMetadata,
    DocumentModel,
    HeadingBlock,
    KeyValueBlock,
    PageBreakBlock,
    ParagraphBlock,
    Photo,
    PhotoGridBlock,
    Section,
    TableBlock,
    TableCell,
)
from ..core.records import InspectionData, ItemStatus
from . import text as T
from .base import BaseGenerator

log = logging.getLogger(__name__)

# Relative findings column widths (category, point, status, notes, photo)
_FINDINGS_WEIGHTS = (35, 60, 20, 55, 10)
_BLANK_LINE = "_______________________"


class InspectionReportGenerator(BaseGenerator):
    """Builds the multi-page inspection report from an ``InspectionData`` record.

    Page order follows the printed report: property facts and the client
    letter, the standing notices, scope and confidentiality, an optional
    executive summary, then findings, photos, the summary and signatures.
    """

    kind = DocumentKind.INSPECTION_REPORT

    def __init__(self, *args, today: date | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.today = today

    def client_name(self, record: InspectionData) -> str:
        return record.client_name

    def header_subtitle(self, doc: DocumentModel) -> str:
        return T.HEADER_SUBTITLE

    def build_document(self, record: InspectionData) -> DocumentModel:
        today = self.today or date.today()
        log.debug("Building inspection report %s (%d area(s))", record.id or "-", len(record.areas))

        sections = [
            self._cover(record),
            self._property_info(record),
            self._overview(record),
            _page_break(),
            self._notices(),
            _page_break(),
            self._scope(),
            self._confidentiality(),
        ]
        if sanitize_text(record.ai_summary):
            sections.append(self._ai_summary(record))
        sections.append(_page_break())
        sections.append(self._findings(record))
        photos = self._photos(record)
        if photos is not None:
            sections.append(photos)
        sections.append(self._summary(record))
        sections.append(self._signatures(record, today))

        metadata = DocumentMetadata(
            kind=self.kind,
            title="Property Inspection Report",
            subtitle=T.HEADER_SUBTITLE,
            client_name=sanitize_text(record.client_name),
            property_location=sanitize_text(record.property_location),
            reference=record.resolved_report_id(),
            generated_at=today.isoformat(),
        )
        return DocumentModel(metadata=metadata, sections=sections)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _cover(self, record: InspectionData) -> Section:
        en, ar = T.REPORT_TITLE
        return Section(blocks=[HeadingBlock(level=0, text=en, text_ar=ar)])

    def _property_info(self, record: InspectionData) -> Section:
        L = T.LABELS
        facts = [
            (L["client"], or_fallback(record.client_name)),
            (L["location"], or_fallback(record.property_location)),
            (L["property_type"], or_fallback(record.property_type)),
            (L["inspector"], or_fallback(record.inspector_name, self.config.default_inspector)),
            (L["date"], format_date(record.inspection_date)),
            (L["report_id"], record.resolved_report_id()),
        ]
        return Section(
            title=T.SECTION_PROPERTY[0],
            title_ar=T.SECTION_PROPERTY[1],
            blocks=[KeyValueBlock(label=T.pair(label), value=value) for label, value in facts],
        )

    def _overview(self, record: InspectionData) -> Section:
        client = sanitize_text(record.client_name)
        greet_en, greet_ar = T.GREETING
        blocks: list[ContentBlock] = [
            BilingualBlock(
                english=greet_en.format(client=client or "Valued Client"),
                arabic=greet_ar.format(client=client or "العميل"),
                bold=True,
            ),
        ]
        blocks += [BilingualBlock(english=en, arabic=ar) for en, ar in T.OVERVIEW]
        blocks.append(ParagraphBlock(
            text="\n".join([
                f"{T.pair(T.CONTACT)}:",
                f"{T.pair(T.CONTACT_EMAIL)}: {self.config.contact_email}",
                f"{T.pair(T.CONTACT_PHONE)}: {self.config.contact_phone}",
            ]),
        ))
        return Section(title=T.SECTION_OVERVIEW[0], title_ar=T.SECTION_OVERVIEW[1], blocks=blocks)

    def _notices(self) -> Section:
        blocks: list[ContentBlock] = [CalloutBlock(title=title, body=body) for title, body in T.NOTICES]
        return Section(title=T.SECTION_NOTICES[0], title_ar=T.SECTION_NOTICES[1], blocks=blocks)

    def _scope(self) -> Section:
        blocks: list[ContentBlock] = [BilingualBlock(english=en, arabic=ar) for en, ar in T.SCOPE]
        return Section(title=T.SECTION_SCOPE[0], title_ar=T.SECTION_SCOPE[1], blocks=blocks)

    def _confidentiality(self) -> Section:
        return Section(
            title=T.SECTION_CONFIDENTIALITY[0],
            title_ar=T.SECTION_CONFIDENTIALITY[1],
            blocks=[CalloutBlock(body=T.CONFIDENTIALITY, fill=(255, 243, 224), border=(251, 146, 60))],
        )

    def _ai_summary(self, record: InspectionData) -> Section:
        return Section(
            title=T.SECTION_AI_SUMMARY[0],
            title_ar=T.SECTION_AI_SUMMARY[1],
            blocks=[ParagraphBlock(text=sanitize_text(record.ai_summary))],
        )

    def _findings(self, record: InspectionData) -> Section:
        c = self.theme.colors
        width = self.geometry().content_width
        total_weight = sum(_FINDINGS_WEIGHTS)
        status_colors = {
            ItemStatus.PASS: c.success,
            ItemStatus.FAIL: c.danger,
            ItemStatus.NOT_APPLICABLE: c.neutral,
        }

        rows: list[list[TableCell]] = []
        for area in record.areas:
            rows.append([TableCell(
                text=or_fallback(area.name).upper(),
                colspan=len(_FINDINGS_WEIGHTS),
                style=CellStyle(fill=c.info_bg, bold=True, font_size=10, color=c.heading),
            )])
            for item in area.items:
                rows.append([
                    TableCell(text=sanitize_text(item.category)),
                    TableCell(text=sanitize_text(item.point)),
                    TableCell(text=item.status.value, style=CellStyle(color=status_colors[item.status], bold=True)),
                    TableCell(text=item.notes()),
                    TableCell(text="Yes" if item.photos else ""),
                ])

        blocks: list[ContentBlock] = []
        if rows:
            blocks.append(TableBlock(
                header=[TableCell(text=h) for h in T.FINDINGS_HEADER],
                rows=rows,
                col_widths=[width * w / total_weight for w in _FINDINGS_WEIGHTS],
                align=["left", "left", "center", "left", "center"],
            ))
        else:
            blocks.append(ParagraphBlock(text="No inspection items were recorded.", italic=True))
        return Section(title=T.SECTION_FINDINGS[0], title_ar=T.SECTION_FINDINGS[1], blocks=blocks)

    def _photos(self, record: InspectionData) -> Section | None:
        photos = [
            Photo(
                data=photo.base64,
                caption=sanitize_text(photo.caption) or f"{sanitize_text(area.name)} - {sanitize_text(item.point) or 'Item'}",
            )
            for area, item in record.items()
            for photo in item.photos
        ]
        if not photos:
            return None

        limit = self.config.photo_limit
        shown = photos if limit is None else photos[:limit]
        blocks: list[ContentBlock] = [PhotoGridBlock(photos=shown, per_row=2)]
        if len(photos) > len(shown):
            blocks.append(ParagraphBlock(
                text=f"+ {len(photos) - len(shown)} more photos available in full report",
                italic=True,
            ))
        return Section(title=T.SECTION_PHOTOS[0], title_ar=T.SECTION_PHOTOS[1], blocks=blocks)

    def _summary(self, record: InspectionData) -> Section:
        c, L = self.theme.colors, T.LABELS
        s = record.summary()
        return Section(
            title=T.SECTION_SUMMARY[0],
            title_ar=T.SECTION_SUMMARY[1],
            blocks=[
                KeyValueBlock(label=T.pair(L["total"]), value=str(s.total)),
                KeyValueBlock(label=T.pair(L["pass"]), value=str(s.passed), value_color=c.success, value_bold=True),
                KeyValueBlock(label=T.pair(L["fail"]), value=str(s.failed), value_color=c.danger, value_bold=True),
                KeyValueBlock(label=T.pair(L["na"]), value=str(s.not_applicable), value_color=c.neutral),
                KeyValueBlock(label=T.pair(L["pass_rate"]), value=f"{s.pass_rate}%", value_color=c.heading,
                              value_bold=True),
            ],
        )

    def _signatures(self, record: InspectionData, today: date) -> Section:
        L = T.LABELS
        cfg = self.config
        return Section(
            title=T.SECTION_SIGNATURES[0],
            title_ar=T.SECTION_SIGNATURES[1],
            blocks=[
                KeyValueBlock(label=T.pair(L["client"]), value=or_fallback(record.client_name, _BLANK_LINE)),
                KeyValueBlock(label=T.pair(L["signature"]), value=_BLANK_LINE),
                KeyValueBlock(label=T.pair(L["prepared_by"]),
                              value=or_fallback(record.inspector_name, cfg.default_inspector)),
                KeyValueBlock(label=T.pair(L["stamp"]), value=""),
                KeyValueBlock(label=T.pair(L["signed_on"]), value=format_short_date(today)),
                CalloutBlock(
                    body=f"{T.ANNEX_NOTE}\n{cfg.company_name} {cfg.registration} / {cfg.company_name_ar}",
                ),
            ],
        )


def _page_break() -> Section:
    return Section(blocks=[PageBreakBlock()])
