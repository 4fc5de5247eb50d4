"""Paginated layout of a ``DocumentModel`` into pages of drawing instructions.

Every block is measured once into a ``Flow``: an ordered list of slices,
each carrying its exact height and a ``draw(y)`` closure producing the ops
for the very lines that were measured. Placement then only needs heights:

- a flow whose first slice (plus its lead, e.g. a table header) does not
  fit below the cursor starts on a fresh page;
- ``keep_together`` flows move whole to a fresh page when they fit on one;
- remaining slices continue on following pages, the lead repeated on
  each continuation page;
- headings keep with the following block, reserving its whole height when
  it is kept together; spacers and stacked headings are looked through.

Page numbers ("Page i of N") are stamped by ``finalize_pages`` once the
page count is known.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..core.assets import decode_photo
from ..core.models import (
    BilingualBlock,
    CalloutBlock,
    ContentBlock,
    DocumentModel,
    HeadingBlock,
    ImageBlock,
    KeyValueBlock,
    PageBreakBlock,
    ParagraphBlock,
    PhotoGridBlock,
    SpacerBlock,
    TableBlock,
    TableCell,
)
from .geometry import HeaderFactory, PageContext, PageGeometry
from .page import DrawOp, ImageOp, LineOp, Page, RectOp, TextOp
from .text import line_height, text_width, wrap_text
from .themes import DEFAULT_THEME, Theme

log = logging.getLogger(__name__)

FooterFactory = Callable[[PageGeometry, int, int], list[DrawOp]]

IMAGE_NOT_AVAILABLE = "[Image Not Available]"
IMAGE_ERROR = "[Image Error]"

_BILINGUAL_GAP = 14.0


# ---------------------------------------------------------------------------
# Measured content
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Measured:
    """A slice of content: its height and how to draw it at a given top."""

    height: float
    draw: Callable[[float], list[DrawOp]]
    row_index: Optional[int] = None


@dataclass
class Flow:
    """A block measured into slices that may land on different pages."""

    kind: str
    slices: list[Measured] = field(default_factory=list)
    lead: Optional[Measured] = None
    keep_together: bool = False
    keep_with_next: bool = False
    merge: bool = False

    @property
    def height(self) -> float:
        lead = self.lead.height if self.lead else 0.0
        return lead + sum(s.height for s in self.slices)

    @property
    def first_height(self) -> float:
        """The least that must fit for the flow to start on the current page."""
        lead = self.lead.height if self.lead else 0.0
        return lead + (self.slices[0].height if self.slices else 0.0)

    def required_height(self, content_height: float) -> float:
        """Space needed below the cursor: the whole flow when it is kept together
        and fits on a page, otherwise its first slice."""
        if self.keep_together and self.height <= content_height:
            return self.height
        return self.first_height


# ---------------------------------------------------------------------------
# Default page furniture
# ---------------------------------------------------------------------------

def plain_header(title: str, theme: Theme = DEFAULT_THEME) -> HeaderFactory:
    """Title above a hairline in the top margin."""

    def header(geometry: PageGeometry, page_number: int) -> list[DrawOp]:
        y = geometry.margin_top * 0.6
        return [
            TextOp(geometry.content_left, y, title, theme.fonts.bold, theme.fonts.small_size,
                   theme.colors.muted),
            LineOp(geometry.content_left, y + 4, geometry.content_right, y + 4,
                   theme.colors.table_border),
        ]

    return header


def plain_footer(theme: Theme = DEFAULT_THEME) -> FooterFactory:
    """Centered "Page i of N" in the bottom margin."""

    def footer(geometry: PageGeometry, page_number: int, total: int) -> list[DrawOp]:
        y = geometry.height - geometry.margin_bottom / 2
        return [
            TextOp(geometry.width / 2, y, f"Page {page_number} of {total}", theme.fonts.body,
                   theme.fonts.small_size, theme.colors.muted, align="center"),
        ]

    return footer


def finalize_pages(pages: list[Page], footer: FooterFactory, geometry: PageGeometry) -> list[Page]:
    """Second pass: stamp every page's footer now that the total is known."""
    total = len(pages)
    for page in pages:
        page.footer = list(footer(geometry, page.number, total))
    return pages


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class LayoutEngine:
    """Lays out documents on a fixed page geometry.

    The engine itself holds only configuration; each ``layout`` call works
    on its own ``PageContext``, so one engine can lay out many documents.
    """

    def __init__(
        self,
        geometry: PageGeometry | None = None,
        theme: Theme | None = None,
        *,
        header: HeaderFactory | None = None,
        footer: FooterFactory | None = None,
        block_spacing: float | None = None,
    ) -> None:
        self.theme = theme or DEFAULT_THEME
        lay = self.theme.layout
        self.geometry = geometry or PageGeometry.a4(lay.margin_top, lay.margin_bottom, lay.margin_side)
        self.header = header
        self.footer = footer or plain_footer(self.theme)
        self.block_spacing = lay.block_spacing if block_spacing is None else block_spacing

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def layout(self, document: DocumentModel) -> list[Page]:
        """Place every section's blocks in order and return finished pages."""
        header = self.header or plain_header(document.metadata.title, self.theme)
        ctx = PageContext(self.geometry, header=header)

        flows: list[Flow] = []
        for section in document.sections:
            if section.title:
                flows.append(self._measure_heading(
                    HeadingBlock(level=1, text=section.title, text_ar=section.title_ar)
                ))
            flows.extend(self.measure(block) for block in section.blocks)

        for index, flow in enumerate(flows):
            follow = self._chained_height(flows, index + 1) if flow.keep_with_next else 0.0
            self._place(ctx, flow, follow)

        pages = finalize_pages(ctx.pages, self.footer, self.geometry)
        log.debug("Laid out %d block(s) on %d page(s)", len(flows), len(pages))
        return pages

    def measure(self, block: ContentBlock) -> Flow:  # noqa: C901
        """Measure a block into a ``Flow`` without touching any page state."""
        if isinstance(block, HeadingBlock):
            return self._measure_heading(block)
        if isinstance(block, ParagraphBlock):
            return self._measure_paragraph(block)
        if isinstance(block, KeyValueBlock):
            return self._measure_key_value(block)
        if isinstance(block, TableBlock):
            return self._measure_table(block)
        if isinstance(block, SpacerBlock):
            return Flow(kind="spacer", slices=[Measured(block.height, lambda y: [])])
        if isinstance(block, BilingualBlock):
            return self._measure_bilingual(block)
        if isinstance(block, CalloutBlock):
            return self._measure_callout(block)
        if isinstance(block, PhotoGridBlock):
            return self._measure_photo_grid(block)
        if isinstance(block, ImageBlock):
            return self._measure_image(block)
        if isinstance(block, PageBreakBlock):
            return Flow(kind="page_break")
        raise TypeError(f"Unsupported block type: {type(block).__name__}")

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def _chained_height(self, flows: list[Flow], start: int) -> float:
        """Height a keep-with-next flow must reserve for what follows it.

        Spacers are crossed and consecutive keep-with-next flows are chained
        until the first ordinary block, whose required height ends the chain.
        """
        content_height = self.geometry.content_height
        total = self.block_spacing
        for flow in flows[start:]:
            if flow.kind == "page_break":
                return 0.0
            if flow.kind == "spacer":
                total += flow.height
                continue
            total += flow.required_height(content_height)
            if not flow.keep_with_next:
                return total
            total += self.block_spacing
        return 0.0

    def _place(self, ctx: PageContext, flow: Flow, follow: float = 0.0) -> None:
        if flow.kind == "page_break":
            if not ctx.page_is_empty:
                ctx.new_page()
            return
        if flow.kind == "spacer":
            ctx.advance(flow.height)
            return

        need = flow.required_height(self.geometry.content_height) + follow

        if not ctx.page_is_empty:
            ctx.check_page_break(need)

        if flow.lead:
            self._put(ctx, flow.kind + "_header", flow.lead)

        pending: list[DrawOp] = []
        pending_height = 0.0
        on_page = 0
        for piece in flow.slices:
            if on_page and not ctx.fits(pending_height + piece.height):
                if pending:
                    ctx.place(flow.kind, pending_height, pending)
                    pending, pending_height = [], 0.0
                ctx.new_page()
                if flow.lead:
                    self._put(ctx, flow.kind + "_header", flow.lead)
                on_page = 0
            if flow.merge:
                pending.extend(piece.draw(ctx.cursor + pending_height))
                pending_height += piece.height
            else:
                self._put(ctx, _slice_kind(flow.kind), piece)
            on_page += 1
        if flow.merge and on_page:
            ctx.place(flow.kind, pending_height, pending)

        ctx.advance(self.block_spacing)

    @staticmethod
    def _put(ctx: PageContext, kind: str, piece: Measured) -> None:
        ctx.place(kind, piece.height, piece.draw(ctx.cursor), piece.row_index)

    # ------------------------------------------------------------------
    # Text helpers
    # ------------------------------------------------------------------

    def _lines(self, text: str, width: float, font: str, size: float) -> list[str]:
        return list(wrap_text(text, max(width, 1.0), font, size))

    @staticmethod
    def _text_ops(
        lines: list[str],
        x: float,
        top: float,
        width: float,
        font: str,
        size: float,
        color: tuple,
        align: str = "left",
    ) -> list[DrawOp]:
        lh = line_height(size)
        anchor = {"left": x, "center": x + width / 2, "right": x + width}[align]
        return [
            TextOp(anchor, top + i * lh + size, line, font, size, color, align)
            for i, line in enumerate(lines)
            if line
        ]

    # ------------------------------------------------------------------
    # Headings
    # ------------------------------------------------------------------

    def _measure_heading(self, block: HeadingBlock) -> Flow:
        g, f, c, lay = self.geometry, self.theme.fonts, self.theme.colors, self.theme.layout
        x, w = g.content_left, g.content_width

        if block.level == 0:
            en = self._lines(block.text, w, f.bold, f.title_size)
            ar = self._lines(block.text_ar, w, f.bold, f.subtitle_size) if block.text_ar else []
            en_h = len(en) * line_height(f.title_size)
            height = en_h + len(ar) * line_height(f.subtitle_size)

            def draw_title(y: float) -> list[DrawOp]:
                ops = self._text_ops(en, x, y, w, f.bold, f.title_size, c.heading, "center")
                ops += self._text_ops(ar, x, y + en_h, w, f.bold, f.subtitle_size, c.heading, "center")
                return ops

            return Flow(kind="title", slices=[Measured(height, draw_title)], keep_with_next=True)

        if block.level == 1:
            size, fill, color = f.section_size, c.section_band, c.on_primary
        elif block.level == 2:
            size, fill, color = f.area_size, c.area_band, c.heading
        else:
            size, fill, color = f.subheading_size, None, c.heading

        pad = lay.band_padding if fill else 0.0
        inner = w - 2 * pad
        ar_width = min(text_width(block.text_ar, f.bold, size), inner * 0.45) if block.text_ar else 0.0
        en = self._lines(block.text, inner - ar_width - (8 if ar_width else 0), f.bold, size)
        ar = self._lines(block.text_ar, ar_width, f.bold, size) if block.text_ar else []
        height = max(len(en), len(ar), 1) * line_height(size) + 2 * pad

        def draw_band(y: float) -> list[DrawOp]:
            ops: list[DrawOp] = []
            if fill:
                ops.append(RectOp(x, y, w, height, fill=fill))
            ops += self._text_ops(en, x + pad, y + pad, inner, f.bold, size, color)
            ops += self._text_ops(ar, x + pad, y + pad, inner, f.bold, size, color, "right")
            return ops

        return Flow(kind="heading", slices=[Measured(height, draw_band)], keep_with_next=True)

    # ------------------------------------------------------------------
    # Running text
    # ------------------------------------------------------------------

    def _measure_paragraph(self, block: ParagraphBlock) -> Flow:
        g, f, c = self.geometry, self.theme.fonts, self.theme.colors
        font = f.bold if block.bold else (f.italic if block.italic else f.body)
        size = block.font_size or f.body_size
        color = block.color or c.text
        x, w = g.content_left, g.content_width
        lh = line_height(size)

        def line_slice(line: str) -> Measured:
            return Measured(lh, lambda y: self._text_ops([line], x, y, w, font, size, color, block.align))

        lines = self._lines(block.text, w, font, size)
        return Flow(kind="paragraph", slices=[line_slice(ln) for ln in lines], keep_together=True, merge=True)

    def _measure_bilingual(self, block: BilingualBlock) -> Flow:
        g, f, c = self.geometry, self.theme.fonts, self.theme.colors
        font = f.bold if block.bold else f.body
        size = block.font_size or f.body_size
        x, w = g.content_left, g.content_width
        lh = line_height(size)

        if block.arabic:
            col = (w - _BILINGUAL_GAP) / 2
            en = self._lines(block.english, col, font, size)
            ar = self._lines(block.arabic, col, font, size)
        else:
            col = w
            en, ar = self._lines(block.english, col, font, size), []

        def pair_slice(i: int) -> Measured:
            en_line = en[i] if i < len(en) else ""
            ar_line = ar[i] if i < len(ar) else ""

            def draw(y: float) -> list[DrawOp]:
                ops = self._text_ops([en_line], x, y, col, font, size, c.text)
                ops += self._text_ops([ar_line], x + w - col, y, col, font, size, c.text, "right")
                return ops

            return Measured(lh, draw)

        count = max(len(en), len(ar))
        return Flow(kind="bilingual", slices=[pair_slice(i) for i in range(count)], keep_together=True, merge=True)

    def _measure_key_value(self, block: KeyValueBlock) -> Flow:
        g, f, c = self.geometry, self.theme.fonts, self.theme.colors
        size = f.body_size
        x, w = g.content_left, g.content_width
        label_w = min(block.label_width or self.theme.layout.key_width, w / 2)
        value_font = f.bold if block.value_bold else f.body
        labels = self._lines(f"{block.label}:", label_w - 6, f.bold, size)
        values = self._lines(block.value, w - label_w, value_font, size)
        height = max(len(labels), len(values)) * line_height(size)
        value_color = block.value_color or c.text

        def draw(y: float) -> list[DrawOp]:
            ops = self._text_ops(labels, x, y, label_w, f.bold, size, c.heading)
            ops += self._text_ops(values, x + label_w, y, w - label_w, value_font, size, value_color)
            return ops

        return Flow(kind="key_value", slices=[Measured(height, draw)], keep_together=True)

    def _measure_callout(self, block: CalloutBlock) -> Flow:
        g, f, c, lay = self.geometry, self.theme.fonts, self.theme.colors, self.theme.layout
        x, w = g.content_left, g.content_width
        pad = lay.callout_padding
        inner = w - 2 * pad
        title = self._lines(block.title, inner, f.bold, f.subheading_size) if block.title else []
        body = self._lines(block.body, inner, f.body, f.small_size) if block.body else []
        title_h = len(title) * line_height(f.subheading_size)
        gap = 3.0 if title and body else 0.0
        height = 2 * pad + title_h + gap + len(body) * line_height(f.small_size)
        fill = block.fill or c.callout_bg
        border = block.border or c.callout_border

        def draw(y: float) -> list[DrawOp]:
            ops: list[DrawOp] = [RectOp(x, y, w, height, fill=fill, stroke=border, radius=3)]
            ops += self._text_ops(title, x + pad, y + pad, inner, f.bold, f.subheading_size, c.heading)
            ops += self._text_ops(body, x + pad, y + pad + title_h + gap, inner, f.body, f.small_size, c.text)
            return ops

        return Flow(kind="callout", slices=[Measured(height, draw)], keep_together=True)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def column_widths(self, block: TableBlock) -> list[float]:
        """Width hints as given, or the content width split evenly."""
        if block.col_widths:
            return list(block.col_widths)
        n = block.column_count or 1
        return [self.geometry.content_width / n] * n

    def _measure_row(
        self,
        block: TableBlock,
        cells: list[TableCell],
        widths: list[float],
        *,
        header: bool,
        row_index: int | None = None,
    ) -> Measured:
        f, c, lay = self.theme.fonts, self.theme.colors, self.theme.layout
        pad = lay.cell_padding
        x0 = self.geometry.content_left

        laid: list[tuple[float, float, TableCell, list[str], str, float, str]] = []
        col = 0
        x = x0
        for cell in cells:
            span = widths[col:col + cell.colspan]
            cell_w = sum(span)
            style = cell.style
            bold = style.bold if style and style.bold is not None else header
            font = f.bold if bold else f.body
            size = (style.font_size if style and style.font_size else None) or (
                f.table_header_size if header else f.table_size
            )
            align = (style.align if style and style.align else None) or (
                block.align[col] if block.align and col < len(block.align) else "left"
            )
            lines = self._lines(cell.text, cell_w - 2 * pad, font, size)
            laid.append((x, cell_w, cell, lines, font, size, align))
            x += cell_w
            col += cell.colspan

        content_h = max((len(lines) * line_height(size) for _, _, _, lines, _, size, _ in laid), default=0.0)
        height = max(lay.min_row_height, content_h + 2 * pad)
        zebra = block.striped and not header and row_index is not None and row_index % 2 == 1

        def draw(y: float) -> list[DrawOp]:
            ops: list[DrawOp] = []
            for cx, cw, cell, lines, font, size, align in laid:
                style = cell.style
                fill = (style.fill if style else None) or (
                    c.table_header_bg if header else (c.table_alt_row if zebra else None)
                )
                stroke = c.table_border if block.grid else None
                if fill or stroke:
                    ops.append(RectOp(cx, y, cw, height, fill=fill, stroke=stroke))
                color = (style.color if style else None) or (c.table_header_text if header else c.text)
                top = y + (height - len(lines) * line_height(size)) / 2
                ops += self._text_ops(lines, cx + pad, top, cw - 2 * pad, font, size, color, align)
            return ops

        return Measured(height, draw, row_index)

    def _measure_table(self, block: TableBlock) -> Flow:
        widths = self.column_widths(block)
        if sum(widths) > self.geometry.content_width + 0.5:
            log.warning("Table width hints (%.1f) exceed the content width (%.1f)",
                        sum(widths), self.geometry.content_width)
        lead = self._measure_row(block, block.header, widths, header=True) if block.header else None
        rows = [
            self._measure_row(block, row, widths, header=False, row_index=i)
            for i, row in enumerate(block.rows)
        ]
        return Flow(kind="table", slices=rows, lead=lead)

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def _measure_photo_grid(self, block: PhotoGridBlock) -> Flow:
        g, f, c, lay = self.geometry, self.theme.fonts, self.theme.colors, self.theme.layout
        x0, w = g.content_left, g.content_width
        n = block.per_row
        gap = lay.photo_gap
        pw = (w - gap * (n - 1)) / n
        ph = pw * lay.photo_aspect
        cap_h = line_height(f.small_size)

        def row_slice(index: int, photos: list) -> Measured:
            decoded = [(photo, decode_photo(photo.data)) for photo in photos]
            captions = [self._lines(p.caption, pw, f.body, f.small_size)[:1] for p in photos]
            has_caption = any(cap and cap[0] for cap in captions)
            height = ph + (cap_h + 2 if has_caption else 0.0) + gap / 2

            def draw(y: float) -> list[DrawOp]:
                ops: list[DrawOp] = []
                for j, (photo, data) in enumerate(decoded):
                    x = x0 + j * (pw + gap)
                    if data is not None:
                        ops.append(ImageOp(x, y, pw, ph, data))
                        ops.append(RectOp(x, y, pw, ph, stroke=c.table_border))
                    else:
                        label = IMAGE_ERROR if photo.data else IMAGE_NOT_AVAILABLE
                        ops.append(RectOp(x, y, pw, ph, fill=c.placeholder_bg, stroke=c.table_border))
                        ops.append(TextOp(x + pw / 2, y + ph / 2, label, f.body, f.small_size,
                                          c.placeholder_text, "center"))
                    ops += self._text_ops(captions[j], x, y + ph + 2, pw, f.body, f.small_size, c.muted)
                return ops

            return Measured(height, draw, index)

        rows = [block.photos[i:i + n] for i in range(0, len(block.photos), n)]
        return Flow(kind="photo_row", slices=[row_slice(i, r) for i, r in enumerate(rows)])

    def _measure_image(self, block: ImageBlock) -> Flow:
        g = self.geometry
        anchor = {
            "left": g.content_left,
            "center": g.content_left + (g.content_width - block.width) / 2,
            "right": g.content_right - block.width,
        }[block.align]

        def draw(y: float) -> list[DrawOp]:
            return [ImageOp(anchor, y, block.width, block.height, block.data)]

        return Flow(kind="image", slices=[Measured(block.height, draw)], keep_together=True)


def _slice_kind(kind: str) -> str:
    return "table_row" if kind == "table" else kind
