"""Draw laid-out pages with the low-level ReportLab canvas.

The layout engine hands over absolutely positioned ops measured from the
top-left corner; this module only flips them into PDF space (origin at the
bottom-left) and paints them in order. Any ReportLab failure (an unreadable
image, an unregistered font) propagates to the caller; nothing is written
until the whole document has been drawn into memory.
"""

from __future__ import annotations

import logging
from io import BytesIO

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from ..layout.geometry import PageGeometry
from ..layout.page import DrawOp, ImageOp, LineOp, Page, RectOp, TextOp
from ..layout.styles import to_color

log = logging.getLogger(__name__)


class PdfRenderer:
    """Turns ``Page`` objects into PDF bytes."""

    def __init__(self, title: str = "", author: str = "") -> None:
        self.title = title
        self.author = author

    def render(self, pages: list[Page], geometry: PageGeometry) -> bytes:
        buf = BytesIO()
        c = Canvas(buf, pagesize=(geometry.width, geometry.height))
        if self.title:
            c.setTitle(self.title)
        if self.author:
            c.setAuthor(self.author)

        for page in pages:
            for op in page.ops():
                self._draw(c, op, geometry.height)
            c.showPage()

        c.save()
        data = buf.getvalue()
        log.debug("Rendered %d page(s), %d bytes", len(pages), len(data))
        return data

    # ------------------------------------------------------------------
    # Op painters
    # ------------------------------------------------------------------

    def _draw(self, c: Canvas, op: DrawOp, page_height: float) -> None:
        if isinstance(op, TextOp):
            self._text(c, op, page_height)
        elif isinstance(op, RectOp):
            self._rect(c, op, page_height)
        elif isinstance(op, LineOp):
            c.setStrokeColor(to_color(op.color))
            c.setLineWidth(op.width)
            c.line(op.x1, page_height - op.y1, op.x2, page_height - op.y2)
        elif isinstance(op, ImageOp):
            self._image(c, op, page_height)
        else:
            raise TypeError(f"Unsupported draw op: {type(op).__name__}")

    @staticmethod
    def _text(c: Canvas, op: TextOp, page_height: float) -> None:
        c.setFont(op.font, op.size)
        c.setFillColor(to_color(op.color))
        y = page_height - op.y
        if op.align == "center":
            c.drawCentredString(op.x, y, op.text)
        elif op.align == "right":
            c.drawRightString(op.x, y, op.text)
        else:
            c.drawString(op.x, y, op.text)

    @staticmethod
    def _rect(c: Canvas, op: RectOp, page_height: float) -> None:
        if op.fill is None and op.stroke is None:
            return
        if op.fill is not None:
            c.setFillColor(to_color(op.fill))
        if op.stroke is not None:
            c.setStrokeColor(to_color(op.stroke))
            c.setLineWidth(op.line_width)
        y = page_height - op.y - op.height
        fill = int(op.fill is not None)
        stroke = int(op.stroke is not None)
        if op.radius:
            c.roundRect(op.x, y, op.width, op.height, op.radius, stroke=stroke, fill=fill)
        else:
            c.rect(op.x, y, op.width, op.height, stroke=stroke, fill=fill)

    @staticmethod
    def _image(c: Canvas, op: ImageOp, page_height: float) -> None:
        reader = ImageReader(BytesIO(op.data))
        y = page_height - op.y - op.height
        c.saveState()
        if op.opacity < 1.0:
            c.setFillAlpha(op.opacity)
        c.drawImage(reader, op.x, y, op.width, op.height, preserveAspectRatio=True, anchor="c", mask="auto")
        c.restoreState()
