"""Abstract base class for document generators."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Any

from ..config import RenderConfig
from ..core.assets import load_asset
from ..core.formatting import document_filename
from ..core.models import DocumentKind, DocumentModel, GenerationResult
from ..layout.engine import FooterFactory, LayoutEngine
from ..layout.geometry import HeaderFactory, PageGeometry
from ..layout.page import DrawOp, ImageOp, Page, RectOp, TextOp
from ..layout.styles import themed_fonts
from ..layout.themes import MM, Theme, get_theme
from .pdf_renderer import PdfRenderer

log = logging.getLogger(__name__)


class BaseGenerator(ABC):
    """Every generator inherits from this class.

    A generator turns one record into a ``DocumentModel`` and hands it to
    the layout engine and the PDF renderer. Generators accept an optional
    ``Theme`` (defaulting to the one named in the config) and a
    ``RenderConfig`` carrying the letterhead, logo and font settings.
    """

    kind: DocumentKind  # set by subclasses

    def __init__(self, theme: Theme | None = None, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()
        self.theme = theme or get_theme(self._theme_name())
        self._logo: bytes | None = None

    def _theme_name(self) -> str:
        return self.config.theme

    @abstractmethod
    def build_document(self, record: Any) -> DocumentModel:
        """Build the intermediate document model for ``record``."""
        ...

    @abstractmethod
    def client_name(self, record: Any) -> str:
        ...

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def layout(self, record: Any) -> list[Page]:
        """Lay out ``record`` into finished pages (footers stamped)."""
        doc, engine = self._prepare(record)
        return engine.layout(doc)

    def render(self, record: Any) -> bytes:
        """Render ``record`` to PDF bytes. Asset, font and image failures propagate."""
        data, _ = self._render(record)
        return data

    def generate(self, record: Any, output_dir: Path, on: date | None = None) -> GenerationResult:
        """Render ``record`` and write it under ``output_dir``."""
        output_dir = self._ensure_dir(Path(output_dir))
        output_path = output_dir / self.filename(record, on)
        try:
            data, page_count = self._render(record)
        except Exception as exc:
            log.error("Failed to render %s: %s", self.kind.value, exc)
            return GenerationResult(kind=self.kind, output_path=output_path, success=False, error=str(exc))
        output_path.write_bytes(data)
        return GenerationResult(kind=self.kind, output_path=output_path, page_count=page_count)

    def filename(self, record: Any, on: date | None = None) -> str:
        return document_filename(self.kind.value, self.client_name(record), on)

    def geometry(self, theme: Theme | None = None) -> PageGeometry:
        """A4 with the theme's margins."""
        lay = (theme or self.theme).layout
        return PageGeometry.a4(lay.margin_top, lay.margin_bottom, lay.margin_side)

    def engine(self, doc: DocumentModel, theme: Theme | None = None) -> LayoutEngine:
        theme = theme or self.theme
        return LayoutEngine(
            self.geometry(theme),
            theme,
            header=self.header_factory(doc, theme),
            footer=self.footer_factory(doc, theme),
        )

    # ------------------------------------------------------------------
    # Page furniture
    # ------------------------------------------------------------------

    def header_subtitle(self, doc: DocumentModel) -> str:
        return doc.metadata.subtitle

    def header_factory(self, doc: DocumentModel, theme: Theme) -> HeaderFactory:
        """Full-width brand band at the top; the logo watermark sits under the content."""
        c, f, lay = theme.colors, theme.fonts, theme.layout
        title = self.config.company_name.upper()
        subtitle = self.header_subtitle(doc)
        watermark = self.logo if self.config.watermark else None

        def header(geometry: PageGeometry, page_number: int) -> list[DrawOp]:
            ops: list[DrawOp] = []
            if watermark:
                size = lay.watermark_size
                ops.append(ImageOp(
                    (geometry.width - size) / 2, (geometry.height - size) / 2, size, size,
                    watermark, opacity=lay.watermark_opacity,
                ))
            ops.append(RectOp(0, 0, geometry.width, lay.header_height, fill=c.primary))
            ops.append(TextOp(geometry.width / 2, 12 * MM, title, f.bold, f.header_title_size,
                              c.on_primary, "center"))
            if subtitle:
                ops.append(TextOp(geometry.width / 2, 19 * MM, subtitle, f.body, f.header_subtitle_size,
                                  c.on_primary, "center"))
            return ops

        return header

    def footer_factory(self, doc: DocumentModel, theme: Theme) -> FooterFactory:
        """Brand band with the registration line and "Page i of N"."""
        c, f, lay = theme.colors, theme.fonts, theme.layout
        registration = f"{self.config.company_name} {self.config.registration}"

        def footer(geometry: PageGeometry, page_number: int, total: int) -> list[DrawOp]:
            top = geometry.height - lay.footer_height
            return [
                RectOp(0, top, geometry.width, lay.footer_height, fill=c.primary),
                TextOp(geometry.width / 2, geometry.height - 9 * MM, registration, f.body,
                       f.small_size, c.on_primary, "center"),
                TextOp(geometry.width / 2, geometry.height - 4 * MM, f"Page {page_number} of {total}",
                       f.body, f.small_size, c.on_primary, "center"),
            ]

        return footer

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _prepare(self, record: Any) -> tuple[DocumentModel, LayoutEngine]:
        theme = themed_fonts(self.theme, self.config.font_path, self.config.bold_font_path)
        doc = self.build_document(record)
        return doc, self.engine(doc, theme)

    def _render(self, record: Any) -> tuple[bytes, int]:
        doc, engine = self._prepare(record)
        pages = engine.layout(doc)
        renderer = PdfRenderer(title=doc.metadata.title, author=self.config.company_name)
        data = renderer.render(pages, engine.geometry)
        log.info("Rendered %s for %s: %d page(s)", self.kind.value, doc.metadata.client_name or "-", len(pages))
        return data, len(pages)

    @property
    def logo(self) -> bytes | None:
        """Logo bytes, loaded once from ``config.logo`` (path or URL)."""
        if self._logo is None and self.config.logo:
            self._logo = load_asset(self.config.logo, timeout=self.config.asset_timeout)
        return self._logo

    @staticmethod
    def _ensure_dir(path: Path) -> Path:
        path.mkdir(parents=True, exist_ok=True)
        return path
