"""Paginated layout of document models.

Modules
-------
geometry: page size, margins and the per-run page context
page: drawing instructions and laid-out pages
text: font-metric line wrapping and measurement
engine: measure-then-place flow of blocks across pages
themes: color, font and spacing themes
styles: ReportLab color and font adapters
"""

from .engine import Flow, LayoutEngine, Measured, finalize_pages, plain_footer, plain_header
from .geometry import PageContext, PageGeometry
from .page import ImageOp, LineOp, Page, PlacedBlock, RectOp, TextOp
from .themes import DEFAULT_THEME, Theme, get_theme, list_themes, register_theme

__all__ = [
    "Flow",
    "LayoutEngine",
    "Measured",
    "finalize_pages",
    "plain_footer",
    "plain_header",
    "PageContext",
    "PageGeometry",
    "ImageOp",
    "LineOp",
    "Page",
    "PlacedBlock",
    "RectOp",
    "TextOp",
    "DEFAULT_THEME",
    "Theme",
    "get_theme",
    "list_themes",
    "register_theme",
]
