"""ReportLab adapters for theme values: colors and embedded fonts."""

from __future__ import annotations

import logging
from pathlib import Path

from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from .themes import Theme

log = logging.getLogger(__name__)

BODY_FONT_NAME = "ReportSans"
BOLD_FONT_NAME = "ReportSans-Bold"


def to_color(t: tuple) -> colors.Color:
    return colors.Color(t[0] / 255, t[1] / 255, t[2] / 255)


def register_ttf_font(name: str, path: str | Path) -> str:
    """Register a TrueType font under ``name``; returns the name.

    Raises ``FileNotFoundError`` when the file is missing. A corrupt font
    file surfaces as ReportLab's own error. Re-registering is a no-op.
    """
    if name in pdfmetrics.getRegisteredFontNames():
        return name
    font_path = Path(path).expanduser().resolve()
    if not font_path.exists():
        raise FileNotFoundError(f"Font file not found: {font_path}")
    pdfmetrics.registerFont(TTFont(name, str(font_path)))
    log.info("Registered font %s from %s", name, font_path)
    return name


def themed_fonts(theme: Theme, font_path: str | None, bold_font_path: str | None = None) -> Theme:
    """Return ``theme`` switched to an embedded font family when paths are given.

    Embedding a font with Arabic glyphs is what makes the bilingual text
    legible; the standard Helvetica family only covers Latin-1.
    """
    if not font_path:
        return theme
    body = register_ttf_font(BODY_FONT_NAME, font_path)
    bold = register_ttf_font(BOLD_FONT_NAME, bold_font_path) if bold_font_path else body
    return theme.with_fonts(body, bold)
