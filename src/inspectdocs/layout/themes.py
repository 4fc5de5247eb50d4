"""Color, font and spacing palettes for reports and invoices.

The inspection report draws with ``wasla`` (navy and gold) and invoices
with ``slate``; ``mono`` prints cleanly on office printers. A theme is
handed to ``LayoutEngine`` and the page furniture explicitly, so two
documents rendered in one process never share styling state::

    engine = LayoutEngine(theme=get_theme("mono"))
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

RGB = tuple[int, int, int]


# ---------------------------------------------------------------------------
# Theme dataclass
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ThemeColors:
    """All color slots used by the engine and the renderer. Values are RGB tuples."""

    # Brand
    primary: RGB = (0, 31, 63)
    accent: RGB = (218, 165, 32)

    # Text
    text: RGB = (0, 0, 0)
    heading: RGB = (0, 31, 63)
    muted: RGB = (100, 100, 100)
    on_primary: RGB = (255, 255, 255)

    # Bands and boxes
    section_band: RGB = (0, 31, 63)
    area_band: RGB = (235, 235, 235)
    callout_bg: RGB = (255, 251, 235)
    callout_border: RGB = (218, 165, 32)
    info_bg: RGB = (240, 245, 250)

    # Tables
    table_header_bg: RGB = (0, 31, 63)
    table_header_text: RGB = (255, 255, 255)
    table_alt_row: RGB = (248, 250, 252)
    table_border: RGB = (200, 200, 200)

    # Status
    success: RGB = (34, 197, 94)
    danger: RGB = (239, 68, 68)
    warning: RGB = (245, 158, 11)
    neutral: RGB = (156, 163, 175)

    # Photos
    placeholder_bg: RGB = (245, 245, 245)
    placeholder_text: RGB = (150, 150, 150)


@dataclass(frozen=True)
class ThemeFonts:
    """Font names (ReportLab standard fonts by default) and sizes in points."""

    body: str = "Helvetica"
    bold: str = "Helvetica-Bold"
    italic: str = "Helvetica-Oblique"

    title_size: float = 20
    subtitle_size: float = 13
    section_size: float = 11
    area_size: float = 12
    subheading_size: float = 10
    body_size: float = 9
    small_size: float = 8
    table_size: float = 8
    table_header_size: float = 9
    header_title_size: float = 15
    header_subtitle_size: float = 9


MM = 72.0 / 25.4


@dataclass(frozen=True)
class ThemeLayout:
    """Page furniture and spacing, in points."""

    margin_top: float = 32 * MM
    margin_bottom: float = 22 * MM
    margin_side: float = 15 * MM
    header_height: float = 24 * MM
    footer_height: float = 15 * MM

    block_spacing: float = 4
    band_padding: float = 4
    cell_padding: float = 3
    min_row_height: float = 14
    callout_padding: float = 7
    key_width: float = 150
    photo_gap: float = 10
    photo_aspect: float = 0.75
    watermark_size: float = 90 * MM
    watermark_opacity: float = 0.08


@dataclass(frozen=True)
class Theme:
    """Complete theme definition."""

    name: str = "wasla"
    display_name: str = "Wasla Navy"
    description: str = "Navy and gold, the inspection report house style."
    colors: ThemeColors = field(default_factory=ThemeColors)
    fonts: ThemeFonts = field(default_factory=ThemeFonts)
    layout: ThemeLayout = field(default_factory=ThemeLayout)

    def with_fonts(self, body: str, bold: str | None = None) -> Theme:
        """Copy of this theme drawing with a registered TTF family."""
        return replace(self, fonts=replace(self.fonts, body=body, bold=bold or body, italic=body))


# ---------------------------------------------------------------------------
# Built-in themes
# ---------------------------------------------------------------------------

WASLA_THEME = Theme()

SLATE_THEME = Theme(
    name="slate",
    display_name="Slate Blue",
    description="Blue and indigo on slate text, the invoice house style.",
    colors=ThemeColors(
        primary=(59, 130, 246),
        accent=(99, 102, 241),
        text=(51, 65, 85),
        heading=(51, 65, 85),
        section_band=(59, 130, 246),
        area_band=(241, 245, 249),
        callout_bg=(248, 250, 252),
        callout_border=(99, 102, 241),
        info_bg=(248, 250, 252),
        table_header_bg=(59, 130, 246),
        table_alt_row=(248, 250, 252),
        table_border=(203, 213, 225),
    ),
)

MONO_THEME = Theme(
    name="mono",
    display_name="Monochrome",
    description="Black, white and grays for print-friendly output.",
    colors=ThemeColors(
        primary=(33, 33, 33),
        accent=(120, 120, 120),
        heading=(33, 33, 33),
        section_band=(60, 60, 60),
        area_band=(230, 230, 230),
        callout_bg=(245, 245, 245),
        callout_border=(120, 120, 120),
        info_bg=(245, 245, 245),
        table_header_bg=(60, 60, 60),
        table_alt_row=(245, 245, 245),
        table_border=(180, 180, 180),
        success=(60, 60, 60),
        danger=(0, 0, 0),
        warning=(90, 90, 90),
        neutral=(140, 140, 140),
    ),
)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_THEME_REGISTRY: dict[str, Theme] = {
    t.name: t
    for t in [
        WASLA_THEME,
        SLATE_THEME,
        MONO_THEME,
    ]
}


def get_theme(name: str) -> Theme:
    """Get a theme by name. Raises ``KeyError`` if not found."""
    key = name.lower().strip()
    if key not in _THEME_REGISTRY:
        available = ", ".join(sorted(_THEME_REGISTRY.keys()))
        raise KeyError(f"Unknown theme '{name}'. Available: {available}")
    return _THEME_REGISTRY[key]


def list_themes() -> list[Theme]:
    """Return all registered themes."""
    return list(_THEME_REGISTRY.values())


def register_theme(theme: Theme) -> None:
    """Register a custom theme at runtime."""
    _THEME_REGISTRY[theme.name.lower().strip()] = theme


# Convenience: default theme
DEFAULT_THEME = WASLA_THEME
