"""Pydantic models for structured document representation.

These models form the intermediate representation (IR) between the
record-specific generators (inspection report, invoice) and the layout
engine. A generator builds a ``DocumentModel``; the engine consumes it
once and turns it into pages of drawing instructions.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

RGB = tuple[int, int, int]
Align = Literal["left", "center", "right"]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class DocumentKind(str, Enum):
    """Kinds of documents the generators produce."""
    INSPECTION_REPORT = "InspectionReport"
    INVOICE = "Invoice"


class BlockType(str, Enum):
    """Types of content blocks understood by the layout engine."""
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    KEY_VALUE = "key_value"
    TABLE = "table"
    SPACER = "spacer"
    BILINGUAL = "bilingual"
    CALLOUT = "callout"
    PHOTO_GRID = "photo_grid"
    IMAGE = "image"
    PAGE_BREAK = "page_break"


# ---------------------------------------------------------------------------
# Content blocks
# ---------------------------------------------------------------------------

class HeadingBlock(BaseModel):
    """A heading.

    Level 0 is the centered document title, level 1 a filled section band,
    level 2 a light area band and level 3 plain bold text. ``text_ar`` is
    drawn right-aligned on the same band (or under the title for level 0).
    """
    type: Literal[BlockType.HEADING] = BlockType.HEADING
    level: int = Field(default=1, ge=0, le=3)
    text: str
    text_ar: str = ""


class ParagraphBlock(BaseModel):
    """Wrapped text."""
    type: Literal[BlockType.PARAGRAPH] = BlockType.PARAGRAPH
    text: str
    font_size: Optional[float] = None
    bold: bool = False
    italic: bool = False
    align: Align = "left"
    color: Optional[RGB] = None


class KeyValueBlock(BaseModel):
    """A ``label: value`` pair; the value wraps in its own column."""
    type: Literal[BlockType.KEY_VALUE] = BlockType.KEY_VALUE
    label: str
    value: str
    label_width: Optional[float] = None
    value_color: Optional[RGB] = None
    value_bold: bool = False


class CellStyle(BaseModel):
    """Per-cell overrides."""
    color: Optional[RGB] = None
    fill: Optional[RGB] = None
    bold: Optional[bool] = None
    align: Optional[Align] = None
    font_size: Optional[float] = None


class TableCell(BaseModel):
    text: str = ""
    colspan: int = Field(default=1, ge=1)
    style: Optional[CellStyle] = None


class TableBlock(BaseModel):
    """A table with an optional header band.

    ``col_widths`` are absolute widths in points and are used as given;
    without them the content width is split evenly.
    """
    type: Literal[BlockType.TABLE] = BlockType.TABLE
    header: Optional[list[TableCell]] = None
    rows: list[list[TableCell]] = Field(default_factory=list)
    col_widths: Optional[list[float]] = None
    align: Optional[list[Align]] = None
    striped: bool = False
    grid: bool = True

    @classmethod
    def from_strings(
        cls,
        header: list[str] | None,
        rows: list[list[str]],
        **kwargs,
    ) -> TableBlock:
        """Build a table from plain strings."""
        return cls(
            header=[TableCell(text=h) for h in header] if header is not None else None,
            rows=[[TableCell(text=c) for c in row] for row in rows],
            **kwargs,
        )

    @property
    def column_count(self) -> int:
        if self.col_widths:
            return len(self.col_widths)
        if self.header:
            return sum(c.colspan for c in self.header)
        if self.rows:
            return max(sum(c.colspan for c in row) for row in self.rows)
        return 0

    def check_arity(self) -> list[int]:
        """Return the indexes of rows whose spans don't match the column count."""
        n = self.column_count
        return [i for i, row in enumerate(self.rows) if sum(c.colspan for c in row) != n]


class SpacerBlock(BaseModel):
    type: Literal[BlockType.SPACER] = BlockType.SPACER
    height: float = 6.0


class BilingualBlock(BaseModel):
    """English text on the left column, Arabic right-aligned on the right."""
    type: Literal[BlockType.BILINGUAL] = BlockType.BILINGUAL
    english: str
    arabic: str = ""
    bold: bool = False
    font_size: Optional[float] = None


class CalloutBlock(BaseModel):
    """A titled notice drawn inside a tinted, rounded box."""
    type: Literal[BlockType.CALLOUT] = BlockType.CALLOUT
    title: str = ""
    body: str = ""
    fill: Optional[RGB] = None
    border: Optional[RGB] = None


class Photo(BaseModel):
    """An image payload for a photo grid; ``data`` is base64 or a data URI."""
    data: Optional[str] = None
    caption: str = ""


class PhotoGridBlock(BaseModel):
    type: Literal[BlockType.PHOTO_GRID] = BlockType.PHOTO_GRID
    photos: list[Photo] = Field(default_factory=list)
    per_row: int = Field(default=2, ge=1)


class ImageBlock(BaseModel):
    """A raw image (e.g. a logo) with a fixed box size in points."""
    type: Literal[BlockType.IMAGE] = BlockType.IMAGE
    data: bytes
    width: float
    height: float
    align: Align = "center"


class PageBreakBlock(BaseModel):
    type: Literal[BlockType.PAGE_BREAK] = BlockType.PAGE_BREAK


# Union of all block types
ContentBlock = Union[
    HeadingBlock,
    ParagraphBlock,
    KeyValueBlock,
    TableBlock,
    SpacerBlock,
    BilingualBlock,
    CalloutBlock,
    PhotoGridBlock,
    ImageBlock,
    PageBreakBlock,
]


# ---------------------------------------------------------------------------
# Section & Document
# ---------------------------------------------------------------------------

class Section(BaseModel):
    """An ordered group of blocks, optionally introduced by a title band."""
    title: str = ""
    title_ar: str = ""
    blocks: list[ContentBlock] = Field(default_factory=list)


class DocumentMetadata(BaseModel):
    """Facts shared by the page header/footer of every page."""
    kind: DocumentKind = DocumentKind.INSPECTION_REPORT
    title: str = ""
    subtitle: str = ""
    client_name: str = ""
    property_location: str = ""
    reference: str = ""
    generated_at: str = ""


class DocumentModel(BaseModel):
    """The top-level intermediate representation of one document."""
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    sections: list[Section] = Field(default_factory=list)

    @property
    def all_blocks(self) -> list[ContentBlock]:
        return [b for s in self.sections for b in s.blocks]


# ---------------------------------------------------------------------------
# Generation result
# ---------------------------------------------------------------------------

class GenerationResult(BaseModel):
    """Result of a single generator run."""
    kind: DocumentKind
    output_path: Path
    success: bool = True
    error: Optional[str] = None
    page_count: int = 0


class PipelineResult(BaseModel):
    """Aggregate result of a pipeline run."""
    source: str = ""
    results: list[GenerationResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> list[GenerationResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[GenerationResult]:
        return [r for r in self.results if not r.success]
