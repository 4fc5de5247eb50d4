"""Page geometry and the per-invocation page context (cursor + accumulator)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from reportlab.lib.pagesizes import A4

from .page import DrawOp, Page, PlacedBlock

HeaderFactory = Callable[["PageGeometry", int], list[DrawOp]]


@dataclass(frozen=True)
class PageGeometry:
    """Fixed page size and margins, in points, measured from the top-left."""

    width: float
    height: float
    margin_top: float
    margin_bottom: float
    margin_left: float
    margin_right: float

    @classmethod
    def uniform(cls, width: float, height: float, margin: float) -> PageGeometry:
        return cls(width, height, margin, margin, margin, margin)

    @classmethod
    def a4(
        cls,
        margin_top: float,
        margin_bottom: float,
        margin_side: float,
    ) -> PageGeometry:
        width, height = A4
        return cls(width, height, margin_top, margin_bottom, margin_side, margin_side)

    @property
    def content_left(self) -> float:
        return self.margin_left

    @property
    def content_right(self) -> float:
        return self.width - self.margin_right

    @property
    def content_top(self) -> float:
        return self.margin_top

    @property
    def content_bottom(self) -> float:
        return self.height - self.margin_bottom

    @property
    def content_width(self) -> float:
        return self.width - self.margin_left - self.margin_right

    @property
    def content_height(self) -> float:
        return self.height - self.margin_top - self.margin_bottom


@dataclass
class PageContext:
    """Cursor and page accumulator for one layout invocation.

    A context is created per ``LayoutEngine.layout`` call and threaded
    through every placement, so no cursor state outlives a document.
    The first page is opened on construction.
    """

    geometry: PageGeometry
    header: HeaderFactory | None = None
    pages: list[Page] = field(default_factory=list)
    cursor: float = 0.0

    def __post_init__(self) -> None:
        if not self.pages:
            self.new_page()

    # -- state -------------------------------------------------------------

    @property
    def page(self) -> Page:
        return self.pages[-1]

    @property
    def page_index(self) -> int:
        return len(self.pages) - 1

    @property
    def remaining(self) -> float:
        return self.geometry.content_bottom - self.cursor

    @property
    def page_is_empty(self) -> bool:
        return not self.page.blocks

    def fits(self, height: float) -> bool:
        return self.cursor + height <= self.geometry.content_bottom

    # -- transitions -------------------------------------------------------

    def new_page(self) -> Page:
        """Open a page, render its header and reset the cursor to the top margin."""
        number = len(self.pages) + 1
        header = self.header(self.geometry, number) if self.header else []
        page = Page(number=number, header=list(header))
        self.pages.append(page)
        self.cursor = self.geometry.content_top
        return page

    def check_page_break(self, required_space: float) -> bool:
        """Start a new page when ``required_space`` does not fit below the cursor.

        Returns ``True`` if a page was started; otherwise leaves the state
        untouched and returns ``False``.
        """
        if self.cursor + required_space > self.geometry.content_bottom:
            self.new_page()
            return True
        return False

    def place(
        self,
        kind: str,
        height: float,
        ops: list[DrawOp],
        row_index: int | None = None,
    ) -> PlacedBlock:
        block = PlacedBlock(kind=kind, y=self.cursor, height=height, ops=tuple(ops), row_index=row_index)
        self.page.blocks.append(block)
        self.cursor += height
        return block

    def advance(self, dy: float) -> None:
        # Never move up: the cursor only grows within a page
        self.cursor += max(dy, 0.0)
