"""Layout output: pages of absolutely positioned drawing instructions.

Coordinates are in points from the top-left corner of the page; ``y`` of a
``TextOp`` is the text baseline. The renderer flips them into PDF space.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class TextOp:
    x: float
    y: float
    text: str
    font: str
    size: float
    color: RGB = (0, 0, 0)
    align: str = "left"  # left | center | right (x is the anchor)


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    fill: Optional[RGB] = None
    stroke: Optional[RGB] = None
    radius: float = 0.0
    line_width: float = 0.5


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB = (0, 0, 0)
    width: float = 0.5


@dataclass(frozen=True)
class ImageOp:
    x: float
    y: float
    width: float
    height: float
    data: bytes = field(repr=False)
    opacity: float = 1.0


DrawOp = Union[TextOp, RectOp, LineOp, ImageOp]


@dataclass(frozen=True)
class PlacedBlock:
    """A measured block drawn at ``y`` on its page."""

    kind: str
    y: float
    height: float
    ops: tuple[DrawOp, ...] = ()
    row_index: Optional[int] = None

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def text(self) -> list[str]:
        return [op.text for op in self.ops if isinstance(op, TextOp)]


@dataclass
class Page:
    """One output page: header, placed blocks, and the footer stamped last."""

    number: int
    header: list[DrawOp] = field(default_factory=list)
    blocks: list[PlacedBlock] = field(default_factory=list)
    footer: list[DrawOp] = field(default_factory=list)

    def ops(self) -> list[DrawOp]:
        """Every instruction in drawing order."""
        ops: list[DrawOp] = list(self.header)
        for block in self.blocks:
            ops.extend(block.ops)
        ops.extend(self.footer)
        return ops

    def text(self) -> list[str]:
        return [op.text for op in self.ops() if isinstance(op, TextOp)]

    def blocks_of(self, kind: str) -> list[PlacedBlock]:
        return [b for b in self.blocks if b.kind == kind]
