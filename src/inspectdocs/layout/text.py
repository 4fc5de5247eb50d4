"""Text measurement and line wrapping.

Both the height estimate used for page-break decisions and the drawn
lines come from ``wrap_text``, so measurement and rendering agree.
"""

from __future__ import annotations

from typing import Iterator

from reportlab.pdfbase.pdfmetrics import stringWidth

LINE_HEIGHT_FACTOR = 1.25


def line_height(font_size: float) -> float:
    return font_size * LINE_HEIGHT_FACTOR


def text_width(text: str, font_name: str, font_size: float) -> float:
    return stringWidth(text, font_name, font_size)


def _split_long_word(word: str, max_width: float, font_name: str, font_size: float) -> Iterator[str]:
    """Break a token wider than the line (an email, a URL) into chunks."""
    if stringWidth(word, font_name, font_size) <= max_width:
        yield word
        return
    chunk = ""
    for ch in word:
        if chunk and stringWidth(chunk + ch, font_name, font_size) > max_width:
            yield chunk
            chunk = ch
        else:
            chunk += ch
    if chunk:
        yield chunk


def wrap_text(text: str, max_width: float, font_name: str, font_size: float) -> Iterator[str]:
    """Yield the wrapped lines of ``text``.

    Explicit newlines always start a new line and blank lines are kept.
    Words are packed greedily; a word wider than ``max_width`` is broken
    by characters. Empty text yields a single empty line.
    """
    for paragraph in text.split("\n"):
        line = ""
        for word in paragraph.split():
            for piece in _split_long_word(word, max_width, font_name, font_size):
                candidate = f"{line} {piece}" if line else piece
                if line and stringWidth(candidate, font_name, font_size) > max_width:
                    yield line
                    line = piece
                else:
                    line = candidate
        yield line


def measure_text_height(text: str, max_width: float, font_name: str, font_size: float) -> float:
    """Line count times the fixed line height."""
    count = sum(1 for _ in wrap_text(text, max_width, font_name, font_size))
    return count * line_height(font_size)
