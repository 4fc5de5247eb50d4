"""Tests for font-metric line wrapping."""

from __future__ import annotations

from reportlab.pdfbase.pdfmetrics import stringWidth

from inspectdocs.layout.text import line_height, measure_text_height, wrap_text

FONT = "Helvetica"


class TestWrapText:
    def test_empty_text_is_one_empty_line(self):
        assert list(wrap_text("", 100, FONT, 10)) == [""]

    def test_explicit_newlines_and_blank_lines(self):
        assert list(wrap_text("first\n\nsecond", 200, FONT, 10)) == ["first", "", "second"]

    def test_short_text_single_line(self):
        assert list(wrap_text("Pass rate", 200, FONT, 10)) == ["Pass rate"]

    def test_every_line_fits(self):
        text = "The inspection covers the interior and exterior of the property " * 4
        lines = list(wrap_text(text, 120, FONT, 9))
        assert len(lines) > 1
        for line in lines:
            assert stringWidth(line, FONT, 9) <= 120

    def test_words_are_preserved_in_order(self):
        text = "alpha beta gamma delta epsilon zeta eta theta"
        lines = list(wrap_text(text, 60, FONT, 10))
        assert " ".join(lines).split() == text.split()

    def test_long_word_is_broken_by_characters(self):
        word = "x" * 200
        lines = list(wrap_text(word, 50, FONT, 10))
        assert len(lines) > 1
        assert "".join(lines) == word
        for line in lines:
            assert stringWidth(line, FONT, 10) <= 50

    def test_narrow_width_still_progresses(self):
        lines = list(wrap_text("WM", 1, FONT, 10))
        assert lines == ["W", "M"]

    def test_is_lazy_and_recomputed(self):
        gen = wrap_text("a b", 100, FONT, 10)
        assert next(gen) == "a b"
        assert list(wrap_text("a b", 100, FONT, 10)) == ["a b"]


class TestMeasure:
    def test_line_height(self):
        assert line_height(8) == 10.0

    def test_height_is_lines_times_line_height(self):
        text = "one\ntwo\nthree"
        assert measure_text_height(text, 200, FONT, 8) == 3 * line_height(8)
