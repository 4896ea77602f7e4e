"""Tests for the styled text model."""

from rich.style import Style

from thoth.preview.text import StyledLine, StyledSpan, StyledText


class TestStyledLine:
    def test_line_style_sits_under_spans(self):
        line = StyledLine([StyledSpan("a"), StyledSpan("b", Style(italic=True))], Style(bold=True))
        first, second = line.effective_spans()
        assert first.style.bold is True
        assert first.style.italic is None
        assert second.style.bold is True
        assert second.style.italic is True

    def test_span_color_wins_over_line_color(self):
        line = StyledLine([StyledSpan("a", Style(color="red"))], Style(color="blue"))
        (span,) = line.effective_spans()
        assert span.style.color.name == "red"

    def test_patch_style_overlays(self):
        line = StyledLine.styled("x", Style(bold=True, color="red"))
        line.patch_style(Style(color="green"))
        assert line.style.bold is True
        assert line.style.color.name == "green"

    def test_plain(self):
        line = StyledLine([StyledSpan("ab"), StyledSpan("cd")])
        assert line.plain == "abcd"

    def test_height_wraps(self):
        line = StyledLine([StyledSpan("abcdefghij")])
        assert line.height(4) == 3
        assert line.height(10) == 1
        assert line.height(0) == 10

    def test_empty_line_takes_one_row(self):
        assert StyledLine().height(5) == 1

    def test_wide_glyphs_count_two_cells(self):
        line = StyledLine([StyledSpan("🔥🔥")])
        assert line.height(2) == 2

    def test_wrap_breaks_between_words(self):
        line = StyledLine([StyledSpan("a abcde a abcde")])
        assert [row.plain.rstrip() for row in line.wrap(5)] == ["a", "abcde", "a", "abcde"]
        assert line.height(5) == 4

    def test_to_rich(self):
        line = StyledLine([StyledSpan("a", Style(italic=True)), StyledSpan("b")], Style(bold=True))
        text = line.to_rich()
        assert text.plain == "ab"
        assert text.style == Style(bold=True)


class TestStyledText:
    def test_push_span_on_empty_starts_line(self):
        text = StyledText()
        text.push_span(StyledSpan("x"))
        assert len(text) == 1
        assert text.lines[0].plain == "x"

    def test_push_span_appends_to_last_line(self):
        text = StyledText()
        text.push_line(StyledLine())
        text.push_line(StyledLine())
        text.push_span(StyledSpan("x"))
        assert [line.plain for line in text] == ["", "x"]

    def test_line_count(self):
        text = StyledText([StyledLine([StyledSpan("abcdef")]), StyledLine()])
        assert text.line_count(3) == 3
        assert text.line_count(80) == 2

    def test_to_rich_joins_lines(self):
        text = StyledText([StyledLine([StyledSpan("a")]), StyledLine([StyledSpan("b")])])
        assert text.to_rich().plain == "a\nb"
        assert text.plain == "a\nb"
