"""Tests for the PreviewPane widget."""

import pytest
from textual.app import App, ComposeResult

from thoth.config import ThothConfig
from thoth.preview import NullHighlighter, render_markdown
from thoth.ui import PreviewPane
from thoth.ui.preview import visible_rows

SOURCE = "\n".join(f"- item {n}" for n in range(30))


class PaneApp(App):
    def __init__(self, source=SOURCE, config=None):
        self.source = source
        self.config = config
        super().__init__()

    def compose(self) -> ComposeResult:
        yield PreviewPane(self.source, "note", config=self.config, highlighter=NullHighlighter())

    def on_mount(self) -> None:
        self.query_one(PreviewPane).focus()


class TestVisibleRows:
    def test_window(self):
        preview = render_markdown("a\nb\nc", 20, highlighter=NullHighlighter())
        rows = visible_rows(preview, 1, 2)
        assert [row.plain for row in rows] == ["b", "c"]

    def test_long_lines_wrap(self):
        preview = render_markdown("x" * 25, 10, highlighter=NullHighlighter())
        rows = visible_rows(preview, 0, 10)
        assert [row.plain for row in rows] == ["x" * 10, "x" * 10, "x" * 5]

    def test_rows_match_line_count(self):
        preview = render_markdown("a abcde a abcde", 5, highlighter=NullHighlighter())
        rows = visible_rows(preview, 0, 100)
        assert [row.plain.rstrip() for row in rows] == ["a", "abcde", "a", "abcde"]
        assert len(rows) == preview.line_count

    def test_last_row_reachable(self):
        preview = render_markdown("a abcde a abcde", 5, highlighter=NullHighlighter())
        assert [row.plain for row in visible_rows(preview, preview.line_count - 1, 5)] == ["abcde"]

    def test_offset_past_end(self):
        preview = render_markdown("a", 20, highlighter=NullHighlighter())
        assert visible_rows(preview, 50, 5) == []

    def test_blank_lines_are_kept(self):
        preview = render_markdown("a\n\nb", 20, highlighter=NullHighlighter())
        assert [row.plain for row in visible_rows(preview, 0, 5)] == ["a", "", "b"]


class TestPreviewPane:
    @pytest.mark.asyncio
    async def test_title_and_line_count(self):
        app = PaneApp()
        async with app.run_test(size=(40, 12)) as pilot:
            await pilot.pause()
            pane = app.query_one(PreviewPane)
            assert pane.border_title == "note"
            assert pane.line_count == 30
            assert pane.border_subtitle == "0/30"

    @pytest.mark.asyncio
    async def test_line_scrolling_is_clamped(self):
        app = PaneApp()
        async with app.run_test(size=(40, 12)) as pilot:
            await pilot.pause()
            pane = app.query_one(PreviewPane)
            await pilot.press("j", "j")
            assert pane.preview_offset == 2
            await pilot.press("k", "k", "k")
            assert pane.preview_offset == 0

    @pytest.mark.asyncio
    async def test_page_scrolling_uses_scroll_step(self):
        config = ThothConfig()
        config.scroll_step = 7
        app = PaneApp(config=config)
        async with app.run_test(size=(40, 12)) as pilot:
            await pilot.pause()
            pane = app.query_one(PreviewPane)
            await pilot.press("ctrl+d")
            assert pane.preview_offset == 7
            await pilot.press("g")
            assert pane.preview_offset == 0

    @pytest.mark.asyncio
    async def test_scroll_stops_at_line_count(self):
        app = PaneApp()
        async with app.run_test(size=(40, 12)) as pilot:
            await pilot.pause()
            pane = app.query_one(PreviewPane)
            pane.scroll_preview(1000)
            assert pane.preview_offset == 30

    @pytest.mark.asyncio
    async def test_shorter_source_clamps_offset(self):
        app = PaneApp()
        async with app.run_test(size=(40, 12)) as pilot:
            await pilot.pause()
            pane = app.query_one(PreviewPane)
            pane.scroll_preview(20)
            pane.source = "- only"
            await pilot.pause()
            assert pane.line_count == 1
            assert pane.preview_offset == 1

    @pytest.mark.asyncio
    async def test_hidden_scroll_indicator(self):
        config = ThothConfig()
        config.show_scrollbar = False
        app = PaneApp(config=config)
        async with app.run_test(size=(40, 12)) as pilot:
            await pilot.pause()
            assert not app.query_one(PreviewPane).border_subtitle
