"""Preview pane that paints rendered markdown inside a titled border."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.binding import Binding
from textual.reactive import reactive
from textual.widget import Widget

from thoth.config import ThothConfig
from thoth.preview import Highlighter, RenderedPreview, render_markdown

logger = logging.getLogger(__name__)


def visible_rows(preview: RenderedPreview, offset: int, height: int) -> list[Text]:
    """Wrap the preview at its width and cut out ``height`` rows at ``offset``."""
    rows: list[Text] = []
    for line in preview.lines:
        rows.extend(line.wrap(preview.width))
    start = preview.clamp_scroll(offset)
    return rows[start:start + max(0, height)]


class PreviewPane(Widget, can_focus=True):
    """Markdown preview of a single note.

    The source is re-rendered at the current content width on every refresh.
    """

    DEFAULT_CSS = """
    PreviewPane {
        border: round $primary;
        border-title-color: $secondary;
        border-title-style: bold;
        border-title-align: center;
        border-subtitle-align: right;
        height: 1fr;
        width: 1fr;
    }
    """

    BINDINGS = [
        Binding("j,down", "scroll_lines(1)", "Down", show=False),
        Binding("k,up", "scroll_lines(-1)", "Up", show=False),
        Binding("ctrl+d,pagedown", "scroll_page(1)", "Page Down", show=True),
        Binding("ctrl+u,pageup", "scroll_page(-1)", "Page Up", show=True),
        Binding("g,home", "preview_top", "Top", show=False),
    ]

    source: reactive[str] = reactive("")
    preview_offset: reactive[int] = reactive(0)

    def __init__(
        self,
        source: str = "",
        title: str = "",
        *,
        config: ThothConfig | None = None,
        highlighter: Highlighter | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._config = config or ThothConfig()
        self._highlighter = highlighter
        self._line_count = 0
        self.set_reactive(PreviewPane.source, source)
        self.border_title = title

    @property
    def line_count(self) -> int:
        """Wrapped rows of the last render."""
        return self._line_count

    def render_preview(self, width: int) -> RenderedPreview:
        if self._config.width is not None:
            width = self._config.width
        return render_markdown(
            self.source, width, highlighter=self._highlighter, config=self._config
        )

    def render(self) -> Text:
        size = self.content_size
        preview = self.render_preview(size.width)
        self._line_count = preview.line_count
        # The offset can lag behind an edit that shortened the note
        offset = preview.clamp_scroll(self.preview_offset)
        if offset != self.preview_offset:
            self.set_reactive(PreviewPane.preview_offset, offset)
        if self._config.show_scrollbar:
            subtitle = f"{offset}/{self._line_count}"
            # Assigning the subtitle refreshes the widget
            if self.border_subtitle != subtitle:
                self.border_subtitle = subtitle
        return Text("\n", end="").join(visible_rows(preview, offset, size.height))

    def scroll_preview(self, delta: int) -> None:
        """Move the preview by ``delta`` rows, within ``[0, line_count]``."""
        self.preview_offset = min(max(0, self.preview_offset + delta), self._line_count)

    def action_scroll_lines(self, delta: int) -> None:
        self.scroll_preview(delta)

    def action_scroll_page(self, direction: int) -> None:
        self.scroll_preview(direction * self._config.scroll_step)

    def action_preview_top(self) -> None:
        self.preview_offset = 0
