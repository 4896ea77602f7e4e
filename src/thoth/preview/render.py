"""Entry points for rendering markdown into styled preview lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from thoth.config import ThothConfig
from thoth.core.events import Event
from thoth.preview.highlight import (
    DEFAULT_CODE_THEME,
    Highlighter,
    PygmentsHighlighter,
    default_highlighter,
)
from thoth.preview.text import StyledLine, StyledText
from thoth.preview.tokenizer import iter_events
from thoth.preview.writer import Diagnostic, TextWriter

logger = logging.getLogger(__name__)


@dataclass
class RenderedPreview:
    """Styled lines for one viewport width, plus what could not be rendered."""

    text: StyledText
    width: int
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def lines(self) -> list[StyledLine]:
        return self.text.lines

    @property
    def line_count(self) -> int:
        """Rows the lines take once wrapped at the viewport width."""
        return self.text.line_count(self.width)

    def clamp_scroll(self, offset: int) -> int:
        """Clamp a scroll offset to ``[0, line_count]``."""
        return min(max(0, offset), self.line_count)


def from_events(
    stream: Iterable[Event], width: int, highlighter: Highlighter | None = None
) -> RenderedPreview:
    """Render an already tokenized event stream."""
    writer = TextWriter(width, highlighter)
    text = writer.run(stream)
    return RenderedPreview(text, writer.width, writer.diagnostics)


def render_markdown(
    source: str,
    width: int,
    *,
    highlighter: Highlighter | None = None,
    config: ThothConfig | None = None,
) -> RenderedPreview:
    """Render markdown ``source`` for a viewport ``width`` columns wide.

    Every call starts from scratch; nothing is cached between calls apart from
    the shared parser and highlighting resources.

    Args:
        source: Markdown text
        width: Viewport width in columns
        highlighter: Code highlighter; defaults to Pygments with the
            configured code theme
        config: Settings; defaults to ``ThothConfig()``
    """
    if config is None:
        config = ThothConfig()
    if highlighter is None:
        if config.code_theme == DEFAULT_CODE_THEME:
            highlighter = default_highlighter()
        else:
            highlighter = PygmentsHighlighter(config.code_theme)
    return from_events(iter_events(source, config.strikethrough), width, highlighter)
