"""Styled text model produced by the preview writer."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Iterator, NamedTuple

from rich.console import Console
from rich.style import Style
from rich.text import Text


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` (dropping a trailing ``\\r``), without a final empty line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@functools.lru_cache(maxsize=16)
def _wrap_console(width: int) -> Console:
    # Only read by Text.wrap for its width and tab settings
    return Console(width=width, color_system=None, legacy_windows=False)


class StyledSpan(NamedTuple):
    """A run of text in a single style."""

    text: str
    style: Style = Style()


@dataclass
class StyledLine:
    """An ordered run of spans sharing a line-level style.

    The line style sits underneath every span: attributes a span sets win,
    attributes it leaves unset come from the line.
    """

    spans: list[StyledSpan] = field(default_factory=list)
    style: Style = field(default_factory=Style)

    @classmethod
    def styled(cls, content: str, style: Style) -> StyledLine:
        """A line holding ``content`` as an unstyled span over ``style``."""
        return cls([StyledSpan(content)], style)

    def push_span(self, span: StyledSpan) -> None:
        self.spans.append(span)

    def patch_style(self, style: Style) -> StyledLine:
        self.style = self.style + style
        return self

    def effective_spans(self) -> Iterator[StyledSpan]:
        """Yield each span with the line style composed underneath it."""
        for span in self.spans:
            yield StyledSpan(span.text, self.style + span.style)

    @property
    def plain(self) -> str:
        return "".join(span.text for span in self.spans)

    def wrap(self, width: int) -> list[Text]:
        """Word-wrap the line into rows of at most ``width`` columns.

        Words longer than a row are folded. An empty line is one empty row.
        """
        width = max(1, width)
        rows = list(self.to_rich().wrap(_wrap_console(width), width))
        return rows or [Text()]

    def height(self, width: int) -> int:
        """Rows this line occupies when wrapped at ``width`` columns."""
        return len(self.wrap(width))

    def to_rich(self) -> Text:
        text = Text(style=self.style, end="")
        for span in self.spans:
            text.append(span.text, span.style)
        return text


@dataclass
class StyledText:
    """The output buffer: an ordered list of styled lines."""

    lines: list[StyledLine] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[StyledLine]:
        return iter(self.lines)

    def push_line(self, line: StyledLine) -> None:
        self.lines.append(line)

    def push_span(self, span: StyledSpan) -> None:
        """Append ``span`` to the last line, starting one if there is none."""
        if self.lines:
            self.lines[-1].push_span(span)
        else:
            self.lines.append(StyledLine([span]))

    def line_count(self, width: int) -> int:
        """Total rows after wrapping every line at ``width`` columns."""
        return sum(line.height(width) for line in self.lines)

    @property
    def plain(self) -> str:
        return "\n".join(line.plain for line in self.lines)

    def to_rich(self) -> Text:
        return Text("\n", end="").join(line.to_rich() for line in self.lines)
