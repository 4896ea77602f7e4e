"""Nesting state tracked while walking the event stream.

Every stack is list-backed and tolerates a pop on empty, so an unbalanced
event stream degrades instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.style import Style

from thoth.preview.text import StyledSpan

logger = logging.getLogger(__name__)


class StyleStack:
    """Composing stack of inline styles.

    A pushed style is overlaid on the current top, so attributes it leaves
    unset are inherited from the enclosing scopes.
    """

    def __init__(self) -> None:
        self._styles: list[Style] = []

    def __len__(self) -> int:
        return len(self._styles)

    @property
    def current(self) -> Style:
        return self._styles[-1] if self._styles else Style()

    def push(self, style: Style) -> Style:
        composed = self.current + style
        self._styles.append(composed)
        logger.debug("Pushed inline style: %s (depth %d)", composed, len(self._styles))
        return composed

    def pop(self) -> Style | None:
        if not self._styles:
            logger.debug("Inline style pop on empty stack ignored")
            return None
        return self._styles.pop()


@dataclass(frozen=True)
class BlockContext:
    """Decoration applied to every line emitted inside a block."""

    prefix: StyledSpan | None = None
    line_style: Style | None = None


class BlockContextStack:
    """Line prefixes and line styles of the currently open blocks.

    Prefixes and styles are pushed independently: a code block pushes its line
    style before emitting its top border and its prefix only afterwards.
    """

    def __init__(self) -> None:
        self._prefixes: list[StyledSpan] = []
        self._line_styles: list[Style] = []

    @property
    def depth(self) -> int:
        return max(len(self._prefixes), len(self._line_styles))

    @property
    def prefixes(self) -> list[StyledSpan]:
        """Open prefixes, outermost first."""
        return list(self._prefixes)

    @property
    def innermost_prefix(self) -> StyledSpan | None:
        return self._prefixes[-1] if self._prefixes else None

    @property
    def line_style(self) -> Style:
        return self._line_styles[-1] if self._line_styles else Style()

    def push(self, context: BlockContext) -> None:
        if context.prefix is not None:
            self._prefixes.append(context.prefix)
        if context.line_style is not None:
            self._line_styles.append(context.line_style)

    def push_prefix(self, prefix: StyledSpan) -> None:
        self._prefixes.append(prefix)

    def pop_prefix(self) -> StyledSpan | None:
        return self._prefixes.pop() if self._prefixes else None

    def push_line_style(self, style: Style) -> None:
        self._line_styles.append(style)

    def pop_line_style(self) -> Style | None:
        return self._line_styles.pop() if self._line_styles else None

    def pop(self) -> BlockContext:
        return BlockContext(self.pop_prefix(), self.pop_line_style())


class ListStack:
    """Open lists, each with an optional running counter.

    ``None`` marks an unordered list; an integer is the number the next item
    of an ordered list will show.
    """

    def __init__(self) -> None:
        self._indices: list[int | None] = []

    @property
    def depth(self) -> int:
        return len(self._indices)

    def is_empty(self) -> bool:
        return not self._indices

    def push(self, start: int | None) -> None:
        self._indices.append(start)

    def pop(self) -> None:
        if self._indices:
            self._indices.pop()

    def next_number(self) -> int | None:
        """Return the innermost counter and advance it.

        Returns ``None`` for an unordered list or when no list is open.
        """
        if not self._indices or self._indices[-1] is None:
            return None
        number = self._indices[-1]
        self._indices[-1] = number + 1
        return number


class LinkBuffer:
    """Holds the destination of the open non-autolink link."""

    def __init__(self) -> None:
        self._dest: str | None = None

    def set(self, dest: str) -> None:
        self._dest = dest

    def clear(self) -> None:
        self._dest = None

    def take(self) -> str | None:
        dest, self._dest = self._dest, None
        return dest
