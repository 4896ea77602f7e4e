"""Syntax highlighting for code blocks.

The writer depends only on the ``Highlighter`` protocol. ``PygmentsHighlighter``
is the real backend; ``NullHighlighter`` never binds a language, which leaves
every code block in plain code styling.

Lexer lookups and the formatter for a theme are built lazily, once per
process, and are never mutated afterwards.
"""

from __future__ import annotations

import functools
import io
import logging
import threading
from typing import Protocol

from pygments.formatters import TerminalTrueColorFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
from pygments.util import ClassNotFound

from thoth.preview.text import split_lines

logger = logging.getLogger(__name__)

DEFAULT_CODE_THEME = "nord"
FALLBACK_CODE_THEME = "default"


class LineHighlighter(Protocol):
    """Highlights the code of one block, in one language."""

    def highlight_lines(self, code: str) -> list[str]:
        """Return each physical line of ``code`` wrapped in terminal color escapes.

        Lines are split as ``split_lines`` splits them and are highlighted in
        the context of the lines before them, so constructs spanning lines
        (docstrings, block comments) keep their colors. The results carry no
        line endings.
        """
        ...  # pylint: disable=unnecessary-ellipsis


class Highlighter(Protocol):
    """Resolves language tokens to line highlighters."""

    def bind(self, language: str) -> LineHighlighter | None:
        """Return a highlighter for ``language``, or ``None`` if unrecognized."""
        ...  # pylint: disable=unnecessary-ellipsis


class NullHighlighter:
    """Recognizes no language at all."""

    def bind(self, language: str) -> LineHighlighter | None:
        return None


class PygmentsLineHighlighter:
    """Pygments lexer and terminal formatter bound together."""

    def __init__(self, lexer: Lexer, formatter: TerminalTrueColorFormatter) -> None:
        self._lexer = lexer
        self._formatter = formatter

    @property
    def name(self) -> str:
        return self._lexer.name

    def highlight_lines(self, code: str) -> list[str]:
        # The block is lexed once; tokens are then cut at newlines
        rows: list[list[tuple]] = [[]]
        for token_type, value in self._lexer.get_tokens(code):
            for position, part in enumerate(value.split("\n")):
                if position:
                    rows.append([])
                if part:
                    rows[-1].append((token_type, part))
        count = len(split_lines(code))
        rows.extend([] for _ in range(count - len(rows)))
        return [self._format(row) for row in rows[:count]]

    def _format(self, tokens: list[tuple]) -> str:
        out = io.StringIO()
        self._formatter.format(tokens, out)
        return out.getvalue()


class PygmentsHighlighter:
    """Highlights with Pygments lexers and a Pygments color theme.

    Args:
        theme: Name of a Pygments style. Unknown names fall back to the
            Pygments default style.
    """

    def __init__(self, theme: str = DEFAULT_CODE_THEME) -> None:
        self.theme = theme
        self._formatter = _formatter(theme)

    def bind(self, language: str) -> LineHighlighter | None:
        lexer = _lexer(language)
        if lexer is None:
            return None
        return PygmentsLineHighlighter(lexer, self._formatter)


@functools.lru_cache(maxsize=None)
def _formatter(theme: str) -> TerminalTrueColorFormatter:
    try:
        return TerminalTrueColorFormatter(style=theme)
    except ClassNotFound:
        logger.warning("Unknown code theme %r, using %r", theme, FALLBACK_CODE_THEME)
        return TerminalTrueColorFormatter(style=FALLBACK_CODE_THEME)


@functools.lru_cache(maxsize=256)
def _lexer(language: str) -> Lexer | None:
    """Find a lexer by alias, then by file extension."""
    token = language.strip().lower()
    if not token:
        return None
    try:
        return get_lexer_by_name(token, stripnl=False)
    except ClassNotFound:
        pass
    try:
        return get_lexer_for_filename(f"code.{token}", stripnl=False)
    except ClassNotFound:
        return None


_default_lock = threading.Lock()
_default: PygmentsHighlighter | None = None


def default_highlighter() -> PygmentsHighlighter:
    """The process-wide highlighter for the default code theme."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = PygmentsHighlighter(DEFAULT_CODE_THEME)
    return _default
