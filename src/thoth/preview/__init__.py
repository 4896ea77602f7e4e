"""Markdown preview: markup events to styled, viewport-sized lines."""

from __future__ import annotations

from thoth.preview.text import StyledLine, StyledSpan, StyledText
from thoth.preview.highlight import (
    Highlighter,
    LineHighlighter,
    NullHighlighter,
    PygmentsHighlighter,
    default_highlighter,
)
from thoth.preview.writer import Diagnostic, DiagnosticKind, TextWriter
from thoth.preview.render import RenderedPreview, from_events, render_markdown

__all__ = [
    "StyledLine",
    "StyledSpan",
    "StyledText",
    "Highlighter",
    "LineHighlighter",
    "NullHighlighter",
    "PygmentsHighlighter",
    "default_highlighter",
    "Diagnostic",
    "DiagnosticKind",
    "TextWriter",
    "RenderedPreview",
    "from_events",
    "render_markdown",
]
