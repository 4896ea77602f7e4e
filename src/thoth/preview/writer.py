"""Event-stream to styled-lines transducer.

``TextWriter`` walks the markup events once, in order. Block and inline
nesting live in explicit stacks (see ``thoth.preview.stacks``), so deeply
nested input never recurses. Every line goes through ``push_line`` and every
span through ``push_span``; those two primitives apply the open block
decorations.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable

from thoth.core import events
from thoth.core.events import BlockQuoteKind, Event, LinkType
from thoth.preview import styles
from thoth.preview.ansi_handler import SgrState, ansi_to_spans
from thoth.preview.highlight import Highlighter, LineHighlighter, NullHighlighter
from thoth.preview.stacks import (
    BlockContext,
    BlockContextStack,
    LinkBuffer,
    ListStack,
    StyleStack,
)
from thoth.preview.text import StyledLine, StyledSpan, StyledText, split_lines

logger = logging.getLogger(__name__)

# Containers whose whole content is left out of the preview
UNSUPPORTED_CONTAINERS = (
    events.Image,
    events.HtmlBlock,
    events.Table,
    events.TableHead,
    events.TableRow,
    events.TableCell,
    events.FootnoteDefinition,
    events.DefinitionList,
    events.MetadataBlock,
)


class DiagnosticKind(enum.Enum):
    UNSUPPORTED = "unsupported"
    UNKNOWN_LANGUAGE = "unknown-language"
    HIGHLIGHT_FAILED = "highlight-failed"


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem met while rendering."""

    kind: DiagnosticKind
    subject: str
    message: str


def repeat(glyph: str, count: int) -> str:
    """``glyph`` repeated ``count`` times; negative counts give ``""``."""
    return glyph * max(0, count)


class TextWriter:
    """Converts markup events into ``StyledText`` for a viewport ``width``.

    A writer is single-use: create one per render.
    """

    def __init__(self, width: int, highlighter: Highlighter | None = None) -> None:
        self.width = max(0, width)
        self.text = StyledText()
        self.inline_styles = StyleStack()
        self.blocks = BlockContextStack()
        self.lists = ListStack()
        self.link = LinkBuffer()
        self.code_highlighter: LineHighlighter | None = None
        # Set when the next block must be separated by a blank line
        self.needs_newline = False
        self.diagnostics: list[Diagnostic] = []
        self._highlighter = highlighter if highlighter is not None else NullHighlighter()
        self._reported: set[tuple[DiagnosticKind, str]] = set()
        self._suppressed = 0

    def run(self, stream: Iterable[Event]) -> StyledText:
        logger.debug("Running text writer (width %d)", self.width)
        for event in stream:
            self.handle_event(event)
        return self.text

    def handle_event(self, event: Event) -> None:
        if self._suppressed:
            self._handle_suppressed(event)
            return
        match event:
            case events.Start(tag):
                self.start_tag(tag)
            case events.End(tag):
                self.end_tag(tag)
            case events.Text(text):
                self.on_text(text)
            case events.Code(code):
                self.on_code(code)
            case events.SoftBreak():
                self.soft_break()
            case events.HardBreak():
                self.hard_break()
            case events.Rule():
                self.rule()
            case events.Html():
                self.report_unsupported("html", "Html not yet supported")
            case events.InlineHtml():
                self.report_unsupported("inline-html", "Inline html not yet supported")
            case events.FootnoteReference():
                self.report_unsupported("footnote-reference", "Footnote reference not yet supported")
            case events.TaskListMarker():
                self.report_unsupported("task-list-marker", "Task list marker not yet supported")
            case events.InlineMath():
                self.report_unsupported("inline-math", "Inline math not yet supported")
            case events.DisplayMath():
                self.report_unsupported("display-math", "Display math not yet supported")
            case _:
                self.report_unsupported(type(event).__name__, f"Event not yet supported: {event!r}")

    def _handle_suppressed(self, event: Event) -> None:
        match event:
            case events.Start(tag) if isinstance(tag, UNSUPPORTED_CONTAINERS):
                self._suppressed += 1
            case events.End(tag) if isinstance(tag, UNSUPPORTED_CONTAINERS):
                self._suppressed -= 1

    def start_tag(self, tag: events.Tag) -> None:
        match tag:
            case events.Paragraph():
                self.start_paragraph()
            case events.Heading(level):
                self.start_heading(level)
            case events.BlockQuote(kind):
                self.start_blockquote(kind)
            case events.CodeBlock(language):
                self.start_codeblock(language or "")
            case events.List(start):
                self.start_list(start)
            case events.Item():
                self.start_item()
            case events.Emphasis():
                self.inline_styles.push(styles.EMPHASIS)
            case events.Strong():
                self.inline_styles.push(styles.STRONG)
            case events.Strikethrough():
                self.inline_styles.push(styles.STRIKETHROUGH)
            case events.Link(link_type, dest):
                self.push_link(link_type, dest)
            case events.Image():
                self.start_unsupported("image", "Image not yet supported")
            case events.HtmlBlock():
                self.start_unsupported("html-block", "Html block not yet supported")
            case events.Table() | events.TableHead() | events.TableRow() | events.TableCell():
                self.start_unsupported("table", "Table not yet supported")
            case events.FootnoteDefinition():
                self.start_unsupported("footnote-definition", "Footnote definition not yet supported")
            case events.DefinitionList():
                self.start_unsupported("definition-list", "Definition list not yet supported")
            case events.MetadataBlock():
                self.start_unsupported("metadata-block", "Metadata block not yet supported")
            case _:
                self.report_unsupported(type(tag).__name__, f"Tag not yet supported: {tag!r}")

    def end_tag(self, tag: events.Tag) -> None:
        match tag:
            case events.Paragraph():
                self.end_paragraph()
            case events.Heading():
                self.end_heading()
            case events.BlockQuote():
                self.end_blockquote()
            case events.CodeBlock():
                self.end_codeblock()
            case events.List():
                self.end_list()
            case events.Item():
                pass
            case events.Emphasis() | events.Strong() | events.Strikethrough():
                self.inline_styles.pop()
            case events.Link(link_type):
                self.pop_link(link_type)
            case _:
                # Closing an unsupported container outside any suppression
                logger.debug("Ignoring unmatched end tag %r", tag)

    # --- Blocks ---

    def start_paragraph(self) -> None:
        if self.needs_newline:
            self.push_line()
        self.push_line()
        self.needs_newline = False

    def end_paragraph(self) -> None:
        self.needs_newline = True

    def start_heading(self, level: int) -> None:
        if self.needs_newline:
            self.push_line()
        level = min(max(level, 1), 6)
        content = f"{styles.HEADING_GLYPH * level} "
        self.push_line(StyledLine.styled(content, styles.heading_style(level)))
        self.needs_newline = False

    def end_heading(self) -> None:
        self.needs_newline = True

    def start_blockquote(self, kind: BlockQuoteKind | None) -> None:
        if self.needs_newline:
            self.push_line()
            self.needs_newline = False
        prefix, style = styles.blockquote(kind)
        self.blocks.push(BlockContext(StyledSpan(prefix), style))

    def end_blockquote(self) -> None:
        self.blocks.pop()
        self.needs_newline = True

    def start_codeblock(self, language: str) -> None:
        if self.text.lines:
            self.push_line()
        self.blocks.push_line_style(styles.CODE)
        self.set_code_highlighter(language)

        border = styles.CODE_TOP_LEFT
        if language:
            border += f" {language} "
        else:
            border += styles.CODE_TOP_FILL * 2
        border += repeat(
            styles.CODE_TOP_FILL, self.width - styles.CODE_TOP_RESERVED - len(language)
        )
        self.push_line(StyledLine([StyledSpan(border)]))

        self.blocks.push_prefix(StyledSpan(styles.CODE_PREFIX))
        self.needs_newline = True

    def end_codeblock(self) -> None:
        self.blocks.pop_prefix()
        border = styles.CODE_BOTTOM_LEFT + repeat(
            styles.CODE_BOTTOM_FILL, self.width - styles.CODE_BOTTOM_RESERVED
        )
        self.push_line(StyledLine([StyledSpan(border)]))
        self.needs_newline = True
        self.blocks.pop_line_style()
        self.clear_code_highlighter()

    def start_list(self, start: int | None) -> None:
        if self.lists.is_empty() and self.needs_newline:
            self.push_line()
        self.lists.push(start)

    def end_list(self) -> None:
        self.lists.pop()
        self.needs_newline = True

    def start_item(self) -> None:
        self.push_line()
        depth = self.lists.depth
        if depth:
            width = depth * 4 - 3
            number = self.lists.next_number()
            if number is None:
                span = StyledSpan(" " * (width - 1) + styles.bullet(depth))
            else:
                span = StyledSpan(f"{number:0{width}d}. ", styles.LIST_NUMBER)
            self.push_span(span)
        self.needs_newline = False

    def rule(self) -> None:
        rule = repeat(styles.RULE_GLYPH, self.width - styles.RULE_RESERVED)
        self.push_line(StyledLine([StyledSpan(rule)]))

    # --- Inlines ---

    def on_text(self, text: str) -> None:
        if self.code_highlighter is not None:
            self.highlighted_text(text)
            return

        for position, line in enumerate(split_lines(text)):
            if self.needs_newline:
                self.push_line()
                self.needs_newline = False
            if position > 0:
                self.push_line()
            self.push_span(StyledSpan(line, self.inline_styles.current))
        self.needs_newline = False

    def highlighted_text(self, text: str) -> None:
        try:
            escaped_lines = self.code_highlighter.highlight_lines(text)
        except Exception as e:
            self.report(
                DiagnosticKind.HIGHLIGHT_FAILED, "highlight", f"Highlighting failed: {e}"
            )
            # The rest of the block renders in plain code styling
            self.clear_code_highlighter()
            self.on_text(text)
            return
        prefix = self.blocks.innermost_prefix
        state = SgrState()
        for escaped in escaped_lines:
            line = StyledLine(ansi_to_spans(escaped, state))
            if prefix is not None:
                line.spans[0:0] = [prefix, StyledSpan(" ")]
            self.text.push_line(line)
        self.needs_newline = False

    def on_code(self, code: str) -> None:
        self.push_span(StyledSpan(code, styles.CODE))

    def soft_break(self) -> None:
        self.push_line()

    def hard_break(self) -> None:
        self.push_line()

    def push_link(self, link_type: LinkType, dest: str) -> None:
        """Remember the destination, or style an autolink in place."""
        if link_type is LinkType.AUTOLINK:
            self.link.clear()
            self.inline_styles.push(styles.AUTOLINK)
        else:
            self.link.set(dest)

    def pop_link(self, link_type: LinkType) -> None:
        """Append the buffered destination to the current line."""
        if link_type is LinkType.AUTOLINK:
            self.inline_styles.pop()
            return
        dest = self.link.take()
        if dest is not None:
            self.push_span(StyledSpan(" ("))
            self.push_span(StyledSpan(dest, styles.LINK))
            self.push_span(StyledSpan(")"))

    # --- Code highlighting ---

    def set_code_highlighter(self, language: str) -> None:
        if not language:
            return
        highlighter = self._highlighter.bind(language)
        if highlighter is None:
            self.report(
                DiagnosticKind.UNKNOWN_LANGUAGE,
                language,
                f"Could not find syntax for code block: {language!r}",
            )
            return
        logger.debug("Starting code block with syntax: %r", language)
        self.code_highlighter = highlighter

    def clear_code_highlighter(self) -> None:
        self.code_highlighter = None

    # --- Output primitives ---

    def push_line(self, line: StyledLine | None = None) -> None:
        """Start a new line decorated by the open blocks."""
        if line is None:
            line = StyledLine()
        line.patch_style(self.blocks.line_style)
        prefixes = self.blocks.prefixes
        if prefixes:
            line.spans[0:0] = [*prefixes, StyledSpan(" ")]
        self.text.push_line(line)

    def push_span(self, span: StyledSpan) -> None:
        """Append ``span`` to the current line."""
        if self.text.lines:
            self.text.push_span(span)
        else:
            self.push_line(StyledLine([span]))

    # --- Diagnostics ---

    def start_unsupported(self, subject: str, message: str) -> None:
        self.report_unsupported(subject, message)
        self._suppressed += 1

    def report_unsupported(self, subject: str, message: str) -> None:
        self.report(DiagnosticKind.UNSUPPORTED, subject, message)

    def report(self, kind: DiagnosticKind, subject: str, message: str) -> None:
        """Log and record a diagnostic, once per kind and subject."""
        if (kind, subject) in self._reported:
            return
        self._reported.add((kind, subject))
        logger.warning(message)
        self.diagnostics.append(Diagnostic(kind, subject, message))
