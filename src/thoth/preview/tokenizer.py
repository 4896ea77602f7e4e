"""Turns markdown source into the event stream consumed by the writer.

markdown-it-py produces a flat list of block tokens with ``*_open`` /
``*_close`` pairs and ``inline`` tokens whose ``children`` hold the inline
run. This module flattens both levels into ``thoth.core.events`` events.
"""

from __future__ import annotations

import functools
import logging
from typing import Iterable, Iterator

from markdown_it import MarkdownIt
from markdown_it.token import Token

from thoth.core import events
from thoth.core.events import BlockQuoteKind, Event, LinkType

logger = logging.getLogger(__name__)

_BREAKS = ("softbreak", "hardbreak")
_MAILTO = "mailto:"


@functools.lru_cache(maxsize=None)
def get_parser(strikethrough: bool = True) -> MarkdownIt:
    """The shared markdown-it parser for the given options.

    Tables are parsed so that they can be reported and skipped as a whole
    rather than leaking their pipes into the surrounding text.
    """
    md = MarkdownIt("commonmark", {"linkify": False})
    md.enable("table")
    if strikethrough:
        md.enable("strikethrough")
    return md


def iter_events(source: str, strikethrough: bool = True) -> Iterator[Event]:
    """Parse ``source`` and yield its events in document order."""
    tokens = get_parser(strikethrough).parse(source)
    yield from EventStream(tokens)


def fence_language(info: str) -> str | None:
    """The language token of a fence info string: its first word."""
    words = info.split()
    return words[0] if words else None


class EventStream:
    """Iterates the events of a parsed markdown-it token list."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        # Closing tokens carry no attributes, so the matching open tag is kept
        self._blockquotes: list[BlockQuoteKind | None] = []
        self._headings: list[int] = []
        self._lists: list[int | None] = []
        self._links: list[events.Link] = []
        # Index of the inline token whose alert marker line must be dropped
        self._strip_marker: set[int] = set()
        self._skip: set[int] = set()

    def __iter__(self) -> Iterator[Event]:
        for index, token in enumerate(self._tokens):
            if index in self._skip:
                continue
            yield from self._block(index, token)

    def _block(self, index: int, token: Token) -> Iterator[Event]:
        match token.type:
            case "paragraph_open":
                if not token.hidden:
                    yield events.Start(events.Paragraph())
            case "paragraph_close":
                if not token.hidden:
                    yield events.End(events.Paragraph())
            case "heading_open":
                level = int(token.tag[1:])
                self._headings.append(level)
                yield events.Start(events.Heading(level))
            case "heading_close":
                level = self._headings.pop() if self._headings else 1
                yield events.End(events.Heading(level))
            case "blockquote_open":
                kind = self._alert_kind(index)
                self._blockquotes.append(kind)
                yield events.Start(events.BlockQuote(kind))
            case "blockquote_close":
                kind = self._blockquotes.pop() if self._blockquotes else None
                yield events.End(events.BlockQuote(kind))
            case "bullet_list_open":
                self._lists.append(None)
                yield events.Start(events.List(None))
            case "ordered_list_open":
                start = token.attrGet("start")
                start = int(start) if start is not None else 1
                self._lists.append(start)
                yield events.Start(events.List(start))
            case "bullet_list_close" | "ordered_list_close":
                start = self._lists.pop() if self._lists else None
                yield events.End(events.List(start))
            case "list_item_open":
                yield events.Start(events.Item())
            case "list_item_close":
                yield events.End(events.Item())
            case "fence":
                yield from self._code_block(fence_language(token.info), True, token.content)
            case "code_block":
                yield from self._code_block(None, False, token.content)
            case "hr":
                yield events.Rule()
            case "html_block":
                yield events.Start(events.HtmlBlock())
                yield events.Html(token.content)
                yield events.End(events.HtmlBlock())
            case "table_open":
                yield events.Start(events.Table())
            case "table_close":
                yield events.End(events.Table())
            case "thead_open":
                yield events.Start(events.TableHead())
            case "thead_close":
                yield events.End(events.TableHead())
            case "tr_open":
                yield events.Start(events.TableRow())
            case "tr_close":
                yield events.End(events.TableRow())
            case "th_open" | "td_open":
                yield events.Start(events.TableCell())
            case "th_close" | "td_close":
                yield events.End(events.TableCell())
            case "inline":
                children = token.children or []
                if index in self._strip_marker:
                    children = _after_first_break(children)
                yield from self._inline(children)
            case _:
                logger.debug("Skipping markdown token %s", token.type)

    def _code_block(self, language: str | None, fenced: bool, content: str) -> Iterator[Event]:
        tag = events.CodeBlock(language, fenced)
        yield events.Start(tag)
        if content:
            yield events.Text(content)
        yield events.End(tag)

    def _inline(self, children: Iterable[Token]) -> Iterator[Event]:
        for child in children:
            match child.type:
                case "text" | "text_special":
                    if child.content:
                        yield events.Text(child.content)
                case "code_inline":
                    yield events.Code(child.content)
                case "em_open":
                    yield events.Start(events.Emphasis())
                case "em_close":
                    yield events.End(events.Emphasis())
                case "strong_open":
                    yield events.Start(events.Strong())
                case "strong_close":
                    yield events.End(events.Strong())
                case "s_open":
                    yield events.Start(events.Strikethrough())
                case "s_close":
                    yield events.End(events.Strikethrough())
                case "link_open":
                    link = _link(child)
                    self._links.append(link)
                    yield events.Start(link)
                case "link_close":
                    link = self._links.pop() if self._links else events.Link(LinkType.INLINE, "")
                    yield events.End(link)
                case "image":
                    image = events.Image(
                        str(child.attrGet("src") or ""), str(child.attrGet("title") or "")
                    )
                    yield events.Start(image)
                    yield from self._inline(child.children or [])
                    yield events.End(image)
                case "softbreak":
                    yield events.SoftBreak()
                case "hardbreak":
                    yield events.HardBreak()
                case "html_inline":
                    yield events.InlineHtml(child.content)
                case _:
                    logger.debug("Skipping inline markdown token %s", child.type)

    def _alert_kind(self, index: int) -> BlockQuoteKind | None:
        """Detect a GitHub alert marker on the first line of a blockquote.

        The marker line is removed from the output: either the leading part of
        the first paragraph, or the whole paragraph when it holds nothing else.
        """
        tokens = self._tokens
        if index + 3 >= len(tokens):
            return None
        opening, inline, closing = tokens[index + 1], tokens[index + 2], tokens[index + 3]
        if opening.type != "paragraph_open" or inline.type != "inline":
            return None
        kind = BlockQuoteKind.from_marker(inline.content.split("\n", 1)[0])
        if kind is None:
            return None
        children = inline.children or []
        if any(child.type in _BREAKS for child in children):
            self._strip_marker.add(index + 2)
        elif closing.type == "paragraph_close":
            self._skip.update((index + 1, index + 2, index + 3))
        else:
            return None
        return kind


def _after_first_break(children: list[Token]) -> list[Token]:
    for position, child in enumerate(children):
        if child.type in _BREAKS:
            return children[position + 1:]
    return []


def _link(token: Token) -> events.Link:
    dest = str(token.attrGet("href") or "")
    title = str(token.attrGet("title") or "")
    if token.markup == "autolink" and dest.startswith(_MAILTO):
        # Email destinations are the bare address
        link_type = LinkType.EMAIL
        dest = dest[len(_MAILTO):]
    elif token.markup == "autolink":
        link_type = LinkType.AUTOLINK
    else:
        link_type = LinkType.INLINE
    return events.Link(link_type, dest, title)
