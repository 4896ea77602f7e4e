"""Markup events consumed by the preview writer.

The event set is closed: block and inline tags travel inside ``Start`` and
``End``, everything else is a leaf event. Producers emit balanced
``Start``/``End`` pairs, but consumers must not rely on it.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union


class BlockQuoteKind(enum.Enum):
    """GitHub alert kinds. A plain blockquote carries ``None`` instead."""

    NOTE = "note"
    TIP = "tip"
    WARNING = "warning"
    CAUTION = "caution"
    IMPORTANT = "important"

    @classmethod
    def from_marker(cls, marker: str) -> BlockQuoteKind | None:
        """Map an alert marker such as ``[!NOTE]`` to its kind."""
        marker = marker.strip()
        if not (marker.startswith("[!") and marker.endswith("]")):
            return None
        name = marker[2:-1].lower()
        for kind in cls:
            if kind.value == name:
                return kind
        return None


class LinkType(enum.Enum):
    """How a link was written in the source."""

    INLINE = "inline"
    AUTOLINK = "autolink"
    EMAIL = "email"


# --- Tags ---


@dataclass(frozen=True)
class Paragraph:
    pass


@dataclass(frozen=True)
class Heading:
    level: int


@dataclass(frozen=True)
class BlockQuote:
    kind: BlockQuoteKind | None = None


@dataclass(frozen=True)
class CodeBlock:
    """A code block. ``language`` is the first word of the fence info."""

    language: str | None = None
    fenced: bool = True


@dataclass(frozen=True)
class List:
    """A list. ``start`` is the first number of an ordered list, else ``None``."""

    start: int | None = None

    @property
    def ordered(self) -> bool:
        return self.start is not None


@dataclass(frozen=True)
class Item:
    pass


@dataclass(frozen=True)
class Emphasis:
    pass


@dataclass(frozen=True)
class Strong:
    pass


@dataclass(frozen=True)
class Strikethrough:
    pass


@dataclass(frozen=True)
class Link:
    link_type: LinkType
    dest: str
    title: str = ""


@dataclass(frozen=True)
class Image:
    dest: str
    title: str = ""


@dataclass(frozen=True)
class HtmlBlock:
    pass


@dataclass(frozen=True)
class Table:
    pass


@dataclass(frozen=True)
class TableHead:
    pass


@dataclass(frozen=True)
class TableRow:
    pass


@dataclass(frozen=True)
class TableCell:
    pass


@dataclass(frozen=True)
class FootnoteDefinition:
    label: str


@dataclass(frozen=True)
class DefinitionList:
    pass


@dataclass(frozen=True)
class MetadataBlock:
    pass


Tag = Union[
    Paragraph,
    Heading,
    BlockQuote,
    CodeBlock,
    List,
    Item,
    Emphasis,
    Strong,
    Strikethrough,
    Link,
    Image,
    HtmlBlock,
    Table,
    TableHead,
    TableRow,
    TableCell,
    FootnoteDefinition,
    DefinitionList,
    MetadataBlock,
]


# --- Events ---


@dataclass(frozen=True)
class Start:
    tag: Tag


@dataclass(frozen=True)
class End:
    tag: Tag


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Code:
    """An inline code span."""

    text: str


@dataclass(frozen=True)
class Html:
    text: str


@dataclass(frozen=True)
class InlineHtml:
    text: str


@dataclass(frozen=True)
class FootnoteReference:
    label: str


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class Rule:
    pass


@dataclass(frozen=True)
class TaskListMarker:
    checked: bool


@dataclass(frozen=True)
class InlineMath:
    text: str


@dataclass(frozen=True)
class DisplayMath:
    text: str


Event = Union[
    Start,
    End,
    Text,
    Code,
    Html,
    InlineHtml,
    FootnoteReference,
    SoftBreak,
    HardBreak,
    Rule,
    TaskListMarker,
    InlineMath,
    DisplayMath,
]
