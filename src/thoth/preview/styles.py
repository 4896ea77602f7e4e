"""Fixed styles and glyphs used by the preview writer."""

from __future__ import annotations

from rich.style import Style

from thoth import theme
from thoth.core.events import BlockQuoteKind

H1 = Style(color=theme.PEACH, bold=True, underline=True)
H2 = Style(color=theme.YELLOW, bold=True, underline=True)
H3 = Style(color=theme.GREEN, bold=True, italic=True)
H4 = Style(color=theme.TEAL, italic=True)
H5 = Style(color=theme.TEAL, italic=True)
H6 = Style(color=theme.TEAL, italic=True)

HEADINGS = {1: H1, 2: H2, 3: H3, 4: H4, 5: H5, 6: H6}

EMPHASIS = Style(color=theme.SUBTEXT1, italic=True)
STRONG = Style(color=theme.LAVENDER, bold=True)
STRIKETHROUGH = Style(color=theme.MAROON, strike=True)
AUTOLINK = Style(color=theme.BLUE, underline=True)

CODE = Style(color=theme.FLAMINGO)
LINK = Style(color=theme.BLUE, underline=True)
LIST_NUMBER = Style(color="bright_blue")

HEADING_GLYPH = "▌"
RULE_GLYPH = "─"
CODE_PREFIX = "│"
CODE_TOP_LEFT = "╒══"
CODE_TOP_FILL = "═"
CODE_BOTTOM_LEFT = "└"
CODE_BOTTOM_FILL = "─"

# Top border: "╒══" plus two more characters around the language token.
CODE_TOP_RESERVED = 2 + 5
# Bottom border: "└" plus the two columns the painter's frame takes.
CODE_BOTTOM_RESERVED = 3
RULE_RESERVED = 2

BULLETS = {1: "■ ", 2: "‣  "}
DEEP_BULLET = "· "

BLOCKQUOTES: dict[BlockQuoteKind | None, tuple[str, Style]] = {
    None: ("▌ ", Style(color=theme.GREEN)),
    BlockQuoteKind.NOTE: ("▌✎ ", Style(color=theme.TEAL)),
    BlockQuoteKind.TIP: ("▌✎ ", Style(color=theme.TEAL)),
    BlockQuoteKind.WARNING: ("▌⚠ ", Style(color=theme.PEACH)),
    BlockQuoteKind.CAUTION: ("▌✖ ", Style(color=theme.MAROON)),
    BlockQuoteKind.IMPORTANT: ("▌🔥 ", Style(color=theme.MAUVE)),
}


def heading_style(level: int) -> Style:
    """Style for a heading level; out-of-range levels are clamped to 1..6."""
    return HEADINGS[min(max(level, 1), 6)]


def bullet(depth: int) -> str:
    return BULLETS.get(depth, DEEP_BULLET)


def blockquote(kind: BlockQuoteKind | None) -> tuple[str, Style]:
    return BLOCKQUOTES.get(kind, BLOCKQUOTES[None])
