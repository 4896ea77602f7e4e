"""ANSI escape code handling for highlighted code output.

This module parses ANSI SGR (Select Graphic Rendition) sequences, such as the
ones a terminal formatter writes, and converts them to styled spans.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from rich.color import Color
from rich.style import Style

from thoth.preview.text import StyledSpan

# ANSI SGR codes for basic colors
ANSI_BASIC_COLORS = {
    # Foreground colors (30-37)
    30: "black",
    31: "red",
    32: "green",
    33: "yellow",
    34: "blue",
    35: "magenta",
    36: "cyan",
    37: "white",
    # Bright foreground colors (90-97)
    90: "bright_black",
    91: "bright_red",
    92: "bright_green",
    93: "bright_yellow",
    94: "bright_blue",
    95: "bright_magenta",
    96: "bright_cyan",
    97: "bright_white",
}

ANSI_BASIC_BG_COLORS = {
    # Background colors (40-47)
    40: "black",
    41: "red",
    42: "green",
    43: "yellow",
    44: "blue",
    45: "magenta",
    46: "cyan",
    47: "white",
    # Bright background colors (100-107)
    100: "bright_black",
    101: "bright_red",
    102: "bright_green",
    103: "bright_yellow",
    104: "bright_blue",
    105: "bright_magenta",
    106: "bright_cyan",
    107: "bright_white",
}

ANSI_STYLES = {
    1: "bold",
    2: "dim",
    3: "italic",
    4: "underline",
    7: "reverse",
    9: "strike",
}

# Codes that switch an attribute back off
ANSI_STYLE_RESETS = {
    22: ("bold", "dim"),
    23: ("italic",),
    24: ("underline",),
    27: ("reverse",),
    29: ("strike",),
}

# Pattern to match ANSI escape sequences
ANSI_ESCAPE_PATTERN = re.compile(
    r'\x1b\['  # ESC [
    r'([0-9;]*)'  # parameter bytes
    r'([A-Za-z])'  # final byte
)


@dataclass
class SgrState:
    """Graphic attributes in effect at a point of the stream."""

    color: Color | None = None
    bgcolor: Color | None = None
    bold: bool = False
    dim: bool = False
    italic: bool = False
    underline: bool = False
    reverse: bool = False
    strike: bool = False

    def reset(self) -> None:
        self.__init__()

    @property
    def style(self) -> Style:
        return Style(
            color=self.color,
            bgcolor=self.bgcolor,
            bold=self.bold or None,
            dim=self.dim or None,
            italic=self.italic or None,
            underline=self.underline or None,
            reverse=self.reverse or None,
            strike=self.strike or None,
        )


def strip_ansi(text: str) -> str:
    """Remove all ANSI escape codes from text.

    Args:
        text: Text potentially containing ANSI escape codes

    Returns:
        Text with all ANSI codes removed
    """
    return ANSI_ESCAPE_PATTERN.sub('', text)


def has_ansi_codes(text: str) -> bool:
    """Check if text contains ANSI escape codes."""
    return '\x1b[' in text


def ansi_to_spans(text: str, state: SgrState | None = None) -> List[StyledSpan]:
    """Convert a single line containing ANSI escape codes to styled spans.

    Trailing line endings are dropped. Adjacent text runs that end up in the
    same style are kept separate; empty runs are skipped.

    Args:
        text: One line of text containing ANSI escape codes
        state: Attributes carried in from a previous line, updated in place

    Returns:
        The spans of the line, in order
    """
    text = text.rstrip('\r\n')
    if state is None:
        state = SgrState()

    if not has_ansi_codes(text):
        # Fast path: no ANSI codes present
        return [StyledSpan(text, state.style)] if text else []

    spans: List[StyledSpan] = []
    pos = 0

    for match in ANSI_ESCAPE_PATTERN.finditer(text):
        # Add text before this escape code
        if match.start() > pos:
            spans.append(StyledSpan(text[pos:match.start()], state.style))

        params = match.group(1)
        command = match.group(2)

        # Only handle SGR commands; cursor movement and the like are dropped
        if command == 'm':
            codes = [int(x) if x else 0 for x in params.split(';')] if params else [0]
            _apply_sgr_codes(codes, state)

        pos = match.end()

    # Add remaining text
    if pos < len(text):
        spans.append(StyledSpan(text[pos:], state.style))

    return spans


def _apply_sgr_codes(codes: List[int], state: SgrState) -> None:
    """Apply SGR parameter codes to ``state``.

    Args:
        codes: List of SGR parameter codes
        state: Current attributes (modified in place)
    """
    i = 0

    while i < len(codes):
        code = codes[i]

        if code == 0:
            # Reset all
            state.reset()

        elif code in ANSI_BASIC_COLORS:
            state.color = Color.parse(ANSI_BASIC_COLORS[code])

        elif code in ANSI_BASIC_BG_COLORS:
            state.bgcolor = Color.parse(ANSI_BASIC_BG_COLORS[code])

        elif code in ANSI_STYLES:
            setattr(state, ANSI_STYLES[code], True)

        elif code in ANSI_STYLE_RESETS:
            for attribute in ANSI_STYLE_RESETS[code]:
                setattr(state, attribute, False)

        elif code == 39:
            state.color = None

        elif code == 49:
            state.bgcolor = None

        elif code in (38, 48) and i + 2 < len(codes):
            color = None
            if codes[i + 1] == 5:
                # 256-color mode: ESC[38;5;Nm
                color = Color.from_ansi(codes[i + 2] & 0xFF)
                i += 2
            elif codes[i + 1] == 2 and i + 4 < len(codes):
                # RGB mode: ESC[38;2;R;G;Bm
                r, g, b = (min(c, 255) for c in codes[i + 2:i + 5])
                color = Color.from_rgb(r, g, b)
                i += 4
            if color is not None:
                if code == 38:
                    state.color = color
                else:
                    state.bgcolor = color

        i += 1
