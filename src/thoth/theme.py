"""Theme configuration for Thoth.

Colors follow the Catppuccin Macchiato palette:
https://catppuccin.com/palette

Color groups:
- Accents: rosewater through lavender, used for markup styling
- Text: foreground shades for body text
- Overlay/Surface/Base: progressively darker backgrounds
"""

from __future__ import annotations

from textual.theme import Theme

ROSEWATER = "#f4dbd6"
FLAMINGO = "#f0c6c6"
PINK = "#f5bde6"
MAUVE = "#c6a0f6"
RED = "#ed8796"
MAROON = "#ee99a0"
PEACH = "#f5a97f"
YELLOW = "#eed49f"
GREEN = "#a6da95"
TEAL = "#8bd5ca"
SKY = "#91d7e3"
SAPPHIRE = "#7dc4e4"
BLUE = "#8aadf4"
LAVENDER = "#b7bdf8"
TEXT = "#cad3f5"
SUBTEXT1 = "#b8c0e0"
SUBTEXT0 = "#a5adcb"
OVERLAY2 = "#939ab7"
OVERLAY1 = "#8087a2"
OVERLAY0 = "#6e738d"
SURFACE2 = "#5b6078"
SURFACE1 = "#494d64"
SURFACE0 = "#363a4f"
BASE = "#24273a"
MANTLE = "#1e2030"
CRUST = "#181926"


def create_thoth_theme() -> Theme:
    """Create the Thoth color theme."""
    return Theme(
        name="thoth",
        primary=TEAL,
        secondary=MAROON,
        accent=LAVENDER,
        foreground=TEXT,
        background=BASE,
        success=GREEN,
        warning=YELLOW,
        error=RED,
        surface=SURFACE0,
        panel=SURFACE1,
        dark=True,
    )
