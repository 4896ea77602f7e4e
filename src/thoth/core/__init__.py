"""Core domain layer - the markup event model."""

from __future__ import annotations

from thoth.core.events import BlockQuoteKind, Event, LinkType, Tag

__all__ = [
    "BlockQuoteKind",
    "Event",
    "LinkType",
    "Tag",
]
