"""Textual user interface."""

from __future__ import annotations

from thoth.ui.preview import PreviewPane

__all__ = ["PreviewPane"]
