"""Shared fixtures for Thoth tests."""

import pytest

from thoth.preview import NullHighlighter
from thoth.preview.text import split_lines


class FakeLineHighlighter:
    """Wraps every line in red, like a terminal formatter would."""

    def __init__(self):
        self.blocks = []

    def highlight_lines(self, code):
        self.blocks.append(code)
        return ["\x1b[31m" + line + "\x1b[0m" for line in split_lines(code)]


class FakeHighlighter:
    """Recognizes only the "fake" language."""

    def __init__(self):
        self.bound = []
        self.line_highlighter = FakeLineHighlighter()

    def bind(self, language):
        self.bound.append(language)
        if language == "fake":
            return self.line_highlighter
        return None


@pytest.fixture
def null_highlighter():
    """Highlighter that leaves every code block plain."""
    return NullHighlighter()


@pytest.fixture
def fake_highlighter():
    return FakeHighlighter()


@pytest.fixture
def tmp_config_dir(tmp_path):
    """Provide a temporary config directory."""
    config_dir = tmp_path / "config" / "thoth"
    config_dir.mkdir(parents=True)
    return config_dir
