from .preview import RenderedPreview, from_events, render_markdown
from .config import ThothConfig, load_config

__all__ = [
    "RenderedPreview",
    "from_events",
    "render_markdown",
    "ThothConfig",
    "load_config",
]
__version__ = "0.1.0"
