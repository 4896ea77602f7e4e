"""Configuration management for Thoth.

This module handles loading user configuration from ~/.config/thoth/init.py
and provides a sandboxed execution environment for user settings.
"""

from __future__ import annotations

import logging
import os
import traceback
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class ThothConfig:
    """Configuration container for Thoth settings.

    This class stores configuration values that can be set by the user's init.py file.
    All settings have sensible defaults.
    """

    def __init__(self):
        # Preview settings
        self.code_theme: str = "nord"  # any Pygments style name
        self.width: Optional[int] = None  # fixed preview width, None follows the terminal
        self.strikethrough: bool = True

        # Display settings
        self.show_scrollbar: bool = True
        self.scroll_step: int = 5


def get_config_path() -> Path:
    """Get the path to the user's config directory."""
    config_home = os.environ.get('XDG_CONFIG_HOME')
    if config_home:
        return Path(config_home) / 'thoth'
    return Path.home() / '.config' / 'thoth'


def get_init_script_path() -> Path:
    """Get the path to the user's init.py script."""
    return get_config_path() / 'init.py'


def load_config() -> tuple[ThothConfig, Optional[str]]:
    """Load configuration from ~/.config/thoth/init.py.

    The init.py file is executed in a sandboxed environment where it can set
    configuration values on a 'config' object.

    Returns:
        A tuple of (config, error_message). If loading fails, error_message
        will contain details about the failure.
    """
    config = ThothConfig()
    init_path = get_init_script_path()

    # If no init.py exists, return default config
    if not init_path.exists():
        return config, None

    # Create a sandboxed namespace for executing the init script
    sandbox = {
        '__builtins__': {
            # Allow basic builtins
            'True': True,
            'False': False,
            'None': None,
            'str': str,
            'int': int,
            'float': float,
            'bool': bool,
            'list': list,
            'dict': dict,
            'tuple': tuple,
            'len': len,
            'range': range,
            'min': min,
            'max': max,
            # Explicitly deny dangerous operations
            '__import__': None,
            'open': None,
            'exec': None,
            'eval': None,
            'compile': None,
        },
        'config': config,
    }

    try:
        code = init_path.read_text()
        exec(code, sandbox)
    except Exception:
        error_msg = f"Error loading config from {init_path}:\n{traceback.format_exc()}"
        logger.warning("Failed to load config from %s", init_path)
        return config, error_msg

    return config, None
