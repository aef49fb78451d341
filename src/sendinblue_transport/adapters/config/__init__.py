"""Configuration adapter - loading and display.

Provides adapters for configuration management using lib_layered_config.

Contents:
    * :mod:`.loader` - Configuration loading with caching
    * :mod:`.display` - Configuration display in human/JSON formats
"""

from __future__ import annotations

from .display import display_config
from .loader import get_config, get_default_config_path

__all__ = [
    "display_config",
    "get_config",
    "get_default_config_path",
]
