"""
Configuration package for envbind.

Holds the settings that control how the host environment is loaded.
"""

from .settings import EnvBindSettings, get_config, reload_config

__all__ = [
    "EnvBindSettings",
    "get_config",
    "reload_config",
]
