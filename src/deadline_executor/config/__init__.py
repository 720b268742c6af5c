"""
config/ — Deadline Executor Settings

    from deadline_executor.config import load_settings, Settings, ConfigError
"""

from deadline_executor.config.settings import ConfigError, Settings, get_settings, load_settings

__all__ = [
    "ConfigError",
    "Settings",
    "get_settings",
    "load_settings",
]
