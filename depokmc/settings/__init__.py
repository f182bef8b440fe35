"""Settings module for configuration management."""

from .config import KMCConfig, LogConfig, Settings, settings

__all__ = [
    "settings",
    "Settings",
    "LogConfig",
    "KMCConfig",
]
