"""Configuration tools."""

from .config_loader import ConfigLoader, get_config, DEFAULT_PROFILE

__all__ = [
    "ConfigLoader",
    "get_config",
    "DEFAULT_PROFILE",
]
