"""Configuration management package for the AI stream relay"""

from .loader import ConfigLoader, get_config_loader, load_api_key, API_KEY_ENV_VARS

__all__ = [
    "ConfigLoader",
    "get_config_loader",
    "load_api_key",
    "API_KEY_ENV_VARS",
]
