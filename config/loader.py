"""Configuration loader for the AI stream relay

Loads configuration from multiple sources with the following priority:
1. Environment variables (highest priority)
2. .env file
3. Hardcoded defaults (lowest priority)
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv

from streaming.errors import ApiKeyError, UnsupportedProviderError

logger = logging.getLogger(__name__)

# Environment variable holding the API key of each provider
API_KEY_ENV_VARS: Dict[str, str] = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}


class ConfigLoader:
    """Resolves settings from the environment, a .env file and defaults"""

    def __init__(self, env_path: Optional[str] = None):
        """Initialize the config loader

        Args:
            env_path: Optional path to .env file.
                     Defaults to '.env' in the current directory.
        """
        self.env_path = Path(env_path) if env_path else Path(".env")
        self._load_env_file()

    def _load_env_file(self):
        """Load environment variables from .env file if it exists"""
        if self.env_path.exists():
            load_dotenv(dotenv_path=self.env_path)
            logger.debug(f"Loaded environment variables from {self.env_path}")
        else:
            logger.debug(f".env file not found at {self.env_path}, using environment variables and defaults only")

    def get(self, env_var: str, default: Any) -> Any:
        """Get a configuration value with priority: env > default

        The environment value is coerced to the type of ``default`` when that
        is a bool, int or float.
        """
        env_value = os.getenv(env_var)
        if env_value is None:
            if isinstance(default, str) and default.startswith("~/"):
                return str(Path(default).expanduser())
            return default

        if isinstance(default, bool):
            return env_value.lower() in ('true', '1', 'yes')
        if isinstance(default, (int, float)):
            try:
                return type(default)(env_value)
            except ValueError:
                logger.warning(
                    f"Failed to parse {env_var}={env_value} as {type(default).__name__}, using default: {default}"
                )
                return default
        return env_value


_config_loader = None


def get_config_loader() -> ConfigLoader:
    """Get or create the global ConfigLoader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def _redact(key: str) -> str:
    if len(key) > 10:
        return f"{key[:5]}...{key[-5:]}"
    return "Key too short to redact safely"


def load_api_key(provider: str) -> str:
    """Load the API key for a provider from the environment or .env file

    Args:
        provider: Provider name ("anthropic" or "openai")

    Returns:
        The API key

    Raises:
        UnsupportedProviderError: provider has no known key variable
        ApiKeyError: the key variable is unset or empty
    """
    get_config_loader()
    key_name = API_KEY_ENV_VARS.get(provider)
    if key_name is None:
        raise UnsupportedProviderError(provider)

    logger.debug(f"Loading {key_name} from environment/dotenv")
    key = os.getenv(key_name, "").strip()
    if not key:
        error_msg = f"Failed to load {key_name}: environment variable not set"
        logger.error(error_msg)
        raise ApiKeyError(error_msg)

    logger.debug(f"{key_name} loaded (redacted: {_redact(key)})")
    return key
