"""
Upstream LLM providers.
Resolves a provider name to an authenticated provider instance.
"""
from typing import Dict, Optional, Type

import httpx

from config import load_api_key
from streaming import Provider
from providers.base_provider import BaseProvider
from providers.anthropic_provider import AnthropicProvider
from providers.openai_provider import OpenAIProvider

PROVIDER_CLASSES: Dict[Provider, Type[BaseProvider]] = {
    Provider.ANTHROPIC: AnthropicProvider,
    Provider.OPENAI: OpenAIProvider,
}

__all__ = [
    'BaseProvider',
    'AnthropicProvider',
    'OpenAIProvider',
    'PROVIDER_CLASSES',
    'get_provider',
]


def get_provider(name: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> BaseProvider:
    """Get a provider implementation based on the provider name

    Args:
        name: Provider name ("anthropic" or "openai")
        transport: Optional httpx transport override

    Raises:
        UnsupportedProviderError: unknown provider name
        ApiKeyError: the provider's API key is not configured
    """
    provider = Provider.parse(name)
    api_key = load_api_key(provider.value)
    return PROVIDER_CLASSES[provider](api_key, transport=transport)
