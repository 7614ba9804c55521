"""
Anthropic Messages API provider.
"""
from typing import Dict

from settings import ANTHROPIC_API_URL, ANTHROPIC_VERSION
from streaming import Provider
from providers.base_provider import BaseProvider


class AnthropicProvider(BaseProvider):
    """Streams from https://api.anthropic.com/v1/messages"""

    provider = Provider.ANTHROPIC
    name = "Anthropic"

    def default_endpoint(self) -> str:
        return ANTHROPIC_API_URL

    def _get_headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
            "accept": "text/event-stream",
        }
