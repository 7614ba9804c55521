"""
OpenAI chat completions provider.
"""
from typing import Dict

from settings import OPENAI_API_URL
from streaming import Provider
from providers.base_provider import BaseProvider


class OpenAIProvider(BaseProvider):
    """Streams from the OpenAI chat completions endpoint"""

    provider = Provider.OPENAI
    name = "OpenAI"

    def default_endpoint(self) -> str:
        return self._chat_completions_url(OPENAI_API_URL)

    @staticmethod
    def _chat_completions_url(base_url: str) -> str:
        """Accept either a base URL or the full chat completions URL"""
        if base_url.endswith('/chat/completions'):
            return base_url
        return f"{base_url.rstrip('/')}/chat/completions"

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "text/event-stream",
        }
