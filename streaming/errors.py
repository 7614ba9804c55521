"""
Exception hierarchy for the streaming relay.

Only transport-level failures (``TransportError`` and ``UpstreamStatusError``)
propagate out of a stream session; the rest are absorbed and surfaced as
sink events or log lines.
"""


class ProxyError(Exception):
    """Base class for all relay errors"""


class ApiKeyError(ProxyError):
    """API key is missing or malformed"""

    def __str__(self) -> str:
        return f"API key error: {super().__str__()}"


class UnsupportedProviderError(ProxyError):
    """Provider name is not one of the supported providers"""

    def __init__(self, provider: str):
        super().__init__(f"Unsupported provider: {provider}")
        self.provider = provider


class TransportError(ProxyError):
    """Connection failure or failed read from the upstream byte stream"""


class UpstreamStatusError(ProxyError):
    """Upstream answered with a non-success status code"""

    def __init__(self, status_code: int):
        super().__init__(f"API returned status code {status_code}")
        self.status_code = status_code


class ChunkDecodeError(ProxyError):
    """A transport chunk could not be decoded as UTF-8"""


class SinkClosedError(ProxyError):
    """The event sink is gone and can no longer accept events"""
