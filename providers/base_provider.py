"""
Base provider interface for upstream LLM providers.
Owns the HTTP transport and hands the byte stream to a StreamSession.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Dict, Optional, TYPE_CHECKING

import httpx

from settings import CONNECT_TIMEOUT, FRAME_COMPACT_THRESHOLD, READ_TIMEOUT, STREAM_TIMEOUT
from streaming import ApiKeyError, EventSink, Provider, StreamSession, TransportError

if TYPE_CHECKING:
    from stream_debug import StreamTracer

logger = logging.getLogger(__name__)

ERROR_BODY_UNAVAILABLE = "Failed to read error body"


def describe_http_error(exc: httpx.HTTPError) -> str:
    """httpx timeouts often carry an empty message; fall back to the class name"""
    return str(exc) or type(exc).__name__


class BaseProvider(ABC):
    """Abstract base class for streaming chat providers"""

    provider: Provider
    name: str

    def __init__(
        self,
        api_key: str,
        endpoint: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize provider with credentials

        Args:
            api_key: The API key for authentication
            endpoint: Override for the provider's streaming endpoint
            transport: Optional httpx transport (used to stub the network in tests)
        """
        if not api_key or not api_key.isprintable() or not api_key.isascii():
            raise ApiKeyError(f"Invalid {self.name} API key format")
        self.api_key = api_key
        self.endpoint = endpoint or self.default_endpoint()
        self._transport = transport

    @abstractmethod
    def default_endpoint(self) -> str:
        """URL the streaming request is posted to"""

    @abstractmethod
    def _get_headers(self) -> Dict[str, str]:
        """Build authenticated request headers"""

    def _get_timeout(self) -> httpx.Timeout:
        # STREAM_TIMEOUT overall with READ_TIMEOUT between chunks
        return httpx.Timeout(STREAM_TIMEOUT, connect=CONNECT_TIMEOUT, read=READ_TIMEOUT)

    async def stream(
        self,
        body: Dict[str, Any],
        sink: EventSink,
        request_id: Optional[str] = None,
        tracer: Optional["StreamTracer"] = None,
    ) -> StreamSession:
        """Stream a chat request and relay normalized events to the sink

        Args:
            body: Provider-format request body
            sink: Event sink for chunk/error/end events
            request_id: Request ID for logging
            tracer: Optional stream tracer for debugging

        Returns:
            The finished session (for its counters)

        Raises:
            UpstreamStatusError: the provider answered with a non-success status
            TransportError: connecting or reading the stream failed
        """
        session = StreamSession(
            self.provider,
            sink,
            request_id=request_id,
            tracer=tracer,
            compact_threshold=FRAME_COMPACT_THRESHOLD,
        )
        request_id = session.request_id

        logger.info(f"[{request_id}] Starting {self.name} stream request")
        logger.debug(f"[{request_id}] Streaming from {self.endpoint} model={body.get('model')}")
        if tracer:
            tracer.log_note(f"starting {self.name} stream to {self.endpoint}")

        async with httpx.AsyncClient(timeout=self._get_timeout(), transport=self._transport) as client:
            try:
                async with client.stream(
                    "POST",
                    self.endpoint,
                    json=body,
                    headers=self._get_headers(),
                ) as response:
                    if tracer:
                        tracer.log_note(f"{self.name} responded with status={response.status_code}")

                    if not response.is_success:
                        error_body = await self._read_error_body(response, request_id)
                        if tracer:
                            tracer.log_error(f"{self.name} error status={response.status_code} body={error_body}")
                        await session.reject(
                            response.status_code,
                            f"{self.name} API request failed with status {response.status_code}: {error_body}",
                        )

                    logger.info(f"[{request_id}] {self.name} API request successful (status: {response.status_code})")
                    await session.run(self._iter_bytes(response))
            except httpx.HTTPError as e:
                if session.finished:
                    raise TransportError(describe_http_error(e)) from e
                if tracer:
                    tracer.log_error(f"{self.name} request failed: {describe_http_error(e)}")
                await session.abort(f"{self.name} API request failed: {describe_http_error(e)}", e)
            finally:
                if tracer:
                    tracer.log_note(f"{self.name} stream closed")

        return session

    async def _read_error_body(self, response: httpx.Response, request_id: str) -> str:
        """Best-effort read of a failed response body"""
        try:
            raw = await response.aread()
        except httpx.HTTPError as e:
            logger.warning(f"[{request_id}] Could not read {self.name} error body: {describe_http_error(e)}")
            return ERROR_BODY_UNAVAILABLE
        error_text = raw.decode("utf-8", "replace")
        logger.error(f"[{request_id}] {self.name} API error {response.status_code}: {error_text}")
        return error_text

    async def _iter_bytes(self, response: httpx.Response) -> AsyncIterator[bytes]:
        """Yield raw body chunks, mapping httpx read failures to TransportError"""
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as e:
            raise TransportError(f"Error reading stream chunk: {describe_http_error(e)}") from e
