"""
Relays a provider stream to the UI as server-sent events.
"""
import asyncio
import json
import logging
from typing import Any, AsyncIterator, Dict, Optional

from providers import BaseProvider
from streaming import NormalizedEvent, ProxyError, QueueSink
from stream_debug import StreamTracer

logger = logging.getLogger(__name__)


def format_sse_event(event: NormalizedEvent) -> str:
    """Encode a normalized event as one SSE frame named after its UI channel"""
    data = json.dumps(event.payload, ensure_ascii=False)
    return f"event: {event.name}\ndata: {data}\n\n"


async def relay_stream(
    provider: BaseProvider,
    body: Dict[str, Any],
    request_id: str,
    tracer: Optional[StreamTracer] = None,
) -> AsyncIterator[str]:
    """
    Run one stream session in a background task and yield its events as SSE.

    Args:
        provider: Authenticated upstream provider
        body: Provider-format request body
        request_id: Request ID for logging
        tracer: Optional stream tracer for debugging

    Yields:
        SSE frames, one per normalized event, in emission order
    """
    sink = QueueSink()

    async def run_session() -> None:
        try:
            await provider.stream(body, sink, request_id=request_id, tracer=tracer)
        except ProxyError as e:
            # Already delivered to the UI as a fatal error event
            logger.error(f"[{request_id}] Stream request failed: {e}")
        finally:
            sink.close()

    task = asyncio.create_task(run_session())
    try:
        while True:
            event = await sink.queue.get()
            if event is None:
                break
            yield format_sse_event(event)
        await task
    finally:
        if not task.done():
            logger.info(f"[{request_id}] Client went away, cancelling stream")
            sink.close()
            task.cancel()
        if tracer:
            tracer.close()
