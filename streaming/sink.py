"""
Event sinks: the ordered delivery channel from a stream session to the UI.
"""
import asyncio
import logging
from typing import List, Optional, Protocol

from .errors import SinkClosedError
from .events import NormalizedEvent

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    """Anything a stream session can deliver normalized events to"""

    @property
    def closed(self) -> bool:
        ...

    async def emit(self, event: NormalizedEvent) -> None:
        ...


class QueueSink:
    """Sink backed by an asyncio queue, drained by the HTTP event channel.

    ``None`` is queued once on close so the reader knows no more events
    will arrive.
    """

    def __init__(self, maxsize: int = 0):
        self.queue: "asyncio.Queue[Optional[NormalizedEvent]]" = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def emit(self, event: NormalizedEvent) -> None:
        if self._closed:
            raise SinkClosedError(f"sink closed, dropping {event.name}")
        await self.queue.put(event)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.queue.put_nowait(None)
        except asyncio.QueueFull:
            logger.debug("Queue full while closing sink; reader will stop on cancellation")


class CollectingSink:
    """Sink that keeps every event in memory"""

    def __init__(self) -> None:
        self.events: List[NormalizedEvent] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def emit(self, event: NormalizedEvent) -> None:
        if self._closed:
            raise SinkClosedError(f"sink closed, dropping {event.name}")
        self.events.append(event)

    def close(self) -> None:
        self._closed = True
