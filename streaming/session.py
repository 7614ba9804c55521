"""
Stream session driver.

Owns the frame buffer for one in-flight upstream request, runs the read loop,
applies the provider decoder and delivers normalized events to the sink. A
session finishes exactly once, with either an end event or a fatal error.
"""
import asyncio
import logging
import uuid
from enum import Enum
from typing import AsyncIterable, NoReturn, Optional, TYPE_CHECKING

from .decoders import Decision, EmitText, MalformedIgnore, ReportError, decode
from .errors import ChunkDecodeError, SinkClosedError, TransportError, UpstreamStatusError
from .events import ChunkEvent, EndEvent, ErrorEvent, NormalizedEvent
from .extract import extract_payload
from .frames import DEFAULT_COMPACT_THRESHOLD, FrameSplitter
from .schema import SCHEMAS, Provider
from .sink import EventSink

if TYPE_CHECKING:
    from stream_debug import StreamTracer

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    STREAMING = "streaming"
    FINISHED = "finished"


class StreamSession:
    """Drives one upstream response into a sequence of normalized events"""

    def __init__(
        self,
        provider: Provider,
        sink: EventSink,
        request_id: Optional[str] = None,
        tracer: Optional["StreamTracer"] = None,
        compact_threshold: int = DEFAULT_COMPACT_THRESHOLD,
    ):
        self.provider = provider
        self.request_id = request_id or str(uuid.uuid4())[:8]
        self.state = SessionState.STREAMING
        self.emitted_events = 0
        self.dropped_events = 0
        self._sink = sink
        self._tracer = tracer
        self._schema = SCHEMAS[provider]
        self._splitter = FrameSplitter(compact_threshold=compact_threshold)

    @property
    def finished(self) -> bool:
        return self.state is SessionState.FINISHED

    async def run(self, chunks: AsyncIterable[bytes]) -> None:
        """Consume the upstream byte stream until it closes.

        Emits an end event on normal exhaustion. A ``TransportError`` raised
        by ``chunks`` becomes a fatal error event and is re-raised.
        """
        self._require_streaming()
        logger.debug(f"[{self.request_id}] Starting to process {self.provider.value} stream")

        if self._cancelled():
            return

        try:
            async for chunk in chunks:
                await self._process_chunk(chunk)
                if self._cancelled():
                    return
        except TransportError as e:
            await self._finish(ErrorEvent(str(e), fatal=True))
            raise
        except asyncio.CancelledError:
            if not self.finished:
                logger.info(f"[{self.request_id}] Stream session cancelled")
                self.state = SessionState.FINISHED
            raise

        leftover = self._splitter.reset()
        if leftover.strip():
            logger.debug(f"[{self.request_id}] Discarding {len(leftover)} chars of unterminated frame data")

        logger.info(f"[{self.request_id}] {self.provider.value} stream completed")
        await self._finish(EndEvent())

    async def reject(self, status_code: int, message: str) -> NoReturn:
        """Fail the session for a non-success initial response"""
        self._require_streaming()
        await self._finish(ErrorEvent(message, fatal=True))
        raise UpstreamStatusError(status_code)

    async def abort(self, message: str, cause: Optional[BaseException] = None) -> NoReturn:
        """Fail the session for a transport failure before any byte was read"""
        self._require_streaming()
        await self._finish(ErrorEvent(message, fatal=True))
        raise TransportError(message) from cause

    def _require_streaming(self) -> None:
        if self.finished:
            raise RuntimeError(f"[{self.request_id}] stream session already finished")

    def _cancelled(self) -> bool:
        """A closed sink means the UI side is gone; stop reading"""
        if not self._sink.closed:
            return False
        logger.info(f"[{self.request_id}] Event sink closed, stopping stream reads")
        self.state = SessionState.FINISHED
        return True

    async def _process_chunk(self, chunk: bytes) -> None:
        logger.debug(f"[{self.request_id}] Received raw bytes chunk: {len(chunk)} bytes")
        if self._tracer:
            self._tracer.log_source_chunk(chunk)

        try:
            frames = self._splitter.append(chunk)
        except ChunkDecodeError as e:
            logger.error(f"[{self.request_id}] {e}")
            await self._emit(ErrorEvent(str(e)))
            return

        for frame in frames:
            payload = extract_payload(frame, self._schema.data_prefix)
            if payload is None:
                logger.debug(f"[{self.request_id}] Skipping event block - no data line found")
                continue
            for decision in decode(self.provider, payload):
                if self._sink.closed:
                    # The run loop notices on its next check and stops reading
                    return
                await self._apply(decision)

    async def _apply(self, decision: Decision) -> None:
        if isinstance(decision, EmitText):
            await self._emit(ChunkEvent(decision.text))
        elif isinstance(decision, ReportError):
            logger.error(f"[{self.request_id}] {decision.message}")
            await self._emit(ErrorEvent(decision.message))
        elif isinstance(decision, MalformedIgnore):
            logger.warning(f"[{self.request_id}] {decision.reason}")

    async def _emit(self, event: NormalizedEvent) -> None:
        if self.finished:
            logger.error(f"[{self.request_id}] Dropping {event.name} emitted after session finished")
            return
        if self._tracer:
            self._tracer.log_emitted_event(event.name, event.payload)

        if isinstance(event, ChunkEvent):
            logger.debug(f"[{self.request_id}] Emitting chunk ({len(event.payload)} bytes)")
        elif isinstance(event, ErrorEvent):
            logger.error(f"[{self.request_id}] Emitting Error: {event.message}")
        else:
            logger.info(f"[{self.request_id}] Emitting stream end event")

        try:
            await self._sink.emit(event)
        except SinkClosedError as e:
            self.dropped_events += 1
            logger.debug(f"[{self.request_id}] {e}")
            return
        self.emitted_events += 1

    async def _finish(self, event: NormalizedEvent) -> None:
        if self.finished:
            logger.error(f"[{self.request_id}] Refusing second terminal event {event.name}")
            return
        await self._emit(event)
        self.state = SessionState.FINISHED
        if self.dropped_events:
            logger.info(f"[{self.request_id}] {self.dropped_events} event(s) dropped by a closed sink")
