"""
Streaming response normalization.

Turns provider-specific server-sent-event streams into one provider-agnostic
sequence of chunk, error and end events.
"""

from .errors import (
    ProxyError,
    ApiKeyError,
    UnsupportedProviderError,
    TransportError,
    UpstreamStatusError,
    ChunkDecodeError,
    SinkClosedError,
)
from .events import (
    EVT_CHUNK,
    EVT_ERROR,
    EVT_END,
    ChunkEvent,
    ErrorEvent,
    EndEvent,
    NormalizedEvent,
    format_chunk_payload,
    is_terminal,
)
from .frames import FrameSplitter
from .extract import extract_payload
from .schema import Provider, ProviderEventSchema, SCHEMAS
from .decoders import Decision, EmitText, Ignore, ReportError, MalformedIgnore, decode
from .sink import EventSink, QueueSink, CollectingSink
from .session import StreamSession, SessionState

__all__ = [
    # Errors
    "ProxyError",
    "ApiKeyError",
    "UnsupportedProviderError",
    "TransportError",
    "UpstreamStatusError",
    "ChunkDecodeError",
    "SinkClosedError",

    # Events
    "EVT_CHUNK",
    "EVT_ERROR",
    "EVT_END",
    "ChunkEvent",
    "ErrorEvent",
    "EndEvent",
    "NormalizedEvent",
    "format_chunk_payload",
    "is_terminal",

    # Parsing
    "FrameSplitter",
    "extract_payload",
    "Provider",
    "ProviderEventSchema",
    "SCHEMAS",
    "Decision",
    "EmitText",
    "Ignore",
    "ReportError",
    "MalformedIgnore",
    "decode",

    # Delivery
    "EventSink",
    "QueueSink",
    "CollectingSink",
    "StreamSession",
    "SessionState",
]
