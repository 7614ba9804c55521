"""
Request handlers for the relay server.
"""
from .streaming_handler import format_sse_event, relay_stream

__all__ = [
    'format_sse_event',
    'relay_stream',
]
