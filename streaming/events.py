"""
Normalized events handed to the UI event channel.
"""
import json
from dataclasses import dataclass
from typing import Optional, Union

# Event channel names shared with the UI layer
EVT_CHUNK = "ai-stream-chunk"
EVT_ERROR = "ai-stream-error"
EVT_END = "ai-stream-end"


def format_chunk_payload(text: str) -> str:
    """Wrap text in the ``0:<json-string>\\n`` envelope the UI expects"""
    return f"0:{json.dumps(text, ensure_ascii=False)}\n"


@dataclass(frozen=True)
class ChunkEvent:
    """A fragment of assistant text"""
    text: str

    name = EVT_CHUNK

    @property
    def payload(self) -> str:
        return format_chunk_payload(self.text)


@dataclass(frozen=True)
class ErrorEvent:
    """An error notification; ``fatal`` errors end the session"""
    message: str
    fatal: bool = False

    name = EVT_ERROR

    @property
    def payload(self) -> str:
        return self.message


@dataclass(frozen=True)
class EndEvent:
    """Normal end of stream"""

    name = EVT_END

    @property
    def payload(self) -> Optional[str]:
        return None


NormalizedEvent = Union[ChunkEvent, ErrorEvent, EndEvent]


def is_terminal(event: NormalizedEvent) -> bool:
    """True for events after which nothing else may be emitted"""
    if isinstance(event, EndEvent):
        return True
    return isinstance(event, ErrorEvent) and event.fatal
