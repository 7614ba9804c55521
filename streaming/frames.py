"""
Incremental splitter for blank-line delimited event streams.
"""
import codecs
import logging
from typing import Iterator

from .errors import ChunkDecodeError

logger = logging.getLogger(__name__)

FRAME_DELIMITER = "\n\n"

# Consumed prefix length (in characters) after which the buffer is compacted
DEFAULT_COMPACT_THRESHOLD = 8192


class FrameSplitter:
    """Turns arbitrarily chunked bytes into complete, trimmed event frames.

    The buffer is a growable string plus a cursor marking where unconsumed
    text starts. Consumed text is dropped in one slice once the cursor passes
    ``compact_threshold`` (or reaches the end), instead of reslicing on every
    frame.
    """

    def __init__(self, compact_threshold: int = DEFAULT_COMPACT_THRESHOLD) -> None:
        self._buffer = ""
        self._cursor = 0
        self._compact_threshold = max(compact_threshold, 0)
        self._decoder = codecs.getincrementaldecoder("utf-8")()

    @property
    def pending(self) -> str:
        """Text received after the last frame boundary"""
        return self._buffer[self._cursor:]

    def append(self, chunk: bytes) -> Iterator[str]:
        """Consume a raw chunk and return a lazy iterator over complete frames.

        Decoding happens immediately; frames are cut only as the iterator is
        pulled, and anything not pulled stays buffered for the next call.

        Raises:
            ChunkDecodeError: the chunk is not valid UTF-8. Its bytes are
                dropped and the splitter stays usable for the next chunk.
        """
        try:
            text = self._decoder.decode(chunk)
        except UnicodeDecodeError as e:
            self._decoder.reset()
            raise ChunkDecodeError(f"Failed to decode chunk as UTF-8: {e}") from e
        return self.append_text(text)

    def append_text(self, text: str) -> Iterator[str]:
        """Like ``append`` for input that is already text"""
        if text:
            self._buffer += text
        return self._drain()

    def _drain(self) -> Iterator[str]:
        while True:
            pos = self._buffer.find(FRAME_DELIMITER, self._cursor)
            if pos == -1:
                break
            frame = self._buffer[self._cursor:pos].strip()
            self._cursor = pos + len(FRAME_DELIMITER)
            self._maybe_compact()
            yield frame
        self._maybe_compact()

    def _maybe_compact(self) -> None:
        if self._cursor == 0:
            return
        if self._cursor >= len(self._buffer) or self._cursor >= self._compact_threshold:
            self._buffer = self._buffer[self._cursor:]
            self._cursor = 0

    def reset(self) -> str:
        """Drop all buffered state, returning whatever was still pending"""
        leftover = self.pending
        self._buffer = ""
        self._cursor = 0
        self._decoder.reset()
        return leftover
