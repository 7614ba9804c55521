"""
Per-request capture of relay traffic for troubleshooting.

When STREAM_TRACE_ENABLED is set, every stream gets its own log file holding
the raw bytes read from the provider (UPSTREAM) interleaved with the
normalized events handed to the sink (SINK), plus lifecycle notes.
"""

from __future__ import annotations

import datetime
from pathlib import Path
from typing import Optional, Union

import settings

TRUNCATED_MARKER = "[stream trace truncated]\n"


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def trace_path(base_dir: Union[str, Path], request_id: str, route: str) -> Path:
    """<base_dir>/<UTC start time>_<route>_<request_id>.log"""
    started = _utcnow().strftime("%Y%m%dT%H%M%SZ")
    return Path(base_dir) / f"{started}_{route.replace(' ', '-')}_{request_id}.log"


class StreamTracer:
    """Appends labelled entries to one trace file, up to an optional byte cap."""

    def __init__(self, path: Path, max_bytes: Optional[int] = None):
        path.parent.mkdir(parents=True, exist_ok=True)
        self.path = path
        self._file = path.open("w", encoding="utf-8")
        # Bytes still allowed in the file; None means unlimited
        self._budget = max_bytes if isinstance(max_bytes, int) and max_bytes > 0 else None
        self.log_note("stream tracer initialized")

    def log_source_chunk(self, chunk: Union[bytes, str]) -> None:
        """Upstream bytes exactly as read, decoded leniently for the log."""
        if isinstance(chunk, bytes):
            chunk = chunk.decode("utf-8", "replace")
        self._record("UPSTREAM", chunk)

    def log_emitted_event(self, name: str, payload: Optional[str]) -> None:
        self._record("SINK", name if payload is None else f"{name} {payload!r}")

    def log_note(self, note: str) -> None:
        self._record("NOTE", note)

    def log_error(self, message: str) -> None:
        self._record("ERROR", message)

    def close(self) -> None:
        if self._file.closed:
            return
        try:
            self.log_note("stream tracer closed")
        finally:
            self._file.close()

    def _record(self, label: str, text: str) -> None:
        if self._file.closed or self._budget == 0:
            return

        stamp = _utcnow().isoformat(timespec="milliseconds")
        entry = f"[{stamp}] [{label}] len={len(text)}\n{text}\n"

        if self._budget is not None:
            encoded = entry.encode("utf-8", "replace")
            if len(encoded) > self._budget:
                # Keep whatever fits, then stop writing for good
                entry = encoded[: self._budget].decode("utf-8", "ignore") + "\n" + TRUNCATED_MARKER
                self._budget = 0
            else:
                self._budget -= len(encoded)

        self._file.write(entry)
        self._file.flush()


def open_stream_tracer(request_id: str, route: str) -> Optional[StreamTracer]:
    """Start a tracer for one stream, or return None when tracing is off."""
    if not settings.STREAM_TRACE_ENABLED:
        return None
    return StreamTracer(
        trace_path(settings.STREAM_TRACE_DIR, request_id, route),
        max_bytes=settings.STREAM_TRACE_MAX_BYTES,
    )
