"""Shared helpers for building upstream byte streams."""

from typing import AsyncIterator, Iterable


async def iter_chunks(chunks: Iterable[bytes]) -> AsyncIterator[bytes]:
    """Async byte stream standing in for an upstream response body."""
    for chunk in chunks:
        yield chunk


def sse(*payloads: str) -> bytes:
    """Encode payloads as blank-line separated ``data:`` frames."""
    return "".join(f"data: {payload}\n\n" for payload in payloads).encode("utf-8")
