"""Tests for the terminal event sink."""

import io

import pytest
from rich.console import Console

from cli import ConsoleSink
from streaming import ChunkEvent, EndEvent, ErrorEvent, Provider, StreamSession
from tests.helpers import iter_chunks, sse

pytestmark = pytest.mark.anyio


def _sink():
    out = io.StringIO()
    return ConsoleSink(Console(file=out, force_terminal=False, width=120)), out


async def test_renders_text_errors_and_summary() -> None:
    sink, out = _sink()

    await sink.emit(ChunkEvent("Hello [bold]"))
    await sink.emit(ErrorEvent("overloaded [x]"))
    await sink.emit(EndEvent())

    text = out.getvalue()
    assert text.startswith("Hello [bold]")
    assert "warning: overloaded [x]" in text
    assert "stream ended (1 chunks, 1 errors)" in text


async def test_session_streams_to_terminal() -> None:
    sink, out = _sink()
    chunks = [sse('{"choices":[{"delta":{"content":"Hi "}}]}', '{"choices":[{"delta":{"content":"there"}}]}')]

    await StreamSession(Provider.OPENAI, sink).run(iter_chunks(chunks))

    assert not sink.closed
    assert out.getvalue().startswith("Hi there\n")
    assert sink.chunks == 2
