"""Tests for the on-disk stream tracer."""

import settings
from stream_debug import TRUNCATED_MARKER, StreamTracer, open_stream_tracer, trace_path


def test_disabled_tracer_is_not_created(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "STREAM_TRACE_ENABLED", False)
    monkeypatch.setattr(settings, "STREAM_TRACE_DIR", str(tmp_path))

    assert open_stream_tracer("abc", "stream-openai") is None
    assert list(tmp_path.iterdir()) == []


def test_records_upstream_and_sink_traffic(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "STREAM_TRACE_ENABLED", True)
    monkeypatch.setattr(settings, "STREAM_TRACE_DIR", str(tmp_path / "traces"))
    monkeypatch.setattr(settings, "STREAM_TRACE_MAX_BYTES", 0)
    tracer = open_stream_tracer("abc123", "stream openai")

    tracer.log_source_chunk(b'data: {"choices":[]}\n\n')
    tracer.log_source_chunk(b"\xff")
    tracer.log_emitted_event("ai-stream-chunk", '0:"hi"\n')
    tracer.log_emitted_event("ai-stream-end", None)
    tracer.close()
    tracer.log_note("after close")

    assert tracer.path.parent == tmp_path / "traces"
    assert tracer.path.name.endswith("_stream-openai_abc123.log")
    content = tracer.path.read_text(encoding="utf-8")
    assert "[UPSTREAM]" in content
    assert 'data: {"choices":[]}' in content
    assert "�" in content
    assert "[SINK] len=13\nai-stream-end\n" in content
    assert "stream tracer closed" in content
    assert "after close" not in content


def test_output_is_capped(tmp_path):
    tracer = StreamTracer(trace_path(tmp_path, "big", "stream-anthropic"), max_bytes=300)

    for _ in range(20):
        tracer.log_source_chunk("x" * 100)
    tracer.close()

    raw = tracer.path.read_bytes()
    assert raw.count(TRUNCATED_MARKER.encode()) == 1
    assert raw.endswith(TRUNCATED_MARKER.encode())
    assert len(raw) <= 300 + 1 + len(TRUNCATED_MARKER)
