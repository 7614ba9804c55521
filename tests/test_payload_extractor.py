"""Tests for data-line extraction from a frame."""

from streaming import extract_payload


def test_single_data_line():
    assert extract_payload('data: {"a":1}') == '{"a":1}'


def test_event_line_is_not_payload():
    frame = 'event: content_block_delta\ndata: {"type":"ping"}'
    assert extract_payload(frame) == '{"type":"ping"}'


def test_last_data_line_wins():
    frame = "data: first\ndata: second\ndata: third"
    assert extract_payload(frame) == "third"


def test_frame_without_data_line():
    assert extract_payload(": keepalive") is None
    assert extract_payload("event: ping") is None
    assert extract_payload("") is None


def test_prefix_without_space_and_crlf():
    assert extract_payload("data:[DONE]\r") == "[DONE]"


def test_only_one_leading_space_is_stripped():
    assert extract_payload("data:   padded") == "  padded"


def test_custom_prefix():
    assert extract_payload("payload=x\ndata: y", prefix="payload=") == "x"
