"""Tests for the /v1/stream UI event channel."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from providers import OpenAIProvider
from proxy.app import create_app
from proxy.handlers import format_sse_event
from streaming import ChunkEvent, EndEvent, ErrorEvent
from tests.helpers import sse


def _parse_sse(text: str):
    events = []
    for frame in text.split("\n\n"):
        if not frame.strip():
            continue
        name, data = frame.split("\n", 1)
        events.append((name[len("event: "):], json.loads(data[len("data: "):])))
    return events


def _mock_provider(response: httpx.Response) -> OpenAIProvider:
    async def handler(request: httpx.Request) -> httpx.Response:
        return response

    return OpenAIProvider("sk-test-key-1234567890", transport=httpx.MockTransport(handler))


@pytest.fixture
def client():
    return TestClient(create_app())


def test_format_sse_event_uses_channel_names():
    assert format_sse_event(ChunkEvent("hi")) == 'event: ai-stream-chunk\ndata: "0:\\"hi\\"\\n"\n\n'
    assert format_sse_event(EndEvent()) == "event: ai-stream-end\ndata: null\n\n"
    assert format_sse_event(ErrorEvent("boom", fatal=True)) == 'event: ai-stream-error\ndata: "boom"\n\n'


def test_stream_relays_chunks_then_end(client, monkeypatch):
    body = sse(
        '{"choices":[{"delta":{"content":"Hel"}}]}',
        '{"choices":[{"delta":{"content":"lo"}}]}',
        "[DONE]",
    )
    monkeypatch.setattr(
        "proxy.endpoints.stream.get_provider",
        lambda name: _mock_provider(httpx.Response(200, content=body)),
    )

    response = client.post(
        "/v1/stream",
        json={"provider": "openai", "payload": json.dumps({"model": "gpt-4o", "stream": True})},
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert _parse_sse(response.text) == [
        ("ai-stream-chunk", '0:"Hel"\n'),
        ("ai-stream-chunk", '0:"lo"\n'),
        ("ai-stream-end", None),
    ]


def test_upstream_error_status_becomes_error_event(client, monkeypatch):
    monkeypatch.setattr(
        "proxy.endpoints.stream.get_provider",
        lambda name: _mock_provider(httpx.Response(503, text="unavailable")),
    )

    response = client.post("/v1/stream", json={"provider": "openai", "payload": {"model": "gpt-4o"}})

    assert response.status_code == 200
    events = _parse_sse(response.text)
    assert events == [("ai-stream-error", "OpenAI API request failed with status 503: unavailable")]


def test_invalid_payload_string_is_rejected(client):
    response = client.post("/v1/stream", json={"provider": "openai", "payload": "{not json"})

    assert response.status_code == 400
    assert "Failed to parse payload into JSON" in response.json()["detail"]["error"]["message"]


def test_payload_must_be_an_object(client):
    response = client.post("/v1/stream", json={"provider": "openai", "payload": "[1, 2]"})

    assert response.status_code == 400


def test_unsupported_provider_is_rejected(client):
    response = client.post("/v1/stream", json={"provider": "mistral", "payload": {}})

    assert response.status_code == 400
    assert response.json()["detail"]["error"]["message"] == "Unsupported provider: mistral"


def test_missing_api_key_is_a_server_error(client, monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

    response = client.post("/v1/stream", json={"provider": "anthropic", "payload": {}})

    assert response.status_code == 500
    assert "ANTHROPIC_API_KEY" in response.json()["detail"]["error"]["message"]


def test_health_lists_providers_and_services(client):
    payload = client.get("/health").json()

    assert payload["status"] == "healthy"
    assert payload["providers"] == ["anthropic", "openai"]
    assert payload["services"] == []
