"""
UI event channel: relays one chat request as a server-sent event stream.
"""
import json
import logging
import uuid
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse

from providers import get_provider
from streaming import ApiKeyError, UnsupportedProviderError
from stream_debug import open_stream_tracer
from ..handlers import relay_stream
from ..logging_utils import log_request
from ..models import StreamRequest

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/v1/stream")
async def stream_api_request(request: StreamRequest, raw_request: Request):
    """Stream a provider response as ai-stream-chunk/error/end events"""
    request_id = str(uuid.uuid4())[:8]
    logger.info(f"[{request_id}] Received stream request for provider: {request.provider}")

    try:
        body = request.parsed_payload()
    except ValueError as e:
        # json.JSONDecodeError is a ValueError
        logger.error(f"[{request_id}] Failed to parse payload into JSON: {e}")
        raise HTTPException(
            status_code=400,
            detail={"error": {"message": f"Failed to parse payload into JSON: {e}"}},
        )

    log_request(request_id, request.provider, body, "/v1/stream", dict(raw_request.headers))

    try:
        provider = get_provider(request.provider)
    except UnsupportedProviderError as e:
        raise HTTPException(status_code=400, detail={"error": {"message": str(e)}})
    except ApiKeyError as e:
        logger.error(f"[{request_id}] {e}")
        raise HTTPException(status_code=500, detail={"error": {"message": str(e)}})

    tracer = open_stream_tracer(request_id, f"stream-{provider.provider.value}")
    if tracer:
        tracer.log_note(f"request body: {json.dumps(body)[:2000]}")

    return StreamingResponse(
        relay_stream(provider, body, request_id, tracer=tracer),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
