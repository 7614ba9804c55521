"""
Logging utilities for request debugging and tracing.
"""
import logging
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = {'authorization', 'x-api-key', 'api-key', 'cookie'}


def log_request(request_id: str, provider: str, body: Dict[str, Any], endpoint: str, headers: Optional[Dict[str, str]] = None):
    """Log incoming relay request details without leaking credentials"""
    logger.debug(f"[{request_id}] RAW REQUEST CAPTURE")
    logger.debug(f"[{request_id}] Endpoint: {endpoint}")
    logger.debug(f"[{request_id}] Provider: {provider}")
    logger.debug(f"[{request_id}] Model: {body.get('model', 'unknown')}")
    logger.debug(f"[{request_id}] Stream: {body.get('stream', False)}")
    logger.debug(f"[{request_id}] Messages: {len(body.get('messages') or [])}")

    if headers:
        for header_name, header_value in headers.items():
            if header_name.lower() in SENSITIVE_HEADERS:
                logger.debug(f"[{request_id}] {header_name}: [REDACTED]")
            else:
                logger.debug(f"[{request_id}] {header_name}: {header_value}")
