"""
Provider event decoders.

Each payload is decoded on its own into a list of decisions; the session
driver turns those into normalized events. Decoders hold no state between
payloads.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Union

from .schema import ANTHROPIC_SCHEMA, SCHEMAS, Provider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmitText:
    text: str


@dataclass(frozen=True)
class Ignore:
    reason: str = ""


@dataclass(frozen=True)
class ReportError:
    message: str


@dataclass(frozen=True)
class MalformedIgnore:
    reason: str


Decision = Union[EmitText, Ignore, ReportError, MalformedIgnore]


def _decode_anthropic(data: Any) -> List[Decision]:
    """Decode one Anthropic Messages API stream event"""
    if not isinstance(data, dict) or not isinstance(data.get("type"), str):
        return [MalformedIgnore("event is missing a string 'type' field")]

    event_type = data["type"]

    if event_type in ANTHROPIC_SCHEMA.text_event_types:
        delta = data.get("delta") or {}
        if not isinstance(delta, dict):
            return [MalformedIgnore("content_block_delta has a non-object delta")]
        text = delta.get("text")
        if delta.get("type") == "text_delta" and isinstance(text, str):
            return [EmitText(text)]
        # input_json_delta, thinking_delta and friends carry no user-visible text
        return [Ignore(f"content_block_delta of type {delta.get('type')}")]

    if event_type in ANTHROPIC_SCHEMA.error_event_types:
        details = data.get("error")
        if not isinstance(details, dict):
            logger.warning(f"Anthropic error event without error details: {data}")
            return [Ignore("error event without details")]
        error_type = details.get("type", "unknown_error")
        message = details.get("message", "")
        return [ReportError(f"API Error Event: [{error_type}] {message}")]

    if event_type in ANTHROPIC_SCHEMA.ignored_event_types:
        if event_type in ("message_delta", "message_stop") and data.get("usage"):
            logger.debug(f"Usage metrics received with {event_type}: {data['usage']}")
        return [Ignore(event_type)]

    logger.warning(f"Unknown event type: {event_type}")
    return [Ignore(f"unknown event type {event_type}")]


def _decode_openai(data: Any) -> List[Decision]:
    """Decode one OpenAI chat.completion.chunk"""
    if not isinstance(data, dict):
        return [MalformedIgnore("chunk is not a JSON object")]
    choices = data.get("choices")
    if not isinstance(choices, list):
        return [MalformedIgnore("chunk is missing a 'choices' array")]

    if data.get("id"):
        logger.debug(f"Processing chunk event ID: {data['id']}")

    decisions: List[Decision] = []
    for choice in choices:
        if not isinstance(choice, dict):
            decisions.append(MalformedIgnore("choice is not a JSON object"))
            continue

        delta = choice.get("delta") or {}
        content = delta.get("content") if isinstance(delta, dict) else None
        if isinstance(content, str) and content:
            decisions.append(EmitText(content))
        else:
            decisions.append(Ignore("choice without content"))

        reason = choice.get("finish_reason")
        if reason:
            logger.debug(f"Choice finished with reason: {reason}")

    return decisions


_DECODERS: Dict[Provider, Callable[[Any], List[Decision]]] = {
    Provider.ANTHROPIC: _decode_anthropic,
    Provider.OPENAI: _decode_openai,
}


def decode(provider: Provider, payload: str) -> List[Decision]:
    """Classify a single extracted payload for the given provider.

    Args:
        provider: Upstream provider that produced the payload
        payload: Data line content with the prefix already stripped

    Returns:
        Decisions in the order their events must be emitted. OpenAI payloads
        may yield one decision per choice; everything else yields exactly one.
    """
    schema = SCHEMAS[provider]
    if schema.sentinel is not None and payload.strip() == schema.sentinel:
        logger.debug(f"{provider.value} {schema.sentinel} signal received")
        return [Ignore("sentinel")]

    try:
        data = json.loads(payload)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, over-long integers and nesting past the recursion limit
        return [MalformedIgnore(f"Failed to parse data as JSON event: {e}")]

    return _DECODERS[provider](data)


