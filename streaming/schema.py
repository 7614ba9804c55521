"""
Static per-provider description of the event stream wire format.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional

from .errors import UnsupportedProviderError
from .extract import DATA_PREFIX


class Provider(str, Enum):
    """Upstream LLM providers the relay understands"""
    ANTHROPIC = "anthropic"
    OPENAI = "openai"

    @classmethod
    def parse(cls, name: str) -> "Provider":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise UnsupportedProviderError(name) from None


@dataclass(frozen=True)
class ProviderEventSchema:
    """Which lines carry data and which JSON shapes map to which decision"""
    provider: Provider
    data_prefix: str = DATA_PREFIX
    sentinel: Optional[str] = None
    text_event_types: FrozenSet[str] = field(default_factory=frozenset)
    error_event_types: FrozenSet[str] = field(default_factory=frozenset)
    ignored_event_types: FrozenSet[str] = field(default_factory=frozenset)


ANTHROPIC_SCHEMA = ProviderEventSchema(
    provider=Provider.ANTHROPIC,
    text_event_types=frozenset({"content_block_delta"}),
    error_event_types=frozenset({"error"}),
    ignored_event_types=frozenset({
        "message_start",
        "message_delta",
        "message_stop",
        "content_block_start",
        "content_block_stop",
        "ping",
    }),
)

OPENAI_SCHEMA = ProviderEventSchema(
    provider=Provider.OPENAI,
    sentinel="[DONE]",
)

SCHEMAS: Dict[Provider, ProviderEventSchema] = {
    Provider.ANTHROPIC: ANTHROPIC_SCHEMA,
    Provider.OPENAI: OPENAI_SCHEMA,
}
