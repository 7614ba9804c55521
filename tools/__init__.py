"""Tool-service manager for externally spawned MCP tool servers"""

from .errors import (
    ToolServiceError,
    ServiceNotFoundError,
    InvalidArgumentsError,
    ServiceStartError,
    ToolCallError,
)
from .models import (
    ServiceResponse,
    ToolsResponse,
    ToolCallResponse,
    StartServiceRequest,
    CallToolRequest,
)
from .service import ToolService, ServiceManager

__all__ = [
    "ToolServiceError",
    "ServiceNotFoundError",
    "InvalidArgumentsError",
    "ServiceStartError",
    "ToolCallError",
    "ServiceResponse",
    "ToolsResponse",
    "ToolCallResponse",
    "StartServiceRequest",
    "CallToolRequest",
    "ToolService",
    "ServiceManager",
]
