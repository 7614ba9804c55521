"""
Pydantic response models for the tool-service endpoints.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel


class ServiceResponse(BaseModel):
    """Outcome of starting or stopping a service"""
    success: bool
    message: str


class ToolsResponse(BaseModel):
    """Tools advertised by a service"""
    success: bool
    tools: List[Dict[str, Any]]
    message: str


class ToolCallResponse(BaseModel):
    """Result of a single tool invocation"""
    success: bool
    result: Optional[Dict[str, Any]] = None
    message: str


class StartServiceRequest(BaseModel):
    """Spawn a tool server process"""
    service_name: str
    executable: str
    args: List[str] = []
    env: Optional[Dict[str, str]] = None


class CallToolRequest(BaseModel):
    """Arguments are validated by the manager so non-objects get a clear error"""
    arguments: Any = {}
