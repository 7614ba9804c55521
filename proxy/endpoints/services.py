"""
Tool-service endpoints: start, inspect, call and stop MCP tool servers.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request

from tools import (
    CallToolRequest,
    InvalidArgumentsError,
    ServiceManager,
    ServiceNotFoundError,
    ServiceResponse,
    StartServiceRequest,
    ToolCallResponse,
    ToolServiceError,
    ToolsResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1/services")


def get_service_manager(request: Request) -> ServiceManager:
    return request.app.state.service_manager


def _to_http_error(e: ToolServiceError) -> HTTPException:
    if isinstance(e, ServiceNotFoundError):
        status_code = 404
    elif isinstance(e, InvalidArgumentsError):
        status_code = 400
    else:
        status_code = 502
    logger.error(f"Tool service request failed ({status_code}): {e}")
    return HTTPException(status_code=status_code, detail={"error": {"message": str(e)}})


@router.post("", response_model=ServiceResponse)
async def start_service(request: StartServiceRequest, manager: ServiceManager = Depends(get_service_manager)):
    try:
        return await manager.start_service(request.service_name, request.executable, request.args, env=request.env)
    except ToolServiceError as e:
        raise _to_http_error(e)


@router.get("", response_model=List[str])
async def get_services(manager: ServiceManager = Depends(get_service_manager)):
    return manager.get_services()


@router.get("/{service_name}/tools", response_model=ToolsResponse)
async def list_tools(service_name: str, manager: ServiceManager = Depends(get_service_manager)):
    try:
        return await manager.list_tools(service_name)
    except ToolServiceError as e:
        raise _to_http_error(e)


@router.post("/{service_name}/tools/{tool_name}", response_model=ToolCallResponse)
async def call_tool(
    service_name: str,
    tool_name: str,
    request: CallToolRequest,
    manager: ServiceManager = Depends(get_service_manager),
):
    try:
        return await manager.call_tool(service_name, tool_name, request.arguments)
    except ToolServiceError as e:
        raise _to_http_error(e)


@router.delete("/{service_name}", response_model=ServiceResponse)
async def stop_service(service_name: str, manager: ServiceManager = Depends(get_service_manager)):
    return await manager.stop_service(service_name)
