"""
Tool-service manager: spawns MCP tool servers as child processes and talks
to them over stdio.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client
from mcp.shared.exceptions import McpError
from mcp.types import CallToolResult, Tool

from .errors import (
    InvalidArgumentsError,
    ServiceNotFoundError,
    ServiceStartError,
    ToolCallError,
)
from .models import ServiceResponse, ToolCallResponse, ToolsResponse

logger = logging.getLogger(__name__)

# Seconds to wait for a spawned server to finish the MCP handshake
STARTUP_TIMEOUT = 30.0
# Seconds to wait for the lifecycle task to unwind on stop
SHUTDOWN_TIMEOUT = 10.0


class ToolService:
    """One running MCP tool server.

    The stdio transport and client session are entered and exited inside a
    single lifecycle task; other tasks only use the live session.
    """

    def __init__(
        self,
        name: str,
        executable: str,
        args: Sequence[str] = (),
        env: Optional[Dict[str, str]] = None,
        startup_timeout: float = STARTUP_TIMEOUT,
    ):
        self.name = name
        self.executable = executable
        self.args = list(args)
        self.env = env
        self.server_info: Optional[Dict[str, Any]] = None
        self._startup_timeout = startup_timeout
        self._session: Optional[ClientSession] = None
        self._task: Optional[asyncio.Task] = None
        self._ready = asyncio.Event()
        self._close = asyncio.Event()
        self._failure: Optional[BaseException] = None

    @property
    def running(self) -> bool:
        return self._session is not None

    async def start(self) -> None:
        """Spawn the server and wait for the MCP handshake to finish"""
        if self._task is not None:
            raise ServiceStartError(f"Service {self.name} was already started")

        logger.info(f"Starting tool service '{self.name}': {self.executable} {' '.join(self.args)}")
        self._task = asyncio.create_task(self._run_lifecycle(), name=f"tool-service-{self.name}")
        try:
            await asyncio.wait_for(self._ready.wait(), timeout=self._startup_timeout)
        except asyncio.TimeoutError as e:
            await self.stop()
            raise ServiceStartError(
                f"Service {self.name} did not initialize within {self._startup_timeout}s"
            ) from e

        if self._failure is not None:
            await self.stop()
            raise ServiceStartError(f"Failed to start service {self.name}: {self._failure}") from self._failure

    async def _run_lifecycle(self) -> None:
        params = StdioServerParameters(command=self.executable, args=self.args, env=self.env)
        try:
            async with stdio_client(params) as (read_stream, write_stream):
                async with ClientSession(read_stream, write_stream) as session:
                    init_result = await session.initialize()
                    self.server_info = init_result.serverInfo.model_dump()
                    logger.info(f"Server info for {self.name}: {self.server_info}")
                    self._session = session
                    self._ready.set()
                    await self._close.wait()
        except Exception as e:
            # Startup failures are re-raised by start(); later ones only end the service
            self._failure = e
            logger.error(f"Tool service '{self.name}' exited with error: {e}")
        finally:
            self._session = None
            self._ready.set()

    def _require_session(self) -> ClientSession:
        if self._session is None:
            reason = f": {self._failure}" if self._failure else ""
            raise ToolCallError(f"Service {self.name} is not running{reason}")
        return self._session

    async def list_tools(self) -> List[Tool]:
        """List every tool, following pagination cursors"""
        session = self._require_session()
        tools: List[Tool] = []
        cursor: Optional[str] = None
        try:
            while True:
                result = await session.list_tools(cursor=cursor)
                tools.extend(result.tools)
                cursor = result.nextCursor
                if not cursor:
                    break
        except McpError as e:
            raise ToolCallError(f"Failed to list tools for {self.name}: {e}") from e
        return tools

    async def call_tool(self, tool_name: str, arguments: Dict[str, Any]) -> CallToolResult:
        session = self._require_session()
        try:
            return await session.call_tool(tool_name, arguments)
        except McpError as e:
            raise ToolCallError(f"Tool {tool_name} on {self.name} failed: {e}") from e

    async def stop(self) -> None:
        """Close the session and wait for the server process to exit"""
        self._close.set()
        if self._task is None or self._task.done():
            return
        try:
            await asyncio.wait_for(self._task, timeout=SHUTDOWN_TIMEOUT)
        except asyncio.TimeoutError:
            logger.warning(f"Tool service '{self.name}' did not stop within {SHUTDOWN_TIMEOUT}s; cancelled")


class ServiceManager:
    """Registry of running tool services keyed by name.

    Only start_service/stop_service/stop_all mutate the registry and they do
    so under one lock, so each key has a single writer at a time. Lookups
    read the dict without locking.
    """

    def __init__(self, service_factory: Callable[..., ToolService] = ToolService):
        self._services: Dict[str, ToolService] = {}
        self._service_factory = service_factory
        self._write_lock = asyncio.Lock()

    def _get_service(self, name: str) -> ToolService:
        service = self._services.get(name)
        if service is None:
            raise ServiceNotFoundError(name)
        return service

    def get_services(self) -> List[str]:
        return list(self._services.keys())

    async def start_service(
        self,
        name: str,
        executable: str,
        args: Sequence[str] = (),
        env: Optional[Dict[str, str]] = None,
    ) -> ServiceResponse:
        service = self._service_factory(name, executable, args, env=env)
        await service.start()

        async with self._write_lock:
            previous = self._services.get(name)
            self._services[name] = service

        if previous is not None:
            logger.warning(f"Service {name} was already running; replacing it")
            await previous.stop()

        return ServiceResponse(success=True, message=f"Service {name} started successfully")

    async def list_tools(self, name: str) -> ToolsResponse:
        tools = await self._get_service(name).list_tools()
        logger.info(f"Found {len(tools)} tools for {name}")
        return ToolsResponse(
            success=True,
            tools=[tool.model_dump(mode="json", by_alias=True, exclude_none=True) for tool in tools],
            message=f"Found {len(tools)} tools",
        )

    async def call_tool(self, name: str, tool_name: str, arguments: Any) -> ToolCallResponse:
        if not isinstance(arguments, dict):
            raise InvalidArgumentsError("Arguments must be a valid JSON object")

        result = await self._get_service(name).call_tool(tool_name, arguments)
        logger.info(f"Tool {tool_name} called successfully.")
        return ToolCallResponse(
            success=True,
            result=result.model_dump(mode="json", by_alias=True, exclude_none=True),
            message=f"Tool {tool_name} called successfully",
        )

    async def stop_service(self, name: str) -> ServiceResponse:
        async with self._write_lock:
            service = self._services.pop(name, None)

        if service is None:
            return ServiceResponse(success=False, message=f"Service {name} not found")

        await service.stop()
        return ServiceResponse(success=True, message=f"Service {name} stopped successfully")

    async def stop_all(self) -> None:
        async with self._write_lock:
            services = list(self._services.values())
            self._services.clear()
        for service in services:
            await service.stop()
