"""Errors raised by the tool-service manager"""


class ToolServiceError(Exception):
    """Base class for tool-service failures"""


class ServiceNotFoundError(ToolServiceError):
    def __init__(self, name: str):
        super().__init__(f"Service not found: {name}")
        self.name = name


class InvalidArgumentsError(ToolServiceError):
    def __init__(self, message: str):
        super().__init__(f"Invalid arguments: {message}")


class ServiceStartError(ToolServiceError):
    """The tool server process could not be spawned or initialized"""


class ToolCallError(ToolServiceError):
    """A running tool server rejected or failed a request"""
