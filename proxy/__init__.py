"""
AI Stream Relay server package.

Relays chat requests to Anthropic or OpenAI and streams the responses back as
uniform chunk/error/end events, and manages external MCP tool servers.
"""
from .server import ProxyServer
from .app import app, create_app

__version__ = "1.0.0"

__all__ = [
    'ProxyServer',
    'app',
    'create_app',
]
