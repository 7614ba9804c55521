"""
Endpoint handlers for the relay server.
"""
from .health import router as health_router
from .stream import router as stream_router
from .services import router as services_router

__all__ = [
    'health_router',
    'stream_router',
    'services_router',
]
