"""
FastAPI application initialization and configuration.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from tools import ServiceManager
from .middleware import log_requests_middleware
from .endpoints import (
    health_router,
    stream_router,
    services_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Tear down any tool servers still running
    await app.state.service_manager.stop_all()


def create_app() -> FastAPI:
    """Build the relay application with a fresh tool-service registry"""
    app = FastAPI(title="AI Stream Relay", version="1.0.0", lifespan=lifespan)
    app.state.service_manager = ServiceManager()

    app.middleware("http")(log_requests_middleware)

    app.include_router(health_router)
    app.include_router(stream_router)
    app.include_router(services_router)

    logger.debug("FastAPI application initialized with all routers and middleware")
    return app


app = create_app()
