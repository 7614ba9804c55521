"""
Health check and status endpoints.
"""
import time
from fastapi import APIRouter, Request

from streaming import Provider

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "providers": [provider.value for provider in Provider],
        "services": request.app.state.service_manager.get_services(),
    }


@router.get("/healthz")
async def healthz_check():
    """Alternative health check endpoint (Kubernetes style)"""
    return {"status": "ok", "timestamp": time.time()}
