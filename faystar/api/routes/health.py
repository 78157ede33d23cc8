import asyncio
import platform
import time
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status

from faystar.api.dependencies import get_app_settings, get_container
from faystar.api.responses import success_response
from faystar.core.config import Settings
from faystar.core.logging import get_logger
from faystar.domain.schemas.envelope import utc_timestamp
from faystar.services.container import ServiceContainer

# Initialize logger
logger = get_logger(__name__)

health_router = APIRouter()


def _basic(request: Request, settings: Settings) -> Dict[str, Any]:
    return {
        "status": "healthy",
        "timestamp": utc_timestamp(),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "environment": settings.ENVIRONMENT,
        "version": settings.VERSION,
    }


@health_router.get("")
async def health_check(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    container: ServiceContainer = Depends(get_container),
):
    """
    Basic health check endpoint. Reports configuration state only; no provider is contacted.
    """
    data = _basic(request, settings)
    data["services"] = {
        client.name: "configured" if client.is_enabled else "disabled"
        for client in container.clients
    }
    return success_response(data, request_prefix="health")


@health_router.get("/detailed")
async def detailed_health_check(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    container: ServiceContainer = Depends(get_container),
):
    """
    Detailed health check with a live probe of each provider.

    Responds 200 even when providers are down; the per-provider status says which.
    """
    probes = await asyncio.gather(
        container.ai.health(),
        container.video.health(),
        container.speech.health(),
    )
    data = _basic(request, settings)
    data["providers"] = {probe["provider"]: probe for probe in probes}
    data["endpoints"] = sorted(
        f"{method.upper()} {path}"
        for path, operations in request.app.openapi()["paths"].items()
        for method in operations
    )
    data["system"] = {
        "python": platform.python_version(),
        "platform": platform.system(),
    }
    if any(probe["status"] == "unhealthy" for probe in probes):
        data["status"] = "degraded"
    return success_response(data, request_prefix="health")


@health_router.get("/ping")
async def ping():
    """Simple ping endpoint for load balancers."""
    return success_response({"message": "pong", "timestamp": utc_timestamp()}, status_code=status.HTTP_200_OK)
