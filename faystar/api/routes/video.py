from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from faystar.api.dependencies import get_current_user, get_video_service
from faystar.api.responses import envelope_response, success_response
from faystar.core.logging import get_logger
from faystar.domain.schemas.video import VideoRequest
from faystar.services.video_service import VideoService

# Initialize logger
logger = get_logger(__name__)

video_router = APIRouter()


@video_router.post("/generate")
async def generate_video(
    request: VideoRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    service: VideoService = Depends(get_video_service),
):
    logger.info("Video generation request", extra={"user_id": user["userId"]})
    return envelope_response(await service.generate(request))


@video_router.get("/status/{request_id}")
async def video_status(
    request_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    service: VideoService = Depends(get_video_service),
):
    return envelope_response(await service.get_status(request_id))


@video_router.get("/health")
async def video_health(service: VideoService = Depends(get_video_service)):
    probe = await service.health()
    status_code = status.HTTP_200_OK if probe["status"] == "healthy" else status.HTTP_503_SERVICE_UNAVAILABLE
    return success_response(probe, status_code=status_code, request_prefix="health")


@video_router.get("/config")
async def video_config(
    user: Dict[str, Any] = Depends(get_current_user),
    service: VideoService = Depends(get_video_service),
):
    return success_response(service.client.get_config(), request_prefix="config")
