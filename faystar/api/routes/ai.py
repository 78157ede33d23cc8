from typing import Any, Dict

from fastapi import APIRouter, Depends

from faystar.api.dependencies import get_ai_service, get_current_user, get_text_analyzer
from faystar.api.responses import envelope_response, success_response
from faystar.core.logging import get_logger
from faystar.domain.schemas.ai import AnalyzeRequest, ChatRequest, ImageRequest, VoiceRequest
from faystar.services.ai_service import AIService
from faystar.services.analysis import StubTextAnalyzer

# Initialize logger
logger = get_logger(__name__)

ai_router = APIRouter()


@ai_router.post("/chat")
async def chat(
    request: ChatRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    service: AIService = Depends(get_ai_service),
):
    logger.info("AI chat request", extra={"user_id": user["userId"]})
    return envelope_response(await service.chat(request))


@ai_router.post("/voice")
async def voice(
    request: VoiceRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    service: AIService = Depends(get_ai_service),
):
    logger.info("AI voice request", extra={"user_id": user["userId"]})
    return envelope_response(await service.voice(request))


@ai_router.post("/image")
async def image(
    request: ImageRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    service: AIService = Depends(get_ai_service),
):
    logger.info("AI image request", extra={"user_id": user["userId"]})
    return envelope_response(await service.image(request))


@ai_router.post("/analyze")
async def analyze(
    request: AnalyzeRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    analyzer: StubTextAnalyzer = Depends(get_text_analyzer),
):
    return success_response(analyzer.analyze(request.text, request.type), request_prefix="analyze")


@ai_router.get("/models")
async def models(
    user: Dict[str, Any] = Depends(get_current_user),
    service: AIService = Depends(get_ai_service),
):
    return success_response(service.models(), request_prefix="models")
