from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from faystar.api.dependencies import get_current_user, get_speech_service
from faystar.api.responses import envelope_response, success_response
from faystar.core.logging import get_logger
from faystar.domain.schemas.audio import TTSRequest
from faystar.services.speech_service import SpeechService

# Initialize logger
logger = get_logger(__name__)

audio_router = APIRouter()


@audio_router.post("/tts")
async def text_to_speech(
    request: TTSRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    service: SpeechService = Depends(get_speech_service),
):
    """Generate speech from text using ElevenLabs."""
    logger.info("TTS request", extra={"user_id": user["userId"], "text_length": len(request.text or "")})
    return envelope_response(await service.synthesize(request))


@audio_router.get("/voices")
async def list_voices(service: SpeechService = Depends(get_speech_service)):
    """Available ElevenLabs voices."""
    return success_response(service.list_voices(), request_prefix="voices")


@audio_router.get("/health")
async def audio_health(service: SpeechService = Depends(get_speech_service)):
    """Probe ElevenLabs once and report the text-to-speech service state."""
    probe = await service.health()
    data = {
        "name": "ElevenLabs Text-to-Speech",
        "config": service.client.get_config(),
        **probe,
    }
    status_code = status.HTTP_200_OK if probe["status"] == "healthy" else status.HTTP_503_SERVICE_UNAVAILABLE
    return success_response(data, status_code=status_code, request_prefix="health")
