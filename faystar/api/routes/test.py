"""
Unauthenticated diagnostics. Mounted only when ENABLE_TEST_ROUTES is set.
"""
from fastapi import APIRouter, Depends

from faystar.api.dependencies import get_speech_service
from faystar.api.responses import envelope_response
from faystar.core.logging import get_logger
from faystar.domain.schemas.audio import TTSRequest
from faystar.services.speech_service import SpeechService

# Initialize logger
logger = get_logger(__name__)

test_router = APIRouter()


@test_router.post("/tts")
async def test_text_to_speech(
    request: TTSRequest,
    service: SpeechService = Depends(get_speech_service),
):
    logger.warning("Unauthenticated TTS test route used")
    return envelope_response(await service.synthesize(request))
