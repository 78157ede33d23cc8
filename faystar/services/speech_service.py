from typing import Any, Dict, List

from faystar.adapters.normalizers.speech import SpeechRequestNormalizer
from faystar.domain.schemas.audio import TTSRequest
from faystar.services.base import ProviderBackedService, ServiceResult
from faystar.services.response_adapter import speech_data

VOICES: List[Dict[str, str]] = [
    {
        "voice_id": "21m00Tcm4TlvDq8ikWAM",
        "name": "Rachel",
        "gender": "Female",
        "accent": "American",
        "description": "Warm and friendly voice",
    },
    {
        "voice_id": "29vD33N1CtxCmqQRPOWJk",
        "name": "Drew",
        "gender": "Male",
        "accent": "American",
        "description": "Clear and professional voice",
    },
    {
        "voice_id": "2EiwWnXKFv4wCm4uuee0",
        "name": "Clyde",
        "gender": "Male",
        "accent": "British",
        "description": "Deep and authoritative voice",
    },
    {
        "voice_id": "AZnzlk1XxtOvL2T1GwJk",
        "name": "Domi",
        "gender": "Female",
        "accent": "American",
        "description": "Energetic and youthful voice",
    },
    {
        "voice_id": "EXAVITGu4L4Kuyx24Lxk",
        "name": "Bella",
        "gender": "Female",
        "accent": "American",
        "description": "Gentle and caring voice",
    },
]


class SpeechService(ProviderBackedService):
    """Text-to-speech through ElevenLabs."""

    normalizer = SpeechRequestNormalizer()

    async def synthesize(self, request: TTSRequest) -> ServiceResult:
        return await self._invoke("tts", self.normalizer, request, speech_data, request_prefix="tts")

    @staticmethod
    def list_voices() -> Dict[str, Any]:
        return {"voices": [dict(v) for v in VOICES], "count": len(VOICES)}
