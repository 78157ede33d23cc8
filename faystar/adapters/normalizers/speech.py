import re

from faystar.adapters.interfaces.normalizer import (
    ProviderRequest,
    RequestNormalizer,
    normalize_unit_interval,
)
from faystar.core.exceptions import ValidationException
from faystar.domain.schemas.audio import TTSRequest

DEFAULT_VOICE_ID = "21m00Tcm4TlvDq8ikWAM"
DEFAULT_STABILITY = 0.5
DEFAULT_SIMILARITY = 0.8
MAX_TEXT_LENGTH = 5000
MIN_VOICE_ID_LENGTH = 10
MODEL_ID = "eleven_multilingual_v2"
# Voice ids become a path segment
VOICE_ID_PATTERN = re.compile(r"[A-Za-z0-9]+")


class SpeechRequestNormalizer(RequestNormalizer[TTSRequest]):
    """ElevenLabs text-to-speech."""

    def normalize(self, request: TTSRequest) -> ProviderRequest:
        text = self.require_text(request.text, "text", MAX_TEXT_LENGTH)
        voice_id = self._voice_id(request.voice_id)

        payload = {
            "text": text,
            "model_id": MODEL_ID,
            "voice_settings": {
                "stability": normalize_unit_interval(request.stability, DEFAULT_STABILITY),
                "similarity_boost": normalize_unit_interval(request.similarity, DEFAULT_SIMILARITY),
                "style": 0.0,
                "use_speaker_boost": True,
            },
        }
        return ProviderRequest(
            endpoint=f"/text-to-speech/{voice_id}",
            payload=payload,
            accept="audio/mpeg",
        )

    @staticmethod
    def _voice_id(value) -> str:
        if value is None:
            return DEFAULT_VOICE_ID
        voice_id = value.strip()
        if len(voice_id) < MIN_VOICE_ID_LENGTH or not VOICE_ID_PATTERN.fullmatch(voice_id):
            raise ValidationException("Invalid voice ID format", field="voiceId")
        return voice_id
