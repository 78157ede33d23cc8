"""
OpenAI-backed chat, voice and image generation with optional canned fallbacks.
"""
import logging
import random
from typing import Any, Dict, Optional

from faystar.adapters.interfaces.fallback import StaticFallbackStrategy
from faystar.adapters.normalizers.openai import (
    ChatRequestNormalizer,
    ImageRequestNormalizer,
    VoiceRequestNormalizer,
)
from faystar.domain.schemas.ai import ChatRequest, ImageRequest, VoiceRequest
from faystar.infrastructure.error.fallback import FallbackHandler
from faystar.infrastructure.error.handler import ErrorClassification
from faystar.services.base import ProviderBackedService, ServiceResult
from faystar.services.response_adapter import chat_data, image_data, voice_data

logger = logging.getLogger(__name__)

FALLBACK_REPLIES = (
    "I'm sorry, I'm having trouble connecting to my AI services right now. Please try again later.",
    "I apologize, but I'm experiencing technical difficulties. Please try your request again.",
    "Due to high demand, I'm unable to process your request at the moment. Please try again shortly.",
)

MODEL_CATALOGUE: Dict[str, Any] = {
    "chat": [
        {"id": "gpt-3.5-turbo", "name": "GPT-3.5 Turbo",
         "description": "Fast and efficient for most tasks", "maxTokens": 4096, "cost": 0.002},
        {"id": "gpt-4", "name": "GPT-4",
         "description": "More capable for complex tasks", "maxTokens": 8192, "cost": 0.03},
        {"id": "gpt-4-turbo", "name": "GPT-4 Turbo",
         "description": "Latest and most powerful model", "maxTokens": 128000, "cost": 0.01},
    ],
    "voice": [
        {"id": "alloy", "name": "Alloy", "description": "Neutral and versatile"},
        {"id": "echo", "name": "Echo", "description": "Male voice"},
        {"id": "fable", "name": "Fable", "description": "British accent"},
        {"id": "onyx", "name": "Onyx", "description": "Deep male voice"},
        {"id": "nova", "name": "Nova", "description": "Female voice"},
        {"id": "shimmer", "name": "Shimmer", "description": "Soft female voice"},
    ],
    "image": [
        {"id": "dall-e-3", "name": "DALL-E 3", "description": "Latest image generation model",
         "maxResolution": "1024x1024", "styles": ["vivid", "natural"]},
    ],
}


class CannedChatReply(StaticFallbackStrategy[Dict[str, Any]]):
    """Picks one of a fixed set of apologetic replies."""

    def __init__(self, rng: random.Random):
        self.rng = rng

    def execute(self, request_params: Dict[str, Any], error: ErrorClassification) -> Dict[str, Any]:
        return {
            "response": self.rng.choice(FALLBACK_REPLIES),
            "model": "fallback",
            "isFallback": True,
            "fallbackReason": error.kind.value,
        }


class SilentVoice(StaticFallbackStrategy[Dict[str, Any]]):
    """Voice result with no audio."""

    def execute(self, request_params: Dict[str, Any], error: ErrorClassification) -> Dict[str, Any]:
        return {
            "audioData": None,
            "format": "mp3",
            "voice": request_params.get("voice"),
            "speed": request_params.get("speed"),
            "text": request_params.get("input"),
            "isFallback": True,
            "fallbackReason": error.kind.value,
            "message": "Voice generation temporarily unavailable",
        }


class PlaceholderImage(StaticFallbackStrategy[Dict[str, Any]]):
    """Random placeholder picture of the requested size."""

    def __init__(self, rng: random.Random):
        self.rng = rng

    def execute(self, request_params: Dict[str, Any], error: ErrorClassification) -> Dict[str, Any]:
        width, height = request_params.get("size", "512x512").split("x")
        return {
            "imageUrl": f"https://picsum.photos/{width}/{height}?random={self.rng.randrange(10 ** 9)}",
            "revisedPrompt": request_params.get("prompt"),
            "size": request_params.get("size"),
            "quality": request_params.get("quality"),
            "style": request_params.get("style"),
            "prompt": request_params.get("prompt"),
            "isFallback": True,
            "fallbackReason": error.kind.value,
            "message": "AI image generation temporarily unavailable",
        }


def build_ai_fallbacks(logger: logging.Logger, rng: Optional[random.Random] = None) -> FallbackHandler:
    """Fallback handler with the canned chat, voice and image strategies registered."""
    rng = rng or random.Random()
    handler = FallbackHandler(logger)
    handler.register_fallback("ai.chat", CannedChatReply(rng))
    handler.register_fallback("ai.voice", SilentVoice())
    handler.register_fallback("ai.image", PlaceholderImage(rng))
    return handler


class AIService(ProviderBackedService):
    """Chat, voice and image generation through OpenAI."""

    chat_normalizer = ChatRequestNormalizer()
    voice_normalizer = VoiceRequestNormalizer()
    image_normalizer = ImageRequestNormalizer()

    async def chat(self, request: ChatRequest) -> ServiceResult:
        return await self._invoke("ai.chat", self.chat_normalizer, request, chat_data, request_prefix="chat")

    async def voice(self, request: VoiceRequest) -> ServiceResult:
        return await self._invoke("ai.voice", self.voice_normalizer, request, voice_data, request_prefix="voice")

    async def image(self, request: ImageRequest) -> ServiceResult:
        return await self._invoke("ai.image", self.image_normalizer, request, image_data, request_prefix="image")

    def models(self) -> Dict[str, Any]:
        enabled = self.client.is_enabled
        return {
            "models": MODEL_CATALOGUE,
            "availableServices": {"chat": enabled, "voice": enabled, "image": enabled},
        }
