"""
Normalizers for the OpenAI chat, speech and image endpoints.
"""
from faystar.adapters.interfaces.normalizer import ProviderRequest, RequestNormalizer
from faystar.core.exceptions import ValidationException
from faystar.domain.schemas.ai import ChatRequest, ImageRequest, VoiceRequest

CHAT_MODELS = ("gpt-3.5-turbo", "gpt-4", "gpt-4-turbo")
CHAT_ROLES = ("system", "user", "assistant")
SYSTEM_PROMPT = (
    "You are a helpful AI assistant for the FayStar app. "
    "Provide helpful, concise, and accurate responses."
)

VOICES = ("alloy", "echo", "fable", "onyx", "nova", "shimmer")
IMAGE_SIZES = ("256x256", "512x512", "1024x1024")
IMAGE_QUALITIES = ("standard", "hd")
IMAGE_STYLES = ("vivid", "natural")


class ChatRequestNormalizer(RequestNormalizer[ChatRequest]):

    def normalize(self, request: ChatRequest) -> ProviderRequest:
        message = self.require_text(request.message, "message", 4000)
        model = self.require_choice(request.model, "model", CHAT_MODELS, CHAT_MODELS[0])

        history = []
        for turn in request.conversation_history:
            if turn.role not in CHAT_ROLES:
                raise ValidationException(
                    f"Invalid conversation role: {turn.role}",
                    field="conversationHistory",
                )
            history.append({"role": turn.role, "content": turn.content})

        payload = {
            "model": model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                *history,
                {"role": "user", "content": message},
            ],
            "max_tokens": 1000,
            "temperature": 0.7,
        }
        return ProviderRequest(endpoint="/chat/completions", payload=payload)


class VoiceRequestNormalizer(RequestNormalizer[VoiceRequest]):

    def normalize(self, request: VoiceRequest) -> ProviderRequest:
        text = self.require_text(request.text, "text", 4096)
        payload = {
            "model": "tts-1",
            "input": text,
            "voice": self.require_choice(request.voice, "voice", VOICES, "alloy"),
            "speed": self.require_range(request.speed, "speed", 0.25, 4.0, 1.0),
        }
        return ProviderRequest(endpoint="/audio/speech", payload=payload, accept="audio/mpeg")


class ImageRequestNormalizer(RequestNormalizer[ImageRequest]):

    def normalize(self, request: ImageRequest) -> ProviderRequest:
        payload = {
            "model": "dall-e-3",
            "prompt": self.require_text(request.prompt, "prompt", 4000),
            "size": self.require_choice(request.size, "size", IMAGE_SIZES, "512x512"),
            "quality": self.require_choice(request.quality, "quality", IMAGE_QUALITIES, "standard"),
            "style": self.require_choice(request.style, "style", IMAGE_STYLES, "vivid"),
            "n": 1,
        }
        return ProviderRequest(endpoint="/images/generations", payload=payload)
