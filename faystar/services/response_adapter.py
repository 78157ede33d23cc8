"""
Reshapes provider responses into service envelopes.

The shaping functions are pure: the same provider response always yields
the same ``data`` payload. Request ids and timestamps live on the envelope.
"""
import base64
import math
from typing import Any, Dict

from faystar.adapters.interfaces.normalizer import ProviderRequest
from faystar.adapters.provider_client import ProviderResponse
from faystar.domain.schemas.envelope import ServiceEnvelope, new_request_id
from faystar.infrastructure.error.handler import ErrorClassification

FRAMES_PER_SECOND = 24


class ResponseAdapter:
    """Builds success and failure envelopes with a per-operation request id prefix."""

    def __init__(self, request_prefix: str = "api"):
        self.request_prefix = request_prefix

    def success(self, data: Any) -> ServiceEnvelope:
        return ServiceEnvelope(
            success=True,
            data=data,
            request_id=new_request_id(self.request_prefix),
        )

    def failure(self, classification: ErrorClassification, source: str) -> ServiceEnvelope:
        return ServiceEnvelope(
            success=False,
            error=f"{source} request failed ({classification.kind.value})",
            error_type=classification.kind.value,
            message=classification.user_message,
            details=classification.details,
            request_id=new_request_id(self.request_prefix),
        )


def encode_binary(content: bytes) -> str:
    """Lossless base64 encoding of a binary provider payload."""
    return base64.b64encode(content).decode("ascii")


def estimate_speech_duration(text: str) -> int:
    """Seconds of speech for text at ~150 words per minute and ~5 characters per word."""
    words = len(text) / 5
    return math.ceil(words / 150 * 60)


def speech_data(response: ProviderResponse, request: ProviderRequest) -> Dict[str, Any]:
    text = request.payload["text"]
    return {
        "audioBase64": encode_binary(response.content),
        "audioFormat": response.content_type.split(";")[0] or "audio/mpeg",
        "audioSize": len(response.content),
        "duration": estimate_speech_duration(text),
        "voiceId": request.endpoint.rsplit("/", 1)[-1],
        "voiceSettings": dict(request.payload["voice_settings"]),
    }


def video_data(response: ProviderResponse, request: ProviderRequest) -> Dict[str, Any]:
    body = response.json() or {}
    return {
        "videoUrl": body["video_url"],
        "providerRequestId": body.get("request_id"),
        "estimatedTime": body.get("estimated_time") or "30-60 seconds",
        "duration": request.payload["num_frames"] // FRAMES_PER_SECOND,
        "aspectRatio": request.payload["aspect_ratio"],
        "prompt": request.payload["prompt"],
    }


def video_status_data(response: ProviderResponse, request: ProviderRequest) -> Dict[str, Any]:
    body = response.json() or {}
    return {
        "requestId": request.endpoint.rsplit("/", 1)[-1],
        "status": body.get("status"),
        "videoUrl": body.get("video_url"),
        "progress": body.get("progress") or 0,
        "estimatedTime": body.get("estimated_time"),
        "createdAt": body.get("created_at"),
    }


def chat_data(response: ProviderResponse, request: ProviderRequest) -> Dict[str, Any]:
    body = response.json()
    return {
        "response": body["choices"][0]["message"]["content"],
        "model": request.payload["model"],
        "usage": body.get("usage"),
    }


def voice_data(response: ProviderResponse, request: ProviderRequest) -> Dict[str, Any]:
    return {
        "audioData": encode_binary(response.content),
        "format": "mp3",
        "voice": request.payload["voice"],
        "speed": request.payload["speed"],
        "text": request.payload["input"],
    }


def image_data(response: ProviderResponse, request: ProviderRequest) -> Dict[str, Any]:
    image = response.json()["data"][0]
    return {
        "imageUrl": image["url"],
        "revisedPrompt": image.get("revised_prompt"),
        "size": request.payload["size"],
        "quality": request.payload["quality"],
        "style": request.payload["style"],
        "prompt": request.payload["prompt"],
    }
