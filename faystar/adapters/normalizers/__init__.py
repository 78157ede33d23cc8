from faystar.adapters.normalizers.openai import (
    ChatRequestNormalizer,
    ImageRequestNormalizer,
    VoiceRequestNormalizer,
)
from faystar.adapters.normalizers.speech import SpeechRequestNormalizer
from faystar.adapters.normalizers.video import VideoRequestNormalizer, VideoStatusNormalizer

__all__ = [
    "ChatRequestNormalizer",
    "ImageRequestNormalizer",
    "VoiceRequestNormalizer",
    "SpeechRequestNormalizer",
    "VideoRequestNormalizer",
    "VideoStatusNormalizer",
]
