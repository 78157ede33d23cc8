import random
import re
from typing import Optional

from faystar.adapters.interfaces.normalizer import ProviderRequest, RequestNormalizer
from faystar.core.exceptions import ValidationException
from faystar.domain.schemas.video import VideoRequest

MAX_PROMPT_LENGTH = 1000
DEFAULT_DURATION = 5
MIN_DURATION, MAX_DURATION = 1, 20
FRAMES_PER_SECOND = 24
ASPECT_RATIOS = ("16:9", "9:16", "1:1", "4:3", "21:9")
DEFAULT_ASPECT_RATIO = "16:9"
GENERATE_ENDPOINT = "/fal-ai/pika-1.0"
REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
NEGATIVE_PROMPT = (
    "low quality, worst quality, bad anatomy, bad hands, text, error, missing fingers, "
    "extra digit, fewer digits, cropped, worst quality, low quality, normal quality, "
    "jpeg artifacts, signature, watermark, username, blurry"
)


class VideoRequestNormalizer(RequestNormalizer[VideoRequest]):
    """
    Fal.ai Pika video generation.

    The generation seed is drawn from ``rng`` so runs can be made reproducible.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def normalize(self, request: VideoRequest) -> ProviderRequest:
        prompt = self.require_text(request.prompt, "prompt", MAX_PROMPT_LENGTH)
        duration = self.require_range(
            request.duration, "duration", MIN_DURATION, MAX_DURATION, DEFAULT_DURATION
        )
        if not isinstance(duration, int):
            raise ValidationException("duration must be an integer", field="duration")
        aspect_ratio = self.require_choice(
            request.aspect_ratio, "aspectRatio", ASPECT_RATIOS, DEFAULT_ASPECT_RATIO
        )

        payload = {
            "prompt": prompt,
            "num_frames": duration * FRAMES_PER_SECOND,
            "aspect_ratio": aspect_ratio,
            "guidance_scale": 7.5,
            "num_inference_steps": 50,
            "negative_prompt": NEGATIVE_PROMPT,
            "seed": self.rng.randrange(1_000_000),
        }
        return ProviderRequest(endpoint=GENERATE_ENDPOINT, payload=payload)


class VideoStatusNormalizer(RequestNormalizer[str]):
    """Status lookup for a previously submitted generation."""

    def normalize(self, request: str) -> ProviderRequest:
        request_id = self.require_text(request, "requestId", 256)
        if not REQUEST_ID_PATTERN.fullmatch(request_id):
            raise ValidationException("Invalid request ID format", field="requestId")
        return ProviderRequest(endpoint=f"{GENERATE_ENDPOINT}/status/{request_id}", method="GET")
