import random
from typing import Optional

from faystar.adapters.normalizers.video import VideoRequestNormalizer, VideoStatusNormalizer
from faystar.adapters.provider_client import ProviderClient
from faystar.domain.schemas.video import VideoRequest
from faystar.infrastructure.error.handler import ErrorHandler
from faystar.services.base import ProviderBackedService, ServiceResult
from faystar.services.response_adapter import video_data, video_status_data


class VideoService(ProviderBackedService):
    """Video generation through Fal.ai."""

    def __init__(
        self,
        client: ProviderClient,
        error_handler: ErrorHandler,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(client, error_handler)
        self.generate_normalizer = VideoRequestNormalizer(rng)
        self.status_normalizer = VideoStatusNormalizer()

    async def generate(self, request: VideoRequest) -> ServiceResult:
        return await self._invoke(
            "video.generate", self.generate_normalizer, request, video_data, request_prefix="video"
        )

    async def get_status(self, request_id: str) -> ServiceResult:
        return await self._invoke(
            "video.status", self.status_normalizer, request_id, video_status_data, request_prefix="video"
        )
