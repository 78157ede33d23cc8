"""
Wiring of provider clients and services for one application instance.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from faystar.adapters.provider_client import ProviderClient
from faystar.adapters.providers import ProviderRegistry, default_registry
from faystar.core.config import Settings
from faystar.infrastructure.auth.passwords import PasswordHasher
from faystar.infrastructure.auth.tokens import TokenService
from faystar.infrastructure.error.handler import ErrorHandler
from faystar.infrastructure.repositories.memory_user_repository import InMemoryUserRepository
from faystar.services.ai_service import AIService, build_ai_fallbacks
from faystar.services.analysis import StubTextAnalyzer
from faystar.services.auth_service import AuthService
from faystar.services.speech_service import SpeechService
from faystar.services.video_service import VideoService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    ai: AIService
    video: VideoService
    speech: SpeechService
    analyzer: StubTextAnalyzer
    auth: AuthService
    tokens: TokenService
    clients: List[ProviderClient] = field(default_factory=list)

    async def aclose(self) -> None:
        for client in self.clients:
            await client.aclose()
        logger.info("Provider clients closed")


def build_container(
    settings: Settings,
    http_client: Optional[httpx.AsyncClient] = None,
    rng: Optional[random.Random] = None,
    registry: Optional[ProviderRegistry] = None,
) -> ServiceContainer:
    """
    Build every provider client and service from settings.

    Args:
        settings: Application settings
        http_client: Shared HTTP client for all providers; each client creates its own when omitted
        rng: Random source for seeds, fallback picks and stub analysis
        registry: Provider registry; the built-in providers when omitted
    """
    registry = registry or default_registry()
    rng = rng or random.Random()
    error_handler = ErrorHandler(logging.getLogger("faystar.providers"))

    openai = registry.create_client("openai", settings, http_client)
    fal = registry.create_client("fal", settings, http_client)
    elevenlabs = registry.create_client("elevenlabs", settings, http_client)

    fallbacks = None
    if settings.AI_FALLBACK_ENABLED:
        fallbacks = build_ai_fallbacks(logging.getLogger("faystar.fallback"), rng)

    tokens = TokenService(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )

    return ServiceContainer(
        ai=AIService(openai, error_handler, fallbacks),
        video=VideoService(fal, error_handler, rng),
        speech=SpeechService(elevenlabs, error_handler),
        analyzer=StubTextAnalyzer(rng),
        auth=AuthService(InMemoryUserRepository(), PasswordHasher(settings.BCRYPT_ROUNDS), tokens),
        tokens=tokens,
        clients=[openai, fal, elevenlabs],
    )
