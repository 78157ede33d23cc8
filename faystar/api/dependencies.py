from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from faystar.core.config import Settings
from faystar.core.exceptions import AuthenticationError
from faystar.core.logging import get_logger
from faystar.services.ai_service import AIService
from faystar.services.analysis import StubTextAnalyzer
from faystar.services.auth_service import AuthService
from faystar.services.container import ServiceContainer
from faystar.services.speech_service import SpeechService
from faystar.services.video_service import VideoService

# Initialize logger
logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_ai_service(container: ServiceContainer = Depends(get_container)) -> AIService:
    return container.ai


def get_video_service(container: ServiceContainer = Depends(get_container)) -> VideoService:
    return container.video


def get_speech_service(container: ServiceContainer = Depends(get_container)) -> SpeechService:
    return container.speech


def get_text_analyzer(container: ServiceContainer = Depends(get_container)) -> StubTextAnalyzer:
    return container.analyzer


def get_auth_service(container: ServiceContainer = Depends(get_container)) -> AuthService:
    return container.auth


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    """
    Verify the bearer token and return its claims.

    Raises:
        AuthenticationError: If the token is missing or invalid
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Token required")
    return container.tokens.verify(credentials.credentials)
