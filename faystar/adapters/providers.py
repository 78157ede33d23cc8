"""
Provider configurations and the registry that builds provider clients.

Every outbound integration is the same generic client; providers differ
only by base URL, auth-header scheme, credential and status-code table.
"""
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from faystar.core.config import Settings
from faystar.infrastructure.error.handler import DEFAULT_STATUS_TABLE, ErrorKind

logger = logging.getLogger(__name__)

USER_AGENT = "FayStar-Backend/1.0"


class AuthScheme(str, Enum):
    """How the credential is presented to the provider."""
    BEARER = "bearer"   # Authorization: Bearer <key>
    KEY = "key"         # Authorization: Key <key>
    HEADER = "header"   # <auth_header>: <key>


class ProviderConfig(BaseModel):
    """Static configuration for one provider client."""
    model_config = ConfigDict(frozen=True)

    name: str
    base_url: str
    auth_scheme: AuthScheme = AuthScheme.BEARER
    auth_header: str = "Authorization"
    credential_env_var: str
    credential: Optional[str] = Field(default=None, repr=False)
    timeout: float = 60.0
    health_timeout: float = 5.0
    health_endpoint: str = "/health"
    max_retries: int = Field(default=1, ge=0, le=1)
    retry_delay: float = 2.0
    min_key_length: int = 10
    status_table: Dict[int, ErrorKind] = Field(default_factory=lambda: dict(DEFAULT_STATUS_TABLE))
    user_agent: str = USER_AGENT

    def auth_headers(self) -> Dict[str, str]:
        """Headers that carry the credential."""
        if not self.credential:
            return {}
        if self.auth_scheme == AuthScheme.BEARER:
            return {self.auth_header: f"Bearer {self.credential}"}
        if self.auth_scheme == AuthScheme.KEY:
            return {self.auth_header: f"Key {self.credential}"}
        return {self.auth_header: self.credential}


def _common(settings: Settings) -> dict:
    return {
        "timeout": settings.PROVIDER_TIMEOUT_SECONDS,
        "health_timeout": settings.HEALTH_PROBE_TIMEOUT_SECONDS,
        "max_retries": settings.PROVIDER_MAX_RETRIES,
        "retry_delay": settings.PROVIDER_RETRY_DELAY_SECONDS,
        "min_key_length": settings.MIN_API_KEY_LENGTH,
    }


def openai_config(settings: Settings) -> ProviderConfig:
    return ProviderConfig(
        name="openai",
        base_url=settings.OPENAI_BASE_URL,
        auth_scheme=AuthScheme.BEARER,
        credential_env_var="OPENAI_API_KEY",
        credential=settings.OPENAI_API_KEY,
        health_endpoint="/models",
        **_common(settings),
    )


def fal_config(settings: Settings) -> ProviderConfig:
    return ProviderConfig(
        name="fal",
        base_url=settings.FAL_BASE_URL,
        auth_scheme=AuthScheme.KEY,
        credential_env_var="FAL_KEY",
        credential=settings.FAL_KEY,
        health_endpoint="/health",
        **_common(settings),
    )


def elevenlabs_config(settings: Settings) -> ProviderConfig:
    return ProviderConfig(
        name="elevenlabs",
        base_url=settings.ELEVENLABS_BASE_URL,
        auth_scheme=AuthScheme.HEADER,
        auth_header="xi-api-key",
        credential_env_var="ELEVENLABS_API_KEY",
        credential=settings.ELEVENLABS_API_KEY,
        health_endpoint="/voices",
        **_common(settings),
    )


class ProviderRegistry:
    """
    Registry of provider configuration builders.
    Maps provider names to functions that derive a ProviderConfig from Settings.
    """

    def __init__(self):
        self._builders: Dict[str, Callable[[Settings], ProviderConfig]] = {}

    def register(self, name: str, builder: Callable[[Settings], ProviderConfig]) -> None:
        """
        Register a provider configuration builder.

        Raises:
            ValueError: If the name is invalid or already registered
        """
        if not name or not isinstance(name, str):
            raise ValueError("Provider name must be a non-empty string")
        if name in self._builders:
            raise ValueError(f"Provider '{name}' is already registered")
        self._builders[name] = builder
        logger.debug(f"Registered provider: {name}")

    def list(self) -> List[str]:
        return list(self._builders.keys())

    def is_registered(self, name: str) -> bool:
        return name in self._builders

    def create_client(
        self,
        name: str,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Build the client for a registered provider.

        Args:
            name: Registered provider name
            settings: Application settings
            http_client: Optional pre-built HTTP client (tests inject a mock transport here)

        Raises:
            ValueError: If the provider is not registered
        """
        from faystar.adapters.provider_client import ProviderClient

        builder = self._builders.get(name)
        if builder is None:
            raise ValueError(f"Unsupported provider: {name}")
        return ProviderClient(builder(settings), http_client=http_client)


def default_registry() -> ProviderRegistry:
    """Registry with the three built-in providers."""
    registry = ProviderRegistry()
    registry.register("openai", openai_config)
    registry.register("fal", fal_config)
    registry.register("elevenlabs", elevenlabs_config)
    return registry
