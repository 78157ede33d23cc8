from functools import lru_cache
from typing import List, Optional
import os

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "CHANGEME_IN_PRODUCTION"

class Settings(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # API settings
    PROJECT_NAME: str = "FayStar Backend"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    API_PREFIX: str = "/api"
    DEBUG: bool = False

    # CORS settings, comma separated
    BACKEND_CORS_ORIGINS: str = "http://localhost:3000"

    # Authentication settings
    JWT_SECRET: str = DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 7 * 24 * 60
    BCRYPT_ROUNDS: int = 12

    # Logging settings
    LOG_LEVEL: str = "INFO"
    ENABLE_STRUCTURED_LOGGING: bool = True

    # Provider credentials
    OPENAI_API_KEY: Optional[str] = None
    FAL_KEY: Optional[str] = None
    ELEVENLABS_API_KEY: Optional[str] = None

    # Provider endpoints
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    FAL_BASE_URL: str = "https://fal.run"
    ELEVENLABS_BASE_URL: str = "https://api.elevenlabs.io/v1"

    # External API timeout and retry settings
    PROVIDER_TIMEOUT_SECONDS: float = 60.0
    HEALTH_PROBE_TIMEOUT_SECONDS: float = 5.0
    PROVIDER_MAX_RETRIES: int = 1
    PROVIDER_RETRY_DELAY_SECONDS: float = 2.0
    MIN_API_KEY_LENGTH: int = 10

    # Feature switches
    AI_FALLBACK_ENABLED: bool = True
    ENABLE_TEST_ROUTES: bool = False

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper()

    @field_validator("PROVIDER_MAX_RETRIES")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        """Provider calls are retried at most once."""
        if v < 0 or v > 1:
            raise ValueError("PROVIDER_MAX_RETRIES must be 0 or 1")
        return v

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from the comma separated setting."""
        return [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def uses_default_jwt_secret(self) -> bool:
        return self.JWT_SECRET == DEFAULT_JWT_SECRET


def load_env_file(env_file: str = ".env") -> None:
    """
    Load environment variables from specified .env file.

    Args:
        env_file: Path to the .env file. Defaults to ".env".
    """
    env_path = os.path.join(os.getcwd(), env_file)
    if os.path.exists(env_path):
        load_dotenv(env_path)

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings with caching for efficiency.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
