"""
Centralized application settings using Pydantic.

All environment variables are read once at startup and validated.
Use this instead of scattered os.getenv() calls throughout the codebase.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from relay.core.config import (
    CASE_REFERENCE_FIELDS,
    DEFAULT_CONSULADO,
    EXTERIORES_BASE_URL,
    UPSTREAM_MAX_REDIRECTS,
    UPSTREAM_TIMEOUT_SECONDS,
)


class Settings(BaseSettings):
    """Server, logging and upstream configuration."""

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    UPSTREAM_BASE_URL: str = EXTERIORES_BASE_URL
    UPSTREAM_TIMEOUT_SECONDS: float = UPSTREAM_TIMEOUT_SECONDS
    UPSTREAM_MAX_REDIRECTS: int = UPSTREAM_MAX_REDIRECTS
    UPSTREAM_VERIFY_SSL: bool = True

    DEFAULT_CONSULADO: str = DEFAULT_CONSULADO
    CASE_REFERENCE_FIELDS: list[str] = list(CASE_REFERENCE_FIELDS)
    DEBUG_ENDPOINT_ENABLED: bool = True

    model_config = SettingsConfigDict(
        case_sensitive=True, env_file=".env", extra="ignore"
    )


# Singleton instance - loaded once at module import
settings = Settings()
