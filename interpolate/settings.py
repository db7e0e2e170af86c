"""Application settings loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven configuration with sensible defaults."""

    log_level: str = Field(default="info", alias="LOG_LEVEL")
    metrics_enabled: bool = Field(default=True, alias="METRICS_ENABLED")
    require_api_key: bool = Field(default=False, alias="REQUIRE_API_KEY")
    api_key: str | None = Field(default=None, alias="API_KEY")
    max_template_chars: int = Field(default=65536, alias="MAX_TEMPLATE_CHARS")
    max_request_size_bytes: int = Field(default=262144, alias="MAX_REQUEST_SIZE_BYTES")
    request_timeout_seconds: float = Field(default=2.0, alias="REQUEST_TIMEOUT_SECONDS")
    max_concurrent_parse_requests: int = Field(default=16, alias="MAX_CONCURRENT_PARSE_REQUESTS")
    service_version: str = Field(default="0.1.0", alias="SERVICE_VERSION")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
