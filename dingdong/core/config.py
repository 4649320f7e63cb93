"""Application settings and configuration helpers."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly-typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DINGDONG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = Field(default="Ding Dong", description="Human-readable service name.")

    host: str = Field(default="0.0.0.0", description="Host to listen on.")
    port: int = Field(default=61001, ge=0, le=65535, description="Port to listen on.")

    workers: int = Field(
        default=25,
        ge=0,
        description="Number of body-processing worker threads.",
    )
    queue_size: int = Field(
        default=10000,
        ge=1,
        description="Maximum queue size for body processing.",
    )
    max_body_size_mb: int = Field(
        default=100,
        ge=1,
        description="Maximum request body size in MB.",
    )

    log_level: str = Field(default="INFO", description="Application log level.")
    graceful_shutdown_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds to wait for in-flight requests on shutdown. Unbounded when omitted.",
    )

    @property
    def max_body_size_bytes(self) -> int:
        return self.max_body_size_mb * 1024 * 1024

    @property
    def listen_address(self) -> str:
        return f"{self.host}:{self.port}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()
