"""Application settings powered by Pydantic BaseSettings."""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from feedcore.fetch.config import FetchConfig
from feedcore.fetch.constants import DEFAULT_TIMEOUT_SECONDS


class AppSettings(BaseSettings):
    """Centralized environment configuration (FEEDCORE_* variables)."""

    model_config = SettingsConfigDict(
        env_prefix="FEEDCORE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    user_agent: str = ""
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0.0, le=300.0)
    enable_etag: bool = True
    enable_compression: bool = True
    log_level: str = "INFO"
    log_json: bool = True

    def fetch_config(self) -> FetchConfig:
        """Build the fetch configuration for a client."""
        return FetchConfig(
            user_agent=self.user_agent,
            timeout_seconds=self.timeout_seconds,
            enable_etag=self.enable_etag,
            enable_compression=self.enable_compression,
        )

    def logging_level(self) -> int:
        """Resolve log_level to a logging constant, defaulting to INFO."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
