"""Environment-based configuration for pixdecode."""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Decoder settings loaded from PIXDECODE_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PIXDECODE_",
        case_sensitive=False,
    )

    # Input limits
    max_image_pixels: int = Field(default=16_777_216, ge=1)
    max_file_size: int = Field(default=209_715_200, ge=1)

    # Source draining
    read_chunk_size: int = Field(default=65_536, ge=1)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


def get_settings() -> Settings:
    """Create and return decoder settings."""
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Install a root handler at the configured level.

    Library modules only create loggers; hosts call this once at startup.
    """
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
