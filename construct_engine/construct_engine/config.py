"""Runtime configuration loaded from environment variables."""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.checklyhq.com"
DEFAULT_API_VERSION = "next"


class PlatformEnv(str, Enum):
    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with CHECKPLANE_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="CHECKPLANE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    env: PlatformEnv = PlatformEnv.PROD
    debug: bool = False

    # Monitoring API
    api_url: str = DEFAULT_API_URL
    api_key: SecretStr | None = None
    account_id: str | None = None
    api_version: str = DEFAULT_API_VERSION
    request_timeout: float = 30.0

    # Logging
    structured_logging: bool = False
    log_level: str = "WARNING"

    @field_validator("api_key", mode="before")
    @classmethod
    def mask_key_in_repr(cls, v: str | None) -> SecretStr | None:
        if v is None or v == "":
            return None
        if isinstance(v, SecretStr):
            return v
        return SecretStr(v)

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    def is_api_configured(self) -> bool:
        return self.api_key is not None and self.account_id is not None


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info("Loaded settings for environment: %s", settings.env.value)

    return settings
