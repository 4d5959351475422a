"""
Session client settings.
Loads configuration from environment variables (prefix ``DOCASSIST_``) and an optional .env file.
"""
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import ConfigurationError
from .constants import (
    AuthEndpoints,
    StorageBackend,
    DEFAULT_TOKEN_STORAGE_KEY,
    DEFAULT_TOKEN_ROTATION_HEADER,
    DEFAULT_FORCED_LOGOUT_CHANNEL,
    DEFAULT_EXPIRY_ERROR_CODES,
    DEFAULT_EXPIRY_MARKERS,
    DEFAULT_NON_REFRESHABLE_MARKERS,
)

logger = logging.getLogger(__name__)


class SessionSettings(BaseSettings):
    """Settings for the authentication session client."""

    model_config = SettingsConfigDict(
        env_prefix="DOCASSIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Backend
    api_base_url: str = Field(
        default="http://localhost:3000/api",
        description="Base URL of the REST backend"
    )
    request_timeout_seconds: float = Field(
        default=15.0,
        description="Timeout applied to every HTTP request"
    )

    # Credential storage
    token_storage_key: str = Field(default=DEFAULT_TOKEN_STORAGE_KEY)
    storage_backend: StorageBackend = Field(default=StorageBackend.FILE)
    token_storage_dir: Path = Field(default=Path("~/.docassist"))
    redis_url: Optional[str] = Field(default=None)

    # Token rotation and refresh
    token_rotation_header: str = Field(
        default=DEFAULT_TOKEN_ROTATION_HEADER,
        description="Response header carrying a replacement credential"
    )
    expiry_error_codes: Tuple[str, ...] = Field(default=DEFAULT_EXPIRY_ERROR_CODES)
    expiry_markers: Tuple[str, ...] = Field(default=DEFAULT_EXPIRY_MARKERS)
    non_refreshable_markers: Tuple[str, ...] = Field(default=DEFAULT_NON_REFRESHABLE_MARKERS)

    # Forced logout relay
    enable_forced_logout_relay: bool = Field(default=False)
    forced_logout_channel: str = Field(default=DEFAULT_FORCED_LOGOUT_CHANNEL)

    # Endpoint paths
    login_path: str = Field(default=AuthEndpoints.LOGIN)
    logout_path: str = Field(default=AuthEndpoints.LOGOUT)
    refresh_path: str = Field(default=AuthEndpoints.REFRESH)
    me_path: str = Field(default=AuthEndpoints.ME)
    register_path: str = Field(default=AuthEndpoints.REGISTER)
    register_patient_path: str = Field(default=AuthEndpoints.REGISTER_PATIENT)

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"Invalid api_base_url format: {value}")
        return value.rstrip("/")

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        return value

    @field_validator("token_storage_key", "token_rotation_header", "forced_logout_channel")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Value cannot be blank")
        return value.strip()

    @property
    def resolved_token_storage_dir(self) -> Path:
        """Token storage directory with ``~`` expanded."""
        return self.token_storage_dir.expanduser()

    @property
    def needs_redis(self) -> bool:
        """Whether any selected feature depends on Redis."""
        return self.storage_backend == StorageBackend.REDIS or self.enable_forced_logout_relay

    def require_redis_url(self) -> str:
        """Return the Redis URL or fail when a Redis feature is selected without one.

        Raises:
            ConfigurationError: If Redis is needed but no URL is configured
        """
        if not self.redis_url:
            raise ConfigurationError(
                "redis_url is required when storage_backend=redis or the forced-logout relay is enabled",
                details={
                    "storage_backend": self.storage_backend.value,
                    "enable_forced_logout_relay": self.enable_forced_logout_relay,
                },
            )
        return self.redis_url


@lru_cache()
def get_settings() -> SessionSettings:
    """Get cached settings instance."""
    settings = SessionSettings()
    logger.debug("Loaded session settings for %s", settings.api_base_url)
    return settings
