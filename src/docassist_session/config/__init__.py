"""Configuration for the session client: settings, constants and logging."""

from .constants import (
    HttpMethod,
    StorageBackend,
    AuthEndpoints,
    BEARER_PREFIX,
    FORCED_LOGOUT_REASON,
)
from .logging_config import LoggingConfig, setup_logging, get_logger
from .settings import SessionSettings, get_settings

__all__ = [
    "HttpMethod",
    "StorageBackend",
    "AuthEndpoints",
    "BEARER_PREFIX",
    "FORCED_LOGOUT_REASON",
    "LoggingConfig",
    "setup_logging",
    "get_logger",
    "SessionSettings",
    "get_settings",
]
