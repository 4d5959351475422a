"""Constants shared across the session client."""

from enum import Enum


class HttpMethod(str, Enum):
    """HTTP request methods accepted by the request executor."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class StorageBackend(str, Enum):
    """Durable credential storage backends."""
    MEMORY = "memory"
    FILE = "file"
    REDIS = "redis"


class AuthEndpoints:
    """Default backend authentication endpoint paths."""
    LOGIN = "/auth/login"
    LOGOUT = "/auth/logout"
    REFRESH = "/auth/refresh-token"
    ME = "/auth/me"
    REGISTER = "/auth/register"
    REGISTER_PATIENT = "/auth/register/patient"


DEFAULT_TOKEN_STORAGE_KEY = "auth_token"
DEFAULT_TOKEN_ROTATION_HEADER = "X-Refreshed-Token"
DEFAULT_FORCED_LOGOUT_CHANNEL = "docassist:session:forced-logout"
BEARER_PREFIX = "Bearer "
JSON_CONTENT_TYPE = "application/json"

# Structured backend error codes meaning "credential expired"
DEFAULT_EXPIRY_ERROR_CODES = (
    "TOKEN_EXPIRED",
    "token_expired",
    "JWT_EXPIRED",
    "jwt_expired",
)

# Fallback diagnostic markers; matched case-insensitively
DEFAULT_EXPIRY_MARKERS = (
    "expired",
    "invalid token",
    "jwt",
)

# Diagnostics about a missing or malformed credential are never refreshable
DEFAULT_NON_REFRESHABLE_MARKERS = (
    "required",
    "missing",
    "malformed",
    "no token",
    "not found",
)

FORCED_LOGOUT_REASON = "Your session has expired. Please sign in again."
