"""Base exceptions for docassist-session.

All exceptions inherit from SessionClientError and carry an error code and a
details dictionary so callers can log or report them in a structured way.
"""

from typing import Any, Dict, Optional


class SessionClientError(Exception):
    """Base exception for all session client errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(SessionClientError):
    """Raised when session client settings are inconsistent."""


def create_error_response(exception: SessionClientError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The session client exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
