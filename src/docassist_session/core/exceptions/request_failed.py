"""Pass-through request failures.

These surface non-session outcomes to callers unchanged. They never
trigger a refresh or a forced logout.
"""

from typing import Any, Dict, Optional

from .base import SessionClientError


class RequestFailed(SessionClientError):
    """Base class for failures that are not session problems."""

    def __init__(
        self,
        message: str,
        *,
        target: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details={"target": target, **(details or {})})
        self.target = target


class HttpStatusError(RequestFailed):
    """The backend answered with a non-2xx, non-401 status."""

    def __init__(
        self,
        status_code: int,
        diagnostic: str,
        *,
        target: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            diagnostic,
            target=target,
            details={"status_code": status_code},
        )
        self.status_code = status_code
        self.diagnostic = diagnostic
        self.payload = payload or {}


class NetworkUnavailable(RequestFailed):
    """The request never produced an HTTP response."""

    def __init__(
        self,
        cause: BaseException,
        *,
        target: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Network error: {cause}",
            target=target,
            details={"cause": type(cause).__name__},
        )
        self.cause = cause
