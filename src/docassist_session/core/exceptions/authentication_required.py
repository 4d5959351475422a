"""Missing credential exception."""

from typing import Optional

from .base import SessionClientError


class AuthenticationRequired(SessionClientError):
    """Raised when an authenticated call is attempted without a stored credential.

    Never retried automatically and never triggers a forced logout.
    """

    def __init__(
        self,
        message: str = "Authentication required. Please login.",
        *,
        target: Optional[str] = None,
    ) -> None:
        super().__init__(message, details={"target": target})
        self.target = target
