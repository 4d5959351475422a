"""Login rejection exception."""

from typing import Optional

from .base import SessionClientError


class InvalidCredentialsError(SessionClientError):
    """Raised when the backend rejects a login.

    The message is the backend's own diagnostic so it can be shown to the user verbatim.
    """

    def __init__(
        self,
        message: str = "Login failed. Please check your credentials.",
        *,
        status_code: Optional[int] = None,
        reason: str = "rejected",
    ) -> None:
        super().__init__(
            message,
            details={"status_code": status_code, "reason": reason},
        )
        self.status_code = status_code
        self.reason = reason
