"""Terminal session failure exception."""

from typing import Optional

from .base import SessionClientError


class SessionExpired(SessionClientError):
    """Raised when the refresh machinery cannot recover a logical call.

    Always paired with a forced-logout broadcast carrying the same reason.
    """

    def __init__(
        self,
        message: str = "Session has expired",
        *,
        target: Optional[str] = None,
        diagnostic: Optional[str] = None,
        refresh_attempted: bool = False,
    ) -> None:
        super().__init__(
            message,
            details={
                "target": target,
                "diagnostic": diagnostic,
                "refresh_attempted": refresh_attempted,
            },
        )
        self.target = target
        self.diagnostic = diagnostic
        self.refresh_attempted = refresh_attempted
