"""Current user fetch failure exception."""

from .base import SessionClientError


class ProfileFetchError(SessionClientError):
    """Raised when the current user profile cannot be fetched.

    The original failure is chained as ``__cause__``.
    """

    def __init__(self, message: str = "Failed to fetch current user") -> None:
        super().__init__(message)
