"""Credential persistence failure exception."""

from .base import SessionClientError


class SessionPersistError(SessionClientError):
    """Raised when a credential was obtained but could not be durably stored.

    Treated as a login failure: an unstored credential is useless.
    """

    def __init__(
        self,
        message: str = "Login succeeded but the session could not be saved",
        *,
        attempts: int = 2,
    ) -> None:
        super().__init__(message, details={"attempts": attempts})
        self.attempts = attempts
