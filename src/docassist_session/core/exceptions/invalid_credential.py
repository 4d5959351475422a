"""Empty or undefined credential exception."""

from .base import SessionClientError


class InvalidCredential(SessionClientError):
    """Raised when the credential store is handed an empty or undefined value."""

    def __init__(self, message: str = "Credential cannot be empty") -> None:
        super().__init__(message)
