"""Storage-layer fault exception."""

from typing import Optional

from .base import SessionClientError


class CredentialStorageError(SessionClientError):
    """Raised when the durable credential backend fails.

    Readers treat this as "no credential"; writers decide whether to retry.
    """

    def __init__(
        self,
        message: str = "Credential storage failed",
        *,
        operation: Optional[str] = None,
        backend: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            details={"operation": operation, "backend": backend},
        )
        self.operation = operation
        self.backend = backend
