"""Durable credential storage protocol contract."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class CredentialBackend(Protocol):
    """Protocol for durable storage of a single opaque string under one key.

    Defines ONLY the storage contract. The credential store layers the
    in-memory fast path and the verification logic on top.
    """

    @property
    def backend_name(self) -> str:
        """Short name used in logs and error details."""
        ...

    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when nothing is stored.

        Raises:
            CredentialStorageError: On a genuine storage fault
        """
        ...

    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            CredentialStorageError: On a genuine storage fault
        """
        ...

    async def delete(self, key: str) -> None:
        """Remove key. Removing a missing key is not an error.

        Raises:
            CredentialStorageError: On a genuine storage fault
        """
        ...
