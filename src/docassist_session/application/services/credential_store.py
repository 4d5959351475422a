"""Credential store for the session client."""

import logging
from typing import Any, Optional

from ...core.exceptions import CredentialStorageError, InvalidCredential
from ...core.protocols import CredentialBackend
from ...core.value_objects import Credential
from ...config.constants import DEFAULT_TOKEN_STORAGE_KEY

logger = logging.getLogger(__name__)

# Marks the in-memory copy as not yet hydrated from the durable backend
_UNLOADED = object()


class CredentialStore:
    """Sole owner of the bearer credential.

    Keeps an in-memory copy in front of a durable backend. The in-memory copy
    is updated synchronously before any backend await, and once it has been
    set (by a write, a clear, or the first hydration) it is authoritative for
    the rest of the process. The backend is only consulted to hydrate a fresh
    process.

    Writes are last-writer-wins; no lock is taken.
    """

    def __init__(
        self,
        backend: CredentialBackend,
        storage_key: str = DEFAULT_TOKEN_STORAGE_KEY,
    ):
        """Initialize credential store.

        Args:
            backend: Durable storage backend
            storage_key: Well-known key the credential lives under
        """
        if backend is None:
            raise ValueError("Credential backend is required")
        if not storage_key:
            raise ValueError("Storage key cannot be empty")

        self._backend = backend
        self._storage_key = storage_key
        self._cached: Any = _UNLOADED

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def backend_name(self) -> str:
        return getattr(self._backend, "backend_name", type(self._backend).__name__)

    async def store(self, credential: Any) -> Credential:
        """Persist a credential, replacing any previous one.

        Args:
            credential: Raw token string (a ``Bearer`` prefix is stripped) or Credential

        Returns:
            The normalized credential that was stored

        Raises:
            InvalidCredential: If the value is empty, undefined or malformed
            CredentialStorageError: If the durable write fails; the in-memory
                copy still holds the new value
        """
        normalized = Credential.from_raw(credential)

        self._cached = normalized
        await self._backend.set(self._storage_key, normalized.value)

        logger.debug(f"Stored credential {normalized.mask_for_logging()} in {self.backend_name} backend")
        return normalized

    async def read(self) -> Optional[Credential]:
        """Return the current credential, or None when absent.

        Raises:
            CredentialStorageError: Only for a genuine storage fault while
                hydrating; callers treat this as "absent"
        """
        if self._cached is not _UNLOADED:
            return self._cached

        raw = await self._backend.get(self._storage_key)

        # A store() or clear() that ran while we were awaiting wins
        if self._cached is not _UNLOADED:
            return self._cached

        if raw is None:
            self._cached = None
            return None

        try:
            credential = Credential.from_raw(raw)
        except InvalidCredential:
            logger.warning("Discarding empty or malformed stored credential")
            self._cached = None
            await self._discard_stored_value()
            return None

        self._cached = credential
        return credential

    async def clear(self) -> None:
        """Remove the credential from memory and durable storage.

        Idempotent. After this resolves, ``read()`` returns None. If the
        backend still reports a value right after the delete, the delete is
        attempted once more.

        Raises:
            CredentialStorageError: If the durable delete fails; the in-memory
                copy is already cleared
        """
        self._cached = None
        await self._backend.delete(self._storage_key)

        leftover = await self._backend.get(self._storage_key)
        # Only re-delete if nobody stored a new credential in the meantime
        if leftover is not None and self._cached is None:
            logger.warning("Credential still present after clearing, trying again")
            await self._backend.delete(self._storage_key)

        logger.debug(f"Cleared credential from {self.backend_name} backend")

    async def has_credential(self) -> bool:
        """Check if a credential exists without exposing its value."""
        try:
            return await self.read() is not None
        except CredentialStorageError as e:
            logger.error(f"Credential check failed, treating as absent: {e}")
            return False

    async def _discard_stored_value(self) -> None:
        try:
            await self._backend.delete(self._storage_key)
        except CredentialStorageError as e:
            logger.error(f"Failed to discard malformed stored credential: {e}")
