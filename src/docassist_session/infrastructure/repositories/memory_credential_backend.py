"""In-memory credential backend."""

from typing import Dict, Optional


class MemoryCredentialBackend:
    """Process-local backend; nothing survives a restart.

    Used for tests and for short-lived scripts that do not need a durable session.
    """

    backend_name = "memory"

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    async def delete(self, key: str) -> None:
        self._values.pop(key, None)
