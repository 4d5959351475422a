"""Redis credential backend."""

import logging
from typing import Optional

from redis.exceptions import RedisError

from ...core.exceptions import CredentialStorageError

logger = logging.getLogger(__name__)


class RedisCredentialBackend:
    """Redis credential backend following maximum separation principle.

    Handles ONLY Redis storage of the credential string. Does not handle
    normalization, caching or verification - that's the credential store.
    """

    backend_name = "redis"

    def __init__(self, redis_client, key_prefix: str = "docassist_session"):
        """Initialize Redis credential backend.

        Args:
            redis_client: ``redis.asyncio`` client instance
            key_prefix: Prefix for credential keys in Redis
        """
        if not redis_client:
            raise ValueError("Redis client is required")
        self.redis = redis_client
        self.key_prefix = key_prefix

    def _make_key(self, key: str) -> str:
        return f"{self.key_prefix}:{key}"

    async def get(self, key: str) -> Optional[str]:
        try:
            value = await self.redis.get(self._make_key(key))
        except RedisError as e:
            logger.error(f"Failed to read credential from Redis: {e}")
            raise CredentialStorageError(
                "Credential could not be read from Redis",
                operation="get",
                backend=self.backend_name,
            ) from e

        if value is None:
            return None
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        try:
            await self.redis.set(self._make_key(key), value)
        except RedisError as e:
            logger.error(f"Failed to write credential to Redis: {e}")
            raise CredentialStorageError(
                "Credential could not be written to Redis",
                operation="set",
                backend=self.backend_name,
            ) from e

    async def delete(self, key: str) -> None:
        try:
            await self.redis.delete(self._make_key(key))
        except RedisError as e:
            logger.error(f"Failed to delete credential from Redis: {e}")
            raise CredentialStorageError(
                "Credential could not be deleted from Redis",
                operation="delete",
                backend=self.backend_name,
            ) from e

    async def close(self) -> None:
        """Close the underlying Redis connection."""
        await self.redis.aclose()
