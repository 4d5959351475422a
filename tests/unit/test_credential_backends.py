"""Tests for the durable credential backends."""

import os
import stat
import sys
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from docassist_session.core.exceptions import CredentialStorageError
from docassist_session.core.protocols import CredentialBackend
from docassist_session.infrastructure.repositories import (
    FileCredentialBackend,
    MemoryCredentialBackend,
    RedisCredentialBackend,
)


class TestMemoryCredentialBackend:
    """Test the in-memory backend."""

    @pytest.mark.asyncio
    async def test_set_get_delete(self):
        backend = MemoryCredentialBackend()

        await backend.set("auth_token", "T1")
        assert await backend.get("auth_token") == "T1"

        await backend.delete("auth_token")
        assert await backend.get("auth_token") is None

    @pytest.mark.asyncio
    async def test_delete_missing_key(self):
        backend = MemoryCredentialBackend()
        await backend.delete("auth_token")

    def test_satisfies_protocol(self):
        assert isinstance(MemoryCredentialBackend(), CredentialBackend)


class TestFileCredentialBackend:
    """Test the file backend."""

    @pytest.mark.asyncio
    async def test_roundtrip_creates_directory(self, tmp_path):
        backend = FileCredentialBackend(tmp_path / "nested" / "store")

        await backend.set("auth_token", "T1")

        assert (tmp_path / "nested" / "store" / "auth_token").read_text() == "T1"
        assert await backend.get("auth_token") == "T1"

    @pytest.mark.asyncio
    async def test_missing_file_reads_as_none(self, tmp_path):
        assert await FileCredentialBackend(tmp_path).get("auth_token") is None

    @pytest.mark.asyncio
    async def test_overwrite_replaces_value(self, tmp_path):
        backend = FileCredentialBackend(tmp_path)

        await backend.set("auth_token", "A")
        await backend.set("auth_token", "B")

        assert await backend.get("auth_token") == "B"
        assert [p.name for p in tmp_path.iterdir()] == ["auth_token"]

    @pytest.mark.asyncio
    async def test_read_strips_trailing_newline(self, tmp_path):
        (tmp_path / "auth_token").write_text("T1\n")

        assert await FileCredentialBackend(tmp_path).get("auth_token") == "T1"

    @pytest.mark.asyncio
    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    async def test_file_is_private(self, tmp_path):
        backend = FileCredentialBackend(tmp_path)

        await backend.set("auth_token", "T1")

        mode = stat.S_IMODE(os.stat(tmp_path / "auth_token").st_mode)
        assert mode == 0o600

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, tmp_path):
        backend = FileCredentialBackend(tmp_path)
        await backend.set("auth_token", "T1")

        await backend.delete("auth_token")
        await backend.delete("auth_token")

        assert await backend.get("auth_token") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["", "..", "a/b"])
    async def test_rejects_path_like_keys(self, tmp_path, key):
        with pytest.raises(ValueError):
            await FileCredentialBackend(tmp_path).get(key)

    @pytest.mark.asyncio
    async def test_os_error_maps_to_storage_error(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        backend = FileCredentialBackend(blocker)

        with pytest.raises(CredentialStorageError) as exc_info:
            await backend.set("auth_token", "T1")

        assert exc_info.value.operation == "set"
        assert exc_info.value.backend == "file"


class TestRedisCredentialBackend:
    """Test the Redis backend against a mocked client."""

    @pytest.fixture
    def redis_client(self):
        client = AsyncMock()
        client.get = AsyncMock(return_value=None)
        client.set = AsyncMock(return_value=True)
        client.delete = AsyncMock(return_value=1)
        return client

    @pytest.mark.asyncio
    async def test_keys_are_prefixed(self, redis_client):
        backend = RedisCredentialBackend(redis_client, key_prefix="app")

        await backend.set("auth_token", "T1")
        await backend.delete("auth_token")

        redis_client.set.assert_awaited_once_with("app:auth_token", "T1")
        redis_client.delete.assert_awaited_once_with("app:auth_token")

    @pytest.mark.asyncio
    async def test_get_decodes_bytes(self, redis_client):
        redis_client.get.return_value = b"T1"

        assert await RedisCredentialBackend(redis_client).get("auth_token") == "T1"

    @pytest.mark.asyncio
    async def test_get_missing(self, redis_client):
        assert await RedisCredentialBackend(redis_client).get("auth_token") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["get", "set", "delete"])
    async def test_redis_errors_map_to_storage_error(self, redis_client, operation):
        getattr(redis_client, operation).side_effect = RedisConnectionError("down")
        backend = RedisCredentialBackend(redis_client)

        with pytest.raises(CredentialStorageError) as exc_info:
            if operation == "set":
                await backend.set("auth_token", "T1")
            else:
                await getattr(backend, operation)("auth_token")

        assert exc_info.value.operation == operation
        assert isinstance(exc_info.value.__cause__, RedisConnectionError)

    def test_requires_client(self):
        with pytest.raises(ValueError):
            RedisCredentialBackend(None)
