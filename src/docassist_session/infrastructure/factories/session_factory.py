"""Session stack factory.

Wires credential store, executor, broadcaster, guard, API client and facade
from ``SessionSettings``. Collaborators passed in explicitly are used as-is
and are not closed by ``SessionStack.aclose()``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

import httpx
import redis.asyncio as redis

from ...application.extraction import ExpiryClassifier
from ...application.services import CredentialStore, SessionFacade, SessionGuard
from ...config.constants import StorageBackend
from ...config.settings import SessionSettings, get_settings
from ...core.protocols import CredentialBackend, Navigator
from ..broadcasting import ForcedLogoutBroadcaster, RedisForcedLogoutRelay
from ..http import ApiClient, RequestExecutor
from ..repositories import (
    FileCredentialBackend,
    MemoryCredentialBackend,
    RedisCredentialBackend,
)

logger = logging.getLogger(__name__)


@dataclass
class SessionStack:
    """Every component of a wired session client."""

    settings: SessionSettings
    credential_store: CredentialStore
    executor: RequestExecutor
    broadcaster: ForcedLogoutBroadcaster
    guard: SessionGuard
    api: ApiClient
    facade: SessionFacade
    relay: Optional[RedisForcedLogoutRelay] = None
    _owned_http_client: Optional[httpx.AsyncClient] = field(default=None, repr=False)
    _owned_redis_client: Optional[Any] = field(default=None, repr=False)

    async def aclose(self) -> None:
        """Release the facade subscription, the relay and any owned clients."""
        self.facade.close()
        if self.relay is not None:
            await self.relay.stop()
        if self._owned_http_client is not None:
            await self._owned_http_client.aclose()
        if self._owned_redis_client is not None:
            await self._owned_redis_client.aclose()
        logger.debug("Session stack closed")


def create_credential_backend(
    settings: SessionSettings,
    redis_client: Optional[Any] = None,
) -> CredentialBackend:
    """Create the durable backend selected by ``settings.storage_backend``."""
    if settings.storage_backend == StorageBackend.MEMORY:
        return MemoryCredentialBackend()
    if settings.storage_backend == StorageBackend.FILE:
        return FileCredentialBackend(settings.resolved_token_storage_dir)
    if redis_client is None:
        raise ValueError("Redis client is required for the redis storage backend")
    return RedisCredentialBackend(redis_client)


async def create_session_stack(
    settings: Optional[SessionSettings] = None,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    backend: Optional[CredentialBackend] = None,
    redis_client: Optional[Any] = None,
    navigator: Optional[Navigator] = None,
) -> SessionStack:
    """Build a complete session client.

    Args:
        settings: Settings to use; defaults to ``get_settings()``
        http_client: Pre-configured HTTP client (for example with a mock transport)
        backend: Credential backend overriding ``settings.storage_backend``
        redis_client: ``redis.asyncio`` client for the Redis backend and relay
        navigator: Collaborator that returns the user to the login entry point

    Raises:
        ConfigurationError: If a Redis feature is enabled without ``redis_url``
    """
    settings = settings or get_settings()

    owned_redis = None
    needs_redis = settings.enable_forced_logout_relay or (
        backend is None and settings.storage_backend == StorageBackend.REDIS
    )
    if needs_redis and redis_client is None:
        owned_redis = redis.from_url(settings.require_redis_url())
        redis_client = owned_redis

    owned_http = None
    if http_client is None:
        owned_http = httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout_seconds,
        )
        http_client = owned_http

    if backend is None:
        backend = create_credential_backend(settings, redis_client)

    credential_store = CredentialStore(backend, settings.token_storage_key)
    executor = RequestExecutor(
        credential_store,
        http_client,
        token_rotation_header=settings.token_rotation_header,
    )
    broadcaster = ForcedLogoutBroadcaster()
    guard = SessionGuard(
        executor,
        credential_store,
        broadcaster,
        classifier=ExpiryClassifier(
            expiry_error_codes=settings.expiry_error_codes,
            expiry_markers=settings.expiry_markers,
            non_refreshable_markers=settings.non_refreshable_markers,
        ),
        refresh_path=settings.refresh_path,
    )
    facade = SessionFacade(
        executor,
        guard,
        credential_store,
        broadcaster,
        navigator,
        login_path=settings.login_path,
        logout_path=settings.logout_path,
        me_path=settings.me_path,
        register_path=settings.register_path,
        register_patient_path=settings.register_patient_path,
    )

    relay = None
    if settings.enable_forced_logout_relay:
        relay = RedisForcedLogoutRelay(
            redis_client,
            broadcaster,
            channel=settings.forced_logout_channel,
        )
        await relay.start()

    logger.info(
        f"Session stack created for {settings.api_base_url} "
        f"(storage={credential_store.backend_name}, relay={relay is not None})"
    )

    return SessionStack(
        settings=settings,
        credential_store=credential_store,
        executor=executor,
        broadcaster=broadcaster,
        guard=guard,
        api=ApiClient(guard),
        facade=facade,
        relay=relay,
        _owned_http_client=owned_http,
        _owned_redis_client=owned_redis,
    )
