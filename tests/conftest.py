"""Pytest configuration and fixtures for docassist-session tests."""

from unittest.mock import MagicMock

import httpx
import pytest
import pytest_asyncio

from docassist_session.application.services import (
    CredentialStore,
    SessionFacade,
    SessionGuard,
)
from docassist_session.infrastructure.broadcasting import ForcedLogoutBroadcaster
from docassist_session.infrastructure.http import ApiClient, RequestExecutor
from docassist_session.infrastructure.repositories import MemoryCredentialBackend

from .stubs import API_BASE_URL, StubBackend


@pytest.fixture
def stub_backend():
    """Scripted backend with no routes."""
    return StubBackend()


@pytest_asyncio.fixture
async def http_client(stub_backend):
    """HTTP client wired to the stub backend."""
    client = httpx.AsyncClient(
        base_url=API_BASE_URL,
        transport=httpx.MockTransport(stub_backend.handler),
    )
    yield client
    await client.aclose()


@pytest.fixture
def memory_backend():
    """Empty in-memory credential backend."""
    return MemoryCredentialBackend()


@pytest.fixture
def credential_store(memory_backend):
    """Credential store over the in-memory backend."""
    return CredentialStore(memory_backend)


@pytest.fixture
def executor(credential_store, http_client):
    """Request executor against the stub backend."""
    return RequestExecutor(credential_store, http_client)


@pytest.fixture
def broadcaster():
    """Fresh forced-logout broadcaster."""
    return ForcedLogoutBroadcaster()


@pytest.fixture
def guard(executor, credential_store, broadcaster):
    """Session guard over the real executor."""
    return SessionGuard(executor, credential_store, broadcaster)


@pytest.fixture
def api_client(guard):
    """Verb-level API client."""
    return ApiClient(guard)


@pytest.fixture
def navigator():
    """Navigation collaborator."""
    return MagicMock()


@pytest.fixture
def facade(executor, guard, credential_store, broadcaster, navigator):
    """Session facade wired to the stub backend."""
    session = SessionFacade(executor, guard, credential_store, broadcaster, navigator)
    yield session
    session.close()


@pytest.fixture
def forced_logouts(broadcaster):
    """Events published on the broadcaster, in order."""
    received = []
    unsubscribe = broadcaster.subscribe(received.append)
    yield received
    unsubscribe()
