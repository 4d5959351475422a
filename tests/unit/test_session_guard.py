"""Tests for the SessionGuard state machine."""

from unittest.mock import AsyncMock, call

import httpx
import pytest

from docassist_session.application.services import SessionGuard
from docassist_session.config.constants import FORCED_LOGOUT_REASON, HttpMethod
from docassist_session.core.exceptions import (
    AuthenticationRequired,
    CredentialStorageError,
    HttpStatusError,
    NetworkUnavailable,
    SessionExpired,
)
from docassist_session.core.value_objects import (
    Credential,
    NetworkError,
    Ok,
    OtherHttpError,
    Unauthorized,
)

EXPIRED = Unauthorized("Token expired")


@pytest.fixture
def runner():
    """Request runner returning scripted outcomes."""
    return AsyncMock()


@pytest.fixture
def channel():
    return AsyncMock()


@pytest.fixture
def scripted_guard(runner, credential_store, channel):
    return SessionGuard(runner, credential_store, channel)


def target_calls(runner, target):
    return [c for c in runner.execute.await_args_list if c.args[0] == target]


class TestPassThrough:
    """Outcomes that are not session problems."""

    @pytest.mark.asyncio
    async def test_ok_returns_payload(self, scripted_guard, runner, credential_store):
        await credential_store.store("T1")
        runner.execute.return_value = Ok({"ok": True})

        assert await scripted_guard.request("/doctors") == {"ok": True}
        runner.execute.assert_awaited_once_with(
            "/doctors", method=HttpMethod.GET, body=None, requires_auth=True, params=None
        )

    @pytest.mark.asyncio
    async def test_other_http_error_raises_status_error(self, scripted_guard, runner, channel):
        runner.execute.return_value = OtherHttpError(404, "Doctor not found", {"message": "Doctor not found"})

        with pytest.raises(HttpStatusError) as exc_info:
            await scripted_guard.request("/doctors/7")

        assert exc_info.value.status_code == 404
        assert exc_info.value.diagnostic == "Doctor not found"
        channel.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_network_error_raises_network_unavailable(
        self, scripted_guard, runner, channel, credential_store
    ):
        await credential_store.store("T1")
        cause = httpx.ReadTimeout("timed out")
        runner.execute.return_value = NetworkError(cause)

        with pytest.raises(NetworkUnavailable) as exc_info:
            await scripted_guard.request("/doctors")

        assert exc_info.value.cause is cause
        assert await credential_store.has_credential()
        channel.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_authentication_required_propagates(self, scripted_guard, runner, channel):
        runner.execute.side_effect = AuthenticationRequired(target="/doctors")

        with pytest.raises(AuthenticationRequired):
            await scripted_guard.request("/doctors")

        channel.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_401_without_credential_is_plain_status_error(
        self, scripted_guard, runner, channel, credential_store
    ):
        await credential_store.store("T1")
        runner.execute.return_value = EXPIRED

        with pytest.raises(HttpStatusError) as exc_info:
            await scripted_guard.request("/auth/register", HttpMethod.POST, requires_auth=False)

        assert exc_info.value.status_code == 401
        assert await credential_store.has_credential()
        channel.publish.assert_not_awaited()


class TestRefresh:
    """The single refresh-and-retry cycle."""

    @pytest.mark.asyncio
    async def test_refresh_then_retry_succeeds(self, scripted_guard, runner, credential_store):
        await credential_store.store("T1")
        runner.execute.side_effect = [EXPIRED, Ok({"token": "T2"}), Ok({"ok": True})]

        assert await scripted_guard.request("/doctors") == {"ok": True}
        assert (await credential_store.read()).value == "T2"
        assert runner.execute.await_args_list[1] == call(
            "/auth/refresh-token", method=HttpMethod.POST, body={"token": "T1"}, requires_auth=False
        )
        assert len(target_calls(runner, "/doctors")) == 2

    @pytest.mark.asyncio
    async def test_second_unauthorized_is_terminal(
        self, scripted_guard, runner, channel, credential_store
    ):
        await credential_store.store("T1")
        runner.execute.side_effect = [EXPIRED, Ok({"token": "T2"}), EXPIRED]

        with pytest.raises(SessionExpired) as exc_info:
            await scripted_guard.request("/doctors")

        assert exc_info.value.refresh_attempted is True
        assert len(target_calls(runner, "/doctors")) == 2
        assert len(target_calls(runner, "/auth/refresh-token")) == 1
        assert await credential_store.read() is None
        channel.publish.assert_awaited_once_with(FORCED_LOGOUT_REASON, target="/doctors")

    @pytest.mark.asyncio
    async def test_retry_with_other_error_passes_through(self, scripted_guard, runner, channel, credential_store):
        await credential_store.store("T1")
        runner.execute.side_effect = [EXPIRED, Ok({"token": "T2"}), OtherHttpError(500, "boom")]

        with pytest.raises(HttpStatusError):
            await scripted_guard.request("/doctors")

        assert (await credential_store.read()).value == "T2"
        channel.publish.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "refresh_outcome",
        [
            OtherHttpError(403, "Refresh denied"),
            Unauthorized("Token expired"),
            NetworkError(httpx.ConnectError("down")),
            Ok({"success": True}),
            Ok({"token": "has space"}),
        ],
    )
    async def test_failed_refresh_is_terminal(
        self, scripted_guard, runner, channel, credential_store, refresh_outcome
    ):
        await credential_store.store("T1")
        runner.execute.side_effect = [EXPIRED, refresh_outcome]

        with pytest.raises(SessionExpired):
            await scripted_guard.request("/doctors")

        assert len(target_calls(runner, "/doctors")) == 1
        assert await credential_store.read() is None
        channel.publish.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_non_expiry_401_skips_refresh(self, scripted_guard, runner, channel, credential_store):
        await credential_store.store("T1")
        runner.execute.return_value = Unauthorized("Invalid credentials")

        with pytest.raises(SessionExpired) as exc_info:
            await scripted_guard.request("/doctors")

        assert exc_info.value.refresh_attempted is False
        assert exc_info.value.diagnostic == "Invalid credentials"
        runner.execute.assert_awaited_once()
        channel.publish.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_stored_credential_skips_refresh_call(self, scripted_guard, runner, channel):
        runner.execute.return_value = EXPIRED

        with pytest.raises(SessionExpired):
            await scripted_guard.request("/doctors")

        assert target_calls(runner, "/auth/refresh-token") == []
        channel.publish.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_refresh_storage_fault_still_retries(self, runner, channel):
        store = AsyncMock()
        store.read.return_value = Credential("T1")
        store.store.side_effect = CredentialStorageError("disk full", operation="set")
        guard = SessionGuard(runner, store, channel)
        runner.execute.side_effect = [EXPIRED, Ok({"token": "T2"}), Ok({"ok": True})]

        assert await guard.request("/doctors") == {"ok": True}

    @pytest.mark.asyncio
    async def test_terminal_path_survives_clear_fault(self, runner, channel):
        store = AsyncMock()
        store.read.return_value = None
        store.clear.side_effect = CredentialStorageError("io", operation="delete")
        guard = SessionGuard(runner, store, channel)
        runner.execute.return_value = Unauthorized("Invalid credentials")

        with pytest.raises(SessionExpired):
            await guard.request("/doctors")

        store.clear.assert_awaited_once()
        channel.publish.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_custom_refresh_path(self, runner, channel, credential_store):
        await credential_store.store("T1")
        guard = SessionGuard(runner, credential_store, channel, refresh_path="/v2/refresh")
        runner.execute.side_effect = [EXPIRED, Ok({"data": {"token": "T2"}}), Ok({})]

        await guard.request("/doctors")

        assert runner.execute.await_args_list[1].args[0] == "/v2/refresh"
        assert (await credential_store.read()).value == "T2"
