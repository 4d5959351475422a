"""Session guard: refresh-and-retry state machine around the request executor."""

import logging
from typing import Any, Dict, Mapping, NoReturn, Optional

from ...config.constants import AuthEndpoints, FORCED_LOGOUT_REASON, HttpMethod
from ...core.exceptions import (
    CredentialStorageError,
    HttpStatusError,
    InvalidCredential,
    NetworkUnavailable,
    SessionExpired,
)
from ...core.protocols import ForcedLogoutChannel, RequestRunner
from ...core.value_objects import (
    Credential,
    NetworkError,
    Ok,
    OtherHttpError,
    PendingRequest,
    Unauthorized,
)
from ..extraction import ExpiryClassifier, ExtractionChain, default_token_chain
from .credential_store import CredentialStore

logger = logging.getLogger(__name__)


class SessionGuard:
    """Wraps the request executor with session semantics.

    For each logical call:

    - ``Ok`` returns the payload.
    - ``OtherHttpError`` and ``NetworkError`` are raised as
      ``HttpStatusError`` / ``NetworkUnavailable`` without touching the session.
    - ``Unauthorized`` with an expiry-shaped diagnostic triggers one refresh
      and one replay. Anything else, including a second ``Unauthorized`` after
      the replay, clears the credential, publishes a forced logout and raises
      ``SessionExpired``.
    - ``Unauthorized`` on a call made without the credential is raised as a
      plain ``HttpStatusError``.

    Concurrent calls refresh independently; there is no refresh lock.
    """

    def __init__(
        self,
        executor: RequestRunner,
        credential_store: CredentialStore,
        broadcaster: ForcedLogoutChannel,
        classifier: Optional[ExpiryClassifier] = None,
        refresh_path: str = AuthEndpoints.REFRESH,
        token_chain: Optional[ExtractionChain] = None,
        forced_logout_reason: str = FORCED_LOGOUT_REASON,
    ):
        """Initialize session guard.

        Args:
            executor: Issues single HTTP calls
            credential_store: Owner of the bearer credential
            broadcaster: Channel terminal failures are published to
            classifier: Decides which 401 responses are refreshable
            refresh_path: Unauthenticated endpoint exchanging a credential for a new one
            token_chain: Locates the new credential in the refresh response
            forced_logout_reason: Human-readable reason sent with forced logouts
        """
        self._executor = executor
        self._credential_store = credential_store
        self._broadcaster = broadcaster
        self._classifier = classifier or ExpiryClassifier()
        self._refresh_path = refresh_path
        self._token_chain = token_chain or default_token_chain()
        self._forced_logout_reason = forced_logout_reason

    async def request(
        self,
        target: str,
        method: HttpMethod = HttpMethod.GET,
        body: Optional[Any] = None,
        params: Optional[Mapping[str, Any]] = None,
        requires_auth: bool = True,
    ) -> Dict[str, Any]:
        """Run one logical call and return its decoded payload.

        Raises:
            AuthenticationRequired: No credential stored for an authenticated call
            SessionExpired: The session could not be recovered
            HttpStatusError: Non-401 error status
            NetworkUnavailable: No response was received
        """
        pending = PendingRequest(
            target=target,
            method=method,
            body=body,
            params=dict(params) if params else None,
            requires_auth=requires_auth,
        )
        return await self.run(pending)

    async def run(self, pending: PendingRequest) -> Dict[str, Any]:
        """Drive a pending request through the refresh state machine."""
        outcome = await self._execute(pending)

        if isinstance(outcome, Ok):
            return outcome.payload
        if isinstance(outcome, OtherHttpError):
            raise HttpStatusError(
                outcome.status_code,
                outcome.diagnostic,
                target=pending.target,
                payload=outcome.payload,
            )
        if isinstance(outcome, NetworkError):
            raise NetworkUnavailable(outcome.cause, target=pending.target) from outcome.cause

        # No credential was sent, so this 401 says nothing about the session
        if not pending.requires_auth:
            raise HttpStatusError(
                401,
                outcome.diagnostic,
                target=pending.target,
                payload=outcome.payload,
            )

        if pending.retried:
            logger.warning(f"Retry of {pending.target} was rejected again, ending session")
            await self._terminate(pending, outcome, refresh_attempted=True)

        if not self._classifier.is_refresh_eligible(outcome):
            logger.info(f"401 from {pending.target} is not refreshable: {outcome.diagnostic}")
            await self._terminate(pending, outcome, refresh_attempted=False)

        if not await self._refresh():
            await self._terminate(pending, outcome, refresh_attempted=True)

        return await self.run(pending.as_retry())

    async def _execute(self, pending: PendingRequest):
        return await self._executor.execute(
            pending.target,
            method=pending.method,
            body=pending.body,
            requires_auth=pending.requires_auth,
            params=pending.params,
        )

    async def _refresh(self) -> bool:
        """Exchange the current credential for a new one.

        Returns:
            True if a new credential was obtained and is now current
        """
        try:
            current = await self._credential_store.read()
        except CredentialStorageError as e:
            logger.error(f"Cannot refresh, credential read failed: {e}")
            return False

        if current is None:
            logger.info("Cannot refresh, no credential is stored")
            return False

        outcome = await self._executor.execute(
            self._refresh_path,
            method=HttpMethod.POST,
            body={"token": current.value},
            requires_auth=False,
        )
        if not isinstance(outcome, Ok):
            logger.warning(f"Credential refresh failed: {type(outcome).__name__}")
            return False

        raw_token = self._token_chain.extract(outcome.payload)
        if raw_token is None:
            logger.warning("Refresh response did not contain a credential")
            return False

        try:
            credential = Credential.from_raw(raw_token)
        except InvalidCredential as e:
            logger.warning(f"Refresh response carried an unusable credential: {e.message}")
            return False

        try:
            await self._credential_store.store(credential)
        except CredentialStorageError as e:
            logger.warning(f"Refreshed credential kept in memory only, durable write failed: {e}")

        logger.info(f"Credential refreshed ({credential.mask_for_logging()})")
        return True

    async def _terminate(
        self,
        pending: PendingRequest,
        outcome: Unauthorized,
        refresh_attempted: bool,
    ) -> NoReturn:
        """Clear the credential, publish a forced logout and raise SessionExpired."""
        logger.error(f"Session ended by 401 from {pending.target}: {outcome.diagnostic}")

        try:
            await self._credential_store.clear()
        except CredentialStorageError as e:
            logger.error(f"Durable credential delete failed during forced logout: {e}")

        await self._broadcaster.publish(self._forced_logout_reason, target=pending.target)

        raise SessionExpired(
            self._forced_logout_reason,
            target=pending.target,
            diagnostic=outcome.diagnostic,
            refresh_attempted=refresh_attempted,
        )
