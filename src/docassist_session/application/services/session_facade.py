"""Session facade: the entry point application code talks to."""

import inspect
import logging
from typing import Any, Dict, Mapping, Optional, Union

from ...config.constants import AuthEndpoints, HttpMethod
from ...core.entities import SessionState
from ...core.events import ForcedLogout
from ...core.exceptions import (
    AuthenticationRequired,
    CredentialStorageError,
    HttpStatusError,
    InvalidCredential,
    InvalidCredentialsError,
    NetworkUnavailable,
    ProfileFetchError,
    SessionClientError,
    SessionPersistError,
)
from ...core.protocols import ForcedLogoutChannel, Navigator, RequestRunner
from ...core.value_objects import Credential, NetworkError, Ok, OtherHttpError, Unauthorized
from ..extraction import ExtractionChain, default_token_chain, default_user_chain
from ..models import LoginRequest, PatientRegisterRequest, RegisterRequest
from .authenticated_flag import AuthenticatedFlag
from .credential_store import CredentialStore
from .session_guard import SessionGuard

logger = logging.getLogger(__name__)

# Initial write plus one retry
_PERSIST_ATTEMPTS = 2


class SessionFacade:
    """Login, logout and current-user operations plus the observable flag.

    Owns the derived session state. Subscribes to the forced-logout channel
    exactly once, at construction, and keeps that subscription until
    ``close()``.
    """

    def __init__(
        self,
        executor: RequestRunner,
        guard: SessionGuard,
        credential_store: CredentialStore,
        broadcaster: ForcedLogoutChannel,
        navigator: Optional[Navigator] = None,
        *,
        login_path: str = AuthEndpoints.LOGIN,
        logout_path: str = AuthEndpoints.LOGOUT,
        me_path: str = AuthEndpoints.ME,
        register_path: str = AuthEndpoints.REGISTER,
        register_patient_path: str = AuthEndpoints.REGISTER_PATIENT,
        token_chain: Optional[ExtractionChain] = None,
        user_chain: Optional[ExtractionChain] = None,
    ):
        """Initialize session facade.

        Args:
            executor: Used directly for login and logout
            guard: Used for every call that may hit an expired session
            credential_store: Owner of the bearer credential
            broadcaster: Forced-logout channel to subscribe to
            navigator: Returns the user to the login entry point on forced logout
            token_chain: Locates the credential in the login response
            user_chain: Locates the user profile in login and profile responses
        """
        self._executor = executor
        self._guard = guard
        self._credential_store = credential_store
        self._navigator = navigator
        self._login_path = login_path
        self._logout_path = logout_path
        self._me_path = me_path
        self._register_path = register_path
        self._register_patient_path = register_patient_path
        self._token_chain = token_chain or default_token_chain()
        self._user_chain = user_chain or default_user_chain()

        self._state = SessionState()
        self._flag = AuthenticatedFlag()
        self._unsubscribe = broadcaster.subscribe(self._on_forced_logout)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def authenticated(self) -> AuthenticatedFlag:
        """Observable flag for UI binding."""
        return self._flag

    @property
    def current_user(self) -> Optional[Dict[str, Any]]:
        return self._state.current_user

    async def initialize(self) -> bool:
        """Resolve the initial "unknown" state from the credential store."""
        authenticated = await self._credential_store.has_credential()
        if authenticated:
            self._state.mark_authenticated()
        else:
            self._state.mark_unauthenticated()
        self._flag.set(authenticated)
        logger.debug(f"Session initialized, authenticated={authenticated}")
        return authenticated

    async def login(
        self, credentials: Union[LoginRequest, Mapping[str, Any]]
    ) -> Optional[Dict[str, Any]]:
        """Sign in and persist the returned credential.

        Args:
            credentials: ``LoginRequest`` or a mapping with ``email`` and ``password``

        Returns:
            The user profile if the backend returned one

        Raises:
            InvalidCredentialsError: Login rejected, or no usable credential returned
            SessionPersistError: Credential could not be stored after one retry
            HttpStatusError: Server-side failure (5xx)
            NetworkUnavailable: No response was received
        """
        request = (
            credentials if isinstance(credentials, LoginRequest)
            else LoginRequest.model_validate(dict(credentials))
        )
        logger.info(f"Logging in {request.email}")

        outcome = await self._executor.execute(
            self._login_path,
            method=HttpMethod.POST,
            body=request.model_dump(),
            requires_auth=False,
        )
        payload = self._login_payload(outcome)

        raw_token = self._token_chain.extract(payload)
        if raw_token is None:
            raise InvalidCredentialsError(
                "Login response did not include a token",
                status_code=outcome.status_code,
                reason="missing_token",
            )
        try:
            credential = Credential.from_raw(raw_token)
        except InvalidCredential as e:
            raise InvalidCredentialsError(
                "Login response included an unusable token",
                status_code=outcome.status_code,
                reason="missing_token",
            ) from e

        await self._persist(credential)

        user = self._user_chain.extract(payload)
        self._state.mark_authenticated(user)
        self._flag.set(True)
        logger.info(f"Login succeeded for {request.email}")
        return user

    def _login_payload(self, outcome) -> Dict[str, Any]:
        if isinstance(outcome, Ok):
            if outcome.payload.get("success") is False:
                raise InvalidCredentialsError(
                    str(outcome.payload.get("message") or "Login failed"),
                    status_code=outcome.status_code,
                )
            return outcome.payload
        if isinstance(outcome, Unauthorized):
            raise InvalidCredentialsError(outcome.diagnostic, status_code=401)
        if isinstance(outcome, OtherHttpError):
            if 400 <= outcome.status_code < 500:
                raise InvalidCredentialsError(outcome.diagnostic, status_code=outcome.status_code)
            raise HttpStatusError(
                outcome.status_code,
                outcome.diagnostic,
                target=self._login_path,
                payload=outcome.payload,
            )
        if isinstance(outcome, NetworkError):
            raise NetworkUnavailable(outcome.cause, target=self._login_path) from outcome.cause
        raise TypeError(f"Unexpected request outcome: {outcome!r}")

    async def _persist(self, credential: Credential) -> None:
        last_error: Optional[CredentialStorageError] = None
        for attempt in range(1, _PERSIST_ATTEMPTS + 1):
            try:
                await self._credential_store.store(credential)
                return
            except CredentialStorageError as e:
                last_error = e
                logger.warning(f"Credential write attempt {attempt} failed: {e}")

        # The in-memory copy holds the unsaved credential; drop it
        try:
            await self._credential_store.clear()
        except CredentialStorageError as e:
            logger.error(f"Failed to clear unsaved credential: {e}")

        raise SessionPersistError(attempts=_PERSIST_ATTEMPTS) from last_error

    async def logout(self) -> None:
        """Sign out. Always succeeds locally, whatever the server says."""
        try:
            outcome = await self._executor.execute(
                self._logout_path,
                method=HttpMethod.POST,
                body={},
                requires_auth=True,
            )
            if not isinstance(outcome, Ok):
                logger.warning(f"Server logout failed ({type(outcome).__name__}), continuing locally")
        except AuthenticationRequired:
            logger.info("No credential stored, skipping server logout")
        finally:
            await self._clear_local_session()

        logger.info("Logged out")

    async def _clear_local_session(self) -> None:
        try:
            await self._credential_store.clear()
        except CredentialStorageError as e:
            logger.error(f"Durable credential delete failed during logout: {e}")
        self._state.mark_unauthenticated()
        self._flag.set(False)

    async def is_authenticated(self) -> bool:
        """Whether a credential is stored. Makes no network call."""
        return await self._credential_store.has_credential()

    async def get_current_user(self) -> Dict[str, Any]:
        """Fetch the signed-in user's profile.

        Raises:
            ProfileFetchError: On any failure; the original error is chained
        """
        try:
            payload = await self._guard.request(self._me_path, HttpMethod.GET)
        except SessionClientError as e:
            logger.warning(f"Profile fetch failed: {e.message}")
            raise ProfileFetchError(f"Failed to fetch current user: {e.message}") from e

        user = self._user_chain.extract(payload)
        if user is None:
            raise ProfileFetchError("Profile response did not include a user")

        self._state.current_user = user
        return user

    async def register(self, data: Union[RegisterRequest, Mapping[str, Any]]) -> Dict[str, Any]:
        """Create an account. Does not sign in."""
        request = data if isinstance(data, RegisterRequest) else RegisterRequest.model_validate(dict(data))
        return await self._guard.request(
            self._register_path,
            HttpMethod.POST,
            body=request.to_payload(),
            requires_auth=False,
        )

    async def register_patient(
        self, data: Union[PatientRegisterRequest, Mapping[str, Any]]
    ) -> Dict[str, Any]:
        """Create a patient account together with its profile. Does not sign in."""
        request = (
            data if isinstance(data, PatientRegisterRequest)
            else PatientRegisterRequest.model_validate(dict(data))
        )
        return await self._guard.request(
            self._register_patient_path,
            HttpMethod.POST,
            body=request.to_payload(),
            requires_auth=False,
        )

    async def _on_forced_logout(self, event: ForcedLogout) -> None:
        # Events relayed from another process arrive without a local guard having cleared the store
        if await self._credential_store.has_credential():
            try:
                await self._credential_store.clear()
            except CredentialStorageError as e:
                logger.error(f"Durable credential delete failed during forced logout: {e}")

        if self._state.is_authenticated is False:
            logger.debug(f"Ignoring forced logout from {event.source}, already signed out")
            return

        self._state.mark_unauthenticated(event.reason)
        self._flag.set(False)
        logger.warning(f"Forced logout: {event.reason}")

        if self._navigator is not None:
            result = self._navigator.navigate_to_login(event.reason)
            if inspect.isawaitable(result):
                await result

    def close(self) -> None:
        """Drop the forced-logout subscription."""
        self._unsubscribe()
