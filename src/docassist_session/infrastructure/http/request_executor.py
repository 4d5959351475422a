"""HTTP request executor for the session client."""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from ...__version__ import __version__
from ...application.services.credential_store import CredentialStore
from ...config.constants import (
    DEFAULT_TOKEN_ROTATION_HEADER,
    JSON_CONTENT_TYPE,
    HttpMethod,
)
from ...core.exceptions import (
    AuthenticationRequired,
    CredentialStorageError,
    InvalidCredential,
)
from ...core.value_objects import (
    Ok,
    Unauthorized,
    OtherHttpError,
    NetworkError,
    RequestOutcome,
)

logger = logging.getLogger(__name__)


class RequestExecutor:
    """Builds and issues a single HTTP call and classifies its outcome.

    Handles ONLY one physical request: headers, transport, decoding and
    classification into ``Ok`` / ``Unauthorized`` / ``OtherHttpError`` /
    ``NetworkError``. Retrying and session semantics belong to the session
    guard.

    If a response carries a rotated credential in the rotation header, it is
    persisted before ``execute`` returns, so the caller's next call already
    uses it.
    """

    def __init__(
        self,
        credential_store: CredentialStore,
        http_client: httpx.AsyncClient,
        token_rotation_header: str = DEFAULT_TOKEN_ROTATION_HEADER,
        user_agent: Optional[str] = None,
    ):
        """Initialize request executor.

        Args:
            credential_store: Store the bearer credential is read from and rotated into
            http_client: Async HTTP client, normally configured with the backend base URL
            token_rotation_header: Response header carrying a replacement credential
            user_agent: Optional User-Agent override
        """
        if credential_store is None:
            raise ValueError("Credential store is required")
        if http_client is None:
            raise ValueError("HTTP client is required")

        self._credential_store = credential_store
        self._client = http_client
        self._rotation_header = token_rotation_header
        self._user_agent = user_agent or f"docassist-session/{__version__}"

    @property
    def credential_store(self) -> CredentialStore:
        return self._credential_store

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._client

    async def execute(
        self,
        target: str,
        method: HttpMethod = HttpMethod.GET,
        body: Optional[Any] = None,
        requires_auth: bool = False,
        params: Optional[Mapping[str, Any]] = None,
    ) -> RequestOutcome:
        """Issue one HTTP call.

        Args:
            target: Endpoint path relative to the backend base URL
            method: HTTP method
            body: JSON-serializable request body (ignored for GET)
            requires_auth: Whether to attach the bearer credential
            params: Query parameters; ``None`` values are dropped

        Returns:
            Exactly one outcome variant

        Raises:
            AuthenticationRequired: If ``requires_auth`` and no credential is
                stored; no network call is made
        """
        method = HttpMethod(method)
        headers = await self._build_headers(target, requires_auth)

        request_kwargs: Dict[str, Any] = {"headers": headers}
        if body is not None and method != HttpMethod.GET:
            request_kwargs["json"] = body
        if params:
            request_kwargs["params"] = {k: v for k, v in params.items() if v is not None}

        logger.debug(f"Making {method.value} request to {target}")

        try:
            response = await self._client.request(method.value, target, **request_kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"Network error for {method.value} {target}: {e!r}")
            return NetworkError(cause=e)

        logger.debug(f"Response status for {target}: {response.status_code}")

        payload = self._decode(response)
        await self._persist_rotated_credential(response)
        return self._classify(response, payload)

    async def _build_headers(self, target: str, requires_auth: bool) -> Dict[str, str]:
        headers = {
            "Content-Type": JSON_CONTENT_TYPE,
            "User-Agent": self._user_agent,
        }
        if not requires_auth:
            return headers

        try:
            credential = await self._credential_store.read()
        except CredentialStorageError as e:
            logger.error(f"Credential read failed, treating as absent: {e}")
            credential = None

        if credential is None:
            raise AuthenticationRequired(target=target)

        headers["Authorization"] = credential.authorization_header
        return headers

    async def _persist_rotated_credential(self, response: httpx.Response) -> None:
        rotated = response.headers.get(self._rotation_header)
        if rotated is None:
            return

        try:
            credential = await self._credential_store.store(rotated)
            logger.info(f"Persisted rotated credential {credential.mask_for_logging()}")
        except InvalidCredential:
            logger.warning(f"Ignoring empty or malformed {self._rotation_header} header")
        except CredentialStorageError as e:
            logger.warning(f"Rotated credential kept in memory only, durable write failed: {e}")

    @staticmethod
    def _decode(response: httpx.Response) -> Dict[str, Any]:
        """Decode the body into a dict regardless of backend content type."""
        content_type = response.headers.get("content-type", "").lower()
        if "json" in content_type:
            try:
                data = response.json()
            except ValueError:
                logger.warning("Response declared JSON but could not be decoded")
                return {"message": response.text}
            return data if isinstance(data, dict) else {"data": data}

        text = response.text
        if text:
            logger.debug(f"Non-JSON response body: {text[:100]}")
        return {"message": text}

    @staticmethod
    def _error_fields(payload: Mapping[str, Any]) -> Tuple[Optional[str], Optional[str]]:
        """Pull (diagnostic, error_code) out of an error payload."""
        error = payload.get("error")
        code = payload.get("code") or payload.get("error_code")
        message = None

        if isinstance(error, Mapping):
            message = error.get("message")
            code = code or error.get("code")
        elif isinstance(error, str) and error:
            message = error

        message = message or payload.get("message") or None
        return (
            str(message) if message is not None else None,
            str(code) if code is not None else None,
        )

    def _classify(self, response: httpx.Response, payload: Dict[str, Any]) -> RequestOutcome:
        status = response.status_code
        if 200 <= status < 300:
            return Ok(payload=payload, status_code=status)

        diagnostic, error_code = self._error_fields(payload)
        diagnostic = diagnostic or f"Request failed with status {status}"

        if status == 401:
            return Unauthorized(
                diagnostic=diagnostic,
                error_code=error_code,
                www_authenticate=response.headers.get("www-authenticate"),
                payload=payload,
            )
        return OtherHttpError(status_code=status, diagnostic=diagnostic, payload=payload)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
