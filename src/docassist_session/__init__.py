"""docassist-session - authentication session client for the DocAssist REST backend.

Stores the bearer credential, attaches it to outgoing requests, refreshes it
once when the backend reports it expired, and broadcasts a forced logout when
the session cannot be recovered.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    HttpMethod,
    StorageBackend,
    AuthEndpoints,
    SessionSettings,
    get_settings,
)

from .core.exceptions import (
    SessionClientError,
    ConfigurationError,
    AuthenticationRequired,
    InvalidCredential,
    InvalidCredentialsError,
    SessionExpired,
    SessionPersistError,
    ProfileFetchError,
    CredentialStorageError,
    RequestFailed,
    HttpStatusError,
    NetworkUnavailable,
)

from .core.value_objects import (
    Credential,
    Ok,
    Unauthorized,
    OtherHttpError,
    NetworkError,
)
from .core.events import ForcedLogout
from .core.entities import SessionState

from .application.models import LoginRequest, RegisterRequest, PatientRegisterRequest
from .application.services import (
    CredentialStore,
    AuthenticatedFlag,
    SessionGuard,
    SessionFacade,
)

from .infrastructure.http import RequestExecutor, ApiClient
from .infrastructure.broadcasting import ForcedLogoutBroadcaster, RedisForcedLogoutRelay
from .infrastructure.repositories import (
    MemoryCredentialBackend,
    FileCredentialBackend,
    RedisCredentialBackend,
)
from .infrastructure.factories import SessionStack, create_session_stack

__all__ = [
    "__version__",

    # Configuration
    "HttpMethod",
    "StorageBackend",
    "AuthEndpoints",
    "SessionSettings",
    "get_settings",

    # Exceptions
    "SessionClientError",
    "ConfigurationError",
    "AuthenticationRequired",
    "InvalidCredential",
    "InvalidCredentialsError",
    "SessionExpired",
    "SessionPersistError",
    "ProfileFetchError",
    "CredentialStorageError",
    "RequestFailed",
    "HttpStatusError",
    "NetworkUnavailable",

    # Values, events and state
    "Credential",
    "Ok",
    "Unauthorized",
    "OtherHttpError",
    "NetworkError",
    "ForcedLogout",
    "SessionState",

    # Request models
    "LoginRequest",
    "RegisterRequest",
    "PatientRegisterRequest",

    # Services
    "CredentialStore",
    "AuthenticatedFlag",
    "SessionGuard",
    "SessionFacade",

    # Infrastructure
    "RequestExecutor",
    "ApiClient",
    "ForcedLogoutBroadcaster",
    "RedisForcedLogoutRelay",
    "MemoryCredentialBackend",
    "FileCredentialBackend",
    "RedisCredentialBackend",
    "SessionStack",
    "create_session_stack",
]
