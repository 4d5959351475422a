"""Session client exceptions.

One exception per failure scenario. Only the session guard and the session
facade interpret authorization failures as session events; every other
failure propagates to callers untouched.
"""

from .base import SessionClientError, ConfigurationError, create_error_response
from .authentication_required import AuthenticationRequired
from .invalid_credential import InvalidCredential
from .invalid_credentials import InvalidCredentialsError
from .session_expired import SessionExpired
from .session_persist_error import SessionPersistError
from .profile_fetch_error import ProfileFetchError
from .credential_storage_error import CredentialStorageError
from .request_failed import RequestFailed, HttpStatusError, NetworkUnavailable

__all__ = [
    "SessionClientError",
    "ConfigurationError",
    "create_error_response",
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
]
