"""Session services: credential store, session guard and session facade."""

from .credential_store import CredentialStore
from .authenticated_flag import AuthenticatedFlag
from .session_guard import SessionGuard
from .session_facade import SessionFacade

__all__ = [
    "CredentialStore",
    "AuthenticatedFlag",
    "SessionGuard",
    "SessionFacade",
]
