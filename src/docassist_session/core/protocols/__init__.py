"""Session client protocols.

Contract definitions for the collaborators the session client depends on.
"""

from .credential_backend import CredentialBackend
from .forced_logout_channel import ForcedLogoutChannel, ForcedLogoutHandler, Unsubscribe
from .navigator import Navigator
from .request_runner import RequestRunner
from .token_extractor import TokenExtractor

__all__ = [
    "CredentialBackend",
    "ForcedLogoutChannel",
    "ForcedLogoutHandler",
    "Unsubscribe",
    "Navigator",
    "RequestRunner",
    "TokenExtractor",
]
