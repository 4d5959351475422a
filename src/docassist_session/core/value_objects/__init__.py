"""Session client value objects."""

from .credential import Credential
from .pending_request import PendingRequest
from .request_outcome import (
    Ok,
    Unauthorized,
    OtherHttpError,
    NetworkError,
    RequestOutcome,
)

__all__ = [
    "Credential",
    "PendingRequest",
    "Ok",
    "Unauthorized",
    "OtherHttpError",
    "NetworkError",
    "RequestOutcome",
]
