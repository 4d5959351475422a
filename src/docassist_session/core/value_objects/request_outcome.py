"""Classified outcome of a single HTTP call.

The request executor returns exactly one of these variants. They are plain
values, not exceptions: the session guard decides what each one means.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class Ok:
    """2xx response with its decoded payload."""

    payload: Dict[str, Any]
    status_code: int = 200


@dataclass(frozen=True)
class Unauthorized:
    """401 response.

    ``error_code`` carries a structured backend code when one was sent;
    ``diagnostic`` is the human-readable message.
    """

    diagnostic: str
    error_code: Optional[str] = None
    www_authenticate: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class OtherHttpError:
    """Any non-2xx response other than 401."""

    status_code: int
    diagnostic: str
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NetworkError:
    """The call produced no HTTP response (connection failure, timeout)."""

    cause: BaseException


RequestOutcome = Union[Ok, Unauthorized, OtherHttpError, NetworkError]
