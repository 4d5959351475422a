"""Pending request attempt value object."""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from ...config.constants import HttpMethod


@dataclass(frozen=True)
class PendingRequest:
    """One logical call as seen by the session guard.

    ``retried`` is set on the single replay allowed after a credential refresh;
    a request with ``retried=True`` is never refreshed again.
    """

    target: str
    method: HttpMethod = HttpMethod.GET
    body: Optional[Any] = None
    params: Optional[Dict[str, Any]] = None
    requires_auth: bool = True
    retried: bool = False

    def __post_init__(self) -> None:
        if not self.target:
            raise ValueError("Request target cannot be empty")
        if not isinstance(self.method, HttpMethod):
            object.__setattr__(self, "method", HttpMethod(str(self.method).upper()))

    def as_retry(self) -> "PendingRequest":
        """Copy of this request flagged as the one permitted retry."""
        return replace(self, retried=True)
