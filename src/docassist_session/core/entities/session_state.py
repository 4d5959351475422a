"""Session state entity."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class SessionState:
    """Derived view of the current session.

    ``is_authenticated`` is three-valued: ``None`` until the first credential
    check resolves it, then ``True`` or ``False``.
    """

    is_authenticated: Optional[bool] = None
    current_user: Optional[Dict[str, Any]] = None
    last_error: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        """Whether the initial credential check has completed."""
        return self.is_authenticated is not None

    def mark_authenticated(self, user: Optional[Dict[str, Any]] = None) -> None:
        self.is_authenticated = True
        self.last_error = None
        if user is not None:
            self.current_user = user

    def mark_unauthenticated(self, reason: Optional[str] = None) -> None:
        self.is_authenticated = False
        self.current_user = None
        self.last_error = reason

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_authenticated": self.is_authenticated,
            "current_user": self.current_user,
            "last_error": self.last_error,
        }
