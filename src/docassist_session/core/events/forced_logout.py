"""Forced logout event."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ForcedLogout:
    """Event fired when the session is found to be unrecoverable.

    The same shape is delivered to in-process subscribers and relayed across
    process boundaries, so subscriber code does not care where it came from.
    """

    reason: str
    source: str = "session_guard"
    target: Optional[str] = None
    event_timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.reason:
            raise ValueError("Forced logout reason cannot be empty")
        if self.event_timestamp.tzinfo is None:
            object.__setattr__(
                self, "event_timestamp",
                self.event_timestamp.replace(tzinfo=timezone.utc)
            )

    @property
    def event_type(self) -> str:
        """Get event type identifier."""
        return "forced_logout"

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_type": self.event_type,
            "reason": self.reason,
            "source": self.source,
            "target": self.target,
            "event_timestamp": self.event_timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ForcedLogout":
        """Rebuild an event from its serialized form."""
        timestamp = data.get("event_timestamp")
        kwargs: Dict[str, Any] = {
            "reason": data["reason"],
            "source": data.get("source", "remote"),
            "target": data.get("target"),
        }
        if timestamp:
            if not isinstance(timestamp, str):
                raise ValueError(f"Invalid event timestamp: {timestamp!r}")
            kwargs["event_timestamp"] = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        return cls(**kwargs)

    def __str__(self) -> str:
        return f"ForcedLogout(reason={self.reason!r}, source={self.source})"
