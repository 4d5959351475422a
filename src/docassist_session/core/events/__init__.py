"""Session client events."""

from .forced_logout import ForcedLogout

__all__ = ["ForcedLogout"]
