"""Forced-logout delivery: in-process broadcaster and cross-process relay."""

from .forced_logout_broadcaster import ForcedLogoutBroadcaster, ForcedLogoutRelay
from .redis_forced_logout_relay import RedisForcedLogoutRelay

__all__ = [
    "ForcedLogoutBroadcaster",
    "ForcedLogoutRelay",
    "RedisForcedLogoutRelay",
]
