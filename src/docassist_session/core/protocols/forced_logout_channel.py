"""Forced-logout publish/subscribe protocol contract."""

from typing import Awaitable, Callable, Optional, Protocol, Union, runtime_checkable

from ..events import ForcedLogout

ForcedLogoutHandler = Callable[[ForcedLogout], Union[None, Awaitable[None]]]
Unsubscribe = Callable[[], None]


@runtime_checkable
class ForcedLogoutChannel(Protocol):
    """Protocol for the process-wide forced-logout channel."""

    async def publish(self, reason: str, *, target: Optional[str] = None) -> ForcedLogout:
        """Deliver a forced-logout event to every current subscriber."""
        ...

    def subscribe(self, handler: ForcedLogoutHandler) -> Unsubscribe:
        """Register a handler; the returned callable deregisters it."""
        ...
