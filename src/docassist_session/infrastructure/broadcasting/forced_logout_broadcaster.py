"""Process-wide forced-logout broadcaster."""

import inspect
import itertools
import logging
from typing import Dict, List, Optional, Protocol, runtime_checkable

from ...core.events import ForcedLogout
from ...core.protocols import ForcedLogoutHandler, Unsubscribe

logger = logging.getLogger(__name__)


@runtime_checkable
class ForcedLogoutRelay(Protocol):
    """Carries locally published events to other execution contexts."""

    async def forward(self, event: ForcedLogout) -> bool:
        ...


class ForcedLogoutBroadcaster:
    """Publish/subscribe channel for forced-logout events.

    Created once at startup and injected wherever it is needed; never torn
    down. Subscriptions come and go with the UI components that own them.

    Delivery is in subscription order and is not persisted: a handler that
    subscribes after a publish never sees that event. Attached relays carry
    the same event to other processes, and events arriving from them are
    handed to ``deliver`` so local subscribers see one uniform payload.
    """

    def __init__(self, source: str = "session_guard"):
        self._source = source
        self._subscribers: Dict[int, ForcedLogoutHandler] = {}
        self._tokens = itertools.count()
        self._relays: List[ForcedLogoutRelay] = []
        self._published = 0

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def published_count(self) -> int:
        """Number of events published from this process."""
        return self._published

    def subscribe(self, handler: ForcedLogoutHandler) -> Unsubscribe:
        """Register a handler and return a callable that deregisters it.

        Handlers may be plain functions or coroutine functions. They must be
        idempotent: several events can arrive for one underlying expiry.
        """
        if not callable(handler):
            raise TypeError("Forced logout handler must be callable")

        token = next(self._tokens)
        self._subscribers[token] = handler
        logger.debug(f"Forced logout subscriber {token} registered")

        def unsubscribe() -> None:
            if self._subscribers.pop(token, None) is not None:
                logger.debug(f"Forced logout subscriber {token} removed")

        return unsubscribe

    def attach_relay(self, relay: ForcedLogoutRelay) -> Unsubscribe:
        """Forward every locally published event through ``relay``."""
        self._relays.append(relay)

        def detach() -> None:
            if relay in self._relays:
                self._relays.remove(relay)

        return detach

    async def publish(self, reason: str, *, target: Optional[str] = None) -> ForcedLogout:
        """Notify all current subscribers, then forward through attached relays."""
        event = ForcedLogout(reason=reason, source=self._source, target=target)
        self._published += 1
        logger.warning(f"Publishing forced logout: {reason}")

        await self.deliver(event)

        for relay in list(self._relays):
            try:
                await relay.forward(event)
            except Exception as e:
                logger.warning(f"Forced logout relay {type(relay).__name__} failed: {e}")

        return event

    async def deliver(self, event: ForcedLogout) -> None:
        """Hand an event to local subscribers only, in subscription order."""
        for token, handler in list(self._subscribers.items()):
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(f"Forced logout subscriber {token} failed")
