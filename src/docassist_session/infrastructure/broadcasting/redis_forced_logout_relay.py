"""Redis pub/sub relay for forced-logout events.

Carries forced-logout events between processes that share a credential
(for example several workers using the Redis credential backend). Every
process publishes its own events on one channel and re-delivers the events
of the others to its local broadcaster.
"""

import asyncio
import json
import logging
import uuid
from typing import Any, Optional

from redis.exceptions import RedisError

from ...config.constants import DEFAULT_FORCED_LOGOUT_CHANNEL
from ...core.events import ForcedLogout
from .forced_logout_broadcaster import ForcedLogoutBroadcaster

logger = logging.getLogger(__name__)


class RedisForcedLogoutRelay:
    """Relay between a local broadcaster and a Redis pub/sub channel."""

    def __init__(
        self,
        redis_client: Any,
        broadcaster: ForcedLogoutBroadcaster,
        channel: str = DEFAULT_FORCED_LOGOUT_CHANNEL,
        node_id: Optional[str] = None,
        reconnect_delay: float = 1.0,
    ):
        """Initialize Redis relay.

        Args:
            redis_client: ``redis.asyncio`` client instance
            broadcaster: Local broadcaster remote events are delivered to
            channel: Pub/sub channel shared by all processes
            node_id: Unique identifier for this process, used to drop own echoes
            reconnect_delay: Seconds to wait before listening again after a Redis error
        """
        if not redis_client:
            raise ValueError("Redis client is required")
        self._redis = redis_client
        self._broadcaster = broadcaster
        self._channel = channel
        self._node_id = node_id or str(uuid.uuid4())
        self._reconnect_delay = reconnect_delay
        self._pubsub = None
        self._listener: Optional[asyncio.Task] = None
        self._detach = None

    @property
    def node_id(self) -> str:
        return self._node_id

    @property
    def is_running(self) -> bool:
        return self._listener is not None and not self._listener.done()

    async def start(self) -> None:
        """Subscribe to the channel and attach to the local broadcaster."""
        if self.is_running:
            return

        self._pubsub = self._redis.pubsub()
        await self._pubsub.subscribe(self._channel)
        self._listener = asyncio.create_task(self._listen())
        self._detach = self._broadcaster.attach_relay(self)
        logger.info(f"Forced logout relay {self._node_id} listening on {self._channel}")

    async def stop(self) -> None:
        """Detach from the broadcaster and stop listening."""
        if self._detach is not None:
            self._detach()
            self._detach = None

        if self._listener is not None:
            self._listener.cancel()
            try:
                await self._listener
            except asyncio.CancelledError:
                pass
            self._listener = None

        if self._pubsub is not None:
            try:
                await self._pubsub.unsubscribe(self._channel)
                await self._pubsub.aclose()
            except RedisError as e:
                logger.warning(f"Error closing forced logout subscription: {e}")
            self._pubsub = None

    async def forward(self, event: ForcedLogout) -> bool:
        """Publish a locally raised event for other processes.

        Returns:
            True if the event was published
        """
        message = json.dumps({"origin": self._node_id, "event": event.to_dict()})
        try:
            await self._redis.publish(self._channel, message)
            return True
        except RedisError as e:
            logger.warning(f"Failed to relay forced logout: {e}")
            return False

    async def _listen(self) -> None:
        while True:
            try:
                async for message in self._pubsub.listen():
                    if message.get("type") != "message":
                        continue
                    try:
                        await self.handle_message(message.get("data"))
                    except Exception:
                        logger.exception("Failed to handle forced logout message")
            except RedisError as e:
                logger.error(f"Forced logout subscription lost: {e}, retrying in {self._reconnect_delay}s")
                await asyncio.sleep(self._reconnect_delay)
                continue
            logger.warning(f"Forced logout subscription on {self._channel} closed")
            return

    async def handle_message(self, data: Any) -> bool:
        """Deliver one raw pub/sub message to local subscribers.

        Returns:
            True if the message was delivered; own echoes and malformed
            messages are dropped
        """
        if isinstance(data, bytes):
            data = data.decode("utf-8")

        try:
            envelope = json.loads(data)
            origin = envelope["origin"]
            event_data = dict(envelope["event"])
        except (TypeError, ValueError, KeyError) as e:
            logger.warning(f"Dropping malformed forced logout message: {e}")
            return False

        if origin == self._node_id:
            return False

        event_data["source"] = f"remote:{origin}"
        try:
            event = ForcedLogout.from_dict(event_data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Dropping malformed forced logout event: {e}")
            return False

        await self._broadcaster.deliver(event)
        return True
