"""Observable "is authenticated" flag for UI binding."""

import itertools
import logging
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

FlagListener = Callable[[Optional[bool]], None]


class AuthenticatedFlag:
    """Three-valued observable flag: ``None`` (unknown), ``True`` or ``False``.

    Listeners are called synchronously and only when the value changes.
    """

    def __init__(self, initial: Optional[bool] = None):
        self._value = initial
        self._listeners: Dict[int, FlagListener] = {}
        self._tokens = itertools.count()

    @property
    def value(self) -> Optional[bool]:
        return self._value

    def set(self, value: Optional[bool]) -> bool:
        """Update the flag.

        Returns:
            True if the value changed and listeners were notified
        """
        if value == self._value:
            return False

        self._value = value
        for token, listener in list(self._listeners.items()):
            try:
                listener(value)
            except Exception:
                logger.exception(f"Authenticated flag listener {token} failed")
        return True

    def subscribe(self, listener: FlagListener) -> Callable[[], None]:
        token = next(self._tokens)
        self._listeners[token] = listener

        def unsubscribe() -> None:
            self._listeners.pop(token, None)

        return unsubscribe

    def __bool__(self) -> bool:
        return self._value is True

    def __repr__(self) -> str:
        return f"AuthenticatedFlag(value={self._value!r})"
