"""Navigation collaborator protocol contract."""

from typing import Awaitable, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class Navigator(Protocol):
    """Protocol for the UI-owning code that returns the user to the login entry point."""

    def navigate_to_login(self, reason: Optional[str] = None) -> Union[None, Awaitable[None]]:
        """Show the login entry point, optionally explaining why."""
        ...
