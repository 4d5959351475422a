"""Token extraction strategy protocol contract."""

from typing import Any, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class TokenExtractor(Protocol):
    """One strategy for locating a credential in a response payload."""

    name: str

    def extract(self, payload: Mapping[str, Any]) -> Optional[str]:
        """Return the credential found by this strategy, or None."""
        ...
