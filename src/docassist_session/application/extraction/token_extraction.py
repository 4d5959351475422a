"""Ordered extraction of values from loosely shaped backend payloads.

The backend does not return the credential (or the user profile) at the same
place on every endpoint. Each strategy looks at one location and returns an
optional result; the chain returns the first hit.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from ...core.protocols import TokenExtractor

logger = logging.getLogger(__name__)


def _walk(payload: Any, path: Sequence[str]) -> Any:
    current = payload
    for segment in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(segment)
    return current


@dataclass(frozen=True)
class PathExtractor:
    """Strategy that reads the value at a fixed key path."""

    name: str
    path: Tuple[str, ...]
    accepts: Callable[[Any], bool] = lambda value: isinstance(value, str) and bool(value.strip())

    def extract(self, payload: Mapping[str, Any]) -> Optional[Any]:
        value = _walk(payload, self.path)
        return value if self.accepts(value) else None


class ExtractionChain:
    """Tries strategies in order; the first non-None result wins."""

    def __init__(self, strategies: Iterable[TokenExtractor]):
        self._strategies: List[TokenExtractor] = list(strategies)
        if not self._strategies:
            raise ValueError("Extraction chain needs at least one strategy")

    @property
    def strategy_names(self) -> List[str]:
        return [strategy.name for strategy in self._strategies]

    def extract(self, payload: Optional[Mapping[str, Any]]) -> Optional[Any]:
        if not isinstance(payload, Mapping):
            return None
        for strategy in self._strategies:
            result = strategy.extract(payload)
            if result is not None:
                logger.debug(f"Extracted value using strategy '{strategy.name}'")
                return result
        return None


def _is_profile(value: Any) -> bool:
    return isinstance(value, Mapping) and bool(value)


DEFAULT_TOKEN_STRATEGIES = (
    PathExtractor("data.token", ("data", "token")),
    PathExtractor("token", ("token",)),
    PathExtractor("data.data.token", ("data", "data", "token")),
    PathExtractor("access_token", ("access_token",)),
)

DEFAULT_USER_STRATEGIES = (
    PathExtractor("data.user", ("data", "user"), accepts=_is_profile),
    PathExtractor("user", ("user",), accepts=_is_profile),
    PathExtractor("data.data.user", ("data", "data", "user"), accepts=_is_profile),
)


def default_token_chain() -> ExtractionChain:
    """Chain used for login and refresh responses."""
    return ExtractionChain(DEFAULT_TOKEN_STRATEGIES)


def default_user_chain() -> ExtractionChain:
    """Chain used to locate the user profile in login and ``/auth/me`` responses."""
    return ExtractionChain(DEFAULT_USER_STRATEGIES)
