"""Single HTTP call protocol contract."""

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from ...config.constants import HttpMethod
from ..value_objects import RequestOutcome


@runtime_checkable
class RequestRunner(Protocol):
    """Protocol for issuing one physical HTTP call and classifying the result."""

    async def execute(
        self,
        target: str,
        method: HttpMethod = HttpMethod.GET,
        body: Optional[Any] = None,
        requires_auth: bool = False,
        params: Optional[Mapping[str, Any]] = None,
    ) -> RequestOutcome:
        """Issue the call.

        Raises:
            AuthenticationRequired: If ``requires_auth`` and no credential is stored
        """
        ...
