"""Verb-level API client for application endpoints."""

import logging
from typing import Any, Dict, Mapping, Optional

from ...application.services.session_guard import SessionGuard
from ...config.constants import HttpMethod

logger = logging.getLogger(__name__)


class ApiClient:
    """Thin verb wrapper that sends every call through the session guard.

    Calls are authenticated unless ``requires_auth=False`` is passed.
    Failures surface as the guard raises them.
    """

    def __init__(self, guard: SessionGuard):
        if guard is None:
            raise ValueError("Session guard is required")
        self._guard = guard

    async def get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        requires_auth: bool = True,
    ) -> Dict[str, Any]:
        return await self._guard.request(
            path, HttpMethod.GET, params=params, requires_auth=requires_auth
        )

    async def post(
        self,
        path: str,
        body: Optional[Any] = None,
        requires_auth: bool = True,
    ) -> Dict[str, Any]:
        return await self._guard.request(
            path, HttpMethod.POST, body=body, requires_auth=requires_auth
        )

    async def put(
        self,
        path: str,
        body: Optional[Any] = None,
        requires_auth: bool = True,
    ) -> Dict[str, Any]:
        return await self._guard.request(
            path, HttpMethod.PUT, body=body, requires_auth=requires_auth
        )

    async def patch(
        self,
        path: str,
        body: Optional[Any] = None,
        requires_auth: bool = True,
    ) -> Dict[str, Any]:
        return await self._guard.request(
            path, HttpMethod.PATCH, body=body, requires_auth=requires_auth
        )

    async def delete(self, path: str, requires_auth: bool = True) -> Dict[str, Any]:
        return await self._guard.request(
            path, HttpMethod.DELETE, requires_auth=requires_auth
        )
