"""HTTP transport: single-call executor and verb-level API client."""

from .request_executor import RequestExecutor
from .api_client import ApiClient

__all__ = [
    "RequestExecutor",
    "ApiClient",
]
