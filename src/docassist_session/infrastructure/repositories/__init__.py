"""Credential backends.

Durable storage implementations for the credential store. Each backend
handles exactly one storage medium.
"""

from .memory_credential_backend import MemoryCredentialBackend
from .file_credential_backend import FileCredentialBackend
from .redis_credential_backend import RedisCredentialBackend

__all__ = [
    "MemoryCredentialBackend",
    "FileCredentialBackend",
    "RedisCredentialBackend",
]
