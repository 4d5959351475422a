"""Factories wiring the session client from settings."""

from .session_factory import SessionStack, create_credential_backend, create_session_stack

__all__ = [
    "SessionStack",
    "create_credential_backend",
    "create_session_stack",
]
