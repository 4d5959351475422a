"""Request models for the unauthenticated auth endpoints."""

from .login_request import LoginRequest
from .register_request import RegisterRequest
from .patient_register_request import PatientRegisterRequest

__all__ = [
    "LoginRequest",
    "RegisterRequest",
    "PatientRegisterRequest",
]
