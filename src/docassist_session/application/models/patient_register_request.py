"""Patient registration request model."""

from typing import Optional

from pydantic import Field

from .register_request import RegisterRequest


class PatientRegisterRequest(RegisterRequest):
    """Account registration combined with the patient profile."""

    date_of_birth: Optional[str] = Field(
        default=None,
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        description="ISO date, YYYY-MM-DD"
    )
    gender: Optional[str] = None
    blood_group: Optional[str] = Field(default=None, max_length=8)
    allergies: Optional[str] = None
    medical_history: Optional[str] = None
    emergency_contact_name: Optional[str] = Field(default=None, max_length=200)
    emergency_contact_phone: Optional[str] = Field(default=None, max_length=32)
