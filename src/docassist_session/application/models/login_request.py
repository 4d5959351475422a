"""Login request model."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")


def normalize_email(value: str) -> str:
    """Trim an email address and check it has the ``local@domain`` shape."""
    value = value.strip()
    if not _EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email address")
    return value


class LoginRequest(BaseModel):
    """Credentials sent to the login endpoint."""

    model_config = ConfigDict(frozen=True)

    email: str = Field(..., min_length=3, max_length=254, description="Account email")
    password: str = Field(..., min_length=1, repr=False, description="Account password")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)
