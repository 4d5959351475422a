"""Account registration request model."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .login_request import normalize_email


class RegisterRequest(BaseModel):
    """Data sent to the registration endpoint.

    Optional fields left as ``None`` are not sent.
    """

    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, repr=False)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=32)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)

    def to_payload(self) -> dict:
        """Request body with unset optional fields dropped."""
        return self.model_dump(exclude_none=True)
