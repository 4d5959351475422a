"""Bearer credential value object."""

from dataclasses import dataclass
from typing import Any

from ...config.constants import BEARER_PREFIX
from ..exceptions import InvalidCredential


@dataclass(frozen=True)
class Credential:
    """Opaque bearer credential, always held without the ``Bearer`` prefix.

    Normalization happens once, here, when the value enters the system.
    The request executor adds the prefix back when building headers.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidCredential("Credential must be a string")
        if not self.value:
            raise InvalidCredential()
        if any(ch.isspace() for ch in self.value):
            raise InvalidCredential("Credential must not contain whitespace")

    @classmethod
    def from_raw(cls, raw: Any) -> "Credential":
        """Build a credential from a raw value, stripping any ``Bearer`` prefix.

        Raises:
            InvalidCredential: If the value is empty, undefined or malformed
        """
        if raw is None:
            raise InvalidCredential("Credential cannot be undefined")
        if isinstance(raw, Credential):
            return raw
        if not isinstance(raw, str):
            raise InvalidCredential("Credential must be a string")

        value = raw.strip()
        if value[:len(BEARER_PREFIX)].lower() == BEARER_PREFIX.lower():
            value = value[len(BEARER_PREFIX):].strip()
        return cls(value)

    @property
    def authorization_header(self) -> str:
        """Value for the ``Authorization`` header."""
        return f"{BEARER_PREFIX}{self.value}"

    def mask_for_logging(self) -> str:
        """Return masked credential safe for logging."""
        if len(self.value) <= 20:
            return "***"
        return f"{self.value[:8]}...{self.value[-8:]}"

    def __str__(self) -> str:
        return f"Credential({self.mask_for_logging()})"

    def __repr__(self) -> str:
        return f"Credential(value='{self.mask_for_logging()}')"
