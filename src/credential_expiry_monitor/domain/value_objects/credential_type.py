"""Credential type value object."""

from enum import StrEnum


class CredentialType(StrEnum):
    """Type of credential held by a directory application."""

    CERTIFICATE = "Certificate"
    SECRET = "Secret"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "CredentialType":
        """Parse a snapshot or display value, case-insensitively."""
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        msg = f"Unknown credential type: {value!r}"
        raise ValueError(msg)
