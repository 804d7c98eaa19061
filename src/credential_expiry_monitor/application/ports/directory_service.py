"""Port for the identity directory - driven/secondary port."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from ...domain.value_objects import CredentialType, PrincipalKind


@dataclass(frozen=True, slots=True)
class ApplicationRef:
    """An application registration as listed by the directory."""

    object_id: str
    display_name: str
    app_id: str | None = None


@dataclass(frozen=True, slots=True)
class RawCredential:
    """A credential entry as read from the directory, expiry possibly absent."""

    credential_type: CredentialType
    end_date_time: datetime | None
    key_id: str | None = None
    display_name: str | None = None


@dataclass(frozen=True, slots=True)
class PrincipalRef:
    """An owner principal of an application."""

    object_id: str
    kind: PrincipalKind
    display_name: str | None = None
    email: str | None = None


class DirectoryService(Protocol):
    """
    Port for reading applications, credentials and owners.

    This is a driven (secondary) port. Implementations are read-only against
    the directory.
    """

    async def list_applications(self) -> list[ApplicationRef]:
        """
        List every application visible to the directory credentials.

        Raises:
            DirectoryError: If the listing fails.
        """
        ...

    async def get_credentials(self, application: ApplicationRef) -> list[RawCredential]:
        """
        Fetch certificate and secret credentials of one application.

        Raises:
            DirectoryError: If the fetch fails.
        """
        ...

    async def get_owners(self, application: ApplicationRef) -> list[PrincipalRef]:
        """
        Fetch owner principals of one application.

        Raises:
            DirectoryError: If the fetch fails.
        """
        ...
